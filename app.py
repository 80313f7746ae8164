"""
Review Report - Streamlit Dashboard
Review Analysis page: publisher and premise totals, rating trends over time
"""
import streamlit as st
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from review_report import ReviewAnalysisReport, config
from review_report.config import UnknownPremise
from review_report.transformers import reviews_to_frame
from review_report.utils import extract_reviews

# ============================================================================
# PAGE CONFIG & STYLING
# ============================================================================

st.set_page_config(
    page_title="Review Analysis",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="expanded"
)

PAGE_CSS = """
<style>
    .section-header {
        font-size: 1.1rem;
        font-weight: 600;
        color: rgba(0, 0, 0, 0.85);
        margin: 1rem 0 0.5rem 0;
    }
    .provider-item { display: inline-flex; align-items: center; gap: 4px; font-size: 0.8rem; margin-right: 16px; }
    .provider-dot { display: inline-block; width: 12px; height: 12px; border-radius: 50%; }
    .provider-label { color: rgba(0, 0, 0, 0.45); }
    .premise-badge { font-size: 0.7rem; margin-left: 4px; }
    .legend-row { display: flex; justify-content: space-between; font-size: 0.8rem; max-width: 320px; }
    .legend-value { font-weight: 500; }
</style>
"""


# ============================================================================
# SESSION STATE INITIALIZATION
# ============================================================================

def init_session_state():
    """Initialize all session state variables."""
    defaults = {
        "snapshot": None,
        "snapshot_name": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


init_session_state()


# ============================================================================
# DATA LOADING
# ============================================================================

def parse_snapshot(raw: bytes) -> Optional[List[Any]]:
    """Decode an uploaded snapshot; None if it isn't valid JSON."""
    try:
        return extract_reviews(json.loads(raw.decode("utf-8")))
    except (UnicodeDecodeError, ValueError):
        return None


def render_sidebar() -> dict:
    """Sidebar: snapshot upload and report options."""
    st.sidebar.markdown("### Snapshot")
    uploaded = st.sidebar.file_uploader("Review snapshot (JSON)", type=["json"])
    if uploaded is not None and uploaded.name != st.session_state.snapshot_name:
        snapshot = parse_snapshot(uploaded.getvalue())
        if snapshot is None:
            st.sidebar.error("File is not valid JSON.")
        else:
            st.session_state.snapshot = snapshot
            st.session_state.snapshot_name = uploaded.name

    st.sidebar.markdown("### Options")
    date_pattern = st.sidebar.text_input("Date label pattern", value=config.DATE_PATTERN)
    unknown_premise = st.sidebar.selectbox(
        "Unregistered publishers",
        options=list(UnknownPremise.ALL),
        index=list(UnknownPremise.ALL).index(config.UNKNOWN_PREMISE),
        format_func=lambda v: "Count as off premise" if v == UnknownPremise.OFF else "Separate bucket",
    )
    registry_ordered = st.sidebar.checkbox("Order publishers by registry", value=False)

    return {
        "date_pattern": date_pattern or config.DATE_PATTERN,
        "unknown_premise": unknown_premise,
        "registry_ordered": registry_ordered,
    }


# ============================================================================
# REPORT PAGE
# ============================================================================

def show_chart(report: ReviewAnalysisReport, key: str):
    fig = report.charts.figures.get(config.CONTAINERS[key])
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)


def show_fragment(report: ReviewAnalysisReport, key: str):
    html = report.legends.fragments.get(config.CONTAINERS[key])
    if html:
        st.markdown(html, unsafe_allow_html=True)


def page_report(options: dict):
    """Render the Review Analysis page."""
    st.title("Review Analysis")

    if not st.session_state.snapshot:
        st.info("Upload a review snapshot from the sidebar to build the report.")
        return

    report = ReviewAnalysisReport.with_default_renderers(**options)
    report.initialize(st.session_state.snapshot)

    period = report.report_period()
    if period["start"]:
        st.caption(f"{period['start']} to {period['end']}")

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Locations", f"{report.location_count:,}")
    with col2:
        st.metric("Publishers", f"{report.publisher_count:,}")

    show_fragment(report, "providers")

    st.markdown('<div class="section-header">Total Reviews by Publisher</div>', unsafe_allow_html=True)
    col1, col2 = st.columns([2, 1])
    with col1:
        show_chart(report, "publisher_doughnut")
    with col2:
        show_fragment(report, "publisher_legend")

    st.markdown('<div class="section-header">Rating Trends by Publisher</div>', unsafe_allow_html=True)
    show_chart(report, "publisher_line")

    st.markdown('<div class="section-header">Total Reviews by Premise</div>', unsafe_allow_html=True)
    col1, col2 = st.columns([2, 1])
    with col1:
        show_chart(report, "premise_doughnut")
    with col2:
        show_fragment(report, "premise_legend")

    st.markdown('<div class="section-header">Rating Trends by Premise</div>', unsafe_allow_html=True)
    show_chart(report, "premise_line")

    with st.expander("Reviews"):
        st.dataframe(reviews_to_frame(report.store.current()), use_container_width=True)


# ============================================================================
# MAIN APP
# ============================================================================

def main():
    """Main application entry point."""
    st.markdown(PAGE_CSS, unsafe_allow_html=True)
    options = render_sidebar()
    page_report(options)


if __name__ == "__main__":
    main()

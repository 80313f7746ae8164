"""
Chart rendering with Plotly

Builds the report's line and doughnut figures. Series arrive with None for
missing dates; they are converted to NaN gaps here and nowhere else.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from .. import config

logger = logging.getLogger(__name__)


@dataclass
class LineDataset:
    """One line of a rating-trend chart, aligned to the chart labels"""
    label: str
    data: List[Optional[float]]
    color: str


def build_line_dataset(label: str, data: Sequence[Optional[float]], color: Optional[str]) -> LineDataset:
    return LineDataset(
        label=label,
        data=list(data),
        color=color or config.DEFAULT_SERIES_COLOR,
    )


def to_gap_array(data: Sequence[Optional[float]]) -> np.ndarray:
    """None -> NaN, as float array"""
    return np.array([np.nan if v is None else float(v) for v in data], dtype=float)


def has_inner_gaps(values: np.ndarray) -> bool:
    """True when NaN values sit between two real points"""
    present = np.flatnonzero(~np.isnan(values))
    if len(present) < 2:
        return False
    return bool(np.isnan(values[present[0]:present[-1] + 1]).any())


def get_plotly_layout() -> dict:
    """Shared layout settings for report figures."""
    return dict(
        font=dict(family="Roboto, sans-serif", size=12, color="rgba(0, 0, 0, 0.85)"),
        paper_bgcolor="#FFFFFF",
        plot_bgcolor="#FFFFFF",
        margin=dict(l=50, r=30, t=30, b=50),
        showlegend=False,
    )


class PlotlyChartRenderer:
    """
    Chart collaborator for the report

    Figures are kept per container id in self.figures, the latest render
    replacing any earlier one.
    """

    def __init__(self):
        self.figures: Dict[str, go.Figure] = {}

    def render_line_chart(
        self,
        container: str,
        labels: Sequence[str],
        datasets: Sequence[LineDataset],
    ) -> go.Figure:
        """
        Rating trend line chart

        Args:
            container: Container id the figure belongs to
            labels: X axis labels, one per axis point
            datasets: Series aligned to labels, None for gaps

        Note:
            Each series is drawn solid where values are contiguous; gaps
            between known points are bridged by a faint dashed line.
        """
        fig = go.Figure()
        x = list(labels)

        for dataset in datasets:
            y = to_gap_array(dataset.data)

            if has_inner_gaps(y):
                fig.add_trace(go.Scatter(
                    x=x,
                    y=y,
                    mode="lines",
                    connectgaps=True,
                    line=dict(color=config.GAP_COLOR, dash="dash", shape="spline", smoothing=0.3),
                    hoverinfo="skip",
                    showlegend=False,
                    name=f"{dataset.label} (gap)",
                ))

            fig.add_trace(go.Scatter(
                x=x,
                y=y,
                mode="lines+markers",
                connectgaps=False,
                name=dataset.label,
                line=dict(color=dataset.color, width=2, shape="spline", smoothing=0.3),
                marker=dict(size=4, color=dataset.color),
            ))

        rating_min, rating_max = config.RATING_RANGE
        fig.update_layout(**get_plotly_layout())
        fig.update_layout(hovermode="x unified")
        fig.update_xaxes(title_text="Days", showgrid=False, type="category", tickangle=0)
        fig.update_yaxes(
            title_text="Ratings",
            showgrid=False,
            range=[rating_min, rating_max],
            dtick=config.RATING_STEP,
        )

        self.figures[container] = fig
        logger.debug(f"Rendered line chart '{container}' with {len(datasets)} series")
        return fig

    def render_doughnut_chart(
        self,
        container: str,
        labels: Sequence[str],
        values: Sequence[float],
        colors: Optional[Sequence[Optional[str]]] = None,
        dataset_label: str = "Total",
    ) -> go.Figure:
        """Totals doughnut chart"""
        marker = {}
        if colors is not None:
            marker["colors"] = [c or config.DEFAULT_SERIES_COLOR for c in colors]

        fig = go.Figure(data=[go.Pie(
            labels=list(labels),
            values=list(values) if values is not None else [],
            hole=0.5,
            sort=False,
            direction="clockwise",
            name=dataset_label,
            marker=dict(line=dict(width=0), **marker),
            textinfo="none",
            hovertemplate="%{label}: %{value} " + dataset_label + "<extra></extra>",
        )])
        fig.update_layout(**get_plotly_layout())

        self.figures[container] = fig
        logger.debug(f"Rendered doughnut chart '{container}' with {len(labels)} slices")
        return fig

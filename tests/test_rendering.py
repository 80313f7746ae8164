"""
Unit tests for chart and legend renderers
"""
import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from review_report import config
from review_report.rendering import (
    HtmlLegendRenderer,
    LineDataset,
    PlotlyChartRenderer,
    build_line_dataset,
    provider_item_html,
    to_gap_array,
)
from review_report.rendering.charts import has_inner_gaps
from review_report.transformers import LegendItem


@pytest.mark.unit
class TestLineDatasets:
    """Test dataset helpers"""

    def test_build_line_dataset(self):
        dataset = build_line_dataset("Google", (4.5, None), "#F6BA79")
        assert dataset == LineDataset(label="Google", data=[4.5, None], color="#F6BA79")

    def test_missing_color_uses_default(self):
        assert build_line_dataset("Blog", [], None).color == config.DEFAULT_SERIES_COLOR

    def test_gap_array(self):
        values = to_gap_array([4.5, None, 3])
        assert values[0] == 4.5
        assert np.isnan(values[1])
        assert values[2] == 3.0

    def test_inner_gaps(self):
        assert has_inner_gaps(to_gap_array([4, None, 3])) is True
        assert has_inner_gaps(to_gap_array([None, 4, 3, None])) is False
        assert has_inner_gaps(to_gap_array([None, None])) is False
        assert has_inner_gaps(to_gap_array([])) is False


@pytest.mark.unit
class TestPlotlyChartRenderer:
    """Test Plotly figure building"""

    def test_line_chart(self):
        renderer = PlotlyChartRenderer()
        fig = renderer.render_line_chart(
            "trend",
            ["07-01-2025", "07-02-2025"],
            [build_line_dataset("Google", [4.5, None], "#F6BA79")],
        )

        assert renderer.figures["trend"] is fig
        assert len(fig.data) == 1
        trace = fig.data[0]
        assert trace.name == "Google"
        assert list(trace.x) == ["07-01-2025", "07-02-2025"]
        y = np.asarray(trace.y, dtype=float)
        assert y[0] == 4.5
        assert np.isnan(y[1])
        assert trace.connectgaps is False
        assert list(fig.layout.yaxis.range) == [1, 5]

    def test_line_chart_bridges_inner_gaps(self):
        renderer = PlotlyChartRenderer()
        fig = renderer.render_line_chart(
            "trend",
            ["a", "b", "c"],
            [build_line_dataset("Yelp", [4, None, 3], "#6CA2ED")],
        )

        assert len(fig.data) == 2
        bridge, line = fig.data
        assert bridge.connectgaps is True
        assert bridge.line.dash == "dash"
        assert bridge.showlegend is False
        assert line.name == "Yelp"

    def test_empty_line_chart(self):
        fig = PlotlyChartRenderer().render_line_chart("trend", [], [])
        assert len(fig.data) == 0

    def test_doughnut_chart(self):
        renderer = PlotlyChartRenderer()
        fig = renderer.render_doughnut_chart(
            "totals", ["Google", "Blog"], [2, 1], ["#F6BA79", None], "Reviews"
        )

        assert renderer.figures["totals"] is fig
        pie = fig.data[0]
        assert pie.hole == 0.5
        assert list(pie.labels) == ["Google", "Blog"]
        assert list(pie.values) == [2, 1]
        assert list(pie.marker.colors) == ["#F6BA79", config.DEFAULT_SERIES_COLOR]

    def test_rerender_replaces_figure(self):
        renderer = PlotlyChartRenderer()
        first = renderer.render_doughnut_chart("totals", ["a"], [1])
        second = renderer.render_doughnut_chart("totals", ["b"], [2])
        assert renderer.figures == {"totals": second}
        assert first is not second


@pytest.mark.unit
class TestHtmlLegendRenderer:
    """Test HTML fragments"""

    def test_provider_item(self):
        html = provider_item_html("Uber Eats", "#4A35A3", False)
        assert 'data-provider="ubereats"' in html
        assert "background-color:#4A35A3" in html
        assert "Off Premise" in html

    def test_provider_item_without_metadata(self):
        html = provider_item_html("Blog", None, None)
        assert config.DEFAULT_SERIES_COLOR in html
        assert "premise-badge" not in html

    def test_render_providers(self):
        renderer = HtmlLegendRenderer()
        html = renderer.render_providers("providers", [
            {"label": "Google", "color": "#F6BA79", "on_premises": True},
            {"label": "DoorDash", "color": "#F799A1", "on_premises": False},
        ])
        assert renderer.fragments["providers"] == html
        assert html.count('class="provider-item"') == 2
        assert "On Premise" in html and "Off Premise" in html

    def test_legend_with_values(self):
        renderer = HtmlLegendRenderer()
        html = renderer.render_legend_with_values("legend", [
            LegendItem(label="Google", color="#F6BA79", value=2),
            {"label": "On Premise", "color": "#4A35A3", "value": 3},
        ])
        assert html.count('class="legend-row"') == 2
        assert '<span class="legend-value">2</span>' in html
        assert '<span class="legend-value">3</span>' in html
        assert "premise-badge" not in html

    def test_labels_are_escaped(self):
        html = HtmlLegendRenderer().render_legend_with_values(
            "legend", [{"label": "<b>Evil</b>", "color": "#000", "value": "<1>"}]
        )
        assert "<b>" not in html
        assert "&lt;b&gt;Evil&lt;/b&gt;" in html
        assert "&lt;1&gt;" in html

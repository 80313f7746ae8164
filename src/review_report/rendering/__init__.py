"""
Rendering Module - chart and legend collaborators

- charts: Plotly line and doughnut figures
- legends: HTML provider rows and value legends
"""

from .charts import (
    LineDataset,
    PlotlyChartRenderer,
    build_line_dataset,
    to_gap_array,
)

from .legends import (
    HtmlLegendRenderer,
    provider_item_html,
)

__all__ = [
    "LineDataset",
    "PlotlyChartRenderer",
    "build_line_dataset",
    "to_gap_array",
    "HtmlLegendRenderer",
    "provider_item_html",
]

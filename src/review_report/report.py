"""
Review Analysis report initializer
Loads a snapshot and drives chart and legend rendering in a fixed order
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from . import config
from .config import UnknownPremise
from .rendering.charts import build_line_dataset
from .store import ReviewStore
from .transformers.dates import format_day_label, format_utc_day
from .transformers.publishers import (
    PublisherView,
    group_by_publisher,
    premise_totals,
    publisher_totals,
    to_publisher_views,
)
from .transformers.timeseries import build_axis, premise_series, publisher_series

logger = logging.getLogger(__name__)


class ReviewAnalysisReport:
    """
    Builds the Review Analysis report from a review snapshot

    Collaborators are optional: a missing chart or legend renderer (or one
    without the needed method) turns the matching step into a no-op.
    """

    def __init__(
        self,
        store: Optional[ReviewStore] = None,
        charts=None,
        legends=None,
        date_pattern: Optional[str] = None,
        unknown_premise: Optional[str] = None,
        registry_ordered: bool = False,
    ):
        """
        Initialize report

        Args:
            store: Review store (a new empty one if None)
            charts: Chart collaborator (render_line_chart, render_doughnut_chart)
            legends: Legend collaborator (render_providers, render_legend_with_values)
            date_pattern: Axis label pattern (uses config if None)
            unknown_premise: "off" or "unknown" (uses config if None)
            registry_ordered: Order publishers by provider registry position
        """
        self.store = store if store is not None else ReviewStore()
        self.charts = charts
        self.legends = legends
        self.date_pattern = date_pattern or config.DATE_PATTERN
        self.unknown_premise = unknown_premise or config.UNKNOWN_PREMISE
        self.registry_ordered = registry_ordered

        if self.unknown_premise not in UnknownPremise.ALL:
            raise ValueError(
                f"unknown_premise must be one of {UnknownPremise.ALL}, got '{self.unknown_premise}'"
            )

        self.location_count = 0
        self.publisher_count = 0

    @classmethod
    def with_default_renderers(cls, **kwargs) -> "ReviewAnalysisReport":
        """Report wired to the Plotly chart and HTML legend renderers"""
        from .rendering import HtmlLegendRenderer, PlotlyChartRenderer

        return cls(charts=PlotlyChartRenderer(), legends=HtmlLegendRenderer(), **kwargs)

    # =========================
    # Derived Views
    # =========================
    def publisher_views(self) -> List[PublisherView]:
        return to_publisher_views(
            self.store.current(),
            format_date=False,
            registry_ordered=self.registry_ordered,
        )

    def time_axis(self) -> List[str]:
        return build_axis(group_by_publisher(self.store.current(), format_date=False))

    def axis_labels(self, axis: List[str]) -> List[str]:
        return [format_day_label(d, self.date_pattern) for d in axis]

    def report_period(self) -> Dict[str, Optional[str]]:
        """First and last axis dates for the report header (None when empty)"""
        axis = self.time_axis()
        if not axis:
            return {"start": None, "end": None}
        return {
            "start": format_utc_day(axis[0], self.date_pattern),
            "end": format_utc_day(axis[-1], self.date_pattern),
        }

    def _collaborator(self, owner, method: str) -> Optional[Callable]:
        fn = getattr(owner, method, None) if owner is not None else None
        if not callable(fn):
            logger.warning(f"Renderer method '{method}' not available; skipping")
            return None
        return fn

    # =========================
    # Initialization
    # =========================
    def init_store(self, snapshot):
        """Load the snapshot and refresh the location/publisher counters"""
        self.store.load(snapshot)
        self.location_count = self.store.distinct_location_count()
        self.publisher_count = len(self.publisher_views())
        logger.info(
            f"Snapshot loaded: {len(self.store)} records, "
            f"{self.location_count} locations, {self.publisher_count} publishers"
        )

    def initialize(self, snapshot):
        """
        Load the snapshot and render every report section

        Order: publisher totals chart + legend, publisher rating trend,
        provider row, premise totals chart + legend, premise rating trend.
        """
        self.init_store(snapshot)
        self.render_publisher_totals()
        self.render_publisher_line()
        self.render_providers_row()
        self.render_premise_totals()
        self.render_premise_line()
        return self

    # =========================
    # Render Steps
    # =========================
    def render_publisher_totals(self):
        """Publisher total reviews doughnut and its legend"""
        if not self.store.is_loaded():
            return

        items = publisher_totals(self.publisher_views())

        doughnut = self._collaborator(self.charts, "render_doughnut_chart")
        if doughnut is not None:
            doughnut(
                config.CONTAINERS["publisher_doughnut"],
                [i.label for i in items],
                [i.value for i in items],
                [i.color for i in items],
                "Reviews",
            )

        legend = self._collaborator(self.legends, "render_legend_with_values")
        if legend is not None:
            legend(config.CONTAINERS["publisher_legend"], items)

    def render_publisher_line(self):
        """Average rating per publisher over time"""
        if not self.store.is_loaded():
            return
        line = self._collaborator(self.charts, "render_line_chart")
        if line is None:
            return

        grouped = group_by_publisher(self.store.current(), format_date=False)
        axis = build_axis(grouped)
        views = self.publisher_views()
        series = publisher_series(grouped, axis, views)

        datasets = [
            build_line_dataset(v.publisher, series[v.publisher], v.color)
            for v in views
        ]
        line(config.CONTAINERS["publisher_line"], self.axis_labels(axis), datasets)

    def render_providers_row(self):
        """Provider icons row with on/off premise badges"""
        providers_fn = self._collaborator(self.legends, "render_providers")
        if providers_fn is None or not self.store.is_loaded():
            return

        providers = [
            {"label": v.publisher, "color": v.color, "on_premises": v.on_premises}
            for v in self.publisher_views()
        ]
        providers_fn(config.CONTAINERS["providers"], providers)

    def _premise_buckets(self) -> List[str]:
        buckets = ["on", "off"]
        if self.unknown_premise == UnknownPremise.UNKNOWN:
            buckets.append("unknown")
        return buckets

    def render_premise_totals(self):
        """Premise legend and total reviews doughnut (empty buckets hidden)"""
        if not self.store.is_loaded():
            return

        totals = premise_totals(self.publisher_views(), self.unknown_premise)
        items = [
            {
                "label": config.PREMISE_LABELS[key],
                "color": config.PREMISE_COLORS[key],
                "value": totals[key],
            }
            for key in self._premise_buckets()
            if totals[key] > 0
        ]

        legend = self._collaborator(self.legends, "render_legend_with_values")
        if legend is not None:
            legend(config.CONTAINERS["premise_legend"], items)

        doughnut = self._collaborator(self.charts, "render_doughnut_chart")
        if doughnut is not None:
            doughnut(
                config.CONTAINERS["premise_doughnut"],
                [i["label"] for i in items],
                [i["value"] for i in items],
                [i["color"] for i in items],
                "Reviews",
            )

    def render_premise_line(self):
        """Average rating per premise bucket (on, off, any) over time"""
        if not self.store.is_loaded():
            return
        line = self._collaborator(self.charts, "render_line_chart")
        if line is None:
            return

        grouped = group_by_publisher(self.store.current(), format_date=False)
        axis = build_axis(grouped)
        series = premise_series(grouped, axis, self.publisher_views(), self.unknown_premise)

        datasets = [
            build_line_dataset(
                config.PREMISE_LABELS[key], series[key], config.PREMISE_COLORS[key]
            )
            for key in self._premise_buckets() + ["any"]
        ]
        line(config.CONTAINERS["premise_line"], self.axis_labels(axis), datasets)

    # =========================
    # Summary
    # =========================
    def summary(self) -> Dict[str, Any]:
        """
        JSON-ready summary of the current snapshot

        Series keep None for dates without ratings.
        """
        grouped = group_by_publisher(self.store.current(), format_date=False)
        axis = build_axis(grouped)
        views = self.publisher_views()

        return {
            "location_count": self.store.distinct_location_count(),
            "publisher_count": len(views),
            "review_count": sum(v.review_count for v in views),
            "axis": list(axis),
            "labels": self.axis_labels(axis),
            "period": self.report_period(),
            "publisher_totals": {i.label: i.value for i in publisher_totals(views)},
            "premise_totals": premise_totals(views, self.unknown_premise),
            "publisher_series": publisher_series(grouped, axis, views),
            "premise_series": premise_series(grouped, axis, views, self.unknown_premise),
            "publishers": [
                {"publisher": v.publisher, "color": v.color, "on_premises": v.on_premises}
                for v in views
            ],
        }

"""
Transformers Module - Data normalization and aggregation

This module provides the report's data transformations:
- dates: Parse date-like values, format UTC-day labels
- publishers: Group reviews by publisher, attach provider metadata
- timeseries: Build the shared date axis and average-rating series

Pipeline Stage: Between the review store and chart rendering
Input:  Raw review snapshot (list of records)
Output: Publisher views, time axis and rating series
"""

from .dates import (
    parse_instant,
    format_utc_day,
    format_day_label,
    render_pattern,
    DEFAULT_DATE_PATTERN,
)

from .publishers import (
    SimplifiedReview,
    PublisherView,
    LegendItem,
    coerce_rating,
    group_by_publisher,
    to_publisher_views,
    count_distinct_locations,
    count_distinct_publishers,
    publisher_totals,
    premise_totals,
    reviews_to_frame,
)

from .timeseries import (
    Series,
    build_axis,
    average_by_date,
    publisher_series,
    premise_series,
)

__all__ = [
    # Dates
    "parse_instant",
    "format_utc_day",
    "format_day_label",
    "render_pattern",
    "DEFAULT_DATE_PATTERN",
    # Publishers
    "SimplifiedReview",
    "PublisherView",
    "LegendItem",
    "coerce_rating",
    "group_by_publisher",
    "to_publisher_views",
    "count_distinct_locations",
    "count_distinct_publishers",
    "publisher_totals",
    "premise_totals",
    "reviews_to_frame",
    # Time series
    "Series",
    "build_axis",
    "average_by_date",
    "publisher_series",
    "premise_series",
]

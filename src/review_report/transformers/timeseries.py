"""
Time-Series Builder - rating trends on a shared date axis

Builds one chronological axis from every publisher's raw review dates and
computes average-rating series aligned to it, per publisher and per premise
bucket. Series hold None where a date has no ratings, so every series has
exactly one value per axis point.

Input must come from group_by_publisher(..., format_date=False): axis points
and review dates are matched by raw string equality.
"""
import logging
from collections.abc import Hashable
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from ..config import UnknownPremise
from .dates import parse_instant
from .publishers import PublisherView, SimplifiedReview, premise_bucket

logger = logging.getLogger(__name__)

Series = List[Optional[float]]

_CENTS = Decimal("0.01")


def round_rating(value: float) -> float:
    """Round half-up to 2 decimals on the exact binary value (1.125 -> 1.13)"""
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def build_axis(grouped: Mapping[str, Sequence[SimplifiedReview]]) -> List[str]:
    """
    Sorted, de-duplicated raw dates across all publisher groups

    Dates that fail to parse are left off the axis. When two spellings parse
    to the same instant only the first one seen is kept.
    """
    seen = {}
    for items in grouped.values():
        for item in items:
            raw = item.date if item is not None else None
            if not raw or not isinstance(raw, Hashable) or raw in seen:
                continue
            seen[raw] = parse_instant(raw)

    dated = [(ts.value, order, raw) for order, (raw, ts) in enumerate(seen.items()) if ts is not None]
    dropped = len(seen) - len(dated)
    if dropped:
        logger.debug(f"Left {dropped} unparseable dates off the time axis")

    axis = []
    last_instant = None
    for instant, _, raw in sorted(dated):
        if instant == last_instant:
            continue
        axis.append(raw)
        last_instant = instant
    return axis


def average_by_date(items: Iterable[SimplifiedReview], axis: Sequence[str]) -> Series:
    """
    Mean rating per axis date, rounded to 2 decimals

    Reviews without a rating are ignored; axis dates with no ratings get None.
    """
    pairs = [
        (item.date, item.rating)
        for item in items
        if item is not None and item.date and item.rating is not None
        and isinstance(item.date, Hashable)
    ]
    if not pairs or not axis:
        return [None] * len(axis)

    df = pd.DataFrame(pairs, columns=["date", "rating"])
    stats = df.groupby("date", sort=False)["rating"].agg(["sum", "count"])
    stats = stats.reindex(pd.Index(list(axis), dtype=object))

    series: Series = []
    for total, count in zip(stats["sum"], stats["count"]):
        if pd.isna(count) or count == 0:
            series.append(None)
        else:
            series.append(round_rating(float(total) / float(count)))
    return series


def publisher_series(
    grouped: Mapping[str, Sequence[SimplifiedReview]],
    axis: Sequence[str],
    views: Iterable[PublisherView],
) -> Dict[str, Series]:
    """
    Average-rating series for each publisher in views

    A publisher missing from grouped still gets a series of None values.
    """
    return {
        view.publisher: average_by_date(grouped.get(view.publisher, ()), axis)
        for view in views
    }


def premise_series(
    grouped: Mapping[str, Sequence[SimplifiedReview]],
    axis: Sequence[str],
    views: Iterable[PublisherView],
    unknown_premise: str = UnknownPremise.OFF,
) -> Dict[str, Series]:
    """
    Average-rating series per premise bucket

    Returns:
        {"on": [...], "off": [...], "any": [...]} plus "unknown" when
        unknown_premise is "unknown". Publishers without registry metadata
        count as off-premises by default.
    """
    on_premises = {view.publisher: view.on_premises for view in views}

    buckets: Dict[str, List[SimplifiedReview]] = {"on": [], "off": []}
    if unknown_premise == UnknownPremise.UNKNOWN:
        buckets["unknown"] = []
    everything: List[SimplifiedReview] = []

    for publisher, items in grouped.items():
        bucket = premise_bucket(on_premises.get(publisher), unknown_premise)
        buckets[bucket].extend(items)
        everything.extend(items)

    result = {name: average_by_date(items, axis) for name, items in buckets.items()}
    result["any"] = average_by_date(everything, axis)
    return result

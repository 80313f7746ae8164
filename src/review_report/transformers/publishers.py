"""
Publisher Aggregator - group reviews by publisher

Groups a raw review snapshot by publisher in chronological order and
attaches provider metadata for chart and legend rendering.
"""
import logging
import math
import numbers
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .. import providers
from ..config import UnknownPremise
from .dates import DEFAULT_DATE_PATTERN, format_utc_day, parse_instant, sort_key

logger = logging.getLogger(__name__)

# Accepted spellings per field, first match wins
FIELD_ALIASES = {
    "publisher": ("publisher", "Publisher"),
    "location_id": ("locationId", "LocationId", "location_id"),
    "date": ("date", "Date"),
    "rating": ("rating", "Rating"),
}


@dataclass(frozen=True)
class SimplifiedReview:
    """One review reduced to what the charts need"""
    date: Optional[str]
    location_id: Any
    rating: Optional[float]


@dataclass
class PublisherView:
    """A publisher's reviews plus its registry metadata"""
    publisher: str
    color: Optional[str]
    on_premises: Optional[bool]
    data: List[SimplifiedReview] = field(default_factory=list)

    @property
    def review_count(self) -> int:
        return len(self.data)


@dataclass
class LegendItem:
    label: str
    color: Optional[str]
    value: Any


def get_field(record: Mapping, name: str, default=None):
    """Read a record field under any of its accepted spellings"""
    for key in FIELD_ALIASES[name]:
        if key in record:
            return record[key]
    return default


def coerce_rating(value) -> Optional[float]:
    """
    Parse a rating into a finite float

    Numbers and numeric strings are accepted. Booleans, blank strings,
    non-numeric text, NaN and infinities return None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    return number if math.isfinite(number) else None


def _valid_records(records) -> List[Mapping]:
    """Keep mapping records with a truthy publisher"""
    if not isinstance(records, (list, tuple)):
        return []

    valid = []
    dropped = 0
    for record in records:
        if not isinstance(record, Mapping):
            dropped += 1
            continue
        publisher = get_field(record, "publisher")
        if publisher and isinstance(publisher, Hashable):
            valid.append(record)
        else:
            dropped += 1

    if dropped:
        logger.debug(f"Dropped {dropped} records without a publisher")
    return valid


def _format_date(value, pattern: str, enable: bool):
    if not enable:
        return value
    formatted = format_utc_day(value, pattern)
    return formatted if formatted is not None else value


def group_by_publisher(
    records,
    format_date: bool = True,
    date_pattern: str = DEFAULT_DATE_PATTERN,
) -> Dict[str, List[SimplifiedReview]]:
    """
    Group review records by publisher, oldest first

    Args:
        records: Raw review records (mappings)
        format_date: Replace raw dates with UTC-day labels
        date_pattern: date-fns style pattern used when format_date is set

    Returns:
        Dict of publisher -> list of SimplifiedReview in chronological order

    Note:
        Records are sorted on their raw dates before grouping and before
        formatting, since formatted labels don't sort chronologically.
        Records with unparseable dates go last; ties keep input order.
    """
    valid = _valid_records(records)
    ordered = sorted(valid, key=lambda r: sort_key(get_field(r, "date")))

    grouped: Dict[str, List[SimplifiedReview]] = {}
    for record in ordered:
        publisher = get_field(record, "publisher")
        simplified = SimplifiedReview(
            date=_format_date(get_field(record, "date"), date_pattern, format_date),
            location_id=get_field(record, "location_id"),
            rating=coerce_rating(get_field(record, "rating")),
        )
        grouped.setdefault(publisher, []).append(simplified)

    return grouped


def to_publisher_views(
    records,
    format_date: bool = True,
    date_pattern: str = DEFAULT_DATE_PATTERN,
    registry_ordered: bool = False,
) -> List[PublisherView]:
    """
    Build one PublisherView per publisher with registry metadata attached

    Unregistered publishers are kept with color and on_premises set to None.
    Order follows the grouping unless registry_ordered is set.
    """
    grouped = group_by_publisher(
        records, format_date=format_date, date_pattern=date_pattern
    )

    publishers = list(grouped)
    if registry_ordered:
        publishers = providers.registry_order(publishers)

    views = []
    for publisher in publishers:
        meta = providers.lookup(publisher)
        if meta is None:
            logger.debug(f"No provider metadata for publisher '{publisher}'")
        views.append(PublisherView(
            publisher=publisher,
            color=meta.color if meta else None,
            on_premises=meta.on_premises if meta else None,
            data=grouped[publisher],
        ))
    return views


def count_distinct_locations(records) -> int:
    """Count distinct non-null location ids"""
    if not isinstance(records, (list, tuple)):
        return 0

    ids = set()
    for record in records:
        if not isinstance(record, Mapping):
            continue
        location_id = get_field(record, "location_id")
        if location_id is None:
            continue
        try:
            ids.add(location_id)
        except TypeError:
            # unhashable ids (lists, dicts) are compared by their repr
            ids.add(repr(location_id))
    return len(ids)


def count_distinct_publishers(records) -> int:
    """Count distinct truthy publisher labels (case-sensitive)"""
    return len({get_field(r, "publisher") for r in _valid_records(records)})


def premise_bucket(on_premises: Optional[bool], unknown_premise: str = UnknownPremise.OFF) -> str:
    """Bucket name for a publisher's on_premises flag"""
    if on_premises is True:
        return "on"
    if on_premises is None and unknown_premise == UnknownPremise.UNKNOWN:
        return "unknown"
    return "off"


def publisher_totals(views: Iterable[PublisherView]) -> List[LegendItem]:
    """Review count per publisher, in view order"""
    return [
        LegendItem(label=v.publisher, color=v.color, value=v.review_count)
        for v in views
    ]


def premise_totals(
    views: Iterable[PublisherView],
    unknown_premise: str = UnknownPremise.OFF,
) -> Dict[str, int]:
    """
    Review count per premise bucket

    Returns:
        {"on": n, "off": n} plus "unknown" when unknown_premise is "unknown"
    """
    totals = {"on": 0, "off": 0}
    if unknown_premise == UnknownPremise.UNKNOWN:
        totals["unknown"] = 0

    for view in views:
        totals[premise_bucket(view.on_premises, unknown_premise)] += view.review_count
    return totals


def reviews_to_frame(records) -> pd.DataFrame:
    """
    Tabular view of the valid records in chronological order

    Columns: publisher, location_id, date (raw), rating, instant (UTC)
    """
    columns = ["publisher", "location_id", "date", "rating", "instant"]
    grouped = group_by_publisher(records, format_date=False)
    rows = [
        {
            "publisher": publisher,
            "location_id": item.location_id,
            "date": item.date,
            "rating": item.rating,
            "instant": parse_instant(item.date),
        }
        for publisher, items in grouped.items()
        for item in items
    ]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows, columns=columns)
    df["instant"] = pd.to_datetime(df["instant"], utc=True)
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce")
    return df.sort_values("instant", kind="stable", na_position="last").reset_index(drop=True)

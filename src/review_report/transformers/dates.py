# src/review_report/transformers/dates.py
# date parsing, UTC-day labels
from __future__ import annotations
import math
import numbers
import re
from datetime import date, datetime
from typing import Callable, Dict, List, Tuple

import pandas as pd

DEFAULT_DATE_PATTERN = "MM-dd-yyyy"

# Quoted literal ('at', '' for a single quote) or a run of one pattern letter
_TOKEN_RX = re.compile(r"'((?:[^']|'')*)'|([A-Za-z])\2*|[^A-Za-z']+")

_YEAR_RX = re.compile(r"(?<!\d)\d{4}(?!\d)")


def parse_instant(value) -> pd.Timestamp | None:
    """
    Convert a date-like value to a tz-aware UTC Timestamp.

    Accepts ISO-8601 strings, epoch milliseconds, datetime/date objects and
    Timestamps. Naive values are read as UTC. Returns None for anything that
    cannot be parsed; never raises.
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, pd.Timestamp):
            ts = value
        elif isinstance(value, (datetime, date)):
            ts = pd.Timestamp(value)
        elif isinstance(value, numbers.Real):
            if not math.isfinite(value):
                return None
            ts = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            ts = pd.to_datetime(text, utc=True, format="ISO8601", errors="coerce")
            # RFC-style strings ("Tue, 01 Jul 2025 00:00:00 GMT") need a full year;
            # keywords like "now" or a bare "March" are rejected
            if pd.isna(ts) and _YEAR_RX.search(text):
                ts = pd.to_datetime(text, utc=True, errors="coerce")
        else:
            return None
    except (ValueError, TypeError, OverflowError):
        return None

    if ts is None or pd.isna(ts):
        return None

    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def sort_key(value) -> Tuple[int, int]:
    """Sort key by instant; unparseable values sort after every valid one."""
    ts = parse_instant(value)
    return (1, 0) if ts is None else (0, ts.value)


def _twelve_hour(ts: pd.Timestamp) -> int:
    return ts.hour % 12 or 12


_RENDERERS: Dict[str, Callable[[pd.Timestamp], str]] = {
    "yyyy": lambda ts: f"{ts.year:04d}",
    "yy": lambda ts: f"{ts.year % 100:02d}",
    "y": lambda ts: str(ts.year),
    "MMMM": lambda ts: ts.month_name(),
    "MMM": lambda ts: ts.month_name()[:3],
    "MM": lambda ts: f"{ts.month:02d}",
    "M": lambda ts: str(ts.month),
    "dd": lambda ts: f"{ts.day:02d}",
    "d": lambda ts: str(ts.day),
    "EEEE": lambda ts: ts.day_name(),
    "EEE": lambda ts: ts.day_name()[:3],
    "EE": lambda ts: ts.day_name()[:3],
    "E": lambda ts: ts.day_name()[:3],
    "HH": lambda ts: f"{ts.hour:02d}",
    "H": lambda ts: str(ts.hour),
    "hh": lambda ts: f"{_twelve_hour(ts):02d}",
    "h": lambda ts: str(_twelve_hour(ts)),
    "mm": lambda ts: f"{ts.minute:02d}",
    "m": lambda ts: str(ts.minute),
    "ss": lambda ts: f"{ts.second:02d}",
    "s": lambda ts: str(ts.second),
    "a": lambda ts: "AM" if ts.hour < 12 else "PM",
}


def tokenize_pattern(pattern: str) -> List[Tuple[str, str]]:
    """
    Split a date-fns style pattern into ('field', token) and ('literal', text).

    Raises ValueError for pattern letters without a renderer.
    """
    tokens = []
    for m in _TOKEN_RX.finditer(pattern):
        quoted, letter = m.group(1), m.group(2)
        text = m.group(0)
        if quoted is not None:
            tokens.append(("literal", quoted.replace("''", "'") if quoted else "'"))
        elif letter is not None:
            if text not in _RENDERERS:
                raise ValueError(f"Unsupported date pattern token: {text!r}")
            tokens.append(("field", text))
        else:
            tokens.append(("literal", text))

    # An unterminated quote leaves characters the regex never consumed
    if sum(len(m.group(0)) for m in _TOKEN_RX.finditer(pattern)) != len(pattern):
        raise ValueError(f"Unterminated quote in date pattern: {pattern!r}")
    return tokens


def render_pattern(ts: pd.Timestamp, pattern: str) -> str:
    """Render a Timestamp's wall-clock fields with a date-fns style pattern."""
    parts = []
    for kind, token in tokenize_pattern(pattern):
        parts.append(_RENDERERS[token](ts) if kind == "field" else token)
    return "".join(parts)


def format_utc_day(value, pattern: str = DEFAULT_DATE_PATTERN) -> str | None:
    """
    Format a date-like value so the UTC calendar day is preserved.

    "2025-07-01T00:00:00.000Z" formats as "07-01-2025" whatever the host
    timezone is, because the UTC wall clock is rendered directly. Returns None
    when the value cannot be parsed or the pattern cannot be rendered.
    """
    ts = parse_instant(value)
    if ts is None:
        return None

    try:
        return render_pattern(ts, pattern)
    except (ValueError, TypeError):
        return None


def format_day_label(value, pattern: str = DEFAULT_DATE_PATTERN) -> str:
    """Axis label for a raw date; falls back to the raw text."""
    label = format_utc_day(value, pattern)
    if label is not None:
        return label
    return "" if value is None else str(value)

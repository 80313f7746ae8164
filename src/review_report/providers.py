"""
Provider Registry - static publisher metadata

Maps a publisher label to its display color and on/off premises
classification. Lookup ignores case and whitespace.
"""
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class ProviderMeta:
    """Display metadata for a known review publisher"""
    label: str
    color: str
    on_premises: bool


PROVIDERS = (
    ProviderMeta(label="Google", color="#F6BA79", on_premises=True),
    ProviderMeta(label="Yelp", color="#6CA2ED", on_premises=True),
    ProviderMeta(label="Facebook", color="#91B1D5", on_premises=True),
    ProviderMeta(label="Ezcater", color="#96D4A0", on_premises=False),
    ProviderMeta(label="OpenTable", color="#F4737E", on_premises=True),
    ProviderMeta(label="DoorDash", color="#F799A1", on_premises=False),
    ProviderMeta(label="GrubHub", color="#F68261", on_premises=False),
    ProviderMeta(label="TripAdvisor", color="#9C75CD", on_premises=True),
    ProviderMeta(label="UberEats", color="#4A35A3", on_premises=False),
)

_WHITESPACE_RX = re.compile(r"\s+")


def normalize_label_key(label) -> str:
    """Lower-case a label and remove all whitespace ('Uber Eats ' -> 'ubereats')"""
    if label is None:
        return ""
    return _WHITESPACE_RX.sub("", str(label).lower())


_BY_KEY = {normalize_label_key(p.label): p for p in PROVIDERS}


def lookup(label) -> Optional[ProviderMeta]:
    """
    Find provider metadata for a publisher label

    Args:
        label: Publisher label as found in review records

    Returns:
        ProviderMeta or None when the publisher is not registered
    """
    key = normalize_label_key(label)
    if not key:
        return None
    return _BY_KEY.get(key)


def known_labels() -> List[str]:
    """Registered publisher labels in registry order"""
    return [p.label for p in PROVIDERS]


def registry_order(publishers: Iterable[str]) -> List[str]:
    """
    Sort publisher labels by registry position

    Unregistered labels keep their input order after the registered ones.
    """
    positions = {normalize_label_key(p.label): i for i, p in enumerate(PROVIDERS)}
    labels = list(publishers)
    return sorted(
        labels,
        key=lambda label: positions.get(normalize_label_key(label), len(PROVIDERS)),
    )

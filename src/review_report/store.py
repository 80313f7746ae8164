"""
Review Store - holds the active review snapshot

The snapshot is replaced wholesale on load; every derived view is computed
from it on demand.
"""
import logging
import threading
from typing import Any, Tuple

from .transformers.publishers import count_distinct_locations, count_distinct_publishers

logger = logging.getLogger(__name__)


class ReviewStore:
    """
    Snapshot holder with an explicit load/clear lifecycle

    Loads and reads are serialized, and current() hands out an immutable
    tuple, so an aggregation running on one snapshot is never affected by a
    later load.
    """

    def __init__(self, snapshot=None):
        self._lock = threading.Lock()
        self._snapshot: Tuple[Any, ...] = ()
        if snapshot is not None:
            self.load(snapshot)

    def load(self, snapshot) -> "ReviewStore":
        """
        Replace the current snapshot

        Args:
            snapshot: List of review records; anything else loads as empty

        Returns:
            self, for chaining
        """
        if isinstance(snapshot, (list, tuple)):
            records = tuple(snapshot)
        else:
            if snapshot is not None:
                logger.warning(
                    f"Snapshot is a {type(snapshot).__name__}, not a list; loading empty"
                )
            records = ()

        with self._lock:
            self._snapshot = records
        logger.debug(f"Loaded snapshot with {len(records)} records")
        return self

    def current(self) -> Tuple[Any, ...]:
        """Active snapshot (read-only)"""
        with self._lock:
            return self._snapshot

    def is_loaded(self) -> bool:
        return len(self.current()) > 0

    def clear(self):
        """Reset to an empty snapshot"""
        with self._lock:
            self._snapshot = ()

    def distinct_location_count(self) -> int:
        return count_distinct_locations(self.current())

    def distinct_publisher_count(self) -> int:
        return count_distinct_publishers(self.current())

    def __len__(self) -> int:
        return len(self.current())

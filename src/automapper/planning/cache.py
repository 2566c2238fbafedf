"""Plan cache: resolved mapping plans keyed by ordered record-shape pair.

Plans are built once per (source class, destination class) and replayed for
every later mapping of that pair. The cache only grows; the number of
entries is bounded by the program's record types, not by call volume.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from automapper.core.strategy import MappingPlan

logger = logging.getLogger(__name__)


class PlanCache:
    """Thread-safe store of immutable MappingPlans.

    The lock is held only for dictionary access. Plans are installed whole,
    so readers never observe a partially built plan.
    """

    def __init__(self) -> None:
        """Initialize empty plan cache."""
        self._lock = threading.Lock()
        self._plans: dict[tuple[type, type], MappingPlan] = {}

    def get(self, source_type: type, destination_type: type) -> MappingPlan | None:
        """Get the plan for an ordered shape pair.

        Args:
            source_type: Source record class.
            destination_type: Destination record class.

        Returns:
            Cached plan, or None on a miss.
        """
        with self._lock:
            return self._plans.get((source_type, destination_type))

    def put(self, plan: MappingPlan) -> MappingPlan:
        """Install a plan unless one already exists for its shape pair.

        When two callers discover the same pair concurrently the first
        installed plan wins; both plans are equivalent.

        Args:
            plan: Fully built plan.

        Returns:
            The plan stored in the cache for plan.key.
        """
        with self._lock:
            stored = self._plans.setdefault(plan.key, plan)
        if stored is plan:
            logger.debug(
                "Cached mapping plan %s -> %s (%d steps)",
                plan.source_type.__qualname__,
                plan.destination_type.__qualname__,
                len(plan.steps),
            )
        return stored

    def keys(self) -> list[tuple[type, type]]:
        """Snapshot of cached shape pairs."""
        with self._lock:
            return list(self._plans)

    def __len__(self) -> int:
        with self._lock:
            return len(self._plans)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._plans

    def __iter__(self) -> Iterator[MappingPlan]:
        with self._lock:
            plans = list(self._plans.values())
        return iter(plans)

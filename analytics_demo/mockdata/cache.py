from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Dict, Iterable, List, Mapping, Tuple

logger = logging.getLogger(__name__)

Snapshot = Tuple[dict, ...]


class GeneratorError(RuntimeError):
    """A table generator produced invalid rows or failed outright."""


class CircularDependencyError(GeneratorError):
    """A table's generation chain requested itself."""


class GenerationCache:
    """Memoizes table snapshots so each generator runs once per cache lifetime.

    Check-and-set runs under a re-entrant lock: other threads wait for an
    in-flight generation instead of starting their own, while the generating
    thread may recurse into dependencies. A key re-requested while it is still
    being generated is a dependency cycle.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._snapshots: Dict[str, Snapshot] = {}
        self._pending: List[str] = []  # generation stack, outermost first

    def get_or_generate(self, key: str, generator: Callable[[], Iterable[Mapping]]) -> Snapshot:
        with self._lock:
            cached = self._snapshots.get(key)
            if cached is not None:
                return cached
            if key in self._pending:
                chain = " -> ".join(self._pending[self._pending.index(key):] + [key])
                raise CircularDependencyError(f"Circular generation: {chain}")

            self._pending.append(key)
            try:
                snapshot = tuple(generator())
            finally:
                self._pending.pop()
            self._snapshots[key] = snapshot
            logger.debug("Generated '%s' (%d rows)", key, len(snapshot))
            return snapshot

    def get(self, key: str) -> Snapshot | None:
        with self._lock:
            return self._snapshots.get(key)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._snapshots)

    def clear(self) -> None:
        with self._lock:
            self._snapshots.clear()
        logger.info("Generation cache cleared")

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._snapshots

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)

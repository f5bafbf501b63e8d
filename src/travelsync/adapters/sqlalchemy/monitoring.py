"""Connection pool checkout tracking.

Connections held past a soft threshold are reported as probable leaks; nothing
is closed or cancelled on their behalf.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy import event

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


@dataclass(slots=True)
class PoolMonitor:
    threshold_seconds: float
    _checked_out: dict[int, float] = field(default_factory=dict[int, float])
    _lock: threading.Lock = field(default_factory=threading.Lock)
    _engine: Engine | None = None

    def install(self, engine: Engine) -> None:
        event.listen(engine, "checkout", self._on_checkout)
        event.listen(engine, "checkin", self._on_checkin)
        self._engine = engine

    def uninstall(self) -> None:
        if self._engine is None:
            return
        event.remove(self._engine, "checkout", self._on_checkout)
        event.remove(self._engine, "checkin", self._on_checkin)
        self._engine = None
        with self._lock:
            self._checked_out.clear()

    def _on_checkout(self, dbapi_connection: Any, record: Any, proxy: Any) -> None:
        _ = (record, proxy)
        with self._lock:
            self._checked_out[id(dbapi_connection)] = time.monotonic()

    def _on_checkin(self, dbapi_connection: Any, record: Any) -> None:
        _ = record
        with self._lock:
            started = self._checked_out.pop(id(dbapi_connection), None)
        if started is None:
            return
        held = time.monotonic() - started
        if held > self.threshold_seconds:
            log.warning("Possible connection leak: connection was held for %.1fs", held)

    def held_connections(self, threshold_seconds: float | None = None) -> list[float]:
        """Seconds each currently checked-out connection has been held past ``threshold``."""

        limit = self.threshold_seconds if threshold_seconds is None else threshold_seconds
        now = time.monotonic()
        with self._lock:
            held = [now - started for started in self._checked_out.values()]
        return sorted((seconds for seconds in held if seconds > limit), reverse=True)

    @property
    def checked_out(self) -> int:
        with self._lock:
            return len(self._checked_out)

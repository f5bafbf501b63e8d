from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from sqlalchemy import text

from travelsync.adapters.sqlalchemy.monitoring import PoolMonitor

if TYPE_CHECKING:
    import pytest
    from sqlalchemy.engine import Engine


def test_monitor_tracks_checked_out_connections(file_engine: Engine) -> None:
    monitor = PoolMonitor(threshold_seconds=60.0)
    monitor.install(file_engine)
    try:
        with file_engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            assert monitor.checked_out == 1
            assert monitor.held_connections() == []
            assert len(monitor.held_connections(threshold_seconds=0.0)) <= 1
        assert monitor.checked_out == 0
    finally:
        monitor.uninstall()


def test_monitor_warns_about_long_held_connections(
    file_engine: Engine, caplog: pytest.LogCaptureFixture
) -> None:
    monitor = PoolMonitor(threshold_seconds=0.0)
    monitor.install(file_engine)
    try:
        with caplog.at_level(logging.WARNING, logger="travelsync.adapters.sqlalchemy.monitoring"):
            with file_engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                time.sleep(0.01)
                assert len(monitor.held_connections()) == 1
    finally:
        monitor.uninstall()

    assert "Possible connection leak" in caplog.text


def test_uninstalled_monitor_stops_tracking(file_engine: Engine) -> None:
    monitor = PoolMonitor(threshold_seconds=60.0)
    monitor.install(file_engine)
    monitor.uninstall()

    with file_engine.connect() as connection:
        connection.execute(text("SELECT 1"))
        assert monitor.checked_out == 0

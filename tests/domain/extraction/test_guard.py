from __future__ import annotations

import logging

import pytest

from travelsync.domain.extraction import ReservationNotFoundError, extract_family


def test_failing_family_degrades_to_default(caplog: pytest.LogCaptureFixture) -> None:
    def broken() -> list[str]:
        raise KeyError("Segment")

    with caplog.at_level(logging.WARNING):
        result = extract_family("flights", broken, list)

    assert result == []
    assert "Extraction of flights failed" in caplog.text


def test_successful_family_returns_its_value() -> None:
    assert extract_family("remarks", lambda: ["a"], list) == ["a"]


def test_missing_reservation_root_is_not_swallowed() -> None:
    def missing() -> None:
        raise ReservationNotFoundError("no root")

    with pytest.raises(ReservationNotFoundError):
        extract_family("booking", missing, lambda: None)

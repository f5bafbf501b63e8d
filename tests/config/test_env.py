from __future__ import annotations

import pytest

from travelsync.config import ConfigurationError, MissingConfigurationError, require_env_vars
from travelsync.config.env import env_float, env_int


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_env_int_falls_back_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)

    assert env_int("EXAMPLE_INT", 7) == 7


def test_env_int_parses_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_INT", "12")

    assert env_int("EXAMPLE_INT", 7, minimum=1) == 12


@pytest.mark.parametrize("raw", ["twelve", "0"])
def test_env_int_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("EXAMPLE_INT", raw)

    with pytest.raises(ConfigurationError):
        env_int("EXAMPLE_INT", 7, minimum=1)


def test_env_float_rejects_values_below_minimum(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLOAT", "-0.5")

    with pytest.raises(ConfigurationError):
        env_float("EXAMPLE_FLOAT", 1.0, minimum=0.0)

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from travelsync.domain.reconciliation import BatchSummary, ProfileResult
from travelsync.ui import cli as cli_module
from tests.helpers.sabre import reservation_document

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from travelsync.config import ImportContext


def write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_missing_file_exits_with_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["parse-reservation", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_invalid_concurrency_is_rejected(tmp_path: Path) -> None:
    path = write_json(tmp_path / "profiles.json", [])

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["import-profiles", str(path), "--max-concurrency", "0"])

    assert excinfo.value.code == 2


def test_import_profiles_passes_overrides(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    path = write_json(tmp_path / "profiles.json", [{"Profile": {}}])
    seen: list[object] = []
    contexts: list[ImportContext] = []

    def fake_import(documents: Iterable[object], *, context: ImportContext) -> BatchSummary:
        seen.extend(documents)
        contexts.append(context)
        return BatchSummary(created=1, total_processed=1, results=[ProfileResult(source_id="P1")])

    monkeypatch.setattr(cli_module, "import_profiles", fake_import)

    cli_module.main(
        ["import-profiles", str(path), "--max-concurrency", "3", "--organization-id", "org-9"]
    )

    (context,) = contexts
    assert seen == [{"Profile": {}}]
    assert context.organization_id == "org-9"
    assert context.max_concurrent_profiles == 3


def test_import_profiles_exits_when_nothing_imported(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    path = write_json(tmp_path / "profiles.json", [{}])

    def fake_import(documents: object, *, context: ImportContext) -> BatchSummary:
        _ = (documents, context)
        return BatchSummary(failed=1, total_processed=1, failures={"document[0]": "broken"})

    monkeypatch.setattr(cli_module, "import_profiles", fake_import)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["import-profiles", str(path)])

    assert excinfo.value.code == 1


def test_parse_reservation_prints_canonical_json(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = write_json(tmp_path / "reservation.json", reservation_document())

    cli_module.main(["parse-reservation", str(path)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["booking"]["record_locator"] == "ABC123"
    assert len(payload["passengers"]) == 2
    assert len(payload["flights"]) == 2


def test_parse_reservation_can_print_validation_only(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = write_json(tmp_path / "reservation.json", reservation_document())

    cli_module.main(["parse-reservation", str(path), "--validate-only"])

    payload = json.loads(capsys.readouterr().out)
    assert set(payload) == {"issues", "recommendations"}


def test_unreadable_reservation_exits_with_failure(tmp_path: Path) -> None:
    path = tmp_path / "reservation.json"
    path.write_text("not a reservation", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["parse-reservation", str(path)])

    assert excinfo.value.code == 1


def test_migrate_dispatches(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(cli_module, "migrate", lambda: calls.append("migrate"))

    cli_module.main(["migrate"])

    assert calls == ["migrate"]


def test_log_level_option_reaches_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[int | None] = []

    def fake_configure(*, level: int | None = None, force: bool = False) -> int:
        levels.append(level)
        return level or logging.INFO

    monkeypatch.setattr(cli_module, "configure_logging", fake_configure)
    monkeypatch.setattr(cli_module, "migrate", lambda: None)

    cli_module.main(["--log-level", "debug", "migrate"])
    cli_module.main(["migrate"])

    assert levels == [logging.DEBUG, None]


def test_unknown_log_level_option_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--log-level", "chatty", "migrate"])

    assert excinfo.value.code == 2


def test_invalid_log_level_environment_is_a_usage_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TRAVELSYNC_LOG_LEVEL", "chatty")
    monkeypatch.setattr(cli_module, "migrate", lambda: None)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["migrate"])

    assert excinfo.value.code == 2

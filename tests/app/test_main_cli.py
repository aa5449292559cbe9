from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from photorecon import main as main_module
from photorecon.domain.errors import PhotoNotFoundError
from photorecon.domain.reconciliation import ReconcileResult
from tests.helpers.photos import make_photo

if TYPE_CHECKING:
    from pathlib import Path
    from uuid import UUID

    from photorecon.domain.model import Photo
    from photorecon.domain.reconciliation import Signals

PHOTO_ID = "7a1f6c2e-2f4b-4c55-9d5e-0b6f3f0e8a11"


def test_create_prints_photo(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_create(**kwargs: object) -> Photo:
        captured.update(kwargs)
        return make_photo("Wedding.jpg", title="Wedding")

    monkeypatch.setattr(main_module, "create_photo", fake_create)

    main_module.main(["create", "--name", "Wedding.jpg", "--path", "2018/06"])

    assert captured == {"name": "Wedding.jpg", "path": "2018/06", "original_name": ""}
    printed = json.loads(capsys.readouterr().out)
    assert printed["title"] == "Wedding"
    assert printed["status"] == "pending"


def test_reconcile_reads_signal_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    signals_file = tmp_path / "signals.json"
    signals_file.write_text(
        json.dumps({"metadata": [{"source": "META", "camera_serial": "SN123"}]}),
        encoding="utf-8",
    )
    captured: dict[str, object] = {}

    def fake_reconcile(photo_id: UUID, signals: Signals) -> ReconcileResult:
        captured["photo_id"] = str(photo_id)
        captured["serial"] = signals.metadata[0].camera_serial
        return ReconcileResult(photo=make_photo())

    monkeypatch.setattr(main_module, "reconcile_photo", fake_reconcile)

    main_module.main(["reconcile", PHOTO_ID, str(signals_file)])

    assert captured == {"photo_id": PHOTO_ID, "serial": "SN123"}
    assert json.loads(capsys.readouterr().out)["id"]


def test_transitions_dispatch_by_command(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_archive(photo_id: UUID) -> ReconcileResult:
        calls.append(str(photo_id))
        return ReconcileResult(photo=make_photo())

    monkeypatch.setitem(main_module._TRANSITIONS, "archive", fake_archive)  # noqa: SLF001

    main_module.main(["archive", PHOTO_ID])

    assert calls == [PHOTO_ID]


def test_init_db_starts_adapter(monkeypatch: pytest.MonkeyPatch) -> None:
    started: list[bool] = []

    monkeypatch.setattr(main_module, "is_started", lambda: False)
    monkeypatch.setattr(main_module, "startup", lambda: started.append(True))
    monkeypatch.setattr(main_module, "configured_engine", lambda: None)

    main_module.main(["init-db"])

    assert started == [True]


@pytest.mark.parametrize(
    "argv",
    [
        ["show", "not-a-uuid"],
        ["reconcile", PHOTO_ID, "does-not-exist.json"],
    ],
)
def test_invalid_arguments_exit_with_code_2(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(argv)

    assert excinfo.value.code == 2


def test_malformed_signal_file_exits_with_code_2(tmp_path: Path) -> None:
    signals_file = tmp_path / "signals.json"
    signals_file.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["reconcile", PHOTO_ID, str(signals_file)])

    assert excinfo.value.code == 2


def test_missing_command_exits_with_code_2() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([])

    assert excinfo.value.code == 2


def test_fatal_error_exits_with_code_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_get(photo_id: UUID) -> Photo:
        raise PhotoNotFoundError(photo_id)

    monkeypatch.setattr(main_module, "get_photo", fake_get)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["show", PHOTO_ID])

    assert excinfo.value.code == 1

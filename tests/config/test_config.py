from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003

import pytest

from photorecon.config import (
    ConfigurationError,
    MissingConfigurationError,
    ReconcileConfig,
    configure_logging,
    get_database_config,
    get_reconcile_config,
    get_storage_config,
    optional_int_env,
    require_env_var,
    require_env_vars,
)
from photorecon.config.storage import DEFAULT_DB_FILENAME


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_optional_int_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)
    assert optional_int_env("EXAMPLE_INT", 7) == 7

    monkeypatch.setenv("EXAMPLE_INT", " 12 ")
    assert optional_int_env("EXAMPLE_INT", 7) == 12

    monkeypatch.setenv("EXAMPLE_INT", "twelve")
    with pytest.raises(ConfigurationError, match="EXAMPLE_INT must be an integer"):
        optional_int_env("EXAMPLE_INT", 7)


def test_reconcile_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHOTORECON_YEAR_MAX", "2030")
    monkeypatch.setenv("PHOTORECON_TITLE_MAX", "80")

    assert get_reconcile_config() == ReconcileConfig(year_max=2030, title_max=80)


def test_reconcile_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PHOTORECON_YEAR_MAX", raising=False)
    monkeypatch.delenv("PHOTORECON_TITLE_MAX", raising=False)

    assert get_reconcile_config() == ReconcileConfig()


@pytest.mark.parametrize(
    ("year_max", "title_max"),
    [(999, 160), (2030, 0)],
)
def test_reconcile_config_rejects_invalid_values(year_max: int, title_max: int) -> None:
    with pytest.raises(ConfigurationError):
        ReconcileConfig(year_max=year_max, title_max=title_max)


def test_storage_prefers_explicit_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("PHOTORECON_DATA_DIR", str(custom))

    assert get_storage_config().resolve_data_dir() == custom.resolve()


def test_database_uri_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config().uri == "sqlite:///override.db"


def test_database_uri_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("PHOTORECON_DATA_DIR", str(tmp_path / "data-dir"))

    uri = get_database_config().uri

    expected_path = (tmp_path / "data-dir" / DEFAULT_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_configure_logging_reads_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    monkeypatch.setenv("PHOTORECON_LOG_LEVEL", "warning")

    configure_logging()

    assert captured["level"] == logging.WARNING
    assert captured["force"] is False

    monkeypatch.setenv("PHOTORECON_LOG_LEVEL", "chatty")
    configure_logging(force=True)

    assert captured["level"] == logging.INFO
    assert captured["force"] is True


def test_storage_defaults_to_user_data_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("PHOTORECON_DATA_DIR", raising=False)
    monkeypatch.setattr("os.name", "posix")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "photorecon").resolve()
    assert config.database_path(ensure=False).name == DEFAULT_DB_FILENAME

from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from pocketlibrary.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_database_config,
    get_storage_config,
    get_sync_config,
    int_env_var,
    optional_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR") is None


def test_int_env_var_parses_and_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)
    assert int_env_var("EXAMPLE_INT", default=3) == 3

    monkeypatch.setenv("EXAMPLE_INT", "42")
    assert int_env_var("EXAMPLE_INT", default=3) == 42

    monkeypatch.setenv("EXAMPLE_INT", "forty")
    with pytest.raises(ConfigurationError):
        int_env_var("EXAMPLE_INT", default=3)


def test_sync_config_defaults_to_minimum_interval(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POCKETLIBRARY_SYNC_INTERVAL_MINUTES", raising=False)
    monkeypatch.delenv("POCKETLIBRARY_CONNECTIVITY_URL", raising=False)

    config = get_sync_config()

    assert config.task_name == "book_sync"
    assert config.interval_minutes == 15
    assert config.interval_seconds == 900.0


def test_sync_config_rejects_short_interval(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POCKETLIBRARY_SYNC_INTERVAL_MINUTES", "5")

    with pytest.raises(ConfigurationError):
        get_sync_config()


def test_sync_config_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POCKETLIBRARY_SYNC_INTERVAL_MINUTES", "60")
    monkeypatch.setenv("POCKETLIBRARY_CONNECTIVITY_URL", "https://status.example/")

    config = get_sync_config()

    assert config.interval_seconds == 3600.0
    assert config.connectivity_url == "https://status.example/"


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("POCKETLIBRARY_DATA_DIR", str(custom))

    config = get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()
    assert config.database_path() == custom.resolve() / "library.db"
    assert custom.is_dir()


def test_database_config_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config().uri == "sqlite:///override.db"


def test_database_config_falls_back_to_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("POCKETLIBRARY_DATA_DIR", str(tmp_path))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'library.db'}"

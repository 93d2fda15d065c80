"""Tests for stockquest.settings.Settings behavior."""

from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from stockquest.settings import Settings, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    """Defaults should be stable even if external env or .env sets values.

    We explicitly delete the variables and bypass .env loading by passing
    `_env_file=None`.
    """
    for var in [
        "STOCKQUEST_LOG_LEVEL",
        "STOCKQUEST_STORAGE_BACKEND",
        "STOCKQUEST_STORAGE_DIR",
        "STOCKQUEST_STORAGE_PREFIX",
    ]:
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.log_level == "INFO"
    assert s.storage_backend == "memory"
    assert s.storage_dir == Path(".stockquest")
    assert s.storage_prefix == "stockquest_"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("STOCKQUEST_LOG_LEVEL", "debug")
    monkeypatch.setenv("STOCKQUEST_STORAGE_BACKEND", "file")
    monkeypatch.setenv("STOCKQUEST_STORAGE_DIR", str(tmp_path))
    s = Settings(_env_file=None)
    assert s.log_level == "DEBUG"
    assert s.storage_backend == "file"
    assert s.storage_dir == tmp_path


def test_case_insensitive_env_name(monkeypatch: pytest.MonkeyPatch):
    # lower-case variable name should still be picked up due to case_sensitive=False
    monkeypatch.setenv("stockquest_storage_prefix", "sq_")
    s = Settings(_env_file=None)
    assert s.storage_prefix == "sq_"


def test_invalid_log_level():
    with pytest.raises(ValidationError, match="Invalid log level"):
        Settings(_env_file=None, log_level="verbose")


def test_invalid_storage_backend():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, storage_backend="cloud")


def test_get_settings_singleton():
    a = get_settings()
    b = get_settings()
    assert a is b


def test_get_settings_cache_not_affected_by_new_env(monkeypatch: pytest.MonkeyPatch):
    first = get_settings()
    original_prefix = first.storage_prefix
    monkeypatch.setenv("STOCKQUEST_STORAGE_PREFIX", "changed_")
    second = get_settings()
    assert second is first
    assert second.storage_prefix == original_prefix


@pytest.mark.parametrize(
    "override,expected",
    [
        ({"log_level": "warning"}, "WARNING"),
        ({"storage_prefix": "x_"}, "x_"),
    ],
)
def test_direct_instantiation_with_overrides(override: dict[str, Any], expected: Any):
    s = Settings(_env_file=None, **override)
    key = next(iter(override.keys()))
    assert getattr(s, key) == expected

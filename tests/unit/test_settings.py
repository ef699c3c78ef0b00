"""Tests for settings loading and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from cinesift.config.settings import ObservabilitySettings, PaginationSettings, Settings
from cinesift.observability.logging import setup_logging


class TestSettings:
    def test_defaults(self, settings: Settings) -> None:
        assert settings.server.port == 8080
        assert settings.redis.index == "cinesift.movie-idx"
        assert settings.redis.key_prefix == "cinesift.movie:"
        assert settings.query.bounded_upper_first is True
        assert settings.pagination.default_size == 20
        assert settings.pagination.max_size is None

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CINESIFT_REDIS__URL", "redis://cache:6379/1")
        monkeypatch.setenv("CINESIFT_PAGINATION__DEFAULT_SIZE", "50")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.redis.url == "redis://cache:6379/1"
        assert settings.pagination.default_size == 50

    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "cinesift-config.yaml"
        path.write_text(
            "redis:\n  index: films-idx\n  storage: hash\nquery:\n  bounded_upper_first: false\n",
            encoding="utf-8",
        )

        settings = Settings.from_yaml(path)

        assert settings.redis.index == "films-idx"
        assert settings.redis.storage == "hash"
        assert settings.query.bounded_upper_first is False

    def test_env_beats_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "cinesift-config.yaml"
        path.write_text("redis:\n  url: redis://yaml:6379\n  index: films-idx\n", encoding="utf-8")
        monkeypatch.setenv("CINESIFT_REDIS__URL", "redis://env:6379")

        settings = Settings.from_yaml(path)

        assert settings.redis.url == "redis://env:6379"
        assert settings.redis.index == "films-idx"

    def test_from_yaml_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "missing.yaml")

    def test_max_size_below_default(self) -> None:
        with pytest.raises(ValidationError):
            PaginationSettings(default_size=20, max_size=10)

    def test_log_level_normalized(self) -> None:
        assert ObservabilitySettings(log_level="DEBUG").log_level == "debug"
        with pytest.raises(ValidationError):
            ObservabilitySettings(log_level="verbose")


class TestLogging:
    def test_setup_logging_sets_level(self) -> None:
        setup_logging(ObservabilitySettings(log_level="warning", log_format="console"))

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_setup_logging_defaults(self) -> None:
        setup_logging()
        assert logging.getLogger().level == logging.INFO

"""
Tests for inspector configuration and logging setup.
"""

from __future__ import annotations

import logging

import pytest
import structlog
from pydantic import ValidationError

from oauth_inspector.config import InspectorSettings
from oauth_inspector.logging_config import configure_logging


class TestSettings:
    """Test environment-based settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default values."""
        for name in ("GOOGLE_CLOUD_PROJECT", "GCP_PROJECT", "INSPECTOR_GCP_PROJECT_ID"):
            monkeypatch.delenv(name, raising=False)

        settings = InspectorSettings(_env_file=None)

        assert settings.PORT == 8080
        assert settings.SECRET_BACKEND == "env"
        assert settings.PROVIDER_TIMEOUT_SECONDS == 10.0
        assert settings.EXPLORE_USER_AGENT == "OAuth-User-Inspector/1.0"
        assert settings.GCP_PROJECT_ID is None

    def test_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test INSPECTOR_ prefixed variables are read."""
        monkeypatch.setenv("INSPECTOR_PORT", "9090")
        monkeypatch.setenv("INSPECTOR_SECRET_BACKEND", "gcp")
        monkeypatch.setenv("INSPECTOR_LOG_FORMAT", "json")

        settings = InspectorSettings(_env_file=None)

        assert settings.PORT == 9090
        assert settings.SECRET_BACKEND == "gcp"
        assert settings.LOG_FORMAT == "json"

    def test_gcp_project_fallback_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the Google Cloud project is read from the platform variables."""
        monkeypatch.delenv("INSPECTOR_GCP_PROJECT_ID", raising=False)
        monkeypatch.delenv("GOOGLE_CLOUD_PROJECT", raising=False)
        monkeypatch.setenv("GCP_PROJECT", "legacy-project")

        settings = InspectorSettings(_env_file=None)

        assert settings.GCP_PROJECT_ID == "legacy-project"

    def test_invalid_timeout(self) -> None:
        """Test the provider timeout must be positive."""
        with pytest.raises(ValidationError):
            InspectorSettings(_env_file=None, PROVIDER_TIMEOUT_SECONDS=0)


class TestLogging:
    """Test structured logging setup."""

    @pytest.mark.parametrize("fmt", ["text", "json"])
    def test_configure_logging(self, fmt: str) -> None:
        """Test root handler and level are installed."""
        configure_logging("DEBUG", fmt)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING

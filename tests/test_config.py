"""
Tests for tooling settings.
"""

import pytest
from pydantic import ValidationError

from cdk_template.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        for key in ("LOG_LEVEL", "LOG_FORMAT", "ENV_FILE", "AGENT_CODE_PATH"):
            monkeypatch.delenv(f"CDK_TEMPLATE_{key}", raising=False)

        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.env_file == ".env"
        assert settings.agent_code_path == "agentcore/deployment_package"

    def test_env_prefix(self, monkeypatch):
        """Test values come from CDK_TEMPLATE_ variables."""
        monkeypatch.setenv("CDK_TEMPLATE_LOG_LEVEL", "debug")
        monkeypatch.setenv("CDK_TEMPLATE_ENV_FILE", "../.env")

        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.env_file == "../.env"

    def test_invalid_log_level(self, monkeypatch):
        """Test an unknown log level is rejected."""
        monkeypatch.setenv("CDK_TEMPLATE_LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Settings()

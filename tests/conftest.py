"""
Pytest configuration and fixtures for cdk-template tests.
"""

import pytest

from cdk_template.logging_config import configure_logging

# Keep info-level events out of captured output
configure_logging("WARNING")

DOTENV_KEYS = (
    "API_KEY",
    "AWS_ACCOUNT_ID",
    "BEDROCK_MODEL_ID",
    "AGENT_RUNTIME_NAME",
    "LOG_RETENTION_DAYS",
    "ENABLE_VPC",
)


@pytest.fixture
def valid_environ():
    """A complete, well-typed synthetic environment."""
    return {
        "API_KEY": "test-api-key",
        "AWS_ACCOUNT_ID": "123456789012",
        "BEDROCK_MODEL_ID": "anthropic.claude-3-haiku-20240307-v1:0",
        "AGENT_RUNTIME_NAME": "test_agent",
        "LOG_RETENTION_DAYS": "14",
        "ENABLE_VPC": "true",
    }


@pytest.fixture
def dot_env(valid_environ):
    """Validated dotenv built from valid_environ."""
    from cdk_template.validate_dotenv import validate_dotenv
    return validate_dotenv(valid_environ)


@pytest.fixture
def clean_environ(monkeypatch):
    """Remove every dotenv key from the process environment."""
    for key in DOTENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def env_file(tmp_path, valid_environ):
    """Write valid_environ to a .env file."""
    path = tmp_path / ".env"
    path.write_text(
        "\n".join(f"{key}={value}" for key, value in valid_environ.items()) + "\n",
        encoding="utf-8",
    )
    return path

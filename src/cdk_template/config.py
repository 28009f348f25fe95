"""
Settings for the cdk-template tooling itself.

Uses pydantic-settings so the CLI and the CDK app can be tuned from the
process environment. The deployment dotenv (API keys, account id, ...) is
validated separately by cdk_template.validate_dotenv.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tooling settings, read from CDK_TEMPLATE_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="CDK_TEMPLATE_", extra="ignore")

    log_level: str = Field(default="INFO", description="Root log level")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="structlog renderer",
    )
    env_file: str = Field(default=".env", description="Path of the deployment dotenv")
    agent_code_path: str = Field(
        default="agentcore/deployment_package",
        description="Directory uploaded as the AgentCore runtime artifact",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

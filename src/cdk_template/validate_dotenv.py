"""
Validation of the deployment dotenv.

The dotenv holds per-deployment values (credentials, account id, runtime
naming) that the CDK stacks need. They are read once per run, checked
against the DotEnv schema, and handed on as an immutable record.
"""

import os
from pathlib import Path
from typing import Any, Mapping

import structlog
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cdk_template.config import get_settings
from cdk_template.exceptions import ConfigIssue, ConfigValidationError

logger = structlog.get_logger(__name__)

# Keys whose values must never be printed or logged.
SECRET_KEYS = frozenset({"API_KEY"})

DEFAULT_MODEL_ID = "openai.gpt-oss-120b-1:0"

# Retention periods CloudWatch Logs accepts.
LOG_RETENTION_DAYS = (
    1, 3, 5, 7, 14, 30, 60, 90, 120, 150, 180, 365, 400, 545,
    731, 1096, 1827, 2192, 2557, 2922, 3288, 3653,
)


class DotEnv(BaseModel):
    """Validated dotenv values, keyed by environment variable name."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    api_key: str = Field(alias="API_KEY", min_length=1)
    aws_account_id: str = Field(alias="AWS_ACCOUNT_ID", pattern=r"^\d{12}$")
    bedrock_model_id: str = Field(
        default=DEFAULT_MODEL_ID,
        alias="BEDROCK_MODEL_ID",
        min_length=1,
    )
    # Prefixed with "<env>_" to form the AgentCore runtime name (max 48 chars)
    agent_runtime_name: str = Field(
        default="sample_agent",
        alias="AGENT_RUNTIME_NAME",
        pattern=r"^[a-zA-Z][a-zA-Z0-9_]{0,43}$",
    )
    log_retention_days: int = Field(default=7, alias="LOG_RETENTION_DAYS", gt=0)
    enable_vpc: bool = Field(default=False, alias="ENABLE_VPC")

    @field_validator("log_retention_days")
    @classmethod
    def validate_retention(cls, v: int) -> int:
        if v not in LOG_RETENTION_DAYS:
            raise ValueError(f"{v} is not a CloudWatch Logs retention period")
        return v

    def to_environ(self) -> dict[str, str]:
        """Serialize back to environment variable strings."""
        environ = {}
        for key, value in self.model_dump(by_alias=True).items():
            if isinstance(value, bool):
                environ[key] = "true" if value else "false"
            else:
                environ[key] = str(value)
        return environ

    def masked(self) -> dict[str, Any]:
        """Dump by alias with secret values replaced."""
        return {
            key: "****" if key in SECRET_KEYS else value
            for key, value in self.model_dump(by_alias=True).items()
        }


def read_environ(env_file: str | os.PathLike | None = None) -> dict[str, str]:
    """
    Collect the ambient environment.

    Values from env_file (if it exists) are overlaid by the process
    environment. os.environ itself is left untouched.
    """
    values: dict[str, str] = {}
    if env_file and Path(env_file).is_file():
        values.update(
            {k: v for k, v in dotenv_values(env_file).items() if v is not None}
        )
        logger.debug("Loaded env file", path=str(env_file), keys=len(values))
    values.update(os.environ)
    return values


def _issue_key(error: Mapping[str, Any]) -> str:
    loc = error.get("loc") or ()
    return str(loc[0]) if loc else "<root>"


def validate_dotenv(
    environ: Mapping[str, str] | None = None,
    *,
    env_file: str | os.PathLike | None = None,
) -> DotEnv:
    """
    Validate the dotenv and return an immutable DotEnv.

    Args:
        environ: Mapping to validate. When omitted the ambient environment
            is read (env_file overlaid by os.environ).
        env_file: Dotenv path used only when environ is omitted. Defaults
            to the CDK_TEMPLATE_ENV_FILE setting.

    Raises:
        ConfigValidationError: listing every missing or malformed key.
    """
    if environ is None:
        if env_file is None:
            env_file = get_settings().env_file
        environ = read_environ(env_file)

    try:
        dot_env = DotEnv.model_validate(dict(environ))
    except ValidationError as e:
        issues = [
            ConfigIssue(key=_issue_key(error), message=error["msg"])
            for error in e.errors()
        ]
        exc = ConfigValidationError(issues)
        logger.error("dotenv_invalid", keys=exc.keys)
        raise exc from e

    logger.info("dotenv_validated", keys=sorted(dot_env.to_environ()))
    return dot_env

"""
Deployment parameters.

Combines the common parameters, the validated dotenv and the
per-environment parameters into the single Parameter object that the CDK
stacks read from.
"""

import os
from types import MappingProxyType
from typing import Any, Mapping

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from cdk_template.envname import EnvName
from cdk_template.exceptions import MissingOverrideEntry
from cdk_template.validate_dotenv import DotEnv, validate_dotenv

logger = structlog.get_logger(__name__)

REGION = "ap-northeast-1"
OWNER = "sori883"
PROJECT = "cdk-template"

# Per-environment parameters, e.g. capacity or sizing that differs between
# environments. Every EnvName needs an entry, even an empty one.
DIFF_ENV: Mapping[EnvName, Mapping[str, Any]] = MappingProxyType(
    {
        EnvName.PRD: MappingProxyType({}),
        EnvName.STG: MappingProxyType({}),
        EnvName.DEV: MappingProxyType({}),
    }
)


def check_diff_env(table: Mapping[EnvName, Mapping[str, Any]]) -> None:
    """Raise MissingOverrideEntry for the first EnvName without an entry."""
    for env_name in EnvName:
        if env_name not in table:
            raise MissingOverrideEntry(env_name.value)


check_diff_env(DIFF_ENV)


def diff_env_parameter(
    env_name: EnvName,
    table: Mapping[EnvName, Mapping[str, Any]] = DIFF_ENV,
) -> Mapping[str, Any]:
    """Return the per-environment parameters for env_name."""
    try:
        return table[env_name]
    except KeyError:
        raise MissingOverrideEntry(str(env_name)) from None


class Parameter(BaseModel):
    """Resolved parameters for one deployment environment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    prefix: str
    region: str
    owner: str
    project: str
    cost: str
    dot_env: DotEnv = Field(alias="dotEnv")
    diff_env: Mapping[str, Any] = Field(
        default_factory=lambda: MappingProxyType({}),
        alias="diffEnv",
    )

    @field_validator("diff_env")
    @classmethod
    def freeze_diff_env(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    @field_serializer("diff_env")
    def dump_diff_env(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return dict(v)

    @property
    def env_name(self) -> EnvName:
        return EnvName(self.prefix)

    def tags(self) -> dict[str, str]:
        """Ownership and cost-allocation tags for every resource."""
        return {
            "Owner": self.owner,
            "Project": self.project,
            "Cost": self.cost,
            "Environment": self.prefix,
        }

    def masked(self) -> dict[str, Any]:
        """Dump by alias with secret dotenv values hidden."""
        data = self.model_dump(by_alias=True)
        data["dotEnv"] = self.dot_env.masked()
        return data


def resolve_parameter(
    env_name: EnvName,
    dot_env: DotEnv,
    table: Mapping[EnvName, Mapping[str, Any]] = DIFF_ENV,
) -> Parameter:
    """
    Build the Parameter for env_name.

    Pure function of its inputs. The dotenv and the per-environment
    parameters are kept under their own keys so neither can shadow the
    common parameters.
    """
    return Parameter(
        prefix=env_name.value,
        region=REGION,
        owner=OWNER,
        project=PROJECT,
        cost=f"{PROJECT}-{env_name.value}",
        dot_env=dot_env,
        diff_env=dict(diff_env_parameter(env_name, table)),
    )


def load_parameter(
    env_name: str,
    environ: Mapping[str, str] | None = None,
    *,
    env_file: str | os.PathLike | None = None,
) -> Parameter:
    """
    Parse env_name, validate the dotenv and resolve the parameters.

    The name is checked first, so an unknown environment fails before the
    dotenv is read.
    """
    name = EnvName.parse(env_name)
    dot_env = validate_dotenv(environ, env_file=env_file)
    parameter = resolve_parameter(name, dot_env)
    logger.info("parameter_resolved", env=name.value, region=parameter.region)
    return parameter

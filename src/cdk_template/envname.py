"""Deployment environment names."""

from enum import Enum

from cdk_template.exceptions import InvalidEnvironmentName


class EnvName(str, Enum):
    """Deployment targets. The set is closed."""

    DEV = "dev"
    STG = "stg"
    PRD = "prd"

    @classmethod
    def parse(cls, value: str) -> "EnvName":
        """Classify a raw string, raising InvalidEnvironmentName if unknown."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidEnvironmentName(value, cls.names()) from None

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]

    def __str__(self) -> str:
        return self.value

"""
Errors raised while resolving deployment parameters.

Every error is fatal: nothing here is retried, and all of them surface
before any cloud resource is touched.
"""

from dataclasses import dataclass
from typing import Iterable


class ParameterError(Exception):
    """Base class for deployment parameter errors."""


class InvalidEnvironmentName(ParameterError):
    """The requested environment is not one of the known deployment targets."""

    def __init__(self, value: str, allowed: Iterable[str]):
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid environment name {value!r}. "
            f"Expected one of: {', '.join(self.allowed)}"
        )


@dataclass(frozen=True)
class ConfigIssue:
    """A single problem found in the dotenv."""

    key: str
    message: str

    def __str__(self) -> str:
        return f"{self.key}: {self.message}"


class ConfigValidationError(ParameterError):
    """One or more dotenv values are missing or malformed.

    All problems are reported together so they can be fixed in one pass.
    """

    def __init__(self, issues: list[ConfigIssue]):
        self.issues = list(issues)
        lines = "\n".join(f"  - {issue}" for issue in self.issues)
        super().__init__(
            f"Invalid .env configuration ({len(self.issues)} problem(s)):\n{lines}"
        )

    @property
    def keys(self) -> list[str]:
        """Offending keys, in report order, without duplicates."""
        return list(dict.fromkeys(issue.key for issue in self.issues))


class MissingOverrideEntry(ParameterError):
    """The per-environment override table has no entry for an environment.

    This is a maintenance bug in the table, not a user error.
    """

    def __init__(self, env_name: str):
        self.env_name = env_name
        super().__init__(f"No per-environment parameters defined for {env_name!r}")

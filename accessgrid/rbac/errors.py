"""Exceptions raised by the accessgrid RBAC package.

Only definition-time problems raise. Permission queries never do: any
anomaly during a check resolves to a denial.
"""

from typing import Iterable, List


class AccessGridError(Exception):
    """Base class for accessgrid errors."""


class RegistryConfigurationError(AccessGridError, ValueError):
    """The permission registry declaration is incomplete or malformed.

    Raised once while the registry is being built. The process should not
    serve checks against a registry that failed to build.
    """

    def __init__(self, problems: Iterable[str]):
        self.problems: List[str] = list(problems)
        lines = "\n  - ".join(self.problems)
        super().__init__(
            f"Invalid permission registry ({len(self.problems)} problem(s)):\n  - {lines}"
        )


class InvalidPermissionError(AccessGridError, ValueError):
    """A permission string or (resource, action) pairing does not exist."""

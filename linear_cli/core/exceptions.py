"""Exceptions raised by linear-cli.

Every failure the CLI reports is a ``LinearCLIError``; the entry point prints
the message to stderr and exits with ``exit_code``.
"""

import json
from typing import Any, Dict, List, Optional


class LinearCLIError(Exception):
    """Base exception for linear-cli errors."""

    exit_code = 1


class ConfigurationError(LinearCLIError):
    """Required configuration (e.g. the API key) is missing or invalid."""


class UsageError(LinearCLIError):
    """Command arguments are missing or inconsistent."""


class InvalidIdentifierError(UsageError):
    """Issue identifier does not look like TEAM-123."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            f'Invalid identifier format: "{identifier}". Expected format: TEAM-123'
        )


class NotFoundError(LinearCLIError):
    """A name lookup (team, project, user, label, issue, state) matched nothing."""

    def __init__(
        self, resource: str, name: str, available: Optional[List[str]] = None
    ):
        self.resource = resource
        self.name = name
        self.available = available
        message = f'{resource} "{name}" not found.'
        if available is not None:
            message += f" Available: {', '.join(available)}"
        super().__init__(message)


class LinearAPIError(LinearCLIError):
    """The remote API could not be reached or returned an unusable response."""


class APIConnectionError(LinearAPIError):
    """Network error or timeout talking to the API."""


class APIHTTPError(LinearAPIError):
    """Non-2xx HTTP status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP {status_code}: {reason}".rstrip(": "))


class GraphQLResponseError(LinearAPIError):
    """The response carried a non-empty ``errors`` array."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        super().__init__(
            "GraphQL errors: " + json.dumps(errors, indent=2, ensure_ascii=False)
        )

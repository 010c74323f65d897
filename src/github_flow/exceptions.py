"""Custom exception hierarchy for github-flow.

All exceptions that cross layer boundaries must inherit from
:class:`GithubFlowError`.  Raw ``httpx`` exceptions must NEVER propagate
beyond the infrastructure layer — they are caught there and re-raised
as :class:`RemoteServiceError`.

Hierarchy
---------
GithubFlowError
├── ValidationError
├── RemoteServiceError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class GithubFlowError(Exception):
    """Base exception for all github-flow errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Argument resolution ---------------------------------------------------

class ValidationError(GithubFlowError):
    """Raised when a required parameter is missing or fails validation."""


# --- Remote service --------------------------------------------------------

class RemoteServiceError(GithubFlowError):
    """Raised when a call to the hosting service fails.

    The message is the one reported by the service (or the transport),
    carried unchanged up to the presenter.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int | None = status_code
        """HTTP status code, or ``None`` for transport-level failures."""


# --- Environment / configuration -------------------------------------------

class ConfigurationError(GithubFlowError):
    """Raised when process configuration cannot be loaded."""


class EnvironmentError(GithubFlowError):
    """Raised when a required runtime dependency is not available."""

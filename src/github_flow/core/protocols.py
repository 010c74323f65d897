"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and CLI adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations — so a mock service can replace the real transport
without touching the resolver or executor.
"""

from __future__ import annotations

from typing import Any, Protocol

from github_flow.core.models import PromptRequest, Repository, User


class RepositoryService(Protocol):
    """Contract for the remote repository-hosting service.

    Any object implementing these methods satisfies the protocol
    structurally (no explicit inheritance required).  Every method may
    raise :class:`~github_flow.exceptions.RemoteServiceError` carrying a
    human-readable message.
    """

    def create_repository(
        self,
        name: str,
        *,
        description: str | None = None,
        private: bool = False,
        auto_init: bool = True,
        gitignore_template: str | None = None,
        license_template: str | None = None,
    ) -> Repository:
        """Create a repository owned by the authenticated user."""
        ...  # pragma: no cover

    def list_repositories(
        self,
        *,
        sort: str | None = None,
        direction: str | None = None,
    ) -> list[Repository]:
        """List every repository visible to the authenticated user."""
        ...  # pragma: no cover

    def get_repository(self, owner: str, repo: str) -> Repository:
        ...  # pragma: no cover

    def update_repository(self, owner: str, repo: str, **fields: Any) -> Repository:
        ...  # pragma: no cover

    def delete_repository(self, owner: str, repo: str) -> None:
        ...  # pragma: no cover

    def get_user(self, username: str | None = None) -> User:
        ...  # pragma: no cover

    def get_authenticated_user(self) -> User:
        ...  # pragma: no cover


class PromptProvider(Protocol):
    """Contract for interactive prompt backends."""

    def prompt(self, request: PromptRequest) -> Any:
        """Block until the user answers *request* and return the value.

        Validator failures are handled inside the provider by asking
        again.  Returns ``None`` when the user abstains (Ctrl+C / Esc).
        """
        ...  # pragma: no cover

"""Command executor — one resolved command, one remote call.

The executor maps each command to the single service operation that
defines it and wraps the outcome in a :class:`CommandResult`.  It never
branches beyond that table, never retries, and makes no call at all for
a halted resolution.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from github_flow.core.commands import get_command
from github_flow.core.models import CommandResult, Repository, Resolution, ResolutionState
from github_flow.core.protocols import RepositoryService
from github_flow.exceptions import RemoteServiceError, ValidationError

logger = logging.getLogger(__name__)

Params = Mapping[str, Any]


def truncate(repositories: list[Repository], limit: int | None) -> list[Repository]:
    """Keep the first *limit* entries in the order returned.

    ``None`` keeps everything; ``limit <= 0`` keeps nothing.
    """
    if limit is None:
        return repositories
    return repositories[: max(limit, 0)]


class CommandExecutor:
    """Run the defining operation of a fully resolved command.

    Parameters
    ----------
    service:
        Any object satisfying the :class:`RepositoryService` protocol.
    """

    def __init__(self, service: RepositoryService) -> None:
        self._service: RepositoryService = service
        self._operations: dict[str, Callable[[Params], Any]] = {
            "create_repository": self._create,
            "list_repositories": self._list,
            "get_repository": self._get,
            "delete_repository": self._delete,
            "get_authenticated_user": self._user,
        }

    def execute(self, resolution: Resolution) -> CommandResult:
        """Invoke the command's remote operation and report the outcome.

        Raises
        ------
        ValidationError
            If *resolution* is incomplete.  Nothing is sent in that case.
        """
        if resolution.halted:
            return CommandResult.halted(resolution.command, resolution.reason)

        spec = get_command(resolution.command)
        if resolution.state is not ResolutionState.READY:
            raise ValidationError(f"'{spec.name}' has not been fully resolved.")
        missing = [name for name in spec.required if resolution.params.get(name) in (None, "")]
        if missing:
            raise ValidationError(
                f"Missing required argument(s) for '{spec.name}': {', '.join(missing)}",
            )

        params = dict(resolution.params)
        operation = self._operations[spec.operation]
        logger.debug("%s: calling %s", spec.name, spec.operation)
        try:
            payload = operation(params)
        except RemoteServiceError as exc:
            logger.debug("%s: %s failed (%s)", spec.name, spec.operation, exc.status_code)
            return CommandResult.failure(spec.name, "remote", str(exc), params, hint=exc.hint)
        return CommandResult.success(spec.name, payload, params)

    # ------------------------------------------------------------------
    # Operation table
    # ------------------------------------------------------------------

    def _create(self, params: Params) -> Repository:
        return self._service.create_repository(
            params["name"],
            description=params.get("description"),
            private=bool(params.get("private")),
            auto_init=bool(params.get("auto_init")),
            gitignore_template=params.get("gitignore_template"),
            license_template=params.get("license_template"),
        )

    def _list(self, params: Params) -> list[Repository]:
        repositories = self._service.list_repositories(
            sort=params.get("sort"),
            direction=params.get("direction"),
        )
        return truncate(list(repositories), params.get("limit"))

    def _get(self, params: Params) -> Repository:
        return self._service.get_repository(params["owner"], params["repo"])

    def _delete(self, params: Params) -> None:
        self._service.delete_repository(params["owner"], params["repo"])

    def _user(self, params: Params) -> Any:
        return self._service.get_authenticated_user()

"""Command resolver — turns raw CLI options into resolved parameters.

For one invocation the resolver walks the command's parameters in
declared order, taking each value from the first source that yields
one (explicit argument, interactive prompt, remote lookup, default).
A blank explicit argument counts as absent when the parameter can still
be prompted for or looked up.  A parameter is never resolved before the
one it depends on.

Two outcomes are possible:

* ``READY`` — every required parameter has a valid value.
* ``HALTED`` — the user declined or abstained, or a lookup found
  nothing to choose from.  This is a normal exit path, not an error.

Validation failures raise :class:`~github_flow.exceptions.ValidationError`
and remote failures during a lookup propagate unchanged; neither is
swallowed here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from github_flow.core.commands import get_command
from github_flow.core.models import (
    CommandSpec,
    ParameterSpec,
    PromptChoice,
    PromptKind,
    PromptRequest,
    Resolution,
    ResolutionState,
    Source,
    User,
    visibility_label,
)
from github_flow.core.protocols import PromptProvider, RepositoryService
from github_flow.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class _Halt(Exception):
    """Internal short-circuit out of the resolution pass."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(slots=True)
class _Invocation:
    """State scoped to a single :meth:`CommandResolver.resolve` call."""

    spec: CommandSpec
    options: Mapping[str, Any]
    resolution: Resolution
    authenticated_user: User | None = None


class CommandResolver:
    """Resolve the parameters of one command at a time.

    Parameters
    ----------
    service:
        Any object satisfying :class:`RepositoryService`, used for
        derived lookups.
    prompter:
        Any object satisfying :class:`PromptProvider`.
    """

    ABSTAINED: str = "Aborted by user."
    NO_REPOSITORIES: str = "No repositories found."

    def __init__(self, service: RepositoryService, prompter: PromptProvider) -> None:
        self._service: RepositoryService = service
        self._prompter: PromptProvider = prompter
        self._lookups: dict[str, Callable[[_Invocation], Any]] = {
            "authenticated_owner": self._lookup_authenticated_owner,
            "repository_choice": self._lookup_repository_choice,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        command: CommandSpec | str,
        options: Mapping[str, Any] | None = None,
    ) -> Resolution:
        """Resolve every parameter of *command* from *options*.

        Raises
        ------
        ValidationError
            If a required parameter cannot be resolved or a value fails
            its validator.
        RemoteServiceError
            If a lookup against the remote service fails.
        """
        spec = get_command(command) if isinstance(command, str) else command
        invocation = _Invocation(
            spec=spec,
            options=options or {},
            resolution=Resolution(command=spec.name),
        )
        resolution = invocation.resolution

        try:
            for param in spec.parameters:
                value = self._resolve_parameter(param, invocation)
                self._validate(spec, param, value)
                resolution.params[param.name] = value
                resolution.steps.append(param.name)
                logger.debug("%s: resolved %s", spec.name, param.name)
            self._confirm(invocation)
        except _Halt as halt:
            logger.debug("%s: halted (%s)", spec.name, halt.reason)
            return resolution.halt(halt.reason)

        resolution.state = ResolutionState.READY
        return resolution

    # ------------------------------------------------------------------
    # Per-parameter resolution
    # ------------------------------------------------------------------

    def _resolve_parameter(self, param: ParameterSpec, invocation: _Invocation) -> Any:
        # CommandSpec guarantees depends_on names an earlier parameter.
        interactive = {Source.PROMPT, Source.LOOKUP}.intersection(param.sources)
        for source in param.sources:
            if source is Source.ARGUMENT:
                value = invocation.options.get(param.name)
                if value is None or (interactive and _is_blank(value)):
                    continue
                return self._convert(param, value)
            if source is Source.PROMPT:
                request = param.prompt.with_message(**invocation.resolution.params)
                return self._ask(request)
            if source is Source.LOOKUP:
                return self._lookups[param.lookup](invocation)
            if source is Source.DEFAULT:
                return param.default
        return None

    @staticmethod
    def _convert(param: ParameterSpec, value: Any) -> Any:
        if param.convert is None:
            return value
        try:
            return param.convert(value)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Invalid value for '{param.name}': {value!r}",
                hint="Expected a whole number." if param.convert is int else None,
            ) from None

    @staticmethod
    def _validate(spec: CommandSpec, param: ParameterSpec, value: Any) -> None:
        if param.required and _is_blank(value):
            raise ValidationError(
                f"Missing required argument '{param.name}' for '{spec.name}'.",
                hint=f"Run 'github-flow {spec.name} --help' for usage.",
            )
        if value is None:
            return
        if param.validator is not None and not param.validator(value):
            raise ValidationError(f"Invalid value for '{param.name}': {value!r}")

    def _ask(self, request: PromptRequest, *, abstained: str | None = None) -> Any:
        answer = self._prompter.prompt(request)
        if answer is None:
            raise _Halt(abstained or self.ABSTAINED)
        return answer

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _lookup_authenticated_owner(self, invocation: _Invocation) -> str:
        """Owner defaults to the authenticated account; fetched once."""
        if invocation.authenticated_user is None:
            logger.debug("Looking up the authenticated user")
            invocation.authenticated_user = self._service.get_authenticated_user()
        return invocation.authenticated_user.login

    def _lookup_repository_choice(self, invocation: _Invocation) -> str:
        """Let the user pick one of their repositories."""
        logger.debug("Listing repositories for selection")
        repositories = self._service.list_repositories()
        if not repositories:
            raise _Halt(self.NO_REPOSITORIES)

        owner = invocation.resolution.params.get("owner")
        message = f"Select a repository to {invocation.spec.name}"
        if owner:
            message += f" ({owner})"
        request = PromptRequest(
            kind=PromptKind.SELECT,
            message=f"{message}:",
            choices=tuple(
                PromptChoice(
                    label=f"{repo.name} ({visibility_label(repo.private)})",
                    value=repo.name,
                )
                for repo in repositories
            ),
        )
        return self._ask(request)

    # ------------------------------------------------------------------
    # Confirmation gate
    # ------------------------------------------------------------------

    def _confirm(self, invocation: _Invocation) -> None:
        spec = invocation.spec
        if spec.confirmation is None:
            return
        params = invocation.resolution.params
        if spec.skip_confirmation_flag and params.get(spec.skip_confirmation_flag):
            logger.debug("%s: confirmation skipped", spec.name)
            invocation.resolution.steps.append("confirmed")
            return

        request = PromptRequest(
            kind=PromptKind.CONFIRM,
            message=spec.confirmation.format(**params),
            default=False,
        )
        if not self._ask(request, abstained=spec.cancel_message):
            raise _Halt(spec.cancel_message)
        invocation.resolution.steps.append("confirmed")

"""Domain models for github-flow.

Entities returned by the hosting service and the descriptors that drive
argument resolution are **frozen** dataclasses.  The only mutable object
is :class:`Resolution`, which is built incrementally by the resolver and
owned by a single command invocation.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Remote entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Repository:
    """A repository as reported by the hosting service."""

    name: str
    full_name: str
    owner: str
    """Login of the owning account."""

    private: bool
    html_url: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class User:
    """A GitHub account."""

    login: str
    name: str | None = None
    email: str | None = None
    bio: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: datetime | None = None


def visibility_label(private: bool) -> str:
    return "Private" if private else "Public"


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

class PromptKind(Enum):
    TEXT = "text"
    CONFIRM = "confirm"
    SELECT = "select"


@dataclass(frozen=True, slots=True)
class PromptChoice:
    label: str
    value: Any


@dataclass(frozen=True, slots=True)
class PromptRequest:
    """Everything a prompt provider needs to ask one question.

    The provider owns re-prompting: when *validator* rejects an answer,
    *error_message* is shown and the question is asked again.
    """

    kind: PromptKind
    message: str
    validator: Callable[[str], bool] | None = None
    error_message: str = "Invalid value"
    default: Any = None
    choices: tuple[PromptChoice, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is PromptKind.SELECT and not self.choices:
            raise ValueError("A select prompt needs at least one choice.")

    def with_message(self, **values: Any) -> PromptRequest:
        """Return a copy whose message is formatted with *values*."""
        return replace(self, message=self.message.format(**values))


# ---------------------------------------------------------------------------
# Command descriptors
# ---------------------------------------------------------------------------

class Source(Enum):
    """Where a parameter value may come from, tried in declared order."""

    ARGUMENT = "argument"
    PROMPT = "prompt"
    LOOKUP = "lookup"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    name: str
    sources: tuple[Source, ...] = (Source.ARGUMENT, Source.DEFAULT)
    required: bool = False
    default: Any = None
    validator: Callable[[Any], bool] | None = None
    convert: Callable[[Any], Any] | None = None
    """Applied to an explicit argument before validation, e.g. ``int``."""

    depends_on: str | None = None
    prompt: PromptRequest | None = None
    """Prompt template used by :attr:`Source.PROMPT`."""

    lookup: str | None = None
    """Name of the resolver lookup used by :attr:`Source.LOOKUP`."""

    def __post_init__(self) -> None:
        if Source.PROMPT in self.sources and self.prompt is None:
            raise ValueError(f"Parameter {self.name!r} prompts but has no prompt.")
        if Source.LOOKUP in self.sources and self.lookup is None:
            raise ValueError(f"Parameter {self.name!r} looks up but has no lookup.")


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Immutable descriptor of one command.

    Parameters are resolved in declared order, so a parameter may only
    depend on one declared before it.
    """

    name: str
    parameters: tuple[ParameterSpec, ...]
    operation: str
    """Name of the single remote operation the command invokes."""

    confirmation: str | None = None
    """Confirmation message template, formatted with resolved values."""

    skip_confirmation_flag: str | None = None
    cancel_message: str = "Cancelled."
    """Halt reason when the confirmation is declined."""

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for param in self.parameters:
            if param.depends_on is not None and param.depends_on not in seen:
                raise ValueError(
                    f"{self.name}: {param.name!r} depends on {param.depends_on!r}, "
                    "which is not declared before it.",
                )
            seen.add(param.name)

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.parameters if p.required)


# ---------------------------------------------------------------------------
# Resolution and results
# ---------------------------------------------------------------------------

class ResolutionState(Enum):
    RESOLVING = "resolving"
    READY = "ready"
    HALTED = "halted"


@dataclass(slots=True)
class Resolution:
    """Resolved parameters for one invocation, plus how resolution ended."""

    command: str
    params: dict[str, Any] = field(default_factory=dict)
    state: ResolutionState = ResolutionState.RESOLVING
    reason: str | None = None
    steps: list[str] = field(default_factory=list)

    @property
    def halted(self) -> bool:
        return self.state is ResolutionState.HALTED

    def halt(self, reason: str) -> Resolution:
        self.state = ResolutionState.HALTED
        self.reason = reason
        return self


class ResultStatus(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    HALTED = "halted"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one command, handed once from executor to presenter."""

    command: str
    status: ResultStatus
    payload: Any = None
    error_kind: str | None = None
    message: str | None = None
    hint: str | None = None
    params: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def success(
        cls, command: str, payload: Any, params: Mapping[str, Any] | None = None,
    ) -> CommandResult:
        return cls(command, ResultStatus.SUCCESS, payload=payload, params=params or {})

    @classmethod
    def failure(
        cls,
        command: str,
        kind: str,
        message: str,
        params: Mapping[str, Any] | None = None,
        *,
        hint: str | None = None,
    ) -> CommandResult:
        return cls(
            command,
            ResultStatus.FAILURE,
            error_kind=kind,
            message=message,
            hint=hint,
            params=params or {},
        )

    @classmethod
    def halted(cls, command: str, reason: str | None) -> CommandResult:
        return cls(command, ResultStatus.HALTED, message=reason)

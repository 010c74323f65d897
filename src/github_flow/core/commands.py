"""Static command table.

One :class:`CommandSpec` per CLI sub-command, built at import time and
never mutated.  Parameter order is resolution order.
"""

from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType

from github_flow.core.models import (
    CommandSpec,
    ParameterSpec,
    PromptKind,
    PromptRequest,
    Source,
)


def is_non_empty(value: object) -> bool:
    """Validator: a string with at least one non-whitespace character."""
    return isinstance(value, str) and value.strip() != ""


def one_of(*allowed: str) -> Callable[[object], bool]:
    """Validator factory: the value must be one of *allowed*."""
    return lambda value: value in allowed


NAME_PROMPT = PromptRequest(
    kind=PromptKind.TEXT,
    message="Repository name:",
    validator=is_non_empty,
    error_message="The repository name is required",
)

CONFIRM_DELETE = (
    "Are you sure you want to delete {owner}/{repo}? "
    "This action is irreversible."
)

SORT_FIELDS: tuple[str, ...] = ("created", "updated", "pushed", "full_name")
SORT_DIRECTIONS: tuple[str, ...] = ("asc", "desc")


CREATE = CommandSpec(
    name="create",
    operation="create_repository",
    parameters=(
        ParameterSpec(
            "name",
            sources=(Source.ARGUMENT, Source.PROMPT),
            required=True,
            validator=is_non_empty,
            prompt=NAME_PROMPT,
        ),
        ParameterSpec("description"),
        ParameterSpec("private", default=False),
        ParameterSpec("auto_init", default=True),
        ParameterSpec("gitignore_template"),
        ParameterSpec("license_template"),
    ),
)

LIST = CommandSpec(
    name="list",
    operation="list_repositories",
    parameters=(
        ParameterSpec("sort", default="full_name", validator=one_of(*SORT_FIELDS)),
        ParameterSpec("direction", default="asc", validator=one_of(*SORT_DIRECTIONS)),
        ParameterSpec("limit", convert=int),
    ),
)

GET = CommandSpec(
    name="get",
    operation="get_repository",
    parameters=(
        ParameterSpec("owner", sources=(Source.ARGUMENT,), required=True, validator=is_non_empty),
        ParameterSpec("repo", sources=(Source.ARGUMENT,), required=True, validator=is_non_empty),
    ),
)

DELETE = CommandSpec(
    name="delete",
    operation="delete_repository",
    parameters=(
        ParameterSpec(
            "owner",
            sources=(Source.ARGUMENT, Source.LOOKUP),
            required=True,
            lookup="authenticated_owner",
        ),
        ParameterSpec(
            "repo",
            sources=(Source.ARGUMENT, Source.LOOKUP),
            required=True,
            depends_on="owner",
            lookup="repository_choice",
        ),
        ParameterSpec("force", default=False),
    ),
    confirmation=CONFIRM_DELETE,
    skip_confirmation_flag="force",
    cancel_message="Deletion cancelled.",
)

USER = CommandSpec(name="user", operation="get_authenticated_user", parameters=())


COMMANDS: MappingProxyType[str, CommandSpec] = MappingProxyType(
    {spec.name: spec for spec in (CREATE, LIST, GET, DELETE, USER)},
)


def get_command(name: str) -> CommandSpec:
    try:
        return COMMANDS[name]
    except KeyError:
        raise KeyError(f"Unknown command: {name}") from None

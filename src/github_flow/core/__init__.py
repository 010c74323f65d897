"""Core layer — command resolution and execution.

Rules
-----
* No ``print()`` calls.
* No direct network or terminal I/O; the service and prompt provider
  are injected.
* No imports from ``cli`` or ``infra``.
"""

from github_flow.core.commands import COMMANDS, get_command
from github_flow.core.executor import CommandExecutor
from github_flow.core.models import (
    CommandResult,
    CommandSpec,
    ParameterSpec,
    PromptRequest,
    Repository,
    Resolution,
    User,
)
from github_flow.core.protocols import PromptProvider, RepositoryService
from github_flow.core.resolver import CommandResolver

__all__: list[str] = [
    "COMMANDS",
    "CommandExecutor",
    "CommandResolver",
    "CommandResult",
    "CommandSpec",
    "ParameterSpec",
    "PromptProvider",
    "PromptRequest",
    "Repository",
    "RepositoryService",
    "Resolution",
    "User",
    "get_command",
]

"""Rendering of command results for the terminal.

Each successful command has one renderer that prints its payload field
by field.  Failures and halts are rendered generically.  The exit code
is decided here and nowhere else in the result path.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from github_flow.cli import exit_codes
from github_flow.cli.console import console, escape, out
from github_flow.core.models import (
    CommandResult,
    Repository,
    ResultStatus,
    User,
    visibility_label,
)

NO_DESCRIPTION = "No description"
NOT_SPECIFIED = "Not specified"


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def format_timestamp(value: datetime | None) -> str:
    """Render an aware timestamp in local time, or ``"Unknown"``."""
    if value is None:
        return "Unknown"
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def or_default(value: object, fallback: str = NOT_SPECIFIED) -> str:
    if value is None or value == "":
        return fallback
    return escape(str(value))


def _field(label: str, value: object, *, indent: str = "") -> None:
    out.print(f"{indent}[bold]{label}:[/bold] {value}")


# ---------------------------------------------------------------------------
# Per-command renderers
# ---------------------------------------------------------------------------

def _render_created(repository: Repository) -> None:
    console.print("[green]✓ Repository created.[/green]")
    _field("Name", escape(repository.name))
    _field("Visibility", visibility_label(repository.private))
    _field("URL", repository.html_url)
    _field("Description", or_default(repository.description, NO_DESCRIPTION))
    _field("Created", format_timestamp(repository.created_at))


def _render_list(repositories: Sequence[Repository]) -> None:
    console.print(f"[green]✓ {len(repositories)} repositories found.[/green]")
    for index, repository in enumerate(repositories, start=1):
        out.print(f"\n[bold]{index}. {escape(repository.name)}[/bold]")
        _field("Visibility", visibility_label(repository.private), indent="   ")
        _field("URL", repository.html_url, indent="   ")
        _field(
            "Description",
            or_default(repository.description, NO_DESCRIPTION),
            indent="   ",
        )
        _field("Last updated", format_timestamp(repository.updated_at), indent="   ")


def _render_repository(repository: Repository) -> None:
    console.print("[green]✓ Repository found.[/green]")
    _field("Name", escape(repository.name))
    _field("Owner", escape(repository.owner))
    _field("Visibility", visibility_label(repository.private))
    _field("URL", repository.html_url)
    _field("Description", or_default(repository.description, NO_DESCRIPTION))
    _field("Primary language", or_default(repository.language))
    _field("Stars", repository.stargazers_count)
    _field("Forks", repository.forks_count)
    _field("Open issues", repository.open_issues_count)
    _field("Created", format_timestamp(repository.created_at))
    _field("Last updated", format_timestamp(repository.updated_at))


def _render_user(user: User) -> None:
    console.print("[green]✓ User information:[/green]")
    _field("Username", escape(user.login))
    _field("Name", or_default(user.name))
    _field("Email", or_default(user.email))
    _field("Bio", or_default(user.bio))
    _field("Public repositories", user.public_repos)
    _field("Followers", user.followers)
    _field("Following", user.following)
    _field("Created", format_timestamp(user.created_at))


_RENDERERS: dict[str, Callable[[CommandResult], None]] = {
    "create": lambda result: _render_created(result.payload),
    "list": lambda result: _render_list(result.payload),
    "get": lambda result: _render_repository(result.payload),
    "delete": lambda result: console.print(
        f"[green]✓ Repository {escape(result.params['owner'])}/"
        f"{escape(result.params['repo'])} deleted.[/green]",
    ),
    "user": lambda result: _render_user(result.payload),
}


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def render(result: CommandResult) -> int:
    """Print *result* and return the process exit code."""
    if result.status is ResultStatus.HALTED:
        console.print(f"[yellow]{escape(result.message or 'Nothing to do.')}[/yellow]")
        return exit_codes.SUCCESS

    if result.status is ResultStatus.FAILURE:
        console.print(f"[bold red]Error:[/bold red] {escape(result.message or '')}")
        if result.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(result.hint)}")
        return exit_codes.GENERAL_ERROR

    _RENDERERS[result.command](result)
    return exit_codes.SUCCESS

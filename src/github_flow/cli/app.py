"""CLI application entry point and command routing for github-flow.

This module is the **sole error boundary** for the entire application.
It catches :class:`~github_flow.exceptions.GithubFlowError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — resolution and execution are
  delegated to the core layer, HTTP to the infrastructure layer.
* Configuration is read exactly once, here, and handed to the client.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from github_flow.cli import exit_codes
from github_flow.cli.console import console, escape
from github_flow.core.commands import SORT_DIRECTIONS, SORT_FIELDS
from github_flow.exceptions import GithubFlowError
from github_flow.version import __version__

PROGRESS_MESSAGES: dict[str, str] = {
    "create": "Creating repository…",
    "list": "Fetching repositories…",
    "get": "Fetching repository {owner}/{repo}…",
    "delete": "Deleting repository {owner}/{repo}…",
    "user": "Fetching user information…",
}

_GLOBAL_OPTIONS: frozenset[str] = frozenset({"command", "verbose"})


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser with one sub-command each
    for ``create``, ``list``, ``get``, ``delete`` and ``user``.

    Positionals of ``get`` are declared optional on purpose: a missing
    owner or repository is reported by the resolver as a validation
    error (exit 1) instead of an argparse usage error.  For the same
    reason ``list`` options are taken as plain strings and converted and
    checked by the resolver.
    """
    parser = argparse.ArgumentParser(
        prog="github-flow",
        description="Create, list, inspect and delete GitHub repositories.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution steps and HTTP calls to stderr.",
    )
    sub = parser.add_subparsers(dest="command", metavar="<command>")

    create = sub.add_parser("create", help="Create a new repository.")
    create.add_argument("-n", "--name", help="Repository name (prompted when omitted).")
    create.add_argument("-d", "--description", help="Repository description.")
    create.add_argument("-p", "--private", action="store_true", help="Make the repository private.")
    create.add_argument(
        "-i",
        "--init",
        dest="auto_init",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Initialise with a README (default: on).",
    )
    create.add_argument("-g", "--gitignore", dest="gitignore_template", help=".gitignore template.")
    create.add_argument("-l", "--license", dest="license_template", help="License template.")

    list_ = sub.add_parser("list", help="List your repositories.")
    list_.add_argument("-l", "--limit", help="Show at most this many repositories.")
    list_.add_argument(
        "-s",
        "--sort",
        default="full_name",
        help=f"Sort field: {', '.join(SORT_FIELDS)} (default: full_name).",
    )
    list_.add_argument(
        "-d",
        "--direction",
        default="asc",
        help=f"Sort direction: {', '.join(SORT_DIRECTIONS)} (default: asc).",
    )

    get = sub.add_parser("get", help="Show details of a repository.")
    get.add_argument("owner", nargs="?", help="Repository owner.")
    get.add_argument("repo", nargs="?", help="Repository name.")

    delete = sub.add_parser("delete", help="Delete a repository.")
    delete.add_argument("owner", nargs="?", help="Owner (defaults to the authenticated user).")
    delete.add_argument("repo", nargs="?", help="Repository name (chosen interactively when omitted).")
    delete.add_argument("-f", "--force", action="store_true", help="Skip the confirmation prompt.")

    sub.add_parser("user", help="Show the authenticated user.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # httpcore is very chatty at DEBUG.
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Collaborator factories (patched in tests)
# ---------------------------------------------------------------------------

def _build_service() -> Any:
    """Read configuration once and build the GitHub client."""
    from github_flow.config import load_settings
    from github_flow.infra.github_client import GitHubClient

    return GitHubClient(load_settings())


def _build_prompter() -> Any:
    from github_flow.cli.prompts import QuestionaryPromptProvider

    return QuestionaryPromptProvider()


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_command(command: str, options: dict[str, Any]) -> int:
    """Resolve, execute and render one command.

    Flow:
    1. Build the remote service and the prompt provider.
    2. Resolve missing parameters (prompts, lookups, confirmation).
    3. Run the single defining remote call, unless resolution halted.
    4. Render the result and map it to an exit code.
    """
    from github_flow.cli.presenter import render
    from github_flow.core.executor import CommandExecutor
    from github_flow.core.resolver import CommandResolver

    with _build_service() as service:
        resolver = CommandResolver(service, _build_prompter())
        resolution = resolver.resolve(command, options)

        if not resolution.halted:
            message = PROGRESS_MESSAGES[command].format(
                **{key: escape(str(value)) for key, value in resolution.params.items()},
            )
            console.print(f"[blue]{message}[/blue]")

        result = CommandExecutor(service).execute(resolution)
    return render(result)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the github-flow CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    _configure_logging(args.verbose)
    options = {
        key: value for key, value in vars(args).items() if key not in _GLOBAL_OPTIONS
    }
    return _handle_command(args.command, options)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except GithubFlowError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

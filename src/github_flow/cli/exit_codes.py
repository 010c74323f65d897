"""Exit codes of the github-flow process.

:func:`github_flow.cli.presenter.render` picks ``SUCCESS`` or
``GENERAL_ERROR`` for a command that ran to completion or halted;
:func:`github_flow.cli.app.cli` maps everything that escapes ``main``.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed, or the user declined / there was nothing to do."""

GENERAL_ERROR: int = 1
"""A validation or remote failure was reported to the user."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

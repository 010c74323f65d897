"""CLI console helpers with optional Rich support.

This module avoids module-level imports of optional UI dependencies so
bootstrap paths (``--help``, ``--version``) remain functional even when
Rich is not installed.

Two proxies are exposed: :data:`console` writes status and errors to
stderr, :data:`out` writes command results to stdout.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from github_flow.exceptions import EnvironmentError

# Same tag grammar Rich uses; an odd run of backslashes escapes the tag.
_TAG = re.compile(r"(\\*)\[([a-z#/@][^[]*?)]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr, highlight=False)


def escape(text: str) -> str:
	"""Escape user-supplied text so Rich does not read it as markup.

	Without Rich the same escaping rules are applied, so that
	:func:`strip_markup` can undo them for the plain fallback.
	"""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		pass
	else:
		return rich_escape(text)
	escaped = _TAG.sub(lambda m: f"{m.group(1)}{m.group(1)}\\[{m.group(2)}]", text)
	if escaped.endswith("\\") and not escaped.endswith("\\\\"):
		escaped += "\\"
	return escaped


def strip_markup(text: str) -> str:
	"""Drop style tags such as ``[bold red]`` / ``[/]``, keeping escaped ones.

	Used only by the plain-text fallback when Rich is not installed.
	"""

	def _replace(match: re.Match[str]) -> str:
		backslashes, escaped = divmod(len(match.group(1)), 2)
		return "\\" * backslashes + (f"[{match.group(2)}]" if escaped else "")

	return _TAG.sub(_replace, text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with plain-text fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			stream = sys.stderr if self._stderr else sys.stdout
			print(*(strip_markup(o) if isinstance(o, str) else o for o in objects), file=stream)
			return
		rich_console.print(*objects)


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)

"""Interactive prompt provider backed by questionary.

Translates a :class:`~github_flow.core.models.PromptRequest` into the
matching questionary question and returns the answer.  questionary's
``ask()`` returns ``None`` when the user presses Ctrl+C / Esc; that
``None`` is passed back unchanged so the resolver can treat it as an
abstention.
"""

from __future__ import annotations

from typing import Any

from github_flow.core.models import PromptKind, PromptRequest
from github_flow.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def build_validate(request: PromptRequest) -> Any:
    """Adapt a boolean predicate to questionary's ``validate`` contract.

    questionary re-asks while ``validate`` returns anything but ``True``;
    a string return value is shown as the error.
    """
    validator = request.validator
    if validator is None:
        return None

    def validate(text: str) -> bool | str:
        return True if validator(text) else request.error_message

    return validate


class QuestionaryPromptProvider:
    """Concrete :class:`~github_flow.core.protocols.PromptProvider`."""

    def prompt(self, request: PromptRequest) -> Any:
        questionary = _import_questionary()

        if request.kind is PromptKind.TEXT:
            kwargs: dict[str, Any] = {}
            validate = build_validate(request)
            if validate is not None:
                kwargs["validate"] = validate
            if request.default is not None:
                kwargs["default"] = str(request.default)
            return questionary.text(request.message, **kwargs).ask()

        if request.kind is PromptKind.CONFIRM:
            return questionary.confirm(
                request.message,
                default=bool(request.default),
            ).ask()

        choices = [
            questionary.Choice(title=choice.label, value=choice.value)
            for choice in request.choices
        ]
        return questionary.select(
            request.message,
            choices=choices,
            use_arrow_keys=True,
            use_shortcuts=False,
        ).ask()  # Returns None on Ctrl+C / Esc

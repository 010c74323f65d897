"""Tests for CommandResolver (core/resolver.py).

The remote service and the prompt provider are both mocks.  These tests
verify:

* Source priority (argument → prompt → lookup → default)
* The delete chain: owner lookup → repository choice → confirmation
* Halts (empty choice set, declined or abstained prompts)
* Validation failures raised before any remote call
* Remote failures during lookups propagating unchanged
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from conftest import make_repo, make_user
from github_flow.core.models import PromptKind, PromptRequest, ResolutionState
from github_flow.core.resolver import CommandResolver
from github_flow.exceptions import RemoteServiceError, ValidationError


def _requests(prompter: MagicMock) -> list[PromptRequest]:
    return [call.args[0] for call in prompter.prompt.call_args_list]


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------

class TestResolveCreate:
    def test_explicit_name_is_not_prompted(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        resolution = CommandResolver(service, prompter).resolve("create", {"name": "repo-a"})
        assert resolution.state is ResolutionState.READY
        assert resolution.params["name"] == "repo-a"
        prompter.prompt.assert_not_called()

    def test_missing_name_is_prompted(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        prompter.prompt.return_value = "my-repo"
        resolution = CommandResolver(service, prompter).resolve("create", {})

        assert resolution.params["name"] == "my-repo"
        (request,) = _requests(prompter)
        assert request.kind is PromptKind.TEXT
        assert request.validator is not None

    def test_prompt_validator_rejects_blank_answers(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        prompter.prompt.return_value = "my-repo"
        CommandResolver(service, prompter).resolve("create", {})
        (request,) = _requests(prompter)

        assert request.validator is not None
        assert request.validator("") is False
        assert request.validator("   ") is False
        assert request.validator("my-repo") is True

    def test_static_defaults(self, service: MagicMock, prompter: MagicMock) -> None:
        resolution = CommandResolver(service, prompter).resolve("create", {"name": "x"})
        assert resolution.params["private"] is False
        assert resolution.params["auto_init"] is True
        assert resolution.params["description"] is None
        assert resolution.params["gitignore_template"] is None
        assert resolution.params["license_template"] is None

    def test_explicit_options_override_defaults(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        options = {
            "name": "x",
            "private": True,
            "auto_init": False,
            "gitignore_template": "Python",
            "license_template": "mit",
        }
        resolution = CommandResolver(service, prompter).resolve("create", options)
        assert resolution.params["private"] is True
        assert resolution.params["auto_init"] is False
        assert resolution.params["gitignore_template"] == "Python"
        assert resolution.params["license_template"] == "mit"

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_explicit_name_is_prompted(
        self, service: MagicMock, prompter: MagicMock, blank: str,
    ) -> None:
        prompter.prompt.return_value = "my-repo"
        resolution = CommandResolver(service, prompter).resolve("create", {"name": blank})
        assert resolution.params["name"] == "my-repo"
        prompter.prompt.assert_called_once()

    def test_abstained_prompt_halts(self, service: MagicMock, prompter: MagicMock) -> None:
        prompter.prompt.return_value = None
        resolution = CommandResolver(service, prompter).resolve("create", {})
        assert resolution.halted
        assert resolution.reason == CommandResolver.ABSTAINED

    def test_no_remote_calls(self, service: MagicMock, prompter: MagicMock) -> None:
        CommandResolver(service, prompter).resolve("create", {"name": "x"})
        assert service.method_calls == []


# ---------------------------------------------------------------------------
# list / get / user
# ---------------------------------------------------------------------------

class TestResolveList:
    def test_defaults(self, service: MagicMock, prompter: MagicMock) -> None:
        resolution = CommandResolver(service, prompter).resolve("list", {})
        assert resolution.params == {"sort": "full_name", "direction": "asc", "limit": None}

    def test_explicit_values(self, service: MagicMock, prompter: MagicMock) -> None:
        resolution = CommandResolver(service, prompter).resolve(
            "list", {"sort": "updated", "direction": "desc", "limit": 2},
        )
        assert resolution.params == {"sort": "updated", "direction": "desc", "limit": 2}
        prompter.prompt.assert_not_called()

    def test_limit_string_is_converted(self, service: MagicMock, prompter: MagicMock) -> None:
        resolution = CommandResolver(service, prompter).resolve("list", {"limit": "2"})
        assert resolution.params["limit"] == 2

    @pytest.mark.parametrize(
        "options",
        [{"limit": "abc"}, {"limit": "1.5"}, {"sort": "stars"}, {"direction": "up"}, {"sort": ""}],
    )
    def test_invalid_values_fail_validation(
        self, service: MagicMock, prompter: MagicMock, options: dict[str, str],
    ) -> None:
        with pytest.raises(ValidationError, match="Invalid value"):
            CommandResolver(service, prompter).resolve("list", options)


class TestResolveGet:
    def test_both_positionals(self, service: MagicMock, prompter: MagicMock) -> None:
        resolution = CommandResolver(service, prompter).resolve(
            "get", {"owner": "octocat", "repo": "hello-world"},
        )
        assert resolution.state is ResolutionState.READY
        assert resolution.params == {"owner": "octocat", "repo": "hello-world"}

    def test_missing_repo_fails_before_any_remote_call(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        with pytest.raises(ValidationError, match="repo"):
            CommandResolver(service, prompter).resolve("get", {"owner": "octocat", "repo": None})
        assert service.method_calls == []
        prompter.prompt.assert_not_called()

    def test_missing_owner_is_never_looked_up(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        with pytest.raises(ValidationError, match="owner"):
            CommandResolver(service, prompter).resolve("get", {})
        service.get_authenticated_user.assert_not_called()

    def test_blank_owner_is_missing(self, service: MagicMock, prompter: MagicMock) -> None:
        with pytest.raises(ValidationError, match="Missing required argument 'owner'"):
            CommandResolver(service, prompter).resolve("get", {"owner": " ", "repo": "x"})
        service.get_authenticated_user.assert_not_called()

    def test_resolution_is_repeatable(self, service: MagicMock, prompter: MagicMock) -> None:
        resolver = CommandResolver(service, prompter)
        options = {"owner": "octocat", "repo": "hello-world"}
        assert resolver.resolve("get", options).params == resolver.resolve("get", options).params


class TestResolveUser:
    def test_no_parameters(self, service: MagicMock, prompter: MagicMock) -> None:
        resolution = CommandResolver(service, prompter).resolve("user", {})
        assert resolution.state is ResolutionState.READY
        assert resolution.params == {}
        assert service.method_calls == []


# ---------------------------------------------------------------------------
# delete — the chained resolution
# ---------------------------------------------------------------------------

class TestResolveDelete:
    def test_force_with_explicit_args_skips_everything(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        resolution = CommandResolver(service, prompter).resolve(
            "delete", {"owner": "octocat", "repo": "old", "force": True},
        )
        assert resolution.state is ResolutionState.READY
        assert resolution.steps == ["owner", "repo", "force", "confirmed"]
        prompter.prompt.assert_not_called()
        assert service.method_calls == []

    def test_owner_looked_up_once_when_missing(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        service.get_authenticated_user.return_value = make_user(login="me")
        resolution = CommandResolver(service, prompter).resolve(
            "delete", {"repo": "old", "force": True},
        )
        assert resolution.params["owner"] == "me"
        service.get_authenticated_user.assert_called_once_with()
        service.list_repositories.assert_not_called()

    def test_blank_owner_is_looked_up(self, service: MagicMock, prompter: MagicMock) -> None:
        resolution = CommandResolver(service, prompter).resolve(
            "delete", {"owner": "", "repo": "old", "force": True},
        )
        assert resolution.params["owner"] == "octocat"
        service.get_authenticated_user.assert_called_once_with()

    def test_blank_repo_is_chosen_interactively(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        service.list_repositories.return_value = [make_repo(name="alpha")]
        prompter.prompt.side_effect = ["alpha", True]
        resolution = CommandResolver(service, prompter).resolve(
            "delete", {"owner": "octocat", "repo": "  "},
        )
        assert resolution.params["repo"] == "alpha"
        service.list_repositories.assert_called_once_with()

    def test_owner_lookup_failure_aborts(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        service.get_authenticated_user.side_effect = RemoteServiceError(
            "Bad credentials", status_code=401,
        )
        with pytest.raises(RemoteServiceError, match="Bad credentials"):
            CommandResolver(service, prompter).resolve("delete", {})
        service.list_repositories.assert_not_called()
        prompter.prompt.assert_not_called()

    def test_empty_repository_list_halts_without_prompting(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        service.list_repositories.return_value = []
        resolution = CommandResolver(service, prompter).resolve("delete", {})

        assert resolution.halted
        assert resolution.reason == "No repositories found."
        assert resolution.steps == ["owner"]
        prompter.prompt.assert_not_called()

    def test_repository_choice_lists_every_repository(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        service.list_repositories.return_value = [
            make_repo(name="alpha", private=True),
            make_repo(name="beta", private=False),
        ]
        prompter.prompt.side_effect = ["beta", True]
        resolution = CommandResolver(service, prompter).resolve("delete", {})

        service.list_repositories.assert_called_once_with()
        select, confirm = _requests(prompter)
        assert select.kind is PromptKind.SELECT
        assert [c.label for c in select.choices] == ["alpha (Private)", "beta (Public)"]
        assert [c.value for c in select.choices] == ["alpha", "beta"]
        assert "octocat" in select.message

        assert confirm.kind is PromptKind.CONFIRM
        assert confirm.default is False
        assert "octocat/beta" in confirm.message
        assert "irreversible" in confirm.message

        assert resolution.state is ResolutionState.READY
        assert resolution.params["owner"] == "octocat"
        assert resolution.params["repo"] == "beta"
        assert resolution.steps == ["owner", "repo", "force", "confirmed"]

    def test_explicit_owner_still_lists_for_choice(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        service.list_repositories.return_value = [make_repo(name="alpha")]
        prompter.prompt.side_effect = ["alpha", True]
        resolution = CommandResolver(service, prompter).resolve("delete", {"owner": "org"})

        service.get_authenticated_user.assert_not_called()
        assert resolution.params["owner"] == "org"
        assert resolution.params["repo"] == "alpha"

    def test_abstained_choice_halts(self, service: MagicMock, prompter: MagicMock) -> None:
        service.list_repositories.return_value = [make_repo(name="alpha")]
        prompter.prompt.return_value = None
        resolution = CommandResolver(service, prompter).resolve("delete", {})

        assert resolution.halted
        assert prompter.prompt.call_count == 1

    @pytest.mark.parametrize("answer", [False, None])
    def test_declined_confirmation_halts(
        self, service: MagicMock, prompter: MagicMock, answer: bool | None,
    ) -> None:
        prompter.prompt.return_value = answer
        resolution = CommandResolver(service, prompter).resolve(
            "delete", {"owner": "octocat", "repo": "old"},
        )
        assert resolution.halted
        assert resolution.reason == "Deletion cancelled."
        assert "confirmed" not in resolution.steps

    def test_confirmation_asked_even_when_args_explicit(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        prompter.prompt.return_value = True
        resolution = CommandResolver(service, prompter).resolve(
            "delete", {"owner": "octocat", "repo": "old"},
        )
        assert resolution.state is ResolutionState.READY
        (request,) = _requests(prompter)
        assert request.kind is PromptKind.CONFIRM

    def test_each_invocation_looks_up_owner_afresh(
        self, service: MagicMock, prompter: MagicMock,
    ) -> None:
        resolver = CommandResolver(service, prompter)
        resolver.resolve("delete", {"repo": "a", "force": True})
        resolver.resolve("delete", {"repo": "b", "force": True})
        assert service.get_authenticated_user.call_count == 2

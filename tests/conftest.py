"""Shared pytest fixtures and helpers for the github-flow test suite.

Guidelines
----------
* No internet access in any test.
* The GitHub API is mocked with ``httpx.MockTransport`` at the infra
  boundary; everything above it uses a ``MagicMock`` service.
* questionary is mocked at its lazy-import seam.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest

from github_flow.core.models import Repository, User


def make_repo(**overrides: Any) -> Repository:
    defaults: dict[str, Any] = {
        "name": "hello-world",
        "full_name": "octocat/hello-world",
        "owner": "octocat",
        "private": False,
        "html_url": "https://github.com/octocat/hello-world",
        "description": "My first repository",
        "language": "Python",
        "stargazers_count": 3,
        "forks_count": 1,
        "open_issues_count": 0,
        "created_at": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc),
    }
    defaults.update(overrides)
    return Repository(**defaults)


def make_user(**overrides: Any) -> User:
    defaults: dict[str, Any] = {
        "login": "octocat",
        "name": "The Octocat",
        "email": None,
        "bio": None,
        "public_repos": 8,
        "followers": 100,
        "following": 9,
        "created_at": datetime(2011, 1, 25, 18, 44, 36, tzinfo=timezone.utc),
    }
    defaults.update(overrides)
    return User(**defaults)


@pytest.fixture()
def service() -> MagicMock:
    """A mock RepositoryService that also works as a context manager."""
    svc = MagicMock()
    svc.__enter__.return_value = svc
    svc.__exit__.return_value = False
    svc.get_authenticated_user.return_value = make_user()
    svc.list_repositories.return_value = []
    return svc


@pytest.fixture()
def prompter() -> MagicMock:
    """A mock PromptProvider; set ``prompt.side_effect`` per test."""
    return MagicMock()

"""GitHub REST implementation of :class:`~github_flow.core.protocols.RepositoryService`.

This module is the **only** place in the codebase that talks HTTP.
All ``httpx`` exceptions are caught here and re-raised as
:class:`~github_flow.exceptions.RemoteServiceError` — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from github_flow.config import Settings
from github_flow.core.models import Repository, User
from github_flow.exceptions import RemoteServiceError
from github_flow.version import __version__

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"
PAGE_SIZE = 100


# ---------------------------------------------------------------------------
# Raw JSON → domain-model parsers (pure)
# ---------------------------------------------------------------------------

def parse_timestamp(raw: object) -> datetime | None:
    """Parse GitHub's ISO-8601 timestamps (``2024-01-02T03:04:05Z``)."""
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_repository(data: dict[str, Any]) -> Repository:
    owner = data.get("owner") or {}
    return Repository(
        name=str(data.get("name", "")),
        full_name=str(data.get("full_name", "")),
        owner=str(owner.get("login", "")) if isinstance(owner, dict) else "",
        private=bool(data.get("private", False)),
        html_url=str(data.get("html_url", "")),
        description=data.get("description"),
        language=data.get("language"),
        stargazers_count=int(data.get("stargazers_count") or 0),
        forks_count=int(data.get("forks_count") or 0),
        open_issues_count=int(data.get("open_issues_count") or 0),
        created_at=parse_timestamp(data.get("created_at")),
        updated_at=parse_timestamp(data.get("updated_at")),
    )


def parse_user(data: dict[str, Any]) -> User:
    return User(
        login=str(data.get("login", "")),
        name=data.get("name"),
        email=data.get("email"),
        bio=data.get("bio"),
        public_repos=int(data.get("public_repos") or 0),
        followers=int(data.get("followers") or 0),
        following=int(data.get("following") or 0),
        created_at=parse_timestamp(data.get("created_at")),
    )


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class GitHubClient:
    """Concrete :class:`RepositoryService` backed by ``httpx``.

    Usage::

        with GitHubClient(load_settings()) as client:
            repo = client.get_repository("octocat", "hello-world")

    A custom *transport* (e.g. ``httpx.MockTransport``) may be injected
    for testing.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._username: str | None = settings.github_username
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": f"github-flow/{__version__}",
        }
        if settings.github_token is not None:
            token = settings.github_token.get_secret_value()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.Client(
            base_url=settings.github_api_url,
            headers=headers,
            timeout=httpx.Timeout(settings.http_timeout_seconds),
            transport=transport,
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------

    def create_repository(
        self,
        name: str,
        *,
        description: str | None = None,
        private: bool = False,
        auto_init: bool = True,
        gitignore_template: str | None = None,
        license_template: str | None = None,
    ) -> Repository:
        payload = _drop_none(
            {
                "name": name,
                "description": description,
                "private": private,
                "auto_init": auto_init,
                "gitignore_template": gitignore_template,
                "license_template": license_template,
            },
        )
        return parse_repository(self._request("POST", "/user/repos", json=payload).json())

    def list_repositories(
        self,
        *,
        sort: str | None = None,
        direction: str | None = None,
    ) -> list[Repository]:
        """Return every repository of the authenticated user, all pages."""
        params = _drop_none({"sort": sort, "direction": direction, "per_page": PAGE_SIZE})
        repositories: list[Repository] = []
        url: str | None = "/user/repos"
        while url is not None:
            response = self._request("GET", url, params=params)
            repositories.extend(parse_repository(item) for item in response.json())
            # The "next" link already carries the query string.
            next_link = response.links.get("next")
            url = next_link.get("url") if next_link else None
            params = None
        return repositories

    def get_repository(self, owner: str, repo: str) -> Repository:
        return parse_repository(self._request("GET", f"/repos/{owner}/{repo}").json())

    def update_repository(self, owner: str, repo: str, **fields: Any) -> Repository:
        response = self._request("PATCH", f"/repos/{owner}/{repo}", json=_drop_none(fields))
        return parse_repository(response.json())

    def delete_repository(self, owner: str, repo: str) -> None:
        self._request("DELETE", f"/repos/{owner}/{repo}")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, username: str | None = None) -> User:
        """Fetch a public profile; defaults to the configured username."""
        login = username or self._username
        if not login:
            raise RemoteServiceError(
                "No username given.",
                hint="Pass a username or set GITHUB_USERNAME.",
            )
        return parse_user(self._request("GET", f"/users/{login}").json())

    def get_authenticated_user(self) -> User:
        return parse_user(self._request("GET", "/user").json())

    # ------------------------------------------------------------------
    # Transport + exception mapping
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise self._map_status_error(exc) from exc
        except httpx.RequestError as exc:
            raise RemoteServiceError(
                f"Network error: {exc}",
                hint="Check your connection to the GitHub API.",
            ) from exc
        return response

    @staticmethod
    def _map_status_error(exc: httpx.HTTPStatusError) -> RemoteServiceError:
        response = exc.response
        message = response.reason_phrase or f"HTTP {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])

        hint = None
        if response.status_code == 401:
            hint = "Set GITHUB_TOKEN to a valid personal access token."
        elif response.status_code == 403:
            hint = "The token may lack the required scopes (repo, delete_repo)."
        return RemoteServiceError(message, status_code=response.status_code, hint=hint)

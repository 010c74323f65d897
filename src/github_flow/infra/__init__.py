"""Infrastructure layer — external system integration.

This layer wraps all interaction with the GitHub REST API.  Every raw
``httpx`` exception must be caught here and re-raised as a
:class:`~github_flow.exceptions.GithubFlowError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from github_flow.infra.github_client import GitHubClient, parse_repository, parse_user

__all__: list[str] = [
    "GitHubClient",
    "parse_repository",
    "parse_user",
]

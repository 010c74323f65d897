"""github-flow — create, list, inspect and delete GitHub repositories.

A thin command-line orchestration layer over the GitHub REST API with
interactive completion of missing command arguments.
"""

from github_flow.version import __version__

__all__: list[str] = ["__version__"]

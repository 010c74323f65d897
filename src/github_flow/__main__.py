"""Allow ``python -m github_flow`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m github_flow`` behaves identically to the ``github-flow``
console script.
"""

from __future__ import annotations

from github_flow.cli.app import cli

if __name__ == "__main__":
    cli()

"""Command line interface for cutting a release."""

from __future__ import annotations

import argparse
from typing import Any, Dict, Mapping

from .config import build_request, env_defaults
from .exceptions import ReleaseError
from .logging import get_logger, is_debug_enabled, set_level
from .release import ReleaseRunner

LOGGER = get_logger("cli")


def _build_parser(defaults: Mapping[str, str]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Add a CHANGELOG.md entry, commit it and create an annotated version tag",
    )
    parser.add_argument(
        "--message",
        default=defaults.get("message", ""),
        help="Message used for commit and changelog (env: MESSAGE)",
    )
    parser.add_argument(
        "--version",
        default=defaults.get("version", ""),
        help="Version used for commit and changelog, e.g. 1.2.3 (env: VERSION)",
    )
    parser.add_argument(
        "--git-author-name",
        dest="author_name",
        default=defaults.get("author_name", ""),
        help="Author name (env: GIT_AUTHOR_NAME)",
    )
    parser.add_argument(
        "--git-author-email",
        dest="author_email",
        default=defaults.get("author_email", ""),
        help="Author email (env: GIT_AUTHOR_EMAIL)",
    )
    parser.add_argument(
        "--repo",
        default=defaults.get("repo", ""),
        help="Git repository (env: REPO, default: current directory)",
    )
    parser.add_argument(
        "--commit-all",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Also commit other pending tracked changes (default: on)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output including tracebacks on failure",
    )
    return parser


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    """CLI entry point used by ``release-bump`` and ``python -m release_bump``."""

    parser = _build_parser(env_defaults(environ))
    arguments = parser.parse_args(argv)
    if arguments.verbose:
        set_level("DEBUG")

    values: Dict[str, Any] = {
        "message": arguments.message,
        "version": arguments.version,
        "author_name": arguments.author_name,
        "author_email": arguments.author_email,
        "repo": arguments.repo,
        "commit_all": arguments.commit_all,
    }
    try:
        request = build_request(**values)
        ReleaseRunner(request).run()
    except ReleaseError as exc:
        LOGGER.error("%s", exc, exc_info=is_debug_enabled())
        return 1

    LOGGER.info("done")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())

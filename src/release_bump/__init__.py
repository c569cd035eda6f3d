"""Changelog, commit and tag automation for semantic version releases."""

from .changelog import DEFAULT_CHANGELOG, insert_entry
from .config import ReleaseRequest, build_request
from .release import ReleaseResult, ReleaseRunner, run_release
from .version import Version, parse_version

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_CHANGELOG",
    "ReleaseRequest",
    "ReleaseResult",
    "ReleaseRunner",
    "Version",
    "build_request",
    "insert_entry",
    "parse_version",
    "run_release",
]

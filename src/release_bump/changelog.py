"""Changelog text manipulation.

The functions here are pure: reading ``CHANGELOG.md`` (or falling back to
:data:`DEFAULT_CHANGELOG`) and writing the result back is left to the caller.
"""

from __future__ import annotations

import re

from .version import Version

CHANGELOG_FILENAME = "CHANGELOG.md"

DEFAULT_CHANGELOG = """# Changelog

All notable changes to this project will be documented in this file.

Please choose versions by [Semantic Versioning](http://semver.org/).

* MAJOR version when you make incompatible API changes,
* MINOR version when you add functionality in a backwards-compatible manner, and
* PATCH version when you make backwards-compatible bug fixes.

## 1.0.0

- Initial Version
"""

# Smallest prefix up to the newline in front of the first "## " heading.
_SECTION_SPLIT = re.compile(r"^(.*?)(\n##\s.*)$", re.DOTALL)


def default_changelog() -> str:
    """Return the template used when no changelog exists yet."""

    return DEFAULT_CHANGELOG


def has_section_marker(document: str) -> bool:
    """Return ``True`` when :func:`insert_entry` has a split point in ``document``."""

    return _SECTION_SPLIT.match(document) is not None


def render_entry(version: Version, message: str) -> str:
    return f"\n## {version}\n\n- {message}\n"


def insert_entry(document: str, version: Version, message: str) -> str:
    """Insert a section for ``version`` in front of the first ``## `` heading.

    A document without any heading line is returned unchanged. Callers that
    start from :data:`DEFAULT_CHANGELOG` always have a match.
    """

    entry = render_entry(version, message)
    updated, _ = _SECTION_SPLIT.subn(
        lambda match: match.group(1) + entry + match.group(2),
        document,
        count=1,
    )
    return updated


__all__ = [
    "CHANGELOG_FILENAME",
    "DEFAULT_CHANGELOG",
    "default_changelog",
    "has_section_marker",
    "insert_entry",
    "render_entry",
]

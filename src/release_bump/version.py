"""Parsing and formatting of three component semantic versions."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import VersionFormatError

_FORMAT_HINT = "expected version in format 1.2.3"


@dataclass(frozen=True, slots=True)
class Version:
    """A ``MAJOR.MINOR.PATCH`` release identifier."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def tag(self) -> str:
        """Name of the git tag created for this version."""

        return str(self)


def parse_version(text: str) -> Version:
    """Parse ``text`` into a :class:`Version`.

    Exactly three dot separated parts are required and each one must be a
    base-10 integer as understood by :func:`int`. Signs and leading zeros are
    not rejected, so ``"01.2.3"`` parses but does not round trip.
    """

    parts = str(text).split(".")
    if len(parts) != 3:
        raise VersionFormatError(_FORMAT_HINT, fields=("version",))

    numbers = []
    for part in parts:
        try:
            numbers.append(int(part, 10))
        except ValueError as exc:
            raise VersionFormatError(f"{_FORMAT_HINT}: {exc}", fields=("version",)) from exc

    major, minor, patch = numbers
    return Version(major=major, minor=minor, patch=patch)


__all__ = ["Version", "parse_version"]

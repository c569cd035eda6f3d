"""Custom exceptions raised by release-bump."""

from __future__ import annotations

from typing import Sequence


class ReleaseError(RuntimeError):
    """Base error for all release related exceptions."""


class RequestValidationError(ReleaseError):
    """Raised when a release request is missing a required value."""

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class VersionFormatError(RequestValidationError):
    """Raised when a version string is not in ``MAJOR.MINOR.PATCH`` form."""


class PreconditionError(ReleaseError):
    """Raised when the repository is not in a releasable state."""


class DirtyWorkingTreeError(PreconditionError):
    """Raised when the working tree has uncommitted changes."""


class TagExistsError(PreconditionError):
    """Raised when the release tag is already present."""


class ChangelogWriteError(ReleaseError):
    """Raised when the changelog cannot be written back."""


class GitError(ReleaseError):
    """Raised when a version-control operation fails."""


class GitCommandError(GitError):
    """Raised when a ``git`` invocation exits with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(
            f"git command failed ({' '.join(self.command)}) with exit code {returncode}{detail}"
        )

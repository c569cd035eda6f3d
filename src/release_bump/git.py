"""Thin wrapper around the ``git`` executable.

Only the handful of operations needed to cut a release are exposed. Every
call shells out to ``git`` inside the work tree; failures surface as
:class:`~release_bump.exceptions.GitError` subclasses.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from datetime import datetime
from email.utils import format_datetime
from pathlib import Path
from typing import Dict, Mapping, Sequence

from .exceptions import GitCommandError, GitError
from .logging import get_logger

LOGGER = get_logger("git")


@dataclass(frozen=True, slots=True)
class Signature:
    """Identity and timestamp recorded on commits and tags."""

    name: str
    email: str
    when: datetime

    def git_date(self) -> str:
        when = self.when if self.when.tzinfo is not None else self.when.astimezone()
        return format_datetime(when)

    def ident_env(self, prefix: str) -> Dict[str, str]:
        """Environment block understood by git, e.g. ``GIT_AUTHOR_NAME``."""

        return {
            f"GIT_{prefix}_NAME": self.name,
            f"GIT_{prefix}_EMAIL": self.email,
            f"GIT_{prefix}_DATE": self.git_date(),
        }


class GitRepository:
    """A git work tree addressed by its top level directory."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @classmethod
    def open(cls, path: str | Path) -> "GitRepository":
        """Open the repository containing ``path``."""

        candidate = Path(path).expanduser()
        if not candidate.is_dir():
            raise GitError(f"repository path does not exist: {candidate}")
        top_level = _run_git(["rev-parse", "--show-toplevel"], cwd=candidate).stdout.strip()
        LOGGER.debug("opened repository", extra={"repo": top_level})
        return cls(Path(top_level))

    def _git(
        self,
        args: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess:
        return _run_git(args, cwd=self.root, env=env, check=check)

    def is_clean(self) -> bool:
        """Return ``True`` when nothing is staged, modified or untracked."""

        return self._git(["status", "--porcelain"]).stdout.strip() == ""

    def tag_exists(self, name: str) -> bool:
        result = self._git(["rev-parse", "-q", "--verify", f"refs/tags/{name}"], check=False)
        return result.returncode == 0

    def add(self, path: str | Path) -> None:
        self._git(["add", "--", str(path)])

    def commit(
        self,
        message: str,
        author: Signature,
        *,
        include_all: bool = False,
        allow_empty: bool = False,
    ) -> str:
        """Create a commit authored and committed by ``author``; return ``HEAD``.

        ``allow_empty`` records a commit even when nothing changed, so a
        release whose changelog was left untouched still gets its tag.
        """

        args = ["commit", "-m", message]
        if include_all:
            args.insert(1, "-a")
        if allow_empty:
            args.insert(1, "--allow-empty")
        env = {**author.ident_env("AUTHOR"), **author.ident_env("COMMITTER")}
        self._git(args, env=env)
        return self._git(["rev-parse", "HEAD"]).stdout.strip()

    def commit_object(self, ref: str) -> str:
        """Resolve ``ref`` to the full hash of a commit object."""

        return self._git(["rev-parse", "--verify", f"{ref}^{{commit}}"]).stdout.strip()

    def create_tag(self, name: str, target: str, tagger: Signature, message: str) -> None:
        """Create the annotated tag ``name`` pointing at ``target``."""

        self._git(["tag", "-a", name, target, "-m", message], env=tagger.ident_env("COMMITTER"))


def _run_git(
    args: Sequence[str],
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    command = ["git", *args]
    run_env = None
    if env:
        run_env = {**os.environ, **env}
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            env=run_env,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not available") from exc
    if check and result.returncode != 0:
        raise GitCommandError(command, result.returncode, result.stderr)
    return result


__all__ = ["GitRepository", "Signature"]

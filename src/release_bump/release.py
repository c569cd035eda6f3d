"""Release orchestration.

:class:`ReleaseRunner` checks the repository, inserts a changelog entry,
commits it and creates an annotated tag. Every step aborts the run on
failure and nothing is compensated: a changelog that was already written
stays on disk when the commit or tag step fails afterwards.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Generator, Tuple

from .changelog import CHANGELOG_FILENAME, DEFAULT_CHANGELOG, has_section_marker, insert_entry
from .config import ReleaseRequest
from .exceptions import ChangelogWriteError, DirtyWorkingTreeError, GitError, TagExistsError
from .git import GitRepository, Signature
from .logging import get_logger, log_event
from .telemetry import MetricsCollector
from .version import Version, parse_version

LOGGER = get_logger("release")

CHANGELOG_MODE = 0o600


def _now() -> datetime:
    return datetime.now(timezone.utc).astimezone()


@dataclass(slots=True)
class ReleaseResult:
    """Outcome of a successful release run."""

    version: Version
    commit: str
    tag: str
    changelog_path: Path
    used_default_changelog: bool
    timings: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": str(self.version),
            "commit": self.commit,
            "tag": self.tag,
            "changelog_path": str(self.changelog_path),
            "used_default_changelog": self.used_default_changelog,
            "timings_ms": {name: round(value * 1000, 3) for name, value in self.timings.items()},
        }


def read_changelog(path: Path, default: str) -> Tuple[str, bool]:
    """Return the changelog text and whether ``default`` was substituted.

    Line endings are kept as they are on disk. Any read or decode failure
    counts as a missing file.
    """

    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read(), False
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug("changelog not readable, using default: %s", exc, extra={"step": "read_changelog"})
        return default, True


def write_changelog(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` readable and writable by the owner only."""

    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CHANGELOG_MODE)
    with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    os.chmod(path, CHANGELOG_MODE)


@dataclass(slots=True)
class ReleaseRunner:
    """Runs the release steps for a validated :class:`ReleaseRequest`."""

    request: ReleaseRequest
    repository_factory: Callable[[Path], GitRepository] = GitRepository.open
    clock: Callable[[], datetime] = _now
    default_changelog: str = DEFAULT_CHANGELOG
    telemetry: MetricsCollector = field(default_factory=MetricsCollector)

    @contextmanager
    def _step(self, name: str, failure: str | None = None) -> Generator[None, None, None]:
        with self.telemetry.time(name):
            try:
                yield
            except GitError as exc:
                if failure is None:
                    raise
                raise GitError(f"{failure}: {exc}") from exc
        self.telemetry.increment("steps_completed")

    def run(self) -> ReleaseResult:
        version = parse_version(self.request.version)
        tag = version.tag
        LOGGER.info(
            "starting release",
            extra={"version": tag, "repo": str(self.request.repo_path)},
        )

        with self._step("open", "open git directory failed"):
            repository = self.repository_factory(self.request.repo_path)

        with self._step("check_clean", "get worktree status failed"):
            if not repository.is_clean():
                raise DirtyWorkingTreeError("working tree has uncommitted changes")

        with self._step("check_tag", "lookup tag failed"):
            if repository.tag_exists(tag):
                raise TagExistsError(f"tag {tag} already exists")
        LOGGER.debug("tag not found", extra={"version": tag})

        changelog_path = repository.root / CHANGELOG_FILENAME
        with self._step("update_changelog"):
            document, used_default = read_changelog(changelog_path, self.default_changelog)
            if not has_section_marker(document):
                LOGGER.warning(
                    "changelog has no '## ' section, entry not inserted",
                    extra={"step": "update_changelog", "version": tag},
                )
            updated = insert_entry(document, version, self.request.message)
            try:
                write_changelog(changelog_path, updated)
            except OSError as exc:
                raise ChangelogWriteError(f"write {CHANGELOG_FILENAME} failed: {exc}") from exc
        LOGGER.debug("changelog updated", extra={"step": "update_changelog"})

        with self._step("stage", "add file failed"):
            repository.add(CHANGELOG_FILENAME)

        signature = Signature(
            name=self.request.author_name,
            email=self.request.author_email,
            when=self.clock(),
        )
        with self._step("commit", "commit failed"):
            reference = repository.commit(
                self.request.message,
                signature,
                include_all=self.request.commit_all,
                allow_empty=updated == document,
            )
            commit = repository.commit_object(reference)

        with self._step("tag", "create tag failed"):
            repository.create_tag(tag, commit, signature, message=tag)

        result = ReleaseResult(
            version=version,
            commit=commit,
            tag=tag,
            changelog_path=changelog_path,
            used_default_changelog=used_default,
            timings=dict(self.telemetry.timings),
        )
        log_event(LOGGER, "release_completed", result.to_dict())
        return result


def run_release(request: ReleaseRequest, **kwargs: Any) -> ReleaseResult:
    """Convenience wrapper building a :class:`ReleaseRunner` and running it."""

    return ReleaseRunner(request, **kwargs).run()


__all__ = [
    "CHANGELOG_MODE",
    "ReleaseResult",
    "ReleaseRunner",
    "read_changelog",
    "run_release",
    "write_changelog",
]

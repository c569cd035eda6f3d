"""Release request model and input defaults."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .exceptions import RequestValidationError

# Error wording per field, reported when a value is empty.
_MISSING_MESSAGES: Dict[str, str] = {
    "message": "Message missing",
    "version": "Version missing",
    "author_name": "AuthorName missing",
    "author_email": "AuthorEmail missing",
    "repo": "Repo missing",
}

# CLI flag destination -> environment variable consulted when the flag is absent.
ENV_FALLBACKS: Dict[str, str] = {
    "message": "MESSAGE",
    "version": "VERSION",
    "author_name": "GIT_AUTHOR_NAME",
    "author_email": "GIT_AUTHOR_EMAIL",
    "repo": "REPO",
}


class ReleaseRequest(BaseModel):
    """Everything needed to cut a release."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    message: str = Field(default="", description="Text used for the commit and the changelog bullet")
    version: str = Field(default="", description="Version in MAJOR.MINOR.PATCH form")
    author_name: str = Field(default="", description="Commit author and tagger name")
    author_email: str = Field(default="", description="Commit author and tagger email")
    repo: str = Field(default="", description="Path of the git work tree")
    commit_all: bool = Field(
        default=True,
        description="Commit every pending tracked change together with the changelog.",
    )

    @field_validator("message", "version", "author_name", "author_email", "repo", mode="before")
    @classmethod
    def require_value(cls, value: Any, info: ValidationInfo) -> str:
        text = "" if value is None else str(value)
        if not text.strip():
            raise ValueError(_MISSING_MESSAGES[info.field_name])
        return text

    @property
    def repo_path(self) -> Path:
        return Path(self.repo)


def build_request(**values: Any) -> ReleaseRequest:
    """Validate ``values`` into a :class:`ReleaseRequest`.

    All missing fields are reported at once, in declaration order, through a
    :class:`RequestValidationError`.
    """

    try:
        return ReleaseRequest(**values)
    except ValidationError as exc:
        fields = []
        messages = []
        for error in exc.errors():
            location = error.get("loc") or ("request",)
            fields.append(str(location[0]))
            reason = error.get("ctx", {}).get("error")
            messages.append(str(reason) if reason is not None else error.get("msg", "invalid value"))
        raise RequestValidationError(", ".join(messages), fields=fields) from exc


def env_defaults(environ: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Return request values taken from the environment.

    ``repo`` falls back to the current working directory when neither the
    flag nor ``REPO`` is set.
    """

    environ = os.environ if environ is None else environ
    defaults = {
        field: environ[variable]
        for field, variable in ENV_FALLBACKS.items()
        if environ.get(variable)
    }
    defaults.setdefault("repo", os.getcwd())
    return defaults


__all__ = ["ENV_FALLBACKS", "ReleaseRequest", "build_request", "env_defaults"]

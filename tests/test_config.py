from __future__ import annotations

import pytest
from pydantic import ValidationError

from release_bump.config import ENV_FALLBACKS, ReleaseRequest, build_request, env_defaults
from release_bump.exceptions import RequestValidationError

VALID = {
    "message": "Add feature",
    "version": "1.2.3",
    "author_name": "Jane Doe",
    "author_email": "jane@example.com",
    "repo": "/tmp/repo",
}


def test_build_request_accepts_complete_input() -> None:
    request = build_request(**VALID)
    assert isinstance(request, ReleaseRequest)
    assert request.commit_all is True
    assert str(request.repo_path) == "/tmp/repo"


@pytest.mark.parametrize(
    ("field", "message"),
    [
        ("message", "Message missing"),
        ("version", "Version missing"),
        ("author_name", "AuthorName missing"),
        ("author_email", "AuthorEmail missing"),
        ("repo", "Repo missing"),
    ],
)
def test_each_field_is_required(field: str, message: str) -> None:
    values = {**VALID, field: ""}
    with pytest.raises(RequestValidationError) as excinfo:
        build_request(**values)
    assert excinfo.value.fields == (field,)
    assert str(excinfo.value) == message


def test_whitespace_only_counts_as_missing() -> None:
    with pytest.raises(RequestValidationError, match="Message missing"):
        build_request(**{**VALID, "message": "   "})


def test_all_missing_fields_are_reported() -> None:
    with pytest.raises(RequestValidationError) as excinfo:
        build_request(repo="/tmp/repo")
    assert excinfo.value.fields == ("message", "version", "author_name", "author_email")


def test_request_is_frozen() -> None:
    request = build_request(**VALID)
    with pytest.raises(ValidationError):
        request.message = "changed"  # type: ignore[misc]


def test_env_defaults_follow_flag_names() -> None:
    environ = {
        "MESSAGE": "From env",
        "VERSION": "2.0.0",
        "GIT_AUTHOR_NAME": "Env Author",
        "GIT_AUTHOR_EMAIL": "env@example.com",
        "REPO": "/srv/repo",
        "UNRELATED": "x",
    }
    defaults = env_defaults(environ)
    assert defaults == {
        "message": "From env",
        "version": "2.0.0",
        "author_name": "Env Author",
        "author_email": "env@example.com",
        "repo": "/srv/repo",
    }
    assert set(ENV_FALLBACKS) == set(defaults)


def test_env_defaults_repo_falls_back_to_cwd(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    assert env_defaults({}) == {"repo": str(tmp_path)}

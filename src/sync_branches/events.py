"""Push event loading and validation.

Event reference:
https://docs.github.com/en/webhooks/webhook-events-and-payloads#push
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from sync_branches.errors import EventParseError

_BRANCH_REF_RE = re.compile(r"^refs/heads/(?P<branch>.*)$")


@dataclass(frozen=True)
class PushEvent:
    """The fields of a push event that sync-branches uses."""

    after: str
    ref: str
    repo_name: str
    owner: str


def branch_from_ref(ref: str) -> str | None:
    """Extract the branch name from a ref like refs/heads/<branch>.

    Returns None for anything that is not a branch ref (tags, notes, ...).
    """
    match = _BRANCH_REF_RE.match(ref)
    if match is None:
        return None
    return match.group("branch")


def parse_push_event(payload: object) -> PushEvent:
    """Validate a decoded push event payload.

    Raises:
        EventParseError: If a required field is missing or not a string
    """
    after = _require_str(payload, "after")
    ref = _require_str(payload, "ref")
    repository = _require_dict(payload, "repository")
    repo_name = _require_str(repository, "name", path="repository.name")
    owner = _require_dict(repository, "owner", path="repository.owner")
    login = _require_str(owner, "login", path="repository.owner.login")
    return PushEvent(after=after, ref=ref, repo_name=repo_name, owner=login)


def load_push_event(environ: Mapping[str, str]) -> PushEvent:
    """Load the push event that triggered this workflow run.

    Uses GITHUB_EVENT_NAME, GITHUB_EVENT_PATH, and GITHUB_REPOSITORY as set by
    the GitHub Actions runner.

    Raises:
        EventParseError: If the run was not triggered by a push, or the event
            payload cannot be read or validated
    """
    event_name = environ.get("GITHUB_EVENT_NAME")
    if event_name != "push":
        msg = f'sync-branches only works on "push" events (got {event_name!r})'
        raise EventParseError(msg)

    event_path = environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        raise EventParseError("Expected non-nil event path (GITHUB_EVENT_PATH)")

    if not environ.get("GITHUB_REPOSITORY"):
        raise EventParseError("Expected non-nil repo path (GITHUB_REPOSITORY)")

    path = Path(event_path)
    if not path.is_file():
        raise EventParseError(f"Event file not found: {event_path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EventParseError(f"Could not read event file {event_path}: {e}") from e

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise EventParseError(f"Event file is not valid JSON: {e}") from e

    return parse_push_event(payload)


def pushed_branch(event: PushEvent) -> str:
    """Name of the branch the event pushed to.

    Raises:
        EventParseError: If the push was not to a branch (e.g. a tag)
    """
    branch = branch_from_ref(event.ref)
    if branch is None:
        msg = (
            f"Unable to determine head branch. ref was {event.ref}. "
            "Did you forget to limit the workflow to only branches?"
        )
        raise EventParseError(msg)
    return branch


def _require_dict(data: object, key: str, *, path: str | None = None) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, dict):
        raise EventParseError(f"Push event field '{path or key}' must be an object")
    return value


def _require_str(data: object, key: str, *, path: str | None = None) -> str:
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, str):
        raise EventParseError(f"Push event field '{path or key}' must be a string")
    return value

"""Error types raised while synchronizing branches.

Scope of each error:
- EventParseError, ConfigError: fatal for the whole run, raised before any API call
- BranchNotFoundError, BranchCreationError: abort one source/target iteration
- MergeConflictError: recoverable, converted into a recorded conflict
- AmbiguousPRError: formatted into a warning, never raised by the reconcilers
- LabelOrCommentError: returned (not raised) by best-effort PR decorations
"""


class SyncBranchesError(Exception):
    """Base class for sync-branches errors."""


class EventParseError(SyncBranchesError):
    """The triggering event could not be turned into a push context."""


class ConfigError(SyncBranchesError):
    """A required input is missing or an input has an invalid value."""


class BranchNotFoundError(SyncBranchesError):
    """A branch that must exist on the remote could not be found."""

    def __init__(self, branch: str, *, description: str = "branch") -> None:
        super().__init__(f"Could not find {description}: {branch}")
        self.branch = branch


class TargetBranchNotFoundError(BranchNotFoundError):
    """The target branch of a sync PR does not exist."""

    def __init__(self, branch: str) -> None:
        super().__init__(branch, description="target branch")


class BranchCreationError(SyncBranchesError):
    """A missing branch could not be created."""

    def __init__(self, branch: str, *, reason: str) -> None:
        super().__init__(f"Failed to create branch: {branch} ({reason})")
        self.branch = branch
        self.reason = reason


class MergeConflictError(SyncBranchesError):
    """Merging head into base failed (conflict, permissions, or unexpected status)."""

    def __init__(self, *, base: str, head: str, status_code: int | None, message: str) -> None:
        status = f"status {status_code}" if status_code is not None else "no status"
        super().__init__(f"Failed to merge {head} into {base} ({status}): {message}")
        self.base = base
        self.head = head
        self.status_code = status_code


class AmbiguousPRError(SyncBranchesError):
    """More than one open PR exists for the same head/base pair."""

    def __init__(self, *, head: str, base: str, numbers: list[int]) -> None:
        listed = ", ".join(f"#{n}" for n in numbers)
        super().__init__(
            f"Found multiple open PRs from {head} to {base} ({listed}). "
            f"Only #{numbers[0]} will be updated."
        )
        self.head = head
        self.base = base
        self.numbers = numbers


class LabelOrCommentError(SyncBranchesError):
    """A label or comment operation on a PR failed."""

    def __init__(self, *, operation: str, pr_number: int, message: str) -> None:
        super().__init__(f"Failed to {operation} on PR #{pr_number}: {message}")
        self.operation = operation
        self.pr_number = pr_number

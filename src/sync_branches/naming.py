"""Naming utilities for intermediate merge branches.

All functions are pure (no I/O).
"""

INTERMEDIATE_BRANCH_PREFIX = "merge/"


def sanitize_branch_component(branch: str) -> str:
    """Flatten a branch name so it can be embedded in another branch name.

    Examples:
        >>> sanitize_branch_component("release/1.0")
        'release-1.0'
        >>> sanitize_branch_component("main")
        'main'
    """
    return branch.replace("/", "-")


def intermediate_branch_name(source: str, target: str) -> str:
    """Name of the branch that folds source and target together for a sync PR.

    Examples:
        >>> intermediate_branch_name("release/1.0", "main")
        'merge/release-1.0_to_main'
        >>> intermediate_branch_name("dev", "feature/x/y")
        'merge/dev_to_feature-x-y'
    """
    return (
        f"{INTERMEDIATE_BRANCH_PREFIX}{sanitize_branch_component(source)}"
        f"_to_{sanitize_branch_component(target)}"
    )

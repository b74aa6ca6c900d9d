"""Configuration for a sync-branches run.

Every recognized input is listed here with its default. Inputs are validated
eagerly, before any GitHub API call is made.
"""

from dataclasses import dataclass

from sync_branches.errors import ConfigError
from sync_branches.gateway.http.real import DEFAULT_API_URL
from sync_branches.templates import DEFAULT_PR_BODY_TEMPLATE, DEFAULT_PR_TITLE_TEMPLATE

# Same values core.getBooleanInput accepts (YAML 1.2 core schema)
_TRUE_VALUES = frozenset({"true", "True", "TRUE"})
_FALSE_VALUES = frozenset({"false", "False", "FALSE"})


@dataclass(frozen=True)
class SyncConfig:
    """Validated inputs for a sync-branches run.

    Attributes:
        github_token: Token used to inspect PRs, create intermediate branches, and merge
        pr_create_token: Token used to create and kick PRs (github_token when not provided)
        use_intermediate_branch: Open PRs from merge/<source>_to_<target> instead of source
        source_pattern: Glob matching source (head) branches
        target_pattern: Glob matching target (base) branches
        pr_title_template: Mustache template for new PR titles
        pr_body_template: Mustache template for new PR bodies
        source_conflict_label: Label for source -> intermediate conflicts ("" disables)
        target_conflict_label: Label for target -> intermediate conflicts ("" disables)
        api_url: GitHub REST API base URL
    """

    github_token: str
    pr_create_token: str
    use_intermediate_branch: bool
    source_pattern: str
    target_pattern: str
    pr_title_template: str = DEFAULT_PR_TITLE_TEMPLATE
    pr_body_template: str = DEFAULT_PR_BODY_TEMPLATE
    source_conflict_label: str = ""
    target_conflict_label: str = ""
    api_url: str = DEFAULT_API_URL

    @property
    def has_separate_pr_token(self) -> bool:
        return self.pr_create_token != self.github_token


def parse_boolean_input(name: str, value: str) -> bool:
    """Parse a boolean action input.

    Raises:
        ConfigError: If value is not one of true|True|TRUE|false|False|FALSE
    """
    stripped = value.strip()
    if stripped in _TRUE_VALUES:
        return True
    if stripped in _FALSE_VALUES:
        return False
    msg = (
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )
    raise ConfigError(msg)


def build_config(
    *,
    github_token: str | None,
    pr_create_token: str | None,
    use_intermediate_branch: str | None,
    source_pattern: str | None,
    target_pattern: str | None,
    pr_title: str | None,
    pr_body: str | None,
    source_conflict_label: str | None,
    target_conflict_label: str | None,
    api_url: str | None,
) -> SyncConfig:
    """Build a SyncConfig from raw input strings.

    None or blank optional inputs fall back to their defaults.

    Raises:
        ConfigError: If a required input is missing or a value is invalid
    """
    token = _require("GITHUB_TOKEN", github_token)
    intermediate = parse_boolean_input(
        "use_intermediate_branch", _require("use_intermediate_branch", use_intermediate_branch)
    )
    return SyncConfig(
        github_token=token,
        pr_create_token=_optional(pr_create_token) or token,
        use_intermediate_branch=intermediate,
        source_pattern=_require("source_pattern", source_pattern),
        target_pattern=_require("target_pattern", target_pattern),
        pr_title_template=_optional(pr_title) or DEFAULT_PR_TITLE_TEMPLATE,
        pr_body_template=_optional(pr_body) or DEFAULT_PR_BODY_TEMPLATE,
        source_conflict_label=_optional(source_conflict_label),
        target_conflict_label=_optional(target_conflict_label),
        api_url=_optional(api_url) or DEFAULT_API_URL,
    )


def _require(name: str, value: str | None) -> str:
    stripped = _optional(value)
    if not stripped:
        raise ConfigError(f"Input required and not supplied: {name}")
    return stripped


def _optional(value: str | None) -> str:
    if value is None:
        return ""
    return value.strip()

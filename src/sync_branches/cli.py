"""The sync-branches command.

Reads action inputs from INPUT_* environment variables (or the equivalent
options), loads the push event, reconciles sync PRs, and writes the syncedPRs
output.

Exit Codes:
    0: Every sync iteration succeeded
    1: Invalid inputs/event, or at least one iteration failed
"""

import json
import logging
import os

import click

from sync_branches.actions import configure_logging, mask_value, set_output
from sync_branches.config import build_config
from sync_branches.context import PushContext, create_context
from sync_branches.errors import ConfigError, EventParseError, SyncBranchesError
from sync_branches.events import load_push_event, pushed_branch
from sync_branches.gateway.github.types import GitHubRepoId
from sync_branches.gateway.http.abc import GitHubApiError
from sync_branches.reconcile.orchestrator import sync_pull_requests

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])
OUTPUT_NAME = "syncedPRs"


def run_sync(ctx: PushContext, *, output_path: str | None) -> int:
    """Reconcile sync PRs and publish the syncedPRs output.

    Returns:
        Process exit code
    """
    try:
        result = sync_pull_requests(ctx)
    except (SyncBranchesError, GitHubApiError) as e:
        logger.error("%s", e)
        set_output(OUTPUT_NAME, "[]", output_path=output_path)
        return 1

    payload = json.dumps(
        [update.to_json_dict() for update in result.updates], separators=(",", ":")
    )
    if not set_output(OUTPUT_NAME, payload, output_path=output_path):
        logger.debug("GITHUB_OUTPUT is not set; %s not written", OUTPUT_NAME)
    click.echo(payload)

    if not result.success:
        logger.error("%d sync operation(s) failed", len(result.failures))
        return 1

    logger.info("Done")
    return 0


@click.command(name="sync-branches", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--github-token",
    envvar=["INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"],
    help="Token used to inspect PRs, create intermediate branches, and merge.",
)
@click.option(
    "--pr-create-token",
    envvar="INPUT_PR_CREATE_TOKEN",
    help="Personal access token used to create and kick PRs. Defaults to --github-token.",
)
@click.option(
    "--use-intermediate-branch",
    envvar="INPUT_USE_INTERMEDIATE_BRANCH",
    help="true to open PRs from merge/<source>_to_<target>, false to open them from source.",
)
@click.option("--source-pattern", envvar="INPUT_SOURCE_PATTERN", help="Source (head) branch glob.")
@click.option("--target-pattern", envvar="INPUT_TARGET_PATTERN", help="Target (base) branch glob.")
@click.option("--pr-title", envvar="INPUT_PR_TITLE", help="Mustache template for PR titles.")
@click.option("--pr-body", envvar="INPUT_PR_BODY", help="Mustache template for PR bodies.")
@click.option(
    "--source-conflict-label",
    envvar="INPUT_SOURCE_CONFLICT_LABEL",
    help="Label applied when the source branch conflicts with the intermediate branch.",
)
@click.option(
    "--target-conflict-label",
    envvar="INPUT_TARGET_CONFLICT_LABEL",
    help="Label applied when the target branch conflicts with the PR head.",
)
@click.option("--api-url", envvar="GITHUB_API_URL", help="GitHub REST API base URL.")
@click.option("--debug", is_flag=True, envvar="RUNNER_DEBUG", help="Enable debug logging.")
def sync_branches_cmd(
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
    debug: bool,
) -> None:
    """Open/update pull requests according to source/target branch name patterns."""
    configure_logging(debug=debug)

    try:
        config = build_config(
            github_token=github_token,
            pr_create_token=pr_create_token,
            use_intermediate_branch=use_intermediate_branch,
            source_pattern=source_pattern,
            target_pattern=target_pattern,
            pr_title=pr_title,
            pr_body=pr_body,
            source_conflict_label=source_conflict_label,
            target_conflict_label=target_conflict_label,
            api_url=api_url,
        )
        mask_value(config.github_token)
        mask_value(config.pr_create_token)

        event = load_push_event(os.environ)
        branch = pushed_branch(event)
    except (ConfigError, EventParseError) as e:
        logger.error("%s", e)
        raise SystemExit(1) from e

    ctx = create_context(
        config, repo=GitHubRepoId(owner=event.owner, name=event.repo_name), pushed_branch=branch
    )
    exit_code = run_sync(ctx, output_path=os.environ.get("GITHUB_OUTPUT"))
    if exit_code != 0:
        raise SystemExit(exit_code)


def main() -> None:
    sync_branches_cmd()

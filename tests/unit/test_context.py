"""Tests for PushContext construction."""

from sync_branches.config import SyncConfig, build_config
from sync_branches.context import create_context
from sync_branches.gateway.github.fake import FakeGitHub
from tests.fakes.context import TEST_REPO, create_test_context


def _config(*, pr_create_token: str | None) -> SyncConfig:
    return build_config(
        github_token="gh-token",
        pr_create_token=pr_create_token,
        use_intermediate_branch="true",
        source_pattern="release/*",
        target_pattern="main",
        pr_title=None,
        pr_body=None,
        source_conflict_label="source-conflict",
        target_conflict_label=None,
        api_url=None,
    )


def test_can_kick_requires_distinct_tokens() -> None:
    github = FakeGitHub()

    assert create_test_context(github=github).can_kick is False
    assert create_test_context(github=github, pr_github=github.with_token("pat")).can_kick


def test_same_token_in_separate_gateways_cannot_kick() -> None:
    github = FakeGitHub(token="same")

    ctx = create_test_context(github=github, pr_github=github.with_token("same"))

    assert ctx.can_kick is False


def test_create_context_reuses_gateway_without_pr_token() -> None:
    ctx = create_context(_config(pr_create_token=None), repo=TEST_REPO, pushed_branch="main")

    assert ctx.pr_github is ctx.github
    assert ctx.can_kick is False
    assert ctx.use_intermediate_branch is True
    assert ctx.conflict_labels.source == "source-conflict"


def test_create_context_uses_pr_token_for_pr_gateway() -> None:
    ctx = create_context(_config(pr_create_token="pat"), repo=TEST_REPO, pushed_branch="main")

    assert ctx.github.token == "gh-token"
    assert ctx.pr_github.token == "pat"
    assert ctx.can_kick is True

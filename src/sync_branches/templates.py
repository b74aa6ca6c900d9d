"""Mustache templates for sync PR text and conflict reports."""

import chevron

DEFAULT_PR_TITLE_TEMPLATE = "chore: Merge {{{ original_source }}} into {{{ target }}}"

DEFAULT_PR_BODY_TEMPLATE = """This PR addresses no issue.

It proposes merging `{{{ original_source }}}` into `{{{ target }}}`\
{{#use_intermediate_branch}} via `{{{ source }}}`{{/use_intermediate_branch}}.
"""

CONFLICT_COMMENT_TEMPLATE = """
`sync-branches` Action reports the following:

{{#notes}}
- {{{.}}}
{{/notes}}
"""


def render_pr_text(
    *,
    title_template: str,
    body_template: str,
    source_pattern: str,
    original_source: str,
    source: str,
    target: str,
    use_intermediate_branch: bool,
) -> tuple[str, str]:
    """Render the title and body of a new sync PR.

    Args:
        title_template: Mustache template for the PR title
        body_template: Mustache template for the PR body
        source_pattern: The configured source branch pattern
        original_source: The branch that was pushed
        source: The PR head (the intermediate branch when one is used)
        target: The PR base
        use_intermediate_branch: Whether an intermediate branch is in use

    Returns:
        Tuple of (title, body)
    """
    template_context = {
        "source_pattern": source_pattern,
        "original_source": original_source,
        "source": source,
        "target": target,
        "use_intermediate_branch": use_intermediate_branch,
    }
    title = chevron.render(title_template, template_context)
    body = chevron.render(body_template, template_context)
    return title, body


def render_conflict_comment(notes: list[str]) -> str:
    """Render notes as a bulleted list under the sync-branches header."""
    return chevron.render(CONFLICT_COMMENT_TEMPLATE, {"notes": notes})

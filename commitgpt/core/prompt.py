import logging
from typing import Optional

from commitgpt.config import DIFF_CHAR_LIMIT
from commitgpt.logger import commitgpt_logger
from commitgpt.schemas import PromptMessages

_logger = commitgpt_logger(__name__)


def truncate_diff(diff: str, limit: int = DIFF_CHAR_LIMIT) -> str:
    """Return at most the first *limit* code points of *diff*.

    The cut ignores line boundaries, so the excerpt may end mid-line.
    """
    return diff[:limit]


def fence_diff(excerpt: str) -> str:
    return f"```diff\n{excerpt}\n```"


def build_prompt(
    reason: str,
    diff: str,
    context_prefix: str,
    *,
    limit: int = DIFF_CHAR_LIMIT,
    logger: Optional[logging.Logger] = None,
) -> PromptMessages:
    """Build the system/user message pair for one completion request.

    Args:
        reason: Free-text motivation for the change, embedded verbatim.
        diff: Staged diff text.
        context_prefix: System instruction, used as the system message as is.
        limit: Maximum number of diff characters sent.

    Returns:
        PromptMessages with the system and user message.
    """
    logger = logger or _logger

    excerpt = truncate_diff(diff, limit)
    if len(excerpt) < len(diff):
        logger.debug("Truncated diff from %d to %d characters", len(diff), len(excerpt))

    fenced = fence_diff(excerpt)
    user = f"{reason}\n\n{fenced}" if reason else fenced

    logger.debug("Built prompt (system: %d chars, user: %d chars)", len(context_prefix), len(user))
    return PromptMessages(system=context_prefix, user=user)

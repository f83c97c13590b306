"""Strict parser for reviewer responses.

Reviewers are told to answer with exactly `CONTINUE` or `REVISE: <feedback>`.
Anything else is a protocol violation and is reported, never guessed at.
"""

import logging

from docwf.domain.constants import (
    CONTINUE_TOKEN,
    RAW_RESPONSE_PREVIEW_CHARS,
    REVISE_TOKEN,
)
from docwf.domain.models.review_decision import (
    ContinueDecision,
    ErrorDecision,
    ReviewDecision,
    ReviseDecision,
)

logger = logging.getLogger(__name__)

EMPTY_FEEDBACK_MESSAGE = "reviewer requested revision but supplied no feedback"


def parse_review_decision(raw_text: str) -> ReviewDecision:
    """Parse a reviewer's raw response into a ReviewDecision.

    Expected formats:
    - CONTINUE (any trailing text ignored)
    - REVISE: feedback (feedback required)
    """
    if raw_text.startswith(CONTINUE_TOKEN):
        return ContinueDecision()

    if raw_text.startswith(REVISE_TOKEN):
        feedback = raw_text[len(REVISE_TOKEN):].strip()
        if not feedback:
            return ErrorDecision(message=EMPTY_FEEDBACK_MESSAGE)
        return ReviseDecision(feedback=feedback)

    logger.warning(f"Unexpected review response format: {raw_text[:RAW_RESPONSE_PREVIEW_CHARS]!r}")
    return ErrorDecision(
        message=(
            f"unexpected response format, expected {CONTINUE_TOKEN} or {REVISE_TOKEN} ..., "
            f"got: {raw_text[:RAW_RESPONSE_PREVIEW_CHARS]}"
        )
    )

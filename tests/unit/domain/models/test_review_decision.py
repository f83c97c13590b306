"""Tests for review decision models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from docwf.domain.models.review_decision import (
    ContinueDecision,
    ErrorDecision,
    ReviewDecision,
    ReviseDecision,
)


class TestReviseDecision:
    def test_feedback_is_stripped(self):
        assert ReviseDecision(feedback="  fix step 3 \n").feedback == "fix step 3"

    @pytest.mark.parametrize("feedback", ["", "   ", "\n\t"])
    def test_blank_feedback_rejected(self, feedback):
        with pytest.raises(ValidationError, match="cannot be empty"):
            ReviseDecision(feedback=feedback)


class TestReviewDecisionUnion:
    """The union is discriminated on `kind`."""

    @pytest.mark.parametrize(
        "payload,expected_type",
        [
            ({"kind": "continue"}, ContinueDecision),
            ({"kind": "revise", "feedback": "shorter intro"}, ReviseDecision),
            ({"kind": "error", "message": "bad"}, ErrorDecision),
        ],
    )
    def test_validates_by_kind(self, payload, expected_type):
        decision = TypeAdapter(ReviewDecision).validate_python(payload)

        assert isinstance(decision, expected_type)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(ReviewDecision).validate_python({"kind": "maybe"})

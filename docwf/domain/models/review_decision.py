"""Review decision models.

A reviewer's raw response is reduced to exactly one of three outcomes.
Revision requests always carry non-empty feedback.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContinueDecision(BaseModel):
    """Reviewer approves the document as it stands."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["continue"] = "continue"


class ReviseDecision(BaseModel):
    """Reviewer requests a revision and explains what to change."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["revise"] = "revise"
    feedback: str

    @field_validator("feedback")
    @classmethod
    def _feedback_non_empty(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("Revision feedback cannot be empty or whitespace")
        return v2


class ErrorDecision(BaseModel):
    """Reviewer response violated the review protocol."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    message: str


ReviewDecision = Annotated[
    Union[ContinueDecision, ReviseDecision, ErrorDecision],
    Field(discriminator="kind"),
]

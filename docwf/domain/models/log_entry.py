from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docwf.domain.models.role import RoleKey


class LogSeverity(str, Enum):
    INFO = "info"
    ERROR = "error"
    SUCCESS = "success"
    AGENT_ACTION = "agent_action"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class WorkflowLogEntry(BaseModel):
    """One progress record of a run."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = Field(default_factory=_now)
    message: str
    severity: LogSeverity = LogSeverity.INFO
    role: RoleKey | None = None


class FeedbackLogEntry(BaseModel):
    """Revision feedback given by a reviewer."""

    model_config = ConfigDict(frozen=True)

    role: RoleKey
    role_name: str
    feedback: str
    timestamp: datetime = Field(default_factory=_now)

    @field_validator("feedback")
    @classmethod
    def _feedback_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("feedback must be non-empty")
        return v

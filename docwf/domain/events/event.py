"""Workflow event payload model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from docwf.domain.events.event_types import WorkflowEventType
from docwf.domain.models.role import RoleKey, RoleStatus


class WorkflowEvent(BaseModel):
    """Immutable event payload for workflow notifications."""

    model_config = {"frozen": True}

    event_type: WorkflowEventType
    run_id: str
    timestamp: datetime
    role: RoleKey | None = None
    status: RoleStatus | None = None
    loop_count: int | None = None
    message: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

"""Domain models for the document workflow engine."""

from .role import (
    NON_TERMINAL_STATUSES,
    ReviewMode,
    Role,
    RoleCategory,
    RoleKey,
    RoleRuntimeState,
    RoleStatus,
)
from .review_decision import (
    ContinueDecision,
    ErrorDecision,
    ReviewDecision,
    ReviseDecision,
)
from .log_entry import FeedbackLogEntry, LogSeverity, WorkflowLogEntry
from .document_profile import DocumentProfile
from .run_config import WorkflowRunConfig
from .run_outcome import RunOutcome, RunStatus


__all__ = [
    "NON_TERMINAL_STATUSES",
    "ReviewMode",
    "Role",
    "RoleCategory",
    "RoleKey",
    "RoleRuntimeState",
    "RoleStatus",
    "ContinueDecision",
    "ErrorDecision",
    "ReviewDecision",
    "ReviseDecision",
    "FeedbackLogEntry",
    "LogSeverity",
    "WorkflowLogEntry",
    "DocumentProfile",
    "WorkflowRunConfig",
    "RunOutcome",
    "RunStatus",
]

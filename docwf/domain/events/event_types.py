"""Workflow event types for observer pattern notifications."""

from enum import Enum


class WorkflowEventType(str, Enum):
    """Typed workflow events for progress reporting."""

    # Run lifecycle
    RUN_STARTED = "run_started"
    RUN_COMPLETED = "run_completed"
    RUN_FAILED = "run_failed"
    RUN_RESET = "run_reset"

    # Roles
    ROLE_STATUS_CHANGED = "role_status_changed"

    # Document and feedback
    DOCUMENT_UPDATED = "document_updated"
    FEEDBACK_RECORDED = "feedback_recorded"

    # Log sink
    LOG_APPENDED = "log_appended"

from enum import Enum

from pydantic import BaseModel


class RunStatus(str, Enum):
    IDLE = "idle"                  # Nothing run yet, or reset
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"            # Final document produced
    ERROR = "error"                # Precondition or fatal failure
    CANCELLED = "cancelled"        # Caller requested cancellation


class RunOutcome(BaseModel):
    """Summary returned to the caller when run() returns."""

    run_id: str
    status: RunStatus
    started: bool = True           # False when a precondition rejected the run
    final_document: str | None = None
    error: str | None = None
    writer_calls: int = 0
    review_calls: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.SUCCESS and self.final_document is not None

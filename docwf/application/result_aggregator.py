"""Run results: final document, feedback history, and per-role runtime states."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from docwf.domain.models.log_entry import FeedbackLogEntry
from docwf.domain.models.role import Role, RoleKey, RoleRuntimeState


EMPTY_FEEDBACK_LOG_TEXT = "No review feedback was provided during this workflow run."


class ResultAggregator:
    """Collects what a run produced for downstream consumers.

    final_document() stays None until a run finishes every step, so callers
    must check for it before treating a run as complete.
    """

    def __init__(self) -> None:
        self._final_document: str | None = None
        self._feedback_log: list[FeedbackLogEntry] = []
        self._states: dict[RoleKey, RoleRuntimeState] = {}

    def final_document(self) -> str | None:
        return self._final_document

    def feedback_log(self) -> tuple[FeedbackLogEntry, ...]:
        return tuple(self._feedback_log)

    def runtime_states(self) -> Mapping[RoleKey, RoleRuntimeState]:
        """Read-only view of the live runtime state per role."""
        return MappingProxyType(self._states)

    def set_final_document(self, document: str) -> None:
        self._final_document = document

    def record_feedback(self, role: Role, feedback: str) -> FeedbackLogEntry:
        entry = FeedbackLogEntry(role=role.key, role_name=role.name, feedback=feedback)
        self._feedback_log.append(entry)
        return entry

    def track(self, state: RoleRuntimeState) -> None:
        """Register a role's runtime state, replacing any previous one."""
        self._states[state.role.key] = state

    def clear(self) -> None:
        self._final_document = None
        self._feedback_log.clear()
        self._states.clear()

    def is_complete(self) -> bool:
        return self._final_document is not None


def format_feedback_log(entries: Iterable[FeedbackLogEntry]) -> str:
    """Render the review feedback log as downloadable text."""
    blocks = [
        f"Role: {entry.role_name}\n"
        f"Timestamp: {entry.timestamp.isoformat(timespec='seconds')}\n"
        f"Feedback:\n{entry.feedback}\n\n---\n"
        for entry in entries
    ]
    if not blocks:
        return EMPTY_FEEDBACK_LOG_TEXT
    return "".join(blocks)

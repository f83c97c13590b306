"""Declarative lifecycle transitions for role runtime states.

RoleTransitionTable maps (current status, command) -> next status. The engine
never assigns a status directly; every change goes through this table so an
out-of-order step surfaces as InvalidRoleTransition instead of a silently
inconsistent run.
"""

from enum import Enum

from docwf.domain.errors import InvalidRoleTransition
from docwf.domain.models.role import RoleRuntimeState, RoleStatus


class RoleCommand(str, Enum):
    """Commands the engine issues against a role's runtime state."""

    START_WORK = "start_work"            # Writer begins a draft or revision
    FINISH_WORK = "finish_work"          # Writer produced a document
    START_REVIEW = "start_review"        # Reviewer takes its turn
    APPROVE = "approve"                  # Reviewer answered CONTINUE
    REQUEST_REVISION = "request_revision"  # Reviewer answered REVISE
    RESUME_REVIEW = "resume_review"      # Writer finished the requested revision
    EXHAUST = "exhaust"                  # Loop bound reached
    REJECT_RESPONSE = "reject_response"  # Reviewer answer was malformed
    ABORT = "abort"                      # Fatal run failure or cancellation
    FINALIZE = "finalize"                # Run completed successfully


_TransitionKey = tuple[RoleStatus, RoleCommand]


class RoleTransitionTable:
    """Declarative state machine for role lifecycle transitions.

    Usage:
        next_status = RoleTransitionTable.get_transition(status, command)
        if next_status is None:
            raise InvalidRoleTransition(...)
    """

    _TRANSITIONS: dict[_TransitionKey, RoleStatus] = {
        # === Writer ===
        (RoleStatus.PENDING, RoleCommand.START_WORK): RoleStatus.WORKING,
        (RoleStatus.COMPLETED, RoleCommand.START_WORK): RoleStatus.WORKING,
        (RoleStatus.WORKING, RoleCommand.FINISH_WORK): RoleStatus.COMPLETED,
        (RoleStatus.COMPLETED, RoleCommand.FINALIZE): RoleStatus.COMPLETED,

        # === Reviewer ===
        (RoleStatus.PENDING, RoleCommand.START_REVIEW): RoleStatus.REVIEWING,
        (RoleStatus.REVIEWING, RoleCommand.APPROVE): RoleStatus.APPROVED,
        (RoleStatus.REVIEWING, RoleCommand.REQUEST_REVISION): RoleStatus.WAITING,
        (RoleStatus.WAITING, RoleCommand.RESUME_REVIEW): RoleStatus.REVIEWING,
        (RoleStatus.REVIEWING, RoleCommand.EXHAUST): RoleStatus.SKIPPED_MAX_LOOPS,
        (RoleStatus.REVIEWING, RoleCommand.REJECT_RESPONSE): RoleStatus.FAILED,

        # === Fatal failure ===
        (RoleStatus.PENDING, RoleCommand.ABORT): RoleStatus.FAILED,
        (RoleStatus.WORKING, RoleCommand.ABORT): RoleStatus.FAILED,
        (RoleStatus.REVIEWING, RoleCommand.ABORT): RoleStatus.FAILED,
        (RoleStatus.WAITING, RoleCommand.ABORT): RoleStatus.FAILED,
    }

    @classmethod
    def get_transition(cls, status: RoleStatus, command: RoleCommand) -> RoleStatus | None:
        """Return the next status, or None if the command is not valid here."""
        return cls._TRANSITIONS.get((status, command))

    @classmethod
    def valid_commands(cls, status: RoleStatus) -> list[RoleCommand]:
        return [cmd for (s, cmd) in cls._TRANSITIONS if s == status]

    @classmethod
    def apply(cls, state: RoleRuntimeState, command: RoleCommand) -> RoleStatus:
        """Move state to its next status in place and return it.

        Raises:
            InvalidRoleTransition: If command is not valid from state.status
        """
        next_status = cls.get_transition(state.status, command)
        if next_status is None:
            raise InvalidRoleTransition(
                state.role.key.value, state.status.value, command.value
            )
        state.status = next_status
        return next_status

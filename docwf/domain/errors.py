"""Domain-level exceptions for the document workflow engine."""


class ProviderError(Exception):
    """Raised when a provider fails (network, auth, quota, timeout, etc.)."""

    pass


class InvalidRoleTransition(Exception):
    """Raised when a role status change is not valid from its current status."""

    def __init__(self, role: str, status: str, command: str):
        self.role = role
        self.status = status
        self.command = command
        super().__init__(
            f"Command '{command}' is not valid for role '{role}' in status '{status}'"
        )


class WorkflowBusyError(Exception):
    """Raised when a run is started while another run is still in progress."""

    pass


class WorkflowCancelled(Exception):
    """Raised inside a run when the caller requested cancellation."""

    pass

"""Stderr event observer for CLI integration."""

import click

from docwf.domain.events.event import WorkflowEvent


class StderrEventObserver:
    """Emits events as structured lines to stderr."""

    def on_event(self, event: WorkflowEvent) -> None:
        """Emit event as structured line to stderr."""
        parts = [f"[EVENT] {event.event_type.value}"]
        if event.role:
            parts.append(f"role={event.role.value}")
        if event.status:
            parts.append(f"status={event.status.value}")
        if event.loop_count is not None:
            parts.append(f"loop={event.loop_count}")
        click.echo(" ".join(parts), err=True)

"""Workflow event system for observer pattern notifications."""

from docwf.domain.events.event_types import WorkflowEventType
from docwf.domain.events.event import WorkflowEvent
from docwf.domain.events.observer import WorkflowObserver
from docwf.domain.events.emitter import WorkflowEventEmitter
from docwf.domain.events.stderr_observer import StderrEventObserver

__all__ = [
    "WorkflowEventType",
    "WorkflowEvent",
    "WorkflowObserver",
    "WorkflowEventEmitter",
    "StderrEventObserver",
]

"""Tests for WorkflowEventEmitter."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from docwf.domain.events.emitter import WorkflowEventEmitter
from docwf.domain.events.event import WorkflowEvent
from docwf.domain.events.event_types import WorkflowEventType


def _make_event(event_type: WorkflowEventType) -> WorkflowEvent:
    """Helper to create a test event."""
    return WorkflowEvent(
        event_type=event_type,
        run_id="run_test",
        timestamp=datetime.now(timezone.utc),
    )


class TestWorkflowEventEmitter:
    """Tests for WorkflowEventEmitter."""

    def test_subscribe_global_receives_all_events(self) -> None:
        """Global subscriber receives events of all types."""
        emitter = WorkflowEventEmitter()
        observer = MagicMock()
        emitter.subscribe(observer)

        event1 = _make_event(WorkflowEventType.RUN_STARTED)
        event2 = _make_event(WorkflowEventType.DOCUMENT_UPDATED)
        event3 = _make_event(WorkflowEventType.RUN_COMPLETED)

        emitter.emit(event1)
        emitter.emit(event2)
        emitter.emit(event3)

        calls = [call[0][0] for call in observer.on_event.call_args_list]
        assert calls == [event1, event2, event3]

    def test_subscribe_specific_receives_only_matching_events(self) -> None:
        """Subscriber to specific types only receives those events."""
        emitter = WorkflowEventEmitter()
        observer = MagicMock()
        emitter.subscribe(
            observer,
            event_types=[
                WorkflowEventType.FEEDBACK_RECORDED,
                WorkflowEventType.RUN_FAILED,
            ],
        )

        event1 = _make_event(WorkflowEventType.FEEDBACK_RECORDED)
        event2 = _make_event(WorkflowEventType.LOG_APPENDED)  # Not subscribed
        event3 = _make_event(WorkflowEventType.RUN_FAILED)

        emitter.emit(event1)
        emitter.emit(event2)
        emitter.emit(event3)

        calls = [call[0][0] for call in observer.on_event.call_args_list]
        assert calls == [event1, event3]

    def test_unsubscribe_removes_observer_everywhere(self) -> None:
        """Unsubscribe removes observer from global and specific lists."""
        emitter = WorkflowEventEmitter()
        global_observer = MagicMock()
        specific_observer = MagicMock()
        emitter.subscribe(global_observer)
        emitter.subscribe(specific_observer, event_types=[WorkflowEventType.RUN_STARTED])

        emitter.unsubscribe(global_observer)
        emitter.unsubscribe(specific_observer)
        emitter.emit(_make_event(WorkflowEventType.RUN_STARTED))

        global_observer.on_event.assert_not_called()
        specific_observer.on_event.assert_not_called()

    def test_emit_continues_if_observer_raises(self) -> None:
        """Emit continues to other observers even if one raises."""
        emitter = WorkflowEventEmitter()
        failing_observer = MagicMock()
        failing_observer.on_event.side_effect = ValueError("Test error")
        successful_observer = MagicMock()
        emitter.subscribe(failing_observer)
        emitter.subscribe(successful_observer)

        event = _make_event(WorkflowEventType.ROLE_STATUS_CHANGED)
        emitter.emit(event)  # Should not raise

        failing_observer.on_event.assert_called_once_with(event)
        successful_observer.on_event.assert_called_once_with(event)

    def test_emit_with_no_observers_succeeds(self) -> None:
        emitter = WorkflowEventEmitter()
        emitter.emit(_make_event(WorkflowEventType.RUN_RESET))

    def test_unsubscribe_nonexistent_observer_is_safe(self) -> None:
        emitter = WorkflowEventEmitter()
        emitter.unsubscribe(MagicMock())

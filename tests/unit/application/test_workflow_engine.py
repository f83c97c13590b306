"""Unit tests for WorkflowEngine run control: preconditions, reset, cancel,
busy guard, and event ordering."""

from unittest.mock import MagicMock

import pytest

from docwf.application.workflow_engine import (
    CANCELLED_MESSAGE,
    NO_PROFILE_MESSAGE,
    SOURCE_REQUIRED_MESSAGE,
    WorkflowEngine,
)
from docwf.domain.errors import ProviderError, WorkflowBusyError
from docwf.domain.events.emitter import WorkflowEventEmitter
from docwf.domain.events.event_types import WorkflowEventType
from docwf.domain.models.log_entry import LogSeverity
from docwf.domain.models.role import RoleKey, RoleStatus
from docwf.domain.models.run_config import WorkflowRunConfig
from docwf.domain.models.run_outcome import RunStatus

from tests.integration.providers.fake_response_provider import FakeResponseProvider


class _HookedProvider(FakeResponseProvider):
    """Fake provider that runs a callback inside each provider call."""

    def __init__(self, on_generate=None, on_review=None, **kwargs):
        super().__init__(**kwargs)
        self._on_generate = on_generate
        self._on_review = on_review

    def generate(self, prompt, system_prompt=None):
        if self._on_generate is not None:
            self._on_generate()
        return super().generate(prompt, system_prompt)

    def review(self, prompt, system_prompt=None):
        if self._on_review is not None:
            self._on_review()
        return super().review(prompt, system_prompt)


def _config(**overrides) -> WorkflowRunConfig:
    values = {"profile_id": "profile_howto_default", "source_content": "Deploy the service."}
    values.update(overrides)
    return WorkflowRunConfig(**values)


@pytest.fixture
def recorded_events():
    emitter = WorkflowEventEmitter()
    observer = MagicMock()
    emitter.subscribe(observer)

    def _events():
        return [call[0][0] for call in observer.on_event.call_args_list]

    return emitter, _events


class TestInitialState:
    def test_fresh_engine_is_idle_with_pending_roles(self):
        engine = WorkflowEngine(provider=FakeResponseProvider())

        assert engine.status == RunStatus.IDLE
        assert engine.document is None
        assert not engine.is_running
        assert {s.status for s in engine.runtime_states().values()} == {RoleStatus.PENDING}
        assert len(engine.runtime_states()) == 4


class TestPreconditions:
    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"profile_id": None}, NO_PROFILE_MESSAGE),
            ({"profile_id": ""}, NO_PROFILE_MESSAGE),
            ({"profile_id": "missing"}, "Selected profile with ID 'missing' not found."),
            ({"source_content": "   \n"}, SOURCE_REQUIRED_MESSAGE),
        ],
    )
    def test_rejected_without_provider_calls(self, overrides, message):
        provider = FakeResponseProvider()
        engine = WorkflowEngine(provider=provider)

        outcome = engine.run(_config(**overrides))

        assert outcome.started is False
        assert outcome.status == RunStatus.ERROR
        assert outcome.error == message
        assert provider.call_history == []
        assert engine.log.entries()[-1].severity == LogSeverity.ERROR
        assert engine.log.entries()[-1].message == message

    def test_previous_results_untouched(self):
        provider = FakeResponseProvider()
        engine = WorkflowEngine(provider=provider)
        engine.run(_config())
        before = {k: s.status for k, s in engine.runtime_states().items()}

        engine.run(_config(source_content=""))

        after = {k: s.status for k, s in engine.runtime_states().items()}
        assert after == before
        assert engine.results.final_document() == FakeResponseProvider.DEFAULT_DRAFT
        assert provider.generate_calls == 1


class TestReset:
    def test_reset_clears_everything(self):
        engine = WorkflowEngine(
            provider=FakeResponseProvider(reviews={RoleKey.TECHNICAL_EDITOR: ["REVISE: x"]})
        )
        engine.run(_config())

        engine.reset()

        assert engine.status == RunStatus.IDLE
        assert engine.error is None
        assert engine.run_id is None
        assert engine.document is None
        assert len(engine.log) == 0
        assert engine.results.final_document() is None
        assert engine.results.feedback_log() == ()
        for state in engine.runtime_states().values():
            assert state.status == RoleStatus.PENDING
            assert state.loop_count == 0
            assert state.feedback is None

    def test_reset_is_idempotent(self, recorded_events):
        emitter, events = recorded_events
        engine = WorkflowEngine(provider=FakeResponseProvider(), event_emitter=emitter)

        engine.reset()
        first = {k: s.model_dump() for k, s in engine.runtime_states().items()}
        engine.reset()
        second = {k: s.model_dump() for k, s in engine.runtime_states().items()}

        assert first == second
        assert [e.event_type for e in events()] == [WorkflowEventType.RUN_RESET] * 2

    def test_reset_restores_registry_loop_defaults(self):
        engine = WorkflowEngine(provider=FakeResponseProvider())
        engine.run(_config(max_loops={RoleKey.TECHNICAL_EDITOR: 0}))

        engine.reset()

        assert engine.runtime_states()[RoleKey.TECHNICAL_EDITOR].max_loops == 3


class TestSequentialRuns:
    def test_second_run_starts_clean(self):
        provider = FakeResponseProvider(reviews={RoleKey.TECHNICAL_EDITOR: ["REVISE: x"]})
        engine = WorkflowEngine(provider=provider)
        first = engine.run(_config())

        second = engine.run(_config())

        assert second.run_id != first.run_id
        assert engine.results.feedback_log() == ()
        assert engine.runtime_states()[RoleKey.TECHNICAL_EDITOR].status == RoleStatus.APPROVED
        assert engine.log.entries()[0].message.startswith("Workflow started")


class TestCancel:
    def test_cancel_during_review_stops_before_revision(self):
        engine = None

        def request_cancel():
            engine.cancel()

        provider = _HookedProvider(
            on_review=request_cancel,
            reviews={RoleKey.TECHNICAL_REVIEWER: ["REVISE: fix step 3"]},
        )
        engine = WorkflowEngine(provider=provider)

        outcome = engine.run(_config())

        assert outcome.status == RunStatus.CANCELLED
        assert outcome.error == CANCELLED_MESSAGE
        assert outcome.final_document is None
        assert provider.generate_calls == 1
        states = engine.runtime_states()
        assert states[RoleKey.TECHNICAL_WRITER].status == RoleStatus.COMPLETED
        assert states[RoleKey.TECHNICAL_REVIEWER].status == RoleStatus.FAILED
        assert states[RoleKey.TECHNICAL_EDITOR].status == RoleStatus.FAILED
        assert states[RoleKey.TECHNICAL_EDITOR].error == CANCELLED_MESSAGE
        assert engine.log.entries()[-1].message == f"Workflow failed: {CANCELLED_MESSAGE}"

    def test_cancel_before_run_is_cleared(self):
        engine = WorkflowEngine(provider=FakeResponseProvider())
        engine.cancel()

        assert engine.run(_config()).status == RunStatus.SUCCESS


class TestBusyGuard:
    def test_run_while_running_raises(self):
        engine = None
        errors = []

        def reenter():
            assert engine.is_running
            with pytest.raises(WorkflowBusyError):
                engine.run(_config())
            with pytest.raises(WorkflowBusyError):
                engine.reset()
            errors.append("checked")

        engine = WorkflowEngine(provider=_HookedProvider(on_generate=reenter))

        outcome = engine.run(_config())

        assert errors == ["checked"]
        assert outcome.status == RunStatus.SUCCESS
        assert not engine.is_running


class _BrokenModelProvider(FakeResponseProvider):
    @property
    def model_name(self) -> str:
        raise ProviderError("deployment lookup failed")


class TestStartupFailure:
    def test_provider_lookup_failure_fails_the_run(self):
        provider = _BrokenModelProvider()
        engine = WorkflowEngine(provider=provider)

        outcome = engine.run(_config())

        assert outcome.status == RunStatus.ERROR
        assert outcome.started is True
        assert outcome.error == "deployment lookup failed"
        assert outcome.final_document is None
        assert engine.status == RunStatus.ERROR
        assert engine.error == "deployment lookup failed"
        assert provider.call_history == []
        assert {s.status for s in engine.runtime_states().values()} == {RoleStatus.FAILED}
        last = engine.log.entries()[-1]
        assert last.severity == LogSeverity.ERROR
        assert last.message == "Workflow failed: deployment lookup failed"
        assert not engine.is_running


class TestReviewLogging:
    def test_each_review_call_is_logged_with_its_loop(self):
        provider = FakeResponseProvider(
            reviews={RoleKey.TECHNICAL_EDITOR: ["REVISE: x", "REVISE: y", "CONTINUE"]},
        )
        engine = WorkflowEngine(provider=provider)

        engine.run(_config())

        editor_reviews = [
            e.message for e in engine.log
            if e.role == RoleKey.TECHNICAL_EDITOR and e.message.startswith("Reviewing document")
        ]
        assert editor_reviews == [
            "Reviewing document (Loop 1/3)...",
            "Reviewing document (Loop 2/3)...",
            "Reviewing document (Loop 3/3)...",
        ]
        review_entries = [
            e for e in engine.log
            if e.severity == LogSeverity.AGENT_ACTION and e.message.startswith("Reviewing document")
        ]
        assert len(review_entries) == provider.review_calls()

    def test_zero_loop_reviewer_logs_no_review(self):
        engine = WorkflowEngine(provider=FakeResponseProvider())

        engine.run(_config(max_loops={RoleKey.TECHNICAL_EDITOR: 0}))

        assert not any(
            e.role == RoleKey.TECHNICAL_EDITOR and e.message.startswith("Reviewing document")
            for e in engine.log
        )


class TestEvents:
    def test_successful_run_event_order(self, recorded_events):
        emitter, events = recorded_events
        engine = WorkflowEngine(provider=FakeResponseProvider(), event_emitter=emitter)

        outcome = engine.run(_config())

        types = [e.event_type for e in events()]
        assert types[0] == WorkflowEventType.LOG_APPENDED
        assert types[1] == WorkflowEventType.RUN_STARTED
        assert types[-1] == WorkflowEventType.RUN_COMPLETED
        assert types.count(WorkflowEventType.DOCUMENT_UPDATED) == 1
        assert {e.run_id for e in events()} == {outcome.run_id}

    def test_role_status_events_follow_lifecycle(self, recorded_events):
        emitter, events = recorded_events
        provider = FakeResponseProvider(reviews={RoleKey.TECHNICAL_EDITOR: ["REVISE: x", "CONTINUE"]})
        engine = WorkflowEngine(provider=provider, event_emitter=emitter)

        engine.run(_config())

        editor = [
            e.status for e in events()
            if e.event_type == WorkflowEventType.ROLE_STATUS_CHANGED
            and e.role == RoleKey.TECHNICAL_EDITOR
        ]
        assert editor == [
            RoleStatus.REVIEWING,
            RoleStatus.WAITING,
            RoleStatus.REVIEWING,
            RoleStatus.APPROVED,
        ]
        feedback = [e for e in events() if e.event_type == WorkflowEventType.FEEDBACK_RECORDED]
        assert len(feedback) == 1
        assert feedback[0].message == "x"

    def test_failed_run_ends_with_run_failed(self, recorded_events):
        from docwf.domain.errors import ProviderError

        emitter, events = recorded_events
        provider = FakeResponseProvider(generate_error=ProviderError("down"))
        engine = WorkflowEngine(provider=provider, event_emitter=emitter)

        engine.run(_config())

        last = events()[-1]
        assert last.event_type == WorkflowEventType.RUN_FAILED
        assert last.message == "down"
        assert last.metadata == {"status": "error"}

    def test_observer_failure_does_not_break_run(self):
        emitter = WorkflowEventEmitter()
        broken = MagicMock()
        broken.on_event.side_effect = RuntimeError("observer bug")
        emitter.subscribe(broken)

        outcome = WorkflowEngine(provider=FakeResponseProvider(), event_emitter=emitter).run(_config())

        assert outcome.status == RunStatus.SUCCESS

    def test_log_events_carry_severity(self, recorded_events):
        emitter, events = recorded_events
        engine = WorkflowEngine(provider=FakeResponseProvider(), event_emitter=emitter)

        engine.run(_config())

        log_events = [e for e in events() if e.event_type == WorkflowEventType.LOG_APPENDED]
        assert len(log_events) == len(engine.log)
        assert [e.metadata["entry_id"] for e in log_events] == [x.id for x in engine.log]
        assert log_events[-1].metadata["severity"] == "success"

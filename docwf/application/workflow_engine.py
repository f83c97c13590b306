"""Multi-role document revision workflow.

The engine drives one writer against the registry's reviewers in fixed order:
initial draft, then for each reviewer a bounded review/revise loop, then
finalize. Role status changes go through RoleTransitionTable; progress is
written to the LogSink and mirrored to observers via WorkflowEventEmitter.
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from docwf.application.log_sink import LogSink
from docwf.application.prompt_builder import (
    PROMPT_SYSTEM_INSTRUCTION,
    build_initial_draft_prompt,
    build_review_prompt,
    build_revision_prompt,
)
from docwf.application.result_aggregator import ResultAggregator
from docwf.application.transitions import RoleCommand, RoleTransitionTable
from docwf.domain.constants import RAW_RESPONSE_PREVIEW_CHARS
from docwf.domain.errors import WorkflowBusyError, WorkflowCancelled
from docwf.domain.events.emitter import WorkflowEventEmitter
from docwf.domain.events.event import WorkflowEvent
from docwf.domain.events.event_types import WorkflowEventType
from docwf.domain.models.document_profile import DocumentProfile
from docwf.domain.models.log_entry import LogSeverity, WorkflowLogEntry
from docwf.domain.models.review_decision import ContinueDecision, ReviseDecision
from docwf.domain.models.role import (
    NON_TERMINAL_STATUSES,
    Role,
    RoleKey,
    RoleRuntimeState,
    RoleStatus,
)
from docwf.domain.models.run_config import WorkflowRunConfig
from docwf.domain.models.run_outcome import RunOutcome, RunStatus
from docwf.domain.profiles.catalog import DocumentProfileCatalog
from docwf.domain.providers.response_provider import ResponseProvider
from docwf.domain.review.decision_parser import parse_review_decision
from docwf.domain.roles.registry import RoleRegistry

logger = logging.getLogger(__name__)

NO_PROFILE_MESSAGE = "No document type profile selected."
SOURCE_REQUIRED_MESSAGE = "Source content is required."
CANCELLED_MESSAGE = "Workflow cancelled by caller."


@dataclass
class WorkflowEngine:
    """Sequential writer/reviewer pipeline over a single document.

    One run at a time; exactly one provider call is outstanding during a run.
    The run config is a frozen snapshot, so settings changed while a run is in
    progress only affect the next run.
    """

    provider: ResponseProvider
    registry: RoleRegistry = field(default_factory=RoleRegistry)
    profiles: DocumentProfileCatalog = field(default_factory=DocumentProfileCatalog)
    event_emitter: WorkflowEventEmitter | None = None

    log: LogSink = field(default_factory=LogSink, init=False)
    results: ResultAggregator = field(default_factory=ResultAggregator, init=False)
    status: RunStatus = field(default=RunStatus.IDLE, init=False)
    error: str | None = field(default=None, init=False)
    run_id: str | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.event_emitter is None:
            self.event_emitter = WorkflowEventEmitter()
        self._document: str | None = None
        self._writer_calls = 0
        self._review_calls = 0
        self._running = threading.Lock()
        self._cancel_requested = threading.Event()
        self._reset_states({})

    # ========================================================================
    # Public API
    # ========================================================================

    @property
    def document(self) -> str | None:
        """Current document text; replaced whole by every writer call."""
        return self._document

    @property
    def is_running(self) -> bool:
        return self._running.locked()

    def runtime_states(self):
        return self.results.runtime_states()

    def run(self, config: WorkflowRunConfig) -> RunOutcome:
        """Execute one full run and block until it ends.

        Precondition failures are reported on the outcome (started=False)
        without touching the previous run's role states or results.

        Raises:
            WorkflowBusyError: If another run is in progress on this engine
        """
        if not self._running.acquire(blocking=False):
            raise WorkflowBusyError("A workflow run is already in progress")

        try:
            run_id = uuid.uuid4().hex
            profile, problem = self._check_preconditions(config)
            if problem is not None:
                self.error = problem
                self.status = RunStatus.ERROR
                self._log(problem, LogSeverity.ERROR, run_id=run_id)
                return RunOutcome(run_id=run_id, status=RunStatus.ERROR, started=False, error=problem)

            self._cancel_requested.clear()
            self._clear(config.max_loops)
            self.run_id = run_id
            self.status = RunStatus.IN_PROGRESS

            try:
                meta = self.provider.get_metadata()
                self._log(
                    f'Workflow started for profile: "{profile.name}" | '
                    f"Provider: {meta.get('name', 'unknown')} | Model: {self.provider.model_name}"
                )
                self._emit(WorkflowEventType.RUN_STARTED, metadata={"profile_id": profile.id})
                self._execute(profile, config)
            except WorkflowCancelled as e:
                self._fail(str(e), RunStatus.CANCELLED)
            except Exception as e:
                logger.debug("Workflow run failed", exc_info=True)
                self._fail(str(e) or type(e).__name__, RunStatus.ERROR)

            return self._outcome()
        finally:
            self._running.release()

    def cancel(self) -> None:
        """Request cooperative cancellation.

        Checked before each provider call; an in-flight call is never
        interrupted.
        """
        self._cancel_requested.set()

    def reset(self) -> None:
        """Clear log, results, and run error; every role back to PENDING.

        Raises:
            WorkflowBusyError: If a run is in progress
        """
        if not self._running.acquire(blocking=False):
            raise WorkflowBusyError("Cannot reset while a workflow run is in progress")
        try:
            self._clear({})
            self.status = RunStatus.IDLE
            self.run_id = None
            self._cancel_requested.clear()
            self._emit(WorkflowEventType.RUN_RESET)
        finally:
            self._running.release()

    # ========================================================================
    # Run steps
    # ========================================================================

    def _check_preconditions(
        self, config: WorkflowRunConfig
    ) -> tuple[DocumentProfile | None, str | None]:
        if not config.profile_id:
            return None, NO_PROFILE_MESSAGE
        profile = self.profiles.get(config.profile_id)
        if profile is None:
            return None, f"Selected profile with ID '{config.profile_id}' not found."
        if not config.source_content.strip():
            return None, SOURCE_REQUIRED_MESSAGE
        return profile, None

    def _execute(self, profile: DocumentProfile, config: WorkflowRunConfig) -> None:
        writer = self.registry.writer()
        writer_state = self._state(writer.key)

        self._check_cancelled()
        self._transition(writer_state, RoleCommand.START_WORK)
        self._log(f"{writer.name} is generating the initial draft...", LogSeverity.AGENT_ACTION, writer.key)
        draft = self.provider.generate(
            build_initial_draft_prompt(profile, config, writer),
            system_prompt=PROMPT_SYSTEM_INSTRUCTION,
        )
        self._writer_calls += 1
        self._set_document(draft, writer.key)
        self._transition(writer_state, RoleCommand.FINISH_WORK)
        self._log(f"{writer.name} generated the initial draft.", LogSeverity.SUCCESS, writer.key)

        for reviewer in self.registry.reviewers():
            self._review_loop(reviewer, writer, profile, config)

        self.results.set_final_document(self._document or "")
        for state in self.results.runtime_states().values():
            if state.role.is_writer and state.status not in (
                RoleStatus.FAILED,
                RoleStatus.SKIPPED_MAX_LOOPS,
            ):
                self._transition(state, RoleCommand.FINALIZE)

        self.status = RunStatus.SUCCESS
        self._log("Workflow completed. Final document is ready.", LogSeverity.SUCCESS)
        self._emit(WorkflowEventType.RUN_COMPLETED)

    def _review_loop(
        self,
        reviewer: Role,
        writer: Role,
        profile: DocumentProfile,
        config: WorkflowRunConfig,
    ) -> None:
        state = self._state(reviewer.key)
        writer_state = self._state(writer.key)
        state.loop_count = 0
        self._transition(state, RoleCommand.START_REVIEW)

        while True:
            if state.loops_exhausted:
                self._transition(state, RoleCommand.EXHAUST)
                self._log(
                    f"{reviewer.name} reached the maximum of {state.max_loops} review loop(s). "
                    "Proceeding with the current document.",
                    role=reviewer.key,
                )
                return

            self._check_cancelled()
            self._log(
                f"Reviewing document (Loop {state.loop_count + 1}/{state.max_loops})...",
                LogSeverity.AGENT_ACTION,
                reviewer.key,
            )
            raw = self.provider.review(
                build_review_prompt(reviewer, profile, self._document or "", config),
                system_prompt=PROMPT_SYSTEM_INSTRUCTION,
            )
            self._review_calls += 1
            decision = parse_review_decision(raw)

            if isinstance(decision, ContinueDecision):
                self._transition(state, RoleCommand.APPROVE)
                self._log(f"{reviewer.name} approved the document.", LogSeverity.SUCCESS, reviewer.key)
                return

            if not isinstance(decision, ReviseDecision):
                # Malformed answer: this reviewer's gate is dropped, the run goes on
                state.error = decision.message
                self._transition(state, RoleCommand.REJECT_RESPONSE)
                self._log(
                    f"{reviewer.name} returned an invalid response: {decision.message}",
                    LogSeverity.ERROR,
                    reviewer.key,
                )
                return

            feedback = decision.feedback
            state.feedback = feedback
            self._transition(state, RoleCommand.REQUEST_REVISION)
            self.results.record_feedback(reviewer, feedback)
            self._emit(
                WorkflowEventType.FEEDBACK_RECORDED,
                role=reviewer.key,
                loop_count=state.loop_count,
                message=feedback,
            )
            self._log(
                f'{reviewer.name}: Revisions requested: "{feedback[:RAW_RESPONSE_PREVIEW_CHARS]}..."',
                LogSeverity.AGENT_ACTION,
                reviewer.key,
            )

            self._check_cancelled()
            self._transition(writer_state, RoleCommand.START_WORK)
            self._log(f"{writer.name} is revising the document...", LogSeverity.AGENT_ACTION, writer.key)
            revised = self.provider.generate(
                build_revision_prompt(profile, self._document or "", feedback, config, writer),
                system_prompt=PROMPT_SYSTEM_INSTRUCTION,
            )
            self._writer_calls += 1
            self._set_document(revised, writer.key)
            self._transition(writer_state, RoleCommand.FINISH_WORK)
            self._log(f"{writer.name} revised the document.", LogSeverity.SUCCESS, writer.key)

            state.loop_count += 1
            self._transition(state, RoleCommand.RESUME_REVIEW)

    def _fail(self, message: str, status: RunStatus) -> None:
        """Abort the run: every non-terminal role goes to FAILED, no final document."""
        self.error = message
        for state in self.results.runtime_states().values():
            if state.status in NON_TERMINAL_STATUSES:
                state.error = message
                self._transition(state, RoleCommand.ABORT)
        self.status = status
        self._log(f"Workflow failed: {message}", LogSeverity.ERROR)
        self._emit(WorkflowEventType.RUN_FAILED, message=message, metadata={"status": status.value})

    def _check_cancelled(self) -> None:
        if self._cancel_requested.is_set():
            raise WorkflowCancelled(CANCELLED_MESSAGE)

    # ========================================================================
    # State helpers
    # ========================================================================

    def _clear(self, max_loops: dict[RoleKey, int]) -> None:
        self.log.clear()
        self.results.clear()
        self.error = None
        self._document = None
        self._writer_calls = 0
        self._review_calls = 0
        self._reset_states(max_loops)

    def _reset_states(self, max_loops: dict[RoleKey, int]) -> None:
        for role in self.registry.list_roles():
            self.results.track(RoleRuntimeState.fresh(role, max_loops.get(role.key)))

    def _state(self, key: RoleKey) -> RoleRuntimeState:
        return self.results.runtime_states()[key]

    def _transition(self, state: RoleRuntimeState, command: RoleCommand) -> None:
        RoleTransitionTable.apply(state, command)
        self._emit(
            WorkflowEventType.ROLE_STATUS_CHANGED,
            role=state.role.key,
            status=state.status,
            loop_count=state.loop_count,
        )

    def _set_document(self, text: str, role: RoleKey) -> None:
        self._document = text
        self._emit(
            WorkflowEventType.DOCUMENT_UPDATED,
            role=role,
            metadata={"length": len(text)},
        )

    def _outcome(self) -> RunOutcome:
        return RunOutcome(
            run_id=self.run_id or "",
            status=self.status,
            final_document=self.results.final_document(),
            error=self.error,
            writer_calls=self._writer_calls,
            review_calls=self._review_calls,
        )

    # ========================================================================
    # Reporting
    # ========================================================================

    def _log(
        self,
        message: str,
        severity: LogSeverity = LogSeverity.INFO,
        role: RoleKey | None = None,
        run_id: str | None = None,
    ) -> WorkflowLogEntry:
        entry = self.log.append(message, severity, role)
        self._emit(
            WorkflowEventType.LOG_APPENDED,
            role=role,
            message=message,
            metadata={"severity": severity.value, "entry_id": entry.id},
            run_id=run_id,
        )
        return entry

    def _emit(self, event_type: WorkflowEventType, run_id: str | None = None, **kwargs: Any) -> None:
        """Emit a workflow event with common fields."""
        self.event_emitter.emit(
            WorkflowEvent(
                event_type=event_type,
                run_id=run_id or self.run_id or "",
                timestamp=datetime.now(timezone.utc),
                **kwargs,
            )
        )

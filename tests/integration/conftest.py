"""Integration test fixtures.

These fixtures build the real engine with the default registry and built-in
profiles, driven by a scripted fake provider.
"""

import pytest

from docwf.application.workflow_engine import WorkflowEngine
from docwf.domain.events.emitter import WorkflowEventEmitter
from docwf.domain.models.run_config import WorkflowRunConfig

from tests.integration.providers.fake_response_provider import FakeResponseProvider


@pytest.fixture
def fake_provider() -> FakeResponseProvider:
    """Fake provider where every reviewer approves."""
    return FakeResponseProvider()


@pytest.fixture
def event_emitter() -> WorkflowEventEmitter:
    return WorkflowEventEmitter()


@pytest.fixture
def make_engine(event_emitter: WorkflowEventEmitter):
    def _make(provider: FakeResponseProvider) -> WorkflowEngine:
        return WorkflowEngine(provider=provider, event_emitter=event_emitter)
    return _make


@pytest.fixture
def run_config() -> WorkflowRunConfig:
    return WorkflowRunConfig(
        profile_id="profile_howto_default",
        source_content="Deploy the service.",
        supporting_content="def deploy(): ...",
    )

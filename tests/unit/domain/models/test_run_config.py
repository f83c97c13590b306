"""Tests for WorkflowRunConfig and RunOutcome."""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from docwf.domain.models.role import RoleKey
from docwf.domain.models.run_config import WorkflowRunConfig
from docwf.domain.models.run_outcome import RunOutcome, RunStatus


class TestWorkflowRunConfig:
    def test_defaults(self):
        config = WorkflowRunConfig()

        assert config.profile_id is None
        assert config.source_content == ""
        assert config.max_loops == {}
        assert config.guidance_for(RoleKey.TECHNICAL_EDITOR) == ""

    def test_string_role_keys_are_coerced(self):
        config = WorkflowRunConfig(max_loops={"technical-editor": 1})

        assert config.max_loops == {RoleKey.TECHNICAL_EDITOR: 1}

    def test_negative_max_loops_rejected(self):
        with pytest.raises(ValidationError, match=">= 0"):
            WorkflowRunConfig(max_loops={RoleKey.TECHNICAL_EDITOR: -1})

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            WorkflowRunConfig(reviewers=[])

    def test_frozen(self):
        config = WorkflowRunConfig(source_content="x")
        with pytest.raises(ValidationError):
            config.source_content = "y"

    def test_caller_dict_is_copied(self):
        loops = {RoleKey.TECHNICAL_EDITOR: 1}
        config = WorkflowRunConfig(max_loops=loops)

        loops[RoleKey.TECHNICAL_EDITOR] = 5

        assert config.max_loops[RoleKey.TECHNICAL_EDITOR] == 1

    def test_from_settings_copies_agent_settings(self):
        settings = SimpleNamespace(
            max_loops={RoleKey.TECHNICAL_REVIEWER: 1},
            reviewer_guidance={RoleKey.TECHNICAL_REVIEWER: "check APIs"},
            writing_style_guide="Be brief.",
            markdown_style_guide="Use ATX headings.",
        )

        config = WorkflowRunConfig.from_settings(
            settings, "profile_howto_default", "src", supporting_content="code"
        )

        assert config.profile_id == "profile_howto_default"
        assert config.supporting_content == "code"
        assert config.max_loops == {RoleKey.TECHNICAL_REVIEWER: 1}
        assert config.guidance_for(RoleKey.TECHNICAL_REVIEWER) == "check APIs"
        assert config.writing_style_guide == "Be brief."
        assert config.markdown_style_guide == "Use ATX headings."


class TestRunOutcome:
    def test_succeeded_requires_document(self):
        assert RunOutcome(run_id="r", status=RunStatus.SUCCESS, final_document="# Doc").succeeded
        assert not RunOutcome(run_id="r", status=RunStatus.SUCCESS).succeeded
        assert not RunOutcome(run_id="r", status=RunStatus.ERROR, final_document="# Doc").succeeded

    def test_started_defaults_true(self):
        assert RunOutcome(run_id="r", status=RunStatus.ERROR).started is True

"""Tests for Role and RoleRuntimeState models."""

import pytest
from pydantic import ValidationError

from docwf.domain.models.role import (
    NON_TERMINAL_STATUSES,
    ReviewMode,
    Role,
    RoleCategory,
    RoleKey,
    RoleRuntimeState,
    RoleStatus,
)


def _reviewer(**overrides) -> Role:
    values = {
        "key": RoleKey.TECHNICAL_EDITOR,
        "name": "Technical Editor",
        "category": RoleCategory.REVIEWER,
        "description": "Reviews for grammar.",
        "default_max_loops": 3,
        "specialization": "technical editing",
        "review_mode": ReviewMode.EDITORIAL,
    }
    values.update(overrides)
    return Role(**values)


def _writer() -> Role:
    return Role(
        key=RoleKey.TECHNICAL_WRITER,
        name="Technical Writer",
        category=RoleCategory.WRITER,
        description="Writes.",
    )


class TestRole:
    def test_reviewer_requires_specialization(self):
        with pytest.raises(ValidationError, match="specialization"):
            _reviewer(specialization="  ")

    def test_reviewer_requires_review_mode(self):
        with pytest.raises(ValidationError, match="review_mode"):
            _reviewer(review_mode=None)

    def test_reviewer_rejects_negative_loops(self):
        with pytest.raises(ValidationError, match="default_max_loops"):
            _reviewer(default_max_loops=-1)

    def test_reviewer_accepts_zero_loops(self):
        assert _reviewer(default_max_loops=0).default_max_loops == 0

    def test_writer_cannot_carry_reviewer_settings(self):
        with pytest.raises(ValidationError, match="cannot carry reviewer settings"):
            Role(
                key=RoleKey.TECHNICAL_WRITER,
                name="Technical Writer",
                category=RoleCategory.WRITER,
                description="Writes.",
                default_max_loops=1,
            )

    def test_name_is_stripped_and_required(self):
        assert _reviewer(name="  Editor  ").name == "Editor"
        with pytest.raises(ValidationError):
            _reviewer(name=" ")

    def test_category_properties(self):
        assert _writer().is_writer and not _writer().is_reviewer
        assert _reviewer().is_reviewer and not _reviewer().is_writer

    def test_role_is_frozen(self):
        role = _reviewer()
        with pytest.raises(ValidationError):
            role.name = "Other"


class TestRoleRuntimeState:
    def test_fresh_reviewer_uses_role_default(self):
        state = RoleRuntimeState.fresh(_reviewer(default_max_loops=3))

        assert state.status == RoleStatus.PENDING
        assert state.max_loops == 3
        assert state.loop_count == 0
        assert state.feedback is None
        assert state.error is None

    def test_fresh_reviewer_override_wins(self):
        assert RoleRuntimeState.fresh(_reviewer(), max_loops=0).max_loops == 0

    def test_fresh_writer_has_no_bound(self):
        state = RoleRuntimeState.fresh(_writer(), max_loops=5)

        assert state.max_loops is None
        assert not state.loops_exhausted

    @pytest.mark.parametrize(
        "loop_count,max_loops,exhausted",
        [(0, 0, True), (0, 1, False), (1, 1, True), (2, 3, False), (3, 3, True)],
    )
    def test_loops_exhausted(self, loop_count, max_loops, exhausted):
        state = RoleRuntimeState.fresh(_reviewer(), max_loops=max_loops)
        state.loop_count = loop_count

        assert state.loops_exhausted is exhausted

    def test_negative_loop_count_rejected(self):
        with pytest.raises(ValidationError):
            RoleRuntimeState(role=_reviewer(), loop_count=-1)

    def test_snapshot_is_independent(self):
        state = RoleRuntimeState.fresh(_reviewer())
        snap = state.snapshot()

        state.status = RoleStatus.REVIEWING

        assert snap.status == RoleStatus.PENDING

    def test_terminal_statuses_are_not_abortable(self):
        for status in (
            RoleStatus.APPROVED,
            RoleStatus.SKIPPED_MAX_LOOPS,
            RoleStatus.FAILED,
            RoleStatus.COMPLETED,
        ):
            assert status not in NON_TERMINAL_STATUSES

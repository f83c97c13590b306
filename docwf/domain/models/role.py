from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RoleKey(str, Enum):
    """Stable identifiers for the roles taking part in a run."""

    TECHNICAL_WRITER = "technical-writer"
    TECHNICAL_REVIEWER = "technical-reviewer"
    INFORMATION_ARCHITECT = "information-architect"
    TECHNICAL_EDITOR = "technical-editor"


class RoleCategory(str, Enum):
    WRITER = "writer"
    REVIEWER = "reviewer"


class ReviewMode(str, Enum):
    """What a reviewer is shown besides the document itself.

    EDITORIAL reviewers see the global style guides and the document-type
    guidance. SOURCE_CROSS_CHECK reviewers see the source and supporting
    content so claims can be verified against them.
    """

    EDITORIAL = "editorial"
    SOURCE_CROSS_CHECK = "source_cross_check"


class RoleStatus(str, Enum):
    """Lifecycle status of a role within a single run."""

    PENDING = "pending"
    WORKING = "working"
    REVIEWING = "reviewing"
    WAITING = "waiting"                      # Reviewer asked for a revision
    APPROVED = "approved"
    SKIPPED_MAX_LOOPS = "skipped_max_loops"
    FAILED = "failed"
    COMPLETED = "completed"


# Statuses a fatal run failure forces to FAILED
NON_TERMINAL_STATUSES = frozenset(
    {RoleStatus.PENDING, RoleStatus.WORKING, RoleStatus.REVIEWING, RoleStatus.WAITING}
)


class Role(BaseModel):
    """Static definition of a pipeline participant.

    Reviewer-only fields (default_max_loops, specialization, review_mode) must
    be set for reviewers and left unset for the writer.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: RoleKey
    name: str
    category: RoleCategory
    description: str
    default_max_loops: int | None = None
    specialization: str | None = None
    review_mode: ReviewMode | None = None

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name must be non-empty")
        return v2

    @model_validator(mode="after")
    def _check_category_fields(self) -> "Role":
        reviewer_fields = (self.default_max_loops, self.specialization, self.review_mode)
        if self.category == RoleCategory.WRITER:
            if any(f is not None for f in reviewer_fields):
                raise ValueError(f"Writer role '{self.key.value}' cannot carry reviewer settings")
            return self

        if self.default_max_loops is None or self.default_max_loops < 0:
            raise ValueError(f"Reviewer role '{self.key.value}' needs default_max_loops >= 0")
        if not self.specialization or not self.specialization.strip():
            raise ValueError(f"Reviewer role '{self.key.value}' needs a specialization")
        if self.review_mode is None:
            raise ValueError(f"Reviewer role '{self.key.value}' needs a review_mode")
        return self

    @property
    def is_writer(self) -> bool:
        return self.category == RoleCategory.WRITER

    @property
    def is_reviewer(self) -> bool:
        return self.category == RoleCategory.REVIEWER


class RoleRuntimeState(BaseModel):
    """Mutable per-run projection of a Role."""

    role: Role
    status: RoleStatus = RoleStatus.PENDING
    feedback: str | None = None      # Last revision request made by this reviewer
    error: str | None = None         # Diagnostic attached on FAILED
    loop_count: int = 0
    max_loops: int | None = None     # Effective bound; None for the writer

    @field_validator("loop_count")
    @classmethod
    def _loop_count_ge_0(cls, v: int) -> int:
        if v < 0:
            raise ValueError("loop_count must be >= 0")
        return v

    @classmethod
    def fresh(cls, role: Role, max_loops: int | None = None) -> "RoleRuntimeState":
        """Build a PENDING state; reviewers default to the role's own bound."""
        if role.is_reviewer and max_loops is None:
            max_loops = role.default_max_loops
        return cls(role=role, max_loops=max_loops if role.is_reviewer else None)

    @property
    def loops_exhausted(self) -> bool:
        return self.max_loops is not None and self.loop_count >= self.max_loops

    def snapshot(self) -> "RoleRuntimeState":
        return self.model_copy(deep=True)


__all__ = [
    "RoleKey",
    "RoleCategory",
    "ReviewMode",
    "RoleStatus",
    "NON_TERMINAL_STATUSES",
    "Role",
    "RoleRuntimeState",
]

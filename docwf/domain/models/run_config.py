from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docwf.domain.models.role import RoleKey


class WorkflowRunConfig(BaseModel):
    """Resolved inputs for one run.

    Frozen so the engine works from a snapshot; settings edited while a run
    is in progress only take effect on the next run.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    profile_id: str | None = None
    source_content: str = ""
    supporting_content: str = ""

    # Per-reviewer overrides; roles not listed use their registry defaults
    max_loops: dict[RoleKey, int] = Field(default_factory=dict)
    reviewer_guidance: dict[RoleKey, str] = Field(default_factory=dict)

    writing_style_guide: str = ""
    markdown_style_guide: str = ""

    @field_validator("max_loops")
    @classmethod
    def _max_loops_ge_0(cls, v: dict[RoleKey, int]) -> dict[RoleKey, int]:
        for key, loops in v.items():
            if loops < 0:
                raise ValueError(f"max_loops for '{key.value}' must be >= 0")
        return dict(v)

    @field_validator("reviewer_guidance")
    @classmethod
    def _copy_guidance(cls, v: dict[RoleKey, str]) -> dict[RoleKey, str]:
        return dict(v)

    def guidance_for(self, key: RoleKey) -> str:
        return self.reviewer_guidance.get(key, "")

    @classmethod
    def from_settings(
        cls,
        settings: Any,
        profile_id: str | None,
        source_content: str,
        supporting_content: str = "",
    ) -> "WorkflowRunConfig":
        """Snapshot agent settings (max_loops, reviewer_guidance, style guides) for a run."""
        return cls(
            profile_id=profile_id,
            source_content=source_content,
            supporting_content=supporting_content,
            max_loops=dict(settings.max_loops),
            reviewer_guidance=dict(settings.reviewer_guidance),
            writing_style_guide=settings.writing_style_guide,
            markdown_style_guide=settings.markdown_style_guide,
        )

"""Agent settings parsed from merged YAML config.

Config structure:
    profile: profile_howto_default
    profiles_dir: ~/.docwf/profiles
    provider:
      type: openai
      model: gpt-4o
    max_loops:
      technical-reviewer: 2
    reviewer_guidance:
      technical-editor: "Prefer active voice."
    writing_style_guide: ""
    markdown_style_guide: ""
"""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docwf.domain.models.role import RoleKey
from docwf.domain.models.run_config import WorkflowRunConfig
from docwf.domain.roles.registry import DEFAULT_ROLES


DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_AZURE_API_VERSION = "2024-10-01-preview"
FALLBACK_PROVIDER = "gemini-cli"

DEFAULT_REVIEWER_GUIDANCE: dict[RoleKey, str] = {
    RoleKey.INFORMATION_ARCHITECT: (
        "Focus on a logical flow of information for effective and efficient transfer of "
        "information. If existing documentation was provided, ensure the document fits within "
        "its information architecture, avoids duplication, and references other documents with "
        "Markdown links (even placeholder) if they would aid in understanding or learning the "
        "content in the document being authored."
    ),
    RoleKey.TECHNICAL_EDITOR: (
        "Adhere to standard technical writing best practices (e.g., active voice, consistent "
        "terminology, correct grammar and punctuation). Check for overall readability and "
        "conciseness. Headers of all levels should be sentence case, list markers should have "
        "only one space between the list marker (hyphen or N.) and the list item text, and "
        "there should be blank lines surrounding headers, lists, and fenced code blocks. "
        "Advise use of Mermaid diagrams where such content would add to understanding."
    ),
    RoleKey.TECHNICAL_REVIEWER: (
        "Verify all procedural steps, code examples, and technical claims against the provided "
        "source code. Treat source code as authoritative, identifying discrepancies between "
        "source code and the document as requiring revision."
    ),
}


def _default_max_loops() -> dict[RoleKey, int]:
    return {r.key: r.default_max_loops for r in DEFAULT_ROLES if r.is_reviewer}


class ProviderSettings(BaseModel):
    """LLM provider selection.

    Keys other than `type` are passed to the provider constructor; extra
    provider-specific keys are allowed.
    """

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    model: str | None = None
    api_key: str | None = None
    azure_endpoint: str | None = None
    azure_deployment: str | None = None
    azure_api_version: str | None = None

    def provider_config(self) -> dict[str, Any]:
        """Constructor config for the selected provider, unset keys omitted."""
        return self.model_dump(exclude={"type"}, exclude_none=True)


class AgentSettings(BaseModel):
    """Validated view of the merged config mapping."""

    model_config = ConfigDict(extra="forbid")

    profile: str | None = None
    profiles_dir: str | None = None
    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    max_loops: dict[RoleKey, int] = Field(default_factory=_default_max_loops)
    reviewer_guidance: dict[RoleKey, str] = Field(
        default_factory=lambda: dict(DEFAULT_REVIEWER_GUIDANCE)
    )
    writing_style_guide: str = ""
    markdown_style_guide: str = ""

    @field_validator("max_loops", mode="before")
    @classmethod
    def _merge_max_loops(cls, v: Any) -> Any:
        # Configured values override the per-role defaults key by key
        if v is None:
            v = {}
        if isinstance(v, Mapping):
            return {**_default_max_loops(), **v}
        return v

    @field_validator("max_loops")
    @classmethod
    def _max_loops_ge_0(cls, v: dict[RoleKey, int]) -> dict[RoleKey, int]:
        for key, loops in v.items():
            if loops < 0:
                raise ValueError(f"max_loops for '{key.value}' must be >= 0")
        return v

    @field_validator("reviewer_guidance", mode="before")
    @classmethod
    def _merge_guidance(cls, v: Any) -> Any:
        if v is None:
            v = {}
        if isinstance(v, Mapping):
            return {**DEFAULT_REVIEWER_GUIDANCE, **v}
        return v

    @field_validator("writing_style_guide", "markdown_style_guide", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "AgentSettings":
        """Build settings from a merged config mapping (see load_config)."""
        return cls.model_validate(dict(cfg))

    def resolve_provider(self, env: Mapping[str, str] | None = None) -> tuple[str, dict[str, Any]]:
        """Return (provider key, constructor config).

        An explicitly configured type wins. Otherwise the environment picks:
        OPENAI_API_KEY selects openai; a complete set of Azure OpenAI variables
        selects azure-openai; anything else falls back to the Gemini CLI.
        """
        env = os.environ if env is None else env
        config = self.provider.provider_config()

        if self.provider.type:
            return self.provider.type, config

        if env.get("OPENAI_API_KEY"):
            return "openai", {
                "api_key": env["OPENAI_API_KEY"],
                "model": DEFAULT_OPENAI_MODEL,
                **config,
            }

        azure_keys = ("AZURE_OPENAI_API_KEY", "AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_DEPLOYMENT")
        if all(env.get(k) for k in azure_keys):
            return "azure-openai", {
                "api_key": env["AZURE_OPENAI_API_KEY"],
                "azure_endpoint": env["AZURE_OPENAI_ENDPOINT"],
                "azure_deployment": env["AZURE_OPENAI_DEPLOYMENT"],
                "azure_api_version": env.get("AZURE_OPENAI_API_VERSION") or DEFAULT_AZURE_API_VERSION,
                **config,
            }

        return FALLBACK_PROVIDER, config

    def to_run_config(
        self,
        *,
        profile_id: str | None = None,
        source_content: str,
        supporting_content: str = "",
    ) -> WorkflowRunConfig:
        """Snapshot these settings for one run; profile_id defaults to `profile`."""
        return WorkflowRunConfig.from_settings(
            self,
            profile_id=profile_id or self.profile,
            source_content=source_content,
            supporting_content=supporting_content,
        )

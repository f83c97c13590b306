from typing import Literal

from pydantic import BaseModel, Field


class BaseOutput(BaseModel):
    schema_version: int = 1
    command: Literal["run", "profiles", "roles", "providers"]
    exit_code: int
    error: str | None = None


class RoleStatusSummary(BaseModel):
    """Final runtime state of one role."""
    key: str
    name: str
    status: str
    loop_count: int = 0
    max_loops: int | None = None
    error: str | None = None


class RunOutput(BaseOutput):
    command: Literal["run"] = "run"
    # On precondition or setup errors the run may not have an id
    run_id: str | None = None
    status: str | None = None
    final_document_path: str | None = None
    feedback_log_path: str | None = None
    writer_calls: int = 0
    review_calls: int = 0
    roles: list[RoleStatusSummary] = Field(default_factory=list)


class ProfileSummary(BaseModel):
    """Summary of a document profile for list output."""
    id: str
    name: str
    description: str


class ProfilesOutput(BaseOutput):
    command: Literal["profiles"] = "profiles"
    profiles: list[ProfileSummary] = Field(default_factory=list)


class RoleSummary(BaseModel):
    key: str
    name: str
    category: str
    description: str
    max_loops: int | None = None


class RolesOutput(BaseOutput):
    command: Literal["roles"] = "roles"
    roles: list[RoleSummary] = Field(default_factory=list)


class ProviderSummary(BaseModel):
    """Summary of a provider for list output."""
    name: str
    description: str
    requires_config: bool = False


class ProviderDetail(BaseModel):
    """Detailed provider info for single provider view."""
    name: str
    description: str
    requires_config: bool = False
    config_keys: list[str] = Field(default_factory=list)
    default_model: str | None = None


class ProvidersOutput(BaseOutput):
    command: Literal["providers"] = "providers"
    providers: list[ProviderSummary] | None = None
    provider: ProviderDetail | None = None

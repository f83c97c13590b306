from pydantic import BaseModel, ConfigDict, field_validator


class DocumentProfile(BaseModel):
    """Document type template and guidance that parameterize every prompt."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    description: str = ""
    doc_type_description: str = ""
    template: str = ""

    @field_validator("id", "name")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("must be non-empty")
        return v2

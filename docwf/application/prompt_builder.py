"""Prompt builders for the writer and reviewer roles.

Pure functions of (profile, document, feedback, run config). Reviewer prompts
differ only by the role's specialization and its ReviewMode, which selects the
extra material the reviewer is shown.
"""

from collections.abc import Callable

from docwf.domain.constants import CONTINUE_TOKEN, REVISE_TOKEN
from docwf.domain.models.document_profile import DocumentProfile
from docwf.domain.models.role import ReviewMode, Role
from docwf.domain.models.run_config import WorkflowRunConfig


PROMPT_SYSTEM_INSTRUCTION = (
    "You are an expert technical documentation assistant. Follow instructions precisely. "
    "Output only Markdown and do not surround it with code fences."
)

NO_SUPPORTING_CONTENT = "No supporting content provided."
NO_TEMPLATE = "No specific template provided, generate a standard structure for this document type."


def global_style_guidance(config: WorkflowRunConfig) -> str:
    """Writing and Markdown style guides, each only when non-blank."""
    guidance = ""
    if config.writing_style_guide.strip():
        guidance += (
            "\nGlobal writing style guide to adhere to:\n"
            "<global_writing_style_guide>\n"
            f"{config.writing_style_guide}\n"
            "</global_writing_style_guide>"
        )
    if config.markdown_style_guide.strip():
        guidance += (
            "\nGlobal Markdown style guide to adhere to:\n"
            "<global_markdown_style_guide>\n"
            f"{config.markdown_style_guide}\n"
            "</global_markdown_style_guide>"
        )
    return guidance


def _profile_section(profile: DocumentProfile) -> str:
    section = (
        "Document Profile:\n\n"
        f"  Name: {profile.name}\n\n"
        f"  Description: {profile.description}\n"
    )
    if profile.doc_type_description.strip():
        section += (
            "\nGuidance on writing for this document type:\n"
            "<doc_type_guidance>\n"
            f"{profile.doc_type_description}\n"
            "</doc_type_guidance>\n"
        )
    return section


def build_initial_draft_prompt(
    profile: DocumentProfile,
    config: WorkflowRunConfig,
    writer: Role,
) -> str:
    """Prompt for the writer's first draft."""
    if profile.template:
        template_section = (
            "Template to adhere to while writing or revising this document:\n\n"
            f"```markdown\n{profile.template}\n```"
        )
    else:
        template_section = NO_TEMPLATE

    return f"""You are an expert {writer.name}.

Your task is to create a draft of a new technical document.
{global_style_guidance(config)}
{_profile_section(profile)}
{template_section}

Existing document, draft, or other content serving as the source material for the document:

```
{config.source_content}
```

Authoritative source code or other content serving as the source of truth against which the document's claims and content should be compared:

```
{config.supporting_content or NO_SUPPORTING_CONTENT}
```

Based on all the provided information, write or revise a comprehensive, clear, and well-structured document titled appropriately for its content, fitting the profile of a "{profile.name}". Ensure the output is in Markdown format and NOT enclosed in triple-backtick code fencing.

Focus on fulfilling the purpose of a {profile.name} as described.

Output ONLY the Markdown content for the document. Do not include any preambles or explanations outside the Markdown and do NOT enclose the document in code fences."""


def build_revision_prompt(
    profile: DocumentProfile,
    document: str,
    feedback: str,
    config: WorkflowRunConfig,
    writer: Role,
) -> str:
    """Prompt for the writer to revise the current document against one piece of feedback."""
    return f"""You are an expert {writer.name}. Your task is to revise an existing technical document based on specific feedback.
{global_style_guidance(config)}
{_profile_section(profile)}

Document to revise:

```markdown
{document}
```

Feedback for revision:

```
{feedback}
```

Carefully consider the feedback and apply the necessary changes to the document. Ensure the revised output is in Markdown format.

Output ONLY the revised Markdown content for the document. Do not include any preambles or explanations outside the Markdown. Do NOT enclose the document itself in code fencing."""


def _editorial_sections(profile: DocumentProfile, config: WorkflowRunConfig) -> tuple[str, str]:
    guidance = global_style_guidance(config)
    if profile.doc_type_description.strip():
        guidance += (
            f'\n\nGuidance on writing for the document type "{profile.name}":\n'
            "<doc_type_guidance>\n"
            f"{profile.doc_type_description}\n"
            "</doc_type_guidance>"
        )
    return guidance, ""


def _source_cross_check_sections(
    profile: DocumentProfile, config: WorkflowRunConfig
) -> tuple[str, str]:
    context = f"Original source for cross-referencing:\n\n```\n{config.source_content}\n```"
    if config.supporting_content.strip():
        context += (
            "\n\nAuthoritative supporting content for cross-referencing:\n\n"
            f"```\n{config.supporting_content}\n```"
        )
    return "", context


# ReviewMode -> (guidance preamble, cross-reference context)
_REVIEW_SECTION_BUILDERS: dict[
    ReviewMode, Callable[[DocumentProfile, WorkflowRunConfig], tuple[str, str]]
] = {
    ReviewMode.EDITORIAL: _editorial_sections,
    ReviewMode.SOURCE_CROSS_CHECK: _source_cross_check_sections,
}


def build_review_prompt(
    role: Role,
    profile: DocumentProfile,
    document: str,
    config: WorkflowRunConfig,
) -> str:
    """Prompt asking a reviewer for a CONTINUE or REVISE decision.

    Raises:
        ValueError: If role is not a reviewer
    """
    if not role.is_reviewer or role.review_mode is None:
        raise ValueError(f"Role '{role.key.value}' is not a reviewer")

    guidance, context = _REVIEW_SECTION_BUILDERS[role.review_mode](profile, config)

    custom = config.guidance_for(role.key)
    if custom.strip():
        guidance += (
            "\n\nSpecific review guidance for this task (in addition to your primary "
            f"specialization):\n\n```\n{custom}\n```"
        )

    return f"""You are an expert {role.name}. Your specialization is: {role.specialization}.{guidance}

You are reviewing a technical document of type '{profile.name}'.

Document content to review:

```markdown
{document}
```

{context}

CRITICAL INSTRUCTION: You MUST respond in one of the following two formats ONLY:

1. If the document meets all quality standards for your area of expertise and the provided guidance, and requires NO changes:

    {CONTINUE_TOKEN}

2. If the document requires revisions in your area of expertise or based on the provided guidance:

    {REVISE_TOKEN} [Provide very specific, actionable feedback. Clearly state what needs to be changed and why, focusing ONLY on your area of specialization: {role.specialization} and the custom guidance provided.]

Do not add any text other than specified."""

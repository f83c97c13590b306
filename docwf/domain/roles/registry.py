"""Static, ordered registry of the roles taking part in a run.

Registry order is the review order. Only the per-reviewer loop bound and
guidance vary between runs.
"""

from collections.abc import Iterable, Sequence

from docwf.domain.models.role import (
    ReviewMode,
    Role,
    RoleCategory,
    RoleKey,
)


DEFAULT_ROLES: tuple[Role, ...] = (
    Role(
        key=RoleKey.TECHNICAL_WRITER,
        name="Technical Writer",
        category=RoleCategory.WRITER,
        description="Generates and revises content based on inputs and feedback.",
    ),
    Role(
        key=RoleKey.TECHNICAL_REVIEWER,
        name="Technical Reviewer",
        category=RoleCategory.REVIEWER,
        description="Reviews for technical accuracy against source code.",
        default_max_loops=2,
        specialization=(
            "technical accuracy and consistency with the provided source code. "
            "Verify claims, procedures, and factual statements against the source code. "
            "Treat source code as authoritative, identifying discrepancies between source "
            "code and the document as requiring revision."
        ),
        review_mode=ReviewMode.SOURCE_CROSS_CHECK,
    ),
    Role(
        key=RoleKey.INFORMATION_ARCHITECT,
        name="Information Architect",
        category=RoleCategory.REVIEWER,
        description="Reviews for structure, flow, clarity, and organization.",
        default_max_loops=3,
        specialization=(
            "information architecture (structure, flow, logical organization, clarity of "
            "headings, content grouping, navigation, and overall coherence for the "
            "intended audience)"
        ),
        review_mode=ReviewMode.EDITORIAL,
    ),
    Role(
        key=RoleKey.TECHNICAL_EDITOR,
        name="Technical Editor",
        category=RoleCategory.REVIEWER,
        description="Reviews for grammar, style, tone, and consistency.",
        default_max_loops=3,
        specialization=(
            "technical editing (grammar, spelling, punctuation, style, tone, voice, "
            "clarity, conciseness, terminology consistency, and adherence to common "
            "technical writing best practices)"
        ),
        review_mode=ReviewMode.EDITORIAL,
    ),
)


class RoleRegistry:
    """Immutable ordered collection of roles with exactly one writer."""

    def __init__(self, roles: Iterable[Role] = DEFAULT_ROLES) -> None:
        self._roles: tuple[Role, ...] = tuple(roles)

        keys = [r.key for r in self._roles]
        duplicates = sorted({k.value for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate role keys: {duplicates}")

        writers = [r for r in self._roles if r.is_writer]
        if len(writers) != 1:
            raise ValueError(f"Exactly one writer role required, got {len(writers)}")

        self._by_key = {r.key: r for r in self._roles}

    def list_roles(self) -> tuple[Role, ...]:
        """All roles in registry order."""
        return self._roles

    @staticmethod
    def reviewers_of(roles: Sequence[Role]) -> tuple[Role, ...]:
        """Filter to reviewers, preserving order."""
        return tuple(r for r in roles if r.category == RoleCategory.REVIEWER)

    def reviewers(self) -> tuple[Role, ...]:
        return self.reviewers_of(self._roles)

    def writer(self) -> Role:
        return next(r for r in self._roles if r.is_writer)

    def get(self, key: RoleKey | str) -> Role:
        """Look up a role by key.

        Raises:
            KeyError: If the key is not registered
        """
        try:
            role_key = RoleKey(key)
        except ValueError:
            role_key = None
        if role_key is None or role_key not in self._by_key:
            available = ", ".join(r.key.value for r in self._roles)
            raise KeyError(
                f"Role: '{getattr(key, 'value', key)}' not found. "
                f"Available roles: {available}"
            )
        return self._by_key[role_key]

    def __iter__(self):
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

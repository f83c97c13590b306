from .registry import DEFAULT_ROLES, RoleRegistry

__all__ = ["DEFAULT_ROLES", "RoleRegistry"]

from .builtin import BUILTIN_PROFILES, EXPLANATION_PROFILE, HOWTO_PROFILE
from .catalog import DocumentProfileCatalog

__all__ = [
    "BUILTIN_PROFILES",
    "EXPLANATION_PROFILE",
    "HOWTO_PROFILE",
    "DocumentProfileCatalog",
]

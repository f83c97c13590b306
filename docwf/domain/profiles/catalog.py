import logging
from collections.abc import Iterable
from pathlib import Path

import yaml
from pydantic import ValidationError

from docwf.domain.models.document_profile import DocumentProfile
from docwf.domain.profiles.builtin import BUILTIN_PROFILES

logger = logging.getLogger(__name__)

PROFILE_FILE_SUFFIXES = (".yml", ".yaml")


class DocumentProfileCatalog:
    """Document profiles available for selection, keyed by id.

    Starts with the built-in profiles; extra profiles can be added directly or
    loaded from a directory of YAML files (one profile mapping per file).
    """

    def __init__(self, profiles: Iterable[DocumentProfile] = BUILTIN_PROFILES) -> None:
        self._profiles: dict[str, DocumentProfile] = {}
        for profile in profiles:
            self.add(profile)

    def get(self, profile_id: str) -> DocumentProfile | None:
        """Return the profile with this id, or None if unknown."""
        return self._profiles.get(profile_id)

    def list_profiles(self) -> list[DocumentProfile]:
        """Profiles in insertion order."""
        return list(self._profiles.values())

    def add(self, profile: DocumentProfile) -> None:
        """
        Add a profile.

        Raises:
            ValueError: If a profile with the same id is already present
        """
        if profile.id in self._profiles:
            raise ValueError(f"Profile with ID '{profile.id}' already exists")
        self._profiles[profile.id] = profile

    def load_directory(self, directory: Path) -> list[DocumentProfile]:
        """
        Load every *.yml / *.yaml file in directory as a profile.

        Files are read in name order. A missing directory loads nothing.

        Returns:
            The profiles that were added

        Raises:
            ValueError: If a file is malformed, invalid, or duplicates an id
        """
        if not directory.is_dir():
            logger.debug(f"Profiles directory not found: {directory}")
            return []

        loaded: list[DocumentProfile] = []
        for path in sorted(directory.iterdir()):
            if path.suffix not in PROFILE_FILE_SUFFIXES or not path.is_file():
                continue
            profile = self._load_file(path)
            self.add(profile)
            loaded.append(profile)
            logger.debug(f"Loaded document profile '{profile.id}' from {path}")
        return loaded

    @staticmethod
    def _load_file(path: Path) -> DocumentProfile:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed profile YAML: {path}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Profile YAML root must be a mapping: {path}")

        try:
            return DocumentProfile.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid document profile in {path}: {e}") from e

    def __contains__(self, profile_id: object) -> bool:
        return profile_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

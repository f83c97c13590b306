from abc import ABC, abstractmethod
from typing import Any


class ResponseProvider(ABC):
    """Abstract interface for LLM response providers (Strategy pattern).

    The engine uses two capabilities: free-text generation for the writer and
    review generation for reviewers. Review output is raw text; the engine
    always routes it through the decision parser.
    """

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        """Return provider metadata for discovery commands.

        Returns:
            dict with keys: name, description, requires_config, config_keys,
                           default_model, supports_system_prompt
        """
        return {
            "name": "unknown",
            "description": "No description available",
            "requires_config": False,
            "config_keys": [],
            "default_model": None,
            "supports_system_prompt": False,
        }

    @property
    def model_name(self) -> str:
        """Model identifier shown in run logs."""
        return self.get_metadata().get("default_model") or "default"

    @abstractmethod
    def validate(self) -> None:
        """Verify provider is accessible and configured correctly.

        Called before a run starts. Implementations should check API keys,
        installed tools, etc.

        Raises:
            ProviderError: If provider is misconfigured or unreachable
        """
        ...

    @abstractmethod
    def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate a complete text response for the prompt.

        Args:
            prompt: The prompt text to send to the model
            system_prompt: Optional system instruction

        Returns:
            Response text with surrounding whitespace removed

        Raises:
            ProviderError: If the provider call fails (network, auth, quota, etc.)
        """
        ...

    def review(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate a reviewer response (raw text, not yet parsed).

        Defaults to generate(); providers may override to tune sampling for
        short, format-constrained answers.
        """
        return self.generate(prompt, system_prompt=system_prompt)

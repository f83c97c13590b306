"""OpenAI chat completions response provider."""

import logging
import os
from typing import Any

import openai
from openai import OpenAI

from docwf.domain.errors import ProviderError
from docwf.domain.providers.response_provider import ResponseProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 1.0
DEFAULT_MAX_COMPLETION_TOKENS = 15000


class OpenAIProvider(ResponseProvider):
    """Response provider backed by the OpenAI chat completions API.

    Configuration:
        - api_key: API key (falls back to OPENAI_API_KEY)
        - model: Model name (default: gpt-4o)
        - base_url: Optional OpenAI-compatible endpoint
        - temperature: Sampling temperature (default: 1.0)
        - max_completion_tokens: Output token cap (default: 15000)
        - timeout: Request timeout in seconds
    """

    label = "OpenAI"

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}
        self._api_key = self.config.get("api_key") or os.environ.get("OPENAI_API_KEY")
        self._model = self.config.get("model") or DEFAULT_MODEL
        self._temperature = self.config.get("temperature", DEFAULT_TEMPERATURE)
        self._max_completion_tokens = self.config.get(
            "max_completion_tokens", DEFAULT_MAX_COMPLETION_TOKENS
        )
        self._timeout = self.config.get("timeout")
        self._client: Any = None

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        return {
            "name": "openai",
            "description": "OpenAI chat completions API",
            "requires_config": True,
            "config_keys": [
                "api_key",
                "model",
                "base_url",
                "temperature",
                "max_completion_tokens",
                "timeout",
            ],
            "default_model": DEFAULT_MODEL,
            "supports_system_prompt": True,
        }

    @property
    def model_name(self) -> str:
        return self._model

    def validate(self) -> None:
        if not self._api_key:
            raise ProviderError(
                f"{self.label} API key is required. Set 'api_key' in the provider "
                "config or the OPENAI_API_KEY environment variable."
            )

    def _create_client(self) -> Any:
        kwargs: dict[str, Any] = {"api_key": self._api_key}
        if self.config.get("base_url"):
            kwargs["base_url"] = self.config["base_url"]
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        return OpenAI(**kwargs)

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            completion = self._get_client().chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                max_completion_tokens=self._max_completion_tokens,
            )
        except Exception as e:
            raise self._wrap_api_error(e) from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise ProviderError(f"No response content received from {self.label}")
        return content.strip()

    def _wrap_api_error(self, error: Exception) -> ProviderError:
        """Map SDK exceptions to actionable messages."""
        logger.debug(f"{self.label} API error: {error!r}")
        if isinstance(error, openai.AuthenticationError):
            return ProviderError(f"Invalid API key. Please check your {self.label} API key.")
        if isinstance(error, openai.RateLimitError):
            return ProviderError(f"API quota exceeded. Please check your {self.label} quotas.")
        if isinstance(error, openai.NotFoundError):
            return ProviderError(
                f"Model not found. Please check your {self.label} model name."
            )
        return ProviderError(f"Failed to generate text using {self.label} API: {error}")

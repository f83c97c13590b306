"""Azure OpenAI response provider."""

import os
from typing import Any

from openai import AzureOpenAI

from docwf.domain.errors import ProviderError
from docwf.domain.providers.openai_provider import OpenAIProvider

DEFAULT_API_VERSION = "2024-10-01-preview"


class AzureOpenAIProvider(OpenAIProvider):
    """Response provider backed by an Azure OpenAI deployment.

    Configuration:
        - api_key: API key (falls back to AZURE_OPENAI_API_KEY)
        - azure_endpoint: Resource endpoint (falls back to AZURE_OPENAI_ENDPOINT)
        - azure_deployment: Deployment name (falls back to AZURE_OPENAI_DEPLOYMENT)
        - azure_api_version: API version (default: 2024-10-01-preview)
        - temperature, max_completion_tokens, timeout: as for OpenAI
    """

    label = "Azure OpenAI"

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self._api_key = self.config.get("api_key") or os.environ.get("AZURE_OPENAI_API_KEY")
        self._endpoint = self.config.get("azure_endpoint") or os.environ.get(
            "AZURE_OPENAI_ENDPOINT"
        )
        self._deployment = self.config.get("azure_deployment") or os.environ.get(
            "AZURE_OPENAI_DEPLOYMENT"
        )
        self._api_version = (
            self.config.get("azure_api_version")
            or os.environ.get("AZURE_OPENAI_API_VERSION")
            or DEFAULT_API_VERSION
        )
        # Azure routes by deployment name, not model name
        self._model = self._deployment or ""

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        return {
            "name": "azure-openai",
            "description": "Azure OpenAI service deployment",
            "requires_config": True,
            "config_keys": [
                "api_key",
                "azure_endpoint",
                "azure_deployment",
                "azure_api_version",
                "temperature",
                "max_completion_tokens",
                "timeout",
            ],
            "default_model": None,
            "supports_system_prompt": True,
        }

    @property
    def model_name(self) -> str:
        return self._deployment or "Unknown deployment"

    def validate(self) -> None:
        missing = [
            name
            for name, value in (
                ("api_key", self._api_key),
                ("azure_endpoint", self._endpoint),
                ("azure_deployment", self._deployment),
            )
            if not value
        ]
        if missing:
            raise ProviderError(
                f"Azure OpenAI configuration incomplete, missing: {', '.join(missing)}"
            )

    def _create_client(self) -> Any:
        kwargs: dict[str, Any] = {
            "api_key": self._api_key,
            "azure_endpoint": self._endpoint,
            "api_version": self._api_version,
        }
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        return AzureOpenAI(**kwargs)

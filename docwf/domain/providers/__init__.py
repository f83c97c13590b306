from .response_provider import ResponseProvider
from .provider_factory import ProviderFactory
from .openai_provider import OpenAIProvider
from .azure_openai_provider import AzureOpenAIProvider
from .claude_code_provider import ClaudeCodeProvider
from .gemini_cli_provider import GeminiCliProvider

# Register built-in providers
ProviderFactory.register("openai", OpenAIProvider)
ProviderFactory.register("azure-openai", AzureOpenAIProvider)
ProviderFactory.register("claude-code", ClaudeCodeProvider)
ProviderFactory.register("gemini-cli", GeminiCliProvider)

__all__ = [
    "ResponseProvider",
    "ProviderFactory",
    "OpenAIProvider",
    "AzureOpenAIProvider",
    "ClaudeCodeProvider",
    "GeminiCliProvider",
]

"""Claude Code response provider using the Claude Agent SDK.

Documents are produced as plain Markdown text, so the session runs without
file tools by default and the reply text is returned as-is.
"""

import asyncio
import shutil
import warnings
from typing import Any

from docwf.domain.errors import ProviderError
from docwf.domain.providers.response_provider import ResponseProvider


DEFAULT_MAX_TURNS = 1


class ClaudeCodeProvider(ResponseProvider):
    """Response provider using Claude Agent SDK.

    Requirements:
        - claude-agent-sdk package must be installed
        - Claude Code CLI must be installed and authenticated (via `claude login`)

    Configuration (Direct SDK parameters):
        - model: Model to use (e.g., "sonnet", "opus")
        - allowed_tools: List of tools to allow (default: none)
        - working_dir: Working directory for Claude
        - max_turns: Maximum agent iterations (default: 1)

    Configuration (Via environment variables):
        - max_output_tokens: Output token limit
        - max_thinking_tokens: Extended thinking budget (0 = disabled)

    Configuration (Via CLI flags):
        - max_budget_usd: Cost limit per invocation
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}
        self._validate_config()

        self._model = self.config.get("model")
        self._allowed_tools: list[str] = self.config.get("allowed_tools", [])
        self._working_dir = self.config.get("working_dir")
        self._max_turns = self.config.get("max_turns", DEFAULT_MAX_TURNS)
        self._max_output_tokens = self.config.get("max_output_tokens")
        self._max_thinking_tokens = self.config.get("max_thinking_tokens")
        self._max_budget_usd = self.config.get("max_budget_usd")

    def _validate_config(self) -> None:
        """Validate configuration and warn on unknown keys.

        Raises:
            ValueError: If config values are invalid (e.g., negative max_turns)
        """
        if not self.config:
            return

        known_keys = set(self.get_metadata()["config_keys"])
        unknown_keys = set(self.config.keys()) - known_keys
        if unknown_keys:
            warnings.warn(
                f"Unknown ClaudeCodeProvider config keys ignored: {sorted(unknown_keys)}",
                UserWarning,
                stacklevel=3,
            )

        max_turns = self.config.get("max_turns")
        if max_turns is not None and max_turns < 1:
            raise ValueError("max_turns must be >= 1")

        max_budget = self.config.get("max_budget_usd")
        if max_budget is not None and max_budget <= 0:
            raise ValueError("max_budget_usd must be > 0")

        max_output = self.config.get("max_output_tokens")
        if max_output is not None and max_output < 1:
            raise ValueError("max_output_tokens must be >= 1")

        max_thinking = self.config.get("max_thinking_tokens")
        if max_thinking is not None and max_thinking < 0:
            raise ValueError("max_thinking_tokens must be >= 0")

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        return {
            "name": "claude-code",
            "description": "Claude Code AI agent via Agent SDK",
            "requires_config": False,
            "config_keys": [
                "model",
                "allowed_tools",
                "working_dir",
                "max_turns",
                "max_output_tokens",
                "max_thinking_tokens",
                "max_budget_usd",
            ],
            "default_model": None,
            "supports_system_prompt": True,
        }

    @property
    def model_name(self) -> str:
        return self._model or "default"

    def validate(self) -> None:
        """Verify SDK and CLI are available.

        Raises:
            ProviderError: If SDK not installed or CLI not found
        """
        try:
            from claude_agent_sdk import query  # noqa: F401
        except ImportError:
            raise ProviderError(
                "claude-agent-sdk not installed. "
                "Install with: pip install claude-agent-sdk"
            )

        if shutil.which("claude") is None:
            raise ProviderError(
                "Claude Code CLI not found. "
                "Install from: https://docs.anthropic.com/claude-code"
            )

    def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate response using Claude Agent SDK.

        Uses asyncio.run() to wrap the async SDK in a sync interface.

        Raises:
            ProviderError: If SDK fails or returns no text
        """
        text = asyncio.run(self._async_generate(prompt, system_prompt))
        if not text.strip():
            raise ProviderError("No response content received from Claude Code")
        return text.strip()

    async def _async_generate(self, prompt: str, system_prompt: str | None) -> str:
        try:
            from claude_agent_sdk import query
            from claude_agent_sdk.types import AssistantMessage
        except ImportError:
            raise ProviderError(
                "claude-agent-sdk not installed. "
                "Install with: pip install claude-agent-sdk"
            )

        options = self._build_options(system_prompt)
        response_text = ""

        try:
            async for message in query(prompt=prompt, options=options):
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if hasattr(block, "text"):
                            response_text += block.text
        except Exception as e:
            raise self._wrap_sdk_error(e) from e

        return response_text

    def _build_options(self, system_prompt: str | None) -> "ClaudeAgentOptions":  # noqa: F821
        from claude_agent_sdk import ClaudeAgentOptions

        env: dict[str, str] = {}
        if self._max_output_tokens is not None:
            env["CLAUDE_CODE_MAX_OUTPUT_TOKENS"] = str(self._max_output_tokens)
        if self._max_thinking_tokens is not None:
            env["MAX_THINKING_TOKENS"] = str(self._max_thinking_tokens)

        extra_args: dict[str, str] = {}
        if self._max_budget_usd is not None:
            extra_args["--max-budget-usd"] = str(self._max_budget_usd)

        return ClaudeAgentOptions(
            model=self._model,
            allowed_tools=self._allowed_tools,
            cwd=self._working_dir,
            max_turns=self._max_turns,
            system_prompt=system_prompt,
            env=env,
            extra_args=extra_args,
        )

    def _wrap_sdk_error(self, error: Exception) -> ProviderError:
        """Wrap SDK exceptions with actionable error messages."""
        if isinstance(error, ProviderError):
            return error

        error_type = type(error).__name__

        if error_type == "CLINotFoundError":
            return ProviderError(
                "Claude Code CLI not found. "
                "Install from: https://docs.anthropic.com/claude-code"
            )
        elif error_type == "ProcessError":
            return ProviderError(f"Claude Code process failed: {error}")
        elif error_type == "CLIJSONDecodeError":
            return ProviderError(
                f"Invalid response from Claude Code CLI (malformed JSON): {error}"
            )
        elif error_type == "TimeoutError" or "timeout" in str(error).lower():
            return ProviderError(
                f"Claude Code timed out. Consider increasing max_turns or max_budget_usd: {error}"
            )
        else:
            return ProviderError(f"Claude Agent SDK error ({error_type}): {error}")

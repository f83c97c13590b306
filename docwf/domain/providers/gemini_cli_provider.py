"""Gemini CLI response provider using subprocess.

Uses Gemini CLI with stream-json output format and collects the assistant
message text from the NDJSON event stream.
"""

import asyncio
import json
import logging
import shutil
import warnings
from typing import Any

from docwf.domain.errors import ProviderError
from docwf.domain.providers.response_provider import ResponseProvider

logger = logging.getLogger(__name__)

# Default timeout (10 minutes)
DEFAULT_TIMEOUT = 600


class GeminiCliProvider(ResponseProvider):
    """Gemini CLI response provider using subprocess.

    Requirements:
        - Gemini CLI must be installed
        - User must be authenticated via `gemini auth login`

    Configuration:
        - model: Model to use
        - sandbox: Enable sandbox mode
        - working_dir: Working directory for CLI
        - timeout: Process timeout in seconds (default: 600)
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}
        self._validate_config()

        self._model = self.config.get("model")
        self._sandbox = self.config.get("sandbox", False)
        self._working_dir = self.config.get("working_dir")
        self._timeout = self.config.get("timeout", DEFAULT_TIMEOUT)

    def _validate_config(self) -> None:
        if not self.config:
            return

        known_keys = set(self.get_metadata()["config_keys"])
        unknown_keys = set(self.config.keys()) - known_keys
        if unknown_keys:
            warnings.warn(
                f"Unknown GeminiCliProvider config keys ignored: {sorted(unknown_keys)}",
                UserWarning,
                stacklevel=3,
            )

        timeout = self.config.get("timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be > 0")

    @classmethod
    def get_metadata(cls) -> dict[str, Any]:
        return {
            "name": "gemini-cli",
            "description": "Gemini CLI AI agent via subprocess",
            "requires_config": False,
            "config_keys": ["model", "sandbox", "working_dir", "timeout"],
            "default_model": None,
            "default_response_timeout": DEFAULT_TIMEOUT,
            "supports_system_prompt": False,
        }

    @property
    def model_name(self) -> str:
        return self._model or "default"

    def validate(self) -> None:
        """Verify Gemini CLI is available.

        Raises:
            ProviderError: If Gemini CLI is not installed
        """
        if shutil.which("gemini") is None:
            raise ProviderError(
                "Gemini CLI not found. "
                "Install from: https://github.com/google-gemini/gemini-cli"
            )

    def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate response using Gemini CLI subprocess.

        The system prompt is prepended to the user prompt since the CLI has no
        separate system instruction flag.
        """
        text = asyncio.run(self._async_generate(prompt, system_prompt))
        if not text.strip():
            raise ProviderError("No response content received from Gemini CLI")
        return text.strip()

    async def _async_generate(self, prompt: str, system_prompt: str | None) -> str:
        args = self._build_args()

        full_prompt = prompt
        if system_prompt:
            full_prompt = f"{system_prompt}\n\n{prompt}"
        args.extend(["-p", full_prompt])

        try:
            process = await asyncio.create_subprocess_exec(
                "gemini",
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._working_dir,
            )
        except FileNotFoundError:
            raise ProviderError(
                "Gemini CLI not found. "
                "Install from: https://github.com/google-gemini/gemini-cli"
            )

        try:
            stdout_data, stderr_data = await asyncio.wait_for(
                process.communicate(),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            process.kill()
            raise ProviderError(
                f"Gemini CLI timed out after {self._timeout}s. "
                "Consider increasing timeout config."
            )

        if stderr_data:
            logger.debug(f"Gemini CLI stderr: {stderr_data.decode()}")

        if process.returncode != 0:
            raise self._wrap_process_error(
                process.returncode,
                stderr_data.decode() if stderr_data else "",
            )

        return self._parse_ndjson_stream(stdout_data)

    def _build_args(self) -> list[str]:
        args = ["-o", "stream-json"]

        if self._model:
            args.extend(["-m", self._model])

        if self._sandbox:
            args.append("-s")

        return args

    def _parse_ndjson_stream(self, stdout: bytes) -> str:
        """Concatenate assistant message content from an NDJSON stream."""
        response_text = ""
        parse_errors: list[str] = []

        for line in stdout.decode().splitlines():
            line = line.strip()
            if not line:
                continue

            try:
                event = json.loads(line)
            except json.JSONDecodeError as e:
                sample = line[:50] + "..." if len(line) > 50 else line
                parse_errors.append(f"{str(e)[:30]} | {sample!r}")
                continue

            if event.get("type") == "message" and event.get("role") == "assistant":
                content = event.get("content", "")
                if content:
                    response_text += content

        if parse_errors:
            logger.warning(
                f"Malformed JSON lines ({len(parse_errors)}): {parse_errors[:3]}"
            )

        return response_text

    def _wrap_process_error(self, returncode: int, stderr: str) -> ProviderError:
        stderr_lower = stderr.lower()

        if "auth" in stderr_lower or "login" in stderr_lower:
            return ProviderError(
                f"Gemini CLI authentication error. Run: gemini auth login\n{stderr}"
            )
        elif returncode == 127:
            return ProviderError(
                "Gemini CLI not found. "
                "Install from: https://github.com/google-gemini/gemini-cli"
            )
        else:
            return ProviderError(
                f"Gemini CLI failed (exit {returncode}): {stderr}"
            )

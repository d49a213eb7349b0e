"""Language model client wrapper using LiteLLM.

Provides a single async text-completion capability over any LiteLLM provider.
One attempt per call: failures surface to the caller and are never retried.
"""

import json
import logging
from typing import Any, Protocol

import litellm

from scale_advisor.errors import ErrorKind, ScaleAdvisorError
from scale_advisor.models.llm_config import LLMConfig
from scale_advisor.models.messages import CompletionParams

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Anything that turns CompletionParams into text (LLMClient, test stubs)."""

    async def complete(self, params: CompletionParams) -> str: ...


class LLMError(ScaleAdvisorError):
    """Exception raised for LLM-related errors."""

    pass


class TransportError(LLMError):
    """The model endpoint could not be reached (network failure or timeout)."""

    kind = ErrorKind.TRANSPORT


class UpstreamError(LLMError):
    """The model endpoint responded with a non-success status.

    Attributes:
        status_code: HTTP status returned by the provider
        body: Response body or provider error text, kept for diagnostics
    """

    kind = ErrorKind.UPSTREAM

    def __init__(self, status_code: int, body: str, provider: str = "llm") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"{provider} API error: {status_code}\n{body}")


class LLMClient:
    """Async LLM client using LiteLLM.

    Supports multiple providers through a single interface:
    - Claude (Anthropic)
    - Gemini (Google)
    - Ollama (local)
    - Bedrock (AWS)

    The client holds no per-call state, so one instance is safely shared by
    concurrent calls; LiteLLM pools the underlying HTTP connections.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize LLM client with configuration.

        Args:
            config: LLM configuration with provider, model, and credentials
        """
        self.config = config

    async def complete(self, params: CompletionParams) -> str:
        """Generate text for a conversation.

        Args:
            params: Messages, model, and sampling parameters

        Returns:
            Generated text (all text parts, newline-joined), or a JSON dump
            of the raw response when it carries no text

        Raises:
            TransportError: If the endpoint is unreachable or the call times out
            UpstreamError: If the endpoint answers with an error status
            LLMError: For any other completion failure
        """
        messages: list[dict[str, str]] = []

        if params.system:
            messages.append({"role": "system", "content": params.system})

        messages.extend(message.to_dict() for message in params.messages)

        completion_kwargs: dict[str, Any] = {
            "model": self.config.get_litellm_model_name(params.model),
            "messages": messages,
            "max_tokens": params.max_tokens,
            "temperature": params.temperature,
            "timeout": self.config.timeout,
            "num_retries": 0,
        }

        if self.config.api_key:
            completion_kwargs["api_key"] = self.config.api_key
        if self.config.api_base:
            completion_kwargs["api_base"] = self.config.api_base

        provider = self.config.provider

        try:
            response = await litellm.acompletion(**completion_kwargs)
        except (litellm.exceptions.APIConnectionError, litellm.exceptions.Timeout) as e:
            raise TransportError(f"Connection to {provider} failed: {e}") from e
        except Exception as e:
            status_code = getattr(e, "status_code", None)
            if isinstance(status_code, int):
                raise UpstreamError(status_code, str(e), provider=provider) from e
            raise LLMError(f"LLM completion failed: {e}") from e

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.debug(
                "Completion from %s: %s prompt / %s completion tokens",
                completion_kwargs["model"],
                getattr(usage, "prompt_tokens", "?"),
                getattr(usage, "completion_tokens", "?"),
            )

        return extract_text(response)


def create_client(config: LLMConfig) -> LLMClient:
    """Create an LLM client from configuration.

    Args:
        config: LLM configuration

    Returns:
        Configured LLMClient instance

    Raises:
        ValueError: If LLM is disabled or a hosted provider has no API key
    """
    if not config.enabled:
        raise ValueError("LLM is disabled in configuration")

    if config.requires_api_key and not config.api_key:
        raise ValueError(
            f"API key required for {config.provider}. "
            "Set llm.api_key or the CLAUDE_API_KEY environment variable"
        )

    return LLMClient(config)


def extract_text(response: Any) -> str:
    """Concatenate the text parts of a completion response.

    Handles both plain-string message content and lists of typed content
    blocks. Falls back to a serialization of the whole response so callers
    always receive something printable.

    Args:
        response: LiteLLM ModelResponse (or compatible object)

    Returns:
        Text parts joined by newlines, or the serialized response
    """
    texts: list[str] = []
    # An empty text part is still text; only a response with none falls back
    found = False

    for choice in getattr(response, "choices", None) or []:
        message = getattr(choice, "message", None)
        content = getattr(message, "content", None)

        if isinstance(content, str):
            found = True
            texts.append(content)
        elif isinstance(content, list):
            for block in content:
                if isinstance(block, dict) and block.get("type") == "text":
                    found = True
                    texts.append(str(block.get("text", "")))

    if found:
        return "\n".join(texts)

    logger.warning("Completion response carried no text content; returning raw response")
    return _serialize_response(response)


def _serialize_response(response: Any) -> str:
    """Serialize a response object for diagnostics."""
    if hasattr(response, "model_dump"):
        data = response.model_dump()
    elif isinstance(response, dict):
        data = response
    else:
        data = str(response)
    return json.dumps(data, indent=2, default=str)

"""Unit tests for the LiteLLM-backed completion client.

All tests patch litellm.acompletion; no network calls are made.
"""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import litellm
import pytest

from scale_advisor.errors import ErrorKind
from scale_advisor.llm.client import (
    LLMClient,
    LLMError,
    TransportError,
    UpstreamError,
    create_client,
    extract_text,
)
from scale_advisor.models.llm_config import LLMConfig
from scale_advisor.models.messages import ChatMessage, CompletionParams, Role


def _response(*contents: object) -> SimpleNamespace:
    """Build a minimal completion response with one choice per content."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=c)) for c in contents],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5),
    )


def _params(**overrides: object) -> CompletionParams:
    values: dict = {"messages": [ChatMessage(role=Role.USER, content="hello")]}
    values.update(overrides)
    return CompletionParams(**values)


class _StatusError(Exception):
    """Provider error carrying an HTTP status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class TestCreateClient:
    """Tests for create_client."""

    def test_create_claude_client(self) -> None:
        """Test creating a Claude client with a key."""
        client = create_client(LLMConfig(provider="claude", api_key="k"))

        assert isinstance(client, LLMClient)
        assert client.config.provider == "claude"

    def test_ollama_needs_no_key(self) -> None:
        """Test Ollama clients are created without a key."""
        assert create_client(LLMConfig(provider="ollama", model="llama3.2"))

    def test_disabled_raises(self) -> None:
        """Test a disabled config cannot create a client."""
        with pytest.raises(ValueError, match="disabled"):
            create_client(LLMConfig(api_key="k", enabled=False))

    def test_missing_key_raises(self) -> None:
        """Test hosted providers require a key."""
        with pytest.raises(ValueError, match="API key required"):
            create_client(LLMConfig(provider="gemini", model="gemini-1.5-flash"))


class TestComplete:
    """Tests for LLMClient.complete parameter mapping."""

    def test_request_parameters(self) -> None:
        """Test the LiteLLM call carries model, sampling, timeout and no retries."""
        config = LLMConfig(provider="claude", model="claude-x", api_key="secret", timeout=42)
        client = LLMClient(config)

        with patch("litellm.acompletion", new=AsyncMock(return_value=_response("hi"))) as mock:
            text = asyncio.run(client.complete(_params(max_tokens=800, temperature=0.3)))

        assert text == "hi"
        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "anthropic/claude-x"
        assert kwargs["max_tokens"] == 800
        assert kwargs["temperature"] == 0.3
        assert kwargs["timeout"] == 42
        assert kwargs["num_retries"] == 0
        assert kwargs["api_key"] == "secret"
        assert "api_base" not in kwargs

    def test_system_directive_first(self) -> None:
        """Test the system directive is sent as the first message."""
        client = LLMClient(LLMConfig(api_key="k"))

        with patch("litellm.acompletion", new=AsyncMock(return_value=_response("ok"))) as mock:
            asyncio.run(client.complete(_params(system="be terse")))

        assert mock.call_args.kwargs["messages"] == [
            {"role": "system", "content": "be terse"},
            {"role": "user", "content": "hello"},
        ]

    def test_no_system_message_without_directive(self) -> None:
        """Test no system message is added when none is given."""
        client = LLMClient(LLMConfig(api_key="k"))

        with patch("litellm.acompletion", new=AsyncMock(return_value=_response("ok"))) as mock:
            asyncio.run(client.complete(_params()))

        assert mock.call_args.kwargs["messages"] == [{"role": "user", "content": "hello"}]

    def test_model_override(self) -> None:
        """Test a per-call model replaces the configured model."""
        client = LLMClient(LLMConfig(api_key="k", model="base"))

        with patch("litellm.acompletion", new=AsyncMock(return_value=_response("ok"))) as mock:
            asyncio.run(client.complete(_params(model="special")))

        assert mock.call_args.kwargs["model"] == "anthropic/special"

    def test_ollama_api_base(self) -> None:
        """Test Ollama calls pass the server URL and no key."""
        client = LLMClient(LLMConfig(provider="ollama", model="llama3.2"))

        with patch("litellm.acompletion", new=AsyncMock(return_value=_response("ok"))) as mock:
            asyncio.run(client.complete(_params()))

        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "ollama/llama3.2"
        assert kwargs["api_base"] == "http://localhost:11434"
        assert "api_key" not in kwargs


class TestErrorMapping:
    """Tests for converting provider failures into the error taxonomy."""

    def _run_with_error(self, error: Exception) -> Exception:
        client = LLMClient(LLMConfig(api_key="k"))
        with patch("litellm.acompletion", new=AsyncMock(side_effect=error)):
            with pytest.raises(LLMError) as exc_info:
                asyncio.run(client.complete(_params()))
        return exc_info.value

    def test_connection_error_is_transport(self) -> None:
        """Test connection failures become TransportError."""
        error = litellm.exceptions.APIConnectionError(
            message="connection refused",
            llm_provider="anthropic",
            model="claude-x",
        )

        raised = self._run_with_error(error)

        assert isinstance(raised, TransportError)
        assert raised.kind is ErrorKind.TRANSPORT
        assert raised.__cause__ is error

    def test_status_error_is_upstream(self) -> None:
        """Test errors with an HTTP status become UpstreamError with the body."""
        raised = self._run_with_error(_StatusError(529, "overloaded_error"))

        assert isinstance(raised, UpstreamError)
        assert raised.kind is ErrorKind.UPSTREAM
        assert raised.status_code == 529
        assert "overloaded_error" in raised.body
        assert str(raised).startswith("claude API error: 529")

    def test_other_error_is_llm_error(self) -> None:
        """Test anything else becomes a plain LLMError."""
        raised = self._run_with_error(RuntimeError("weird"))

        assert type(raised) is LLMError
        assert raised.kind is ErrorKind.INTERNAL
        assert "weird" in str(raised)

    def test_single_attempt(self) -> None:
        """Test a failing call is not retried."""
        client = LLMClient(LLMConfig(api_key="k"))
        mock = AsyncMock(side_effect=_StatusError(500, "server error"))

        with patch("litellm.acompletion", new=mock):
            with pytest.raises(UpstreamError):
                asyncio.run(client.complete(_params()))

        assert mock.await_count == 1


class TestExtractText:
    """Tests for response text extraction."""

    def test_plain_string_content(self) -> None:
        """Test string content is returned as-is."""
        assert extract_text(_response("hello")) == "hello"

    def test_text_blocks_joined(self) -> None:
        """Test every text block is joined with newlines; other blocks are skipped."""
        content = [
            {"type": "text", "text": "first"},
            {"type": "tool_use", "id": "x"},
            {"type": "text", "text": "second"},
        ]

        assert extract_text(_response(content)) == "first\nsecond"

    def test_multiple_choices_joined(self) -> None:
        """Test text from several choices is concatenated."""
        assert extract_text(_response("a", "b")) == "a\nb"

    def test_empty_text_returned_as_empty(self) -> None:
        """Test an empty text part is text, not a reason to dump the response."""
        assert extract_text(_response("")) == ""
        assert extract_text(_response([{"type": "text", "text": ""}])) == ""

    def test_no_text_falls_back_to_serialization(self) -> None:
        """Test a response with no text yields its JSON dump instead of raising."""
        response = {"choices": [], "id": "resp-1"}

        text = extract_text(response)

        assert json.loads(text) == {"choices": [], "id": "resp-1"}

    def test_model_dump_used_when_available(self) -> None:
        """Test pydantic-style responses are serialized through model_dump."""
        response = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=None))],
            model_dump=lambda: {"id": "resp-2"},
        )

        assert json.loads(extract_text(response)) == {"id": "resp-2"}

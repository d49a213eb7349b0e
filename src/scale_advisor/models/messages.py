"""Conversation and completion request entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from scale_advisor.errors import InvalidArgumentError

if TYPE_CHECKING:
    from scale_advisor.models.llm_config import CallProfile

# Model used when neither the call nor its profile names one
DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.7


class Role(Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """One turn of a conversation. Identity is its position in the sequence."""

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the provider message shape."""
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChatMessage":
        """Create a message from a `{role, content}` mapping."""
        try:
            role = Role(data["role"])
        except (KeyError, ValueError) as e:
            raise InvalidArgumentError(f"Invalid message role: {data.get('role')!r}") from e
        content = data.get("content")
        if not isinstance(content, str):
            raise InvalidArgumentError("Message content must be a string")
        return cls(role=role, content=content)


@dataclass
class CompletionParams:
    """Parameters for a single completion call.

    Attributes:
        messages: Ordered conversation (non-empty)
        model: Model identifier (None means the configured default)
        max_tokens: Response token ceiling (positive)
        temperature: Sampling temperature in [0, 1]
        system: Optional system directive
    """

    messages: list[ChatMessage] = field(default_factory=list)
    model: str | None = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    system: str | None = None

    def __post_init__(self) -> None:
        """Validate completion parameters."""
        if not self.messages:
            raise InvalidArgumentError("At least one message is required")
        if self.max_tokens <= 0:
            raise InvalidArgumentError(f"max_tokens must be positive. Got: {self.max_tokens}")
        if not 0.0 <= self.temperature <= 1.0:
            raise InvalidArgumentError(
                f"temperature must be between 0 and 1. Got: {self.temperature}"
            )

    @classmethod
    def for_prompt(cls, prompt: str, profile: "CallProfile") -> "CompletionParams":
        """Build the single-user-message form used by analysis calls.

        Args:
            prompt: Rendered instruction text
            profile: Sampling parameters and system directive for the call

        Returns:
            CompletionParams with exactly one user message
        """
        return cls(
            messages=[ChatMessage(role=Role.USER, content=prompt)],
            model=profile.model,
            max_tokens=profile.max_tokens,
            temperature=profile.temperature,
            system=profile.system,
        )

"""Tool invocation envelope entities.

This module contains the request/response shapes shared by every tool:
- ToolCallRequest: name + arguments for one invocation
- ContentBlock: a single text block of tool output
- ToolResult: ordered content blocks plus an error flag
- ToolDescriptor: name, description and input schema advertised to callers
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from scale_advisor.errors import ErrorKind


@dataclass(frozen=True)
class ToolCallRequest:
    """A request to invoke a tool by name.

    Attributes:
        name: Registered tool name
        arguments: JSON-compatible arguments
    """

    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ToolCallRequest":
        """Create a request from a `{name, arguments}` mapping."""
        return cls(name=str(data.get("name", "")), arguments=data.get("arguments") or {})


@dataclass(frozen=True)
class ContentBlock:
    """A single block of tool output. Only text blocks are produced."""

    text: str
    type: str = "text"

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ToolResult:
    """Result of one tool invocation.

    Created fresh per call and never mutated after it is returned.

    Attributes:
        content: Ordered content blocks (non-empty on success)
        is_error: Whether the invocation failed
        error_kind: Kind of failure when is_error is set
    """

    content: tuple[ContentBlock, ...]
    is_error: bool = False
    error_kind: ErrorKind | None = None

    def __post_init__(self) -> None:
        """Enforce the success invariant."""
        if not self.is_error and not self.content:
            raise ValueError("A successful ToolResult must carry at least one content block")

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        """Create a successful single-text-block result."""
        return cls(content=(ContentBlock(text=text),))

    @classmethod
    def failure(cls, message: str, kind: ErrorKind = ErrorKind.INTERNAL) -> "ToolResult":
        """Create an error-tagged single-text-block result."""
        return cls(content=(ContentBlock(text=message),), is_error=True, error_kind=kind)

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content if block.type == "text")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire-level `{content, isError}` shape."""
        return {
            "content": [block.to_dict() for block in self.content],
            "isError": self.is_error,
        }


@dataclass(frozen=True)
class ToolDescriptor:
    """Advertised description of a registered tool.

    Attributes:
        name: Tool name used for dispatch
        description: Human-readable description
        input_schema: JSON Schema describing the accepted arguments
    """

    name: str
    description: str
    input_schema: Mapping[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the `{name, description, inputSchema}` listing shape."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": dict(self.input_schema),
        }

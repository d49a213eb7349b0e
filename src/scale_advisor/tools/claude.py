"""Direct model access tools: multi-turn chat and single-prompt completion.

Sampling fields the caller leaves out fall back to the ``claude_chat`` call
profile.
"""

from typing import Any

from scale_advisor.models.messages import ChatMessage, CompletionParams, Role
from scale_advisor.tools.base import AnalysisTool

_SAMPLING_PROPERTIES: dict[str, Any] = {
    "model": {
        "type": "string",
        "description": "Model to use (default: the configured model)",
    },
    "max_tokens": {
        "type": "integer",
        "minimum": 1,
        "description": "Maximum tokens in response (default: 1024)",
    },
    "temperature": {
        "type": "number",
        "minimum": 0,
        "maximum": 1,
        "description": "Response creativity (0-1, default: 0.7)",
    },
}


class ChatTool(AnalysisTool):
    """Passes a conversation straight to the model."""

    name = "claude_chat"
    description = (
        "Send messages to Claude for conversational AI responses. Supports multi-turn "
        "conversations with system prompts."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "messages": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "properties": {
                        "role": {"type": "string", "enum": [r.value for r in Role]},
                        "content": {"type": "string"},
                    },
                    "required": ["role", "content"],
                },
                "description": "Array of messages in the conversation",
            },
            **_SAMPLING_PROPERTIES,
            "system": {
                "type": "string",
                "description": "System prompt to guide Claude's behavior",
            },
        },
        "required": ["messages"],
    }
    profile_name = "claude_chat"

    def build_params(self, args: dict[str, Any]) -> CompletionParams:
        """Merge caller arguments over the chat profile."""
        profile = self.profile
        return CompletionParams(
            messages=[ChatMessage.from_dict(m) for m in args["messages"]],
            model=args.get("model", profile.model),
            max_tokens=args.get("max_tokens", profile.max_tokens),
            temperature=args.get("temperature", profile.temperature),
            system=args.get("system", profile.system),
        )

    async def execute(self, args: dict[str, Any]) -> str:
        return await self.client.complete(self.build_params(args))


class CompletionTool(ChatTool):
    """Sends one prompt to the model as a single user message."""

    name = "claude_completion"
    description = (
        "Get text completion from Claude for a given prompt. Simpler interface for "
        "single-turn interactions."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "prompt": {
                "type": "string",
                "description": "The text prompt to complete",
            },
            **_SAMPLING_PROPERTIES,
        },
        "required": ["prompt"],
    }

    def build_params(self, args: dict[str, Any]) -> CompletionParams:
        chat_args = dict(args)
        chat_args["messages"] = [{"role": Role.USER.value, "content": args["prompt"]}]
        return super().build_params(chat_args)

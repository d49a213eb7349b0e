"""Tool registry and dispatcher.

The registry maps tool names to AnalysisTool instances. It is populated once
at startup and only read afterwards, so concurrent calls share it safely.

Dispatch is the outermost error boundary: whatever happens inside a tool,
call() returns a ToolResult.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from scale_advisor.errors import ErrorKind
from scale_advisor.llm.client import CompletionClient
from scale_advisor.models.llm_config import CallProfile
from scale_advisor.models.results import ToolCallRequest, ToolDescriptor, ToolResult
from scale_advisor.tools.base import AnalysisTool
from scale_advisor.tools.claude import ChatTool, CompletionTool
from scale_advisor.tools.cloud_analyzer import CloudAnalyzerTool
from scale_advisor.tools.comprehensive import ComprehensiveAnalysisTool
from scale_advisor.tools.github_analyzer import GitHubAnalyzerTool
from scale_advisor.tools.security_analyzer import SecurityAnalyzerTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry of invokable tools, in registration order.

    Usage:
        registry = create_default_registry(client)
        result = await registry.call("analyze_cloud_resources", {})
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._tools: dict[str, AnalysisTool] = {}

    def register(self, tool: AnalysisTool) -> None:
        """Register a tool under its name.

        Args:
            tool: Tool instance

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> AnalysisTool | None:
        """Get a registered tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[ToolDescriptor]:
        """Describe every registered tool, in registration order."""
        return [tool.descriptor() for tool in self._tools.values()]

    @property
    def names(self) -> list[str]:
        """Registered tool names."""
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Invoke a tool by name.

        Args:
            name: Tool name
            arguments: Raw arguments (validated by the tool)

        Returns:
            The tool's result, or an error-tagged result for an unknown name
            or an unexpected exception
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", name)
            return ToolResult.failure(f"Unknown tool: {name}", ErrorKind.UNKNOWN_TOOL)

        logger.debug("Calling tool %s", name)
        try:
            return await tool.run(arguments)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Tool %s raised an unexpected error", name)
            return ToolResult.failure(f"Error executing tool {name}: {e}", ErrorKind.INTERNAL)

    async def dispatch(self, request: ToolCallRequest) -> ToolResult:
        """Invoke the tool named by a request envelope."""
        return await self.call(request.name, request.arguments)


def create_default_registry(
    client: CompletionClient,
    profiles: Mapping[str, CallProfile] | None = None,
) -> ToolRegistry:
    """Create a registry with every built-in tool.

    The comprehensive analysis tool runs its sub-tools through this same
    registry.

    Args:
        client: Language model client shared by all tools
        profiles: Call profile table (defaults to DEFAULT_PROFILES)

    Returns:
        Populated ToolRegistry
    """
    registry = ToolRegistry()

    registry.register(ChatTool(client, profiles))
    registry.register(CompletionTool(client, profiles))
    registry.register(GitHubAnalyzerTool(client, profiles))
    registry.register(CloudAnalyzerTool(client, profiles))
    registry.register(SecurityAnalyzerTool(client, profiles))
    registry.register(ComprehensiveAnalysisTool(client, registry.call, profiles))

    return registry

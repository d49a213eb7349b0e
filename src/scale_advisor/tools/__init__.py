"""Invokable analysis tools and their registry.

- base: AnalysisTool contract (defaults, schema validation, error wrapping)
- claude: claude_chat and claude_completion
- github_analyzer, cloud_analyzer, security_analyzer: leaf analysis tools
- comprehensive: the four-phase orchestration tool
- registry: ToolRegistry and create_default_registry
"""

from scale_advisor.tools.base import AnalysisTool
from scale_advisor.tools.claude import ChatTool, CompletionTool
from scale_advisor.tools.cloud_analyzer import CloudAnalyzerTool
from scale_advisor.tools.comprehensive import ComprehensiveAnalysisTool
from scale_advisor.tools.github_analyzer import GitHubAnalyzerTool, parse_github_url
from scale_advisor.tools.registry import ToolRegistry, create_default_registry
from scale_advisor.tools.security_analyzer import SecurityAnalyzerTool

__all__ = [
    "AnalysisTool",
    "ChatTool",
    "CompletionTool",
    "CloudAnalyzerTool",
    "ComprehensiveAnalysisTool",
    "GitHubAnalyzerTool",
    "SecurityAnalyzerTool",
    "ToolRegistry",
    "create_default_registry",
    "parse_github_url",
]

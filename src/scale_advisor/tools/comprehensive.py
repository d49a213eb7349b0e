"""Comprehensive repository and cloud analysis tool.

Wraps ComprehensiveAnalysisPipeline in the tool contract. Sub-tool calls go
through the same dispatch function callers use, so the orchestrator only
ever sees ToolResult envelopes from the analyzers.
"""

from collections.abc import Mapping
from typing import Any

from scale_advisor.errors import InvalidArgumentError
from scale_advisor.llm.client import CompletionClient
from scale_advisor.models.llm_config import CallProfile
from scale_advisor.pipeline import AnalysisRequest, ComprehensiveAnalysisPipeline, ToolInvoker
from scale_advisor.tools.base import AnalysisTool


class ComprehensiveAnalysisTool(AnalysisTool):
    """Runs the four-phase analysis and returns the compiled report."""

    name = "analyze_repository_and_cloud"
    description = (
        "Perform comprehensive analysis of a GitHub repository and cloud infrastructure. "
        "Combines repository analysis and cloud resource analysis to provide scaling "
        "recommendations and architectural insights."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "repository_url": {
                "type": "string",
                "description": (
                    "The GitHub repository URL to analyze (e.g., https://github.com/owner/repo)"
                ),
            },
            "analysis_depth": {
                "type": "string",
                "enum": ["basic", "detailed"],
                "description": "Level of analysis detail (default: basic)",
                "default": "basic",
            },
            "focus_areas": {
                "type": "array",
                "items": {"type": "string"},
                "description": (
                    "Specific areas to focus on "
                    "(e.g., ['security', 'performance', 'cost', 'scalability'])"
                ),
                "default": [],
            },
        },
        "required": ["repository_url"],
    }
    error_prefix = "Error in comprehensive analysis"

    def __init__(
        self,
        client: CompletionClient,
        invoke: ToolInvoker,
        profiles: Mapping[str, CallProfile] | None = None,
    ) -> None:
        """Initialize the tool.

        Args:
            client: Language model client for the synthesis, section and compilation calls
            invoke: Dispatch function used to run the phase-1 analyzers
            profiles: Call profile table (defaults to DEFAULT_PROFILES)
        """
        super().__init__(client, profiles)
        self.pipeline = ComprehensiveAnalysisPipeline(client, invoke, self.profiles)

    def check_arguments(self, args: dict[str, Any]) -> None:
        url = args.get("repository_url")
        if not isinstance(url, str) or "github.com" not in url:
            raise InvalidArgumentError(
                f"Invalid arguments for {self.name}. "
                "Repository URL is required and must be a valid GitHub URL."
            )

    async def execute(self, args: dict[str, Any]) -> str:
        request = AnalysisRequest(
            repository_url=args["repository_url"],
            analysis_depth=args["analysis_depth"],
            focus_areas=tuple(args["focus_areas"]),
        )
        return await self.pipeline.run(request)

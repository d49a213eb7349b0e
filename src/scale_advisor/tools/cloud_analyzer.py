"""AWS cloud resource analyzer tool."""

from typing import Any

from scale_advisor.llm.prompts import build_cloud_prompt
from scale_advisor.tools.base import AnalysisTool
from scale_advisor.tools.fixtures import get_cloud_resources

ANALYSIS_TYPES = ("overview", "detailed", "security", "cost")


class CloudAnalyzerTool(AnalysisTool):
    """Reviews the EC2 and RDS inventory of the account."""

    name = "analyze_cloud_resources"
    description = (
        "Analyze AWS cloud resources including EC2 instances and RDS databases. Provides "
        "insights on resource utilization, security, and cost optimization opportunities."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "analysis_type": {
                "type": "string",
                "enum": list(ANALYSIS_TYPES),
                "description": "Type of analysis to perform (default: overview)",
                "default": "overview",
            },
            "include_recommendations": {
                "type": "boolean",
                "description": "Whether to include optimization recommendations (default: true)",
                "default": True,
            },
        },
        "required": [],
    }
    error_prefix = "Error analyzing cloud resources"
    profile_name = "analyze_cloud_resources"

    async def execute(self, args: dict[str, Any]) -> str:
        prompt = build_cloud_prompt(
            get_cloud_resources(),
            analysis_type=args["analysis_type"],
            include_recommendations=args["include_recommendations"],
        )
        text = await self.complete(prompt)

        return f"# AWS Cloud Resources Analysis\n\n{text}"

"""Security posture analyzer tool."""

from typing import Any

from scale_advisor.llm.prompts import build_security_prompt
from scale_advisor.tools.base import AnalysisTool
from scale_advisor.tools.fixtures import get_security_data

SEVERITY_LEVELS = ("low", "medium", "high", "critical")

# Fixture categories included for each analysis scope
SCOPE_CATEGORIES: dict[str, tuple[str, ...]] = {
    "iam": ("iam",),
    "secrets": ("secrets",),
    "containers": ("containers",),
    "all": ("iam", "secrets", "containers", "compliance"),
}

_SEVERITY_KEYS = ("severity", "riskLevel")


def _severity_rank(item: dict[str, Any]) -> int | None:
    for key in _SEVERITY_KEYS:
        value = item.get(key)
        if isinstance(value, str) and value.lower() in SEVERITY_LEVELS:
            return SEVERITY_LEVELS.index(value.lower())
    return None


def filter_by_severity(node: Any, threshold: str) -> Any:
    """Drop findings ranked below a severity threshold.

    Walks nested lists and dicts; a dict inside a list is removed when its
    ``severity`` or ``riskLevel`` ranks below ``threshold``. Entries with no
    recognizable severity are kept.

    Args:
        node: Security data (or any part of it)
        threshold: Minimum severity to keep (low, medium, high, critical)

    Returns:
        Filtered copy of node
    """
    minimum = SEVERITY_LEVELS.index(threshold)

    if isinstance(node, dict):
        return {key: filter_by_severity(value, threshold) for key, value in node.items()}

    if isinstance(node, list):
        kept = []
        for item in node:
            if isinstance(item, dict):
                rank = _severity_rank(item)
                if rank is not None and rank < minimum:
                    continue
            kept.append(filter_by_severity(item, threshold))
        return kept

    return node


def select_security_data(scope: str, threshold: str) -> dict[str, Any]:
    """Return the fixture categories for a scope, filtered by severity."""
    data = get_security_data()
    selected = {category: data[category] for category in SCOPE_CATEGORIES[scope]}
    return filter_by_severity(selected, threshold)


class SecurityAnalyzerTool(AnalysisTool):
    """Assesses IAM, secrets, container and compliance findings."""

    name = "analyze_security_posture"
    description = (
        "Analyze security posture including IAM policies, secrets in code, and container "
        "security. Identifies common scaling security failure points and provides "
        "remediation recommendations."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "repository_url": {
                "type": "string",
                "description": "Optional GitHub repository URL the findings relate to",
            },
            "analysis_scope": {
                "type": "string",
                "enum": list(SCOPE_CATEGORIES),
                "description": "Scope of security analysis (default: all)",
                "default": "all",
            },
            "severity_threshold": {
                "type": "string",
                "enum": list(SEVERITY_LEVELS),
                "description": "Minimum severity level to report (default: medium)",
                "default": "medium",
            },
        },
        "required": [],
    }
    error_prefix = "Security analysis failed"
    profile_name = "analyze_security_posture"

    async def execute(self, args: dict[str, Any]) -> str:
        scope = args["analysis_scope"]
        threshold = args["severity_threshold"]

        prompt = build_security_prompt(
            select_security_data(scope, threshold),
            repository_url=args.get("repository_url"),
            analysis_scope=scope,
            severity_threshold=threshold,
        )
        text = await self.complete(prompt)

        return f"# Security Posture Analysis\n\n{text}"

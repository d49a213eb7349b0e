"""GitHub repository analyzer tool."""

import re
from typing import Any

from scale_advisor.errors import InvalidArgumentError
from scale_advisor.llm.prompts import build_github_prompt
from scale_advisor.tools.base import AnalysisTool

GITHUB_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")


def parse_github_url(url: str) -> tuple[str, str]:
    """Extract owner and repository name from a GitHub URL.

    Args:
        url: Repository URL (e.g. https://github.com/owner/repo.git)

    Returns:
        Tuple of (owner, repo) with any trailing ".git" removed

    Raises:
        InvalidArgumentError: If the URL has no github.com/<owner>/<repo> part
    """
    match = GITHUB_URL_PATTERN.search(url)
    if not match:
        raise InvalidArgumentError(
            "Invalid GitHub URL format. Please provide a valid GitHub repository URL "
            "(e.g., https://github.com/owner/repo)"
        )

    owner, repo = match.groups()
    repo = re.sub(r"\.git$", "", repo)
    return owner, repo


class GitHubAnalyzerTool(AnalysisTool):
    """Describes what a GitHub repository does and how it is built."""

    name = "github_analyze_repository"
    description = (
        "Analyze a GitHub repository to understand what it does, technologies used, "
        "architecture, and key features."
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
            "include_dependencies": {
                "type": "boolean",
                "description": (
                    "Whether to analyze dependencies and tech stack in detail (default: true)"
                ),
                "default": True,
            },
        },
        "required": ["repository_url"],
    }
    error_prefix = "Error analyzing GitHub repository"
    profile_name = "github_analyze_repository"

    def check_arguments(self, args: dict[str, Any]) -> None:
        url = args.get("repository_url")
        if not isinstance(url, str) or "github.com" not in url:
            raise InvalidArgumentError(
                f"Invalid arguments for {self.name}. "
                "Repository URL is required and must be a valid GitHub URL."
            )

    async def execute(self, args: dict[str, Any]) -> str:
        owner, repo = parse_github_url(args["repository_url"])
        full_name = f"{owner}/{repo}"

        prompt = build_github_prompt(
            full_name,
            analysis_depth=args["analysis_depth"],
            include_dependencies=args["include_dependencies"],
        )
        text = await self.complete(prompt)

        return f"# GitHub Repository Analysis: {full_name}\n\n{text}"

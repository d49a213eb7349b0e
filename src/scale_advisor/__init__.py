"""Scale Advisor - LLM-backed repository and cloud analysis tools.

Scale Advisor exposes a set of named tools that analyze a GitHub repository,
a cloud estate and its security posture by prompting a language model. The
`analyze_repository_and_cloud` tool orchestrates the others into a single
scaling advisory report.

Core principles:
- Deterministic prompts: same arguments always render the same prompt text
- All-or-nothing orchestration: a complete report or one descriptive error
- Tool isolation: a failing tool never takes the process down
"""

__version__ = "0.2.0"
__author__ = "Scale Advisor Contributors"

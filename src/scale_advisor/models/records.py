"""Transient records produced while running the comprehensive analysis.

- AnalysisPhaseOutput: a phase-1 sub-tool result tagged with its source tool
- ReportSections: the three audience-specific sections generated in phase 3

Both live only for the duration of one orchestration run.
"""

from dataclasses import dataclass

from scale_advisor.models.results import ToolResult


@dataclass(frozen=True)
class AnalysisPhaseOutput:
    """Result of one leaf tool, tagged with the tool that produced it.

    Attributes:
        source: Name of the tool that produced the result
        result: The tool's result envelope
    """

    source: str
    result: ToolResult

    @property
    def failed(self) -> bool:
        """Whether the sub-tool returned an error result."""
        return self.result.is_error

    @property
    def text(self) -> str:
        """The sub-tool's output text."""
        return self.result.text


@dataclass(frozen=True)
class ReportSections:
    """Independently generated report sections.

    Each section depends only on the synthesis document; they are combined
    only by the final compilation call.
    """

    executive_summary: str
    technical_details: str
    recommendations: str

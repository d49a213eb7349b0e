"""Comprehensive analysis pipeline.

Runs the four phases behind the analyze_repository_and_cloud tool:

    Phase 1: repository and cloud analyzers, concurrently (via the tool registry)
    Phase 2: one synthesis call over both analyses
    Phase 3: executive summary, technical details and recommendations, concurrently
    Phase 4: one compilation call over the three sections

Phases run strictly in order and each phase joins on all of its work before
the next starts. The run is all-or-nothing: any failure aborts it and no
partial report is produced. Failures in phases 2 to 4 are raised as
PhaseFailure, naming the phase and, for phase 3, the failing section.
"""

import logging
import time
from collections.abc import Awaitable, Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from scale_advisor.config import DEFAULT_PROFILES
from scale_advisor.errors import PhaseFailure, SubtoolFailure
from scale_advisor.llm.client import CompletionClient
from scale_advisor.llm.prompts import (
    SECTION_INSTRUCTIONS,
    build_compilation_prompt,
    build_section_prompt,
    build_synthesis_prompt,
)
from scale_advisor.models.llm_config import CallProfile
from scale_advisor.models.messages import CompletionParams
from scale_advisor.models.records import AnalysisPhaseOutput, ReportSections
from scale_advisor.models.results import ToolResult
from scale_advisor.utils.concurrency import gather_tagged
from scale_advisor.utils.logging import get_logger

logger = get_logger(__name__)

REPORT_HEADING = "# Comprehensive Repository & Cloud Analysis Report\n\n"

GITHUB_TOOL = "github_analyze_repository"
CLOUD_TOOL = "analyze_cloud_resources"

# Registry call signature: (tool name, arguments) -> result envelope
ToolInvoker = Callable[[str, Mapping[str, Any]], Awaitable[ToolResult]]


@dataclass(frozen=True)
class AnalysisRequest:
    """Validated input of one comprehensive analysis.

    Attributes:
        repository_url: GitHub repository URL
        analysis_depth: basic or detailed
        focus_areas: Areas the synthesis should emphasize
    """

    repository_url: str
    analysis_depth: str = "basic"
    focus_areas: tuple[str, ...] = field(default_factory=tuple)


class ComprehensiveAnalysisPipeline:
    """Runs the collection, synthesis, sectioning and compilation phases.

    Holds no per-run state, so one instance can serve concurrent runs.
    """

    def __init__(
        self,
        client: CompletionClient,
        invoke: ToolInvoker,
        profiles: Mapping[str, CallProfile] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            client: Language model client for phases 2 to 4
            invoke: Tool dispatch function used for phase 1
            profiles: Call profile table (defaults to DEFAULT_PROFILES)
        """
        self.client = client
        self.invoke = invoke
        self.profiles = profiles if profiles is not None else DEFAULT_PROFILES

    async def run(self, request: AnalysisRequest) -> str:
        """Run all four phases.

        Args:
            request: Validated analysis request

        Returns:
            Final report, starting with REPORT_HEADING

        Raises:
            SubtoolFailure: If a phase-1 analyzer returned an error result
            PhaseFailure: If any phase 2 to 4 model call fails
        """
        logger.info("Starting comprehensive analysis for %s", request.repository_url)
        started = time.perf_counter()

        outputs = await self.collect(request)
        synthesis = await self.synthesize(outputs, request.focus_areas)
        sections = await self.sectionize(synthesis)
        report = await self.compile(sections)

        logger.structured(
            logging.INFO,
            "Comprehensive analysis complete",
            repository_url=request.repository_url,
            elapsed_ms=_elapsed_ms(started),
            report_chars=len(report),
        )
        return report

    # =========================================================================
    # Phase 1: Parallel collection
    # =========================================================================

    async def collect(self, request: AnalysisRequest) -> dict[str, AnalysisPhaseOutput]:
        """Run the repository and cloud analyzers concurrently.

        Both analyzers always run to completion. Results are keyed by tool
        name, independent of which finished first.

        Args:
            request: Validated analysis request

        Returns:
            Phase outputs keyed by tool name

        Raises:
            SubtoolFailure: Listing every analyzer that returned an error
        """
        with self._phase(1, "collection"):
            results = await gather_tagged({
                GITHUB_TOOL: self.invoke(
                    GITHUB_TOOL,
                    {
                        "repository_url": request.repository_url,
                        "analysis_depth": request.analysis_depth,
                        "include_dependencies": True,
                    },
                ),
                CLOUD_TOOL: self.invoke(
                    CLOUD_TOOL,
                    {"analysis_type": "overview", "include_recommendations": True},
                ),
            })

            outputs = {
                source: AnalysisPhaseOutput(source=source, result=result)
                for source, result in results.items()
            }

            failures = [output for output in outputs.values() if output.failed]
            if failures:
                raise SubtoolFailure(failures)

        return outputs

    # =========================================================================
    # Phase 2: Synthesis
    # =========================================================================

    async def synthesize(
        self,
        outputs: Mapping[str, AnalysisPhaseOutput],
        focus_areas: Sequence[str] = (),
    ) -> str:
        """Merge both phase-1 analyses into one synthesis document.

        Args:
            outputs: Phase-1 outputs keyed by tool name
            focus_areas: Caller focus areas

        Returns:
            Synthesis document text
        """
        with self._phase(2, "synthesis"):
            prompt = build_synthesis_prompt(
                outputs[GITHUB_TOOL].text,
                outputs[CLOUD_TOOL].text,
                focus_areas,
            )
            return await self._complete(prompt, "comprehensive.synthesis")

    # =========================================================================
    # Phase 3: Parallel sectioning
    # =========================================================================

    async def sectionize(self, synthesis: str) -> ReportSections:
        """Generate the three report sections concurrently.

        The first failing call aborts the phase; the other calls are cancelled.

        Args:
            synthesis: Phase-2 synthesis document

        Returns:
            The three report sections

        Raises:
            PhaseFailure: Naming the first section that failed
        """
        with self._phase(3, "sectioning"):
            texts = await gather_tagged({
                section: self._section(section, synthesis)
                for section in SECTION_INSTRUCTIONS
            })

        return ReportSections(**texts)

    async def _section(self, section: str, synthesis: str) -> str:
        try:
            return await self._complete(
                build_section_prompt(section, synthesis),
                f"comprehensive.{section}",
            )
        except Exception as e:
            raise PhaseFailure(3, "sectioning", e, item=section) from e

    # =========================================================================
    # Phase 4: Compilation
    # =========================================================================

    async def compile(self, sections: ReportSections) -> str:
        """Compile the sections into the final report.

        Args:
            sections: Phase-3 report sections

        Returns:
            Final report, starting with REPORT_HEADING
        """
        with self._phase(4, "compilation"):
            text = await self._complete(
                build_compilation_prompt(sections),
                "comprehensive.compilation",
            )

        return f"{REPORT_HEADING}{text}"

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _complete(self, prompt: str, profile_name: str) -> str:
        params = CompletionParams.for_prompt(prompt, self.profiles[profile_name])
        return await self.client.complete(params)

    @contextmanager
    def _phase(self, number: int, name: str) -> Iterator[None]:
        """Log the start and outcome of a phase with its duration.

        Errors raised inside the phase are re-raised as PhaseFailure unless
        they already identify their source (SubtoolFailure, PhaseFailure).
        """
        logger.info("Phase %d: %s", number, name)
        started = time.perf_counter()
        try:
            yield
        except BaseException as e:
            logger.structured(
                logging.WARNING,
                f"Phase {number} ({name}) failed",
                phase=name,
                elapsed_ms=_elapsed_ms(started),
            )
            if isinstance(e, Exception) and not isinstance(e, (SubtoolFailure, PhaseFailure)):
                raise PhaseFailure(number, name, e) from e
            raise
        logger.structured(
            logging.DEBUG,
            f"Phase {number} ({name}) complete",
            phase=name,
            elapsed_ms=_elapsed_ms(started),
        )


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)

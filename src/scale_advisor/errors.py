"""Error taxonomy for tool execution.

Every failure that can surface from a tool carries an ErrorKind so callers
can branch on the kind of failure instead of matching message text:
- invalid_argument: malformed or missing arguments, detected before any model call
- subtool_failure: an orchestrated sub-tool returned an error result
- transport: the model endpoint could not be reached
- upstream: the model endpoint answered with a non-success status
- unknown_tool: the dispatcher has no tool under the requested name
- internal: anything else
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scale_advisor.models.records import AnalysisPhaseOutput


class ErrorKind(Enum):
    """Kind of failure carried by an error-tagged ToolResult."""

    INVALID_ARGUMENT = "invalid_argument"
    SUBTOOL_FAILURE = "subtool_failure"
    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL = "internal"


class ScaleAdvisorError(Exception):
    """Base class for expected tool failures."""

    kind: ErrorKind = ErrorKind.INTERNAL


class InvalidArgumentError(ScaleAdvisorError):
    """Raised when tool arguments fail validation."""

    kind = ErrorKind.INVALID_ARGUMENT


class SubtoolFailure(ScaleAdvisorError):
    """Raised when one or more orchestrated sub-tools returned an error result.

    Attributes:
        failures: Every failing phase output, in invocation order
    """

    kind = ErrorKind.SUBTOOL_FAILURE

    def __init__(self, failures: list["AnalysisPhaseOutput"]) -> None:
        self.failures = failures
        details = "; ".join(f"{f.source}: {f.result.text}" for f in failures)
        super().__init__(f"Analysis failed: {details}")

    @property
    def sources(self) -> list[str]:
        """Names of the failing sub-tools."""
        return [f.source for f in self.failures]


class PhaseFailure(ScaleAdvisorError):
    """Raised when a pipeline phase after collection fails.

    Carries the kind of the underlying error, so a transport or upstream
    failure keeps its kind, and its text verbatim.

    Attributes:
        phase: Phase number (2 to 4)
        name: Phase name
        item: Failing item within the phase (the section for phase 3)
        error: The underlying exception
    """

    def __init__(
        self,
        phase: int,
        name: str,
        error: BaseException,
        item: str | None = None,
    ) -> None:
        self.phase = phase
        self.name = name
        self.item = item
        self.error = error
        self.kind = getattr(error, "kind", ErrorKind.INTERNAL)
        detail = f"{item}: {error}" if item else str(error)
        super().__init__(f"Phase {phase} ({name}) failed: {detail}")

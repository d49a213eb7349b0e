"""Abstract base class for analysis tools.

Every tool follows the same contract:
1. Normalize and default the raw arguments
2. Validate them against the tool's JSON Schema
3. Render a prompt and call the language model (execute)
4. Wrap the text, or the failure, in a ToolResult

No failure except cancellation escapes run(): it comes back as an error-tagged result
whose text starts with the tool's error prefix.
"""

import asyncio
import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from jsonschema import Draft202012Validator

from scale_advisor.config import DEFAULT_PROFILES
from scale_advisor.errors import ErrorKind, InvalidArgumentError, ScaleAdvisorError
from scale_advisor.llm.client import CompletionClient
from scale_advisor.models.llm_config import CallProfile
from scale_advisor.models.messages import CompletionParams
from scale_advisor.models.results import ToolDescriptor, ToolResult

logger = logging.getLogger(__name__)


class AnalysisTool(ABC):
    """Abstract interface for a registered tool.

    Subclasses declare their identity and schema as class attributes and
    implement execute().

    Attributes:
        name: Tool name used for dispatch
        description: Human-readable description
        input_schema: JSON Schema for the arguments (defaults are applied from it)
        error_prefix: Text that starts every error message of this tool
        profile_name: Key into the call profile table
    """

    name: ClassVar[str]
    description: ClassVar[str]
    input_schema: ClassVar[dict[str, Any]]
    error_prefix: ClassVar[str] = "Error"
    profile_name: ClassVar[str | None] = None

    def __init__(
        self,
        client: CompletionClient,
        profiles: Mapping[str, CallProfile] | None = None,
    ) -> None:
        """Initialize the tool.

        Args:
            client: Language model client
            profiles: Call profile table (defaults to DEFAULT_PROFILES)
        """
        self.client = client
        self.profiles = profiles if profiles is not None else DEFAULT_PROFILES
        Draft202012Validator.check_schema(self.input_schema)
        self._validator = Draft202012Validator(self.input_schema)

    @property
    def profile(self) -> CallProfile:
        """Sampling parameters for this tool's model call."""
        if self.profile_name is None:
            raise LookupError(f"Tool {self.name} has no call profile")
        return self.profiles[self.profile_name]

    def descriptor(self) -> ToolDescriptor:
        """Describe this tool for listings."""
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=copy.deepcopy(self.input_schema),
        )

    # =========================================================================
    # Arguments
    # =========================================================================

    def prepare_arguments(self, arguments: Any) -> dict[str, Any]:
        """Normalize, default and validate raw arguments.

        Args:
            arguments: Raw arguments from the caller (None means no arguments)

        Returns:
            New dict with schema defaults applied

        Raises:
            InvalidArgumentError: If the arguments are not valid
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise InvalidArgumentError(f"Invalid arguments for {self.name}: expected an object")

        args = dict(arguments)
        for key, prop in self.input_schema.get("properties", {}).items():
            if key not in args and "default" in prop:
                args[key] = copy.deepcopy(prop["default"])

        self.check_arguments(args)

        errors = sorted(self._validator.iter_errors(args), key=lambda err: [str(p) for p in err.path])
        if errors:
            details = "; ".join(
                f"{'/'.join(map(str, err.path)) or '<root>'}: {err.message}" for err in errors[:5]
            )
            raise InvalidArgumentError(f"Invalid arguments for {self.name}: {details}")

        return args

    def check_arguments(self, args: dict[str, Any]) -> None:
        """Tool-specific checks, run before schema validation.

        Args:
            args: Defaulted arguments

        Raises:
            InvalidArgumentError: If a tool-specific rule is violated
        """

    # =========================================================================
    # Execution
    # =========================================================================

    async def run(self, arguments: Any) -> ToolResult:
        """Run the tool and wrap the outcome in a ToolResult.

        Args:
            arguments: Raw arguments from the caller

        Returns:
            Successful result with the tool output, or an error-tagged result
        """
        try:
            args = self.prepare_arguments(arguments)
            text = await self.execute(args)
        except ScaleAdvisorError as e:
            logger.warning("%s failed (%s): %s", self.name, e.kind.value, e)
            return ToolResult.failure(f"{self.error_prefix}: {e}", e.kind)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("%s raised an unexpected error", self.name)
            return ToolResult.failure(f"{self.error_prefix}: {e}", ErrorKind.INTERNAL)

        return ToolResult.success(text)

    @abstractmethod
    async def execute(self, args: dict[str, Any]) -> str:
        """Produce the tool's output text.

        Args:
            args: Validated arguments with defaults applied

        Returns:
            Output text

        Raises:
            ScaleAdvisorError: For any expected failure
        """

    async def complete(self, prompt: str, profile: CallProfile | None = None) -> str:
        """Call the model once with a single-user-message prompt.

        Args:
            prompt: Rendered instruction
            profile: Call profile (defaults to this tool's profile)

        Returns:
            Generated text
        """
        params = CompletionParams.for_prompt(prompt, profile or self.profile)
        return await self.client.complete(params)

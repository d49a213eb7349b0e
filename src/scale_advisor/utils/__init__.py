"""Scale Advisor utility modules.

- concurrency: Tagged fan-out/join for concurrent phases
- logging: Standardized logging with human/verbose/JSON modes
- preflight: LLM availability checks
"""

from scale_advisor.utils.concurrency import gather_tagged
from scale_advisor.utils.logging import get_logger, setup_logging
from scale_advisor.utils.preflight import PreflightChecker, PreflightResult

__all__ = [
    "gather_tagged",
    "get_logger",
    "setup_logging",
    "PreflightChecker",
    "PreflightResult",
]

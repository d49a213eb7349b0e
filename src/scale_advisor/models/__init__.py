"""Scale Advisor data models.

This module exports the core entities used throughout the application:
- ToolCallRequest / ToolResult / ContentBlock: the tool invocation envelope
- ToolDescriptor: advertised tool name, description and input schema
- ChatMessage / CompletionParams: language model request shapes
- LLMConfig / CallProfile: provider settings and per-call sampling parameters
- AnalysisPhaseOutput / ReportSections: transient orchestration records
"""

from scale_advisor.models.llm_config import CallProfile, LLMConfig
from scale_advisor.models.messages import ChatMessage, CompletionParams, Role
from scale_advisor.models.records import AnalysisPhaseOutput, ReportSections
from scale_advisor.models.results import (
    ContentBlock,
    ToolCallRequest,
    ToolDescriptor,
    ToolResult,
)

__all__ = [
    "ToolCallRequest",
    "ToolResult",
    "ContentBlock",
    "ToolDescriptor",
    "ChatMessage",
    "CompletionParams",
    "Role",
    "LLMConfig",
    "CallProfile",
    "AnalysisPhaseOutput",
    "ReportSections",
]

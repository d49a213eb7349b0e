"""LLM integration module for Scale Advisor.

Provides an async client wrapper using LiteLLM for multi-provider support
(Claude, Gemini, Ollama, Bedrock) and the deterministic prompt builders used
by every analysis tool and pipeline phase.
"""

from scale_advisor.llm.client import (
    CompletionClient,
    LLMClient,
    LLMError,
    TransportError,
    UpstreamError,
    create_client,
    extract_text,
)
from scale_advisor.llm.prompts import (
    SECTION_INSTRUCTIONS,
    SYSTEM_PROMPTS,
    build_cloud_prompt,
    build_compilation_prompt,
    build_github_prompt,
    build_section_prompt,
    build_security_prompt,
    build_synthesis_prompt,
    get_system_prompt,
)
from scale_advisor.models.llm_config import VALID_PROVIDERS, LLMConfig

__all__ = [
    "CompletionClient",
    "LLMClient",
    "LLMConfig",
    "LLMError",
    "SECTION_INSTRUCTIONS",
    "SYSTEM_PROMPTS",
    "TransportError",
    "UpstreamError",
    "VALID_PROVIDERS",
    "build_cloud_prompt",
    "build_compilation_prompt",
    "build_github_prompt",
    "build_section_prompt",
    "build_security_prompt",
    "build_synthesis_prompt",
    "create_client",
    "extract_text",
    "get_system_prompt",
]

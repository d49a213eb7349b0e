"""LLM configuration entities for Scale Advisor.

Defines the provider connection settings (LLMConfig) and the per-call
sampling parameters (CallProfile) used by every tool and pipeline phase.
Supports multiple providers through LiteLLM: Claude, Gemini, Ollama, Bedrock.
"""

from dataclasses import dataclass, field

from scale_advisor.models.messages import DEFAULT_MODEL

# Valid LLM providers
VALID_PROVIDERS = frozenset({"claude", "gemini", "ollama", "bedrock"})

# LiteLLM model name prefix per provider
_LITELLM_PREFIXES = {
    "claude": "anthropic",
    "gemini": "gemini",
    "ollama": "ollama",
    "bedrock": "bedrock",
}

DEFAULT_OLLAMA_BASE = "http://localhost:11434"


@dataclass
class LLMConfig:
    """Configuration for the LLM provider connection.

    Attributes:
        provider: LLM provider (claude, gemini, ollama, bedrock)
        model: Default model identifier for calls that do not name one
        api_key: API key (not required for Ollama or Bedrock)
        api_base: API base URL (defaults to the local server for Ollama)
        timeout: Per-call deadline in seconds
        enabled: Whether model calls are allowed at all
    """

    provider: str = "claude"
    model: str = DEFAULT_MODEL
    api_key: str | None = None
    api_base: str | None = None
    timeout: float = field(default=60.0)
    enabled: bool = field(default=True)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.provider = self.provider.lower().strip()

        if self.provider not in VALID_PROVIDERS:
            raise ValueError(
                f"Invalid provider '{self.provider}'. "
                f"Must be one of: {sorted(VALID_PROVIDERS)}"
            )

        if not self.model or not self.model.strip():
            raise ValueError("Model identifier cannot be empty")
        self.model = self.model.strip()

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive. Got: {self.timeout}")

        if self.provider == "ollama" and not self.api_base:
            self.api_base = DEFAULT_OLLAMA_BASE

    @property
    def requires_api_key(self) -> bool:
        """Return True for hosted providers authenticated by API key."""
        return self.provider in {"claude", "gemini"}

    def validate(self) -> list[str]:
        """Validate configuration and return warnings.

        Returns:
            List of warning messages (empty if no warnings)
        """
        warnings: list[str] = []

        if self.requires_api_key and not self.api_key:
            warnings.append(f"No API key configured for {self.provider}")

        if self.api_base and not self.api_base.startswith(("http://", "https://")):
            warnings.append(
                f"api_base '{self.api_base}' does not start with http:// or https://"
            )

        if self.timeout > 300:
            warnings.append(f"timeout is set to {self.timeout}s; calls may hang for a long time")

        return warnings

    def get_litellm_model_name(self, model: str | None = None) -> str:
        """Get a model name in LiteLLM `provider/model` format.

        Args:
            model: Model identifier (defaults to the configured model)

        Returns:
            Model name formatted for LiteLLM
        """
        name = model or self.model
        prefix = _LITELLM_PREFIXES[self.provider]
        if name.startswith(f"{prefix}/"):
            return name
        return f"{prefix}/{name}"


@dataclass(frozen=True)
class CallProfile:
    """Sampling parameters for one kind of completion call.

    Attributes:
        max_tokens: Response token ceiling
        temperature: Sampling temperature in [0, 1]
        system: System directive sent with the call
        model: Model override (None uses the configured model)
    """

    max_tokens: int
    temperature: float
    system: str | None = None
    model: str | None = None

    def __post_init__(self) -> None:
        """Validate profile values."""
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive. Got: {self.max_tokens}")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1. Got: {self.temperature}")

"""Scale Advisor configuration system.

Configuration is YAML-based with minimal CLI overrides (--config, --verbose, --ci).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.scale-advisor/config.yaml
3. ./scale-advisor.yaml

Every model call made by a tool or by a pipeline phase takes its sampling
parameters from one named CallProfile. DEFAULT_PROFILES is the single table of
those parameters; the `profiles` section of the config file overrides entries.
"""

import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from scale_advisor.llm.prompts import get_system_prompt
from scale_advisor.models.llm_config import CallProfile, LLMConfig
from scale_advisor.models.messages import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE

# Environment variables consulted, in order, when no api_key is configured
API_KEY_ENV_VARS = ("CLAUDE_API_KEY", "ANTHROPIC_API_KEY")

# =============================================================================
# Call Profiles
# =============================================================================


def _profile(name: str, max_tokens: int, temperature: float) -> CallProfile:
    return CallProfile(
        max_tokens=max_tokens,
        temperature=temperature,
        system=get_system_prompt(name),
    )


DEFAULT_PROFILES: dict[str, CallProfile] = {
    "claude_chat": CallProfile(max_tokens=DEFAULT_MAX_TOKENS, temperature=DEFAULT_TEMPERATURE),
    "github_analyze_repository": _profile("github_analyze_repository", 2048, 0.3),
    "analyze_cloud_resources": _profile("analyze_cloud_resources", 2048, 0.3),
    "analyze_security_posture": _profile("analyze_security_posture", 2048, 0.3),
    "comprehensive.synthesis": _profile("comprehensive.synthesis", 1500, 0.4),
    "comprehensive.executive_summary": _profile("comprehensive.executive_summary", 800, 0.3),
    "comprehensive.technical_details": _profile("comprehensive.technical_details", 1200, 0.3),
    "comprehensive.recommendations": _profile("comprehensive.recommendations", 1000, 0.3),
    "comprehensive.compilation": _profile("comprehensive.compilation", 2048, 0.2),
}

_PROFILE_FIELDS = frozenset({"max_tokens", "temperature", "system", "model"})


def merge_profiles(overrides: dict[str, Any] | None) -> dict[str, CallProfile]:
    """Apply config file overrides on top of DEFAULT_PROFILES.

    Args:
        overrides: Mapping of profile name to a dict of overridden fields

    Returns:
        New profile table (DEFAULT_PROFILES is never modified)

    Raises:
        ValueError: If a profile name or field is unknown, or a value is invalid
    """
    profiles = dict(DEFAULT_PROFILES)

    for name, values in (overrides or {}).items():
        if name not in profiles:
            raise ValueError(
                f"Unknown call profile: {name}. Valid: {sorted(DEFAULT_PROFILES)}"
            )
        if not isinstance(values, dict):
            raise ValueError(f"Profile '{name}' must be a mapping")

        unknown = set(values) - _PROFILE_FIELDS
        if unknown:
            raise ValueError(
                f"Unknown fields for profile '{name}': {sorted(unknown)}. "
                f"Valid: {sorted(_PROFILE_FIELDS)}"
            )

        for key, value in values.items():
            _check_profile_field(name, key, value)

        profiles[name] = replace(profiles[name], **values)

    return profiles


def _check_profile_field(name: str, key: str, value: Any) -> None:
    # bool is an int subclass; YAML `true` must not pass as a number
    if key == "max_tokens":
        ok = isinstance(value, int) and not isinstance(value, bool)
        expected = "an integer"
    elif key == "temperature":
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        expected = "a number"
    else:
        ok = value is None or isinstance(value, str)
        expected = "a string"

    if not ok:
        raise ValueError(
            f"Profile '{name}' field '{key}' must be {expected}, got {type(value).__name__}"
        )


# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class AdvisorConfig:
    """Top-level Scale Advisor configuration.

    Attributes:
        llm: Provider connection settings
        profiles: Sampling parameters per call profile
    """

    llm: LLMConfig = field(default_factory=LLMConfig)
    profiles: dict[str, CallProfile] = field(default_factory=lambda: dict(DEFAULT_PROFILES))

    # Set by load_config
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${CLAUDE_API_KEY} -> value of CLAUDE_API_KEY

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


def api_key_from_env() -> str | None:
    """Return the first API key found in the environment, if any."""
    for var_name in API_KEY_ENV_VARS:
        value = os.environ.get(var_name)
        if value:
            return value
    return None


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.scale-advisor/config.yaml
    2. ./scale-advisor.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".scale-advisor" / "config.yaml",
        start_path / "scale-advisor.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> AdvisorConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        AdvisorConfig instance

    Raises:
        ValueError: If any value is invalid
    """
    data = substitute_env_vars(data)

    config = AdvisorConfig()

    llm_data = data.get("llm") or {}
    config.llm = LLMConfig(
        provider=llm_data.get("provider", "claude"),
        model=llm_data.get("model", config.llm.model),
        api_key=llm_data.get("api_key") or api_key_from_env(),
        api_base=llm_data.get("api_base"),
        timeout=float(llm_data.get("timeout", config.llm.timeout)),
        enabled=llm_data.get("enabled", True),
    )

    if "profiles" in data:
        config.profiles = merge_profiles(data["profiles"])

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> AdvisorConfig:
    """Load configuration from file.

    Without a config file the defaults apply, with the API key taken from
    the environment.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        AdvisorConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = load_config_from_dict({})

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# Scale Advisor Configuration

# LLM settings
llm:
  provider: "claude"     # claude, gemini, ollama, bedrock
  model: "claude-3-7-sonnet-20250219"
  # api_key: "${CLAUDE_API_KEY}"  # Defaults to $CLAUDE_API_KEY, then $ANTHROPIC_API_KEY
  # api_base: "http://localhost:11434"  # Ollama server URL
  timeout: 60            # Per-call deadline in seconds
  enabled: true

# Per-call sampling overrides (max_tokens, temperature, model, system)
# profiles:
#   github_analyze_repository:
#     max_tokens: 2048
#     temperature: 0.3
#   comprehensive.synthesis:
#     max_tokens: 1500
#     temperature: 0.4
#   comprehensive.compilation:
#     model: "claude-3-5-sonnet-20241022"
'''

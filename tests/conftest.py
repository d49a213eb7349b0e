"""Shared pytest fixtures for Scale Advisor tests.

Fixtures are organized by category:
- Client fixtures: scripted completion clients
- Configuration fixtures: config dictionaries and files
- Registry fixtures: registries wired to a scripted client
"""

from pathlib import Path
from typing import Any

import pytest

from scale_advisor.tools.registry import ToolRegistry, create_default_registry
from tests.fixtures import ScriptedClient

# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def scripted_client() -> ScriptedClient:
    """Return a scripted client that answers every call with its marker."""
    return ScriptedClient()


@pytest.fixture(autouse=True)
def _clear_api_key_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real API keys in the environment out of config loading."""
    monkeypatch.delenv("CLAUDE_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid configuration."""
    return {
        "llm": {
            "provider": "claude",
            "api_key": "test-key",
        }
    }


@pytest.fixture
def ollama_config() -> dict[str, Any]:
    """Return a configuration using a local Ollama server."""
    return {
        "llm": {
            "provider": "ollama",
            "model": "llama3.2",
            "timeout": 30,
        }
    }


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a config file with a profile override and return its path."""
    path = tmp_path / "scale-advisor.yaml"
    path.write_text(
        "llm:\n"
        "  provider: claude\n"
        "  api_key: file-key\n"
        "  timeout: 45\n"
        "profiles:\n"
        "  comprehensive.synthesis:\n"
        "    max_tokens: 900\n"
    )
    return path


# =============================================================================
# Registry Fixtures
# =============================================================================


@pytest.fixture
def registry(scripted_client: ScriptedClient) -> ToolRegistry:
    """Return the default registry wired to the scripted client."""
    return create_default_registry(scripted_client)

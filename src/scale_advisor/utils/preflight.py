"""Preflight validation.

Checks that the model provider is usable before any tool is invoked, so a
missing package or bad credential is reported once with a clear message
instead of surfacing as an error result from every tool call.
"""

import importlib.util
import json
import os
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from scale_advisor.models.llm_config import DEFAULT_OLLAMA_BASE


@dataclass
class ToolCheck:
    """Result of checking a single dependency.

    Attributes:
        name: Dependency name
        available: Whether it is available
        version: Version if known
        required: Whether it is required for this run
        path: Module path or endpoint URL if known
        message: Status message (human-readable context)
    """

    name: str
    available: bool
    version: str | None = None
    required: bool = True
    path: str | None = None
    message: str = ""


@dataclass
class PreflightResult:
    """Result of preflight validation.

    Attributes:
        success: Whether all required checks passed
        checks: Individual check results
        errors: Error messages for failed required checks
        warnings: Warning messages for failed optional checks
    """

    success: bool = True
    checks: list[ToolCheck] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_check(self, check: ToolCheck) -> None:
        """Add a check result."""
        self.checks.append(check)

        if not check.available:
            if check.required:
                self.success = False
                self.errors.append(f"{check.name}: {check.message}")
            else:
                self.warnings.append(f"{check.name}: {check.message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "success": self.success,
            "checks": [
                {
                    "name": c.name,
                    "available": c.available,
                    "version": c.version,
                    "required": c.required,
                    "path": c.path,
                    "message": c.message,
                }
                for c in self.checks
            ],
            "errors": self.errors,
            "warnings": self.warnings,
        }


class PreflightChecker:
    """Validates LLM availability before tools run.

    Usage:
        checker = PreflightChecker()
        result = checker.check_all(provider="claude", api_key=key)
        if not result.success:
            raise typer.Exit(1)
    """

    def __init__(self, timeout: int = 10) -> None:
        """Initialize preflight checker.

        Args:
            timeout: Timeout in seconds for network probes
        """
        self.timeout = timeout

    def check_litellm(self, required: bool = True) -> ToolCheck:
        """Check if the LiteLLM package is importable.

        Args:
            required: Whether LiteLLM is required

        Returns:
            ToolCheck result
        """
        litellm_spec = importlib.util.find_spec("litellm")
        if litellm_spec is None:
            return ToolCheck(
                name="litellm",
                available=False,
                required=required,
                message="Install with: pip install litellm",
            )

        import litellm

        return ToolCheck(
            name="litellm",
            available=True,
            version=getattr(litellm, "__version__", None),
            required=required,
            path=litellm_spec.origin,
            message="Unified LLM interface (Python package)",
        )

    def check_ollama_server(self, api_base: str = DEFAULT_OLLAMA_BASE) -> ToolCheck:
        """Check if an Ollama server is running and responding.

        Args:
            api_base: Ollama API base URL

        Returns:
            ToolCheck result
        """
        try:
            req = urllib.request.Request(f"{api_base}/api/tags", method="GET")
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                data = json.loads(response.read().decode() or "{}")
        except (urllib.error.URLError, OSError, ValueError) as e:
            return ToolCheck(
                name="ollama",
                available=False,
                message=f"Ollama not responding at {api_base} ({e})",
            )

        models = [m.get("name") for m in data.get("models", []) if isinstance(m, dict)]
        return ToolCheck(
            name="ollama",
            available=True,
            path=api_base,
            message=f"Local LLM server ({len(models)} models installed)",
        )

    def check_llm_provider(
        self,
        provider: str,
        api_key: str | None = None,
        api_base: str | None = None,
        model: str | None = None,
    ) -> ToolCheck:
        """Check if the configured LLM provider is usable.

        Claude and Gemini are verified with a real one-token completion,
        Ollama with a server probe, Bedrock by credential presence.

        Args:
            provider: LLM provider (claude, gemini, ollama, bedrock)
            api_key: API key for hosted providers
            api_base: API base URL (Ollama)
            model: Model to test with

        Returns:
            ToolCheck result
        """
        if provider == "ollama":
            return self.check_ollama_server(api_base or DEFAULT_OLLAMA_BASE)

        if provider == "bedrock":
            return self.check_bedrock_credentials()

        if provider in {"claude", "gemini"}:
            if not api_key:
                return ToolCheck(
                    name=provider,
                    available=False,
                    message="API key required. Set llm.api_key or CLAUDE_API_KEY env var",
                )
            return self._check_connectivity(provider, api_key, model)

        return ToolCheck(
            name=provider,
            available=False,
            message=f"Unknown LLM provider: {provider}",
        )

    def _check_connectivity(
        self,
        provider: str,
        api_key: str,
        model: str | None = None,
    ) -> ToolCheck:
        """Test actual connectivity to a hosted provider.

        Args:
            provider: claude or gemini
            api_key: Provider API key
            model: Model to test with

        Returns:
            ToolCheck result
        """
        import litellm

        prefix = "anthropic" if provider == "claude" else "gemini"
        test_model = model or ("claude-3-haiku-20240307" if provider == "claude" else "gemini-1.5-flash")

        try:
            litellm.completion(
                model=f"{prefix}/{test_model}",
                messages=[{"role": "user", "content": "Say ok"}],
                max_tokens=1,
                temperature=0,
                api_key=api_key,
                timeout=self.timeout,
            )
        except Exception as e:
            error_msg = str(e)
            if "invalid_api_key" in error_msg.lower() or "authentication" in error_msg.lower():
                message = "Invalid API key"
            else:
                message = f"API connection failed: {error_msg}"
            return ToolCheck(name=provider, available=False, message=message)

        return ToolCheck(
            name=provider,
            available=True,
            message=f"API verified (model: {test_model})",
        )

    def check_bedrock_credentials(self) -> ToolCheck:
        """Check that AWS credentials are configured for Bedrock.

        Returns:
            ToolCheck result
        """
        has_env_creds = bool(
            os.environ.get("AWS_ACCESS_KEY_ID") and os.environ.get("AWS_SECRET_ACCESS_KEY")
        )
        aws_profile = os.environ.get("AWS_PROFILE")
        credentials_path = Path.home() / ".aws" / "credentials"

        has_file_creds = False
        if credentials_path.exists():
            try:
                content = credentials_path.read_text()
            except OSError:
                content = ""
            has_file_creds = "[default]" in content or bool(
                aws_profile and f"[{aws_profile}]" in content
            )

        if not has_env_creds and not has_file_creds:
            return ToolCheck(
                name="bedrock",
                available=False,
                message=(
                    "AWS credentials required. Configure via:\n"
                    "  - Environment: AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY\n"
                    "  - Credentials file: ~/.aws/credentials"
                ),
            )

        region = os.environ.get("AWS_REGION", os.environ.get("AWS_DEFAULT_REGION", "us-east-1"))
        source = "env vars" if has_env_creds else f"profile: {aws_profile or 'default'}"
        return ToolCheck(
            name="bedrock",
            available=True,
            message=f"AWS credentials found (region: {region}, credentials: {source})",
        )

    def check_all(
        self,
        provider: str = "claude",
        api_key: str | None = None,
        api_base: str | None = None,
        model: str | None = None,
        skip_llm: bool = False,
    ) -> PreflightResult:
        """Run all preflight checks.

        Args:
            provider: LLM provider
            api_key: API key for hosted providers
            api_base: API base URL for Ollama
            model: Model to test with
            skip_llm: Skip the provider connectivity check

        Returns:
            PreflightResult with all check results
        """
        result = PreflightResult()

        litellm_check = self.check_litellm(required=True)
        result.add_check(litellm_check)

        if not skip_llm and litellm_check.available:
            result.add_check(
                self.check_llm_provider(
                    provider=provider,
                    api_key=api_key,
                    api_base=api_base,
                    model=model,
                )
            )

        return result

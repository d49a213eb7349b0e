"""Scale Advisor CLI interface.

Commands:
- tools: List the registered tools and their input schemas
- call: Invoke one tool with JSON arguments
- analyze: Run the comprehensive repository and cloud analysis
- check: Validate LLM availability (preflight)
- init: Initialize Scale Advisor configuration

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit

Tool output goes to stdout; logs go to stderr.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer

from scale_advisor import __version__
from scale_advisor.config import AdvisorConfig, create_default_config, load_config
from scale_advisor.llm.client import LLMClient, create_client
from scale_advisor.models.results import ToolResult
from scale_advisor.tools.registry import ToolRegistry, create_default_registry
from scale_advisor.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="scale-advisor",
    help="LLM-backed repository and cloud scaling analysis tools",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: AdvisorConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"scale-advisor {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Scale Advisor - repository and cloud scaling analysis.

    Exposes analysis tools backed by a language model, including a
    multi-phase report that combines repository and infrastructure findings.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
        for warning in _config.llm.validate():
            _logger.warning(warning)
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, OSError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


def _get_config() -> AdvisorConfig:
    return _config if _config is not None else load_config()


def _build_registry() -> ToolRegistry:
    """Create the tool registry with a live LLM client, or exit."""
    config = _get_config()
    try:
        client = create_client(config.llm)
    except ValueError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    return create_default_registry(client, config.profiles)


def _emit(result: ToolResult, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        typer.echo(result.text)


# =============================================================================
# tools command
# =============================================================================


@app.command()
def tools(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output descriptors as JSON",
        ),
    ] = False,
) -> None:
    """List the available tools."""
    # Listing makes no model calls, so no API key is needed
    config = _get_config()
    registry = create_default_registry(LLMClient(config.llm), config.profiles)
    descriptors = registry.list_tools()

    if json_output:
        typer.echo(json.dumps({"tools": [d.to_dict() for d in descriptors]}, indent=2))
        return

    for descriptor in descriptors:
        typer.echo(f"{descriptor.name}")
        typer.echo(f"    {descriptor.description}")
        required = set(descriptor.input_schema.get("required", []))
        for prop, schema in descriptor.input_schema.get("properties", {}).items():
            marker = "*" if prop in required else " "
            typer.echo(f"    {marker} {prop}: {schema.get('type', 'any')}")


# =============================================================================
# call command
# =============================================================================


@app.command()
def call(
    name: Annotated[
        str,
        typer.Argument(help="Tool name (see 'scale-advisor tools')"),
    ],
    args: Annotated[
        str,
        typer.Option(
            "--args",
            "-a",
            help="Tool arguments as a JSON object",
        ),
    ] = "{}",
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the full result envelope as JSON",
        ),
    ] = False,
) -> None:
    """Invoke a tool by name.

    Exit codes:
        0: Tool succeeded
        1: Tool returned an error result, or the arguments are not a JSON object
    """
    try:
        arguments: Any = json.loads(args)
    except json.JSONDecodeError as e:
        _logger.error(f"Invalid JSON in --args: {e}")
        raise typer.Exit(1)

    if not isinstance(arguments, dict):
        _logger.error("--args must be a JSON object")
        raise typer.Exit(1)

    registry = _build_registry()
    result = asyncio.run(registry.call(name, arguments))

    _emit(result, json_output)
    if result.is_error:
        raise typer.Exit(1)


# =============================================================================
# analyze command
# =============================================================================


@app.command()
def analyze(
    repository_url: Annotated[
        str,
        typer.Argument(help="GitHub repository URL (e.g. https://github.com/owner/repo)"),
    ],
    depth: Annotated[
        str,
        typer.Option(
            "--depth",
            "-d",
            help="Analysis depth: basic or detailed",
        ),
    ] = "basic",
    focus: Annotated[
        list[str] | None,
        typer.Option(
            "--focus",
            "-f",
            help="Focus area (repeatable), e.g. --focus security --focus cost",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the report to this file instead of stdout",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Run the comprehensive repository and cloud analysis.

    Exit codes:
        0: Report generated
        1: Analysis failed
    """
    registry = _build_registry()
    arguments = {
        "repository_url": repository_url,
        "analysis_depth": depth,
        "focus_areas": list(focus or []),
    }

    result = asyncio.run(registry.call("analyze_repository_and_cloud", arguments))

    if result.is_error:
        _logger.error(result.text)
        raise typer.Exit(1)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.text)
        typer.echo(f"Report written to: {output}")
    else:
        typer.echo(result.text)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results as JSON",
        ),
    ] = False,
) -> None:
    """Validate LLM availability.

    Checks that LiteLLM is installed and the configured provider answers.

    Exit codes:
        0: All checks passed
        1: One or more required checks failed
    """
    from scale_advisor.utils.preflight import PreflightChecker

    llm = _get_config().llm
    checker = PreflightChecker()

    result = checker.check_all(
        provider=llm.provider,
        api_key=llm.api_key,
        api_base=llm.api_base,
        model=llm.model,
        skip_llm=not llm.enabled,
    )

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        typer.echo("\nPreflight Check Results\n")
        for check_result in result.checks:
            status = "OK  " if check_result.available else "FAIL"
            version_str = f" ({check_result.version})" if check_result.version else ""
            typer.echo(f"  [{status}] {check_result.name}{version_str}")
            if check_result.message:
                typer.echo(f"         {check_result.message}")
        typer.echo()

    if not result.success:
        if not json_output:
            typer.echo("Preflight check FAILED")
            for error in result.errors:
                typer.echo(f"   - {error}")
        raise typer.Exit(1)

    if not json_output:
        typer.echo("All preflight checks passed")


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize Scale Advisor configuration.

    Creates .scale-advisor/config.yaml with the default settings.
    """
    config_dir = Path(".scale-advisor")
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_dir.mkdir(exist_ok=True)
    config_file.write_text(create_default_config())
    _logger.info(f"Created config: {config_file}")

    typer.echo("Scale Advisor configuration initialized")
    typer.echo(f"   Config: {config_file}")

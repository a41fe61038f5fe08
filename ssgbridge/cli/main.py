"""
SSGBridge CLI - Inspect adapters and run their tools.

Run `ssgbridge adapters` to see what is available, then
`ssgbridge run zola zola_build -a path=site` to invoke a tool.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ssgbridge import __version__
from ssgbridge.adapters import (
    AdapterRegistry,
    DispatchError,
    DispatchResponse,
    Dispatcher,
    ProcessRunner,
    Tool,
)
from ssgbridge.catalog import ADAPTER_FACTORIES, build_registry, create_adapter
from ssgbridge.validation.config import Config, ConfigError, LoggingConfig

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Exit status when the tool's binary could not be started (shell convention)
EXIT_NOT_STARTED = 127
# Exit status when --timeout expires (coreutils `timeout` convention)
EXIT_TIMED_OUT = 124


class Session:
    """Lazily loaded configuration and registry shared by all commands."""

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[AdapterRegistry] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        self._config = config
        self._registry = registry
        self._runner = runner

    @property
    def config(self) -> Config:
        if self._config is None:
            try:
                self._config = Config.load()
            except ConfigError as e:
                _fail(f"Configuration error: {e}", 2)
        return self._config

    @property
    def registry(self) -> AdapterRegistry:
        if self._registry is None:
            try:
                self._registry = build_registry(self.config, runner=self._runner)
            except ConfigError as e:
                _fail(f"Configuration error: {e}", 2)
        return self._registry

    @property
    def dispatcher(self) -> Dispatcher:
        return Dispatcher(self.registry)


def _configure_logging(level: str, fmt: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=fmt,
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _fail(message: str, code: int = 1) -> None:
    err_console.print(f"Error: {message}", style="red", markup=False)
    sys.exit(code)


# ── Argument parsing ──────────────────────────────────────────────────────

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def coerce_value(raw: str, type_name: str) -> Any:
    """
    Convert a command-line string to the parameter's schema type.

    Values that do not parse are passed through as strings so that
    schema validation reports them.
    """
    if type_name == "boolean":
        lowered = raw.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        return raw
    if type_name in ("number", "integer"):
        try:
            return int(raw)
        except ValueError:
            pass
        if type_name == "number":
            try:
                return float(raw)
            except ValueError:
                pass
        return raw
    if type_name in ("object", "array"):
        try:
            return json.loads(raw)
        except ValueError:
            return raw
    return raw


def parse_assignments(pairs: Tuple[str, ...], tool: Optional[Tool]) -> Dict[str, Any]:
    """Turn ``key=value`` strings into arguments, typed by ``tool``'s parameters."""
    arguments: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="'-a'")
        param = tool.param(key) if tool is not None else None
        arguments[key] = coerce_value(raw, param.type) if param is not None else raw
    return arguments


async def _dispatch(
    dispatcher: Dispatcher,
    adapter: str,
    tool: str,
    arguments: Dict[str, Any],
    cwd: Optional[str],
    timeout: Optional[float],
) -> DispatchResponse:
    call = dispatcher.invoke(adapter, tool, arguments, cwd=cwd)
    if timeout is None:
        return await call
    return await asyncio.wait_for(call, timeout)


# ── Commands ──────────────────────────────────────────────────────────────


@click.group()
@click.version_option(__version__, "--version", "-v", prog_name="SSGBridge")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """
    SSGBridge - one interface over many static-site generators.

    \b
    Examples:
        ssgbridge adapters                          # List adapters
        ssgbridge tools zola                        # Tools of one adapter
        ssgbridge status                            # Probe every adapter
        ssgbridge run zola zola_build -a path=site  # Run a tool
    """
    session = ctx.ensure_object(Session)
    if ctx.invoked_subcommand == "init":
        # init never reads the config, so a broken one must not stop it
        settings = LoggingConfig()
    else:
        try:
            settings = session.config.logging
        except ConfigError as e:
            _fail(f"Configuration error: {e}", 2)
    _configure_logging(log_level or settings.level, settings.format)


@cli.command()
@click.pass_obj
def adapters(session: Session) -> None:
    """List registered adapters."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Adapter", style="cyan")
    table.add_column("Name")
    table.add_column("Language")
    table.add_column("Tools", justify="right")

    for adapter in session.registry.list_adapters():
        table.add_row(adapter.name, adapter.display_name, adapter.language, str(len(adapter.tools)))

    console.print(table)


@cli.command()
@click.argument("adapter")
@click.pass_obj
def tools(session: Session, adapter: str) -> None:
    """List the tools of ADAPTER."""
    try:
        descriptor = session.registry.get(adapter)
    except DispatchError as e:
        _fail(e.message)

    table = Table(title=f"{descriptor.display_name} ({descriptor.language})", show_lines=True)
    table.add_column("Tool", style="bold cyan")
    table.add_column("Description")
    table.add_column("Parameters", style="dim")

    for tool in descriptor.tools:
        params = [
            f"{p.name}: {p.type}" + (" (required)" if p.required else "")
            for p in tool.params
        ]
        table.add_row(tool.name, tool.description, "\n".join(params) or "-")

    console.print(table)


@cli.command()
@click.argument("adapter")
@click.argument("tool")
@click.pass_obj
def schema(session: Session, adapter: str, tool: str) -> None:
    """Print the JSON input schema of ADAPTER's TOOL."""
    try:
        _, found = session.registry.find_tool(adapter, tool)
    except DispatchError as e:
        _fail(e.message)
    click.echo(json.dumps(found.input_schema, indent=2))


@cli.command()
@click.pass_obj
def describe(session: Session) -> None:
    """Print every adapter and tool schema as JSON."""
    click.echo(json.dumps(session.registry.describe(), indent=2))


@cli.command()
@click.pass_obj
def status(session: Session) -> None:
    """Probe every adapter and show which are available."""
    registry = session.registry
    with console.status("[bold blue]Probing adapters...[/bold blue]"):
        result = asyncio.run(registry.connect_all())

    table = Table(show_header=True, header_style="bold")
    table.add_column("Adapter", style="cyan")
    table.add_column("Language")
    table.add_column("Available")

    for adapter in registry.list_adapters():
        mark = "[green]yes[/green]" if result.get(adapter.name) else "[dim]no[/dim]"
        table.add_row(adapter.name, adapter.language, mark)

    console.print(table)
    console.print(f"[dim]{sum(result.values())} of {len(result)} available[/dim]")


@cli.command()
@click.argument("adapter")
@click.argument("tool")
@click.option("--arg", "-a", "pairs", multiple=True, metavar="KEY=VALUE", help="Tool argument (repeatable)")
@click.option("--json", "payload", default=None, metavar="OBJECT", help="Tool arguments as a JSON object")
@click.option("--cwd", default=None, type=click.Path(file_okay=False), help="Working directory")
@click.option("--timeout", default=None, type=float, help="Seconds before the tool is killed")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Print the tool's output, or the full response as JSON",
)
@click.pass_obj
def run(
    session: Session,
    adapter: str,
    tool: str,
    pairs: Tuple[str, ...],
    payload: Optional[str],
    cwd: Optional[str],
    timeout: Optional[float],
    output_format: str,
) -> None:
    """
    Run TOOL of ADAPTER.

    Exits with the tool's own exit status, 1 when the dispatch itself
    fails, 127 when the binary could not be started.
    """
    arguments: Dict[str, Any] = {}
    if payload is not None:
        try:
            arguments = json.loads(payload)
        except ValueError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="'--json'")
        if not isinstance(arguments, dict):
            raise click.BadParameter("must be a JSON object", param_hint="'--json'")

    registry = session.registry
    try:
        _, found = registry.find_tool(adapter, tool)
    except DispatchError:
        found = None  # the dispatcher reports it
    arguments.update(parse_assignments(pairs, found))

    try:
        response = asyncio.run(
            _dispatch(session.dispatcher, adapter, tool, arguments, cwd, timeout)
        )
    except asyncio.TimeoutError:
        _fail(f"{adapter}.{tool} timed out after {timeout:g}s", EXIT_TIMED_OUT)

    if output_format == "json":
        click.echo(response.model_dump_json(indent=2))
    elif not response.ok:
        err_console.print(f"{response.error.kind}: {response.error.message}", style="red", markup=False)
    else:
        if response.result.stdout:
            click.echo(response.result.stdout, nl=False)
        if response.result.stderr:
            click.echo(response.result.stderr, nl=False, err=True)

    if not response.ok:
        sys.exit(1)
    if response.result.exit_code is None:
        sys.exit(EXIT_NOT_STARTED)
    sys.exit(response.result.exit_code)


@cli.group("config")
def config_cmd() -> None:
    """Edit adapter settings in the project or global config file."""


global_option = click.option(
    "--global",
    "global_",
    is_flag=True,
    help="Write ~/.ssgbridge/config.yaml instead of the project config",
)


def _catalog_adapter(name: str):
    if name not in ADAPTER_FACTORIES:
        _fail(f"Unknown adapter: {name}")
    return create_adapter(name)


def _save(config: Config, global_: bool) -> None:
    path = config.save(global_=global_)
    console.print(f"Saved {path}", style="green", markup=False)


@config_cmd.command("set-binary")
@click.argument("adapter")
@click.argument("program")
@click.argument("path")
@global_option
@click.pass_obj
def set_binary(session: Session, adapter: str, program: str, path: str, global_: bool) -> None:
    """Run PROGRAM from PATH whenever ADAPTER invokes it."""
    programs = _catalog_adapter(adapter).programs()
    if program not in programs:
        _fail(f"{adapter} does not run {program!r}; expected one of: {', '.join(programs)}")
    session.config.set_binary(adapter, program, path, global_=global_)
    _save(session.config, global_)


@config_cmd.command()
@click.argument("adapter")
@global_option
@click.pass_obj
def enable(session: Session, adapter: str, global_: bool) -> None:
    """Register ADAPTER again."""
    _catalog_adapter(adapter)
    session.config.set_enabled(adapter, True, global_=global_)
    _save(session.config, global_)


@config_cmd.command()
@click.argument("adapter")
@global_option
@click.pass_obj
def disable(session: Session, adapter: str, global_: bool) -> None:
    """Leave ADAPTER out of the registry."""
    _catalog_adapter(adapter)
    session.config.set_enabled(adapter, False, global_=global_)
    _save(session.config, global_)


@cli.command()
def init() -> None:
    """Create a starter .ssgbridge/config.yaml in the current directory."""
    config_file = Config.create_default_local(Path.cwd())
    console.print(f"[green]Config at {config_file}[/green]")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()

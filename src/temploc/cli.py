"""temploc CLI interface.

Commands:
- roots: Show the configured template roots in search order
- resolve: Locate a template and report which root supplied it
- check: Report whether a template changed since a known modification time
- render: Render a template through the Jinja2 adapter
- init: Create a default configuration file

Global options:
- --config: Path to configuration file
- --path: Template root (repeatable, overrides config)
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from temploc import __version__
from temploc.config import (
    ABSOLUTE_ROOT,
    LoaderConfig,
    RootSet,
    create_default_config,
    load_config,
)
from temploc.errors import (
    InvalidRequestError,
    LoaderNotAvailableError,
    ResourceNotFoundError,
)
from temploc.loaders import get_registry, setup_default_loaders
from temploc.loaders.base import ResourceLoader
from temploc.utils.logging import configure_from_cli, get_logger

# Exit codes
EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2
EXIT_STALE = 3

app = typer.Typer(
    name="temploc",
    help="Locate template sources across ordered search roots",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: LoaderConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"temploc {__version__}")
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
    path: Annotated[
        list[str] | None,
        typer.Option(
            "--path",
            "-p",
            help="Template root, searched in the order given (overrides config)",
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
            help="Enable CI mode with JSON output",
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
    """temploc - multi-root template source lookup.

    Resolve template names against ordered search roots and detect when a
    loaded template source has changed.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    if path:
        _config.path = RootSet.from_option(path)


def _create_loader() -> ResourceLoader:
    """Build the configured loader, exiting on an unknown loader kind."""
    registry = get_registry()
    if not registry.list_loaders():
        setup_default_loaders(registry)

    try:
        return registry.create(_config)
    except LoaderNotAvailableError as e:
        _logger.error(e.message)
        raise typer.Exit(1)


def _exit_for(error: ResourceNotFoundError) -> typer.Exit:
    _logger.error(error.message)
    if isinstance(error, InvalidRequestError):
        return typer.Exit(EXIT_INVALID)
    return typer.Exit(EXIT_NOT_FOUND)


# =============================================================================
# roots command
# =============================================================================


@app.command()
def roots() -> None:
    """Show the configured template roots in search order."""
    config = _config or LoaderConfig()

    if not config.path:
        typer.echo("No template roots configured")
        return

    for index, root in enumerate(config.path, start=1):
        label = "<absolute path mode>" if root == ABSOLUTE_ROOT else root
        typer.echo(f"  {index}. {label}")


# =============================================================================
# resolve command
# =============================================================================


@app.command()
def resolve(
    name: Annotated[str, typer.Argument(help="Template name")],
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output result as JSON",
        ),
    ] = False,
    show: Annotated[
        bool,
        typer.Option(
            "--show",
            help="Print the template source bytes unchanged",
        ),
    ] = False,
) -> None:
    """Locate a template and report which root supplied it.

    Exit codes:
        0: Template found
        1: Template not found (or rejected)
        2: Invalid template name
    """
    loader = _create_loader()

    try:
        resource = loader.resolve(name)
    except ResourceNotFoundError as e:
        raise _exit_for(e)

    with resource:
        content = resource.read_bytes() if show else None

    if json_output:
        typer.echo(json.dumps(resource.to_dict(), indent=2))
    else:
        typer.echo(f"root:          {resource.root or '<absolute path mode>'}")
        typer.echo(f"file:          {resource.path}")
        typer.echo(f"last modified: {resource.last_modified}")

    if content is not None:
        typer.echo(content, nl=False)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    name: Annotated[str, typer.Argument(help="Template name")],
    since: Annotated[
        float,
        typer.Option(
            "--since",
            "-s",
            help="Modification time recorded when the template was last loaded",
        ),
    ],
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output result as JSON",
        ),
    ] = False,
) -> None:
    """Report whether a template changed since a known modification time.

    Exit codes:
        0: Template unchanged
        1: Template not found (or rejected)
        2: Invalid template name
        3: Template is stale and must be reloaded
    """
    loader = _create_loader()

    try:
        resource = loader.resolve(name)
    except ResourceNotFoundError as e:
        raise _exit_for(e)
    resource.close()

    stale = loader.is_stale(name, since)

    if json_output:
        result = resource.to_dict()
        result["since"] = since
        result["stale"] = stale
        typer.echo(json.dumps(result, indent=2))
    elif stale:
        typer.echo(f"{name} is stale (last modified {loader.last_modified(name)})")
    else:
        typer.echo(f"{name} is up to date")

    raise typer.Exit(EXIT_STALE if stale else EXIT_OK)


# =============================================================================
# render command
# =============================================================================


def _parse_vars(values: list[str] | None) -> dict[str, str]:
    context: dict[str, str] = {}
    for value in values or []:
        key, sep, item = value.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{value}'", param_hint="--var")
        context[key] = item
    return context


@app.command()
def render(
    name: Annotated[str, typer.Argument(help="Template name")],
    var: Annotated[
        list[str] | None,
        typer.Option(
            "--var",
            help="Template variable as key=value (repeatable)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the rendered text to a file",
        ),
    ] = None,
) -> None:
    """Render a template through the Jinja2 adapter."""
    from temploc.templates import TemplateRenderer

    context = _parse_vars(var)
    renderer = TemplateRenderer(_config, loader=_create_loader())

    try:
        if output is not None:
            written = renderer.render_to_file(name, output, context)
            typer.echo(f"Rendered {name} to {written}")
        else:
            typer.echo(renderer.render(name, context), nl=False)
    except ResourceNotFoundError as e:
        raise _exit_for(e)
    except ValueError as e:
        _logger.error(str(e))
        raise typer.Exit(1)


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
    """Initialize temploc configuration.

    Creates .temploc/config.yaml with a default template root.
    """
    config_dir = Path(".temploc")
    config_dir.mkdir(exist_ok=True)

    config_file = config_dir / "config.yaml"
    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    typer.echo(f"Created {config_file}")

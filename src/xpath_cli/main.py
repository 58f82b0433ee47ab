import logging
from pathlib import Path
from typing import Optional

import typer
from xpath_locator.engine import MulticursorFormat, XPathEngine, join_results
from xpath_locator.formatter import FormatOptions, PathFormat
from xpath_locator.lookup import parse_path

from .config import DEFAULT_CONFIG_FILE, CopierConfig
from .converters import location_to_lookup_result, skip_rule_config_to_skip_rule
from .skip_rules import resolve_skip_elements

app = typer.Typer(help="XPath Copier - Compute and resolve element paths in XML-like files")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_position(value: str) -> tuple[int, int]:
    """Parse a 1-based LINE:COL cursor position"""
    try:
        line, column = (int(part) for part in value.split(":", 1))
    except ValueError:
        raise typer.BadParameter(f"Expected LINE:COL, got '{value}'")
    if line < 1 or column < 1:
        raise typer.BadParameter(f"Line and column are 1-based, got '{value}'")
    return line - 1, column - 1


def _read_document(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: Cannot read {file_path}: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def path(
    file_path: Path = typer.Argument(..., help="Document to inspect"),
    offsets: list[int] = typer.Option(None, "--offset", help="0-based character offset of a cursor"),
    positions: list[str] = typer.Option(None, "--at", help="1-based LINE:COL of a cursor"),
    path_format: Optional[PathFormat] = typer.Option(None, "--format", help="Output notation"),
    templates: list[str] = typer.Option(None, "--template", help="Custom template for --format custom"),
    name_attributes: list[str] = typer.Option(None, "--name-attribute", help="Attribute holding an element's name"),
    skip: Optional[bool] = typer.Option(None, "--skip/--no-skip", help="Apply element skip rules"),
    name_only: Optional[bool] = typer.Option(None, "--name-only/--no-name-only", help="Show names in place of tags"),
    as_json: bool = typer.Option(False, "--json", help="Emit multiple results as a JSON array"),
    config_file: Path = typer.Option(DEFAULT_CONFIG_FILE, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Print the element path at each cursor"""
    _setup_logging(verbose)
    config = CopierConfig(config_file)
    settings = config.settings

    path_format = path_format or settings.format
    if not config.is_format_enabled(path_format):
        typer.echo(f"Error: The {path_format.value} format is disabled in settings.", err=True)
        raise typer.Exit(code=1)

    text = _read_document(file_path)
    skip_enabled = settings.enable_element_skipping if skip is None else skip
    skip_elements = resolve_skip_elements(
        str(file_path),
        [skip_rule_config_to_skip_rule(rule) for rule in settings.skip_rules],
        skip_enabled,
    )
    engine = XPathEngine(
        text,
        name_attributes=name_attributes or settings.name_attributes,
        skip_elements=skip_elements,
    )

    cursors = list(offsets or [])
    for position in positions or []:
        cursors.append(engine.offset_at(*_parse_position(position)))
    if not cursors:
        typer.echo("Error: Provide --offset or --at", err=True)
        raise typer.Exit(code=1)

    options = FormatOptions(
        custom_templates=templates or settings.custom_templates,
        name_only=settings.name_only if name_only is None else name_only,
    )
    try:
        results = engine.compute_paths(cursors, path_format, options)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not results:
        typer.echo("Unable to compute XPath for the given position(s).", err=True)
        raise typer.Exit(code=1)

    multicursor_format = MulticursorFormat.JSON if as_json else settings.multicursor_format
    typer.echo(join_results(results, multicursor_format))


@app.command()
def goto(
    file_path: Path = typer.Argument(..., help="Document to search"),
    xpath: str = typer.Argument(..., help="Path to navigate to"),
    name_attributes: list[str] = typer.Option(None, "--name-attribute", help="Attribute holding an element's name"),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON"),
    config_file: Path = typer.Option(DEFAULT_CONFIG_FILE, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Find the element a path points to"""
    _setup_logging(verbose)
    settings = CopierConfig(config_file).settings

    if not parse_path(xpath):
        typer.echo("Invalid or empty XPath.", err=True)
        raise typer.Exit(code=1)

    text = _read_document(file_path)
    engine = XPathEngine(text, name_attributes=name_attributes or settings.name_attributes)
    location = engine.locate(xpath)

    if as_json:
        typer.echo(location_to_lookup_result(file_path, xpath, location).model_dump_json(indent=2))
    elif location is not None:
        typer.echo(f"{file_path}:{location.line + 1}:{location.column + 1}")

    if location is None:
        if not as_json:
            typer.echo("No element matching the specified XPath was found.", err=True)
        raise typer.Exit(code=1)


@app.command()
def formats():
    """List the available output formats"""
    for path_format in PathFormat:
        typer.echo(path_format.value)


if __name__ == "__main__":
    app()

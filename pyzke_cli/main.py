import logging
from pathlib import Path
from typing import List, Optional

import typer

from pyzke import EngineSettings, StaticFileReader, WidgetEngine, to_js_literal
from pyzke.definitions import load
from pyzke.errors import PyzkeError


# Create the main Typer application object
app = typer.Typer(
    name="pyzke",
    help="Compose client code and config for widget definition files.",
    add_completion=False
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine activity to stderr.")):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(name)s: %(message)s")


def _engine_for(file_path: Path, static_root: Optional[Path]):
    """Load a definition file and build an engine reading includes next to it."""
    if not file_path.exists():
        typer.echo(f"❌ Error: Definition file not found at '{file_path}'", err=True)
        raise typer.Exit(code=1)

    settings = EngineSettings.from_config()
    try:
        registry, root = load(file_path, ext_location=settings.ext_location)
    except PyzkeError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)

    root_dir = static_root or settings.static_root or file_path.parent
    engine = WidgetEngine(registry, reader=StaticFileReader(root_dir, cache=True), settings=settings)
    return engine, root


# --- CLI Commands ---

@app.command()
def deps(
    file_path: Path = typer.Argument(..., help="YAML file with 'classes' and 'widget' sections."),
):
    """
    Prints the widget classes the root widget needs, in delivery order.
    """
    engine, root = _engine_for(file_path, None)
    try:
        dependencies = engine.dependency_classes(root)
    except PyzkeError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)
    for widget_class in dependencies:
        typer.echo(widget_class.short_name)


@app.command()
def code(
    file_path: Path = typer.Argument(..., help="YAML file with 'classes' and 'widget' sections."),
    known: List[str] = typer.Option([], "--known", "-k", help="Short name of a class the browser already has."),
    css: bool = typer.Option(False, "--css", help="Print the missing stylesheet instead of the script."),
    static_root: Optional[Path] = typer.Option(None, help="Directory include paths are relative to."),
):
    """
    Prints the script (or stylesheet) the browser is missing for the root widget.
    """
    engine, root = _engine_for(file_path, static_root)
    try:
        if css:
            output = engine.css_missing_code(root, known)
        else:
            output = engine.js_missing_code(root, known)
    except PyzkeError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo("✅ Nothing missing: the browser already has every class.", err=True)
        return
    typer.echo(output)


@app.command()
def config(
    file_path: Path = typer.Argument(..., help="YAML file with 'classes' and 'widget' sections."),
):
    """
    Prints the instantiation config of the root widget as a JS literal.
    """
    engine, root = _engine_for(file_path, None)
    try:
        output = to_js_literal(engine.js_config(root))
    except (PyzkeError, ValueError) as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(output)


@app.command()
def snippet(
    file_path: Path = typer.Argument(..., help="YAML file with 'classes' and 'widget' sections."),
):
    """
    Prints the container markup, instantiation and render call for embedding the root widget in a page.
    """
    engine, root = _engine_for(file_path, None)
    try:
        lines = [engine.js_widget_html(root), engine.js_widget_instance(root), engine.js_widget_render(root)]
    except (PyzkeError, ValueError) as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)
    for line in lines:
        typer.echo(line)


if __name__ == "__main__":
    app()

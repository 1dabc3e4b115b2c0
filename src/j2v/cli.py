"""CLI entry point for the JSON2Video request compiler."""

import json
import logging
import typer
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .config import config
from .models import ParameterFile

app = typer.Typer(
    name="j2v",
    help="Compile workflow parameters into JSON2Video requests",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"j2v version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """JSON2Video request compiler - Turn form parameters into movie requests."""
    pass


def load_parameters(path: Path, operation: Optional[str]) -> ParameterFile:
    """Load a parameter file, exiting with a message on failure."""
    if not path.exists():
        typer.echo(f"❌ Parameter file not found: {path}")
        raise typer.Exit(1)

    try:
        parameters = ParameterFile.from_yaml(path)
    except Exception as e:
        typer.echo(f"❌ Error loading parameters: {e}")
        raise typer.Exit(1)

    if operation:
        parameters.operation = operation
    if not parameters.items:
        typer.echo(f"❌ No items in {path}")
        raise typer.Exit(1)
    return parameters


@app.command()
def build(
    params: Path = typer.Argument(
        ...,
        help="Path to a YAML or JSON parameter file"
    ),
    operation: Optional[str] = typer.Option(
        None,
        "--operation",
        "-o",
        help="Operation to compile (createMovie, mergeVideoAudio, mergeVideos)"
    ),
    item: int = typer.Option(
        0,
        "--item",
        "-i",
        help="Index of the item to compile",
        min=0
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        help="Write the request body to this file instead of stdout"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Compile one item into a request body."""
    from .compiler import build_request_body

    setup_logging(verbose)
    parameters = load_parameters(params, operation)

    if item >= len(parameters.items):
        typer.echo(f"❌ Item {item} out of range ({len(parameters.items)} items)")
        raise typer.Exit(1)

    try:
        body = build_request_body(parameters.operation, parameters.to_source(), item)
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    rendered = json.dumps(body, indent=2)
    if output is None:
        typer.echo(rendered)
        return

    output.write_text(rendered + "\n")
    typer.echo(f"✅ Request body saved: {output}")


@app.command()
def validate(
    params: Path = typer.Argument(
        ...,
        help="Path to a YAML or JSON parameter file"
    ),
    operation: Optional[str] = typer.Option(
        None,
        "--operation",
        "-o",
        help="Operation to compile (createMovie, mergeVideoAudio, mergeVideos)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Compile every item and report validation errors."""
    from .compiler import build_request_body

    setup_logging(verbose)
    parameters = load_parameters(params, operation)
    source = parameters.to_source()

    typer.echo(f"🔍 Validating {len(parameters.items)} item(s) as {parameters.operation}")

    failed = 0
    for index in range(len(parameters.items)):
        try:
            body = build_request_body(parameters.operation, source, index)
        except ValueError as e:
            failed += 1
            typer.echo(f"   ❌ Item {index}:")
            for line in str(e).splitlines():
                typer.echo(f"      {line}")
            continue
        typer.echo(f"   ✅ Item {index}: {len(body['scenes'])} scene(s)")

    if failed > 0:
        typer.echo(f"\n⚠️  {failed} item(s) failed validation")
        raise typer.Exit(1)
    typer.echo("\n✅ All items valid")


@app.command()
def submit(
    params: Path = typer.Argument(
        ...,
        help="Path to a YAML or JSON parameter file"
    ),
    operation: Optional[str] = typer.Option(
        None,
        "--operation",
        "-o",
        help="Operation to compile (createMovie, mergeVideoAudio, mergeVideos)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Compile every item and submit it to JSON2Video."""
    from .compiler import build_request_body
    from .services import Json2VideoClient

    setup_logging(verbose)

    try:
        config.validate_required()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    parameters = load_parameters(params, operation)
    source = parameters.to_source()

    # Compile everything before sending anything
    bodies: List[Dict[str, Any]] = []
    for index in range(len(parameters.items)):
        try:
            bodies.append(build_request_body(parameters.operation, source, index))
        except ValueError as e:
            typer.echo(f"❌ Item {index}: {e}")
            raise typer.Exit(1)

    typer.echo(f"🎬 Submitting {len(bodies)} movie(s) to {config.json2video_base_url}")

    with Json2VideoClient() as client:
        for index, body in enumerate(bodies):
            try:
                result = client.create_movie(body)
            except Exception as e:
                typer.echo(f"❌ Item {index}: submission failed: {e}")
                raise typer.Exit(1)
            typer.echo(f"   ✅ Item {index}: project {result.get('project', 'unknown')}")


@app.command()
def status(
    project_id: str = typer.Argument(
        ...,
        help="Project id returned when the movie was submitted"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Show the render status of a submitted movie."""
    from .services import Json2VideoClient

    setup_logging(verbose)

    try:
        config.validate_required()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    try:
        with Json2VideoClient() as client:
            result = client.get_movie_status(project_id)
    except Exception as e:
        typer.echo(f"❌ Error fetching status: {e}")
        raise typer.Exit(1)

    movie = result.get("movie") or {}
    typer.echo(f"📁 Project: {project_id}")
    typer.echo(f"   Status: {movie.get('status', 'unknown')}")
    if movie.get("message"):
        typer.echo(f"   Message: {movie['message']}")
    if movie.get("url"):
        typer.echo(f"   URL: {movie['url']}")


if __name__ == "__main__":
    app()

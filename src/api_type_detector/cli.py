"""CLI interface for the API type detector."""

import json
from pathlib import Path

import typer
from pydantic import ValidationError

from .config import InferenceOptions, settings
from .exceptions import MalformedSampleError, TypeDetectorError
from .inference import Observation, Route, regenerate_all
from .observability import setup_structured_logging
from .store import DeclarationStore

app = typer.Typer(help="Infer TypeScript declarations from captured JSON API responses")


def _open_store(store_dir: str | None) -> DeclarationStore:
    return DeclarationStore(store_dir or settings.get_store_dir())


def load_observations(path: Path) -> tuple[list[Route], list[Observation]]:
    """Read a JSON Lines capture file.

    Each line is an observation object; ``route_name`` is optional and
    defaults to the route id. Routes are returned in first-seen order.

    Raises:
        MalformedSampleError: on a line that is not a valid observation.
    """
    routes: dict[str, Route] = {}
    observations: list[Observation] = []

    with path.open("rb") as f:
        for lineno, raw in enumerate(f, start=1):
            if not raw.strip():
                continue
            try:
                data = json.loads(raw.decode("utf-8"))
                if not isinstance(data, dict):
                    raise ValueError("expected a JSON object")
                obs = Observation.model_validate(data)
            except (ValueError, ValidationError) as e:
                raise MalformedSampleError(f"{path}:{lineno}: invalid observation: {e}") from e

            if obs.route_id not in routes:
                routes[obs.route_id] = Route(id=obs.route_id, name=str(data.get("route_name") or obs.route_id))
            observations.append(obs)

    return list(routes.values()), observations


@app.command()
def generate(
    capture: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON Lines file of observations"),
    route: str = typer.Option(None, "--route", "-r", help="Only synthesize this route id"),
    store_dir: str = typer.Option(None, "--store-dir", help="Declaration store directory"),
    print_output: bool = typer.Option(True, "--print/--no-print", help="Print changed declarations"),
) -> None:
    """Synthesize declarations for every route in a capture file."""
    setup_structured_logging(settings.logging.level, json=settings.logging.json_output)

    try:
        routes, observations = load_observations(capture)
    except TypeDetectorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if route is not None:
        routes = [r for r in routes if r.id == route]
        if not routes:
            typer.echo(f"Route not found in capture: {route}", err=True)
            raise typer.Exit(1)

    store = _open_store(store_dir)
    options = InferenceOptions.from_settings(settings.inference)
    try:
        changed = regenerate_all(routes, observations, store, options)
    except TypeDetectorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if not changed:
        typer.echo("No changes.")
        return

    for declaration in changed:
        typer.echo(f"// {declaration.route_name} ({declaration.sample_count} samples, {declaration.signature})")
        if print_output:
            typer.echo(declaration.type_definition)
            typer.echo()


@app.command()
def show(
    route_id: str = typer.Argument(..., help="Route id"),
    store_dir: str = typer.Option(None, "--store-dir", help="Declaration store directory"),
) -> None:
    """Print the stored declaration for a route."""
    declaration = _open_store(store_dir).load(route_id)
    if declaration is None:
        typer.echo(f"No declaration stored for route: {route_id}", err=True)
        raise typer.Exit(1)
    typer.echo(declaration.type_definition)


@app.command("list")
def list_declarations(
    store_dir: str = typer.Option(None, "--store-dir", help="Declaration store directory"),
) -> None:
    """List stored declarations."""
    declarations = _open_store(store_dir).list_all()
    if not declarations:
        typer.echo("No declarations stored.")
        return
    for declaration in declarations:
        typer.echo(
            f"{declaration.route_id}\t{declaration.type_name}\t{declaration.sample_count} samples\t{declaration.signature}"
        )


@app.command()
def config() -> None:
    """Show current configuration."""
    print(f"Max array samples: {settings.inference.max_array_samples}")
    print(f"Analyze all array elements: {settings.inference.analyze_all_array_elements}")
    print(f"Detect dates: {settings.inference.detect_dates}")
    print(f"Max depth: {settings.inference.max_depth}")
    print(f"Window size: {settings.inference.window_size}")
    print(f"Store directory: {settings.get_store_dir()}")
    print(f"Log level: {settings.logging.level}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

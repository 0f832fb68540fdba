from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from things_left_behind.app.render import describe_location, humanize_location, render_vehicle
from things_left_behind.app.services.logger import configure_logging
from things_left_behind.core.generator import VehicleGenerator
from things_left_behind.core.loader import ContentValidationError, load_content
from things_left_behind.core.models import GeneratedVehicle, LocationLabel
from things_left_behind.core.rng import DeterministicRNG
from things_left_behind.core.scenes import EmptyCatalog
from things_left_behind.core.settings import load_generation_settings
from things_left_behind.core.world_time import DAYS_PER_UNIT, WorldTime

app = typer.Typer(add_completion=False, help="Generate found-vehicle encounters from the content catalogs.")
console = Console()

DEFAULT_CONTENT_DIR = Path(__file__).resolve().parents[1] / "content"


def _normalize_seed(raw_seed: str) -> int | str:
    try:
        return int(raw_seed)
    except ValueError:
        return raw_seed


def _summary_table(index: int, generated: GeneratedVehicle, labels: dict[str, LocationLabel]) -> Table:
    data = generated.vehicle
    table = Table(title=escape(f"Vehicle {index}: {generated.year} {data.make} {data.model}"))
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    # Catalog text is plain, never rich markup.
    table.add_row("Scene", escape(generated.scene_id))
    table.add_row("Class", escape(data.vehicle_class))
    table.add_row("Color", escape(generated.color))
    table.add_row("Trim", escape(generated.trim or "-"))
    table.add_row("Transmission", escape(generated.transmission or "-"))
    table.add_row("State", escape(generated.state))
    for key, items in generated.contents.items():
        table.add_row(escape(humanize_location(key, labels)), escape(describe_location(items) or "-"))
    return table


@app.command()
def main(
    seed: str = typer.Option("123", "--seed", help="Seed value (int or string)."),
    scene: Optional[str] = typer.Option(None, "--scene", help="Scene id; random when omitted."),
    apocalypse_year: int = typer.Option(2030, "--apocalypse-year", help="Year the world ended."),
    elapsed: float = typer.Option(0, "--elapsed", min=0, help="Time passed since the apocalypse."),
    unit: str = typer.Option("days", "--unit", help="Elapsed unit: days|weeks|months|years."),
    count: int = typer.Option(1, "--count", min=1, help="Number of vehicles to generate."),
    content_dir: Path = typer.Option(DEFAULT_CONTENT_DIR, "--content-dir", help="Catalog directory."),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="JSON file with tunable overrides."),
    html: bool = typer.Option(False, "--html", help="Print the rendered markup instead of tables."),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Write latest.log into this directory."),
) -> None:
    configure_logging(log_dir, level=logging.WARNING if log_dir is None else logging.DEBUG)

    try:
        content = load_content(content_dir)
    except ContentValidationError as exc:
        console.print(f"[bold red]Content load failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    if unit not in DAYS_PER_UNIT:
        console.print(f"[bold red]Unknown elapsed unit '{escape(unit)}'.[/bold red]")
        raise typer.Exit(1)

    scene_override = None
    if scene is not None:
        scene_override = content.scene_db.get_scene_by_id(scene)
        if scene_override is None:
            console.print(f"[bold red]Unknown scene '{escape(scene)}'.[/bold red]")
            raise typer.Exit(1)

    world_time = WorldTime(apocalypse_year=apocalypse_year, elapsed_amount=elapsed, elapsed_unit=unit)
    rng = DeterministicRNG.from_seed(_normalize_seed(seed))
    generator = VehicleGenerator(
        content,
        world_time,
        rng,
        scene=scene_override,
        settings=load_generation_settings(settings_path),
    )

    payload = []
    for index in range(1, count + 1):
        try:
            generated = generator.generate_single_vehicle()
        except EmptyCatalog as exc:
            console.print(f"[bold red]{escape(str(exc))}[/bold red]")
            raise typer.Exit(1) from exc

        payload.append(generated.to_dict() if generated else None)
        if html:
            console.print(
                render_vehicle(generated, content.location_labels),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        elif generated is None:
            console.print(f"[yellow]Vehicle {index}: no vehicle available.[/yellow]")
        else:
            console.print(_summary_table(index, generated, content.location_labels))

    signature = hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()[:16]
    console.print(f"\n[bold green]Deterministic signature:[/bold green] {signature}")


if __name__ == "__main__":
    app()

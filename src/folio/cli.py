"""Developer CLI for inspecting media resolution and stored content."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from folio.config import FolioConfig, load_config
from folio.content.reconciler import Collection
from folio.content.store import ContentStore, storage_key
from folio.editor import EditingSession
from folio.media.classifier import display_name
from folio.media.models import PlatformTag
from folio.media.services import resolve_media
from folio.shared.errors import CropError
from folio.shared.images import CropArea, crop_to_data_url

app = typer.Typer(
    name="folio",
    help="Resolve media links and inspect locally stored profile content.",
)

console = Console()

_state: dict[str, FolioConfig] = {}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from folio import __version__

        console.print(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .folio.toml file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Folio - profile content tools."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    _state["config"] = load_config(config_path)


def _config() -> FolioConfig:
    return _state.get("config") or load_config()


def _store(store_dir: Path | None) -> ContentStore:
    return ContentStore(store_dir or _config().storage_dir)


def _session_options() -> dict[str, float | int]:
    config = _config()
    return {
        "autosave_interval": config.autosave.interval_seconds,
        "jpeg_quality": config.images.jpeg_quality,
        "max_upload_bytes": config.images.max_upload_bytes,
    }


@app.command()
def resolve(
    text: Annotated[str, typer.Argument(help="URL or iframe embed snippet.")],
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON.")] = False,
) -> None:
    """Classify a pasted media link and print its embeddable reference."""
    tag, reference = resolve_media(text)
    if as_json:
        console.print_json(json.dumps({"type": tag.value, "id": reference, "rawUrl": text}))
    else:
        console.print(f"[bold]type[/bold]      {tag.value}")
        console.print(f"[bold]reference[/bold] {reference}")
        console.print(f"[bold]service[/bold]   {display_name(text)}")
    if tag is PlatformTag.UNKNOWN:
        raise typer.Exit(code=1)


@app.command()
def show(
    address: Annotated[
        Optional[str], typer.Option("--address", "-a", help="Wallet address.")
    ] = None,
    store_dir: Annotated[
        Optional[Path], typer.Option("--store", help="Content store directory.")
    ] = None,
) -> None:
    """Summarize the stored document for an identity."""
    store = _store(store_dir)
    key = storage_key(address)
    session = EditingSession.open(store, key, **_session_options())
    if not store.exists(key):
        console.print(f"[yellow]No stored content for {key}; showing defaults.[/yellow]")

    profile = session.document.profile
    console.print(f"[bold]{profile.name}[/bold] - {profile.title}")

    table = Table(title=key)
    table.add_column("Collection")
    table.add_column("State")
    table.add_column("Stored", justify="right")
    table.add_column("Shown", justify="right")
    for collection in Collection:
        table.add_row(
            collection.value,
            session.reconciler.state(collection).value,
            str(len(session.items(collection))),
            str(len(session.visible_items(collection))),
        )
    console.print(table)
    if _config().is_development:
        console.print_json(session.document.model_dump_json(by_alias=True))


@app.command()
def reset(
    address: Annotated[
        Optional[str], typer.Option("--address", "-a", help="Wallet address.")
    ] = None,
    store_dir: Annotated[
        Optional[Path], typer.Option("--store", help="Content store directory.")
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation.")] = False,
) -> None:
    """Delete stored content so the page shows example content again."""
    key = storage_key(address)
    if not yes:
        typer.confirm(f"Delete stored content for {key}?", abort=True)
    session = EditingSession(_store(store_dir), key, **_session_options())
    session.reset()
    for notice in session.notices:
        console.print(f"[red]{notice}[/red]")
    if session.notices:
        raise typer.Exit(code=1)
    console.print(f"Reset {key}")


@app.command()
def crop(
    image: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="Source image file.")
    ],
    x: Annotated[float, typer.Option(help="Left edge, on-screen pixels.")] = 0.0,
    y: Annotated[float, typer.Option(help="Top edge, on-screen pixels.")] = 0.0,
    width: Annotated[float, typer.Option(help="Crop width, on-screen pixels.")] = 100.0,
    height: Annotated[float, typer.Option(help="Crop height, on-screen pixels.")] = 100.0,
    scale_x: Annotated[float, typer.Option(help="Natural / displayed width.")] = 1.0,
    scale_y: Annotated[float, typer.Option(help="Natural / displayed height.")] = 1.0,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write the data URL here.")
    ] = None,
) -> None:
    """Crop an image and print it as a JPEG data URL."""
    area = CropArea(x=x, y=y, width=width, height=height)
    try:
        data_url = crop_to_data_url(
            image, area, scale_x=scale_x, scale_y=scale_y, quality=_config().images.jpeg_quality
        )
    except CropError as exc:
        console.print(f"[red]Crop failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if output is not None:
        output.write_text(data_url, encoding="utf-8")
        console.print(f"Wrote {len(data_url)} characters to {output}")
    else:
        typer.echo(data_url)


if __name__ == "__main__":
    app()

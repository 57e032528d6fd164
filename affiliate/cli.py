"""Affiliate platform CLI."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from .config import settings

app = typer.Typer(
    name="affiliate",
    help="Affiliate platform API tools",
    no_args_is_help=True,
)
console = Console()

BACKFILL_PATH = "/api/cron/framer/backfill-leads-batch"


def _chunks(items: list, size: int) -> list[list]:
    return [items[i:i + size] for i in range(0, len(items), size)]


@app.command("serve")
def serve(
    port: int = typer.Option(8030, "--port", "-p", help="Port to run on"),
    host: str = typer.Option("127.0.0.1", "--host", help="Host to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Launch the affiliate API."""
    import uvicorn

    console.print(f"[bold cyan]Starting {settings.app_title} at http://{host}:{port}[/bold cyan]")
    uvicorn.run("affiliate.app:app", host=host, port=port, reload=reload)


@app.command("backfill")
def backfill(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON array of {via, externalId, eventName, creationDate}"),
    api_url: str = typer.Option("http://127.0.0.1:8030", "--api-url", help="Base URL of the running API"),
    token: str = typer.Option(..., "--token", envvar="AFF_BACKFILL_TOKEN", help="Workspace API key"),
    batch_size: int = typer.Option(100, "--batch-size", min=1, help="Records per request"),
    keep_going: bool = typer.Option(False, "--keep-going", help="Continue after a rejected batch"),
):
    """Submit historical leads to the backfill endpoint in batches.

    Batches are safe to resubmit: records already recorded are skipped
    server-side.
    """
    try:
        records = json.loads(file.read_text())
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid JSON in {file}: {exc}[/red]")
        raise typer.Exit(1)
    if not isinstance(records, list):
        console.print(f"[red]{file} must contain a JSON array[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Backfill {file.name}")
    table.add_column("Batch", justify="right")
    table.add_column("Records", justify="right")
    table.add_column("Result")

    failed = False
    with httpx.Client(base_url=api_url.rstrip("/"), timeout=120.0) as client:
        for index, batch in enumerate(_chunks(records, batch_size), start=1):
            resp = client.post(
                BACKFILL_PATH,
                json=batch,
                headers={"Authorization": f"Bearer {token}"},
            )
            body = resp.json() if resp.headers.get("content-type", "").startswith("application/json") else resp.text

            if resp.status_code == 200 and isinstance(body, list):
                table.add_row(str(index), str(len(batch)), "[green]ok[/green]")
                continue

            failed = True
            if isinstance(body, dict) and "message" in body:
                detail = body["message"]
            else:
                detail = f"HTTP {resp.status_code}: {body}"
            table.add_row(str(index), str(len(batch)), f"[red]{detail}[/red]")
            if not keep_going:
                break

    console.print(table)
    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

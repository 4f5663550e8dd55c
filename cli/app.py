from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_reading, render_readings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the power analytics service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="Bearer token sent with every request (defaults to API_TOKEN env).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, token=token, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("list")
def list_command(
    ctx: typer.Context,
    start_date: Optional[datetime] = typer.Option(None, "--start-date", help="Inclusive lower bound."),
    end_date: Optional[datetime] = typer.Option(None, "--end-date", help="Inclusive upper bound."),
    min_value: Optional[int] = typer.Option(None, "--min-value", help="Inclusive minimum value."),
    max_value: Optional[int] = typer.Option(None, "--max-value", help="Inclusive maximum value."),
) -> None:
    """List readings, optionally filtered by date and value range."""
    state = _get_state(ctx)
    readings = state.client.list_readings(
        start_date=start_date,
        end_date=end_date,
        min_value=min_value,
        max_value=max_value,
    )
    render_readings(readings)


@app.command("get")
def get_command(
    ctx: typer.Context,
    reading_id: int = typer.Argument(..., help="Identifier of the reading."),
) -> None:
    """Show a single reading."""
    state = _get_state(ctx)
    render_reading(state.client.get_reading(reading_id))


@app.command("create")
def create_command(
    ctx: typer.Context,
    value: int = typer.Argument(..., help="Measured value."),
    logged_at: Optional[datetime] = typer.Option(
        None, "--logged-at", help="Timestamp of the reading (defaults to now, UTC)."
    ),
) -> None:
    """Create a reading."""
    state = _get_state(ctx)
    timestamp = logged_at or datetime.now(timezone.utc)
    created = state.client.create_readings(
        [{"value": value, "loggedAt": timestamp.isoformat()}]
    )
    typer.secho(f"Created {len(created)} reading(s).", fg=typer.colors.GREEN)
    render_readings(created)


@app.command("update")
def update_command(
    ctx: typer.Context,
    reading_id: int = typer.Argument(..., help="Identifier of the reading."),
    value: int = typer.Argument(..., help="New value."),
    logged_at: datetime = typer.Option(..., "--logged-at", help="New timestamp."),
) -> None:
    """Replace the value and timestamp of a reading."""
    state = _get_state(ctx)
    render_reading(state.client.update_reading(reading_id, value, logged_at))


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    reading_id: int = typer.Argument(..., help="Identifier of the reading."),
) -> None:
    """Delete a reading."""
    state = _get_state(ctx)
    state.client.delete_reading(reading_id)
    typer.secho(f"Deleted reading {reading_id}.", fg=typer.colors.GREEN)

from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_reading(payload: Dict[str, Any]) -> None:
    echo_heading("Power Reading")
    echo_key_values(
        [
            ("id", payload.get("id")),
            ("value", payload.get("value")),
            ("loggedAt", payload.get("loggedAt")),
        ]
    )


def render_readings(payloads: Iterable[Dict[str, Any]]) -> None:
    rows = list(payloads)
    echo_heading(f"Power Readings ({len(rows)})")
    if not rows:
        typer.echo("No readings found.")
        return
    for row in rows:
        typer.echo(f"  - #{row.get('id')}: {row.get('value')} at {row.get('loggedAt')}")

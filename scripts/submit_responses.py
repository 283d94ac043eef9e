#!/usr/bin/env python
"""
Submit a CSV of questionnaire responses to the response API.

Expected columns: questionnaire_id, submitter_name, submitted_at, then one
column per question id holding the chosen option text (empty = unanswered).
"""

from pathlib import Path

import httpx
import pandas as pd
import typer
from rich.console import Console
from rich.panel import Panel

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
META_COLUMNS = ("questionnaire_id", "submitter_name", "submitted_at")

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def read_csv(input_path: Path) -> list[dict[str, object]]:
    """Read the CSV and build one submission payload per row."""
    df = pd.read_csv(input_path, dtype=str, keep_default_na=False)

    missing = [c for c in META_COLUMNS if c not in df.columns]
    if missing:
        console.print(f"[red]CSV is missing columns: {missing}[/red]")
        raise typer.Exit(1)

    question_columns = [c for c in df.columns if c not in META_COLUMNS]
    payloads: list[dict[str, object]] = []
    for row in df.to_dict(orient="records"):
        payload: dict[str, object] = {
            "questionnaireId": row["questionnaire_id"],
            "submittedAt": row["submitted_at"],
            "responses": {
                q: row[q] for q in question_columns if row[q] != ""
            },
        }
        if row["submitter_name"]:
            payload["submitterName"] = row["submitter_name"]
        payloads.append(payload)
    return payloads


def health_check(client: httpx.Client) -> None:
    """Abort if server is unreachable."""
    try:
        resp = client.get("/api/v1/health")
        resp.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[red]Server health check failed: {e}[/red]")
        raise typer.Exit(1) from e


@app.command()
def main(
    input_path: Path = typer.Argument(
        ...,
        help="Path to CSV file with questionnaire responses",
    ),
    url: str = typer.Option(
        DEFAULT_BASE_URL,
        help="Server base URL",
    ),
) -> None:
    """Submit every row of a responses CSV and report failures."""
    if not input_path.exists():
        console.print(f"[red]File not found: {input_path}[/red]")
        raise typer.Exit(1)

    payloads = read_csv(input_path)
    console.print(
        Panel(
            f"File: [cyan]{input_path}[/cyan]\n"
            f"Responses: [cyan]{len(payloads)}[/cyan]\n"
            f"Server: [cyan]{url}[/cyan]",
            title="Submission",
        )
    )

    client = httpx.Client(base_url=url, timeout=30.0)
    health_check(client)

    n_failed = 0
    for i, payload in enumerate(payloads, start=1):
        resp = client.post("/api/v1/responses", json=payload)
        if resp.status_code >= 400:
            n_failed += 1
            body = resp.json()
            console.print(
                f"[red]Row {i} rejected (HTTP {resp.status_code}): "
                f"{body.get('message', body)}[/red]"
            )
            continue
        record = resp.json()
        score = record.get("score")
        total = record.get("totalQuestions")
        score_str = f"{score}/{total}" if score is not None else "unscored"
        console.print(f"Row {i}: [cyan]{record['id']}[/cyan] {score_str}")

    if n_failed:
        console.print(f"[red]{n_failed} of {len(payloads)} rows failed[/red]")
        raise typer.Exit(1)
    console.print("[green]All responses submitted.[/green]")


if __name__ == "__main__":
    app()

#!/usr/bin/env python
"""
Print response statistics and the leaderboard for a questionnaire,
reading a file-backed data directory directly.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from response_service.analytics.aggregator import ResponseAggregator
from response_service.analytics.data_models import LeaderboardEntry, ResponseStats
from response_service.core.exceptions import StorageError
from response_service.storage.medium import JsonFileMedium
from response_service.storage.store import ResponseStore

DEFAULT_DATA_DIR = Path("data")

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def print_question_stats(stats: ResponseStats) -> None:
    table = Table(title="Answers by Question")
    table.add_column("#", justify="right")
    table.add_column("Question", style="bold")
    table.add_column("Answers", justify="right")
    table.add_column("Option counts")

    for i, q in enumerate(stats.question_stats, start=1):
        counts = ", ".join(
            f"{option}: {count}"
            for option, count in sorted(
                q.option_counts.items(), key=lambda kv: -kv[1]
            )
        )
        table.add_row(
            str(i), q.question_text or q.question_id, str(q.total_answers), counts
        )

    console.print(table)


def print_leaderboard(entries: list[LeaderboardEntry], top: int) -> None:
    table = Table(title="Leaderboard")
    table.add_column("Rank", justify="right")
    table.add_column("Player", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Submitted")

    for entry in entries[:top]:
        total = entry.total_questions if entry.total_questions is not None else "-"
        table.add_row(
            str(entry.rank),
            entry.submitter_name,
            f"{entry.score}/{total}",
            str(entry.percentage),
            entry.submitted_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@app.command()
def main(
    questionnaire_id: str = typer.Argument(
        ...,
        help="Questionnaire to summarize",
    ),
    data_dir: Path = typer.Option(
        DEFAULT_DATA_DIR,
        help="Directory of the file-backed store",
    ),
    top: int = typer.Option(
        10,
        help="Number of leaderboard rows to show",
    ),
    export: Path | None = typer.Option(
        None,
        help="Also export responses to this CSV path",
    ),
) -> None:
    """Summarize responses to one questionnaire."""
    aggregator = ResponseAggregator(ResponseStore(JsonFileMedium(data_dir)))

    try:
        stats = aggregator.stats(questionnaire_id)
        entries = aggregator.leaderboard(questionnaire_id)
    except StorageError as e:
        console.print(f"[red]Could not read responses: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        Panel(
            f"Questionnaire: [cyan]{questionnaire_id}[/cyan]\n"
            f"Responses: [cyan]{stats.total_responses}[/cyan]\n"
            f"Average score: [cyan]{stats.average_score:.2f}[/cyan]",
            title="Response Stats",
        )
    )
    if stats.total_responses == 0:
        return

    print_question_stats(stats)
    if entries:
        print_leaderboard(entries, top)

    if export is not None:
        path = aggregator.export_csv(questionnaire_id, export)
        console.print(f"Exported: [cyan]{path}[/cyan]")


if __name__ == "__main__":
    app()

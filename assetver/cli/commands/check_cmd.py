"""Check command: evaluate a range and its translation side by side."""

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from assetver.cli._console import get_console
from assetver.converter.checker import check_translation
from assetver.converter.exceptions import AssetverError


def _match_label(matches: bool) -> str:
    return "[green]yes[/green]" if matches else "[red]no[/red]"


def do_check(range_expr: str, versions: list[str]) -> None:
    """Print whether the npm range and its translation accept each version.

    Exits with code 1 when the range cannot be evaluated or when the two
    forms disagree on any version.
    """
    console = get_console()

    try:
        report = check_translation(range_expr, versions)
    except AssetverError as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    table = Table(
        title=f"{escape(report.source_range)} -> {escape(report.translated_range)}",
        box=box.ROUNDED,
        show_header=True,
    )
    table.add_column("Version", style="cyan")
    table.add_column("npm")
    table.add_column("Translated")

    for check in report.checks:
        table.add_row(escape(check.version), _match_label(check.source_matches), _match_label(check.translated_matches))

    console.print(table)

    if not report.is_consistent:
        console.print("[red]The translated constraint disagrees with the npm range.[/red]")
        raise typer.Exit(code=1)
    console.print("[green]The translated constraint agrees with the npm range.[/green]")

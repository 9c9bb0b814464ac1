"""Command-line interface for netscore."""

import asyncio
import sys

import typer
from dotenv import load_dotenv
from rich.console import Console

from netscore import __version__
from netscore.logging_setup import configure_logging
from netscore.services.batch import parse_package_url, score_url_file
from netscore.services.scorer import score_package

app = typer.Typer(
    name="netscore",
    help="Composite trustworthiness scores for npm packages and GitHub repositories",
    add_completion=False,
)
# stdout carries NDJSON only; human-facing output goes to stderr
console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"netscore version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """NetScore - package trustworthiness scoring."""
    load_dotenv()
    configure_logging()


@app.command()
def score(
    url: str = typer.Argument(..., help="GitHub repository or npm package URL"),
):
    """Score a single package and print one NDJSON line."""
    try:
        identity = parse_package_url(url)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    report = asyncio.run(score_package(identity, url=url))
    sys.stdout.write(report.to_json() + "\n")


@app.command()
def urls(
    url_file: str = typer.Argument(..., help="File with one package URL per line"),
):
    """Score every package listed in a URL file, one NDJSON line each."""
    try:
        result = asyncio.run(score_url_file(url_file, sys.stdout))
    except OSError as e:
        console.print(f"[red]Error reading {url_file}: {e}[/red]")
        raise typer.Exit(1)

    if result.skipped:
        console.print(f"[yellow]Skipped {result.skipped} of {result.total} URLs[/yellow]")


if __name__ == "__main__":
    app()

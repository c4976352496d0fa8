"""CLI entry point for pkgscore."""

import math
import tempfile
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv()

import typer
from pydantic import TypeAdapter
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pkgscore.analyzers.bus_factor import FAILURE_SCORE, get_bus_factor
from pkgscore.analyzers.github import GitHubFetcher
from pkgscore.analyzers.license import check_license_compatibility
from pkgscore.analyzers.pipeline import MetricsPipeline
from pkgscore.analyzers.ramp_up import SOURCE_EXTENSIONS, calculate_ramp_up
from pkgscore.config import Settings
from pkgscore.logging_cfg import setup_logging
from pkgscore.models.schemas import PackageScores, RampUpResult
from pkgscore.vcs import clone_repo

app = typer.Typer(help="Bus factor, ramp-up and license metrics for open-source packages.")

console = Console()
err_console = Console(stderr=True)


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    setup_logging()


def _format_ratio(ratio: float) -> str:
    return "n/a" if math.isnan(ratio) else f"{ratio:.3f}"


def _ramp_up_table(result: RampUpResult, title: str) -> Table:
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Files", str(result.files))
    table.add_row("SLOC", f"{result.sloc:,}")
    table.add_row("Comments", f"{result.comments:,}")
    table.add_row("Ratio", _format_ratio(result.ratio))
    if result.readme:
        table.add_row("README words", f"{result.readme.word_count:,}")
        table.add_row("External links", str(len(result.readme.external_links)))
    return table


@app.command()
def bus_factor(
    url: str = typer.Argument(..., help="GitHub repository URL"),
) -> None:
    """Score contributor concentration for a GitHub repository."""
    fetcher = GitHubFetcher(settings=Settings.from_env())
    score = get_bus_factor(url, fetcher)
    if score == FAILURE_SCORE:
        console.print(f"[red]Could not fetch contributors for {url}[/red]")
        raise typer.Exit(1)
    console.print(f"[bold cyan]{url}[/bold cyan] bus factor: [bold]{score:.1f}[/bold]")


@app.command()
def ramp_up(
    target: str = typer.Argument(..., help="Local checkout directory or repository URL"),
    ext: list[str] | None = typer.Option(None, "--ext", "-x", help="Source file suffix (repeatable)"),
) -> None:
    """Measure comment density of a checkout or a freshly cloned repository."""
    extensions = tuple(ext) if ext else SOURCE_EXTENSIONS
    path = Path(target)

    if path.is_dir():
        result = calculate_ramp_up(path, extensions)
    else:
        pipeline = MetricsPipeline(settings=Settings.from_env(), extensions=extensions)
        repo_ref = pipeline.resolve_repo(target)
        if repo_ref is None:
            console.print(f"[red]{target} is neither a directory nor a known repository URL[/red]")
            raise typer.Exit(1)

        with tempfile.TemporaryDirectory(prefix="pkgscore-") as tmp:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                progress.add_task(f"Cloning {repo_ref.full_name}...", total=None)
                cloned = clone_repo(repo_ref.url, tmp)
            if not cloned:
                console.print(f"[red]Could not clone {repo_ref.url}[/red]")
                raise typer.Exit(1)
            result = calculate_ramp_up(tmp, extensions)

    console.print(_ramp_up_table(result, title=f"Ramp-up: {target}"))


@app.command()
def license(
    url: str = typer.Argument(..., help="GitHub repository or npm package URL"),
) -> None:
    """Check whether a package's license is compatible with LGPL-2.1."""
    result = check_license_compatibility(url, settings=Settings.from_env())
    color = "green" if result.score else "red"
    console.print(f"[bold cyan]{url}[/bold cyan] license: [{color}]{result.score}[/{color}]")
    console.print(f"[dim]{result.details}[/dim]")


def _read_urls(urls: list[str] | None, url_file: Path | None) -> list[str]:
    collected = list(urls or [])
    if url_file:
        for line in url_file.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                collected.append(line)
    return collected


@app.command()
def score(
    urls: list[str] | None = typer.Argument(None, help="GitHub repository or npm package URLs"),
    url_file: Path | None = typer.Option(None, "--file", "-f", help="File with one URL per line"),
    json_output: bool = typer.Option(False, "--json", help="Print one JSON object per line"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON file"),
    skip_ramp_up: bool = typer.Option(False, "--skip-ramp-up", help="Do not clone repositories"),
) -> None:
    """Compute every metric for one or more packages."""
    targets = _read_urls(urls, url_file)
    if not targets:
        console.print("[red]No URLs given[/red]")
        raise typer.Exit(1)

    results: list[PackageScores] = []
    with MetricsPipeline(settings=Settings.from_env(), ramp_up=not skip_ramp_up) as pipeline:
        for url in targets:
            result = pipeline.evaluate(url)
            results.append(result)
            if json_output:
                print(result.model_dump_json(), flush=True)

    if not json_output:
        table = Table(title=f"Scores for {len(results)} packages")
        table.add_column("URL", style="cyan")
        table.add_column("Bus Factor", justify="right")
        table.add_column("Ramp-up Ratio", justify="right")
        table.add_column("License", justify="right")
        table.add_column("Details", style="dim", max_width=60)

        for result in results:
            bus = "[red]error[/red]" if result.bus_factor == FAILURE_SCORE else f"{result.bus_factor:.1f}"
            ratio = _format_ratio(result.ramp_up.ratio) if result.ramp_up else "-"
            table.add_row(result.url, bus, ratio, str(result.license.score), result.license.details)

        console.print(table)

    if output:
        output.write_bytes(TypeAdapter(list[PackageScores]).dump_json(results, indent=2))
        err_console.print(f"\n[green]Saved to {output}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from pkgscore import __version__

    console.print(f"pkgscore v{__version__}")


if __name__ == "__main__":
    app()

"""Command-line interface for Style Consistency Analyzer."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from style_consistency_analyzer import __version__
from style_consistency_analyzer.config import get_settings
from style_consistency_analyzer.ingest import load_sample, load_samples
from style_consistency_analyzer.style import (
    ComparisonResult,
    StyleAnalysisError,
    StyleConsistencyAnalyzer,
    explain_text_metric,
)
from style_consistency_analyzer.style.explain import TEXT_METRIC_KEYS
from style_consistency_analyzer.style.scoring import DEVIATION_KEYS

console = Console()

SEVERITY_STYLES = {"high": "red", "medium": "yellow", "low": "cyan"}
SIGNIFICANCE_STYLES = {"OK": "green", "NOTICE": "cyan", "WARNING": "yellow", "ALERT": "red"}
BAND_STYLES = {
    "excellent": "green",
    "good": "green",
    "moderate": "yellow",
    "concerning": "red",
    "critical": "bold red",
}


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool) -> None:
    """Style Consistency Analyzer - Check new writing against an author's baseline."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


def _load_baseline(directory: str, pattern: str | None, quiet: bool = False) -> list[tuple[str, str]]:
    """Load baseline samples or exit when there are none."""
    pattern = pattern or get_settings().sample_pattern
    try:
        samples = load_samples(Path(directory), pattern)
    except ValueError as e:
        _fail(str(e))

    if not samples:
        _fail(f"No files matching '{pattern}' found in {directory}")

    if not quiet:
        console.print(f"[dim]Baseline: {len(samples)} sample(s) from {directory}[/dim]")
    return samples


def _load_document(path: str) -> str:
    try:
        return load_sample(Path(path))
    except ValueError as e:
        _fail(str(e))


def _print_steps(title: str, steps) -> None:
    console.print(f"\n[bold]{title}[/bold]\n")
    for i, step in enumerate(steps, 1):
        console.print(f"[bold cyan]{i}. {step.title}[/bold cyan]")
        if step.formula:
            console.print(f"   Formula: [dim]{step.formula}[/dim]")
        console.print(f"   {step.substitution}")
        console.print(f"   [green]→ {step.result}[/green]")
        if step.interpretation:
            console.print(f"   [italic]{step.interpretation}[/italic]")
        console.print()


def _compare_with_progress(analyzer: StyleConsistencyAnalyzer, texts: list[str], text: str) -> ComparisonResult:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Analyzing baseline...", total=len(texts) + 4)

        def progress_callback(p):
            done = p.current if p.phase == "baseline" else len(texts) + p.current
            progress.update(task, completed=done, description=p.message)

        analyzer.progress_callback = progress_callback
        return analyzer.compare(texts, text)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print all metrics as JSON")
@click.option(
    "--explain", "-e", "explain_key",
    type=click.Choice(TEXT_METRIC_KEYS),
    help="Show how one metric was calculated",
)
def analyze(path: str, as_json: bool, explain_key: str | None) -> None:
    """Measure the style metrics of a single document.

    Example:
        sca analyze essays/draft.txt --explain grade
    """
    text = _load_document(path)
    analyzer = StyleConsistencyAnalyzer()

    try:
        metrics = analyzer.analyze_text(text)
    except StyleAnalysisError as e:
        _fail(str(e))

    if as_json:
        click.echo(metrics.to_json())
        return

    console.print(f"[bold]Style Metrics:[/bold] {Path(path).name}\n")

    table = Table(title="Document Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Words", f"{metrics.vocabulary.total_words:,}")
    table.add_row("Sentences", f"{metrics.sentence_stats.total:,}")
    table.add_row("Avg sentence length", f"{metrics.sentence_stats.mean:.1f} words")
    table.add_row("Sentence variation (CV)", f"{metrics.cv:.1f}%")
    table.add_row("Flesch reading ease", f"{metrics.readability.score:.1f}")
    table.add_row("Grade level", f"{metrics.readability.grade:.1f}")
    table.add_row("Vocabulary variety (MSTTR)", f"{metrics.vocabulary.msttr * 100:.1f}%")
    table.add_row("Sophistication", f"{metrics.vocabulary.sophistication_ratio:.1f}%")
    table.add_row("Formulaic weight", f"{metrics.formal_register.total_weight}")
    table.add_row("Predictability", f"{metrics.ngrams.predictability:.1f}%")
    table.add_row("Paragraph coherence", f"{metrics.paragraphs.coherence:.1f}%")
    table.add_row("Passive voice", f"{metrics.passive.ratio:.1f} per 100 sentences")
    table.add_row("Formality", f"{metrics.style_markers.formality:.0f}")

    console.print(table)

    if metrics.formal_register.phrases:
        console.print("\n[bold]Formulaic phrases:[/bold]")
        for match in metrics.formal_register.phrases[:10]:
            console.print(f"  \"{match.phrase}\" x{match.count} [dim]({match.suggestion})[/dim]")

    if explain_key:
        _print_steps(f"How {explain_key} was calculated", explain_text_metric(explain_key, metrics, analyzer.config))


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--pattern", "-p", help="File pattern to match (default from settings)")
@click.option("--output", "-o", type=click.Path(), help="Output file for the profile (JSON)")
def profile(directory: str, pattern: str | None, output: str | None) -> None:
    """Build a baseline profile from a directory of samples.

    Example:
        sca profile samples/ -p "*.txt" -o baseline.json
    """
    samples = _load_baseline(directory, pattern)
    analyzer = StyleConsistencyAnalyzer()

    try:
        with console.status("Building baseline profile..."):
            baseline = analyzer.build_profile([text for _, text in samples])
    except StyleAnalysisError as e:
        _fail(str(e))

    reliability = baseline.reliability

    table = Table(title="Baseline Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Mean", justify="right")
    table.add_column("Std Dev", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")

    for key, stats in baseline.metrics.items():
        table.add_row(key, f"{stats.mean:.2f}", f"{stats.std_dev:.2f}", f"{stats.min:.2f}", f"{stats.max:.2f}")

    console.print(table)

    console.print(f"\n[bold]Reliability:[/bold] {reliability.sufficiency}")
    console.print(f"  Samples: {reliability.sample_count}")
    console.print(f"  Confidence: {reliability.confidence:.0f}%")
    console.print(f"  Overall variance: {reliability.overall_variance:.3f} ({reliability.variance_level})")
    if reliability.outlier_ids:
        names = ", ".join(samples[i][0] for i in reliability.outlier_ids)
        console.print(f"  [yellow]Outliers by length:[/yellow] {names}")

    top = ", ".join(w.word for w in baseline.vocabulary.signature_words[:10])
    if top:
        console.print(f"  Signature words: {top}")

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(baseline.to_json(), encoding="utf-8")
        console.print(f"\n[green]OK[/green] Profile saved to {output_path}")


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--pattern", "-p", help="File pattern to match (default from settings)")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.option(
    "--explain", "-e", "explain_key",
    type=click.Choice(DEVIATION_KEYS),
    help="Show the z-score calculation for one metric",
)
@click.option("--output", "-o", type=click.Path(), help="Output file for the result (JSON)")
def compare(
    directory: str,
    path: str,
    pattern: str | None,
    as_json: bool,
    explain_key: str | None,
    output: str | None,
) -> None:
    """Compare a document against the baseline samples in DIRECTORY.

    Examples:
        sca compare samples/ essay.txt
        sca compare samples/ essay.txt --explain grade -o result.json
    """
    samples = _load_baseline(directory, pattern, quiet=as_json)
    text = _load_document(path)
    analyzer = StyleConsistencyAnalyzer()
    texts = [t for _, t in samples]

    try:
        if as_json:
            result = analyzer.compare(texts, text)
        else:
            result = _compare_with_progress(analyzer, texts, text)
    except (StyleAnalysisError, ValueError) as e:
        _fail(str(e))

    if output:
        analyzer.save_result(result, output)

    if as_json:
        click.echo(result.to_json())
        return

    band_style = BAND_STYLES.get(result.composite.band, "white")
    console.print(
        f"\n[bold]Consistency Score:[/bold] [{band_style}]{result.consistency_score:.0f}/100[/{band_style}] "
        f"({result.composite.band})"
    )

    table = Table(title="Metric Deviations")
    table.add_column("Metric", style="cyan")
    table.add_column("Baseline", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Z-Score", justify="right")
    table.add_column("Status")

    for d in result.deviations:
        style = SIGNIFICANCE_STYLES.get(d.significance_label, "white")
        table.add_row(
            d.label,
            f"{d.baseline_mean:.1f}{d.suffix} ± {d.baseline_std_dev:.1f}",
            f"{d.current_value:.1f}{d.suffix}",
            f"{d.z_score:+.2f}",
            f"[{style}]{d.significance_label}[/{style}]",
        )

    console.print(table)

    console.print(f"\n[bold]Vocabulary overlap:[/bold] {result.vocabulary.overlap_score:.0f}%")
    console.print(f"[bold]Syntactic deviation:[/bold] {result.syntax.overall_deviation:.2f}")
    console.print(
        f"[bold]Error rate:[/bold] {result.errors.current_rate_level} "
        f"(baseline {result.errors.baseline_rate_level})"
    )
    if result.errors.confidence_note:
        console.print(f"[bold]Error consistency:[/bold] {result.errors.confidence_note}")

    if result.flags:
        console.print("\n[bold]Style change flags:[/bold]")
        for flag in result.flags:
            style = SEVERITY_STYLES.get(flag.severity, "white")
            console.print(f"  [{style}]{flag.type}[/{style}] {flag.message} [dim]({flag.detail})[/dim]")
    else:
        console.print("\n[green]No style change flags[/green]")

    if result.profile.sample_count < analyzer.settings.recommended_baseline_samples:
        console.print(
            f"\n[yellow]Note:[/yellow] {analyzer.settings.recommended_baseline_samples}+ baseline samples "
            "are recommended for reliable statistics."
        )

    if explain_key:
        _print_steps(f"How the {explain_key} deviation was calculated", result.explain_metric(explain_key))

    if output:
        console.print(f"\n[green]OK[/green] Result saved to {output}")


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--pattern", "-p", help="File pattern to match (default from settings)")
def explain(directory: str, path: str, pattern: str | None) -> None:
    """Show step by step how the consistency score was calculated.

    Example:
        sca explain samples/ essay.txt
    """
    samples = _load_baseline(directory, pattern)
    text = _load_document(path)
    analyzer = StyleConsistencyAnalyzer()

    try:
        result = analyzer.compare([t for _, t in samples], text)
    except (StyleAnalysisError, ValueError) as e:
        _fail(str(e))

    _print_steps("Consistency Score Calculation", result.explain_composite())

    if result.composite.penalties:
        console.print("[bold]Penalties applied:[/bold]")
        for penalty in result.composite.penalties:
            console.print(f"  - {penalty}")


if __name__ == "__main__":
    main()

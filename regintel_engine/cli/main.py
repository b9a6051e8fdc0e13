"""Interactive CLI for the regulatory intelligence engine using Typer and Rich."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from regintel_engine import __version__
from regintel_engine.config.engine_config import EngineConfig
from regintel_engine.config.logging import get_logger
from regintel_engine.config.settings import settings
from regintel_engine.data_management.record_store import (
    InMemoryRecordStore,
    RecordNotFoundError,
)
from regintel_engine.engine import RegulatoryIntelligenceEngine

# Initialize CLI app
app = typer.Typer(
    help="Regulatory intelligence engine CLI - device resolution, legal analysis and approval scoring",
    add_completion=False,
)

console = Console()

logger = get_logger("cli")

CorpusOption = typer.Option(
    None,
    "--corpus",
    "-c",
    help="JSON corpus file (defaults to CORPUS_PATH)",
)

LEVEL_STYLES = {
    "auto": "green",
    "senior": "cyan",
    "expert": "yellow",
    "board": "red",
}


def _load_engine(corpus: Optional[str]) -> RegulatoryIntelligenceEngine:
    """Build an engine over a JSON corpus file, exiting when none is usable."""
    path = corpus or settings.corpus_path
    if not path:
        console.print("[red]✗[/red] No corpus given. Pass --corpus or set CORPUS_PATH.")
        raise typer.Exit(1)
    if not Path(path).exists():
        console.print(f"[red]✗[/red] Corpus file not found: {path}")
        raise typer.Exit(1)

    try:
        store = InMemoryRecordStore(persistence_path=path)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        console.print(f"[red]✗[/red] Could not read corpus: {e}")
        raise typer.Exit(1)

    return RegulatoryIntelligenceEngine(store, EngineConfig.from_settings(settings))


@app.command()
def status(corpus: Optional[str] = CorpusOption) -> None:
    """
    Display engine configuration and corpus statistics.
    """
    logger.info("Displaying engine status")

    table = Table(title="Regulatory Intelligence Engine", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=20)
    table.add_column("Status", style="green", width=15)
    table.add_column("Details", style="yellow")

    python_version = f"Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    table.add_row("Environment", "✓ Ready", python_version)

    thresholds = (
        f"mapping {settings.mapping_threshold:.2f}, "
        f"relationship {settings.relationship_min_strength:.2f}, "
        f"trend window {settings.trend_window_days}d"
    )
    table.add_row("Thresholds", "✓ Loaded", thresholds)
    table.add_row("Logging", "✓ Active", f"Level: {settings.log_level}, Format: {settings.log_format}")

    path = corpus or settings.corpus_path
    if path and Path(path).exists():
        stats = _load_engine(path).store.get_stats()
        details = (
            f"{stats['regulatory_updates']} updates, {stats['legal_cases']} cases, "
            f"{stats['authorities']} authorities, {stats['rejected_on_load']} rejected"
        )
        table.add_row("Corpus", "✓ Loaded", details)
    else:
        table.add_row("Corpus", "⚠ Not Configured", path or "set CORPUS_PATH or pass --corpus")

    console.print(table)


@app.command("map-devices")
def map_devices(corpus: Optional[str] = CorpusOption) -> None:
    """
    Map the same device across jurisdictions.
    """
    engine = _load_engine(corpus)
    report = engine.generate_cross_reference()

    table = Table(title="Device Mappings", show_header=True, header_style="bold magenta")
    table.add_column("Primary", style="cyan")
    table.add_column("Related", style="yellow")
    table.add_column("Basis")
    table.add_column("Authorities")
    table.add_column("Confidence", justify="right", style="green")

    for mapping in report.device_mappings + report.clinical_mappings:
        table.add_row(
            mapping.primary_id,
            ", ".join(mapping.related_ids),
            mapping.mapping_basis.value,
            ", ".join(mapping.authorities),
            f"{mapping.confidence:.2f}",
        )
    console.print(table)

    for standard in report.standard_mappings:
        console.print(
            f"[bold]{standard.standard_id}[/bold] ({standard.name}): "
            f"{', '.join(standard.applicable_regulations)}"
        )

    console.print(f"\n[dim]{report.total_mappings} mappings in total[/dim]")


@app.command()
def timeline(
    record_id: str = typer.Argument(..., help="Record identifying the device"),
    corpus: Optional[str] = CorpusOption,
) -> None:
    """
    Show the regulatory timeline of a device.
    """
    engine = _load_engine(corpus)
    result = engine.build_timeline(record_id)
    if result is None:
        console.print(f"[red]✗[/red] Unknown record: {record_id}")
        raise typer.Exit(1)

    table = Table(title=f"Timeline for {record_id}", show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Category")
    table.add_column("Authority", style="yellow")
    table.add_column("Status")
    table.add_column("Impact")
    for event in result.events:
        table.add_row(
            event.date.date().isoformat() if event.date else "-",
            event.event_category,
            event.authority,
            event.status,
            event.impact.value,
        )
    console.print(table)
    console.print(f"Current status: [bold]{result.current_status}[/bold]")


@app.command()
def legal(corpus: Optional[str] = CorpusOption) -> None:
    """
    Analyze legal themes, case relationships, precedent chains and conflicts.
    """
    engine = _load_engine(corpus)
    analysis = engine.analyze_legal_corpus()

    themes = Table(title="Legal Themes", show_header=True, header_style="bold magenta")
    themes.add_column("Theme", style="cyan")
    themes.add_column("Precedent")
    themes.add_column("Cases", justify="right", style="green")
    for theme in analysis.themes:
        themes.add_row(theme.name, theme.precedent_value.value, str(len(theme.related_cases)))
    console.print(themes)

    relationships = Table(title="Case Relationships", show_header=True, header_style="bold magenta")
    relationships.add_column("Case 1", style="cyan")
    relationships.add_column("Case 2", style="cyan")
    relationships.add_column("Type")
    relationships.add_column("Strength", justify="right", style="green")
    relationships.add_column("Explanation", style="dim")
    for rel in analysis.relationships:
        relationships.add_row(
            rel.case_id_1, rel.case_id_2, rel.relationship_type.value, f"{rel.strength:.2f}", rel.explanation
        )
    console.print(relationships)

    for chain in analysis.precedent_chains:
        console.print(f"[bold]{chain.theme}[/bold]: {' → '.join(chain.case_ids)}. {chain.development_narrative}")

    for conflict in analysis.conflicts:
        positions = ", ".join(
            f"{p.case_id} ({p.outcome_position}, {p.jurisdiction or '?'})" for p in conflict.positions
        )
        console.print(f"[yellow]⚠ Conflict[/yellow] in {conflict.theme}: {positions}")


@app.command()
def evaluate(
    record_id: str = typer.Argument(..., help="Record to evaluate"),
    corpus: Optional[str] = CorpusOption,
) -> None:
    """
    Evaluate a record for publication.
    """
    engine = _load_engine(corpus)
    try:
        record = engine.store.get_record(record_id)
    except RecordNotFoundError:
        console.print(f"[red]✗[/red] Unknown record: {record_id}")
        raise typer.Exit(1)

    if record.is_legal_case:
        verdict = engine.evaluate_legal_case(record)
    else:
        verdict = engine.evaluate_regulatory_update(record)

    style = LEVEL_STYLES[verdict.review_level.value]
    lines = [
        f"Approved: {'yes' if verdict.approved else 'no'}",
        f"Confidence: {verdict.confidence:.2f}",
        f"Review level: [{style}]{verdict.review_level.value}[/{style}]",
        "",
        *verdict.reasoning,
    ]
    if verdict.risk_factors:
        lines += ["", "Risk factors: " + ", ".join(verdict.risk_factors)]
    if verdict.compliance_issues:
        lines += ["Compliance issues: " + ", ".join(verdict.compliance_issues)]
    if verdict.required_actions:
        lines += ["Required actions: " + "; ".join(verdict.required_actions)]

    console.print(Panel("\n".join(lines), title=f"Verdict for {record_id}", border_style=style))


@app.command()
def trends(
    window: Optional[int] = typer.Option(None, "--window", "-w", help="Window in days (defaults to TREND_WINDOW_DAYS)"),
    corpus: Optional[str] = CorpusOption,
) -> None:
    """
    Report topic frequency, emerging topics and risk patterns.
    """
    engine = _load_engine(corpus)
    report = engine.analyze_trends(window)

    console.print(
        f"[bold]Trends over {report.window_days} days[/bold] ({report.record_count} records)"
    )

    topics = Table(title="Top Topics", show_header=True, header_style="bold magenta")
    topics.add_column("Topic", style="cyan")
    topics.add_column("Mentions", justify="right", style="green")
    for topic in report.top_topics:
        topics.add_row(topic.topic, str(topic.count))
    console.print(topics)

    for topic in report.emerging_topics:
        console.print(
            f"[green]↑[/green] {topic.topic}: {topic.recent_mentions}/{topic.total_mentions} recent"
        )

    risks = Table(title="Risk Patterns", show_header=True, header_style="bold magenta")
    risks.add_column("Indicator", style="red")
    risks.add_column("Mentions", justify="right")
    for pattern in report.risk_patterns:
        risks.add_row(pattern.topic, str(pattern.count))
    console.print(risks)

    activity = ", ".join(f"{k}: {v}" for k, v in report.jurisdiction_activity.items())
    console.print(f"Jurisdiction activity: {activity or 'none'}")
    if report.litigation_types:
        litigation = ", ".join(f"{k}: {v}" for k, v in report.litigation_types.items())
        console.print(f"Litigation types: {litigation}")


@app.command()
def version() -> None:
    """Display version information."""
    console.print("[bold]Regulatory Intelligence Engine[/bold]")
    console.print(f"Version: {__version__}")


if __name__ == "__main__":
    app()

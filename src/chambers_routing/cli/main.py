"""
Chambers Routing CLI

Command-line interface for routing enquiries to barristers.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from ..config import settings
from ..db import get_repository
from ..logging_config import configure_logging
from ..models import Barrister, CandidateEvaluation, Enquiry, RoutingResult, Seniority, Urgency
from ..routing import (
    EnquiryRouter,
    RoutingPolicy,
    assess_availability,
    build_workload_map,
    find_available_barristers,
    summarize_availability,
)

app = typer.Typer(
    name="chambers",
    help="Chambers Routing: assign enquiries to barristers",
    add_completion=False,
)
console = Console()


@app.callback()
def _setup(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    configure_logging("DEBUG" if verbose else None)


def _router() -> EnquiryRouter:
    return EnquiryRouter(RoutingPolicy.from_settings())


def _score_color(score: float) -> str:
    return "green" if score >= 70 else "yellow" if score >= 50 else "red"


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


def _candidate_table(title: str, candidates: List[CandidateEvaluation]) -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", width=3)
    table.add_column("Barrister", width=22)
    table.add_column("Seniority", width=8)
    table.add_column("Score", width=6)
    table.add_column("Load", width=5)
    table.add_column("Area", width=5)
    table.add_column("Senior.", width=7)
    table.add_column("Capacity", width=8)
    table.add_column("Value", width=5)

    for rank, candidate in enumerate(candidates, 1):
        flags = candidate.eligibility
        color = _score_color(candidate.suitability_score)
        table.add_row(
            str(rank),
            (candidate.barrister.name or candidate.barrister.id)[:22],
            candidate.barrister.seniority.value,
            f"[{color}]{candidate.suitability_score:g}[/{color}]",
            f"{candidate.workload.utilization_percent}%",
            _flag(flags.practice_area_match),
            _flag(flags.seniority_match),
            _flag(flags.capacity_match),
            _flag(flags.value_match),
        )

    return table


def _print_result(result: RoutingResult, show_all: bool) -> None:
    criteria = result.criteria
    console.print(Panel.fit(
        f"[bold]Practice area:[/bold] {criteria.practice_area or '(any)'}\n"
        f"[bold]Complexity:[/bold] {criteria.complexity.value} | "
        f"[bold]Urgency:[/bold] {criteria.urgency.value} | "
        f"[bold]Value:[/bold] £{criteria.value:,.0f}",
        title="Routing Criteria",
    ))

    if result.eligible:
        console.print(_candidate_table(f"Eligible Candidates ({len(result.eligible)})", result.eligible))
    else:
        console.print("[yellow]No eligible barristers.[/yellow]")

    if show_all and result.ineligible:
        console.print(_candidate_table(f"Ineligible Candidates ({len(result.ineligible)})", result.ineligible))

    stats = result.insights.statistics
    console.print(f"\n[cyan]{result.insights.summary}[/cyan]")
    console.print(
        f"[dim]Eligibility rate {stats.eligibility_rate}% | "
        f"average score {stats.average_score:g} | top score {stats.top_score:g}[/dim]"
    )

    for concern in result.insights.concerns:
        console.print(f"[yellow]Concern: {concern}[/yellow]")
    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")


# =============================================================================
# Setup Commands
# =============================================================================

@app.command()
def init():
    """
    Initialize the database.

    Run this once before first use.
    """
    console.print("[cyan]Initializing Chambers Routing...[/cyan]")
    get_repository()
    console.print(Panel.fit(
        "[bold green]Chambers Routing is ready![/bold green]\n\n"
        "Next steps:\n"
        "1. Run [cyan]chambers seed chambers.json[/cyan] to load barristers\n"
        "2. Run [cyan]chambers barristers[/cyan] to view them\n"
        "3. Run [cyan]chambers route --practice-area Commercial[/cyan] to route an enquiry",
        title="Setup Complete",
    ))


@app.command()
def version():
    """Show version information."""
    console.print(Panel(
        f"[bold]{settings.APP_NAME}[/bold] v{settings.APP_VERSION}\n"
        f"Routing algorithm v{settings.ALGORITHM_VERSION}",
        title="Version",
    ))


@app.command()
def seed(
    filepath: Path = typer.Argument(..., help="JSON file with 'barristers' and/or 'enquiries' lists"),
):
    """
    Load barristers and enquiries from a JSON file.

    Example file:
        {"barristers": [{"id": "b1", "name": "A. Smith", "seniority": "Senior",
                         "practice_areas": ["Commercial"], "engagement_score": 85,
                         "current_workload": 30}],
         "enquiries": [{"id": "e1", "practice_area": "Commercial", "urgency": "Immediate"}]}
    """
    if not filepath.exists():
        console.print(f"[red]Error: File not found: {filepath}[/red]")
        raise typer.Exit(1)

    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
        barristers = [Barrister.model_validate(b) for b in data.get("barristers", [])]
        enquiries = [Enquiry.model_validate(e) for e in data.get("enquiries", [])]
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Error reading {filepath.name}: {e}[/red]")
        raise typer.Exit(1)

    repo = get_repository()
    for barrister in barristers:
        repo.save_barrister(barrister)
    for enquiry in enquiries:
        repo.save_enquiry(enquiry)

    console.print(f"[green]Loaded {len(barristers)} barristers and {len(enquiries)} enquiries.[/green]")


# =============================================================================
# Barrister Commands
# =============================================================================

@app.command()
def barristers(
    all_: bool = typer.Option(False, "--all", "-a", help="Include inactive barristers"),
):
    """List barristers with their workload and availability."""
    repo = get_repository()
    router = _router()
    barrister_list = repo.list_barristers(active_only=not all_)

    if not barrister_list:
        console.print("[yellow]No barristers found.[/yellow]")
        return

    workloads = build_workload_map(
        repo.get_workload_counters([b.id for b in barrister_list]),
        router.policy.max_workload,
    )

    table = Table(title=f"Barristers ({len(barrister_list)} found)")
    table.add_column("ID", style="dim", width=10)
    table.add_column("Name", width=22)
    table.add_column("Seniority", width=8)
    table.add_column("Practice Areas", width=25)
    table.add_column("Engagement", width=10)
    table.add_column("Load", width=5)
    table.add_column("Status", width=11)

    for barrister in barrister_list:
        workload = workloads[barrister.id]
        availability = assess_availability(barrister, workload, policy=router.policy)
        table.add_row(
            barrister.id[:10],
            barrister.name[:22],
            barrister.seniority.value,
            ", ".join(barrister.practice_areas)[:25],
            f"{barrister.engagement_score:g}",
            f"{workload.utilization_percent}%",
            availability.status.value,
        )

    console.print(table)


@app.command()
def set_workload(
    barrister_id: str = typer.Argument(..., help="Barrister id"),
    points: int = typer.Argument(..., min=0, help="Current workload points"),
):
    """Set a barrister's current workload counter."""
    repo = get_repository()
    if not repo.set_workload(barrister_id, points):
        console.print(f"[red]Barrister not found: {barrister_id}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Workload for {barrister_id} set to {points} points.[/green]")


# =============================================================================
# Routing Commands
# =============================================================================

@app.command()
def route(
    enquiry_id: Optional[str] = typer.Option(None, "--enquiry-id", "-e", help="Route a stored enquiry"),
    practice_area: Optional[str] = typer.Option(None, "--practice-area", "-p", help="Practice area"),
    urgency: Optional[str] = typer.Option(None, "--urgency", "-u", help="Immediate, This Week, This Month, Flexible"),
    value: Optional[float] = typer.Option(None, "--value", help="Estimated matter value"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Matter description"),
    matter_type: Optional[str] = typer.Option(None, "--matter-type", help="Matter type"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Also show ineligible candidates"),
):
    """
    Recommend a barrister for an enquiry.

    Examples:
        chambers route --practice-area Commercial --urgency Immediate --value 50000
        chambers route --enquiry-id 3f2c... --all
    """
    repo = get_repository()
    router = _router()

    if enquiry_id:
        enquiry = repo.get_enquiry(enquiry_id)
        if enquiry is None:
            console.print(f"[red]Enquiry not found: {enquiry_id}[/red]")
            raise typer.Exit(1)
    else:
        if urgency is not None and Urgency.coerce(urgency) is None:
            console.print(f"[red]Unknown urgency: {urgency}[/red]")
            raise typer.Exit(1)
        enquiry = Enquiry(
            id="temp",
            practice_area=practice_area,
            urgency=urgency,
            estimated_value=value,
            description=description,
            matter_type=matter_type,
        )

    barrister_list = repo.list_barristers(active_only=True)
    workloads = build_workload_map(
        repo.get_workload_counters([b.id for b in barrister_list]),
        router.policy.max_workload,
    )
    result = router.route_enquiry(enquiry, barrister_list, workloads)
    review = router.summarize_for_review(enquiry, result)

    _print_result(result, show_all)

    color = "red" if review.priority.value == "High" else "green"
    alternatives = "\n".join(f"  • {option}" for option in review.alternative_options) or "  (none)"
    console.print(Panel.fit(
        f"{review.primary_recommendation}\n\n"
        f"[bold]Alternatives:[/bold]\n{alternatives}\n\n"
        f"[bold]Priority:[/bold] [{color}]{review.priority.value}[/{color}] | "
        f"[bold]Action required:[/bold] {'yes' if review.action_required else 'no'}",
        title="Recommendation",
    ))


@app.command()
def evaluate(
    enquiry_id: str = typer.Argument(..., help="Stored enquiry id"),
    barrister_ids: List[str] = typer.Argument(..., help="Barrister ids to evaluate"),
    include_unavailable: bool = typer.Option(False, "--include-unavailable", help="Evaluate inactive barristers too"),
):
    """Evaluate specific barristers for a stored enquiry."""
    repo = get_repository()
    router = _router()

    enquiry = repo.get_enquiry(enquiry_id)
    if enquiry is None:
        console.print(f"[red]Enquiry not found: {enquiry_id}[/red]")
        raise typer.Exit(1)

    barrister_list = repo.list_barristers(active_only=not include_unavailable, ids=barrister_ids)
    if not barrister_list:
        console.print("[red]None of the specified barristers exist or are available.[/red]")
        raise typer.Exit(1)

    workloads = build_workload_map(
        repo.get_workload_counters([b.id for b in barrister_list]),
        router.policy.max_workload,
    )
    result = router.route_enquiry(enquiry, barrister_list, workloads, include_unavailable)
    _print_result(result, show_all=True)


@app.command()
def availability(
    practice_area: Optional[str] = typer.Option(None, "--practice-area", "-p", help="Required practice area"),
    seniority: Optional[str] = typer.Option(None, "--seniority", "-s", help="Exact seniority"),
    urgency: Optional[str] = typer.Option(None, "--urgency", "-u", help="Urgency of the matter"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum barristers to show"),
):
    """Show which barristers can take new work."""
    try:
        seniority_filter = Seniority.parse(seniority) if seniority else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    urgency_filter = Urgency.coerce(urgency) if urgency else None

    repo = get_repository()
    router = _router()
    barrister_list = repo.list_barristers(active_only=True)
    workloads = build_workload_map(
        repo.get_workload_counters([b.id for b in barrister_list]),
        router.policy.max_workload,
    )

    matches = find_available_barristers(
        barrister_list,
        workloads,
        practice_area=practice_area,
        seniority=seniority_filter,
        urgency=urgency_filter,
        limit=limit,
        policy=router.policy,
    )
    summary = summarize_availability(matches, practice_area, seniority_filter, urgency_filter)

    table = Table(title=f"Availability ({len(matches)} barristers)")
    table.add_column("Name", width=22)
    table.add_column("Seniority", width=8)
    table.add_column("Load", width=5)
    table.add_column("Status", width=11)
    table.add_column("Next Available", width=18)
    table.add_column("Urgent?", width=7)

    for match in matches:
        table.add_row(
            match.barrister.name[:22],
            match.barrister.seniority.value,
            f"{match.workload.utilization_percent}%",
            match.status.value,
            match.next_available_estimate or "Now",
            _flag(match.can_take_urgent),
        )

    console.print(table)
    console.print(f"\n[cyan]{summary.overview}[/cyan]")
    for line in summary.recommendations + summary.insights:
        console.print(f"[dim]• {line}[/dim]")


# =============================================================================
# Server
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload on code changes"),
):
    """
    Start the Chambers Routing API server.

    Swagger UI available at: http://localhost:8000/docs
    """
    import uvicorn

    console.print(Panel.fit(
        "[bold green]Chambers Routing API Server[/bold green]\n\n"
        f"Starting server on http://{host}:{port}\n\n"
        "[cyan]Endpoints:[/cyan]\n"
        "  • Swagger UI: /docs\n"
        "  • Assign: POST /v1/routing/assign-enquiry\n"
        "  • Evaluate: POST /v1/routing/evaluate-candidates\n"
        "  • Availability: GET /v1/routing/availability\n"
        "  • Workload: GET /v1/workload/current\n\n"
        "[dim]Press Ctrl+C to stop[/dim]",
        title="Server Mode",
    ))

    try:
        uvicorn.run(
            "chambers_routing.server:app",
            host=host,
            port=port,
            reload=reload,
            log_level="info",
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")


# =============================================================================
# Entry Point
# =============================================================================

def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()

"""Command-line dashboard: loads a tracker export and prints a role view."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from hiring_analytics import tracker
from hiring_analytics.config import DashboardConfig, apply_overrides, get_env_config, load_dashboard_config
from hiring_analytics.tracker.filters import (
    filter_by_date_range,
    filter_data_for_hiring_manager,
    filter_data_for_panellist,
    filter_data_for_recruiter,
)
from hiring_analytics.tracker.funnel import (
    calculate_pipeline_metrics,
    calculate_source_distribution,
    final_status_breakdown,
    funnel_stages,
    round_summary,
)
from hiring_analytics.tracker.models import CandidateRecord, DateFilters, records_to_frame
from hiring_analytics.tracker.panelists import calculate_all_panelist_metrics, calculate_panelist_metrics
from hiring_analytics.tracker.recruiters import calculate_all_recruiter_metrics, calculate_recruiter_metrics
from hiring_analytics.tracker.roster import unique_hiring_managers, unique_panelists, unique_recruiters
from hiring_analytics.tracker.sla import (
    feedback_sla_alerts,
    sourcing_sla_alerts,
    time_to_fill_alerts,
    time_to_hire_alerts,
)
from hiring_analytics.utils.io import write_output
from hiring_analytics.utils.parsing import format_date, format_hours_to_readable, format_rate, parse_date
from hiring_analytics.utils.types import Round, UserType

console = Console()
logger = logging.getLogger("hiring_analytics")

ROSTERS = {
    "hiring-managers": unique_hiring_managers,
    "recruiters": unique_recruiters,
    "panelists": unique_panelists,
}


def load_config() -> dict:
    config_path = Path(__file__).parent.parent / "dashboard.yaml"
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}

    # Fall back to pyproject.toml metadata
    return get_env_config()


def resolve_config(profile: str) -> DashboardConfig:
    return apply_overrides(load_dashboard_config(profile), load_config())


def _date_filters(args: argparse.Namespace) -> DateFilters:
    return DateFilters(
        req_date_from=parse_date(args.req_from),
        req_date_to=parse_date(args.req_to),
        sourcing_date_from=parse_date(args.sourcing_from),
        sourcing_date_to=parse_date(args.sourcing_to),
        screening_date_from=parse_date(args.screening_from),
        screening_date_to=parse_date(args.screening_to),
    )


def _series_table(title: str, series: list[dict]) -> Table:
    table = Table(title=title)
    table.add_column("Stage")
    table.add_column("Count", justify="right")
    for item in series:
        table.add_row(str(item["name"]), str(item["value"]))
    return table


def print_overview(records: list[CandidateRecord], config: DashboardConfig) -> None:
    metrics = calculate_pipeline_metrics(records)
    console.print(_series_table("Recruitment Pipeline", funnel_stages(metrics)))
    console.print(_series_table("Final Status", final_status_breakdown(metrics)))

    rounds = Table(title="Interview Rounds")
    for col in ("Round", "Cleared", "Not Cleared", "Pending", "Pass Rate"):
        rounds.add_column(col)
    for label in Round:
        summary = round_summary(metrics, label)
        rounds.add_row(
            label.value, str(summary["cleared"]), str(summary["not_cleared"]),
            str(summary["pending"]), format_rate(summary["pass_rate"]),
        )
    console.print(rounds)

    sources = Table(title="Source Distribution")
    for col in ("Source", "Count", "Share", "Sub-sources"):
        sources.add_column(col)
    for item in calculate_source_distribution(records):
        subs = ", ".join(f"{s.sub_source} ({s.count})" for s in item.sub_sources)
        sources.add_row(item.source, str(item.count), f"{item.percentage}%", subs)
    console.print(sources)

    print_timeline_alerts(records, config)


def print_timeline_alerts(records: list[CandidateRecord], config: DashboardConfig) -> None:
    alerts = time_to_hire_alerts(records, config.sla) + time_to_fill_alerts(records, config.sla)
    if not alerts:
        console.print("[green]No TTH/TTF delays[/green]")
        return

    table = Table(title="TTH/TTF Delays")
    for col in ("Kind", "Candidate", "Designation", "Recruiter", "From", "Offer Accepted", "Days", "Over"):
        table.add_column(col)
    for a in alerts:
        table.add_row(
            a.kind.value, a.candidate_name, a.designation, a.recruiter_name,
            format_date(a.start_date), format_date(a.offer_acceptance_date),
            str(a.days_elapsed), f"[red]+{a.days_over}[/red]",
        )
    console.print(table)


def print_recruiter_view(records: list[CandidateRecord], name: str, config: DashboardConfig) -> None:
    m = calculate_recruiter_metrics(records, name, config.sla)
    table = Table(title=f"Recruiter: {name}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Candidates sourced", str(m.candidates_sourced))
    table.add_row("Screening cleared", str(m.screening_cleared))
    table.add_row("Screening not cleared", str(m.screening_not_cleared))
    table.add_row("Screening in progress", str(m.screening_in_progress))
    table.add_row("Screening rate", format_rate(m.screening_rate))
    table.add_row("Conversion rate", format_rate(m.conversion_rate))
    table.add_row("Avg sourcing → screening", format_hours_to_readable(m.avg_sourcing_to_screening_hours))
    table.add_row("48h alerts", str(m.alert_count))
    console.print(table)

    for alert in sourcing_sla_alerts(m.candidates, config.sla):
        console.print(
            f"  [yellow]⚠ {alert.candidate_name}[/yellow]: sourced {format_date(alert.sourcing_date)}, "
            f"screened {format_date(alert.screening_date)} ({format_hours_to_readable(alert.hours)})"
        )


def print_panelist_view(records: list[CandidateRecord], name: str, config: DashboardConfig) -> None:
    m = calculate_panelist_metrics(records, name, config.sla)
    table = Table(title=f"Panelist: {name}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Interviews (R1/R2/R3)", f"{m.total_interviews} ({m.r1_interviews}/{m.r2_interviews}/{m.r3_interviews})")
    table.add_row("Passed / failed / pending", f"{m.passed_interviews} / {m.failed_interviews} / {m.pending_interviews}")
    table.add_row("Pass rate", format_rate(m.pass_rate))
    table.add_row("Pass rate R1 / R2 / R3", " / ".join(format_rate(r) for r in (m.r1_pass_rate, m.r2_pass_rate, m.r3_pass_rate)))
    table.add_row("Avg feedback time", format_hours_to_readable(m.avg_feedback_time_hours))
    table.add_row("Feedback alerts", str(m.alert_count))
    console.print(table)

    for i in m.interviews:
        if i.is_pending_feedback:
            console.print(f"  [yellow]⚠ {i.candidate_name} ({i.round}): feedback pending[/yellow]")
        elif i.is_alert:
            console.print(
                f"  [yellow]⚠ {i.candidate_name} ({i.round}): feedback after "
                f"{format_hours_to_readable(i.time_difference_hours)}[/yellow]"
            )


def print_hiring_manager_view(records: list[CandidateRecord], name: str, config: DashboardConfig) -> None:
    print_overview(records, config)

    recruiters = Table(title="Recruiter Performance")
    for col in ("Recruiter", "Sourced", "Screening Rate", "Conversion", "Avg S→S", "Alerts"):
        recruiters.add_column(col)
    for m in calculate_all_recruiter_metrics(records, config.sla):
        recruiters.add_row(
            m.recruiter_name, str(m.candidates_sourced), format_rate(m.screening_rate),
            format_rate(m.conversion_rate), format_hours_to_readable(m.avg_sourcing_to_screening_hours),
            str(m.alert_count),
        )
    console.print(recruiters)

    panelists = Table(title="Panelist Performance")
    for col in ("Panelist", "Interviews", "Pass Rate", "Avg Feedback", "Alerts"):
        panelists.add_column(col)
    for m in calculate_all_panelist_metrics(records, config.sla):
        panelists.add_row(
            m.panelist_name, str(m.total_interviews), format_rate(m.pass_rate),
            format_hours_to_readable(m.avg_feedback_time_hours), str(m.alert_count),
        )
    console.print(panelists)

    sourcing = sourcing_sla_alerts(records, config.sla)
    feedback = feedback_sla_alerts(records, config.sla)
    console.print(f"[bold]{len(sourcing)} recruiter alerts, {len(feedback)} panelist alerts[/bold]")


def show_role(records: list[CandidateRecord], role: str, name: str | None, config: DashboardConfig) -> None:
    match UserType(role), name:
        case UserType.SUPER_ADMIN, _:
            print_overview(records, config)
        case _, None:
            console.print(f"[red]--name is required for the {role} view[/red]")
            sys.exit(1)
        case UserType.HIRING_MANAGER, hm:
            print_hiring_manager_view(filter_data_for_hiring_manager(records, hm), hm, config)
        case UserType.RECRUITER, recruiter:
            print_recruiter_view(filter_data_for_recruiter(records, recruiter), recruiter, config)
        case UserType.PANELLIST, panelist:
            print_panelist_view(filter_data_for_panellist(records, panelist), panelist, config)


def main():
    parser = argparse.ArgumentParser(description="TA tracker recruitment dashboard")
    parser.add_argument("--file", type=Path, help="Tracker CSV export")
    parser.add_argument("--profile", default="default", help="Config profile: default, strict, lenient")
    parser.add_argument("--role", choices=[u.value for u in UserType], default=UserType.SUPER_ADMIN.value)
    parser.add_argument("--name", help="Hiring manager, recruiter or panelist name")
    parser.add_argument("--list", choices=sorted(ROSTERS), dest="roster", help="List names for a role")
    parser.add_argument("--validate", action="store_true", help="Only validate the export")
    parser.add_argument("--export", type=Path, help="Write normalized records (.csv/.json/.parquet/.xlsx)")
    for dim in ("req", "sourcing", "screening"):
        parser.add_argument(f"--{dim}-from", help=f"Earliest {dim} date")
        parser.add_argument(f"--{dim}-to", help=f"Latest {dim} date")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        config = resolve_config(args.profile)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    path = args.file or config.tracker_path

    if args.validate:
        result = tracker.validate(path, config.loader)
        match result:
            case {"status": "ok", "row_count": n}:
                console.print(f"[green]✓ {path.name}: {n} valid records[/green]")
            case {"status": "error", "message": msg}:
                console.print(f"[red]✗ {path.name}: {msg}[/red]")
                sys.exit(1)
        return

    try:
        records = tracker.load_tracker(path, config.loader)
    except (FileNotFoundError, tracker.HeaderNotFoundError) as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    records = filter_by_date_range(records, _date_filters(args))

    if args.export:
        write_output(records_to_frame(records), args.export)
        logger.info("Exported %d records to %s", len(records), args.export)
    elif args.roster:
        for name in ROSTERS[args.roster](records):
            console.print(name)
    else:
        show_role(records, args.role, args.name, config)


if __name__ == "__main__":
    main()

"""Command-line runner: validate a contract export, score it and print the portfolio view."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from renewals import scoring
from renewals.config import RenewalsConfig, apply_overrides, get_env_config, load_config
from renewals.errors import InvalidInput
from renewals.scoring.models import PortfolioSummary, ScoreResult
from renewals.scoring.payload import parse_now
from renewals.utils.io import load_yaml_config, write_output

console = Console()

CONFIG_OVERRIDE = Path("renewals.yaml")

EXIT_FILE_ERROR = 1
EXIT_INVALID_INPUT = 2


def load_runtime_config(env: str, override_path: Path = CONFIG_OVERRIDE) -> RenewalsConfig:
    config = apply_overrides(load_config(env), get_env_config())
    if override_path.exists():
        config = apply_overrides(config, load_yaml_config(override_path))
    return config


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return value


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def render_results(results: list[ScoreResult]) -> Table:
    table = Table(title="Contract Scores")
    table.add_column("Contract")
    table.add_column("Category")
    table.add_column("Savings", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("Lead (days)", justify="right")
    table.add_column("Start by")
    table.add_column("Risk level")

    colors = {"Low": "green", "Medium": "yellow", "High": "red"}
    for r in results:
        start = r.optimal_renewal_date.isoformat() if r.optimal_renewal_date else "[dim]unscheduled[/dim]"
        level = str(r.risk_level)
        table.add_row(
            r.contract_id,
            r.category,
            _money(r.potential_savings),
            _money(r.risk_exposure),
            str(r.lead_time_days),
            start,
            f"[{colors[level]}]{level}[/{colors[level]}]",
        )
    return table


def render_summary(summary: PortfolioSummary) -> Table:
    table = Table(title="Portfolio Summary", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Contracts", str(summary.total_contracts))
    table.add_row("Total value", _money(summary.total_value))
    table.add_row("Potential savings", _money(summary.total_potential_savings))
    table.add_row("Risk exposure", _money(summary.total_risk_exposure))
    table.add_row("Competitive bidding", _money(summary.competitive_bidding_savings))
    table.add_row("Upcoming renewals", str(summary.upcoming_renewals))
    table.add_row("Target reduction", f"{summary.target_reduction_pct}%")

    for opp in summary.top_savings_opportunities:
        table.add_row(f"Top: {opp.contract_id} ({opp.vendor})", _money(opp.potential_savings))
    for group in summary.vendor_consolidation_groups:
        table.add_row(
            f"Consolidate: {group.vendor} x{group.contract_count}",
            _money(group.consolidation_savings),
        )
    return table


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Score contract renewals")
    parser.add_argument("source", type=Path, help="CSV file, directory of CSVs, or JSON request body")
    parser.add_argument("--validate", action="store_true", help="Only validate, don't score")
    parser.add_argument("--now", type=str, help="Score as of this ISO date (default: today)")
    parser.add_argument("--top", type=_non_negative_int, help="Number of top savings opportunities to list")
    parser.add_argument("--env", type=str, default="production", help="Configuration environment")
    parser.add_argument("--output", type=Path, help="Write scored rows to this path")
    parser.add_argument("--format", type=str, help="Output format: csv, json, parquet or excel")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if args.validate:
        match scoring.validate(args.source):
            case {"status": "ok", "row_count": n}:
                console.print(f"[green]✓[/green] {n} valid contracts in {args.source}")
            case {"status": "error", "message": msg}:
                console.print(f"[red]✗ {msg}[/red]")
                sys.exit(EXIT_INVALID_INPUT)
        return

    try:
        config = load_runtime_config(args.env)
        now = parse_now(args.now, date.today()) if args.now else None
        outcome = scoring.run(
            args.source,
            date.today(),
            config.policy,
            args.top,
            now=now,
            strict=config.strict_validation,
        )
    except InvalidInput as exc:
        console.print(f"[red]Invalid input ({exc.field or 'record'} {exc.record_id or ''}): {exc}[/red]")
        sys.exit(EXIT_INVALID_INPUT)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(EXIT_FILE_ERROR)

    console.print(f"[bold]Scoring as of {outcome['as_of'].isoformat()}[/bold]")
    console.print(render_results(outcome["results"]))
    console.print(render_summary(outcome["summary"]))
    for recommendation in outcome["summary"].recommendations:
        console.print(f"  • {recommendation}")

    task_summary = outcome["task_summary"]
    console.print(
        f"[bold]Renewal tasks:[/bold] {task_summary['total_tasks']} "
        f"({task_summary['overdue_tasks']} overdue, "
        f"{task_summary['estimated_total_hours']}h estimated)"
    )

    if args.output:
        fmt = args.format or config.output.fmt
        write_output(outcome["scored"], args.output, fmt)


if __name__ == "__main__":
    main()

"""
Offline reporting CLI.

Computes the dashboard from a CSV export of daily P&L without a database:

    pnl-dashboard report --csv pnl.csv --capital 500000
    pnl-dashboard report --csv pnl.csv --capital 500000 --as-of 2024-03-28
    pnl-dashboard monthly --csv pnl.csv

The CSV needs a header with ``date`` (YYYY-MM-DD) and ``pnl`` columns. A date
appearing more than once keeps its last row.
"""

import csv
import math
import uuid
from datetime import date
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.table import Table

from pnl_dashboard.analytics import aggregate_by_year, compute_metrics
from pnl_dashboard.config import settings
from pnl_dashboard.exceptions import EntryImportError, InvalidCapitalError
from pnl_dashboard.formatting import (
    format_currency,
    format_days,
    format_percent,
    format_ratio,
    format_streak,
)
from pnl_dashboard.models.metrics import DailyEntry, MetricsReport, YearlyPnLReport
from pnl_dashboard.services.dashboard_service import today_in_reporting_timezone

logger = structlog.get_logger(__name__)

console = Console()

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
REQUIRED_COLUMNS = ("date", "pnl")


def load_entries(path: Path) -> list[DailyEntry]:
    """
    Read daily entries from a CSV export.

    Args:
        path: CSV file with ``date`` and ``pnl`` columns

    Returns:
        Entries ascending by date, one per date (last row wins)

    Raises:
        EntryImportError: If the header is missing a column or a cell does not parse
    """
    by_date: dict[date, DailyEntry] = {}

    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        header = reader.fieldnames or []
        for column in REQUIRED_COLUMNS:
            if column not in header:
                raise EntryImportError(1, "header", ",".join(header))

        for row in reader:
            line_number = reader.line_num
            raw_date = (row.get("date") or "").strip()
            raw_pnl = (row.get("pnl") or "").strip()

            try:
                trade_date = date.fromisoformat(raw_date)
            except ValueError as e:
                raise EntryImportError(line_number, "date", raw_date) from e

            try:
                pnl = float(raw_pnl)
            except ValueError as e:
                raise EntryImportError(line_number, "pnl", raw_pnl) from e
            if not math.isfinite(pnl):
                raise EntryImportError(line_number, "pnl", raw_pnl)

            by_date[trade_date] = DailyEntry(date=trade_date, pnl=pnl)

    return [by_date[d] for d in sorted(by_date)]


def _signed_style(value: float) -> str:
    if value > 0:
        return "green"
    if value < 0:
        return "red"
    return ""


def render_metrics(report: MetricsReport, initial_capital: float, as_of: date) -> Table:
    table = Table(title=f"P&L Summary as of {as_of.isoformat()}")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", no_wrap=True)

    def money(label: str, value: float, percent: float | None = None) -> None:
        text = format_currency(value, show_sign=True)
        if percent is not None:
            text = f"{text} ({format_percent(percent, show_sign=True)})"
        table.add_row(label, f"[{_signed_style(value)}]{text}" if value else text)

    table.add_row("Initial Capital", format_currency(initial_capital))
    table.add_row("Current Equity", format_currency(report.current_equity))
    table.add_row("Peak Equity", format_currency(report.peak_equity))
    money("Overall Profit", report.overall_profit, report.overall_profit_percent)
    money("Today", report.today_profit, report.today_profit_percent)
    money("This Month", report.current_month_profit, report.current_month_profit_percent)
    table.add_section()
    table.add_row("Win Days", str(report.total_win_days))
    table.add_row("Loss Days", str(report.total_loss_days))
    table.add_row("No-Trade Days", str(report.total_no_trade_days))
    table.add_row("Win Rate", format_percent(report.win_rate))
    money("Avg Win", report.avg_win, report.avg_win_percent)
    money("Avg Loss", -report.avg_loss, -report.avg_loss_percent)
    table.add_row("Risk/Reward", format_ratio(report.risk_reward_ratio))
    table.add_row("Profit Factor", format_ratio(report.profit_factor))
    money("Expectancy", report.expectancy, report.expectancy_percent)
    table.add_section()
    table.add_row(
        "Max Drawdown",
        f"{format_currency(report.max_drawdown)} ({format_percent(report.max_drawdown_percent)})",
    )
    table.add_row("Max Days in Drawdown", format_days(report.max_days_in_drawdown))
    table.add_row(
        "Current Drawdown",
        f"{format_currency(report.current_drawdown)} "
        f"({format_percent(report.current_drawdown_percent)})",
    )
    table.add_row("Recovery Factor", format_ratio(report.recovery_factor))
    table.add_row("Calmar Ratio", format_ratio(report.calmar_ratio))
    table.add_section()
    table.add_row("Current Streak", format_streak(report.current_streak))
    table.add_row("Max Win Streak", str(report.max_win_streak))
    table.add_row("Max Losing Streak", str(report.max_losing_streak))
    money("Best Day", report.max_profit_day)
    money("Worst Day", report.max_loss_day)
    money("Best Week", report.max_profit_week)
    money("Worst Week", report.max_loss_week)
    money("Best Month", report.max_profit_month)
    money("Worst Month", report.max_loss_month)
    return table


def render_monthly(report: YearlyPnLReport) -> Table:
    """One column per year (most recent first), one row per month plus year stats."""
    table = Table(title="Monthly P&L")
    table.add_column("Month", style="cyan", no_wrap=True)
    for year in report.years:
        table.add_column(str(year), justify="right", no_wrap=True)

    for month, name in enumerate(MONTH_NAMES):
        cells = []
        for year in report.years:
            value = report.month_totals[year].get(month)
            cells.append("-" if value is None else format_currency(value, show_sign=True))
        table.add_row(name, *cells)

    table.add_section()
    stats = [report.year_stats[year] for year in report.years]
    table.add_row("Total", *[format_currency(s.total, show_sign=True) for s in stats])
    table.add_row("Max DD", *[format_currency(s.max_drawdown) for s in stats])
    table.add_row("DD Days", *[str(s.max_drawdown_days) for s in stats])
    return table


@click.group()
def cli():
    """Trading P&L dashboard CLI."""
    pass


@cli.command()
@click.option(
    "--csv",
    "csv_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV export with date,pnl columns",
)
@click.option(
    "--capital",
    type=float,
    default=None,
    help="Initial capital (default: from settings)",
)
@click.option(
    "--as-of",
    "as_of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date treated as today (YYYY-MM-DD)",
)
def report(csv_path, capital, as_of):
    """
    Print the full metrics report for a CSV of daily P&L.

    Example:
        pnl-dashboard report --csv pnl.csv --capital 500000 --as-of 2024-03-28
    """
    log = logger.bind(correlation_id=str(uuid.uuid4()))

    initial_capital = settings.default_initial_capital if capital is None else capital
    reference_date = as_of.date() if as_of else today_in_reporting_timezone()

    try:
        if initial_capital <= 0:
            raise InvalidCapitalError(initial_capital)
        entries = load_entries(csv_path)
    except (EntryImportError, InvalidCapitalError) as e:
        log.error("report_failed", path=str(csv_path), error=str(e))
        raise click.ClickException(str(e)) from e

    metrics = compute_metrics(
        entries,
        initial_capital=initial_capital,
        reference_date=reference_date,
        week_numbering=settings.week_numbering,
    )
    log.info(
        "report_generated",
        path=str(csv_path),
        entries=len(entries),
        reference_date=reference_date.isoformat(),
    )

    if not entries:
        click.echo("No entries found.")
        return

    console.print(render_metrics(metrics, initial_capital, reference_date))


@cli.command()
@click.option(
    "--csv",
    "csv_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV export with date,pnl columns",
)
def monthly(csv_path):
    """
    Print month-by-year totals with per-year drawdown statistics.

    No-trade days (pnl of 0) are left out, as on the dashboard.
    """
    log = logger.bind(correlation_id=str(uuid.uuid4()))

    try:
        entries = load_entries(csv_path)
    except EntryImportError as e:
        log.error("monthly_report_failed", path=str(csv_path), error=str(e))
        raise click.ClickException(str(e)) from e

    yearly = aggregate_by_year(entry for entry in entries if entry.pnl != 0)
    log.info("monthly_report_generated", path=str(csv_path), years=yearly.years)

    if not yearly.years:
        click.echo("No entries found.")
        return

    console.print(render_monthly(yearly))


if __name__ == "__main__":
    cli()

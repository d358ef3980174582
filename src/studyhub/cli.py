"""StudyHub CLI - study analytics and calendar."""

import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

import click

from .config import load_config
from .core.sessions import format_minutes
from .core.tasks import Priority, filter_tasks
from .core.time_range import TimeRange
from .ports.record_store import FetchError
from .workflows import (
    compile_dashboard,
    compile_month,
    export_dashboard,
    get_store,
    require_owner,
)

RANGE_CHOICES = [r.value for r in TimeRange]
WEEKDAY_HEADER = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _load_dashboard(time_range: str | None):
    config = load_config()
    try:
        store = get_store(config)
        owner = require_owner(config)
        return compile_dashboard(
            store,
            owner,
            time_range or config.default_range,
            datetime.now(config.tz()),
        )
    except (FetchError, ValueError) as e:
        _fail(e)


@click.group()
@click.version_option(package_name="studyhub")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """StudyHub - study analytics CLI."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--range", "time_range", type=click.Choice(RANGE_CHOICES), default=None,
              help="Time range (defaults to DEFAULT_RANGE from config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def analytics(time_range: str | None, as_json: bool):
    """Show focus time and task completion analytics."""
    data = _load_dashboard(time_range)
    summary = data.summary

    if as_json:
        click.echo(
            json.dumps(
                {
                    "range": data.window.time_range.value,
                    "start": data.window.start.isoformat(),
                    "end": data.window.end.isoformat(),
                    "total_minutes": summary.total_minutes,
                    "average_daily_minutes": summary.average_daily_minutes,
                    "most_productive_weekday": summary.most_productive_weekday,
                    "completion_rate": data.completion_rate,
                    "category_distribution": [
                        {"category": c.category, "minutes": c.minutes, "percentage": c.percentage}
                        for c in summary.category_distribution
                    ],
                    "daily": [
                        {
                            "date": entry.date.isoformat(),
                            "focus_minutes": focus.minutes,
                            "completed": entry.completed,
                            "total": entry.total,
                        }
                        for entry, focus in zip(data.completions.series, data.daily_focus)
                    ],
                },
                indent=2,
            )
        )
        return

    click.echo(f"Analytics ({data.window.time_range.value})\n")
    click.echo(f"Total focus time:     {format_minutes(summary.total_minutes)}")
    click.echo(f"Daily average:        {format_minutes(summary.average_daily_minutes)}")
    click.echo(f"Most productive day:  {summary.most_productive_weekday}")
    click.echo(f"Task completion rate: {data.completion_rate}%")

    click.echo("\nCategories:")
    if not summary.category_distribution:
        click.echo("  No category data yet.")
    for share in summary.category_distribution:
        click.echo(f"  {share.category:20} {format_minutes(share.minutes):>9} ({share.percentage}%)")

    click.echo("\nDaily:")
    for entry, focus in zip(data.completions.series, data.daily_focus):
        click.echo(
            f"  {entry.date.strftime('%a %d %b')}  focus {format_minutes(focus.minutes):>8}"
            f"  tasks {entry.completed}/{entry.total}"
        )


@main.command()
@click.option("--month", "month", default=None, help="Month to show (YYYY-MM), defaults to this month")
@click.option("--offset", default=0, type=int, help="Months to move from --month (e.g. -1, +1)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def calendar(month: str | None, offset: int, as_json: bool):
    """Show a six-week month grid with events."""
    config = load_config()
    try:
        reference = date.fromisoformat(f"{month}-01") if month else datetime.now(config.tz()).date()
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM, got {month!r}", param_hint="--month")

    try:
        view = compile_month(get_store(config), require_owner(config), reference, offset)
    except FetchError as e:
        _fail(e)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "date": day.date.isoformat(),
                        "is_current_month": day.is_current_month,
                        "events": [
                            {"id": e.id, "title": e.title, "category": e.category}
                            for e in day.events
                        ],
                    }
                    for day in view.days
                ],
                indent=2,
            )
        )
        return

    click.echo(view.reference.strftime("%B %Y"))
    click.echo(" ".join(f"{name:>5}" for name in WEEKDAY_HEADER))
    for week in range(0, len(view.days), 7):
        cells = []
        for day in view.days[week : week + 7]:
            marker = "*" if day.events else " "
            label = f"{day.date.day:>2}{marker}" if day.is_current_month else f"({day.date.day:>2})"
            cells.append(f"{label:>5}")
        click.echo(" ".join(cells))

    busy = [day for day in view.days if day.is_current_month and day.events]
    if busy:
        click.echo()
    for day in busy:
        shown, hidden = day.visible_events(config.events_per_day)
        titles = ", ".join(e.title for e in shown)
        more = f" (+{hidden} more)" if hidden else ""
        click.echo(f"  {day.date.strftime('%a %d')}: {titles}{more}")


@main.command()
@click.option("--search", default=None, help="Match title or description")
@click.option("--status", type=click.Choice(["all", "done", "open"]), default="all")
@click.option("--priority", type=click.Choice([p.value for p in Priority]), default=None)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tasks(search: str | None, status: str, priority: str | None, as_json: bool):
    """List tasks with optional filters."""
    config = load_config()
    try:
        all_tasks = get_store(config).list_tasks(require_owner(config))
    except FetchError as e:
        _fail(e)

    completed = {"all": None, "done": True, "open": False}[status]
    matching = filter_tasks(
        all_tasks,
        search=search,
        completed=completed,
        priority=Priority(priority) if priority else None,
    )

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": t.id,
                        "title": t.title,
                        "completed": t.completed,
                        "priority": t.priority.value,
                        "created_at": t.created_at.isoformat(),
                        "due_date": t.due_date.isoformat() if t.due_date else None,
                        "category": t.category,
                    }
                    for t in matching
                ],
                indent=2,
            )
        )
        return

    if not matching:
        click.echo("No matching tasks.")
        return

    for task in matching:
        check = "x" if task.completed else " "
        due = f" (due {task.due_date.date()})" if task.due_date else ""
        click.echo(f"[{check}] {task.title} [{task.priority.value}]{due}")


@main.command()
@click.option("--range", "time_range", type=click.Choice(RANGE_CHOICES), default=None)
@click.option("--output", "-o", "output_dir", default=".", type=click.Path(file_okay=False),
              help="Directory to write CSV files into")
def export(time_range: str | None, output_dir: str):
    """Export focus sessions and task completions as CSV."""
    data = _load_dashboard(time_range)
    paths = export_dashboard(data, Path(output_dir), data.window.end.date())
    for path in paths:
        click.echo(f"✓ Wrote {path}")


if __name__ == "__main__":
    main()

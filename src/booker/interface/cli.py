"""Booker CLI — root commands plus the simulation, notification and config subgroups."""

import datetime as dt
import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from booker.application.calendar_view import month_grid
from booker.application.config import AppConfig, resolve_config
from booker.application.dates import format_relative_label
from booker.application.display import format_minutes, language_code, stage_label
from booker.application.factory import get_study_service
from booker.application.scheduler import time_split
from booker.application.service import StudyService
from booker.domain.constants import TIME_OPTIONS
from booker.domain.errors import ImportRejected, ItemNotFound, ItemValidationError
from booker.domain.models import Category, EntryKind, Language, ReviewItem

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="booker: spaced-repetition planner for language study.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

sim_app = typer.Typer(help="Simulated clock for trying out the schedule.", no_args_is_help=True)
app.add_typer(sim_app, name="sim")

notify_app = typer.Typer(help="Daily reminder.", no_args_is_help=True)
app.add_typer(notify_app, name="notify")

config_app = typer.Typer(help="Manage booker configuration.", no_args_is_help=True)
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

SHORT_ID_LEN = 6


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _config(ctx: typer.Context) -> AppConfig:
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = resolve_config({"data_dir": obj.get("data_dir")})
    return obj["config"]


def _service(ctx: typer.Context) -> StudyService:
    obj = ctx.ensure_object(dict)
    if "service" not in obj:
        obj["service"] = get_study_service(_config(ctx))
    return obj["service"]


def _fail(message: str) -> None:
    typer.secho(message, fg="red", err=True)
    raise typer.Exit(1)


@contextmanager
def _saving():
    """Turn storage write failures into a one-line error."""
    try:
        yield
    except OSError as e:
        _fail(f"Could not write to the data directory: {e}")


def _short_id(item: ReviewItem) -> str:
    return item.id[-SHORT_ID_LEN:]


def _resolve_id(service: StudyService, ref: str) -> str:
    """Accept a full id or a unique tail of one (as printed in listings)."""
    matches = [item.id for item in service.items if item.id == ref or item.id.endswith(ref)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        _fail(f"No item matches '{ref}'.")
    _fail(f"'{ref}' is ambiguous ({len(matches)} items). Use more characters.")
    return ref


def _item_line(item: ReviewItem) -> str:
    split = time_split(item.original_duration, item.category)
    minutes = f"{item.original_duration} min"
    if split.has_split:
        minutes += f" ({split.main} + {split.secondary} fluency)"
    return (
        f"[{_short_id(item)}] {item.topic}  "
        f"{language_code(item.language)} · {item.category.value} · "
        f"{stage_label(item.stage)} · {minutes}"
    )


def _simulation_banner(service: StudyService) -> None:
    if service.clock.is_simulated:
        typer.secho(
            f"Simulation: {service.today.isoformat()} (+{service.clock.offset} days)",
            fg="yellow",
        )


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Where items and state are stored."),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for booker."""
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG if verbose > 1 else logging.INFO)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def log(
    ctx: typer.Context,
    topic: Annotated[str, typer.Argument(help="What you studied.")],
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Optional notes.")
    ] = None,
    language: Annotated[
        Language | None,
        typer.Option("--language", "-l", case_sensitive=False, help="Defaults to config."),
    ] = None,
    category: Annotated[
        Category | None,
        typer.Option("--category", "-c", case_sensitive=False, help="Defaults to config."),
    ] = None,
    duration: Annotated[
        int | None, typer.Option("--duration", "-m", help="Minutes spent studying.")
    ] = None,
):
    """[bold green]Log[/bold green] a studied topic; reviews are scheduled from today."""
    service = _service(ctx)
    config = _config(ctx)

    try:
        with _saving():
            item = service.log(
                topic,
                description=description,
                language=language or config.default_language,
                category=category or config.default_category,
                duration=duration if duration is not None else config.default_duration,
            )
    except ItemValidationError as e:
        _fail(str(e))
        return

    typer.secho(f"Logged: {_item_line(item)}", fg="green")
    typer.echo(f"First review: {format_relative_label(item.next_due_date, service.today)}")
    split = time_split(item.original_duration, item.category)
    if split.has_split:
        typer.secho(
            f"Grammar: {split.secondary} of {item.original_duration} min count as fluency practice.",
            fg="yellow",
        )


@app.command()
def complete(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Item id (or its last characters).")],
):
    """Mark today's review of an item as done."""
    service = _service(ctx)
    resolved = _resolve_id(service, item_id)

    try:
        with _saving():
            item = service.complete(resolved)
    except (ItemValidationError, ItemNotFound) as e:
        _fail(str(e))
        return

    if item.is_archived:
        typer.secho(f"Done! '{item.topic}' finished its cycle and was archived.", fg="green")
    else:
        label = format_relative_label(item.next_due_date, service.today)
        typer.secho(f"Reviewed '{item.topic}'. Next: {label} ({stage_label(item.stage)})", fg="green")


@app.command()
def delete(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Item id (or its last characters).")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Delete an item for good."""
    service = _service(ctx)
    resolved = _resolve_id(service, item_id)
    item = service.get(resolved)

    if not force and not typer.confirm(f"Delete '{item.topic}'?"):
        typer.secho("Cancelled.", fg="yellow")
        return

    with _saving():
        service.delete(resolved)
    typer.secho(f"Deleted '{item.topic}'.", fg="green")


@app.command()
def today(ctx: typer.Context):
    """Show today's plan: due and overdue reviews with the estimated time."""
    service = _service(ctx)
    _simulation_banner(service)
    stats = service.today_stats()

    if not stats.has_tasks:
        typer.secho("Free day: nothing to review.", fg="green")
        return

    typer.secho(f"Today's plan: {stats.time_string} · {stats.count} reviews", bold=True)
    for item in service.agenda().get(service.today, []):
        overdue = (service.today - item.next_due_date).days
        suffix = f"  (overdue {overdue}d)" if overdue > 0 else ""
        typer.echo(f"  {_item_line(item)}{suffix}")


@app.command()
def agenda(ctx: typer.Context):
    """List all scheduled reviews grouped by day (overdue ones under today)."""
    service = _service(ctx)
    _simulation_banner(service)
    groups = service.agenda()

    if not groups:
        typer.echo("No reviews scheduled.")
        return

    for day, items in groups.items():
        label = format_relative_label(day, service.today)
        total = format_minutes(sum(item.original_duration for item in items))
        typer.secho(f"{label} · {total}", fg="cyan" if day == service.today else None, bold=True)
        for item in items:
            typer.echo(f"  {_item_line(item)}")


@app.command()
def schedule(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Item id (or its last characters).")],
):
    """Show an item's remaining review timeline, assuming on-time reviews."""
    service = _service(ctx)
    resolved = _resolve_id(service, item_id)
    item = service.get(resolved)
    entries = service.schedule(resolved)

    typer.secho(item.topic, bold=True)
    if not entries:
        typer.echo("Archived: no reviews left.")
        return

    for entry in entries:
        marker = "*" if entry.kind == EntryKind.ACTUAL else " "
        typer.echo(
            f" {marker} {entry.date.isoformat()}  {stage_label(entry.stage):<18}"
            f"{format_relative_label(entry.date, service.today)}"
        )


@app.command()
def calendar(
    ctx: typer.Context,
    month: Annotated[
        str | None, typer.Option("--month", help="Month as YYYY-MM. Defaults to the current one.")
    ] = None,
    language: Annotated[
        Language | None, typer.Option("--language", "-l", case_sensitive=False)
    ] = None,
    category: Annotated[
        Category | None, typer.Option("--category", "-c", case_sensitive=False)
    ] = None,
):
    """Month view with actual and projected reviews."""
    service = _service(ctx)

    if month:
        try:
            first = dt.datetime.strptime(month, "%Y-%m").date()
        except ValueError:
            _fail(f"Invalid month '{month}'. Use YYYY-MM.")
            return
    else:
        first = service.today.replace(day=1)

    by_date = service.calendar(language=language, category=category)

    typer.secho(f"{first:%B %Y}", bold=True)
    typer.echo(" ".join(f"{name:>4}" for name in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")))
    for week in month_grid(first.year, first.month):
        cells = []
        for day in week:
            if day is None:
                cells.append("    ")
                continue
            count = len(by_date.get(day, []))
            mark = "!" if day == service.today else ("+" if count else " ")
            cells.append(f"{day.day:>3}{mark}")
        typer.echo(" ".join(cells))

    typer.echo("")
    for day in sorted(d for d in by_date if (d.year, d.month) == (first.year, first.month)):
        for item, entry in by_date[day]:
            kind = "" if entry.kind == EntryKind.ACTUAL else " (projected)"
            typer.echo(f"{day.isoformat()}  {item.topic} · {stage_label(entry.stage)}{kind}")


@app.command()
def archive(ctx: typer.Context):
    """List items that completed the whole review cycle."""
    service = _service(ctx)
    items = service.archive()
    if not items:
        typer.echo("No completed learning cycles yet.")
        return
    for item in items:
        typer.echo(f"  {item.created_at.isoformat()}  {_item_line(item)}")


@app.command()
def options():
    """List the preset study durations."""
    for label, minutes in TIME_OPTIONS:
        typer.echo(f"{label:>7}  = {minutes} min")


@app.command("export")
def export_cmd(
    ctx: typer.Context,
    fmt: Annotated[str, typer.Option("--format", help="json or yaml.")] = "json",
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write to a file instead of stdout.")
    ] = None,
):
    """Export every item as an editable text block."""
    service = _service(ctx)
    if fmt not in ("json", "yaml"):
        _fail(f"Unknown format '{fmt}'. Use json or yaml.")
    text = service.export_text(fmt)
    if output:
        output.write_text(text, encoding="utf-8")
        typer.secho(f"Exported {len(service.items)} items to {output}", fg="green")
    else:
        typer.echo(text)


@app.command("import")
def import_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File produced by 'booker export'.")],
    fmt: Annotated[
        str | None,
        typer.Option("--format", help="json or yaml. Guessed from the extension by default."),
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Replace the whole collection with the contents of an export."""
    service = _service(ctx)

    if not path.exists():
        _fail(f"File not found: {path}")
    if fmt is None:
        fmt = "yaml" if path.suffix.lower() in (".yaml", ".yml") else "json"
    if fmt not in ("json", "yaml"):
        _fail(f"Unknown format '{fmt}'. Use json or yaml.")

    if service.items and not force:
        if not typer.confirm(f"Replace all {len(service.items)} existing items?"):
            typer.secho("Cancelled.", fg="yellow")
            return

    text = path.read_text(encoding="utf-8")
    try:
        with _saving():
            count = service.import_text(text, fmt)
    except ImportRejected as e:
        _fail(f"Import rejected: {e}")
        return

    typer.secho(f"Imported {count} items.", fg="green")


@app.command()
def serve(
    port: Annotated[int, typer.Option(help="Port to bind the server to.")] = 8787,
    host: Annotated[str, typer.Option(help="Host to bind the server to.")] = "127.0.0.1",
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the local HTTP API for front-ends."""
    import uvicorn

    uvicorn.run("booker.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Simulation subgroup
# ---------------------------------------------------------------------------


@sim_app.command("advance")
def sim_advance(ctx: typer.Context):
    """Move the effective date one day forward."""
    service = _service(ctx)
    with _saving():
        new_today = service.advance_day()
    typer.secho(f"Today is now {new_today.isoformat()} (+{service.clock.offset} days)", fg="yellow")


@sim_app.command("reset")
def sim_reset(ctx: typer.Context):
    """Return to the real date."""
    service = _service(ctx)
    with _saving():
        new_today = service.reset_date()
    typer.secho(f"Back to {new_today.isoformat()}", fg="green")


@sim_app.command("status")
def sim_status(ctx: typer.Context):
    """Show the effective date and offset."""
    service = _service(ctx)
    typer.echo(f"{service.today.isoformat()} (+{service.clock.offset} days)")


# ---------------------------------------------------------------------------
# Notification subgroup
# ---------------------------------------------------------------------------


@notify_app.command("enable")
def notify_enable(ctx: typer.Context):
    """Allow the daily reminder."""
    service = _service(ctx)
    with _saving():
        enabled = service.enable_notifications()
    if enabled:
        typer.secho("Daily reminder enabled.", fg="green")
    else:
        typer.secho("Daily reminder stays off.", fg="yellow")


@notify_app.command("check")
def notify_check(ctx: typer.Context):
    """Send today's reminder if it has not been sent yet (safe to run from cron)."""
    service = _service(ctx)
    with _saving():
        sent = service.check_and_notify()
    if not sent:
        logger.info("No reminder sent")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = {
        k: str(v) if isinstance(v, Path) else getattr(v, "value", v)
        for k, v in config.model_dump().items()
    }
    typer.echo(json.dumps(d, indent=2))


if __name__ == "__main__":
    app()

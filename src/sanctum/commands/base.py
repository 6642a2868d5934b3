"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click

from ..db import get_data_dir, get_db_path
from ..models.calendar import CalendarCell, CalendarCellType
from ..models.program import abbreviate_day_name


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_ctx_data_dir(ctx: click.Context) -> Path:
    """Data directory chosen on the root command (or the default)."""
    obj = ctx.find_root().obj or {}
    return obj.get("data_dir") or get_data_dir()


def ensure_initialized(ctx: click.Context) -> Path:
    """Ensure the database is initialized and return its path."""
    db_path = get_db_path(get_ctx_data_dir(ctx))
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Sanctum not initialized. Run 'sanctum init' first."
        )
        ctx.exit(1)
    return db_path


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(line.rstrip() for line in lines)


CELL_WIDTH = 7

# (marker, color) per cell type
CELL_STYLES: dict[CalendarCellType, tuple[str, str | None]] = {
    CalendarCellType.PAST_COMPLETED: ("", "green"),
    CalendarCellType.PAST_MISSED: ("-", "bright_black"),
    CalendarCellType.TODAY: ("*", "bright_white"),
    CalendarCellType.PROJECTED: ("", "blue"),
    CalendarCellType.REST: (".", None),
    CalendarCellType.DELOAD: ("DL", "yellow"),
    CalendarCellType.EXPLICIT_REST: ("R", "cyan"),
}


def format_cell(cell: CalendarCell) -> str:
    """Render a calendar cell as a fixed-width label."""
    marker, color = CELL_STYLES[cell.type]
    text = marker
    if cell.workout is not None:
        text = abbreviate_day_name(cell.workout.day_name)
        if cell.type == CalendarCellType.PAST_COMPLETED:
            text += "+"
    if cell.is_today:
        text = f"[{text}]"

    text = text.ljust(CELL_WIDTH)
    if color:
        return click.style(text, fg=color, bold=cell.is_today)
    return text

"""Export progress command."""

import click

from ..db import ProgressRepository
from ..db.repositories import backup_file_name
from .base import async_command, echo_success, ensure_initialized


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write to file instead of stdout",
)
@click.option("--file", "to_file", is_flag=True, help="Write to a dated backup file")
@click.pass_context
@async_command
async def export(ctx: click.Context, output: str | None, to_file: bool):
    """Export all progress as JSON.

    Examples:

        # Print to stdout
        sanctum export

        # Save as sanctum-backup-YYYY-MM-DD.json
        sanctum export --file

        # Save to a specific file
        sanctum export -o backup.json
    """
    db_path = ensure_initialized(ctx)

    content = await ProgressRepository(db_path).export_json()

    if to_file and not output:
        output = backup_file_name()

    if output:
        with open(output, "w") as f:
            f.write(content)
        echo_success(f"Exported to {output}")
    else:
        click.echo(content)

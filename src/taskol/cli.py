import click
import json
import logging
import time
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from taskol import __version__
from taskol.backends import BACKENDS, get_backend
from taskol.config import ConfigError, resolve_settings
from taskol.error_logging import ErrorLogger, ErrorType
from taskol.link_format import DEFAULT_FORMAT, format_link_name
from taskol.logging import TaskolLogger
from taskol.naming import ProjectIdentity, parse_project_identity, parse_task_identity
from taskol.sync import SyncResult, sync_links


@click.group()
@click.version_option(version=__version__, prog_name="taskol")
@click.option('--verbose', '-v', is_flag=True, help='Print diagnostics to stderr')
def cli(verbose):
    """Keep a directory of shortcuts to in-progress task folders.

    \b
    Layout expected under --target:
      <project>/t_<task>      e.g. Project Foo_ABC/t_20230105_Design_Review
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
@click.option('--target', help='Root directory holding project folders')
@click.option('--link', help='Directory where shortcuts are created')
@click.option('--format', 'link_format',
              help=f'Shortcut name template (default: {DEFAULT_FORMAT})')
@click.option('--ignores', help="Skip folders whose name starts with one of these characters (default: '!#@')")
@click.option('--backend', type=click.Choice(sorted(BACKENDS)),
              help='Link flavour (default: shortcut on Windows, symlink elsewhere)')
@click.option('--dry-run', is_flag=True, help='Show the links that would be created without touching the link directory')
def sync(target, link, link_format, ignores, backend, dry_run):
    """Delete all shortcuts in --link and recreate one per task folder.

    \b
    Template placeholders:
      :pabb:        project abbreviation
      :pname:       project name
      :tname:       task name
      :tdate:       task date, YYYYMMDD
      :tdate-:      task date, YYYY-MM-DD
      :tdate年月日:  task date, YYYY年MM月DD日

    \b
    Examples:
      taskol sync --target ~/work --link ~/work-links
      taskol sync --target ~/work --link ~/work-links --format ':pname:_:tname:'
      taskol sync --dry-run                      # target/link from ~/.taskol/config.yaml
    """
    taskol_logger = TaskolLogger()
    error_logger = ErrorLogger()
    start_time = time.time()

    try:
        settings = resolve_settings(
            target=target,
            link=link,
            link_format=link_format,
            ignores=ignores,
            backend=backend,
        )
        link_backend = get_backend(settings.backend)
    except ConfigError as e:
        taskol_logger.log_error("sync", "Invalid configuration", {"reason": str(e)})
        error_logger.log_error("sync", ErrorType.CONFIG_ERROR, str(e))
        raise click.ClickException(str(e))

    taskol_logger.log_sync_started(settings.target_dir, settings.link_dir, {
        "format": settings.link_format,
        "backend": link_backend.name,
        "dry_run": dry_run,
    })

    try:
        result = sync_links(
            settings,
            link_backend,
            dry_run=dry_run,
            taskol_logger=taskol_logger,
            error_logger=error_logger,
        )
    except ConfigError as e:
        taskol_logger.log_error("sync", "Invalid configuration", {"reason": str(e)})
        error_logger.log_error("sync", ErrorType.CONFIG_ERROR, str(e))
        raise click.ClickException(str(e))

    duration_ms = int((time.time() - start_time) * 1000)
    taskol_logger.log_sync_finished(duration_ms, {
        "removed": len(result.removed),
        "planned": len(result.entries),
        "created": result.created_count,
        "failed": len(result.failures),
    })

    _print_sync_result(result, settings.link_dir)

    if result.failures and result.entries and result.created_count == 0 and not dry_run:
        raise SystemExit(1)


def _print_sync_result(result: SyncResult, link_dir: Path) -> None:
    console = Console()

    if result.entries:
        title = "Links (dry run)" if result.dry_run else "Links"
        table = Table(title=title)
        table.add_column("Project", style="cyan")
        table.add_column("Task folder")
        table.add_column("Link", style="green")
        table.add_column("Status")

        for entry in result.entries:
            if entry.error:
                status = f"[red]{entry.error}[/red]"
            elif entry.created:
                status = "[green]Created[/green]"
            else:
                status = "[blue]Would create[/blue]"
            table.add_row(entry.project.display_name, entry.target.name, entry.link_name, status)

        console.print(table)
    else:
        console.print("[yellow]No task folders found[/yellow]")

    action_removed = "Would remove" if result.dry_run else "Removed"
    action_created = "Would create" if result.dry_run else "Created"
    if result.dry_run:
        created = sum(1 for e in result.entries if not e.error)
    else:
        created = result.created_count

    console.print(f"[bold]Summary:[/bold] {link_dir}")
    console.print(f"  {action_removed}: {len(result.removed)} link(s)")
    console.print(f"  {action_created}: [green]{created}[/green] link(s)")
    if result.failures:
        console.print(f"  Failed: [red]{len(result.failures)}[/red]")
        for failure in result.failures:
            console.print(f"    - {failure}")

    if result.dry_run and result.entries:
        console.print()
        console.print("[dim]Run without --dry-run to apply changes[/dim]")


@cli.command()
@click.argument('names', nargs=-1, required=True)
@click.option('--project', 'as_project', is_flag=True, help='Parse NAMES as project folders instead of task folders')
@click.option('--format', 'link_format', default=None,
              help='Also render each task name through this template (project fields empty)')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
def parse(names, as_project, link_format, output_json):
    """Show how folder names are parsed.

    \b
    Examples:
      taskol parse t_20230105_Design_Review
      taskol parse --project 'ABC_Project Foo' 'Project Foo_ABC'
      taskol parse --format ':tdate-: :tname:' t_230105_Kickoff
    """
    rows = []
    for name in names:
        if as_project:
            project = parse_project_identity(name)
            rows.append({
                "name": name,
                "abbreviation": project.abbreviation,
                "display_name": project.display_name,
            })
        else:
            task = parse_task_identity(name)
            row = {
                "name": name,
                "display_name": task.display_name,
                "date": task.date.isoformat() if task.date else None,
            }
            if link_format:
                row["link_name"] = format_link_name(link_format, ProjectIdentity(), task)
            rows.append(row)

    if output_json:
        click.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    for row in rows:
        click.echo(row["name"])
        for key, value in row.items():
            if key == "name":
                continue
            click.echo(f"  {key}: {'' if value is None else value}")


@cli.command()
@click.option('--limit', default=10, type=int, help='Number of recent errors to show (default: 10)')
@click.option('--type', 'error_type', default=None,
              type=click.Choice([t.value for t in ErrorType]),
              help='Filter by error type')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
def errors(limit: int, error_type: Optional[str], output_json: bool):
    """Show links that failed in previous syncs.

    Reads ~/.taskol/errors.jsonl.
    """
    recent = ErrorLogger().get_recent_errors(limit=limit, error_type=error_type)

    if output_json:
        click.echo(json.dumps(recent, indent=2, ensure_ascii=False))
        return

    if not recent:
        click.echo("No errors recorded.")
        return

    for entry in recent:
        click.echo(f"{entry.get('timestamp', '')} {entry.get('error_type', 'UNKNOWN')}")
        click.echo(f"  {entry.get('message', '')}")


if __name__ == '__main__':
    cli()

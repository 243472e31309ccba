"""yaml2env - flatten and merge layered YAML files into one env file."""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Ensure project root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from flattener.errors import Yaml2EnvError
from utils import configure_logging, logger
from utils.config_loader import NULL_POLICIES

console = Console()

config_option = click.option(
    "-c",
    "--config",
    "config_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="File listing the YAML sources, in merge order",
)
null_policy_option = click.option(
    "--null-policy",
    type=click.Choice(NULL_POLICIES),
    default=None,
    help="How YAML null leaves are written (default: from config.yaml)",
)


def _fail(e: Yaml2EnvError):
    logger.error(f"[cli] {e}")
    console.print(f"[bold red]{type(e).__name__}: {escape(e.reason)}[/bold red]")
    if e.file:
        console.print(f"  File: {escape(e.file)}")
    if e.path:
        console.print(f"  Key:  {escape(e.path)}")
    sys.exit(1)


@click.group()
@click.option("--debug", is_flag=True, help="Enable verbose debug logging")
def cli(debug):
    """yaml2env - merge layered YAML files into a single KEY=VALUE env file."""
    if debug:
        configure_logging("DEBUG")
        logger.info("Debug mode enabled")


@cli.command()
@config_option
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Env file to write",
)
@null_policy_option
@click.option("--dry-run", is_flag=True, help="Build and validate, write nothing")
def build(config_path, output_path, null_policy, dry_run):
    """Merge the configured YAML files and write the env file."""
    from orchestrator.pipeline import run_build

    if output_path is None and not dry_run:
        raise click.UsageError("Missing option '-o' / '--output' (or pass --dry-run)")

    console.print("[bold]yaml2env - Build[/bold]\n")
    try:
        summary = run_build(config_path, output_path, null_policy, dry_run=dry_run)
    except Yaml2EnvError as e:
        _fail(e)

    console.print(f"[bold green]{'Dry run complete' if dry_run else 'Env file created'}![/bold green]")
    console.print(f"  Sources:   {summary['sources']} files")
    console.print(f"  Keys:      {summary['entries']}")
    console.print(f"  Overrides: {summary['overrides']}")
    if summary["output_path"]:
        console.print(f"  Output:    {escape(summary['output_path'])}")
    console.print(f"  Time:      {summary['elapsed_seconds']}s")


@cli.command()
@config_option
@null_policy_option
def preview(config_path, null_policy):
    """Show the merged keys with the file that set each one."""
    from orchestrator.pipeline import build_env_table

    try:
        table = build_env_table(config_path, null_policy)
    except Yaml2EnvError as e:
        _fail(e)

    if not len(table):
        console.print("[yellow]No keys produced.[/yellow]")
        return

    out = Table(title=f"{len(table)} keys")
    out.add_column("Key", style="bold cyan")
    out.add_column("Value", style="green", overflow="fold")
    out.add_column("Source", style="magenta")
    for entry in table:
        out.add_row(entry.key, escape(entry.value), escape(Path(entry.source).name))
    console.print(out)

    if table.overrides:
        console.print(f"\n[bold yellow]Overrides: {len(table.overrides)}[/bold yellow]")
        for o in table.overrides:
            old = escape(Path(o.previous.source).name)
            new = escape(Path(o.current.source).name)
            console.print(f"  {o.key}: {old} -> {new}")


@cli.command()
@config_option
def check(config_path):
    """Validate the config and every YAML source without writing anything."""
    from orchestrator.pipeline import build_env_table

    try:
        table = build_env_table(config_path)
    except Yaml2EnvError as e:
        _fail(e)

    console.print(f"[green]OK:[/green] {len(table)} keys, {len(table.overrides)} overrides")


if __name__ == "__main__":
    cli()

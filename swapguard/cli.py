"""SwapGuard CLI -- run the moderation engine from a terminal."""

import json
import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from swapguard import __version__

console = Console()

EXIT_CLEAN = 0
EXIT_FLAGGED = 1
EXIT_BLOCKED = 2


def _build_engine(config_path: str | None):
    from swapguard.config import ConfigError, load_config
    from swapguard.moderation.engine import ModerationEngine

    try:
        config = load_config(config_path) if config_path else None
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    return ModerationEngine(config)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log engine decisions to stderr")
def main(verbose: bool):
    """SwapGuard — off-platform transaction detection.

    Scan marketplace messages for phone numbers, emails, payment apps,
    social handles, external links, evasion phrases and crypto addresses.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--config", "-c", "config_path", default=None, type=click.Path(exists=True), help="Engine config (YAML)")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def check(ctx: click.Context, text: str, config_path: str | None, as_json: bool):
    """Moderate a single message.

    Exits 2 when the message would be blocked, 1 when it is only flagged.
    """
    from swapguard.moderation.decision import explain_flag

    engine = _build_engine(config_path)
    result = engine.moderate(text)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        if result.flags:
            table = Table(title=f"Flags ({len(result.flags)} found)")
            table.add_column("Category", style="cyan")
            table.add_column("Severity")
            table.add_column("Match", style="yellow")
            table.add_column("Why")
            for flag in result.flags:
                table.add_row(
                    flag.category.value,
                    flag.severity.value,
                    escape(flag.matched_text),
                    explain_flag(flag),
                )
            console.print(table)

        if result.blocked:
            verdict = "[red]BLOCKED[/]"
        elif result.flagged:
            verdict = "[yellow]FLAGGED[/]"
        else:
            verdict = "[green]CLEAN[/]"
        console.print(f"{verdict} risk score {result.risk_score}")
        if result.message:
            console.print(f"  {escape(result.message)}")

    if result.blocked:
        ctx.exit(EXIT_BLOCKED)
    if result.flagged:
        ctx.exit(EXIT_FLAGGED)


# ── Redact ───────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
def redact(text: str):
    """Print TEXT with phone numbers and emails masked."""
    from swapguard.moderation.redactor import redact_message

    click.echo(redact_message(text))


# ── Batch ────────────────────────────────────────────────────────────


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", default=None, type=click.Path(exists=True), help="Engine config (YAML)")
@click.option("--workers", "-w", default=None, type=int, help="Worker threads (default: executor default)")
def batch(path: str, config_path: str | None, workers: int | None):
    """Moderate every non-empty line of PATH, one JSON verdict per line."""
    engine = _build_engine(config_path)

    with open(path, encoding="utf-8") as f:
        lines = [(n, line.rstrip("\n")) for n, line in enumerate(f, start=1) if line.strip()]

    results = engine.moderate_many([text for _, text in lines], max_workers=workers)
    for (n, _), result in zip(lines, results):
        click.echo(json.dumps({"line": n, **result.to_dict()}))


# ── Catalog ──────────────────────────────────────────────────────────


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the catalog as JSON")
def catalog(as_json: bool):
    """Print the pattern catalog the engine enforces."""
    from swapguard.moderation.catalog import DEFAULT_CATALOG

    entries = DEFAULT_CATALOG.describe()

    if as_json:
        click.echo(json.dumps({"version": DEFAULT_CATALOG.version, "matchers": entries}, indent=2))
        return

    table = Table(title=f"Pattern catalog v{DEFAULT_CATALOG.version} ({len(entries)} matchers)")
    table.add_column("Category", style="cyan")
    table.add_column("Severity")
    table.add_column("Label")
    table.add_column("Pattern", style="dim")
    for entry in entries:
        table.add_row(entry["category"], entry["severity"], entry["label"], escape(entry["pattern"]))

    console.print(table)


if __name__ == "__main__":
    main()

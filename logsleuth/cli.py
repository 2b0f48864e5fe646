"""CLI entry point — read logs, run rules, output clearly."""

import json
import logging
from pathlib import Path
from typing import List, Optional

import click
import typer

from .config import ConfigError, load_mod_list, load_settings
from .engine import diagnose_batch
from .format import format_human, format_markdown, to_embed
from .ingest import LogRejectedError, read_log
from .models import Launcher
from .rules.base import Severity
from .rules.registry import RULE_INFO


def _err(msg: str) -> None:
    """Raise a styled error (red box) — used for all CLI errors."""
    raise click.BadParameter(msg)


app = typer.Typer(help="Diagnose Minecraft logs and crash reports against known failure signatures.")


@app.command()
def main(
    paths: Optional[List[str]] = typer.Argument(None, help="Log files to analyze ('-' reads stdin)"),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    markdown_out: bool = typer.Option(False, "--markdown", "-m", help="Output as Markdown"),
    ci: bool = typer.Option(False, "--ci", help="CI mode: exit 1 if a finding meets --fail-on"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="In CI mode: fail on this severity or higher (HIGH/MEDIUM)"),
    explain: Optional[str] = typer.Option(None, "--explain", "-e", help="Explain a rule by ID ('list' for all) and exit"),
    launcher: Optional[str] = typer.Option(None, "--launcher", help="Override launcher detection (polymc/prism/multimc)"),
    mods: Optional[Path] = typer.Option(None, "--mods", help="YAML/JSON list of installed mod ids, replaces parsing the log"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file (default: ./logsleuth.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Include rule IDs and debug logging"),
) -> None:
    """Analyze one or more logs and report detected problems."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if explain:
        _print_explain(explain)
        return
    if not paths:
        _err("No log files given. Use '-' to read from stdin.")

    try:
        settings = load_settings(config)
        mod_list = load_mod_list(mods) if mods else None
    except ConfigError as e:
        _err(str(e))

    forced_launcher = None
    if launcher:
        try:
            forced_launcher = Launcher(launcher.lower())
        except ValueError:
            _err(f"Unknown launcher: {launcher}\nAvailable: {', '.join(l.value for l in Launcher)}")

    sources = []
    for p in paths:
        try:
            sources.append((p if p != "-" else "<stdin>", read_log(p, settings)))
        except LogRejectedError as e:
            _err(str(e))

    batches = diagnose_batch(
        sources,
        max_workers=settings.workers,
        mods=mod_list,
        launcher=forced_launcher,
    )

    if json_out:
        typer.echo(json.dumps([to_embed(name, reports) for name, reports in batches], indent=2))
    elif markdown_out:
        typer.echo(format_markdown(batches))
    else:
        typer.echo(format_human(batches, verbose=verbose))

    if ci:
        _ci_exit(batches, fail_on or settings.fail_on)


def _print_explain(rule_id: str) -> None:
    """Print rule description and exit."""
    if rule_id == "list" or rule_id == "rules":
        typer.echo("Available rules:")
        for rid in RULE_INFO:
            typer.echo(f"  {rid}")
        typer.echo("\nUse: logsleuth --explain <rule_id>")
        return
    info = RULE_INFO.get(rule_id)
    if not info:
        _err(f"Unknown rule: {rule_id}\nAvailable: {', '.join(RULE_INFO.keys())}")
    typer.echo(f"Rule: {rule_id}")
    typer.echo(f"Title: {info['title']}")
    typer.echo(f"Severity: {info['severity']}")
    typer.echo(f"Description: {info['description']}")
    typer.echo(f"When: {info['when']}")
    typer.echo(f"Fix: {info['fix']}")


def _ci_exit(batches, fail_on: str) -> None:
    """Exit 1 if any report meets or exceeds fail_on severity. NONE never fails."""
    try:
        threshold = Severity.parse(fail_on)
    except ValueError as e:
        _err(str(e))
    threshold = max(threshold, Severity.MEDIUM)
    for _, reports in batches:
        for r in reports:
            if r.severity >= threshold:
                raise typer.Exit(1)


def _main() -> None:
    app()


if __name__ == "__main__":
    _main()

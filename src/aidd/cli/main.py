# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""
AIDD Command Line Interface.

Usage:
    aidd init               Create a starter domain-profile.json
    aidd validate           Validate a domain-profile.json file
    aidd emit               Print the well-known JSON and the DNS TXT record
    aidd resolve            Resolve a domain's profile over HTTPS and DNS
    aidd check              Resolve and report publishing issues
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="aidd",
    help="AI Domain Data: publish and resolve domain identity records",
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)

DEFAULT_PATH = "domain-profile.json"

PathOption = Annotated[
    str,
    typer.Option("--path", "-p", help="Path to the domain-profile.json file"),
]


def run_async(coro):
    """Run async function in sync context."""
    return asyncio.run(coro)


# ============================================================================
# INIT COMMAND
# ============================================================================


@app.command()
def init(
    path: PathOption = DEFAULT_PATH,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file")] = False,
):
    """
    Create a starter domain-profile.json file with placeholder values.

    Example:
        aidd init
        aidd init --path ./public/.well-known/domain-profile.json --force
    """
    from aidd.core.generator import TEMPLATE_PROFILE

    target = Path(path).resolve()

    if target.exists() and not force:
        error_console.print(
            f"[red]✗ File already exists at {target}. Use --force to overwrite.[/red]"
        )
        raise typer.Exit(1)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(TEMPLATE_PROFILE, indent=2) + "\n", encoding="utf-8")
    console.print(
        f"[green]✓ Created {target}.[/green] Update the placeholder values before publishing."
    )


# ============================================================================
# VALIDATE COMMAND
# ============================================================================


@app.command()
def validate(path: PathOption = DEFAULT_PATH):
    """
    Validate domain-profile.json against the v0.1 record rules.

    Exits with code 0 on success and 1 when the file is invalid.
    """
    from aidd.core.validator import validate as do_validate

    target = Path(path).resolve()
    record = _load_record(target)
    result = do_validate(record)

    if result.valid:
        console.print(f"[green]✓ {target} is valid for AI Domain Data v0.1.[/green]")
        return

    error_console.print(f"[red]✗ {target} is not valid:[/red]")
    for error in result.errors:
        error_console.print(f"  - {error}", markup=False)
    raise typer.Exit(1)


# ============================================================================
# EMIT COMMAND
# ============================================================================


@app.command()
def emit(
    path: PathOption = DEFAULT_PATH,
    domain: Annotated[
        str, typer.Option("--domain", "-d", help="Domain used in the printed TXT record")
    ] = "example.com",
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
):
    """
    Validate, then print the JSON for the well-known path and the DNS TXT payload.

    Example:
        aidd emit
        aidd emit --domain example.org --json
    """
    from aidd.core.generator import build_dns_payload
    from aidd.core.validator import validate as do_validate

    target = Path(path).resolve()
    record = _load_record(target)
    result = do_validate(record)

    if not result.valid:
        error_console.print(f"[red]✗ {target} failed validation. Resolve the issues below:[/red]")
        for error in result.errors:
            error_console.print(f"  - {error}", markup=False)
        raise typer.Exit(1)

    dns_payload = build_dns_payload(record, domain)

    if json_output:
        output = {
            "record": record,
            "dns": {
                "name": f"_ai.{domain}",
                "base64": dns_payload.base64,
                "txt_strings": dns_payload.txt_strings,
                "zone_record": dns_payload.zone_record,
            },
        }
        console.print_json(json.dumps(output))
        return

    console.print(f"Save this JSON as https://{domain}/.well-known/domain-profile.json")
    console.print("[bold]=== /.well-known/domain-profile.json ===[/bold]")
    console.print(json.dumps(record, indent=2, ensure_ascii=False), markup=False)
    console.print("\nOptionally mirror the same payload via DNS:")
    console.print(f"- Create _ai.{domain} TXT with ai-json=<base64(JSON)>", markup=False)
    console.print(f"[bold]=== _ai.{domain} TXT value ===[/bold]")
    console.print(dns_payload.zone_record, markup=False, soft_wrap=True)


# ============================================================================
# RESOLVE COMMAND
# ============================================================================


@app.command()
def resolve(
    domain: Annotated[str, typer.Argument(help="Domain to resolve")],
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    timeout: Annotated[
        float | None, typer.Option("--timeout", "-t", help="Per-step timeout in seconds")
    ] = None,
):
    """
    Resolve a domain's AI Domain Data over HTTPS and DNS.

    HTTPS (/.well-known/domain-profile.json) wins over DNS (_ai.<domain> TXT).

    Example:
        aidd resolve example.com
        aidd resolve example.com --json
    """
    result = _run_resolve(domain, timeout, announce=not json_output)

    if json_output:
        console.print_json(result.model_dump_json())
    else:
        _print_result(result)

    if not result.valid:
        raise typer.Exit(1)


# ============================================================================
# CHECK COMMAND
# ============================================================================


@app.command()
def check(
    domain: Annotated[str, typer.Argument(help="Domain to check")],
    timeout: Annotated[
        float | None, typer.Option("--timeout", "-t", help="Per-step timeout in seconds")
    ] = None,
):
    """
    Check a domain's publication and report problems on both channels.

    Runs the resolver, then applies stricter advisory checks (contact format,
    JSON-LD context and type) to whichever records were retrieved.
    """
    from aidd.core.validator import strict_issues

    result = _run_resolve(domain, timeout)
    _print_result(result)

    advisories: list[tuple[str, str]] = []
    for label, state in (("HTTPS", result.details.http), ("DNS", result.details.dns)):
        if state.raw is None:
            continue
        try:
            record = json.loads(state.raw)
        except json.JSONDecodeError:
            continue
        advisories.extend((label, issue) for issue in strict_issues(record))

    if advisories:
        console.print("\n[yellow]⚠ Advisories:[/yellow]")
        for label, issue in advisories:
            console.print(f"  [{label}] {issue}", markup=False)

    if result.details.http.found and not result.details.dns.found:
        console.print("\n[dim]Tip: mirror the record via DNS with `aidd emit`.[/dim]")

    if not result.valid:
        raise typer.Exit(1)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def _load_record(target: Path) -> Any:
    """Read and parse a JSON file, exiting with an error message on failure."""
    try:
        return json.loads(target.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        error_console.print(f"[red]✗ Unable to read or parse {target}: {e}[/red]")
        raise typer.Exit(1) from None


def _run_resolve(domain: str, timeout: float | None, announce: bool = True):
    from aidd.core.config import ResolveOptions, ResolverConfig
    from aidd.core.models import EmptyDomainError
    from aidd.core.resolver import resolve as do_resolve

    try:
        config = ResolverConfig.from_env()
    except ValueError as e:
        error_console.print(f"✗ Invalid resolver configuration: {e}", style="red", markup=False)
        raise typer.Exit(1) from None

    options = ResolveOptions(timeout=timeout, config=config)

    if announce:
        console.print(f"\n[bold]Resolving AI Domain Data for {domain.strip()}...[/bold]\n")
    try:
        return run_async(do_resolve(domain, options))
    except EmptyDomainError as e:
        error_console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1) from None


def _print_result(result) -> None:
    """Render a ResolveResult as a channel table plus the chosen payload."""

    def status(found: bool, valid: bool) -> str:
        if found and valid:
            return "[green]✓ valid[/green]"
        if found:
            return "[yellow]⚠ invalid[/yellow]"
        return "[dim]○ not found[/dim]"

    table = Table(title=f"AI Domain Data for {result.domain}")
    table.add_column("Channel", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for label, state in (("HTTPS", result.details.http), ("DNS", result.details.dns)):
        details = "; ".join(state.errors) if state.errors else ""
        table.add_row(label, status(state.found, state.payload is not None), details)

    console.print(table)

    if result.valid:
        console.print(f"\n[green]✓ Valid record via {result.source.upper()}[/green]")
        console.print_json(json.dumps(result.payload))
    elif result.source != "none":
        console.print(f"\n[red]✗ Record via {result.source.upper()} is invalid:[/red]")
        for error in result.errors or []:
            console.print(f"  - {error}", markup=False)
    else:
        console.print(f"\n[yellow]No AI Domain Data found for {result.domain}[/yellow]")

    console.print(f"\n[dim]Time: {result.query_time_ms:.2f}ms[/dim]")


# ============================================================================
# VERSION
# ============================================================================


def version_callback(value: bool):
    if value:
        from aidd import __version__

        console.print(f"aidd version {__version__}")
        raise typer.Exit()


def quiet_callback(value: bool):
    if value:
        from aidd.utils.logging import silence_logging

        silence_logging()


def verbose_callback(value: bool):
    if value:
        from aidd.utils.logging import configure_logging

        configure_logging(logging.DEBUG)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = None,
    quiet: Annotated[
        bool | None,
        typer.Option("--quiet", "-q", callback=quiet_callback, is_eager=True, help="Suppress logs"),
    ] = None,
    verbose: Annotated[
        bool | None,
        typer.Option("--verbose", callback=verbose_callback, is_eager=True, help="Debug logs"),
    ] = None,
):
    """
    AIDD: AI Domain Data

    Publish and resolve canonical identity metadata for a domain.
    """
    from dotenv import load_dotenv

    from aidd.utils.logging import configure_logging

    if not (quiet or verbose):
        configure_logging()

    load_dotenv()


if __name__ == "__main__":
    app()

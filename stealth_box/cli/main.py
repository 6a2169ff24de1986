"""
StealthBox - Command Line Interface
=====================================
CLI offline per generazione e verifica stealth payload.

Security Level: MEDIUM
Last Updated: 2026-10-18
Version: 1.0.0

Commands:
- keygen: Genera keypair stealth
- pay: Genera registri R4..R7 verso una chiave pubblica
- check: Verifica se i registri di una box sono spendibili
- witness: Stampa la richiesta di firma (secrets dht) per il nodo

Nessun comando contatta nodi o explorer.
"""

import json
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Internal imports
from stealth_box.config import get_settings
from stealth_box.errors import StealthBoxException
from stealth_box.logging_setup import setup_logging
from stealth_box.services.stealth_service import StealthService
from stealth_box.stealth.keys import StealthKeyPair
from stealth_box.stealth.detector import DetectionResult


# ============================================================================
# CLI APP
# ============================================================================

app = typer.Typer(
    name="stealthbox",
    help="StealthBox - Stealth payments CLI",
    add_completion=False
)

console = Console()


def _service() -> StealthService:
    return StealthService(get_settings())


def _load_keypair(service: StealthService, secret: str) -> StealthKeyPair:
    return StealthKeyPair.from_secret(secret.strip(), service.curve)


# ============================================================================
# KEY COMMANDS
# ============================================================================

@app.command("keygen")
def keygen(
    seed: Optional[str] = typer.Option(
        None,
        "--seed",
        help="Seed deterministico (solo test)"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Output JSON"
    )
):
    """Generate a stealth keypair"""
    try:
        service = _service()

        if seed is not None:
            keypair = StealthKeyPair.from_seed(seed.encode("utf-8"), service.curve)
        else:
            keypair = StealthKeyPair.generate(service.curve)

        if as_json:
            typer.echo(json.dumps({
                "curve": service.curve.name,
                "secret": keypair.secret_hex(),
                "public": keypair.public_hex(),
            }))
            return

        console.print(Panel.fit(
            f"[yellow]⚠️  KEEP THE SECRET SCALAR PRIVATE![/yellow]\n\n"
            f"Secret: [bold]{keypair.secret_hex()}[/bold]\n\n"
            f"Public: [cyan]{keypair.public_hex()}[/cyan]",
            title=f"Stealth Keypair ({service.curve.name})",
            border_style="yellow"
        ))

    except StealthBoxException as e:
        console.print(f"[red]Error generating keypair: {e}[/red]")
        raise typer.Exit(1)


# ============================================================================
# SENDER COMMANDS
# ============================================================================

@app.command("pay")
def pay(
    to: str = typer.Option(..., "--to", help="Recipient public key (compressed hex)"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON")
):
    """Generate stealth box registers for a recipient"""
    try:
        service = _service()
        payment = service.create_payment(to.strip())

        if as_json:
            typer.echo(json.dumps(payment.to_dict()))
            return

        table = Table(title="Stealth Box Registers")
        table.add_column("Register", style="cyan")
        table.add_column("Value", style="green", overflow="fold")

        for name, value in payment.registers.items():
            table.add_row(name, value)
        table.add_row("ergoTree", payment.ergo_tree)

        console.print(table)

    except StealthBoxException as e:
        console.print(f"[red]Error creating payment: {e}[/red]")
        raise typer.Exit(1)


# ============================================================================
# RECEIVER COMMANDS
# ============================================================================

@app.command("check")
def check(
    registers: List[str] = typer.Argument(..., help="Register values R4 R5 R6 R7 (hex)"),
    secret: str = typer.Option(
        ...,
        "--secret",
        "-s",
        help="Secret scalar (hex)",
        prompt=True,
        hide_input=True
    ),
    explain: bool = typer.Option(
        False,
        "--explain",
        help="Show detailed detection result"
    )
):
    """Check whether a stealth box is spendable by a secret"""
    try:
        service = _service()
        keypair = _load_keypair(service, secret)
        result = service.check_box(registers, keypair)

        if result is DetectionResult.SPENDABLE:
            console.print("[green]✅ Spendable[/green]")
        else:
            console.print("[yellow]Not spendable[/yellow]")

        if explain:
            console.print(f"[dim]Detection result: {result.value}[/dim]")

    except StealthBoxException as e:
        console.print(f"[red]Error checking box: {e}[/red]")
        raise typer.Exit(1)


@app.command("witness")
def witness(
    registers: List[str] = typer.Argument(..., help="Register values R4 R5 R6 R7 (hex)"),
    secret: str = typer.Option(
        ...,
        "--secret",
        "-s",
        help="Secret scalar (hex)",
        prompt=True,
        hide_input=True
    )
):
    """Print the node signing secrets for a spendable stealth box"""
    try:
        service = _service()
        keypair = _load_keypair(service, secret)
        descriptor = service.prepare_spend(registers, keypair)

        typer.echo(json.dumps(descriptor.to_sign_secrets(), indent=2))

    except StealthBoxException as e:
        console.print(f"[red]Error building witness: {e}[/red]")
        raise typer.Exit(1)


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output"
    )
):
    """
    StealthBox - Stealth payments CLI

    Genera e verifica stealth box protette da proveDHTuple.
    """
    settings = get_settings()

    setup_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        log_to_file=settings.log_to_file,
        log_dir=settings.log_dir,
        log_format=settings.log_format,
        log_rotation_mb=settings.log_rotation_mb,
        log_retention_days=settings.log_retention_days,
        enable_console=verbose
    )


if __name__ == "__main__":
    app()


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "app",
]

#!/usr/bin/env python3
"""
StealthBox - Stealth Payment Demo
===================================
Demo script sender -> receiver, tutto in-process (nessun nodo).

Usage:
    python scripts/stealth_demo.py
"""

import json
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stealth_box.config import override_settings
from stealth_box.services.stealth_service import StealthService
from stealth_box.stealth.keys import StealthKeyPair

console = Console()


def main():
    """Run stealth payment demo"""

    console.print(Panel.fit(
        "[cyan]StealthBox - Stealth Payment Demo[/cyan]\n\n"
        "Demonstrating DH-tuple stealth boxes",
        border_style="cyan"
    ))

    service = StealthService(override_settings(log_level="WARNING"))

    # ========================================================================
    # STEP 1: Receiver keypair
    # ========================================================================

    console.print("\n[yellow]Step 1: Receiver creates stealth keypair[/yellow]")

    receiver = StealthKeyPair.generate(service.curve)
    public_hex = service.receiver_public_key(receiver)

    console.print(f"[green]✅ Keypair created[/green]")
    console.print(f"[cyan]Public key: {public_hex}[/cyan]")
    console.print("\n[dim]Receiver shares the public key; the secret never leaves the wallet[/dim]")

    # ========================================================================
    # STEP 2: Sender creates stealth box registers
    # ========================================================================

    console.print("\n[yellow]Step 2: Sender creates stealth payment[/yellow]")

    payment = service.create_payment(public_hex)

    table = Table(title="Stealth Box")
    table.add_column("Register", style="cyan")
    table.add_column("Value", style="green", overflow="fold")
    for name, value in payment.registers.items():
        table.add_row(name, value)
    table.add_row("ergoTree", payment.ergo_tree)
    console.print(table)

    console.print("\n[dim]No register reveals the receiver's public key[/dim]")

    # ========================================================================
    # STEP 3: Receiver scans boxes
    # ========================================================================

    console.print("\n[yellow]Step 3: Receiver scans boxes[/yellow]")

    decoy = service.create_payment(StealthKeyPair.generate(service.curve).public_hex())
    boxes = [
        {"boxId": "decoy", **decoy.to_dict()},
        {"boxId": "mine", **payment.to_dict()},
        {"boxId": "garbage", "ergoTree": payment.ergo_tree,
         "additionalRegisters": {"R4": "0701", "R5": "07", "R6": "", "R7": "zz"}},
    ]

    matches = service.scan_boxes(boxes, receiver)

    console.print(f"[green]✅ Found {len(matches)} spendable box(es) out of {len(boxes)}[/green]")
    for match in matches:
        console.print(f"  • {match.box_id}")

    # ========================================================================
    # STEP 4: Witness for the signer
    # ========================================================================

    console.print("\n[yellow]Step 4: Receiver prepares witness for the signer[/yellow]")

    witness = service.prepare_spend(matches[0].payload, receiver)
    secrets = witness.to_sign_secrets()
    secrets["dht"][0]["secret"] = "<redacted>"

    console.print(json.dumps(secrets, indent=2))

    # ========================================================================
    # Summary
    # ========================================================================

    console.print("\n" + "=" * 60)
    console.print("[green]Stealth Payment Demo Complete![/green]")
    console.print("\n[cyan]Key Points:[/cyan]")
    console.print("• Each payment uses fresh ephemeral scalars r, y")
    console.print("• Only the holder of x satisfies U_r = x·G_r and U_y = x·G_y")
    console.print("• The node proves proveDHTuple with the witness at signing time")


if __name__ == "__main__":
    main()

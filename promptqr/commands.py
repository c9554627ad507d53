from __future__ import annotations

from pathlib import Path

import click
from flask import current_app

from .services import promptpay as promptpay_service
from .services.identifiers import InvalidIdentifierError, require_identifier


def _build_payload(identifier: str | None, amount: str | None) -> tuple[str, str]:
    raw = identifier or current_app.config.get("PROMPTPAY_ID", "")
    try:
        value, _ = require_identifier(raw)
    except InvalidIdentifierError as exc:
        raise click.BadParameter(str(exc), param_hint="IDENTIFIER") from exc
    try:
        payload = promptpay_service.generate_promptpay_payload(value, promptpay_service.parse_amount(amount))
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--amount") from exc
    return value, payload


def register_cli_commands(app):
    @app.cli.command("promptpay-payload")
    @click.argument("identifier", required=False)
    @click.option("--amount", default=None, help="Amount in THB; omit to let the payer enter it.")
    def promptpay_payload(identifier, amount):
        """Print the PromptPay payload for a mobile number or national ID."""
        _, payload = _build_payload(identifier, amount)
        click.echo(payload)

    @app.cli.command("promptpay-qr")
    @click.argument("identifier", required=False)
    @click.option("--amount", default=None, help="Amount in THB; omit to let the payer enter it.")
    @click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None)
    def promptpay_qr(identifier, amount, output):
        """Write a PromptPay QR code PNG."""
        value, payload = _build_payload(identifier, amount)
        target = output or Path(promptpay_service.qr_filename(value))
        target.write_bytes(promptpay_service.render_qr_png(payload))
        click.echo(f"QR code saved to {target}")

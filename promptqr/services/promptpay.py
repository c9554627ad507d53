from __future__ import annotations

import io
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

import qrcode
from PIL import Image
from flask import current_app

from .emv import CRC_PLACEHOLDER, crc16_ccitt, format_tag
from .identifiers import format_proxy_value

PROMPTPAY_AID = "A000000677010111"
CURRENCY_THB = "764"
COUNTRY_TH = "TH"

AmountInput = int | float | Decimal | str | None

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


class InvalidAmountError(ValueError):
    pass


@dataclass(frozen=True)
class PromptPayPayload:
    identifier: str
    amount: AmountInput = None

    def merchant_account(self) -> str:
        return format_tag("00", PROMPTPAY_AID) + format_tag("01", format_proxy_value(self.identifier))

    def encode(self) -> str:
        payload = (
            format_tag("00", "01")  # Payload format indicator
            + format_tag("01", "11")  # Static QR
            + format_tag("29", self.merchant_account())
            + format_tag("52", "0000")  # Merchant category code
            + format_tag("53", CURRENCY_THB)
        )
        amount_text = format_amount(self.amount)
        if amount_text is not None:
            payload += format_tag("54", amount_text)
        payload += format_tag("58", COUNTRY_TH) + CRC_PLACEHOLDER
        return payload + crc16_ccitt(payload)


def _to_decimal(amount: AmountInput) -> Decimal | None:
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, Decimal):
        return amount
    try:
        return Decimal(str(amount).strip())
    except InvalidOperation:
        return None


def format_amount(amount: AmountInput) -> str | None:
    """Render an amount for tag 54, or ``None`` when the field is omitted.

    Missing, non-numeric and non-positive amounts all mean "payer enters the
    amount". More than two significant fraction digits is rejected instead of
    rounded.
    """
    value = _to_decimal(amount)
    if value is None or not value.is_finite() or value <= 0:
        return None
    _, digits, exponent = value.as_tuple()
    if exponent < -2 and any(digits[exponent + 2:]):
        raise InvalidAmountError(f"amount {amount!r} has more than two decimal places")
    return f"{value:.2f}"


def parse_amount(raw: str | None) -> Decimal | None:
    """Strict parsing of a user-entered amount; blank means no amount."""
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InvalidAmountError(f"amount {raw!r} is not a number") from None
    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(f"amount {raw!r} must be greater than zero")
    format_amount(value)
    return value


def generate_promptpay_payload(identifier: str, amount: AmountInput = None) -> str:
    return PromptPayPayload(identifier=identifier, amount=amount).encode()


def render_qr_png(payload: str) -> bytes:
    config = current_app.config
    level = str(config.get("QR_ERROR_CORRECTION", "M")).upper()
    qr = qrcode.QRCode(
        error_correction=_ERROR_CORRECTION.get(level, qrcode.constants.ERROR_CORRECT_M),
        box_size=int(config.get("QR_BOX_SIZE", 10)),
        border=int(config.get("QR_BORDER", 2)),
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(
        fill_color=config.get("QR_FILL_COLOR", "black"),
        back_color=config.get("QR_BACK_COLOR", "white"),
    ).get_image()

    size = int(config.get("QR_IMAGE_SIZE", 200))
    if size > 0 and img.size != (size, size):
        img = img.resize((size, size), Image.Resampling.NEAREST)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    buffer.seek(0)
    return buffer.getvalue()


def generate_promptpay_qr(identifier: str, amount: AmountInput = None) -> bytes:
    return render_qr_png(generate_promptpay_payload(identifier, amount))


def qr_filename(identifier: str) -> str:
    return f"promptpay-{''.join(identifier.split())}.png"

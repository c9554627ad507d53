from __future__ import annotations

from decimal import Decimal
from typing import Any

from flask import Blueprint, Response, current_app, jsonify, request
from flask_babel import gettext as _
from qrcode.exceptions import DataOverflowError

from .. import limiter
from ..services import promptpay as promptpay_service
from ..services.emv import FieldLengthError, parse_tlv, verify_crc
from ..services.identifiers import (
    IdentifierKind,
    InvalidIdentifierError,
    classify_identifier,
    require_identifier,
)
from ..services.promptpay import InvalidAmountError

api_bp = Blueprint("api", __name__)


def _error(code: str, message: str, status: int = 400):
    return jsonify({"error": code, "message": message}), status


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _read_request(identifier_raw: Any, amount_raw: Any) -> tuple[str, IdentifierKind, Decimal | None]:
    identifier, kind = require_identifier(str(identifier_raw or ""))
    amount = promptpay_service.parse_amount(None if amount_raw is None else str(amount_raw))
    return identifier, kind, amount


def _rejection(exc: ValueError):
    current_app.logger.warning("Rejected PromptPay request: %s", exc)
    if isinstance(exc, InvalidIdentifierError):
        return _error("invalid_identifier", _("กรุณากรอกเบอร์โทรศัพท์หรือเลขบัตรประชาชนที่ถูกต้อง"))
    return _error("invalid_amount", _("กรุณากรอกจำนวนเงินที่ถูกต้อง"))


@api_bp.post("/validate")
def api_validate():
    data = _json_body()
    identifier = str(data.get("identifier") or "")
    kind = classify_identifier(identifier)
    return jsonify(
        {
            "identifier": "".join(identifier.split()),
            "kind": kind.value,
            "valid": kind is not IdentifierKind.INVALID,
        }
    )


@api_bp.post("/payload")
def api_payload():
    data = _json_body()
    try:
        identifier, kind, amount = _read_request(data.get("identifier"), data.get("amount"))
        payload = promptpay_service.generate_promptpay_payload(identifier, amount)
    except (InvalidIdentifierError, InvalidAmountError, FieldLengthError) as exc:
        return _rejection(exc)
    current_app.logger.info("Generated PromptPay payload for %s identifier", kind.value)
    return jsonify(
        {
            "payload": payload,
            "kind": kind.value,
            "amount": promptpay_service.format_amount(amount),
        }
    )


@api_bp.get("/qr.png")
@limiter.limit(lambda: current_app.config.get("QR_RATE_LIMIT", "30/minute"))
def api_qr_image():
    try:
        identifier, kind, amount = _read_request(request.args.get("identifier"), request.args.get("amount"))
        payload = promptpay_service.generate_promptpay_payload(identifier, amount)
    except (InvalidIdentifierError, InvalidAmountError, FieldLengthError) as exc:
        return _rejection(exc)

    try:
        qr_bytes = promptpay_service.render_qr_png(payload)
    except (DataOverflowError, OSError):
        current_app.logger.exception("QR rendering failed for %s identifier", kind.value)
        return _error("qr_render_failed", _("ไม่สามารถสร้าง QR Code ได้"), 500)

    response = Response(qr_bytes, mimetype="image/png")
    if request.args.get("download") in {"1", "true", "yes"}:
        filename = promptpay_service.qr_filename(identifier)
        response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


@api_bp.post("/verify")
def api_verify():
    data = _json_body()
    payload = str(data.get("payload") or "").strip()
    if not payload:
        return _error("missing_payload", _("กรุณาระบุข้อมูล QR"))
    return jsonify({"crc_valid": verify_crc(payload), "fields": parse_tlv(payload)})

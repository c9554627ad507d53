from __future__ import annotations

from flask import Blueprint, current_app, flash, render_template, request
from flask_babel import gettext as _

from ..services import promptpay as promptpay_service
from ..services.emv import FieldLengthError
from ..services.identifiers import InvalidIdentifierError, require_identifier
from ..services.promptpay import InvalidAmountError

generator_bp = Blueprint("generator", __name__)


@generator_bp.route("/", methods=["GET", "POST"])
def index():
    form = {
        "identifier": current_app.config.get("PROMPTPAY_ID", ""),
        "amount": "",
    }
    result = None

    if request.method == "POST":
        form["identifier"] = request.form.get("identifier", "")
        form["amount"] = request.form.get("amount", "")
        try:
            identifier, kind = require_identifier(form["identifier"])
        except InvalidIdentifierError:
            current_app.logger.warning("Rejected identifier from form")
            flash(_("กรุณากรอกเบอร์โทรศัพท์หรือเลขบัตรประชาชนที่ถูกต้อง"), "error")
            return render_template("generator/index.html", form=form, result=None), 400

        try:
            amount = promptpay_service.parse_amount(form["amount"])
            payload = promptpay_service.generate_promptpay_payload(identifier, amount)
        except (InvalidAmountError, FieldLengthError):
            current_app.logger.warning("Rejected amount from form")
            flash(_("กรุณากรอกจำนวนเงินที่ถูกต้อง"), "error")
            return render_template("generator/index.html", form=form, result=None), 400

        current_app.logger.info("Generated PromptPay payload for %s identifier", kind.value)
        result = {
            "payload": payload,
            "identifier": identifier,
            "kind": kind.value,
            "amount": promptpay_service.format_amount(amount),
            "filename": promptpay_service.qr_filename(identifier),
        }
        flash(_("QR Code PromptPay ถูกสร้างเรียบร้อยแล้ว"), "success")

    return render_template("generator/index.html", form=form, result=result)

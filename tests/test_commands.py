"""
Tests for the promptpay-payload and promptpay-qr CLI commands.
"""

from promptqr.services.promptpay import generate_promptpay_payload

from .conftest import NATIONAL_ID, PHONE


class TestPayloadCommand:
    def test_prints_payload(self, runner):
        result = runner.invoke(args=["promptpay-payload", NATIONAL_ID, "--amount", "100.5"])
        assert result.exit_code == 0
        assert result.output.strip() == generate_promptpay_payload(NATIONAL_ID, "100.5")

    def test_defaults_to_configured_id(self, runner):
        result = runner.invoke(args=["promptpay-payload"])
        assert result.exit_code == 0
        assert result.output.strip() == generate_promptpay_payload(PHONE)

    def test_rejects_invalid_identifier(self, runner):
        result = runner.invoke(args=["promptpay-payload", "0712345678"])
        assert result.exit_code != 0

    def test_rejects_invalid_amount(self, runner):
        result = runner.invoke(args=["promptpay-payload", PHONE, "--amount", "zero"])
        assert result.exit_code != 0

    def test_amount_too_long_is_a_usage_error(self, runner):
        result = runner.invoke(args=["promptpay-payload", PHONE, "--amount", "1e120"])
        assert result.exit_code == 2
        assert "--amount" in result.output
        assert not isinstance(result.exception, ValueError)


class TestQrCommand:
    def test_writes_png(self, runner, tmp_path):
        target = tmp_path / "qr.png"
        result = runner.invoke(args=["promptpay-qr", PHONE, "--amount", "20", "--output", str(target)])
        assert result.exit_code == 0
        assert target.read_bytes().startswith(b"\x89PNG")

    def test_amount_too_long_writes_no_file(self, runner, tmp_path):
        target = tmp_path / "qr.png"
        result = runner.invoke(args=["promptpay-qr", PHONE, "--amount", "1e120", "--output", str(target)])
        assert result.exit_code == 2
        assert not target.exists()

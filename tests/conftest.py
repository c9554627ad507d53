import pytest

from promptqr import create_app
from promptqr.config import Config


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    RATELIMIT_ENABLED = False
    PROMPTPAY_ID = "0812345678"
    QR_IMAGE_SIZE = 200


PHONE = "0812345678"
NATIONAL_ID = "1234567890121"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()

import os


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "unsafe-default")

    PROMPTPAY_ID = os.getenv("PROMPTPAY_ID", "")
    PROMPTPAY_DISPLAY_NAME = os.getenv("PROMPTPAY_DISPLAY_NAME", "PromptPay")

    QR_BOX_SIZE = int(os.getenv("QR_BOX_SIZE", 10))
    QR_BORDER = int(os.getenv("QR_BORDER", 2))
    QR_IMAGE_SIZE = int(os.getenv("QR_IMAGE_SIZE", 200))
    QR_FILL_COLOR = os.getenv("QR_FILL_COLOR", "black")
    QR_BACK_COLOR = os.getenv("QR_BACK_COLOR", "white")
    QR_ERROR_CORRECTION = os.getenv("QR_ERROR_CORRECTION", "M")

    BABEL_DEFAULT_LOCALE = os.getenv("BABEL_DEFAULT_LOCALE", "th")
    BABEL_TRANSLATION_DIRECTORIES = os.getenv("BABEL_TRANSLATION_DIRECTORIES", "translations")
    LANGUAGES = ["th", "en"]

    RATELIMIT_ENABLED = _env_flag("RATELIMIT_ENABLED", True)
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "100/hour;20/minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    QR_RATE_LIMIT = os.getenv("QR_RATE_LIMIT", "30/minute")

    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", 16 * 1024))

from flask import Flask, current_app, request
from flask_babel import Babel, get_locale
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .commands import register_cli_commands
from .config import Config

babel = Babel()
limiter = Limiter(key_func=get_remote_address)


def select_locale() -> str | None:
    return request.accept_languages.best_match(current_app.config.get("LANGUAGES", ["th"]))


def create_app(config_object: type[Config] | None = None) -> Flask:
    app = Flask(__name__)
    cfg = config_object or Config()
    app.config.from_object(cfg)

    babel.init_app(app, locale_selector=select_locale)
    limiter.init_app(app)

    register_cli_commands(app)

    from .blueprints.generator import generator_bp
    from .blueprints.api import api_bp

    app.register_blueprint(generator_bp)
    app.register_blueprint(api_bp, url_prefix="/api")

    @app.context_processor
    def inject_globals():
        return {
            "display_name": app.config.get("PROMPTPAY_DISPLAY_NAME", "PromptPay"),
            "languages": app.config.get("LANGUAGES", ["th"]),
            "current_locale": str(get_locale() or app.config.get("BABEL_DEFAULT_LOCALE", "th")),
        }

    return app

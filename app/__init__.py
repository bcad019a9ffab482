from flask import Flask
from .config import Config
from .extensions import cors, store


def create_app(config_class: type[Config] = Config):
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_object(config_class)

    # Envelopes keep names like "José" readable and fields in file order
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    # Extensions
    cors.init_app(app)
    store.init_app(app)

    # Blueprints
    from .routes.pages import bp as pages_bp
    from .routes.users_api import bp as users_api

    app.register_blueprint(pages_bp)
    app.register_blueprint(users_api)

    return app

import atexit
from datetime import date

from flask import Flask
from flask.json.provider import DefaultJSONProvider

from biztime.access import DataAccess
from biztime.api.errors import register_error_handlers
from biztime.db import Database


class JSONProvider(DefaultJSONProvider):
    """Serialize dates as ISO-8601 instead of HTTP dates."""

    @staticmethod
    def default(o):
        if isinstance(o, date):
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def create_app(database: Database = None) -> Flask:
    """
    Application factory.

    Args:
        database: An existing Database to use. When omitted, one is built
            from config, opened, and closed at interpreter exit.
    """
    app = Flask(__name__)
    app.json = JSONProvider(app)

    if database is None:
        database = Database.from_config()
        database.open()
        atexit.register(database.close)

    app.db = database
    app.access = DataAccess(database)

    # Register blueprints
    from biztime.api.routes import companies_bp, invoices_bp

    app.register_blueprint(companies_bp, url_prefix="/companies")
    app.register_blueprint(invoices_bp, url_prefix="/invoices")

    register_error_handlers(app)

    @app.route("/health")
    def health():
        return {"status": "ok"}

    return app

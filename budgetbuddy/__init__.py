import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .extensions import db, migrate, login_manager, cors
from .config import Config
from .storage import EXTENSION_KEY as STORE_KEY, build_store
from .services.advice import EXTENSION_KEY as ADVICE_KEY, AdviceService
from .services.providers import build_provider

from .blueprints.auth.routes import auth_bp
from .blueprints.dashboard.routes import dashboard_bp
from .blueprints.expenses.routes import expenses_bp
from .blueprints.advice.routes import advice_bp

logger = logging.getLogger(__name__)


def create_app(config_class=Config, store=None, advice_service=None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    logging.basicConfig(level=app.config["LOG_LEVEL"])

    # Initialize extensions
    login_manager.init_app(app)
    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",") if o.strip()]
    cors.init_app(app, resources={r"/api/*": {"origins": origins}}, supports_credentials=True)

    app.extensions[STORE_KEY] = store or build_store(app.config["STORAGE_BACKEND"])
    if app.config["STORAGE_BACKEND"] == "sqlalchemy":
        from . import models  # noqa: F401  registers the tables
        db.init_app(app)
        migrate.init_app(app, db)
        # Ensure tables exist for a smooth first run
        with app.app_context():
            db.create_all()

    app.extensions[ADVICE_KEY] = advice_service or AdviceService(build_provider(app.config))
    logger.info(
        "Using %s storage and %s advice provider",
        type(app.extensions[STORE_KEY]).__name__,
        app.extensions[ADVICE_KEY].provider.name,
    )

    if app.config["SEED_DEMO_DATA"]:
        from .demo import seed_demo
        with app.app_context():
            try:
                seed_demo(app.extensions[STORE_KEY])
            except Exception:
                # Do not block app startup if seeding fails
                logger.exception("Demo data seeding failed")

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(advice_bp)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"message": e.description}), e.code

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


@login_manager.user_loader
def load_user(user_id):
    from .storage import get_store
    return get_store().get_user(user_id)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"message": "Not signed in"}), 401

# Flask App Initializations
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv
import logging
import os
import traceback

from salon_app.extensions import db, login_manager, migrate, csrf
from salon_app.formatting import format_currency


def _env_flag(name, default):
    return os.environ.get(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def create_app(test_config=None):
    load_dotenv()
    app = Flask(__name__, instance_relative_config=True)

    # Configuration
    app.config["SECRET_KEY"] = os.environ.get("FLASK_SECRET_KEY", "dev_secret_key_change_me")
    db_path = os.path.join(app.instance_path, "salon.db")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("DATABASE_URL", f"sqlite:///{db_path}")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO").upper()
    app.config["ALERT_SCHEDULER_ENABLED"] = _env_flag("ALERT_SCHEDULER_ENABLED", True)
    app.config["ALERT_CHECK_INTERVAL_MINUTES"] = int(os.environ.get("ALERT_CHECK_INTERVAL_MINUTES", 5))
    app.config["ALERT_DEBOUNCE_SECONDS"] = float(os.environ.get("ALERT_DEBOUNCE_SECONDS", 2))
    if test_config is not None:
        app.config.update(test_config)

    try:
        os.makedirs(app.instance_path)
    except OSError:
        pass

    if not app.testing:
        logging.basicConfig(
            level=app.config["LOG_LEVEL"],
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )

    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    # Import models here, after db is initialized and tied to app
    from .models.user import User
    from .models.inventory import InventoryItem

    @login_manager.user_loader
    def load_user(user_id):
        if user_id is not None and str(user_id).isdigit():
            return db.session.get(User, int(user_id))
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Authentication required"}), 401

    from .routes.product_api import product_bp
    from .routes.worker_api import worker_bp
    from .routes.service_api import service_bp
    from .routes.inventory_api import inventory_bp
    from .routes.alert_api import alert_bp
    from .routes.notification_api import notification_bp

    # JSON API blueprints authenticate with the session cookie and are exempt from form CSRF tokens
    for blueprint in (product_bp, worker_bp, service_bp, inventory_bp, alert_bp, notification_bp):
        csrf.exempt(blueprint)
        app.register_blueprint(blueprint)

    # Register custom Jinja filters
    app.jinja_env.filters["currency"] = format_currency

    from .commands import register_commands
    register_commands(app)

    @app.route("/api/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "API is healthy"}), 200

    @app.errorhandler(HTTPException)
    def http_error_handler(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(500)
    def internal_server_error_handler(e):
        original_error_str = str(getattr(e, "original_exception", None) or e)
        app.logger.error(f"Internal Server Error: {original_error_str}\n{traceback.format_exc()}")
        return jsonify({"error": "An unexpected error occurred. Please try again."}), 500

    from .scheduler import watch_model, init_alert_scheduler
    watch_model(InventoryItem)
    if app.config["ALERT_SCHEDULER_ENABLED"] and not app.testing:
        init_alert_scheduler(app)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, host="0.0.0.0", use_reloader=False)

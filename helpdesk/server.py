"""Helpdesk API - application factory"""
from flask import Flask, jsonify
from flask_cors import CORS
import sys
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from helpdesk.api.account import account_bp
from helpdesk.database.memory_store import MemoryStore
from helpdesk.database.supabase_client import create_supabase_client
from helpdesk.database.supabase_store import SupabaseLabelStore, SupabaseProfileStore
from helpdesk.errors import StoreError, register_error_handlers
from helpdesk.service.auth_service import DevAuthService, SupabaseAuthService
from helpdesk.service.authorization_service import AuthorizationGate
from helpdesk.service.label_service import LabelService
from helpdesk.service.profile_service import ProfileService
from helpdesk.support import support_bp
from helpdesk.utils.constants import Settings
from helpdesk.utils.dependency_container import DependencyContainer

logger = logging.getLogger(__name__)


# =====================================================================
# Structured JSON logging for production
# =====================================================================
class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging in production."""
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(is_production: bool = False):
    """Configure logging: JSON in production, human-readable in development."""
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if is_production:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))

    root.addHandler(handler)

    # Reduce noise from chatty libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


# =====================================================================
# Collaborators
# =====================================================================
def build_container(settings: Settings, services: Optional[Dict[str, Any]] = None) -> DependencyContainer:
    """
    Wire stores and services for one app.

    DEV_MODE swaps Supabase for a seeded in-memory store and signs every
    request in as the dev user. Entries in ``services`` replace the
    corresponding factories outright.
    """
    container = DependencyContainer()
    container.register_service("settings", settings)

    if settings.DEV_MODE:
        memory_store = MemoryStore(seed=True)
        container.register_service("profile_store", memory_store)
        container.register_service("label_store", memory_store)
        container.register_factory("auth_service", lambda c: DevAuthService())
    else:
        container.register_factory("supabase", lambda c: create_supabase_client(settings))
        container.register_factory("profile_store", lambda c: SupabaseProfileStore(c.get_service("supabase")))
        container.register_factory("label_store", lambda c: SupabaseLabelStore(c.get_service("supabase")))
        container.register_factory("auth_service", lambda c: SupabaseAuthService(settings.SUPABASE_JWT_SECRET))

    container.register_factory(
        "authorization_gate",
        lambda c: AuthorizationGate(c.get_service("auth_service"), c.get_service("profile_store")),
    )
    container.register_factory("profile_service", lambda c: ProfileService(c.get_service("profile_store")))
    container.register_factory("label_service", lambda c: LabelService(c.get_service("label_store")))

    for name, service in (services or {}).items():
        container.register_service(name, service)

    return container


def create_app(config_override: Optional[Dict[str, Any]] = None, services: Optional[Dict[str, Any]] = None) -> Flask:
    settings = Settings()
    if config_override:
        settings.override(config_override)

    app = Flask(__name__)
    app.config["AUTH_COOKIE_NAME"] = settings.AUTH_COOKIE_NAME
    app.config["DEV_MODE"] = settings.DEV_MODE
    if config_override:
        for key, value in config_override.items():  # also allow direct Flask config keys
            if key.isupper():
                app.config[key] = value

    container = build_container(settings, services)
    container.init_app(app)

    CORS(app, resources={r"/api/*": {
        "origins": settings.ALLOWED_ORIGINS,
        "methods": ["GET", "POST", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization", "X-Requested-With"],
        "supports_credentials": True
    }})

    register_error_handlers(app)

    # Register the support label blueprint
    app.register_blueprint(support_bp, url_prefix='/api/support')

    # Register the account blueprint (/api/is_admin)
    app.register_blueprint(account_bp, url_prefix='/api')

    @app.route("/health")
    def health():
        """
        Health check endpoint for load balancer monitoring.

        Returns 200 if the server is running and can reach the database.
        Returns 503 if the database is unreachable.
        """
        checks = {"server": "ok", "mode": "dev" if settings.DEV_MODE else "supabase"}
        status_code = 200

        try:
            container.get_service("label_store").ping()
            checks["database"] = "ok"
        except (StoreError, ValueError) as e:
            checks["database"] = f"error: {str(e)[:100]}"
            status_code = 503

        checks["timestamp"] = datetime.now().isoformat()
        return jsonify(checks), status_code

    if settings.DEV_MODE:
        app.logger.info("DEV_MODE enabled: using in-memory store and dev user session")

    return app

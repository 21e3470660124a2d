"""Helpdesk API - Main entry point"""
import sys
import signal
import logging

from dotenv import load_dotenv

# Load environment variables early
load_dotenv()

from helpdesk.server import create_app, setup_logging
from helpdesk.utils.constants import Settings

settings = Settings()
setup_logging(settings.IS_PRODUCTION)
logger = logging.getLogger("helpdesk")

app = create_app()


# =====================================================================
# Graceful shutdown
# =====================================================================
def graceful_shutdown(signum, frame):
    """Handle SIGTERM/SIGINT for graceful shutdown."""
    sig_name = signal.Signals(signum).name
    logger.info(f"Received {sig_name}, shutting down gracefully")
    sys.exit(0)


if __name__ == "__main__":
    signal.signal(signal.SIGTERM, graceful_shutdown)
    signal.signal(signal.SIGINT, graceful_shutdown)

    # Bind to 0.0.0.0 in production (external access) or 127.0.0.1 for local dev
    host = "0.0.0.0" if settings.IS_PRODUCTION else "127.0.0.1"

    print("=" * 60)
    print("Starting Helpdesk API Server...")
    print("=" * 60)
    print(f"  Backend Port: {settings.PORT}")
    print(f"  Host: {host}")
    print(f"  Dev mode: {'Yes' if settings.DEV_MODE else 'No'}")
    print(f"  Supabase configured: {'Yes' if settings.SUPABASE_URL else 'No'}")
    print(f"  JWT secret configured: {'Yes' if settings.SUPABASE_JWT_SECRET else 'No'}")
    print(f"\nServer starting at: http://{host}:{settings.PORT}")
    print("=" * 60 + "\n")

    try:
        app.run(host=host, port=settings.PORT, debug=not settings.IS_PRODUCTION, use_reloader=False)
    except OSError as e:
        if "address already in use" in str(e).lower():
            print(f"\nERROR: Port {settings.PORT} is already in use!")
            print("Please stop any other process using this port and try again.")
            print(f"Error details: {e}\n")
        else:
            raise

"""
WSGI entry point for deployment (Railway / Gunicorn).
Builds the session once per worker and exposes the Flask server.
"""
from standarium_erp.app import create_app
from standarium_erp.config import configure_logging, load_settings
from standarium_erp.session import build_session

settings = load_settings()
configure_logging(settings.log_level)
session = build_session(settings)
app = create_app(session)

# Expose the Flask server for gunicorn
server = app.server

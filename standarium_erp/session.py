"""
session.py: builds the service graph the Dash callbacks share.

Nothing here is a module-level singleton: the entry point calls
``build_session(settings)`` once and hands the result to ``create_app``.
"""

from __future__ import annotations

import logging
import os

from standarium_erp.ai_gateway import AIGateway
from standarium_erp.config import Settings
from standarium_erp.data_store import COLLECTIONS, DataStore, change_event
from standarium_erp.event_bus import EventBus
from standarium_erp.local_store import LocalStore
from standarium_erp.sync_gateway import SyncGateway
from standarium_erp.views import ViewRegistry

logger = logging.getLogger("standarium.session")

LOCAL_STORE_FILE = "local_store.json"


class ErrorBanner:
    """Holds the last remote error until the page picks it up."""

    def __init__(self):
        self.message = None

    def show(self, message):
        self.message = message

    def take(self):
        message, self.message = self.message, None
        return message


def build_backend(settings: Settings):
    """Supabase when configured, otherwise the local JSON store."""
    if settings.use_supabase:
        from standarium_erp.supabase_loader import SupabaseBackend

        logger.info("Using Supabase backend at %s", settings.supabase_url)
        return SupabaseBackend(settings.supabase_url, settings.supabase_key)
    path = os.path.join(settings.data_dir, LOCAL_STORE_FILE)
    logger.info("Supabase not configured, using local store at %s", path)
    return LocalStore(path)


class ErpSession:
    def __init__(self, settings: Settings, backend=None, ai=None):
        self.settings = settings
        self.bus = EventBus()
        self.store = DataStore(self.bus)
        self.views = ViewRegistry()
        self.banner = ErrorBanner()
        self.loaded = set()
        self.backend = backend if backend is not None else build_backend(settings)
        self.gateway = SyncGateway(
            self.backend,
            self.store,
            render_hook=self.views.invalidate,
            on_error=self.banner.show,
            on_auth_change=self._on_auth_change,
        )
        self.ai = ai if ai is not None else AIGateway(settings.ai_url, settings.ai_timeout)
        for collection in COLLECTIONS:
            self.bus.on(change_event(collection), self._mark_loaded)

    def _mark_loaded(self, collection):
        if self.gateway.is_authenticated:
            self.loaded.add(collection)

    def _on_auth_change(self, state):
        if not self.gateway.is_authenticated:
            self.loaded.clear()
        self.views.invalidate_all()

    @property
    def syncing(self) -> bool:
        return self.gateway.is_authenticated and len(self.loaded) < len(COLLECTIONS)

    def product(self, product_id):
        return next((p for p in self.store.get_products() if p.id == product_id), None)

    def close(self):
        if self.gateway.is_authenticated:
            self.gateway.sign_out()


def build_session(settings: Settings, backend=None, ai=None) -> ErpSession:
    return ErpSession(settings, backend=backend, ai=ai)

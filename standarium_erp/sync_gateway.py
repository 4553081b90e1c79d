"""
sync_gateway.py: bridge between the authenticated session and the DataStore.

Auth state machine:  SIGNED_OUT --sign_in--> SIGNED_IN --sign_out--> SIGNED_OUT

Entering SIGNED_IN (re)opens one snapshot subscription per collection. Each
snapshot replaces the matching DataStore collection, then calls the render
hook for that collection only. Writes go to the backend and come back as
snapshots; nothing is applied locally first, so a failed write leaves the
previous state untouched.
"""

from __future__ import annotations

import logging
import threading
from functools import partial

from standarium_erp.data_store import COLLECTIONS, DataStore
from standarium_erp.errors import (
    AuthenticationError,
    AuthRequiredError,
    RemoteOperationError,
    auth_error_message,
)
from standarium_erp.models import build_sale, from_document

logger = logging.getLogger("standarium.sync")

SIGNED_OUT = "signed-out"
SIGNED_IN = "signed-in"

MSG_SAVE_FAILED = "Ocorreu um erro ao salvar os dados."
MSG_DELETE_FAILED = "Ocorreu um erro ao excluir o item."
MSG_SIGN_OUT_FAILED = "Ocorreu um erro ao fazer logout. Tente novamente."
MSG_SUBSCRIBE_FAILED = "Não foi possível sincronizar os dados. Recarregue a página."


class SyncGateway:
    def __init__(self, backend, store: DataStore, render_hook=None, on_error=None,
                 on_auth_change=None):
        self.backend = backend
        self.store = store
        self.render_hook = render_hook
        self.on_error = on_error
        self.on_auth_change = on_auth_change
        self.state = SIGNED_OUT
        self.user_id = None
        self._subscriptions = []
        self._generation = 0
        # Guards the generation, the principal and the DataStore writes made by
        # snapshot handlers. Never held while calling into the backend.
        self._lock = threading.RLock()

    @property
    def is_authenticated(self) -> bool:
        return self.state == SIGNED_IN and self.user_id is not None

    def _report(self, message):
        if self.on_error is not None:
            self.on_error(message)

    # ── Auth ────────────────────────────────────────────────────────────
    def sign_in(self, email: str, password: str) -> str:
        try:
            user_id = self.backend.sign_in(email, password)
        except Exception as e:
            code = getattr(e, "code", None)
            logger.warning("Sign-in failed for %s: %s", email, code or e)
            raise AuthenticationError(auth_error_message(code), code) from e
        self._enter_signed_in(user_id)
        return user_id

    def sign_up(self, email: str, password: str) -> bool:
        """Create an account. Returns True when the new account is signed in."""
        try:
            user_id = self.backend.sign_up(email, password)
        except Exception as e:
            code = getattr(e, "code", None)
            logger.warning("Sign-up failed for %s: %s", email, code or e)
            raise AuthenticationError(auth_error_message(code), code) from e
        if user_id is None:
            logger.info("Account %s created, waiting for e-mail confirmation", email)
            return False
        self._enter_signed_in(user_id)
        return True

    def sign_out(self) -> None:
        try:
            self.backend.sign_out()
            logger.info("User %s signed out", self.user_id)
        except Exception:
            logger.exception("Sign-out failed")
            self._report(MSG_SIGN_OUT_FAILED)
        finally:
            self._enter_signed_out()

    def handle_session_invalidated(self) -> None:
        logger.info("Session for %s is no longer valid", self.user_id)
        self._enter_signed_out()

    def _enter_signed_in(self, user_id):
        with self._lock:
            stale = self._take_subscriptions()
            self.user_id = user_id
            self.state = SIGNED_IN
            self._generation += 1
            generation = self._generation
        self._close(stale)
        opened = 0
        for collection in COLLECTIONS:
            handler = partial(self._on_snapshot, collection, generation)
            try:
                sub = self.backend.subscribe(collection, user_id, handler)
            except Exception:
                logger.exception("Could not subscribe to %s", collection)
                self._report(MSG_SUBSCRIBE_FAILED)
                continue
            with self._lock:
                current = generation == self._generation
                if current:
                    self._subscriptions.append(sub)
                    opened += 1
            if not current:
                # signed out while subscribing
                self._close([sub])
        logger.info("User %s signed in, %d subscriptions open", user_id, opened)
        if self.on_auth_change is not None:
            self.on_auth_change(self.state)

    def _enter_signed_out(self):
        with self._lock:
            stale = self._take_subscriptions()
            self._generation += 1
            self.user_id = None
            self.state = SIGNED_OUT
            self.store.clear()
        self._close(stale)
        if self.on_auth_change is not None:
            self.on_auth_change(self.state)

    def _take_subscriptions(self):
        subs, self._subscriptions = self._subscriptions, []
        return subs

    @staticmethod
    def _close(subscriptions):
        for sub in subscriptions:
            try:
                sub.close()
            except Exception as e:
                logger.warning("Error closing subscription: %s", e)

    # ── Snapshots ───────────────────────────────────────────────────────
    def _on_snapshot(self, collection, generation, rows):
        with self._lock:
            if generation != self._generation or not self.is_authenticated:
                logger.debug("Dropping stale %s snapshot", collection)
                return
            records = [from_document(collection, row) for row in rows]
            self.store.set(collection, records)
        logger.debug("Snapshot %s: %d record(s)", collection, len(records))
        if self.render_hook is not None:
            self.render_hook(collection)

    # ── Writes ──────────────────────────────────────────────────────────
    def _require_auth(self, action):
        if not self.is_authenticated:
            logger.error("Refusing to %s: no authenticated user", action)
            self._report(f"Você precisa estar logado para {action}.")
            raise AuthRequiredError(f"Authentication required to {action}")

    @staticmethod
    def _check_collection(collection):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")

    def save(self, collection: str, data: dict, existing_id: str | None = None) -> str:
        """Insert ``data``, or partially update ``existing_id``. Returns the document id."""
        self._require_auth("salvar dados")
        self._check_collection(collection)
        try:
            if existing_id:
                self.backend.update(collection, self.user_id, existing_id, data)
                doc_id = existing_id
            else:
                doc_id = self.backend.insert(collection, self.user_id, data)
        except Exception as e:
            logger.exception("Error saving to %s", collection)
            self._report(MSG_SAVE_FAILED)
            raise RemoteOperationError(MSG_SAVE_FAILED, collection) from e
        logger.info("Saved %s/%s", collection, doc_id or "new")
        return doc_id

    def remove(self, collection: str, doc_id: str) -> None:
        self._require_auth("excluir dados")
        self._check_collection(collection)
        try:
            self.backend.delete(collection, self.user_id, doc_id)
        except Exception as e:
            logger.exception("Error deleting %s/%s", collection, doc_id)
            self._report(MSG_DELETE_FAILED)
            raise RemoteOperationError(MSG_DELETE_FAILED, collection) from e
        logger.info("Deleted %s/%s", collection, doc_id)

    def register_sale(self, product, quantity, unit_price, method, today=None) -> str:
        """Record a sale and take the sold units out of the product's lot."""
        self._require_auth("registrar vendas")
        sale_doc, product_update = build_sale(product, quantity, unit_price, method, today)
        sale_id = self.save("sales", sale_doc)
        try:
            self.save("products", product_update, product.id)
        except RemoteOperationError:
            logger.warning("Stock update for %s failed, removing sale %s", product.id, sale_id)
            self.remove("sales", sale_id)
            raise
        return sale_id

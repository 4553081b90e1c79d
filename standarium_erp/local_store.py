"""
local_store.py: JSON-file document store used when Supabase is not configured.

Same contract as SupabaseBackend: per-user collections, password accounts,
and a full-collection snapshot pushed to every subscriber after each write.
``path=None`` keeps everything in memory (tests, throwaway demos).
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
import threading
import uuid
from datetime import datetime, timezone

from werkzeug.security import check_password_hash, generate_password_hash

from standarium_erp.data_store import COLLECTIONS
from standarium_erp.supabase_loader import Subscription

logger = logging.getLogger("standarium.local")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD = 6


class LocalAuthError(Exception):
    def __init__(self, code):
        super().__init__(code)
        self.code = code


class LocalStore:
    name = "local"

    def __init__(self, path=None):
        self.path = path
        self._state = {"users": {}, "collections": {}}
        self._subscribers = {}
        # Dash serves callbacks from several threads; every read-modify-save-publish
        # sequence holds this lock.
        self._lock = threading.RLock()
        if path and os.path.exists(path):
            with open(path, encoding="utf-8") as f:
                self._state = json.load(f)

    # ── Persistence ─────────────────────────────────────────────────────
    def _save(self):
        if not self.path:
            return
        folder = os.path.dirname(self.path) or "."
        os.makedirs(folder, exist_ok=True)
        with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=folder,
                                         suffix=".tmp", delete=False) as f:
            json.dump(self._state, f, ensure_ascii=False, indent=2)
        os.replace(f.name, self.path)

    def _docs(self, collection, user_id):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")
        user = self._state["collections"].setdefault(user_id, {})
        return user.setdefault(collection, {})

    # ── Auth ────────────────────────────────────────────────────────────
    def sign_in(self, email, password):
        if not EMAIL_RE.match(email or ""):
            raise LocalAuthError("auth/invalid-email")
        with self._lock:
            user = self._state["users"].get(email.lower())
        if user is None:
            raise LocalAuthError("auth/user-not-found")
        if not check_password_hash(user["password_hash"], password or ""):
            raise LocalAuthError("auth/wrong-password")
        return user["id"]

    def sign_up(self, email, password):
        if not EMAIL_RE.match(email or ""):
            raise LocalAuthError("auth/invalid-email")
        if len(password or "") < MIN_PASSWORD:
            raise LocalAuthError("auth/weak-password")
        with self._lock:
            if email.lower() in self._state["users"]:
                raise LocalAuthError("auth/email-already-in-use")
            user_id = str(uuid.uuid4())
            self._state["users"][email.lower()] = {
                "id": user_id,
                "password_hash": generate_password_hash(password),
            }
            self._save()
        logger.info("Created local account %s", email)
        return user_id

    def sign_out(self):
        with self._lock:
            self._subscribers.clear()

    # ── Snapshots ───────────────────────────────────────────────────────
    def rows(self, collection, user_id):
        with self._lock:
            return [{"id": doc_id, **doc} for doc_id, doc in self._docs(collection, user_id).items()]

    def subscribe(self, collection, user_id, on_snapshot):
        key = (collection, user_id)
        with self._lock:
            self._subscribers.setdefault(key, []).append(on_snapshot)
            on_snapshot(self.rows(collection, user_id))

        def _close():
            with self._lock:
                callbacks = self._subscribers.get(key, [])
                if on_snapshot in callbacks:
                    callbacks.remove(on_snapshot)

        return Subscription(_close)

    def _publish(self, collection, user_id):
        rows = self.rows(collection, user_id)
        for callback in list(self._subscribers.get((collection, user_id), [])):
            callback(list(rows))

    # ── Writes ──────────────────────────────────────────────────────────
    def _stamp(self):
        return datetime.now(timezone.utc).isoformat()

    def insert(self, collection, user_id, data):
        doc_id = uuid.uuid4().hex
        with self._lock:
            self._docs(collection, user_id)[doc_id] = {**data, "updated_at": self._stamp()}
            self._save()
            self._publish(collection, user_id)
        return doc_id

    def update(self, collection, user_id, doc_id, data):
        with self._lock:
            docs = self._docs(collection, user_id)
            if doc_id not in docs:
                raise KeyError(f"No {collection} document {doc_id}")
            docs[doc_id] = {**docs[doc_id], **data, "updated_at": self._stamp()}
            self._save()
            self._publish(collection, user_id)

    def delete(self, collection, user_id, doc_id):
        with self._lock:
            docs = self._docs(collection, user_id)
            if doc_id not in docs:
                raise KeyError(f"No {collection} document {doc_id}")
            del docs[doc_id]
            self._save()
            self._publish(collection, user_id)

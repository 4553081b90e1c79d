"""
supabase_loader.py: Supabase backend for the sync gateway.

Every table (products, services, components, sales) is scoped per user by a
``user_id`` column and row-level security (see schema.sql). Realtime row
events are turned into full-collection snapshots by re-fetching the user's
rows, so consumers always receive the complete, authoritative collection.
"""

from __future__ import annotations

import logging

from standarium_erp.realtime import RealtimeFeed

logger = logging.getLogger("standarium.supabase")

# Postgres evaluates the literal 'now' when casting to timestamptz, so the
# stamp is taken from the database clock rather than ours.
SERVER_NOW = "now"

PAGE_SIZE = 1000


# ── Supabase helpers ────────────────────────────────────────────────────────

def _get_supabase_client(url: str, key: str):
    """Return a Supabase client, or None if credentials are missing."""
    if not url or not key or "YOUR_PROJECT" in url:
        return None

    from supabase import create_client
    return create_client(url, key)


def _fetch_all(client, table: str, user_id: str, order_col: str = "created_at") -> list[dict]:
    """Fetch all of a user's rows, paginating past the 1000-row limit."""
    rows: list[dict] = []
    offset = 0
    while True:
        resp = (
            client.table(table)
            .select("*")
            .eq("user_id", user_id)
            .order(order_col)
            .range(offset, offset + PAGE_SIZE - 1)
            .execute()
        )
        batch = resp.data
        rows.extend(batch)
        if len(batch) < PAGE_SIZE:
            break
        offset += PAGE_SIZE
    return rows


class Subscription:
    """Handle for one collection's snapshot feed."""

    def __init__(self, close_fn=None):
        self._close_fn = close_fn
        self.closed = False

    def close(self):
        if self.closed:
            return
        self.closed = True
        if self._close_fn is not None:
            self._close_fn()


# ── Backend ─────────────────────────────────────────────────────────────────

class SupabaseBackend:
    name = "supabase"

    def __init__(self, url: str, key: str, client=None, feed=None):
        self.client = client or _get_supabase_client(url, key)
        if self.client is None:
            raise ValueError("Supabase credentials are missing")
        self.feed = feed or RealtimeFeed(url, key)
        self._access_token = None

    # ── Auth ────────────────────────────────────────────────────────────
    def sign_in(self, email: str, password: str) -> str:
        resp = self.client.auth.sign_in_with_password({"email": email, "password": password})
        self._access_token = resp.session.access_token if resp.session else None
        return resp.user.id

    def sign_up(self, email: str, password: str):
        """Create the account. Returns the user id when a session was opened
        right away, None when the project requires e-mail confirmation first."""
        resp = self.client.auth.sign_up({"email": email, "password": password})
        if resp.session is None:
            return None
        self._access_token = resp.session.access_token
        return resp.user.id

    def sign_out(self) -> None:
        self._access_token = None
        try:
            self.client.auth.sign_out()
        finally:
            self.feed.stop()

    # ── Snapshots ───────────────────────────────────────────────────────
    def subscribe(self, collection: str, user_id: str, on_snapshot) -> Subscription:
        def deliver():
            on_snapshot(_fetch_all(self.client, collection, user_id))

        # Initial load counts as the first snapshot
        deliver()
        self.feed.start(self._access_token)
        channel = self.feed.watch(collection, user_id, deliver)
        return Subscription(lambda: self.feed.unwatch(channel))

    # ── Writes ──────────────────────────────────────────────────────────
    def insert(self, collection: str, user_id: str, data: dict) -> str:
        row = {**data, "user_id": user_id, "updated_at": SERVER_NOW}
        resp = self.client.table(collection).insert(row).execute()
        return str(resp.data[0]["id"]) if resp.data else ""

    def update(self, collection: str, user_id: str, doc_id: str, data: dict) -> None:
        row = {**data, "updated_at": SERVER_NOW}
        (
            self.client.table(collection)
            .update(row)
            .eq("id", doc_id)
            .eq("user_id", user_id)
            .execute()
        )

    def delete(self, collection: str, user_id: str, doc_id: str) -> None:
        (
            self.client.table(collection)
            .delete()
            .eq("id", doc_id)
            .eq("user_id", user_id)
            .execute()
        )

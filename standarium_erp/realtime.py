"""
realtime.py: Supabase realtime change feed running in a background thread.

supabase-py only ships realtime on the async client, so one daemon thread
owns an asyncio loop with an async client. Change callbacks are handed to a
single-worker executor: snapshot fetches for a table run one at a time, in
the order the events arrived.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

logger = logging.getLogger("standarium.realtime")

CONNECT_TIMEOUT = 30


def bind_changes(channel, table, user_id, callback):
    """Listen for inserts and updates on the user's rows, and for every delete.

    Postgres Changes cannot filter DELETE events by column, so deletes are
    taken unfiltered. Row-level security and the per-user re-fetch that
    follows each event keep other users' rows out of the snapshot.
    """
    row_filter = f"user_id=eq.{user_id}"
    for event in ("INSERT", "UPDATE"):
        channel.on_postgres_changes(event, schema="public", table=table,
                                    filter=row_filter, callback=callback)
    channel.on_postgres_changes("DELETE", schema="public", table=table, callback=callback)


class RealtimeFeed:
    def __init__(self, url: str, key: str):
        self.url = url
        self.key = key
        self._loop = None
        self._thread = None
        self._client = None
        self._executor = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def _run(self, coro):
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result(CONNECT_TIMEOUT)

    def start(self, access_token=None):
        if self.running:
            return
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, name="supabase-realtime", daemon=True)
        self._thread.start()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snapshot")
        self._run(self._connect(access_token))
        logger.info("Realtime feed connected")

    async def _connect(self, access_token):
        from supabase import acreate_client

        self._client = await acreate_client(self.url, self.key)
        if access_token:
            await self._client.realtime.set_auth(access_token)

    def watch(self, table: str, user_id: str, on_change):
        """Call ``on_change()`` after every insert/update/delete on the user's rows."""
        return self._run(self._subscribe(table, user_id, on_change))

    async def _subscribe(self, table, user_id, on_change):
        channel = self._client.channel(f"{table}:{user_id}")

        def _callback(payload):
            self._executor.submit(self._dispatch, table, on_change)

        bind_changes(channel, table, user_id, _callback)
        await channel.subscribe()
        return channel

    @staticmethod
    def _dispatch(table, on_change):
        try:
            on_change()
        except Exception:
            logger.exception("Snapshot refresh failed for %s", table)

    def unwatch(self, channel):
        if not self.running or channel is None:
            return
        try:
            self._run(self._client.remove_channel(channel))
        except Exception as e:
            logger.warning("Could not remove realtime channel: %s", e)

    def stop(self):
        if not self.running:
            return
        try:
            self._run(self._client.remove_all_channels())
        except Exception as e:
            logger.warning("Realtime shutdown incomplete: %s", e)
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)
        self._executor.shutdown(wait=False)
        self._loop = self._thread = self._client = self._executor = None
        logger.info("Realtime feed stopped")

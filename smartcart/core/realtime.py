# smartcart/core/realtime.py
import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field
from supabase import AsyncClient, acreate_client

from smartcart.core.config import Settings
from smartcart.core.errors import RemoteStoreError

logger = logging.getLogger(__name__)


class ChangeEvent(SQLModel):
    """
    One row-level change on a watched table.

    - event_type: INSERT | UPDATE | DELETE
    - new: row after the change (empty for DELETE)
    - old: row before the change (for DELETE often only the primary key)
    """

    model_config = ConfigDict(frozen=True)

    event_type: str
    new: dict[str, Any] = Field(default_factory=dict)
    old: dict[str, Any] = Field(default_factory=dict)


ChangeCallback = Callable[[ChangeEvent], None]


class Subscription(Protocol):
    def unsubscribe(self) -> None: ...


class ChangeFeed(Protocol):
    """
    Server-pushed stream of shopping list changes for one shopper.
    """

    def subscribe_shopping_list(
        self, shopper_id: str, callback: ChangeCallback
    ) -> Subscription: ...

    def close(self) -> None: ...


def parse_change_payload(payload: dict[str, Any]) -> ChangeEvent:
    """
    Normalize a realtime payload into a ChangeEvent.

    Accepts both shapes Supabase has shipped:
      - {"eventType", "new", "old"}
      - {"data": {"type", "record", "old_record"}}

    Raises:
        RemoteStoreError: if the payload has no event type.
    """
    if "data" in payload and isinstance(payload["data"], dict):
        data = payload["data"]
        event_type = data.get("type")
        new = data.get("record") or {}
        old = data.get("old_record") or {}
    else:
        event_type = payload.get("eventType") or payload.get("type")
        new = payload.get("new") or payload.get("record") or {}
        old = payload.get("old") or payload.get("old_record") or {}

    if not event_type:
        raise RemoteStoreError(f"Change payload without event type: {payload!r}")

    return ChangeEvent(event_type=str(event_type).upper(), new=new, old=old)


class _ChannelSubscription:
    def __init__(self, feed: "SupabaseChangeFeed", channel: Any, name: str):
        self._feed = feed
        self._channel = channel
        self.name = name
        self._closed = False

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._feed._remove_channel(self._channel, self.name)


class SupabaseChangeFeed:
    """
    Supabase Realtime `postgres_changes` feed.

    The realtime client is async-only, so the feed owns one event loop on a
    daemon thread. Callbacks run on that thread; consumers must serialize
    their own state (the cart engine queues them).

    Uses the service role key when configured so row level security does
    not hide other clients' writes.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.timeout = settings.REALTIME_TIMEOUT_SECONDS
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._client: AsyncClient | None = None
        self._lock = threading.Lock()

    # ---- loop management ----

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=loop.run_forever,
                    name="supabase-realtime",
                    daemon=True,
                )
                thread.start()
                self._loop = loop
                self._thread = thread
            return self._loop

    def _run(self, coro) -> Any:
        loop = self._ensure_loop()
        future = asyncio.run_coroutine_threadsafe(coro, loop)
        try:
            return future.result(timeout=self.timeout)
        except Exception as e:
            future.cancel()
            raise RemoteStoreError(f"Realtime call failed: {e}") from e

    async def _get_client(self) -> AsyncClient:
        if self._client is None:
            key = self.settings.SUPABASE_SERVICE_ROLE_KEY or self.settings.SUPABASE_KEY
            self._client = await acreate_client(self.settings.SUPABASE_URL, key)
        return self._client

    # ---- public API ----

    def subscribe_shopping_list(
        self, shopper_id: str, callback: ChangeCallback
    ) -> Subscription:
        """
        Subscribe to `shopping_list` rows of one shopper.

        Raises:
            RemoteStoreError: if the channel could not be joined in time.
        """
        name = f"shopping-list-{shopper_id}"

        def _on_change(payload: dict[str, Any]) -> None:
            try:
                event = parse_change_payload(payload)
            except RemoteStoreError as e:
                logger.warning(f"Ignoring realtime payload: {e}")
                return
            callback(event)

        async def _subscribe():
            client = await self._get_client()
            channel = client.channel(name)
            channel.on_postgres_changes(
                "*",
                schema="public",
                table="shopping_list",
                filter=f"shopper_id=eq.{shopper_id}",
                callback=_on_change,
            )
            await channel.subscribe()
            return channel

        channel = self._run(_subscribe())
        logger.info(f"Subscribed to realtime channel {name}")
        return _ChannelSubscription(self, channel, name)

    def _remove_channel(self, channel: Any, name: str) -> None:
        async def _remove():
            client = await self._get_client()
            await client.remove_channel(channel)

        try:
            self._run(_remove())
            logger.info(f"Unsubscribed from realtime channel {name}")
        except RemoteStoreError as e:
            logger.error(f"Failed to remove realtime channel {name}: {e}")

    def close(self) -> None:
        """Stop the loop thread. Open channels die with the socket."""
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
            self._client = None
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout=self.timeout)
        if not loop.is_running():
            loop.close()

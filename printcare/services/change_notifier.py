"""Per-table change feed for dashboard refreshes.

The notifier is created by the application lifespan and handed to the
catalog store; nothing here is module-global. Consumers either hold a
``Subscription`` (an async iterator of ``ChangeEvent``) or a websocket
registered through ``connect``. Events are delivered as they happen, with
no debouncing.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket

from printcare.schemas.ws_messages import ChangeEvent

logger = logging.getLogger(__name__)

ALL_TABLES = "*"
MAX_PENDING = 1000


class Subscription:
    """Buffered feed for one table. When the buffer is full the oldest event is dropped."""

    def __init__(self, notifier: ChangeNotifier, table: str, max_pending: int = MAX_PENDING):
        self.table = table
        self._notifier = notifier
        self._queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue(maxsize=max_pending)
        self.closed = False
        self.dropped = 0

    def _deliver(self, event: ChangeEvent | None) -> None:
        if self._queue.full():
            self._queue.get_nowait()
            self.dropped += 1
            if self.dropped == 1:
                logger.warning("Subscription on %s is not draining, dropping oldest events", self.table)
        self._queue.put_nowait(event)

    def pending(self) -> int:
        return self._queue.qsize()

    async def get(self) -> ChangeEvent | None:
        """Next event, or None once the subscription is closed."""
        if self.closed and self._queue.empty():
            return None
        return await self._queue.get()

    def close(self) -> None:
        self._notifier.unsubscribe(self)

    def __aiter__(self):
        return self

    async def __anext__(self) -> ChangeEvent:
        event = await self.get()
        if event is None:
            raise StopAsyncIteration
        return event


class ChangeNotifier:
    def __init__(self, max_pending: int = MAX_PENDING):
        self._max_pending = max_pending
        self._subscriptions: dict[str, list[Subscription]] = {}
        self._connections: dict[str, list[WebSocket]] = {}

    # ── In-process subscriptions ─────────────────────────────

    def subscribe(self, table: str = ALL_TABLES) -> Subscription:
        sub = Subscription(self, table, self._max_pending)
        self._subscriptions.setdefault(table, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        subs = self._subscriptions.get(sub.table, [])
        if sub in subs:
            subs.remove(sub)
        if not sub.closed:
            sub.closed = True
            sub._deliver(None)

    def subscriber_count(self, table: str) -> int:
        return len(self._subscriptions.get(table, [])) + len(self._connections.get(table, []))

    # ── Websocket fan-out ────────────────────────────────────

    async def connect(self, tables: list[str], websocket: WebSocket):
        await websocket.accept()
        for table in tables or [ALL_TABLES]:
            self._connections.setdefault(table, []).append(websocket)

    def disconnect(self, tables: list[str], websocket: WebSocket):
        for table in tables or [ALL_TABLES]:
            conns = self._connections.get(table, [])
            if websocket in conns:
                conns.remove(websocket)

    # ── Publishing ───────────────────────────────────────────

    async def publish(self, table: str, event: str, record_id: str = "") -> ChangeEvent:
        """Deliver a change event to everyone watching ``table`` or all tables."""
        change = ChangeEvent(table=table, event=event, record_id=record_id)
        for key in (table, ALL_TABLES):
            for sub in list(self._subscriptions.get(key, [])):
                sub._deliver(change)
            await self._broadcast(key, change)
        return change

    async def _broadcast(self, key: str, change: ChangeEvent):
        conns = self._connections.get(key, [])
        dead = []
        payload = change.model_dump_json()
        for ws in conns:
            try:
                await ws.send_text(payload)
            except Exception:
                logger.warning("Dropping websocket for %s after failed send", key)
                dead.append(ws)
        for ws in dead:
            conns.remove(ws)

from __future__ import annotations

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query

router = APIRouter(tags=["websocket"])


@router.websocket("/api/ws/changes")
async def changes_feed(
    websocket: WebSocket,
    tables: str = Query(default=""),
):
    # Comma-separated table names; empty means every table
    watched = [t.strip() for t in tables.split(",") if t.strip()]
    notifier = websocket.app.state.notifier

    await notifier.connect(watched, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        notifier.disconnect(watched, websocket)

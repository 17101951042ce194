"""Live check-in notifications for connected admin dashboards (WebSocket /ws)."""
import logging
from datetime import datetime

from fastapi import WebSocket

from visitdesk.models.visitor import Visitor

log = logging.getLogger("uvicorn.error")


class CheckInHub:
    """Fire-and-forget broadcast to every open socket; no delivery guarantee or retry."""

    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.connections.add(websocket)
        log.info("WebSocket client connected (%d open)", len(self.connections))
        await websocket.send_json({
            "type": "connection",
            "message": "Connected to visitor management system notifications",
        })

    def disconnect(self, websocket: WebSocket) -> None:
        self.connections.discard(websocket)
        log.info("WebSocket client disconnected (%d open)", len(self.connections))

    async def broadcast(self, message: dict) -> None:
        for ws in list(self.connections):
            try:
                await ws.send_json(message)
            except Exception:
                log.warning("Dropping WebSocket client after failed send", exc_info=True)
                self.disconnect(ws)

    async def broadcast_check_in(self, visitor: dict, purpose: str | None = None) -> None:
        await self.broadcast({
            "type": "check-in",
            "visitor": visitor,
            "purpose": purpose or "Not specified",
            "timestamp": datetime.now().isoformat(),
        })


def check_in_payload(visitor: Visitor) -> dict:
    """Snapshot taken inside the request; the broadcast runs after the DB session is closed."""
    return {
        "id": visitor.id,
        "badgeId": visitor.badge_id,
        "fullName": visitor.full_name,
        "phoneNumber": visitor.phone_number,
        "verified": bool(visitor.verified),
    }


hub = CheckInHub()

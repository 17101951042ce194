"""WebSocket channel for live check-in notifications."""
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
import logging

from visitdesk.services.notifications import hub

router = APIRouter(tags=["notifications"])
log = logging.getLogger("uvicorn.error")


@router.websocket("/ws")
async def notifications_socket(websocket: WebSocket):
    await hub.connect(websocket)
    try:
        while True:
            message = await websocket.receive_text()
            log.debug("Received message from client: %s", message)
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)

"""Live channel: server-push WebSocket for opportunities, status and sentiment."""
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from opportunity_radar.deps import LiveFeedWs

logger = logging.getLogger(__name__)
router = APIRouter(tags=["live"])


@router.websocket("/ws")
async def live_channel(websocket: WebSocket, feed: LiveFeedWs) -> None:
    """Push-only: inbound frames are read and ignored until the client leaves."""
    await websocket.accept()
    if not await feed.connect(websocket):
        await websocket.close(code=status.WS_1013_TRY_AGAIN_LATER)
        return
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Live client disconnected")
    finally:
        feed.disconnect(websocket)

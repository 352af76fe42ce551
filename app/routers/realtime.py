# app/routers/realtime.py
"""
WebSocket subscription for dashboards.
Server → client only; whatever the client sends (text or binary heartbeats)
is read and ignored so the socket notices disconnects.
"""

from fastapi import APIRouter, Depends, WebSocket

from app.services.notifier import AlertNotifier, get_notifier

router = APIRouter()


@router.websocket("/ws")
async def alert_stream(websocket: WebSocket, notifier: AlertNotifier = Depends(get_notifier)):
    await notifier.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        notifier.disconnect(websocket)

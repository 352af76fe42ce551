# app/services/notifier.py
"""
Live notification fan-out for the alarm dashboard.

Dashboards subscribe over WebSocket (/ws) and receive frames shaped like
    {"event": "alert-created" | "alert-resolved", "data": {...}}

Delivery is best effort: events go to whoever is connected at broadcast time.
There is no queue and no replay, so a dashboard that connects late misses
earlier events and should reload /active-alarms. A slow subscriber delays the
broadcast loop; a failing one is dropped.
"""

from typing import Any, Dict, Set

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

from app.utils.logger import get_logger

logger = get_logger(__name__)

ALERT_CREATED = "alert-created"
ALERT_RESOLVED = "alert-resolved"


class AlertNotifier:
    def __init__(self):
        self._connections: Set[WebSocket] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self._connections.add(websocket)
        logger.info(f"[WS] Dashboard connected ({self.subscriber_count} active)")

    def disconnect(self, websocket: WebSocket):
        self._connections.discard(websocket)
        logger.info(f"[WS] Dashboard disconnected ({self.subscriber_count} active)")

    async def broadcast(self, event: str, payload: Dict[str, Any]) -> int:
        """Send one event to every connected dashboard. Returns how many received it."""
        frame = {"event": event, "data": jsonable_encoder(payload)}
        delivered = 0
        # Snapshot: connect/disconnect may run while we await a send
        for websocket in list(self._connections):
            try:
                await websocket.send_json(frame)
                delivered += 1
            except Exception as e:
                logger.warning(f"[WS] Dropping subscriber after failed send of {event}: {e}")
                self._connections.discard(websocket)
        logger.debug(f"[WS] {event} delivered to {delivered} subscriber(s)")
        return delivered


notifier = AlertNotifier()


def get_notifier() -> AlertNotifier:
    """FastAPI dependency — the process-wide subscriber set."""
    return notifier

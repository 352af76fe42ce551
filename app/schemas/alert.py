# app/schemas/alert.py
from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional


class AlertOut(BaseModel):
    """Alert row as stored. Used for the send-alert response and the alert-created event."""
    id: int
    reporting_user_id: int
    alert_type_id: int
    message: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    photo_url: Optional[str] = None
    georeference_id: Optional[int] = None
    siren_id: Optional[int] = None
    state: str
    feedback: Optional[str] = None
    created_at: datetime
    resolved_at: Optional[datetime] = None


class AlertSummaryOut(BaseModel):
    """Row of the active-alarms dashboard list."""
    id: int
    reporter_first_name: Optional[str] = None
    reporter_last_name: Optional[str] = None
    reporter_role: Optional[str] = None
    georeference_description: Optional[str] = None
    alert_type_description: Optional[str] = None
    created_at: datetime


class AlertDetailOut(AlertSummaryOut):
    message: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    photo_url: Optional[str] = None
    reporter_phone: Optional[str] = None
    reporter_department: Optional[str] = None
    state: str
    feedback: Optional[str] = None


class AlertResolvedEvent(BaseModel):
    id: int
    state: str
    feedback: str


class PanicIn(BaseModel):
    id_usuario: Optional[int] = None
    latitud: Optional[float] = None
    longitud: Optional[float] = None


class PanicOut(BaseModel):
    id: int


class FeedbackIn(BaseModel):
    feedback: Optional[str] = None


class StateIn(BaseModel):
    # Untyped: only the literal integers 0 and 1 are accepted, checked by AlertService
    estado: Any = None


class MessageOut(BaseModel):
    message: str

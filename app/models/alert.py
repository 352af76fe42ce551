# app/models/alert.py
"""
Alerts table — every panic press and submitted alert.
state: 1 = active (shown on the dashboard), 0 = resolved.
Rows are never deleted; resolution only flips state and stores feedback.
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Text, Float, ForeignKey
from app.database import Base


class AlertState(enum.IntEnum):
    RESOLVED = 0
    ACTIVE = 1

    @property
    def label(self) -> str:
        return self.name.lower()


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    reporting_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    alert_type_id = Column(Integer, ForeignKey("alert_types.id"), nullable=False)
    message = Column(Text)
    latitude = Column(Float)
    longitude = Column(Float)
    photo_url = Column(String(500))
    georeference_id = Column(Integer, ForeignKey("georeferences.id"))
    siren_id = Column(Integer, ForeignKey("sirens.id"))
    state = Column(Integer, default=AlertState.ACTIVE, nullable=False, index=True)
    feedback = Column(Text)
    created_at = Column(DateTime, nullable=False, index=True)
    resolved_at = Column(DateTime)

    def __repr__(self):
        return f"<Alert {self.id} type={self.alert_type_id} state={self.state}>"

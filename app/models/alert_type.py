# app/models/alert_type.py
"""Fixed alert taxonomy (fire, medical, intrusion, panic, ...). Seeded by scripts/setup/init_db.py."""

from sqlalchemy import Column, Integer, String
from app.database import Base


class AlertType(Base):
    __tablename__ = "alert_types"

    id = Column(Integer, primary_key=True, autoincrement=False)
    description = Column(String(150), nullable=False)

    def __repr__(self):
        return f"<AlertType {self.id} {self.description}>"

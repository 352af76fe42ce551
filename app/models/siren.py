# app/models/siren.py
"""Physical sirens. state: 1 = sounding, 0 = off."""

from sqlalchemy import Column, Integer, String
from app.database import Base


class Siren(Base):
    __tablename__ = "sirens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(String(150))
    state = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Siren {self.id} state={self.state}>"

# app/models/georeference.py
from sqlalchemy import Column, Integer, String, Float
from app.database import Base


class Georeference(Base):
    __tablename__ = "georeferences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(String(200), nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)

    def __repr__(self):
        return f"<Georeference {self.id} {self.description}>"

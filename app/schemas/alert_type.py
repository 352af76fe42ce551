# app/schemas/alert_type.py
from pydantic import BaseModel


class AlertTypeOut(BaseModel):
    id: int
    description: str

    class Config:
        from_attributes = True

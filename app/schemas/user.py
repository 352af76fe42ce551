# app/schemas/user.py
from pydantic import BaseModel
from typing import Optional


class AccountSampleOut(BaseModel):
    id: int
    username: str
    mail: Optional[str]

    class Config:
        from_attributes = True

# app/models/user.py
"""
People who appear in the alarm flow.
users  — field staff / residents who press the panic button or send alerts.
admins — dashboard operators. Only sampled by /random-admin.
"""

from sqlalchemy import Column, Integer, String
from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    mail = Column(String(200))
    first_name = Column(String(100))
    last_name = Column(String(100))
    phone = Column(String(50))
    role = Column(String(50))
    department = Column(String(150))

    def __repr__(self):
        return f"<User {self.id} {self.username}>"


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    mail = Column(String(200))

    def __repr__(self):
        return f"<Admin {self.id} {self.username}>"

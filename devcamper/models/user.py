from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from devcamper.database.session import Base

ROLES = ("user", "publisher", "admin")


class User(Base):
    __tablename__ = "Users"

    id = Column(Integer, autoincrement=True, primary_key=True)
    name = Column(String(60), nullable=False)
    email = Column(String(120), unique=True, nullable=False)
    role = Column(String(15), nullable=False, default="user")
    hashed_password = Column(String(128), nullable=False)
    reset_password_token = Column(String(64), nullable=True)
    reset_password_expire = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

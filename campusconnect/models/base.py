# File: campusconnect/models/base.py
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from campusconnect.db.database import Base


def generate_id() -> str:
    return uuid.uuid4().hex


class BaseModel(Base):
    __abstract__ = True

    id = Column(String(128), primary_key=True, index=True, default=generate_id)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

"""
core/models.py: Core ORM models.

Owns tables: preferences
"""

from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func

from core.base import Base


class Preference(Base):
    """Key-value store for local preferences (trusted URL cache, record arrays)."""
    __tablename__ = "preferences"

    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

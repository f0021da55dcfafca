"""SQLAlchemy model for the precomputed monthly revenue series."""

from __future__ import annotations

from sqlalchemy import Column, Integer, String

from ..database import Base


class Revenue(Base):
    __tablename__ = "revenue"

    month = Column(String(4), primary_key=True)
    revenue = Column(Integer, nullable=False)

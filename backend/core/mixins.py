from datetime import datetime

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    """Naive UTC, the convention for every stored timestamp"""
    return datetime.utcnow()


class TimestampMixin:
    # Set in Python so rows written in the same second still order correctly
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

"""
Defines a base model for SQLAlchemy ORM with common attributes.

This module provides the declarative base shared by every table and an abstract
base class carrying the standard identifier and timestamp columns. Identifiers
are opaque string tokens produced by ``generate_id`` so that callers may also
supply their own (tiles created by external agents do this).
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_id() -> str:
    """Process-wide identifier generator."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class BaseModel(Base):
    """
    Base model class for database entities.

    :ivar id: Unique identifier for the record.
    :type id: str
    :ivar created_at: Timestamp representing when the record was created.
    :type created_at: datetime
    """

    __abstract__ = True

    id = Column(String(64), primary_key=True, default=generate_id)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class TimestampedModel(BaseModel):
    """Base model for entities that also track their last modification."""

    __abstract__ = True

    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

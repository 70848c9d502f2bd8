"""Declarative base for the review tables."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Every table has a UUID primary key plus created/updated timestamps.

    ``Uuid`` maps to the native UUID type on PostgreSQL and to CHAR(32) on
    SQLite, so the same models back production and the test database.
    Upserts bypass the ORM and therefore set ``updated_at`` themselves.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

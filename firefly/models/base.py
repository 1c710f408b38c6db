# File: firefly/models/base.py

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Project and every child table (buildings, risks, escape routes, ...)
    inherit from this.
    """
    pass


def new_id() -> str:
    """Server-side identifier for rows the client did not name itself."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

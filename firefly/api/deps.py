# File: firefly/api/deps.py

from collections.abc import Generator

from sqlalchemy.orm import Session

from firefly.core.config import Settings, get_settings
from firefly.core.placeholders import PositionTable, load_position_table
from firefly.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_app_settings() -> Settings:
    return get_settings()


def get_position_table() -> PositionTable:
    """
    Position table used by the stamper.

    Tests override this dependency to stamp against a custom layout.
    """
    return load_position_table(get_settings().position_table_path)

"""
Database initialization helpers.

We only wire up the metadata here. Models are imported so their
tables get registered on Base.metadata.
"""

from sqlalchemy.engine import Engine

from firefly.db.session import engine as default_engine
from firefly.models.base import Base

# Every table hangs off a project; import them all so relationships resolve.
from firefly.models import building, project, safety  # noqa: F401


def init_db(bind: Engine | None = None) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=bind or default_engine)

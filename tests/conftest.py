# File: tests/conftest.py

"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database and a template root in a
temporary directory holding a one-page report template.
"""

from io import BytesIO

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from firefly.api.deps import get_app_settings, get_db
from firefly.core.config import settings
from firefly.db.init_db import init_db
from firefly.main import app

TEMPLATE_PATH = "document template/Report_Template.pdf"


def make_template(pages: int = 1) -> bytes:
    buffer = BytesIO()
    canv = canvas.Canvas(buffer, pagesize=letter, invariant=1)
    for number in range(1, pages + 1):
        canv.setFont("Helvetica", 10)
        canv.drawString(72, 760, f"FIRE SAFETY REPORT page {number}")
        canv.showPage()
    canv.save()
    return buffer.getvalue()


@pytest.fixture(name="make_template")
def make_template_fixture():
    return make_template


@pytest.fixture
def template_bytes() -> bytes:
    return make_template()


@pytest.fixture
def template_root(tmp_path, template_bytes):
    folder = tmp_path / "document template"
    folder.mkdir()
    (folder / "Report_Template.pdf").write_bytes(template_bytes)
    return tmp_path


@pytest.fixture
def test_settings(template_root):
    return settings.model_copy(
        update={
            "template_root": str(template_root),
            "default_template_path": TEMPLATE_PATH,
            "webhook_url": None,
            "debug": False,
        }
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture(autouse=True)
def override_dependencies(session_factory, test_settings):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_app_settings] = lambda: test_settings
    yield
    app.dependency_overrides.clear()

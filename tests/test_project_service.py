# File: tests/test_project_service.py

import pytest

from firefly.schemas.project import ProjectDraft
from firefly.services import project_service
from firefly.services.project_service import DraftConflictError


def test_concurrent_saves_second_writer_loses(session_factory):
    with session_factory() as db:
        project_id = project_service.create_project_draft(db, ProjectDraft(name="Original")).id

    first = session_factory()
    second = session_factory()
    try:
        # Both sessions hold version 1 before either saves.
        assert project_service.get_project(first, project_id).version == 1
        assert project_service.get_project(second, project_id).version == 1

        saved = project_service.save_project_draft(first, project_id, ProjectDraft(name="First"))
        assert saved.version == 2

        with pytest.raises(DraftConflictError):
            project_service.save_project_draft(second, project_id, ProjectDraft(name="Second"))
    finally:
        first.close()
        second.close()

    with session_factory() as db:
        stored = project_service.get_project(db, project_id)
        assert stored.name == "First"
        assert stored.version == 2

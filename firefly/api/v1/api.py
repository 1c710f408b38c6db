from fastapi import APIRouter

from firefly.api.v1.routes_project import router as project_router
from firefly.api.v1.routes_project_document import router as project_document_router


api_router = APIRouter()

api_router.include_router(project_router, prefix="/projects", tags=["projects"])
api_router.include_router(project_document_router, prefix="/projects", tags=["documents"])

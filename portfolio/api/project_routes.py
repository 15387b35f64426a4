"""
Project Routes
==============

Read-only access to the loaded projects.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse
from typing import List

from ..models.project_models import ProjectRecord
from ..services.card_factory import CardFactory

router = APIRouter(tags=["projects"])

# Injected by server
state_manager = None

card_factory = CardFactory()


def _projects() -> List[ProjectRecord]:
    if not state_manager:
        raise HTTPException(status_code=500, detail="State manager not initialized")
    return state_manager.projects


def _find(project_id: str) -> ProjectRecord:
    for record in _projects():
        if record.id == project_id:
            return record
    raise HTTPException(status_code=404, detail="Project not found")


@router.get("/projects.json")
async def projects_json() -> List[ProjectRecord]:
    """The project list the page materializes into cards."""
    return _projects()


@router.get("/api/projects")
async def list_projects() -> List[ProjectRecord]:
    return _projects()


@router.get("/api/projects/{project_id}")
async def get_project(project_id: str) -> ProjectRecord:
    return _find(project_id)


@router.get("/project/{project_id}", response_class=HTMLResponse)
async def project_detail(project_id: str):
    """Project detail page."""
    return HTMLResponse(card_factory.render_detail(_find(project_id)))


@router.get("/project_detail.html", response_class=HTMLResponse)
async def project_detail_page(id: str):
    """Detail page under the link the project cards carry."""
    return await project_detail(id)

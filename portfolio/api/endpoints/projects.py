# === portfolio/api/endpoints/projects.py ===
from typing import Any, List
from fastapi import APIRouter, Body, Depends, Response

from portfolio.api.deps import get_project_service
from portfolio.api.routing import InstrumentedRoute
from portfolio.schemas.project import ProjectResponse
from portfolio.services.project_service import ProjectService
from portfolio.services.validation import validate_create_project, validate_update_project

router = APIRouter(route_class=InstrumentedRoute)

@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    payload: Any = Body(...),
    service: ProjectService = Depends(get_project_service),
):
    command = validate_create_project(payload).unwrap()
    project = await service.create(command)
    return ProjectResponse.model_validate(project)

@router.get("", response_model=List[ProjectResponse])
async def list_projects(service: ProjectService = Depends(get_project_service)):
    projects = await service.find_all()
    return [ProjectResponse.model_validate(p) for p in projects]

@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    project = await service.find_one(project_id)
    return ProjectResponse.model_validate(project)

@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    payload: Any = Body(...),
    service: ProjectService = Depends(get_project_service),
):
    command = validate_update_project(payload).unwrap()
    project = await service.update(project_id, command)
    return ProjectResponse.model_validate(project)

@router.delete("/{project_id}", status_code=204)
async def delete_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    await service.remove(project_id)
    return Response(status_code=204)

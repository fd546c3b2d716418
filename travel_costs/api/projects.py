"""Routy Projekty / Project API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.models.project import Project
from travel_costs.models.trip import Trip
from travel_costs.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter()


async def _check_code_unique(db: AsyncSession, code: str, exclude_id: int | None = None) -> None:
    query = select(Project.id).where(Project.code == code)
    if exclude_id is not None:
        query = query.where(Project.id != exclude_id)
    if await db.scalar(query):
        raise HTTPException(status_code=409, detail=f"Project code '{code}' already exists")


@router.get("/", response_model=list[ProjectRead])
async def list_projects(active_only: bool = False, db: AsyncSession = Depends(get_db)):
    """Zoznam projektov / List projects."""
    query = select(Project).order_by(Project.code)
    if active_only:
        query = query.where(Project.is_active.is_(True))
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(project_id: int, db: AsyncSession = Depends(get_db)):
    project = await db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.post("/", response_model=ProjectRead, status_code=201)
async def create_project(data: ProjectCreate, db: AsyncSession = Depends(get_db)):
    """Vytvoriť projekt / Create project."""
    await _check_code_unique(db, data.code)
    project = Project(**data.model_dump())
    db.add(project)
    await db.flush()
    await db.refresh(project)
    return project


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(project_id: int, data: ProjectUpdate, db: AsyncSession = Depends(get_db)):
    project = await db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    updates = data.model_dump(exclude_unset=True)
    if updates.get("code"):
        await _check_code_unique(db, updates["code"], exclude_id=project_id)
    for key, value in updates.items():
        setattr(project, key, value)
    await db.flush()
    await db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=204)
async def delete_project(project_id: int, db: AsyncSession = Depends(get_db)):
    """
    Zmazať projekt / Delete project.
    Nevyúčtované cesty ostanú bez projektu; vyúčtované cesty sú uzamknuté, takže ich projekt zmazať nemožno.
    Unsettled trips lose the project; settled trips are locked, so their project cannot be deleted.
    """
    project = await db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    settled = await db.scalar(
        select(func.count(Trip.id)).where(Trip.project_id == project_id, Trip.is_settled.is_(True))
    )
    if settled:
        raise HTTPException(status_code=409, detail=f"Project is used by {settled} settled trip(s)")
    await db.execute(update(Trip).where(Trip.project_id == project_id).values(project_id=None))
    await db.delete(project)

"""Routy Zamestnanci / Employee API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.models.employee import Employee
from travel_costs.models.trip import Trip
from travel_costs.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate

router = APIRouter()


@router.get("/", response_model=list[EmployeeRead])
async def list_employees(active_only: bool = False, db: AsyncSession = Depends(get_db)):
    """Zoznam zamestnancov / List employees."""
    query = select(Employee).order_by(Employee.name)
    if active_only:
        query = query.where(Employee.is_active.is_(True))
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(employee_id: int, db: AsyncSession = Depends(get_db)):
    employee = await db.get(Employee, employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


@router.post("/", response_model=EmployeeRead, status_code=201)
async def create_employee(data: EmployeeCreate, db: AsyncSession = Depends(get_db)):
    """Vytvoriť zamestnanca / Create employee."""
    employee = Employee(**data.model_dump())
    db.add(employee)
    await db.flush()
    await db.refresh(employee)
    return employee


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(employee_id: int, data: EmployeeUpdate, db: AsyncSession = Depends(get_db)):
    employee = await db.get(Employee, employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(employee, key, value)
    await db.flush()
    await db.refresh(employee)
    return employee


@router.delete("/{employee_id}", status_code=204)
async def delete_employee(employee_id: int, db: AsyncSession = Depends(get_db)):
    employee = await db.get(Employee, employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    used = await db.scalar(select(func.count(Trip.id)).where(Trip.employee_id == employee_id))
    if used:
        raise HTTPException(status_code=409, detail=f"Employee is used by {used} trip(s), deactivate them instead")
    await db.delete(employee)

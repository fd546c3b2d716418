"""Routy API / API routes."""

from fastapi import APIRouter

from travel_costs.api import (
    vehicles,
    employees,
    projects,
    locations,
    fuel_prices,
    allowance_settings,
    trips,
    settlements,
    dashboard,
    exports,
    audit,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(locations.router, prefix="/locations", tags=["locations"])
api_router.include_router(fuel_prices.router, prefix="/fuel-prices", tags=["fuel-prices"])
api_router.include_router(allowance_settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(trips.router, prefix="/trips", tags=["trips"])
api_router.include_router(settlements.router, prefix="/settlements", tags=["settlements"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(exports.router, prefix="/exports", tags=["exports"])
api_router.include_router(audit.router, prefix="/audit", tags=["audit"])

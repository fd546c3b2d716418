"""
Modely SQLAlchemy / SQLAlchemy models.
Importovať všetky modely tu, aby ich metadáta poznali.
Import all models here so the metadata knows them.
"""

from travel_costs.models.vehicle import Vehicle, FuelType, OwnershipType
from travel_costs.models.employee import Employee
from travel_costs.models.project import Project
from travel_costs.models.saved_location import SavedLocation
from travel_costs.models.trip import Trip
from travel_costs.models.trip_waypoint import TripWaypoint
from travel_costs.models.trip_expense import TripExpense, ExpenseType
from travel_costs.models.settlement import Settlement, SettlementStatus, SettlementTrip
from travel_costs.models.allowance_settings import AllowanceSettings
from travel_costs.models.fuel_price import FuelPrice
from travel_costs.models.audit import AuditLog

__all__ = [
    "Vehicle",
    "FuelType",
    "OwnershipType",
    "Employee",
    "Project",
    "SavedLocation",
    "Trip",
    "TripWaypoint",
    "TripExpense",
    "ExpenseType",
    "Settlement",
    "SettlementStatus",
    "SettlementTrip",
    "AllowanceSettings",
    "FuelPrice",
    "AuditLog",
]

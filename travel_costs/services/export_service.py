"""
Služba exportu CSV/Excel / CSV/Excel export service.
Generuje súbory CSV a XLSX zo zoznamov slovníkov (vyúčtovania, cesty).
Builds CSV and XLSX files from lists of dicts (settlements, trips).
"""

import csv
import io
import re
from typing import Any

from openpyxl import Workbook

from travel_costs.schemas.calculation import TripCalculation
from travel_costs.utils.coerce import get_field
from travel_costs.utils.dates import parse_timestamp
from travel_costs.utils.formatting import countries_string, format_route

# Znaky zakázané v názve hárka Excelu / Characters Excel rejects in sheet titles
INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")

# Stĺpce exportu vyúčtovania / Settlement export columns
SETTLEMENT_FIELDS = [
    "trip_id",
    "date_start",
    "date_end",
    "route",
    "countries",
    "purpose",
    "distance_km",
    "duration_hours",
    "meal_allowance",
    "fuel_cost",
    "amortization_cost",
    "other_expenses_cost",
    "total_cost",
]


class ExportService:
    """Export dát do CSV/XLSX / Data export to CSV/XLSX."""

    @staticmethod
    def trip_row(trip, calculation: TripCalculation) -> dict[str, Any]:
        """Riadok exportu pre cestu / Export row for a trip (sumy zaokrúhlené na centy)."""
        start = parse_timestamp(get_field(trip, "date_start"))
        end = parse_timestamp(get_field(trip, "date_end"))
        return {
            "trip_id": get_field(trip, "id"),
            "date_start": start.strftime("%d.%m.%Y %H:%M") if start else "",
            "date_end": end.strftime("%d.%m.%Y %H:%M") if end else "",
            "route": format_route(trip),
            "countries": countries_string(trip),
            "purpose": get_field(trip, "purpose"),
            "distance_km": float(get_field(trip, "distance_km") or 0),
            "duration_hours": round(calculation.duration_hours, 2),
            "meal_allowance": round(calculation.meal_allowance, 2),
            "fuel_cost": round(calculation.fuel_cost, 2),
            "amortization_cost": round(calculation.amortization_cost, 2),
            "other_expenses_cost": round(calculation.other_expenses_cost, 2),
            "total_cost": round(calculation.total_cost, 2),
        }

    @staticmethod
    def to_csv(rows: list[dict], fields: list[str]) -> bytes:
        """CSV UTF-8 BOM s oddeľovačom ';' / UTF-8 BOM CSV with ';' separator."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=fields, delimiter=";", extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({f: row.get(f, "") for f in fields})
        return ("﻿" + output.getvalue()).encode("utf-8")

    @staticmethod
    def to_xlsx(rows: list[dict], fields: list[str], sheet_name: str = "Data") -> bytes:
        """Súbor Excel / Excel file."""
        wb = Workbook()
        ws = wb.active
        ws.title = INVALID_SHEET_CHARS.sub("_", sheet_name)[:31].strip("'") or "Data"

        # Hlavičky / Headers
        for col_idx, name in enumerate(fields, 1):
            cell = ws.cell(row=1, column=col_idx, value=name)
            cell.font = cell.font.copy(bold=True)

        # Dáta / Data rows
        for row_idx, row in enumerate(rows, 2):
            for col_idx, name in enumerate(fields, 1):
                ws.cell(row=row_idx, column=col_idx, value=row.get(name))

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()

"""
Služba kontroly cesty / Trip validation service.
Kontroly pred uložením cesty; kalkulačka sama nič nekontroluje.
Checks run before a trip is saved; the cost calculator itself validates nothing.
"""

from travel_costs.exceptions import TripValidationError
from travel_costs.utils.coerce import get_field, to_float
from travel_costs.utils.dates import parse_timestamp


def _reading(value) -> float | None:
    """Stav tachometra alebo None / Odometer reading or None when not recorded."""
    if value is None or value == "":
        return None
    return to_float(value)


class TripValidationService:
    """Kontrola časovej a kilometrovej konzistencie / Temporal and odometer consistency checks."""

    @staticmethod
    def validate(candidate, other_trips=()) -> None:
        """
        Overiť cestu voči ostatným cestám vozidla / Validate a trip against the vehicle's other trips.
        Vyhodí TripValidationError pri prvom porušení / Raises TripValidationError on the first violation.
        """
        start = parse_timestamp(get_field(candidate, "date_start"))
        end = parse_timestamp(get_field(candidate, "date_end"))
        if start is None or end is None:
            raise TripValidationError("Dátum odchodu a príchodu sú povinné.")
        if start >= end:
            raise TripValidationError("Dátum príchodu musí byť neskôr ako dátum odchodu.")

        if to_float(get_field(candidate, "distance_km")) < 0:
            raise TripValidationError("Vzdialenosť nemôže byť záporná.")

        odo_start = _reading(get_field(candidate, "odometer_start"))
        odo_end = _reading(get_field(candidate, "odometer_end"))
        if odo_start is not None and odo_end is not None and odo_end < odo_start:
            raise TripValidationError("Konečný stav tachometra nemôže byť menší ako počiatočný.")

        trip_id = get_field(candidate, "id")
        vehicle_id = get_field(candidate, "vehicle_id")
        for existing in other_trips:
            if trip_id is not None and get_field(existing, "id") == trip_id:
                continue
            if get_field(existing, "vehicle_id") != vehicle_id:
                continue
            ex_start = parse_timestamp(get_field(existing, "date_start"))
            ex_end = parse_timestamp(get_field(existing, "date_end"))
            if ex_start is None or ex_end is None:
                continue

            # Časový prekryv / Time overlap
            if max(start, ex_start) < min(end, ex_end):
                raise TripValidationError(
                    f"Časová kolízia! V tomto čase už existuje iná cesta pre toto vozidlo "
                    f"({ex_start:%d.%m.%Y %H:%M})."
                )

            ex_odo_start = _reading(get_field(existing, "odometer_start"))
            ex_odo_end = _reading(get_field(existing, "odometer_end"))

            # Nová cesta je po existujúcej / New trip strictly after the existing one
            if start >= ex_end and odo_start is not None and ex_odo_end is not None and odo_start < ex_odo_end:
                raise TripValidationError(
                    f"Chyba tachometra: cesta začína po ceste z {ex_end:%d.%m.%Y %H:%M} "
                    f"(stav: {ex_odo_end:g} km), počiatočný stav {odo_start:g} km je nižší."
                )

            # Nová cesta je pred existujúcou / New trip strictly before the existing one
            if end <= ex_start and odo_end is not None and ex_odo_start is not None and odo_end > ex_odo_start:
                raise TripValidationError(
                    f"Chyba tachometra: cesta končí pred cestou z {ex_start:%d.%m.%Y %H:%M} "
                    f"(stav: {ex_odo_start:g} km), konečný stav {odo_end:g} km by sa prekrýval."
                )

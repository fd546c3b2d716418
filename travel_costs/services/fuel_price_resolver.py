"""
Služba výberu ceny paliva / Fuel price period resolution.
Vyberie záznam, ktorého obdobie platnosti obsahuje dátum cesty.
Selects the record whose validity period contains the trip date.
"""

from travel_costs.models.vehicle import FuelType
from travel_costs.utils.coerce import enum_value, get_field, to_float
from travel_costs.utils.dates import parse_timestamp

# Druh paliva -> stĺpec ceny / Fuel type -> price field
PRICE_FIELDS: dict[str, str] = {
    FuelType.DIESEL.value: "price_diesel",
    FuelType.BENZIN.value: "price_benzin",
    FuelType.LPG.value: "price_lpg",
    FuelType.ELECTRIC.value: "price_electric",
}


class FuelPriceResolver:
    """Výber obdobia cien palív / Fuel price period selection."""

    @staticmethod
    def resolve(trip_date, records):
        """
        Nájsť platný záznam / Find the applicable record.
        Lineárne prehľadávanie v poradí vstupu, vyhráva prvá zhoda
        (valid_from <= trip_date <= valid_to, presnosť na ms).
        Linear scan in input order, first match wins; None if nothing matches.
        """
        instant = parse_timestamp(trip_date)
        if instant is None:
            return None
        for record in records:
            valid_from = parse_timestamp(get_field(record, "valid_from"))
            valid_to = parse_timestamp(get_field(record, "valid_to"))
            if valid_from is None or valid_to is None:
                continue
            if valid_from <= instant <= valid_to:
                return record
        return None

    @staticmethod
    def price_for_type(record, fuel_type) -> float:
        """Cena pre druh paliva / Price for a fuel type (0.0 = neznáma / unknown)."""
        if record is None:
            return 0.0
        field = PRICE_FIELDS.get(enum_value(fuel_type))
        if field is None:
            return 0.0
        return to_float(get_field(record, field))

    @staticmethod
    def find_overlaps(records) -> list[tuple]:
        """
        Prekrývajúce sa obdobia / Overlapping periods.
        Vracia dvojice záznamov, ktorých intervaly sa prekrývajú (poradie vstupu).
        Returns pairs of records whose closed intervals intersect (input order).
        """
        periods = []
        for record in records:
            valid_from = parse_timestamp(get_field(record, "valid_from"))
            valid_to = parse_timestamp(get_field(record, "valid_to"))
            if valid_from is not None and valid_to is not None:
                periods.append((record, valid_from, valid_to))

        overlaps = []
        for i, (a, a_from, a_to) in enumerate(periods):
            for b, b_from, b_to in periods[i + 1:]:
                if a_from <= b_to and b_from <= a_to:
                    overlaps.append((a, b))
        return overlaps

"""Formátovanie trasy / Route formatting utilities."""

import re

from travel_costs.config import settings
from travel_costs.utils.coerce import get_field

ROUTE_SEPARATOR = " ➝ "

_DIGIT = re.compile(r"\d")


def extract_city(location: str | None) -> str:
    """
    Mesto z adresy / City from an address.
    "Mlynské Nivy 1, Bratislava" -> "Bratislava": prvá časť bez číslic, inak prvá časť.
    First comma-separated part without digits, else the first part.
    """
    if not location:
        return ""
    if "," not in location:
        return location
    segments = [s.strip() for s in location.split(",")]
    return next((s for s in segments if not _DIGIT.search(s)), segments[0])


def format_route(trip) -> str:
    """Trasa cez zastávky / Route through waypoints."""
    parts = [extract_city(get_field(trip, "origin"))]
    for wp in get_field(trip, "waypoints") or []:
        parts.append(extract_city(get_field(wp, "location")))
    parts.append(extract_city(get_field(trip, "destination")))
    return ROUTE_SEPARATOR.join(parts)


def countries_string(trip) -> str:
    """Navštívené krajiny v poradí trasy / Visited countries in route order."""
    countries = [get_field(trip, "origin_country") or settings.DEFAULT_COUNTRY]
    for wp in get_field(trip, "waypoints") or []:
        countries.append(get_field(wp, "country"))
    countries.append(get_field(trip, "destination_country") or settings.DEFAULT_COUNTRY)
    return ", ".join(dict.fromkeys(c for c in countries if c))

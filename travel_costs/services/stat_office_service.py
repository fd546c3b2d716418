"""
Import cien palív zo Štatistického úradu SR / Fuel price import from the Slovak statistical office.
Dataset sp0207ts: týždenné priemerné ceny palív vo formáte JSON-stat 2.0.
Dataset sp0207ts: weekly average fuel prices in JSON-stat 2.0 format.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.config import settings
from travel_costs.exceptions import StatOfficeError
from travel_costs.models.fuel_price import FuelPrice
from travel_costs.services.fuel_price_resolver import FuelPriceResolver
from travel_costs.utils.coerce import to_float
from travel_costs.utils.dates import to_iso

log = logging.getLogger(__name__)

# Záložné kódy ukazovateľov / Fallback indicator codes
FALLBACK_CODES = {
    "price_benzin": "FR02011",  # benzín 95
    "price_diesel": "FR02012",  # motorová nafta
    "price_lpg": "FR02016",     # LPG
}

# Zmena menšia ako tolerancia sa ignoruje / Changes below tolerance are ignored
PRICE_TOLERANCE = 0.001

IMPORT_NOTE = "API Import"


@dataclass
class WeeklyPrices:
    """Ceny za jeden týždeň / Prices for one week."""
    week_code: str
    valid_from: str
    valid_to: str
    prices: dict[str, float] = field(default_factory=dict)


class StatOfficeService:
    """Sťahovanie a spracovanie týždenných cien / Weekly price download and parsing."""

    @staticmethod
    def week_codes(today: date, weeks: int) -> list[str]:
        """ISO týždne YYYYWW za posledných N týždňov (najstarší prvý) / Last N ISO week codes, oldest first."""
        codes = []
        for i in range(1, weeks + 1):
            iso = (today - timedelta(days=7 * i)).isocalendar()
            codes.append(f"{iso[0]}{iso[1]:02d}")
        return list(reversed(codes))

    @staticmethod
    def week_range(week_code: str) -> tuple[str, str] | None:
        """
        Obdobie platnosti týždňa / Validity period of a week.
        Pondelok 00:00:00.000 až nedeľa 23:59:59.999 / Monday start to Sunday end.
        """
        try:
            year = int(week_code[:4])
            week = int(week_code[4:6])
            monday = date.fromisocalendar(year, week, 1)
        except ValueError:
            return None
        sunday = monday + timedelta(days=6)
        return (
            to_iso(datetime.combine(monday, time())),
            to_iso(datetime.combine(sunday, time(23, 59, 59, 999000))),
        )

    @staticmethod
    def _dimension_ids(payload: dict) -> tuple[str, str]:
        ids = payload["id"]
        time_dim = next((d for d in ids if "tyz" in d.lower()), ids[0])
        fuel_dim = next((d for d in ids if "ukaz" in d.lower()), ids[1])
        return time_dim, fuel_dim

    @staticmethod
    def _fuel_codes(labels: dict[str, str], indices: dict[str, int]) -> dict[str, str]:
        """Kód ukazovateľa -> stĺpec ceny / Indicator code -> price field."""
        detected: dict[str, str] = {}
        for code, label in labels.items():
            name = label.lower()
            if "95" in name and "benzín" in name:
                detected["price_benzin"] = code
            if "nafta" in name:
                detected["price_diesel"] = code
            if "lpg" in name or "skvapalnený" in name:
                detected["price_lpg"] = code

        mapping = {}
        for price_field, fallback in FALLBACK_CODES.items():
            code = detected.get(price_field, fallback)
            if code in indices:
                mapping[code] = price_field
        return mapping

    @classmethod
    def parse_dataset(cls, payload: dict) -> list[WeeklyPrices]:
        """
        Rozložiť JSON-stat dataset na týždenné ceny / Decode a JSON-stat dataset into weekly prices.
        Hodnoty sú uložené po riadkoch (row-major) cez všetky dimenzie; ostatné dimenzie berú index 0.
        Values are flattened row-major over all dimensions; other dimensions use index 0.
        """
        try:
            return cls._decode(payload)
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
            raise StatOfficeError(f"Malformed statistical office dataset: {exc!r}") from exc

    @classmethod
    def _decode(cls, payload: dict) -> list[WeeklyPrices]:
        values = payload.get("value")
        if not values:
            return []

        ids: list[str] = payload["id"]
        sizes: list[int] = payload["size"]
        dims = payload["dimension"]
        time_dim, fuel_dim = cls._dimension_ids(payload)

        fuel_category = dims[fuel_dim]["category"]
        fuel_indices: dict[str, int] = fuel_category["index"]
        time_indices: dict[str, int] = dims[time_dim]["category"]["index"]
        fuel_map = cls._fuel_codes(fuel_category.get("label", {}), fuel_indices)

        # Kroky indexu / Row-major strides
        strides = [1] * len(sizes)
        for i in range(len(sizes) - 2, -1, -1):
            strides[i] = strides[i + 1] * sizes[i + 1]
        time_pos = ids.index(time_dim)
        fuel_pos = ids.index(fuel_dim)

        result: list[WeeklyPrices] = []
        for week_code, t_idx in time_indices.items():
            period = cls.week_range(week_code)
            if period is None:
                log.warning("Skipping unparseable week code %s", week_code)
                continue
            entry = WeeklyPrices(week_code=week_code, valid_from=period[0], valid_to=period[1])
            for code, price_field in fuel_map.items():
                flat = t_idx * strides[time_pos] + fuel_indices[code] * strides[fuel_pos]
                if isinstance(values, dict):
                    value = values.get(str(flat))
                else:
                    value = values[flat] if flat < len(values) else None
                if value is not None:
                    entry.prices[price_field] = to_float(value)
            if entry.prices:
                result.append(entry)
        return result

    @staticmethod
    async def fetch_dataset(week_codes: list[str]) -> dict:
        """Stiahnuť dataset pre dané týždne / Download the dataset for the given weeks."""
        url = f"{settings.STAT_OFFICE_DATASET_URL}/{','.join(week_codes)}/all"
        log.info("Fetching fuel prices: %s", url)
        try:
            async with httpx.AsyncClient(timeout=settings.STAT_OFFICE_TIMEOUT_SECONDS) as client:
                resp = await client.get(url, params={"lang": "sk"}, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise StatOfficeError(f"Statistical office request failed: {exc}") from exc
        if resp.status_code != 200:
            raise StatOfficeError(f"Statistical office API error: {resp.status_code}")
        try:
            return resp.json()
        except ValueError as exc:
            raise StatOfficeError("Statistical office returned invalid JSON") from exc

    @staticmethod
    async def upsert(db: AsyncSession, entries: list[WeeklyPrices]) -> dict[str, int]:
        """
        Uložiť týždenné ceny / Store weekly prices.
        Existujúci záznam sa hľadá podľa dňa valid_from; mení sa iba pri rozdiele > 0.001.
        Existing records are matched by the valid_from day and only updated beyond the tolerance.
        """
        stats = {"created": 0, "updated": 0}
        for entry in entries:
            if not entry.prices:
                continue
            existing = await db.scalar(
                select(FuelPrice)
                .where(FuelPrice.valid_from.startswith(entry.valid_from[:10]))
                .order_by(FuelPrice.id)
                .limit(1)
            )
            if existing:
                changed = False
                for price_field, value in entry.prices.items():
                    if abs(to_float(getattr(existing, price_field)) - value) > PRICE_TOLERANCE:
                        setattr(existing, price_field, value)
                        changed = True
                if changed:
                    stats["updated"] += 1
            else:
                db.add(FuelPrice(
                    valid_from=entry.valid_from,
                    valid_to=entry.valid_to,
                    note=IMPORT_NOTE,
                    **entry.prices,
                ))
                stats["created"] += 1
        await db.flush()
        return stats

    @classmethod
    async def import_weeks(cls, db: AsyncSession, weeks: int, today: date | None = None) -> tuple[dict[str, int], list[str]]:
        """Celý import: stiahnuť, rozložiť, uložiť / Full import: fetch, decode, store."""
        codes = cls.week_codes(today or date.today(), weeks)
        payload = await cls.fetch_dataset(codes)
        entries = cls.parse_dataset(payload)
        stats = await cls.upsert(db, entries)
        log.info("Fuel price import done: created=%d updated=%d", stats["created"], stats["updated"])

        records = (await db.execute(select(FuelPrice).order_by(FuelPrice.id))).scalars().all()
        for a, b in FuelPriceResolver.find_overlaps(records):
            log.warning("Overlapping fuel price periods: %s and %s", a, b)
        return stats, codes

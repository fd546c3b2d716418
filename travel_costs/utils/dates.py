"""Utility pre dátumy a časy / Date and time utilities."""

from datetime import date, datetime, time, timezone


def parse_timestamp(value) -> datetime | None:
    """Prečítať časovú pečiatku / Parse a timestamp.

    Akceptuje datetime, date alebo ISO 8601 reťazec (aj s "Z" a s medzerou
    namiesto "T"). Výsledok je naivný UTC s presnosťou na milisekundy.
    Accepts datetime, date or an ISO 8601 string (with "Z" or a space
    separator). Returns naive UTC truncated to milliseconds, None if unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed.replace(microsecond=(parsed.microsecond // 1000) * 1000)


def to_iso(value: datetime) -> str:
    """Formát pre uloženie / Storage format (milliseconds)."""
    return value.isoformat(timespec="milliseconds")


def now_iso() -> str:
    """Aktuálny čas UTC / Current UTC time, ISO 8601."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")

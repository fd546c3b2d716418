"""Doménové výnimky / Domain exceptions.

Routy ich prekladajú na HTTPException / Routes translate them into HTTPException.
"""


class TripValidationError(ValueError):
    """Cesta porušuje podmienky pred výpočtom / Trip data violates pre-calculation rules."""


class SettlementError(Exception):
    """Základ chýb vyúčtovania / Base class for settlement errors."""


class SettlementConflictError(SettlementError):
    """Cesta je už vyúčtovaná alebo neexistuje / Trip already settled or unknown."""


class SettlementTransitionError(SettlementError):
    """Prechod zlyhal a bol úplne vrátený / Transition failed and was fully rolled back."""

    def __init__(self, message: str, failed_trip_id: int | None = None):
        super().__init__(message)
        self.failed_trip_id = failed_trip_id


class SettlementPartialFailure(SettlementError):
    """Prechod zlyhal a kompenzácia neprebehla úplne / Transition failed and compensation was incomplete.

    Dáta sú nekonzistentné, treba ručné zosúladenie.
    Data is inconsistent and needs manual reconciliation.
    """

    def __init__(
        self,
        message: str,
        applied_trip_ids: list[int],
        failed_trip_id: int | None,
        unreconciled_trip_ids: list[int],
    ):
        super().__init__(message)
        self.applied_trip_ids = applied_trip_ids
        self.failed_trip_id = failed_trip_id
        self.unreconciled_trip_ids = unreconciled_trip_ids


class StatOfficeError(Exception):
    """Chyba pri sťahovaní dát zo Štatistického úradu / Statistical office download error."""

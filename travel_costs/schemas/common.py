"""Spoločné validátory schém / Shared schema validators."""


def reject_null(v):
    """Explicitné null pre povinný stĺpec / Explicit null on a required column -> 422."""
    if v is None:
        raise ValueError("Field cannot be null")
    return v

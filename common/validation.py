"""Transport-independent validation primitives.

Validators are plain functions returning a list of ``FieldError``; an empty
list means the input is valid. Serializers bridge them into DRF with
``raise_for_errors``.
"""

from dataclasses import dataclass

from rest_framework import serializers


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def require_int(field: str, value, *, minimum: int | None = None, maximum: int | None = None) -> list[FieldError]:
    """Check that ``value`` is an integer within the optional bounds."""
    if isinstance(value, bool) or not isinstance(value, int):
        return [FieldError(field, "A valid integer is required.")]
    if minimum is not None and value < minimum:
        return [FieldError(field, f"Ensure this value is greater than or equal to {minimum}.")]
    if maximum is not None and value > maximum:
        return [FieldError(field, f"Ensure this value is less than or equal to {maximum}.")]
    return []


def as_dict(errors: list[FieldError]) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for error in errors:
        out.setdefault(error.field, []).append(error.message)
    return out


def raise_for_errors(errors: list[FieldError]) -> None:
    """Raise a DRF ``ValidationError`` keyed by field when ``errors`` is non-empty."""
    if errors:
        raise serializers.ValidationError(as_dict(errors))

"""Input validation for cart requests.

Each function returns a list of ``FieldError``; serializers raise them
through ``common.validation.raise_for_errors``.
"""

from common.validation import FieldError, require_int


def validate_add_item(data) -> list[FieldError]:
    """Both ``product_id`` and ``quantity`` must be positive integers."""
    return [
        *require_int("product_id", data.get("product_id"), minimum=1),
        *require_int("quantity", data.get("quantity"), minimum=1),
    ]


def validate_quantity_update(data) -> list[FieldError]:
    """``quantity`` must be a non-negative integer; 0 removes the line."""
    return require_int("quantity", data.get("quantity"), minimum=0)

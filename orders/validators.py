"""Validation for order history query parameters."""

from common.validation import FieldError, require_int

MAX_PAGE_SIZE = 100
MAX_SEARCH_LENGTH = 100


def _as_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


def validate_history_query(params) -> list[FieldError]:
    """Check ``page``, ``page_size`` and ``search`` when present."""
    errors: list[FieldError] = []
    if params.get("page") not in (None, ""):
        errors += require_int("page", _as_int(params.get("page")), minimum=1)
    if params.get("page_size") not in (None, ""):
        errors += require_int("page_size", _as_int(params.get("page_size")), minimum=1, maximum=MAX_PAGE_SIZE)
    search = params.get("search") or ""
    if len(search) > MAX_SEARCH_LENGTH:
        errors.append(FieldError("search", f"Ensure this field has no more than {MAX_SEARCH_LENGTH} characters."))
    return errors

import uuid

import pytest
from common.exception_handler import TRACE_HEADER, api_exception_handler
from common.exceptions import ConsistencyViolation, InvalidInput, InvalidState, NotFound
from rest_framework.exceptions import ValidationError


@pytest.mark.parametrize(
    "exc,status_code",
    [
        (NotFound("Cart does not exist for this buyer."), 404),
        (InvalidInput("Not enough stock for this product. Available stock: 2"), 400),
        (InvalidState("The cart is empty."), 400),
    ],
)
def test_domain_errors_map_to_status_with_message(exc, status_code):
    response = api_exception_handler(exc, {})
    assert response.status_code == status_code
    assert response.data == {"detail": exc.message}


@pytest.mark.parametrize("exc", [ConsistencyViolation("Cart totals are inconsistent."), RuntimeError("boom")])
def test_unexpected_errors_are_500_with_trace_id(exc, caplog):
    response = api_exception_handler(exc, {"view": None})
    assert response.status_code == 500
    trace_id = response.data["trace_id"]
    uuid.UUID(trace_id)
    assert response[TRACE_HEADER] == trace_id
    assert "boom" not in response.data["detail"]
    assert any(getattr(r, "trace_id", None) == trace_id for r in caplog.records)


def test_drf_errors_keep_default_handling():
    response = api_exception_handler(ValidationError({"quantity": ["bad"]}), {})
    assert response.status_code == 400
    assert response.data == {"quantity": ["bad"]}

import pytest
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_health_reports_ok():
    r = APIClient().get("/health/")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.django_db
def test_schema_lists_cart_and_order_routes():
    r = APIClient().get("/api/schema/?format=json")
    assert r.status_code == 200
    paths = r.json()["paths"]
    for route in (
        "/api/v1/cart/",
        "/api/v1/cart/items/",
        "/api/v1/cart/items/{product_id}/",
        "/api/v1/cart/checkout/",
        "/api/v1/cart/associate/",
        "/api/v1/orders/",
        "/api/v1/orders/{code}/",
    ):
        assert route in paths

import pytest
from cart.models import Cart
from catalog.tests.factories import ProductFactory, ProductImageFactory
from rest_framework.test import APIClient
from users.tests.factories import UserFactory

COOKIE = "BuyerId"


def buyer_client(buyer_id="buyer-abc"):
    client = APIClient()
    client.cookies[COOKIE] = buyer_id
    return client


@pytest.mark.django_db
def test_first_visit_issues_buyer_cookie():
    client = APIClient()
    r = client.get("/api/v1/cart/")
    assert r.status_code == 200
    cookie = r.cookies[COOKIE]
    assert cookie.value
    assert cookie["httponly"]
    assert cookie["samesite"] == "Lax"
    assert cookie["path"] == "/"
    assert r.json()["buyer_id"] == cookie.value

    # the client keeps the cookie, so no new one is issued
    r2 = client.get("/api/v1/cart/")
    assert COOKIE not in r2.cookies
    assert r2.json()["buyer_id"] == cookie.value


@pytest.mark.django_db
def test_anonymous_detail_without_cart_is_empty_and_creates_nothing():
    r = buyer_client().get("/api/v1/cart/")
    assert r.status_code == 200
    body = r.json()
    assert body["items"] == []
    assert body["sub_total_price"] == "$0"
    assert body["total_price"] == "$0"
    assert body["unique_item_count"] == 0
    assert body["total_saved"] == 0
    assert not Cart.objects.exists()


@pytest.mark.django_db
def test_cart_flow_add_update_delete_clear():
    product = ProductFactory(title="Denim jacket", price=1000, discount=15, stock=5)
    ProductImageFactory(product=product, url="https://img.example.com/first.png")
    ProductImageFactory(product=product, url="https://img.example.com/second.png")
    other = ProductFactory(price=250, stock=5)
    client = buyer_client()

    r_add = client.post("/api/v1/cart/items/", {"product_id": product.id, "quantity": 3}, format="json")
    assert r_add.status_code == 200
    body = r_add.json()
    assert body["buyer_id"] == "buyer-abc"
    assert body["user_id"] is None
    assert body["sub_total_price"] == "$3,000"
    assert body["total_price"] == "$2,550"
    assert body["total_saved"] == 450
    line = body["items"][0]
    assert line["product_id"] == product.id
    assert line["title"] == "Denim jacket"
    assert line["image_url"] == "https://img.example.com/first.png"
    assert line["price"] == 1000
    assert line["discount"] == 15
    assert line["sub_total_price"] == "$3,000"
    assert line["total_price"] == "$2,550"

    client.post("/api/v1/cart/items/", {"product_id": other.id, "quantity": 1}, format="json")
    r_upd = client.patch(f"/api/v1/cart/items/{product.id}/", {"quantity": 1}, format="json")
    assert r_upd.status_code == 200
    assert r_upd.json()["unique_item_count"] == 2
    assert r_upd.json()["sub_total_price"] == "$1,250"

    r_del = client.delete(f"/api/v1/cart/items/{other.id}/")
    assert r_del.status_code == 200
    assert [i["product_id"] for i in r_del.json()["items"]] == [product.id]

    r_clear = client.post("/api/v1/cart/clear/")
    assert r_clear.status_code == 200
    assert r_clear.json()["items"] == []
    assert r_clear.json()["total_price"] == "$0"


@pytest.mark.django_db
def test_line_without_images_uses_default_image(settings):
    settings.SHOP = {**settings.SHOP, "DEFAULT_IMAGE_URL": "https://img.example.com/placeholder.png"}
    product = ProductFactory(stock=5)
    r = buyer_client().post("/api/v1/cart/items/", {"product_id": product.id, "quantity": 1}, format="json")
    assert r.json()["items"][0]["image_url"] == "https://img.example.com/placeholder.png"


@pytest.mark.django_db
def test_insufficient_stock_is_400_with_message():
    product = ProductFactory(stock=2)
    r = buyer_client().post("/api/v1/cart/items/", {"product_id": product.id, "quantity": 3}, format="json")
    assert r.status_code == 400
    assert r.json()["detail"] == "Not enough stock for this product. Available stock: 2"


@pytest.mark.django_db
def test_unknown_product_is_404():
    r = buyer_client().post("/api/v1/cart/items/", {"product_id": 424242, "quantity": 1}, format="json")
    assert r.status_code == 404
    assert r.json()["detail"] == "Product does not exist."


@pytest.mark.django_db
@pytest.mark.parametrize(
    "payload,field",
    [
        ({"product_id": 1, "quantity": 0}, "quantity"),
        ({"product_id": 0, "quantity": 1}, "product_id"),
        ({"product_id": 1, "quantity": "many"}, "quantity"),
        ({"quantity": 1}, "product_id"),
    ],
)
def test_add_item_payload_validation(payload, field):
    r = buyer_client().post("/api/v1/cart/items/", payload, format="json")
    assert r.status_code == 400
    assert field in r.json()


@pytest.mark.django_db
def test_update_negative_quantity_is_400():
    r = buyer_client().patch("/api/v1/cart/items/1/", {"quantity": -1}, format="json")
    assert r.status_code == 400
    assert "quantity" in r.json()


@pytest.mark.django_db
def test_mutating_missing_cart_is_404():
    product = ProductFactory()
    client = buyer_client("fresh-buyer")
    assert client.delete(f"/api/v1/cart/items/{product.id}/").status_code == 404
    assert client.post("/api/v1/cart/clear/").status_code == 404


@pytest.mark.django_db
def test_checkout_and_associate_require_authentication():
    client = buyer_client()
    assert client.post("/api/v1/cart/checkout/").status_code == 401
    assert client.post("/api/v1/cart/associate/").status_code == 401


@pytest.mark.django_db
def test_checkout_reports_adjusted_cart():
    user = UserFactory()
    product = ProductFactory(price=100, stock=10)
    client = buyer_client()
    client.force_authenticate(user=user)
    client.post("/api/v1/cart/items/", {"product_id": product.id, "quantity": 5}, format="json")
    product.stock = 2
    product.save(update_fields=["stock"])

    r = client.post("/api/v1/cart/checkout/")
    assert r.status_code == 200
    assert r.json()["items"][0]["quantity"] == 2
    assert r.json()["sub_total_price"] == "$200"


@pytest.mark.django_db
def test_checkout_empty_cart_is_400():
    user = UserFactory()
    client = buyer_client()
    client.force_authenticate(user=user)
    client.get("/api/v1/cart/")
    r = client.post("/api/v1/cart/checkout/")
    assert r.status_code == 400
    assert r.json()["detail"] == "The cart is empty."


@pytest.mark.django_db
def test_associate_after_sign_in_moves_anonymous_cart():
    user = UserFactory()
    product = ProductFactory(price=300, stock=5)
    client = buyer_client("laptop")
    client.post("/api/v1/cart/items/", {"product_id": product.id, "quantity": 2}, format="json")

    client.force_authenticate(user=user)
    r = client.post("/api/v1/cart/associate/")
    assert r.status_code == 204

    body = client.get("/api/v1/cart/").json()
    assert body["user_id"] == user.id
    assert body["sub_total_price"] == "$600"
    assert Cart.objects.get().user_id == user.id

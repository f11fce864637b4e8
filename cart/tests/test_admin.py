import pytest
from cart.admin import CartAdmin
from cart.models import Cart
from cart.tests.factories import CartFactory
from django.contrib import admin
from users.tests.factories import UserFactory


@pytest.mark.django_db
def test_anonymous_column_follows_ownership():
    anonymous = CartFactory(buyer_id="b1")
    owned = CartFactory(buyer_id="b2", user=UserFactory())
    cart_admin = CartAdmin(Cart, admin.site)

    assert anonymous.is_anonymous
    assert not owned.is_anonymous
    assert cart_admin.anonymous(anonymous) is True
    assert cart_admin.anonymous(owned) is False


@pytest.mark.django_db
def test_changelist_filters_by_owner_type(admin_client):
    CartFactory(buyer_id="anon-buyer")
    CartFactory(buyer_id="user-buyer", user=UserFactory())

    r = admin_client.get("/admin/cart/cart/")
    assert r.status_code == 200

    anonymous_only = admin_client.get("/admin/cart/cart/", {"owner_type": "anonymous"})
    assert anonymous_only.status_code == 200
    assert "anon-buyer" in anonymous_only.content.decode()
    assert "user-buyer" not in anonymous_only.content.decode()

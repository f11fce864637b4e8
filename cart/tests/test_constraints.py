import pytest
from cart.tests.factories import CartFactory, CartItemFactory
from catalog.tests.factories import ProductFactory
from django.db import IntegrityError, transaction
from users.tests.factories import UserFactory


@pytest.mark.django_db
def test_one_anonymous_cart_per_buyer():
    CartFactory(buyer_id="b1")
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            CartFactory(buyer_id="b1")


@pytest.mark.django_db
def test_one_cart_per_user():
    user = UserFactory()
    CartFactory(buyer_id="b1", user=user)
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            CartFactory(buyer_id="b2", user=user)


@pytest.mark.django_db
def test_claimed_cart_frees_the_buyer_id():
    CartFactory(buyer_id="b1", user=UserFactory())
    assert CartFactory(buyer_id="b1").user is None


@pytest.mark.django_db
def test_one_line_per_product_and_positive_quantity():
    item = CartItemFactory(quantity=1)
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            CartItemFactory(cart=item.cart, product=item.product)
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            CartItemFactory(cart=item.cart, product=ProductFactory(), quantity=0)

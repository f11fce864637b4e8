import pytest
from cart.models import Cart, CartItem
from cart.services import add_item, associate_with_user
from cart.tests.factories import CartFactory, CartItemFactory
from catalog.tests.factories import ProductFactory
from users.tests.factories import UserFactory


@pytest.mark.django_db
def test_associate_without_anonymous_cart_is_a_noop():
    user = UserFactory()
    associate_with_user(buyer_id="nobody", user_id=user.id)
    associate_with_user(buyer_id="nobody", user_id=user.id)
    assert not Cart.objects.exists()


@pytest.mark.django_db
def test_associate_claims_anonymous_cart_when_user_has_none():
    user = UserFactory()
    product = ProductFactory(price=100)
    anonymous = add_item(buyer_id="b1", product_id=product.id, quantity=2)

    associate_with_user(buyer_id="b1", user_id=user.id)

    cart = Cart.objects.get()
    assert cart.id == anonymous.id
    assert cart.user_id == user.id
    assert cart.sub_total == 200


@pytest.mark.django_db
def test_associate_merges_lines_into_existing_user_cart():
    user = UserFactory()
    shared = ProductFactory(price=100, stock=50)
    only_anon = ProductFactory(price=30, stock=50)
    only_user = ProductFactory(price=10, stock=50)

    user_cart = CartFactory(buyer_id="phone", user=user)
    CartItemFactory(cart=user_cart, product=shared, quantity=1)
    CartItemFactory(cart=user_cart, product=only_user, quantity=4)

    anon_cart = CartFactory(buyer_id="laptop")
    CartItemFactory(cart=anon_cart, product=shared, quantity=2)
    CartItemFactory(cart=anon_cart, product=only_anon, quantity=1)

    associate_with_user(buyer_id="laptop", user_id=user.id)

    assert not Cart.objects.filter(id=anon_cart.id).exists()
    quantities = dict(CartItem.objects.filter(cart=user_cart).values_list("product_id", "quantity"))
    assert quantities == {shared.id: 3, only_user.id: 4, only_anon.id: 1}

    user_cart.refresh_from_db()
    assert user_cart.sub_total == 300 + 40 + 30
    assert user_cart.unique_item_count == 3


@pytest.mark.django_db
def test_associate_twice_is_idempotent():
    user = UserFactory()
    product = ProductFactory(price=100)
    add_item(buyer_id="b1", product_id=product.id, quantity=1)

    associate_with_user(buyer_id="b1", user_id=user.id)
    associate_with_user(buyer_id="b1", user_id=user.id)

    cart = Cart.objects.get()
    assert cart.user_id == user.id
    assert cart.items.get().quantity == 1

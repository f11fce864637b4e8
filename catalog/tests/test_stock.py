import pytest
from catalog.models import Product
from catalog.selectors import get_product, get_real_stock
from catalog.services import decrement_stock
from catalog.tests.factories import ProductFactory, ProductImageFactory
from common.exceptions import NotFound
from django.db import IntegrityError, transaction


@pytest.mark.django_db
def test_real_stock_reads_the_database():
    product = ProductFactory(stock=4)
    Product.objects.filter(id=product.id).update(stock=1)
    assert get_real_stock(product_id=product.id) == 1
    assert get_real_stock(product_id=987654) == 0


@pytest.mark.django_db
def test_decrement_stock():
    product = ProductFactory(stock=4)
    decrement_stock(product_id=product.id, quantity=3)
    product.refresh_from_db()
    assert product.stock == 1


@pytest.mark.django_db
def test_decrement_below_zero_violates_constraint():
    product = ProductFactory(stock=1)
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            decrement_stock(product_id=product.id, quantity=2)
    product.refresh_from_db()
    assert product.stock == 1


@pytest.mark.django_db
def test_decrement_unknown_product():
    with pytest.raises(NotFound):
        decrement_stock(product_id=987654, quantity=1)


@pytest.mark.django_db
def test_get_product_hides_deleted_and_orders_images():
    product = ProductFactory()
    first = ProductImageFactory(product=product)
    ProductImageFactory(product=product)
    assert get_product(product_id=product.id).main_image_url == first.url

    product.is_deleted = True
    product.save()
    with pytest.raises(NotFound):
        get_product(product_id=product.id)


@pytest.mark.django_db
def test_get_product_hides_unavailable():
    product = ProductFactory(is_available=False)
    with pytest.raises(NotFound):
        get_product(product_id=product.id)

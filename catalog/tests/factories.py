import factory
from catalog.models import Product, ProductImage
from factory import Faker
from factory.django import DjangoModelFactory


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    title = Faker("sentence", nb_words=3)
    description = Faker("paragraph")
    price = 1000
    discount = 0
    stock = 10
    condition = Product.CONDITION_NEW
    is_available = True


class ProductImageFactory(DjangoModelFactory):
    class Meta:
        model = ProductImage

    product = factory.SubFactory(ProductFactory)
    url = Faker("image_url")

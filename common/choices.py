"""Shared enumerations and choices used across apps."""

from django.db import models


class ProductCondition(models.TextChoices):
    """Condition a product is sold in."""

    NEW = "new", "New"
    USED = "used", "Used"

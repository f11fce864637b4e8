"""Pagination for the order history."""

from common.conf import get_shop_config
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from .validators import MAX_PAGE_SIZE


class OrderHistoryPagination(PageNumberPagination):
    """Page-number pagination sized from the shop config.

    Adds ``total_pages``, ``current_page`` and ``page_size`` to DRF's
    ``count``/``next``/``previous``/``results`` envelope.
    """

    page_size_query_param = "page_size"
    max_page_size = MAX_PAGE_SIZE

    def __init__(self):
        self.page_size = get_shop_config().order_page_size

    def get_paginated_response(self, data):
        return Response(
            {
                "count": self.page.paginator.count,
                "total_pages": self.page.paginator.num_pages,
                "current_page": self.page.number,
                "page_size": self.page.paginator.per_page,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            }
        )

    def get_paginated_response_schema(self, schema):
        response = super().get_paginated_response_schema(schema)
        response["properties"].update(
            {
                "total_pages": {"type": "integer", "example": 3},
                "current_page": {"type": "integer", "example": 1},
                "page_size": {"type": "integer", "example": 10},
            }
        )
        return response

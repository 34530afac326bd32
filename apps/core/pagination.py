import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    """Page/limit pagination returning ``{data, pagination}``."""
    page_size = 20
    page_size_query_param = 'limit'
    max_page_size = 100

    def get_paginated_response(self, data):
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return Response({
            'data': data,
            'pagination': {
                'page': self.page.number,
                'limit': limit,
                'total': total,
                'totalPages': math.ceil(total / limit) if limit else 0,
            },
        })

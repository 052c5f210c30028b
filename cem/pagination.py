from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    """
    Page based pagination driven by ``page`` and ``limit`` query params.
    Responds with the list envelope used across the dashboard.
    """
    page_size = 20
    page_size_query_param = 'limit'
    max_page_size = 500

    def get_paginated_response(self, data):
        return Response({
            'success': True,
            'data': data,
            'pagination': {
                'page': self.page.number,
                'limit': self.get_page_size(self.request),
                'total': self.page.paginator.count,
                'totalPages': self.page.paginator.num_pages,
            },
        })


class LimitOffsetEnvelopePagination:
    """
    Slices a queryset with ``limit``/``offset`` query params the way the
    contacts and companies listings expect. Without ``limit`` everything is returned.
    """

    def paginate(self, queryset, request):
        offset = _to_int(request.query_params.get('offset'), 0)
        limit = _to_int(request.query_params.get('limit'), None)
        if offset < 0:
            offset = 0
        if limit is None or limit <= 0:
            return queryset[offset:]
        return queryset[offset:offset + limit]


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

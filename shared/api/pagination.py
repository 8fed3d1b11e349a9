"""Page-number pagination with the `page`/`limit` query parameters used by the frontend."""

from __future__ import annotations

from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.response import Response  # type: ignore


class PagePagination(PageNumberPagination):
    page_query_param = "page"
    page_size_query_param = "limit"
    page_size = 12
    max_page_size = 50

    def get_paginated_response(self, data):  # type: ignore
        page = self.page
        total_pages = page.paginator.num_pages
        return Response(
            {
                "results": data,
                "pagination": {
                    "current_page": page.number,
                    "total_pages": total_pages,
                    "total_count": page.paginator.count,
                    "limit": page.paginator.per_page,
                    "has_next_page": page.has_next(),
                    "has_prev_page": page.has_previous(),
                },
            }
        )


class ReviewPagination(PagePagination):
    page_size = 10

from __future__ import annotations

import math

from django.core.paginator import EmptyPage, InvalidPage, Page
from rest_framework.exceptions import NotFound
from rest_framework.pagination import PageNumberPagination

from .responses import envelope


class EnvelopePagination(PageNumberPagination):
    """Page/limit pagination that reports totals alongside the page of results.

    A page past the end is an empty page, not a 404, so clients can still read the totals.
    """

    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100

    def get_page_size(self, request):
        size = super().get_page_size(request)
        return size or self.page_size

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        paginator = self.django_paginator_class(queryset, self.get_page_size(request))
        page_number = self.get_page_number(request, paginator)
        try:
            self.page = paginator.page(page_number)
        except EmptyPage as exc:
            number = int(page_number)
            if number < 1:
                raise NotFound(f"Invalid page: {exc}")
            self.page = Page([], number, paginator)
        except InvalidPage as exc:
            raise NotFound(f"Invalid page: {exc}")
        return list(self.page)

    def pagination_meta(self) -> dict:
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return {
            "total": total,
            "page": self.page.number,
            "limit": limit,
            "total_pages": math.ceil(total / limit) if limit else 0,
        }

    def get_paginated_response(self, data, *, message: str = "", **extra):
        return envelope(data, message=message, pagination=self.pagination_meta(), **extra)


class NotificationPagination(EnvelopePagination):
    page_size = 20


class ListingPagination(EnvelopePagination):
    page_size = 20

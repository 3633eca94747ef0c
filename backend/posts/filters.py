"""FilterSet definitions and query helpers for listing and searching posts."""

from __future__ import annotations

import json

import django_filters
from django.db.models import Q, TextField
from django.db.models.functions import Cast

from .models import Post


def split_csv(value: str) -> list[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def json_list_contains_any(queryset, field: str, values: list[str]):
    """Keep rows whose JSON list `field` holds at least one of `values`."""
    if not values:
        return queryset
    alias = f"{field}_text"
    queryset = queryset.annotate(**{alias: Cast(field, output_field=TextField())})
    condition = Q()
    for value in values:
        condition |= Q(**{f"{alias}__icontains": json.dumps(value)})
    return queryset.filter(condition)


def location_q(location: str) -> Q:
    return (
        Q(city__icontains=location)
        | Q(state__icontains=location)
        | Q(country__icontains=location)
    )


class ItineraryFilterSet(django_filters.FilterSet):
    """Filters accepted by the public itinerary listing."""

    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    state = django_filters.CharFilter(field_name="state", lookup_expr="icontains")
    country = django_filters.CharFilter(field_name="country", lookup_expr="icontains")
    difficulty = django_filters.CharFilter(field_name="difficulty", lookup_expr="iexact")
    min_price = django_filters.NumberFilter(field_name="price_per_person", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price_per_person", lookup_expr="lte")

    # CSV, any listed value matches
    tags = django_filters.CharFilter(method="filter_json_list")
    categories = django_filters.CharFilter(method="filter_json_list")

    class Meta:
        model = Post
        fields = ["city", "state", "country", "difficulty"]

    def filter_json_list(self, queryset, name, value):
        return json_list_contains_any(queryset, name, split_csv(value))

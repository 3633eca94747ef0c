from __future__ import annotations

from django.db.models import Q

from .filters import json_list_contains_any, location_q
from .models import Post

SEARCH_TYPES = {
    "all": [Post.PLAN, Post.EXPERIENCE, Post.TREK, Post.SERVICE],
    "itinerary": [Post.PLAN],
    "experience": [Post.EXPERIENCE],
    "trek": [Post.TREK],
    "service": [Post.SERVICE],
}

LOCATION_SEARCH_TYPES = {
    "all": [Post.PLAN, Post.EXPERIENCE],
    "itinerary": [Post.PLAN],
    "experience": [Post.EXPERIENCE],
}

SORT_FIELDS = {
    "created_at": "created_at",
    "rating": "rating_average",
    "price": "price_per_person",
}


def active_posts():
    return Post.objects.filter(status=Post.ACTIVE).select_related("user")


def apply_sort(queryset, sort_by: str, sort_order: str):
    field = SORT_FIELDS.get(sort_by, "created_at")
    prefix = "" if sort_order == "asc" else "-"
    return queryset.order_by(f"{prefix}{field}", f"{prefix}id")


def search_posts(
    *,
    q: str = "",
    post_types: list[str],
    location: str = "",
    difficulty: str = "",
    category: str = "",
    min_price=None,
    max_price=None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
):
    queryset = active_posts().filter(post_type__in=post_types)

    q = q.strip()
    if q:
        queryset = queryset.filter(
            Q(title__icontains=q)
            | Q(subtitle__icontains=q)
            | Q(description__icontains=q)
            | Q(city__icontains=q)
            | Q(country__icontains=q)
        )

    location = location.strip()
    if location:
        queryset = queryset.filter(location_q(location))

    if difficulty:
        queryset = queryset.filter(difficulty__iexact=difficulty)

    if category:
        queryset = json_list_contains_any(queryset, "categories", [category])

    if min_price is not None:
        queryset = queryset.filter(price_per_person__gte=min_price)
    if max_price is not None:
        queryset = queryset.filter(price_per_person__lte=max_price)

    return apply_sort(queryset, sort_by, sort_order)


def suggest_posts(q: str, limit: int = 10):
    return (
        active_posts()
        .filter(post_type__in=[Post.PLAN, Post.EXPERIENCE])
        .filter(Q(title__icontains=q) | Q(city__icontains=q))[:limit]
    )


def posts_near(location: str, post_types: list[str], sort_by: str, sort_order: str):
    queryset = active_posts().filter(location_q(location), post_type__in=post_types)
    return apply_sort(queryset, sort_by, sort_order)

from django.db.models import Avg, Count, IntegerField, OuterRef, Q, Subquery
from django.db.models.functions import Coalesce

from accounts.models import User
from posts.models import Post


def _post_count(**filters):
    posts = (
        Post.objects.filter(user=OuterRef("pk"), **filters)
        .order_by()
        .values("user")
        .annotate(total=Count("pk"))
        .values("total")[:1]
    )
    return Coalesce(Subquery(posts, output_field=IntegerField()), 0)


def top_rated_hosts(*, limit: int = 10, min_rating: float = 0, location: str = ""):
    """
    Hosts ranked by average review rating, ties broken by review count.

    Hosts without reviews are left out. `location` matches city, state or
    country as a case-insensitive substring.
    """
    queryset = (
        User.objects.filter(role=User.HOST)
        .annotate(
            average_rating=Avg("reviews_received__rating"),
            review_count=Count("reviews_received"),
        )
        .filter(review_count__gt=0, average_rating__gte=min_rating)
    )
    if location:
        queryset = queryset.filter(
            Q(city__icontains=location)
            | Q(state__icontains=location)
            | Q(country__icontains=location)
        )
    return queryset.annotate(
        total_posts=_post_count(),
        active_posts=_post_count(status=Post.ACTIVE),
        trek_posts=_post_count(post_type=Post.TREK),
        service_posts=_post_count(post_type=Post.SERVICE),
        experience_posts=_post_count(post_type=Post.EXPERIENCE),
    ).order_by("-average_rating", "-review_count", "id")[:limit]

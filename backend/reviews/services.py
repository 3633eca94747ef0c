import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Avg, Count
from rest_framework.exceptions import NotFound, ValidationError

from accounts.models import User
from posts.models import Post
from .models import Review

logger = logging.getLogger(__name__)


def refresh_post_rating(post: Post) -> None:
    average = post.reviews.aggregate(value=Avg("rating"))["value"] or 0
    post.rating_average = Decimal(str(average)).quantize(Decimal("0.01"))
    post.save(update_fields=["rating_average", "updated_at"])


def create_review(*, reviewer, host_id: int, rating: int, comment: str = "", post_id: int | None = None) -> Review:
    host = User.objects.filter(pk=host_id).first()
    if host is None:
        raise NotFound("Host not found")
    if host.pk == reviewer.pk:
        raise ValidationError("You cannot review yourself")
    if host.role != User.HOST:
        raise ValidationError("Only hosts can be reviewed")

    post = None
    if post_id is not None:
        post = Post.objects.filter(pk=post_id, user=host).first()
        if post is None:
            raise NotFound("Post not found")
        if Review.objects.filter(reviewer=reviewer, post=post).exists():
            raise ValidationError("You have already reviewed this post")

    with transaction.atomic():
        review = Review.objects.create(
            reviewer=reviewer,
            host=host,
            post=post,
            rating=rating,
            comment=comment,
        )
        if post is not None:
            refresh_post_rating(post)

    logger.info("Review %s left for host %s by user %s", review.pk, host.pk, reviewer.pk)
    return review


def review_stats(host) -> dict:
    """Total, one-decimal average and per-star counts for a host's reviews."""

    reviews = Review.objects.filter(host=host)
    totals = reviews.aggregate(total=Count("pk"), average=Avg("rating"))
    distribution = {star: 0 for star in range(1, 6)}
    for row in reviews.order_by().values("rating").annotate(count=Count("pk")):
        distribution[row["rating"]] = row["count"]
    return {
        "total_reviews": totals["total"],
        "average_rating": round(float(totals["average"] or 0), 1),
        "rating_distribution": distribution,
    }

"""Booking state machine: guests request, hosts accept or decline exactly once."""

import logging

from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from bookings.models import Booking
from notifications.models import Notification
from notifications.services import notify
from posts.models import Post
from posts.pricing import calculate_total_amount

logger = logging.getLogger(__name__)

RESPONSE_VERBS = {
    Booking.ACCEPTED: "accept",
    Booking.DECLINED: "decline",
}


def create_booking(
    *,
    guest,
    post_id: int,
    number_of_people: int,
    start_date,
    end_date=None,
    guest_message: str = "",
) -> Booking:
    """
    Open a pending booking against an active post and tell the host about it.

    The booking and the host's notification are written in one transaction.
    """
    post = Post.objects.select_related("user").filter(pk=post_id).first()
    if post is None:
        raise NotFound("Post not found")
    if not post.is_bookable:
        raise ValidationError("This trip is not available for booking")
    if post.user_id == guest.id:
        raise ValidationError("You cannot book your own trip")

    total_amount = calculate_total_amount(post, number_of_people)

    with transaction.atomic():
        booking = Booking.objects.create(
            guest=guest,
            host=post.user,
            post=post,
            post_type=post.post_type,
            post_title=post.title,
            number_of_people=number_of_people,
            total_amount=total_amount,
            start_date=start_date,
            end_date=end_date,
            guest_message=guest_message or "",
            status=Booking.PENDING,
        )
        notify(
            recipient=post.user,
            sender=guest,
            title="New Booking Request",
            message=f'{guest.full_name or guest.email} has requested to book "{post.title}"',
            type=Notification.INFO,
            link=f"/bookings/{booking.pk}",
            metadata={"post_id": post.pk},
        )

    logger.info(
        "Booking %s requested by user %s for post %s (%s people, total %s)",
        booking.pk,
        guest.pk,
        post.pk,
        number_of_people,
        total_amount,
    )
    return booking


def respond_to_booking(*, booking_id: int, user, status: str, host_response: str = "") -> Booking:
    """
    Move a pending booking to `status` on behalf of its host.

    The transition is a conditional update on `status = pending`, so of two
    concurrent responses only one is applied.
    """
    verb = RESPONSE_VERBS[status]

    booking = Booking.objects.filter(pk=booking_id).first()
    if booking is None:
        raise NotFound("Booking not found")
    if booking.host_id != user.id:
        raise PermissionDenied(f"You are not authorized to {verb} this booking")
    if not booking.is_pending:
        raise ValidationError(f"Cannot {verb} a booking that is already {booking.status}")

    now = timezone.now()
    with transaction.atomic():
        updated = Booking.objects.filter(pk=booking.pk, status=Booking.PENDING).update(
            status=status,
            host_response=host_response or "",
            responded_at=now,
            updated_at=now,
        )
        booking.refresh_from_db()
        if not updated:
            raise ValidationError(f"Cannot {verb} a booking that is already {booking.status}")

        if status == Booking.ACCEPTED:
            title = "Booking Accepted"
            message = f'Your booking request for "{booking.post_title}" has been accepted!'
            kind = Notification.SUCCESS
        else:
            title = "Booking Declined"
            message = f'Your booking request for "{booking.post_title}" has been declined'
            kind = Notification.WARNING
        notify(
            recipient=booking.guest,
            sender=user,
            title=title,
            message=message,
            type=kind,
            link=f"/bookings/{booking.pk}",
            metadata={"post_id": booking.post_id},
        )

    logger.info("Booking %s %s by host %s", booking.pk, status, user.pk)
    return booking


def get_booking_for(*, booking_id: int, user) -> Booking:
    booking = (
        Booking.objects.select_related("guest", "host", "post")
        .filter(pk=booking_id)
        .first()
    )
    if booking is None:
        raise NotFound("Booking not found")
    if user.id not in (booking.guest_id, booking.host_id):
        raise PermissionDenied("You are not authorized to view this booking")
    return booking


def host_bookings(host, status: str = ""):
    queryset = Booking.objects.filter(host=host).select_related("guest", "post")
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def guest_bookings(guest, status: str = ""):
    queryset = Booking.objects.filter(guest=guest).select_related("host", "post")
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def host_summary(host) -> dict:
    counts = Booking.objects.filter(host=host).aggregate(
        pending=Count("pk", filter=Q(status=Booking.PENDING)),
        accepted=Count("pk", filter=Q(status=Booking.ACCEPTED)),
        declined=Count("pk", filter=Q(status=Booking.DECLINED)),
    )
    counts["total"] = counts["pending"] + counts["accepted"] + counts["declined"]
    return counts

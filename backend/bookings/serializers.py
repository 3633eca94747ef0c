from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from posts.serializers import PostSummarySerializer
from .models import Booking

REQUIRED_FIELDS_MESSAGE = "Post ID, number of people, and start date are required"


class BookingSerializer(serializers.ModelSerializer):
    guest = UserSummarySerializer(read_only=True)
    host = UserSummarySerializer(read_only=True)
    post = PostSummarySerializer(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "guest",
            "host",
            "post",
            "post_type",
            "post_title",
            "number_of_people",
            "total_amount",
            "booking_date",
            "start_date",
            "end_date",
            "guest_message",
            "status",
            "host_response",
            "responded_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    post_id = serializers.IntegerField(required=False, min_value=1)
    number_of_people = serializers.IntegerField(required=False, min_value=1)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False, allow_null=True)
    guest_message = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        if not all(attrs.get(field) for field in ("post_id", "number_of_people", "start_date")):
            raise serializers.ValidationError(REQUIRED_FIELDS_MESSAGE)
        end_date = attrs.get("end_date")
        if end_date and end_date < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date cannot be before start date"})
        return attrs


class BookingResponseSerializer(serializers.Serializer):
    host_response = serializers.CharField(required=False, allow_blank=True, default="")


class BookingListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=Booking.STATUSES,
        required=False,
        allow_blank=True,
        default="",
        error_messages={
            "invalid_choice": "Invalid status filter. Must be 'pending', 'accepted', or 'declined'",
        },
    )

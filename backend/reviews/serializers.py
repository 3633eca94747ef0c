from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    reviewer = UserSummarySerializer(read_only=True)

    class Meta:
        model = Review
        fields = ["id", "reviewer", "host", "post", "rating", "comment", "created_at"]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    host_id = serializers.IntegerField()
    post_id = serializers.IntegerField(required=False, allow_null=True)
    rating = serializers.IntegerField(
        min_value=1,
        max_value=5,
        error_messages={
            "min_value": "Rating must be between 1 and 5",
            "max_value": "Rating must be between 1 and 5",
        },
    )
    comment = serializers.CharField(required=False, allow_blank=True, default="")


class ReviewListQuerySerializer(serializers.Serializer):
    host = serializers.IntegerField(
        error_messages={"required": "Host ID is required", "invalid": "Host ID must be a number"},
    )

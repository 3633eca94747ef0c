from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from .models import Post, Reaction


class PostSerializer(serializers.ModelSerializer):
    """Listing representation shared by itineraries, search and profiles."""

    user = UserSummarySerializer(read_only=True)
    categories = serializers.ListField(child=serializers.CharField(), required=False)
    tags = serializers.ListField(child=serializers.CharField(), required=False)
    amenities = serializers.ListField(child=serializers.CharField(), required=False)
    price = serializers.SerializerMethodField()
    location = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = [
            "id",
            "user",
            "post_type",
            "title",
            "subtitle",
            "description",
            "plan_name",
            "address",
            "city",
            "state",
            "country",
            "location",
            "price_per_person",
            "price_total",
            "price_amount",
            "price",
            "max_people",
            "duration_days",
            "difficulty",
            "categories",
            "tags",
            "amenities",
            "availability",
            "status",
            "rating_average",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "post_type", "rating_average", "created_at", "updated_at"]

    def get_price(self, obj):
        return {
            "per_person": obj.price_per_person,
            "total": obj.price_total,
            "amount": obj.price_amount,
        }

    def get_location(self, obj):
        return {
            "address": obj.address,
            "city": obj.city,
            "state": obj.state,
            "country": obj.country,
        }


class PostSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Post
        fields = ["id", "post_type", "title", "city", "country", "status", "price_per_person"]
        read_only_fields = fields


class ReactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Reaction
        fields = ["id", "user", "name", "emoji", "timestamp"]
        read_only_fields = fields


class ReactSerializer(serializers.Serializer):
    emoji = serializers.CharField(
        max_length=32,
        error_messages={"required": "Emoji is required", "blank": "Emoji is required"},
    )


SEARCH_TYPE_ERROR = "Invalid type parameter. Must be 'all', 'itinerary', 'experience', 'trek', or 'service'"


class SearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, default="")
    type = serializers.ChoiceField(
        choices=["all", "itinerary", "experience", "trek", "service"],
        required=False,
        default="all",
        error_messages={"invalid_choice": SEARCH_TYPE_ERROR},
    )
    location = serializers.CharField(required=False, allow_blank=True, default="")
    difficulty = serializers.CharField(required=False, allow_blank=True, default="")
    category = serializers.CharField(required=False, allow_blank=True, default="")
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0)
    sort_by = serializers.ChoiceField(
        choices=["created_at", "rating", "price"], required=False, default="created_at"
    )
    sort_order = serializers.ChoiceField(choices=["asc", "desc"], required=False, default="desc")


class SuggestionQuerySerializer(serializers.Serializer):
    q = serializers.CharField(
        error_messages={
            "required": "Search query is required",
            "blank": "Search query is required",
        },
    )


class LocationSearchQuerySerializer(serializers.Serializer):
    location = serializers.CharField(
        error_messages={
            "required": "Location parameter is required",
            "blank": "Location parameter is required",
        },
    )
    type = serializers.ChoiceField(
        choices=["all", "itinerary", "experience"],
        required=False,
        default="all",
        error_messages={"invalid_choice": "Invalid type parameter. Must be 'all', 'itinerary', or 'experience'"},
    )
    sort_by = serializers.ChoiceField(
        choices=["created_at", "rating", "price"], required=False, default="created_at"
    )
    sort_order = serializers.ChoiceField(choices=["asc", "desc"], required=False, default="desc")

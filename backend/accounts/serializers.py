from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers

User = get_user_model()

ROLE_ERROR = "Invalid role. Only 'guest' or 'host' allowed."


class UserSerializer(serializers.ModelSerializer):
    """Expose the public fields for the custom user model."""

    full_name = serializers.CharField(read_only=True)
    location = serializers.JSONField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "full_name",
            "role",
            "is_verified",
            "avatar_url",
            "description",
            "location",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user shape embedded in posts, bookings and notifications."""

    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "email", "role", "avatar_url"]
        read_only_fields = fields


class SignupSerializer(serializers.ModelSerializer):
    """Validate and create a user during registration."""

    password = serializers.CharField(write_only=True, min_length=8)
    role = serializers.CharField(required=False, default=User.GUEST)
    otp = serializers.CharField(write_only=True, required=False, allow_blank=True)

    class Meta:
        model = User
        fields = [
            "email",
            "password",
            "first_name",
            "last_name",
            "role",
            "otp",
        ]
        extra_kwargs = {
            "email": {"validators": []},
            "first_name": {"required": True, "allow_blank": False},
            "last_name": {"required": False},
        }

    def validate_email(self, value: str) -> str:
        email = value.lower()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("Email already registered")
        return email

    def validate_role(self, value: str) -> str:
        role = value or User.GUEST
        if role not in User.SELF_SERVICE_ROLES:
            raise serializers.ValidationError(ROLE_ERROR)
        return role

    def create(self, validated_data):
        validated_data.pop("otp", None)
        email = validated_data.pop("email")
        return User.objects.create_user(
            username=email,
            email=email,
            password=validated_data.pop("password"),
            **validated_data,
        )


class SignupCompleteSerializer(SignupSerializer):
    otp = serializers.CharField(write_only=True)


class SigninSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get("request"),
            username=attrs["email"].lower(),
            password=attrs["password"],
        )
        if user is None:
            raise serializers.ValidationError("Invalid credentials")
        attrs["user"] = user
        return attrs


class EmailSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value: str) -> str:
        return value.lower()


class OTPVerifySerializer(EmailSerializer):
    otp = serializers.CharField()


class PasswordResetSerializer(OTPVerifySerializer):
    new_password = serializers.CharField(write_only=True, min_length=8)


class GoogleLoginSerializer(serializers.Serializer):
    token = serializers.CharField()
    role = serializers.CharField(required=False, allow_blank=True)

    def validate_role(self, value: str) -> str:
        return value if value in User.SELF_SERVICE_ROLES else User.GUEST


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Update the mutable fields on the authenticated user's profile."""

    remove_avatar = serializers.BooleanField(write_only=True, required=False, default=False)

    class Meta:
        model = User
        fields = ["first_name", "last_name", "description", "avatar_url", "remove_avatar"]
        extra_kwargs = {
            "first_name": {"allow_blank": False},
        }

    def update(self, instance, validated_data):
        if validated_data.pop("remove_avatar", False):
            validated_data["avatar_url"] = ""
        return super().update(instance, validated_data)


LOCATION_REQUIRED = "Latitude and longitude are required"


class LocationSerializer(serializers.Serializer):
    latitude = serializers.FloatField(error_messages={"required": LOCATION_REQUIRED, "null": LOCATION_REQUIRED})
    longitude = serializers.FloatField(error_messages={"required": LOCATION_REQUIRED, "null": LOCATION_REQUIRED})
    address = serializers.CharField(required=False, allow_blank=True, default="")
    city = serializers.CharField(required=False, allow_blank=True, default="")
    state = serializers.CharField(required=False, allow_blank=True, default="")
    country = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_latitude(self, value: float) -> float:
        if value < -90 or value > 90:
            raise serializers.ValidationError("Latitude must be between -90 and 90")
        return value

    def validate_longitude(self, value: float) -> float:
        if value < -180 or value > 180:
            raise serializers.ValidationError("Longitude must be between -180 and 180")
        return value


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(
        choices=User.ROLES,
        error_messages={"invalid_choice": "Invalid role. Must be 'guest', 'host', or 'admin'"},
    )


class TopRatedHostsQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        required=False,
        default=10,
        min_value=1,
        error_messages={
            "invalid": "Invalid limit value. Must be a positive number",
            "min_value": "Invalid limit value. Must be a positive number",
        },
    )
    min_rating = serializers.FloatField(
        required=False,
        default=0,
        min_value=0,
        max_value=5,
        error_messages={
            "invalid": "Invalid min_rating value. Must be between 0 and 5",
            "min_value": "Invalid min_rating value. Must be between 0 and 5",
            "max_value": "Invalid min_rating value. Must be between 0 and 5",
        },
    )
    location = serializers.CharField(required=False, allow_blank=True, default="")


class TopRatedHostSerializer(serializers.ModelSerializer):
    average_rating = serializers.SerializerMethodField()
    review_count = serializers.IntegerField(read_only=True)
    total_posts = serializers.IntegerField(read_only=True)
    active_posts = serializers.IntegerField(read_only=True)
    posts_by_type = serializers.SerializerMethodField()
    location = serializers.JSONField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "first_name",
            "last_name",
            "email",
            "role",
            "is_verified",
            "location",
            "avatar_url",
            "created_at",
            "updated_at",
            "average_rating",
            "review_count",
            "total_posts",
            "active_posts",
            "posts_by_type",
        ]

    def get_average_rating(self, obj) -> float:
        return round(float(obj.average_rating or 0), 1)

    def get_posts_by_type(self, obj) -> dict:
        return {
            "trek": obj.trek_posts,
            "service": obj.service_posts,
            "experience": obj.experience_posts,
        }

import logging

from django.contrib.auth import get_user_model
from django.db.models import Count
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenRefreshView

from core.pagination import EnvelopePagination
from core.responses import envelope
from posts.models import Post
from posts.serializers import PostSerializer
from reviews.models import Review
from reviews.serializers import ReviewSerializer
from reviews.services import review_stats
from .permissions import IsAdminRole
from .serializers import (
    EmailSerializer,
    GoogleLoginSerializer,
    LocationSerializer,
    OTPVerifySerializer,
    PasswordResetSerializer,
    ProfileUpdateSerializer,
    RoleUpdateSerializer,
    SigninSerializer,
    SignupCompleteSerializer,
    SignupSerializer,
    TopRatedHostSerializer,
    TopRatedHostsQuerySerializer,
    UserSerializer,
)
from .services.google import fetch_google_profile
from .services.hosts import top_rated_hosts
from .services.otp import consume_otp, issue_otp
from .services.tokens import issue_tokens

logger = logging.getLogger(__name__)

User = get_user_model()

INVALID_OTP = "Invalid or expired OTP"


def _auth_payload(user) -> dict:
    return {"user": UserSerializer(user).data, **issue_tokens(user)}


def _get_user(pk) -> User:
    user = User.objects.filter(pk=pk).first()
    if user is None:
        raise NotFound("User not found")
    return user


# Authentication


class SignupInitiateView(APIView):
    """Validate a registration form and email an OTP; the account is created on completion."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        issue_otp(email)
        return envelope(
            {"email": email},
            message="OTP sent to your email. Please verify to complete signup.",
        )


class SignupCompleteView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = SignupCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if not consume_otp(serializer.validated_data["email"], serializer.validated_data["otp"]):
            raise ValidationError(INVALID_OTP)
        user = serializer.save(is_verified=True)
        logger.info("User %s registered with a verified email", user.pk)
        return envelope(
            _auth_payload(user),
            message="Account created and verified successfully",
            status=status.HTTP_201_CREATED,
        )


class SendOTPView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = EmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        if User.objects.filter(email__iexact=email, is_verified=True).exists():
            raise ValidationError("Email already registered and verified")
        issue_otp(email)
        return envelope(message="OTP sent successfully to your email")


class VerifyOTPView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = OTPVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        if not consume_otp(email, serializer.validated_data["otp"]):
            raise ValidationError(INVALID_OTP)
        User.objects.filter(email__iexact=email, is_verified=False).update(is_verified=True)
        return envelope(message="OTP verified successfully")


class SignupView(APIView):
    """Create an account directly. A valid OTP in the payload marks it verified."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        otp = serializer.validated_data.get("otp")
        if otp and not consume_otp(serializer.validated_data["email"], otp):
            raise ValidationError(INVALID_OTP)
        user = serializer.save(is_verified=bool(otp))
        return envelope(
            _auth_payload(user),
            message="User created and verified successfully" if otp else "User created successfully",
            status=status.HTTP_201_CREATED,
        )


class SigninView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = SigninSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        return envelope(_auth_payload(serializer.validated_data["user"]), message="Login successful")


class ForgotPasswordView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = EmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        if not User.objects.filter(email__iexact=email).exists():
            raise NotFound("User not found")
        issue_otp(email, subject="Password Reset - OTP", heading="Password Reset")
        return envelope(message="OTP sent to your email")


class ResetPasswordView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        user = User.objects.filter(email__iexact=data["email"]).first()
        if user is None:
            raise NotFound("User not found")
        if not consume_otp(data["email"], data["otp"]):
            raise ValidationError(INVALID_OTP)
        user.set_password(data["new_password"])
        user.save(update_fields=["password", "updated_at"])
        logger.info("Password reset for user %s", user.pk)
        return envelope(message="Password reset successfully")


class GoogleLoginView(APIView):
    """Sign in with a Google OAuth access token, creating the account on first use."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = GoogleLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = fetch_google_profile(serializer.validated_data["token"])

        user = User.objects.filter(email__iexact=profile.email).first()
        if user is None:
            user = User.objects.create_user(
                username=profile.email,
                email=profile.email,
                password=None,
                first_name=profile.given_name,
                last_name=profile.family_name,
                role=serializer.validated_data.get("role") or User.GUEST,
                avatar_url=profile.picture,
                is_verified=True,
            )
            logger.info("User %s created from Google sign-in", user.pk)
        elif not user.is_verified:
            user.is_verified = True
            user.save(update_fields=["is_verified", "updated_at"])

        return envelope(_auth_payload(user), message="Google login successful")


class RefreshView(TokenRefreshView):
    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        return envelope(response.data, message="Token refreshed successfully")


# Users


class MeView(APIView):
    def get(self, request, *args, **kwargs):
        return envelope(UserSerializer(request.user).data, message="User retrieved successfully")


class ProfileUpdateView(APIView):
    def patch(self, request, *args, **kwargs):
        serializer = ProfileUpdateSerializer(instance=request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return envelope(UserSerializer(user).data, message="Profile updated successfully")

    put = patch


class LocationView(APIView):
    def get(self, request, *args, **kwargs):
        location = request.user.location
        if location is None:
            return envelope(None, message="No location set")
        return envelope(location, message="Location retrieved successfully")

    def put(self, request, *args, **kwargs):
        serializer = LocationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = request.user
        for field, value in serializer.validated_data.items():
            setattr(user, field, value)
        user.location_updated_at = timezone.now()
        user.save(
            update_fields=[
                "latitude",
                "longitude",
                "address",
                "city",
                "state",
                "country",
                "location_updated_at",
                "updated_at",
            ]
        )
        return envelope(user.location, message="Location updated successfully")


class PublicProfileView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, user_id, *args, **kwargs):
        user = _get_user(user_id)
        posts = Post.objects.filter(user=user, status=Post.ACTIVE).select_related("user")

        by_type = dict(posts.order_by().values_list("post_type").annotate(count=Count("pk")))
        post_stats = {
            "total": sum(by_type.values()),
            "experiences": by_type.get(Post.EXPERIENCE, 0),
            "services": by_type.get(Post.SERVICE, 0),
            "treks": by_type.get(Post.TREK, 0),
            "plans": by_type.get(Post.PLAN, 0),
        }

        data = {
            "user": UserSerializer(user).data,
            "post_stats": post_stats,
            "posts": PostSerializer(posts, many=True).data,
        }
        if user.is_host:
            reviews = Review.objects.filter(host=user).select_related("reviewer")[:10]
            data["reviews"] = ReviewSerializer(reviews, many=True).data
            data["review_stats"] = review_stats(user)
        return envelope(data, message="User profile retrieved successfully")


class TopRatedHostsView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        params = TopRatedHostsQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        hosts = top_rated_hosts(**params.validated_data)
        data = TopRatedHostSerializer(hosts, many=True).data
        return envelope(
            data,
            message="Top-rated hosts retrieved successfully",
            count=len(data),
            filters=params.data,
        )


class UserDetailView(APIView):
    def get(self, request, user_id, *args, **kwargs):
        return envelope(UserSerializer(_get_user(user_id)).data, message="User retrieved successfully")


# Administration


class AdminUserListView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, *args, **kwargs):
        paginator = EnvelopePagination()
        page = paginator.paginate_queryset(User.objects.order_by("-date_joined", "-id"), request, view=self)
        return paginator.get_paginated_response(
            UserSerializer(page, many=True).data,
            message="Users retrieved successfully",
        )


class AdminUserDetailView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, user_id, *args, **kwargs):
        return envelope(UserSerializer(_get_user(user_id)).data, message="User retrieved successfully")

    def delete(self, request, user_id, *args, **kwargs):
        user = _get_user(user_id)
        if user.pk == request.user.pk:
            raise ValidationError("You cannot delete your own account")
        user.delete()
        logger.info("User %s deleted by admin %s", user_id, request.user.pk)
        return envelope(message="User deleted successfully")


class AdminUserRoleView(APIView):
    permission_classes = [IsAdminRole]

    def patch(self, request, user_id, *args, **kwargs):
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = _get_user(user_id)
        user.role = serializer.validated_data["role"]
        user.save(update_fields=["role", "updated_at"])
        logger.info("User %s role set to %s by admin %s", user.pk, user.role, request.user.pk)
        return envelope(UserSerializer(user).data, message="User role updated successfully")

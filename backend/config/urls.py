from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from accounts.api import (
    AdminUserDetailView,
    AdminUserListView,
    AdminUserRoleView,
    ForgotPasswordView,
    GoogleLoginView,
    LocationView,
    MeView,
    ProfileUpdateView,
    PublicProfileView,
    RefreshView,
    ResetPasswordView,
    SendOTPView,
    SigninView,
    SignupCompleteView,
    SignupInitiateView,
    SignupView,
    TopRatedHostsView,
    UserDetailView,
    VerifyOTPView,
)
from bookings.api import BookingViewSet
from core.api import HealthView
from notifications.api import NotificationViewSet
from posts.api import ItineraryViewSet, SearchByLocationView, SearchSuggestionsView, SearchView
from reviews.api import ReviewListCreateView

router = DefaultRouter()
router.register(r"bookings", BookingViewSet, basename="booking")
router.register(r"itineraries", ItineraryViewSet, basename="itinerary")
router.register(r"notifications", NotificationViewSet, basename="notification")

auth_urlpatterns = [
    path("signup/initiate/", SignupInitiateView.as_view(), name="auth-signup-initiate"),
    path("signup/complete/", SignupCompleteView.as_view(), name="auth-signup-complete"),
    path("signup/", SignupView.as_view(), name="auth-signup"),
    path("signin/", SigninView.as_view(), name="auth-signin"),
    path("send-otp/", SendOTPView.as_view(), name="auth-send-otp"),
    path("verify-otp/", VerifyOTPView.as_view(), name="auth-verify-otp"),
    path("forgot-password/", ForgotPasswordView.as_view(), name="auth-forgot-password"),
    path("reset-password/", ResetPasswordView.as_view(), name="auth-reset-password"),
    path("google/", GoogleLoginView.as_view(), name="auth-google"),
    path("refresh/", RefreshView.as_view(), name="auth-refresh"),
]

user_urlpatterns = [
    path("me/", MeView.as_view(), name="user-me"),
    path("profile/", ProfileUpdateView.as_view(), name="user-profile"),
    path("profile/<int:user_id>/", PublicProfileView.as_view(), name="user-public-profile"),
    path("location/", LocationView.as_view(), name="user-location"),
    path("top-rated/hosts/", TopRatedHostsView.as_view(), name="user-top-rated-hosts"),
    path("admin/users/", AdminUserListView.as_view(), name="admin-user-list"),
    path("admin/users/<int:user_id>/", AdminUserDetailView.as_view(), name="admin-user-detail"),
    path("admin/users/<int:user_id>/role/", AdminUserRoleView.as_view(), name="admin-user-role"),
    path("<int:user_id>/", UserDetailView.as_view(), name="user-detail"),
]

search_urlpatterns = [
    path("", SearchView.as_view(), name="search"),
    path("suggestions/", SearchSuggestionsView.as_view(), name="search-suggestions"),
    path("by-location/", SearchByLocationView.as_view(), name="search-by-location"),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health", HealthView.as_view(), name="health"),
    path("api/auth/", include(auth_urlpatterns)),
    path("api/users/", include(user_urlpatterns)),
    path("api/search/", include(search_urlpatterns)),
    path("api/reviews/", ReviewListCreateView.as_view(), name="reviews"),
    path("api/", include(router.urls)),
]

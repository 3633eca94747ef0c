from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    GUEST = "guest"
    HOST = "host"
    ADMIN = "admin"
    ROLES = [
        (GUEST, "Guest"),
        (HOST, "Host"),
        (ADMIN, "Admin"),
    ]
    SELF_SERVICE_ROLES = (GUEST, HOST)

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=ROLES, default=GUEST)
    is_verified = models.BooleanField(default=False)
    description = models.TextField(blank=True)
    avatar_url = models.URLField(blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=120, blank=True)
    country = models.CharField(max_length=120, blank=True)
    location_updated_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.full_name or self.email

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_host(self) -> bool:
        return self.role == self.HOST

    @property
    def location(self) -> dict | None:
        if self.latitude is None or self.longitude is None:
            return None
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "last_updated": self.location_updated_at,
        }


class EmailOTP(models.Model):
    """Latest one-time passcode issued to an email address."""

    email = models.EmailField(unique=True)
    code = models.CharField(max_length=6)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Email OTP"

    def __str__(self):
        return f"OTP for {self.email}"

    @property
    def is_expired(self) -> bool:
        return timezone.now() > self.expires_at

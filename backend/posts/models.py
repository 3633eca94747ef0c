from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Post(models.Model):
    """A bookable listing: itinerary (plan), experience, trek or service."""

    PLAN = "plan"
    EXPERIENCE = "experience"
    TREK = "trek"
    SERVICE = "service"
    POST_TYPES = [
        (PLAN, "Itinerary"),
        (EXPERIENCE, "Experience"),
        (TREK, "Trek"),
        (SERVICE, "Service"),
    ]

    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"
    STATUSES = [
        (ACTIVE, "Active"),
        (INACTIVE, "Inactive"),
        (DRAFT, "Draft"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="posts")
    post_type = models.CharField(max_length=12, choices=POST_TYPES)
    title = models.CharField(max_length=200)
    subtitle = models.CharField(max_length=255, blank=True)
    description = models.TextField()
    plan_name = models.CharField(max_length=200, blank=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=120, blank=True)
    country = models.CharField(max_length=120, blank=True)
    price_per_person = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    price_total = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    price_amount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    max_people = models.PositiveIntegerField(null=True, blank=True)
    duration_days = models.PositiveIntegerField(null=True, blank=True)
    difficulty = models.CharField(max_length=50, blank=True)
    categories = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)
    amenities = models.JSONField(default=list, blank=True)
    availability = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=10, choices=STATUSES, default=ACTIVE)
    rating_average = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.title} ({self.post_type})"

    @property
    def is_bookable(self) -> bool:
        return self.status == self.ACTIVE


class Reaction(models.Model):
    post = models.ForeignKey("Post", on_delete=models.CASCADE, related_name="reactions")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reactions")
    emoji = models.CharField(max_length=32)
    name = models.CharField(max_length=255, blank=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["timestamp", "id"]
        unique_together = ("post", "user")

    def __str__(self):
        return f"{self.emoji} by {self.name or self.user_id}"

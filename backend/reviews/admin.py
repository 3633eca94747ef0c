from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("host", "reviewer", "post", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("host__email", "reviewer__email", "comment")

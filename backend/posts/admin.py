from django.contrib import admin

from .models import Post, Reaction


class ReactionInline(admin.TabularInline):
    model = Reaction
    extra = 0


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ("title", "post_type", "user", "city", "country", "status", "rating_average", "created_at")
    list_filter = ("post_type", "status")
    search_fields = ("title", "city", "country", "user__email")
    inlines = [ReactionInline]


@admin.register(Reaction)
class ReactionAdmin(admin.ModelAdmin):
    list_display = ("post", "user", "emoji", "timestamp")
    search_fields = ("post__title", "user__email")

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("post_title", "guest", "host", "number_of_people", "total_amount", "status", "start_date", "created_at")
    list_filter = ("status", "post_type")
    search_fields = ("post_title", "guest__email", "host__email")
    readonly_fields = ("booking_date", "responded_at", "created_at", "updated_at")

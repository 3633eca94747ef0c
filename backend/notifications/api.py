from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import action

from core.pagination import NotificationPagination
from core.responses import envelope
from .models import Notification
from .serializers import (
    NotificationCreateSerializer,
    NotificationListQuerySerializer,
    NotificationSerializer,
)
from .services import clear_inbox, mark_all_read, notify, unread_count


class NotificationViewSet(viewsets.GenericViewSet):
    """The caller's inbox. Notifications addressed to someone else read as missing."""

    serializer_class = NotificationSerializer
    pagination_class = NotificationPagination
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return Notification.objects.filter(recipient=self.request.user).select_related("sender")

    def get_object(self):
        return get_object_or_404(self.get_queryset(), pk=self.kwargs["pk"])

    def list(self, request):
        params = NotificationListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        queryset = self.get_queryset()
        if params.validated_data["unread_only"]:
            queryset = queryset.filter(read=False)
        page = self.paginate_queryset(queryset)
        return self.paginator.get_paginated_response(
            self.get_serializer(page, many=True).data,
            message="Notifications retrieved successfully",
            unread_count=unread_count(request.user),
        )

    def create(self, request):
        serializer = NotificationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        notification = notify(
            recipient=data.get("recipient", request.user),
            sender=request.user,
            title=data["title"],
            message=data["message"],
            type=data.get("type", Notification.INFO),
            link=data.get("link", ""),
            metadata=data.get("metadata"),
        )
        return envelope(
            NotificationSerializer(notification).data,
            message="Notification created successfully",
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request, pk=None):
        self.get_object().delete()
        return envelope(message="Notification deleted successfully")

    @action(detail=True, methods=["patch", "put"])
    def read(self, request, pk=None):
        notification = self.get_object()
        if not notification.read:
            notification.read = True
            notification.save(update_fields=["read"])
        return envelope(self.get_serializer(notification).data, message="Notification marked as read")

    @action(detail=False, methods=["patch", "put"], url_path="read-all")
    def read_all(self, request):
        updated = mark_all_read(request.user)
        return envelope({"updated": updated}, message="All notifications marked as read")

    @action(detail=False, methods=["delete"])
    def clear(self, request):
        deleted = clear_inbox(request.user)
        return envelope({"deleted": deleted}, message="All notifications cleared")

    @action(detail=False, methods=["put"], url_path="mark-all/read")
    def mark_all(self, request):
        return self.read_all(request)

    @action(detail=False, methods=["delete"], url_path="clear/all")
    def clear_all(self, request):
        return self.clear(request)

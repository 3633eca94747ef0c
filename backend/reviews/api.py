from rest_framework import permissions, status
from rest_framework.views import APIView

from core.pagination import EnvelopePagination
from core.responses import envelope
from .models import Review
from .serializers import ReviewCreateSerializer, ReviewListQuerySerializer, ReviewSerializer
from .services import create_review


class ReviewListCreateView(APIView):
    """Reviews are read publicly by host and written by signed-in users."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get(self, request):
        params = ReviewListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        queryset = Review.objects.filter(host_id=params.validated_data["host"]).select_related("reviewer")
        paginator = EnvelopePagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(
            ReviewSerializer(page, many=True).data,
            message="Reviews retrieved successfully",
        )

    def post(self, request):
        payload = ReviewCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        review = create_review(reviewer=request.user, **payload.validated_data)
        return envelope(
            ReviewSerializer(review).data,
            message="Review submitted successfully",
            status=status.HTTP_201_CREATED,
        )

from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.views import APIView

from core.pagination import ListingPagination
from core.responses import envelope
from .filters import ItineraryFilterSet
from .models import Post, Reaction
from .search import LOCATION_SEARCH_TYPES, SEARCH_TYPES, posts_near, search_posts, suggest_posts
from .serializers import (
    LocationSearchQuerySerializer,
    PostSerializer,
    ReactionSerializer,
    ReactSerializer,
    SearchQuerySerializer,
    SuggestionQuerySerializer,
)
from .services.reactions import reaction_breakdown, reaction_counts, toggle_reaction, user_reaction


class ItineraryViewSet(viewsets.ModelViewSet):
    """Itineraries are posts of type `plan`; reads are public, writes are owner-only."""

    serializer_class = PostSerializer
    filterset_class = ItineraryFilterSet
    pagination_class = ListingPagination
    lookup_value_regex = r"\d+"
    public_actions = {"list", "retrieve", "by_user", "reactions"}

    def get_permissions(self):
        if self.action in self.public_actions:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_queryset(self):
        queryset = Post.objects.filter(post_type=Post.PLAN).select_related("user")
        if self.action == "list":
            queryset = queryset.filter(status=Post.ACTIVE)
        return queryset

    def get_object(self):
        post = Post.objects.select_related("user").filter(pk=self.kwargs["pk"]).first()
        if post is None:
            raise NotFound("Itinerary not found")
        if post.post_type != Post.PLAN:
            raise ValidationError("This is not an itinerary")
        self.check_object_permissions(self.request, post)
        return post

    def _owned_object(self, verb: str) -> Post:
        post = self.get_object()
        if post.user_id != self.request.user.id:
            raise PermissionDenied(f"You are not authorized to {verb} this itinerary")
        return post

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.paginator.get_paginated_response(
            serializer.data, message="Itineraries retrieved successfully"
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save(user=request.user, post_type=Post.PLAN)
        return envelope(
            serializer.data,
            message="Itinerary created successfully",
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return envelope(serializer.data, message="Itinerary retrieved successfully")

    def update(self, request, *args, **kwargs):
        post = self._owned_object("update")
        serializer = self.get_serializer(post, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return envelope(serializer.data, message="Itinerary updated successfully")

    def destroy(self, request, *args, **kwargs):
        post = self._owned_object("delete")
        post.delete()
        return envelope(message="Itinerary deleted successfully")

    @action(detail=False, methods=["get"], url_path="my")
    def mine(self, request):
        queryset = self.get_queryset().filter(user=request.user)
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.paginator.get_paginated_response(
            serializer.data, message="Your itineraries retrieved successfully"
        )

    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>\d+)")
    def by_user(self, request, user_id=None):
        queryset = self.get_queryset().filter(user_id=user_id)
        if str(request.user.id) != str(user_id):
            queryset = queryset.filter(status=Post.ACTIVE)
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.paginator.get_paginated_response(
            serializer.data, message="User itineraries retrieved successfully"
        )

    @action(detail=True, methods=["put"])
    def react(self, request, pk=None):
        post = self.get_object()
        payload = ReactSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        action_taken = toggle_reaction(post=post, user=request.user, emoji=payload.validated_data["emoji"])
        reactions = list(post.reactions.all())
        return envelope(
            {
                "action": action_taken,
                "reactions": ReactionSerializer(reactions, many=True).data,
                "reaction_counts": reaction_counts(reactions),
                "total_reactions": len(reactions),
                "user_reaction": user_reaction(reactions, request.user),
            },
            message=f"Reaction {action_taken} successfully",
        )

    @action(detail=True, methods=["get"])
    def reactions(self, request, pk=None):
        post = self.get_object()
        reactions = list(Reaction.objects.filter(post=post))
        return envelope(
            {
                "reactions": reaction_breakdown(reactions),
                "total_reactions": len(reactions),
                "user_reaction": user_reaction(reactions, request.user),
                "all_reactions": ReactionSerializer(reactions, many=True).data,
            },
            message="Reactions retrieved successfully",
        )


class SearchView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        params = SearchQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        filters = params.validated_data

        queryset = search_posts(
            q=filters["q"],
            post_types=SEARCH_TYPES[filters["type"]],
            location=filters["location"],
            difficulty=filters["difficulty"],
            category=filters["category"],
            min_price=filters.get("min_price"),
            max_price=filters.get("max_price"),
            sort_by=filters["sort_by"],
            sort_order=filters["sort_order"],
        )
        paginator = ListingPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(
            PostSerializer(page, many=True).data,
            message="Search completed successfully",
            filters=params.data,
        )


class SearchSuggestionsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        params = SuggestionQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        suggestions = [
            {
                "text": post.title,
                "location": ", ".join(part for part in (post.city, post.country) if part),
                "type": "itinerary" if post.post_type == Post.PLAN else "experience",
            }
            for post in suggest_posts(params.validated_data["q"].strip())
        ]
        return envelope(suggestions, message="Suggestions retrieved successfully")


class SearchByLocationView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        params = LocationSearchQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        filters = params.validated_data
        location = filters["location"].strip()

        queryset = posts_near(
            location,
            LOCATION_SEARCH_TYPES[filters["type"]],
            filters["sort_by"],
            filters["sort_order"],
        )
        paginator = ListingPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        results = PostSerializer(page, many=True).data
        itineraries = [item for item in results if item["post_type"] == Post.PLAN]
        experiences = [item for item in results if item["post_type"] == Post.EXPERIENCE]
        return paginator.get_paginated_response(
            {
                "location": location,
                "all": results,
                "itineraries": itineraries,
                "experiences": experiences,
            },
            message=f"Found {paginator.page.paginator.count} results for {location}",
            summary={
                "total": paginator.page.paginator.count,
                "itineraries": len(itineraries),
                "experiences": len(experiences),
            },
        )

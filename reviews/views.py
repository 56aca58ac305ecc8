from rest_framework import generics, permissions, status
from rest_framework.response import Response

from core.exceptions import AggregateRecomputeError, CanteenServiceError
from core.responses import error_response
from core.subjects import subject_from_ids

from . import services
from .serializers import ReviewCreateSerializer, ReviewSerializer
from .tasks import queue_recompute


class ReviewListCreateView(generics.ListCreateAPIView):
    serializer_class = ReviewSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    def get_queryset(self):
        canteen_id = self.request.query_params.get("canteen_id")
        menu_item_id = self.request.query_params.get("menu_item_id")
        if canteen_id or menu_item_id:
            return services.reviews_for_subject(subject_from_ids(canteen_id, menu_item_id))
        return services.recent_reviews()

    def list(self, request, *args, **kwargs):
        try:
            return super().list(request, *args, **kwargs)
        except CanteenServiceError as exc:
            return error_response(exc)

    def create(self, request, *args, **kwargs):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            subject = subject_from_ids(data.get("canteen_id"), data.get("menu_item_id"))
            review = services.record_review(
                request.user.id,
                subject,
                data["rating"],
                data.get("comment", ""),
            )
        except AggregateRecomputeError as exc:
            # The review exists; only the rating is stale. Hand the refresh to the worker.
            queue_recompute(exc.subject)
            payload = ReviewSerializer(exc.review).data
            payload["rating_stale"] = True
            return Response(payload, status=status.HTTP_201_CREATED)
        except CanteenServiceError as exc:
            return error_response(exc)

        payload = ReviewSerializer(review).data
        payload["rating_stale"] = False
        return Response(payload, status=status.HTTP_201_CREATED)


class UserReviewListView(generics.ListAPIView):
    serializer_class = ReviewSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return services.reviews_by_user(self.request.user.id)

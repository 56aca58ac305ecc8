from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import CanteenServiceError
from core.responses import error_response
from core.subjects import SubjectFilter, subject_from_ids

from . import services
from .serializers import FavoriteSerializer, FavoriteSubjectSerializer


class FavoriteListCreateView(generics.ListAPIView):
    serializer_class = FavoriteSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return services.favorites_for_user(self.request.user.id)

    def post(self, request):
        serializer = FavoriteSubjectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            subject = subject_from_ids(
                serializer.validated_data.get("canteen_id"),
                serializer.validated_data.get("menu_item_id"),
            )
            favorite = services.add_favorite(request.user.id, subject)
        except CanteenServiceError as exc:
            return error_response(exc)

        return Response(FavoriteSerializer(favorite).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        try:
            subject_filter = SubjectFilter.build(
                request.query_params.get("canteen_id"),
                request.query_params.get("menu_item_id"),
            )
        except CanteenServiceError as exc:
            return error_response(exc)

        if services.remove_favorite(request.user.id, subject_filter):
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response({"detail": "Not in favorites."}, status=status.HTTP_404_NOT_FOUND)


class FavoriteCheckView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        try:
            subject_filter = SubjectFilter.build(
                request.query_params.get("canteen_id"),
                request.query_params.get("menu_item_id"),
            )
        except CanteenServiceError as exc:
            return error_response(exc)

        return Response({"is_favorite": services.is_favorite(request.user.id, subject_filter)})


class FavoriteToggleView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = FavoriteSubjectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            subject = subject_from_ids(
                serializer.validated_data.get("canteen_id"),
                serializer.validated_data.get("menu_item_id"),
            )
            is_favorite = services.toggle_favorite(request.user.id, subject)
        except CanteenServiceError as exc:
            return error_response(exc)

        return Response({"is_favorite": is_favorite})

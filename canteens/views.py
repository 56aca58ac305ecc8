from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.subjects import CanteenSubject, MenuItemSubject
from reviews.serializers import ReviewSerializer
from reviews.services import reviews_for_subject

from . import services
from .models import Canteen, MenuItem
from .permissions import IsStaffOrReadOnly
from .serializers import CanteenSerializer, MenuItemSerializer


class CanteenViewSet(viewsets.ModelViewSet):
    """
    Canteen directory. Reads are public, writes are staff-only.
    """

    serializer_class = CanteenSerializer
    permission_classes = [IsStaffOrReadOnly]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["name", "description", "location"]
    ordering_fields = ["name", "rating", "review_count", "created_at"]
    ordering = ["-rating", "name"]

    def get_queryset(self):
        return services.list_canteens().prefetch_related("menu_items")

    @action(detail=True, methods=["get"], permission_classes=[AllowAny])
    def reviews(self, request, pk=None):
        """Reviews left on this canteen, newest first"""
        canteen = self.get_object()
        queryset = reviews_for_subject(CanteenSubject(canteen.id))
        serializer = ReviewSerializer(queryset, many=True)
        return Response(serializer.data)


class CanteenMenuItemViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = MenuItemSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        return services.menu_items_for_canteen(self.kwargs["canteen_pk"])


class MenuItemViewSet(viewsets.ModelViewSet):
    serializer_class = MenuItemSerializer
    permission_classes = [IsStaffOrReadOnly]
    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]
    filterset_fields = ["canteen", "category", "is_available"]
    search_fields = ["name", "description", "category"]
    ordering_fields = ["price", "name", "rating", "review_count", "created_at"]
    ordering = ["-rating", "name"]

    def get_queryset(self):
        return MenuItem.objects.select_related("canteen").all()

    def list(self, request, *args, **kwargs):
        if request.query_params.get("popular") == "true":
            serializer = self.get_serializer(services.popular_menu_items(), many=True)
            return Response(serializer.data)
        return super().list(request, *args, **kwargs)

    @action(detail=True, methods=["get"], permission_classes=[AllowAny])
    def reviews(self, request, pk=None):
        """Reviews left on this menu item, newest first"""
        menu_item = self.get_object()
        queryset = reviews_for_subject(MenuItemSubject(menu_item.id))
        serializer = ReviewSerializer(queryset, many=True)
        return Response(serializer.data)

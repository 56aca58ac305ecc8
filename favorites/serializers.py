from rest_framework import serializers

from canteens.serializers import CanteenSerializer, MenuItemSerializer

from .models import Favorite


class FavoriteSerializer(serializers.ModelSerializer):
    canteen = CanteenSerializer(read_only=True)
    menu_item = MenuItemSerializer(read_only=True)

    class Meta:
        model = Favorite
        fields = ['id', 'canteen', 'menu_item', 'created_at']


class FavoriteSubjectSerializer(serializers.Serializer):
    canteen_id = serializers.UUIDField(required=False, allow_null=True)
    menu_item_id = serializers.UUIDField(required=False, allow_null=True)

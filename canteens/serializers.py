from rest_framework import serializers

from .models import Canteen, MenuItem


class CanteenSerializer(serializers.ModelSerializer):
    menu_items_count = serializers.IntegerField(source="menu_items.count", read_only=True)

    class Meta:
        model = Canteen
        fields = [
            "id",
            "name",
            "description",
            "location",
            "image_url",
            "open_time",
            "close_time",
            "is_open",
            "tags",
            "rating",
            "review_count",
            "menu_items_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["rating", "review_count", "created_at", "updated_at"]

    def validate_tags(self, value):
        if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
            raise serializers.ValidationError("Tags must be a list of strings.")
        return [tag.strip() for tag in value if tag.strip()]


class MenuItemSerializer(serializers.ModelSerializer):
    canteen_name = serializers.CharField(source="canteen.name", read_only=True)

    class Meta:
        model = MenuItem
        fields = [
            "id",
            "canteen",
            "canteen_name",
            "name",
            "description",
            "price",
            "image_url",
            "category",
            "is_available",
            "rating",
            "review_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["rating", "review_count", "created_at", "updated_at"]

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value

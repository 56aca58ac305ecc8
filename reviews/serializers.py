from rest_framework import serializers

from users.serializers import UserProfileSerializer

from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    user = UserProfileSerializer(read_only=True)
    canteen_name = serializers.CharField(source="canteen.name", read_only=True, default=None)
    menu_item_name = serializers.CharField(source="menu_item.name", read_only=True, default=None)

    class Meta:
        model = Review
        fields = [
            "id",
            "user",
            "canteen",
            "canteen_name",
            "menu_item",
            "menu_item_name",
            "rating",
            "comment",
            "created_at",
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """
    Request shape for a new review. Range and subject rules are enforced by
    reviews.services.record_review.
    """

    canteen_id = serializers.UUIDField(required=False, allow_null=True)
    menu_item_id = serializers.UUIDField(required=False, allow_null=True)
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default="")

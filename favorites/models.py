from uuid import uuid4

from django.conf import settings
from django.db import models
from django.db.models import Q

from canteens.models import Canteen, MenuItem
from core.subjects import CanteenSubject, MenuItemSubject


class Favorite(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="favorites"
    )
    canteen = models.ForeignKey(
        Canteen,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="favorited_by"
    )
    menu_item = models.ForeignKey(
        MenuItem,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="favorited_by"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(canteen__isnull=False, menu_item__isnull=True)
                    | Q(canteen__isnull=True, menu_item__isnull=False)
                ),
                name="favorite_has_exactly_one_subject",
            ),
            models.UniqueConstraint(
                fields=["user", "canteen"],
                condition=Q(canteen__isnull=False),
                name="unique_favorite_canteen_per_user",
            ),
            models.UniqueConstraint(
                fields=["user", "menu_item"],
                condition=Q(menu_item__isnull=False),
                name="unique_favorite_menu_item_per_user",
            ),
        ]

    def __str__(self):
        target = self.canteen.name if self.canteen_id else self.menu_item.name
        return f"{target} in {self.user.username}'s favorites"

    @property
    def subject(self):
        if self.canteen_id is not None:
            return CanteenSubject(self.canteen_id)
        return MenuItemSubject(self.menu_item_id)

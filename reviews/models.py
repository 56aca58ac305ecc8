from uuid import uuid4

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from canteens.models import Canteen, MenuItem
from core.subjects import CanteenSubject, MenuItemSubject

EXACTLY_ONE_SUBJECT = (
    Q(canteen__isnull=False, menu_item__isnull=True)
    | Q(canteen__isnull=True, menu_item__isnull=False)
)


class Review(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews")
    canteen = models.ForeignKey(
        Canteen, on_delete=models.CASCADE, null=True, blank=True, related_name="reviews"
    )
    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.CASCADE, null=True, blank=True, related_name="reviews"
    )
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=EXACTLY_ONE_SUBJECT,
                name="review_has_exactly_one_subject",
            ),
            models.CheckConstraint(
                condition=Q(rating__gte=1, rating__lte=5),
                name="review_rating_between_1_and_5",
            ),
        ]
        indexes = [
            models.Index(fields=["canteen", "-created_at"], name="review_canteen_created_idx"),
            models.Index(fields=["menu_item", "-created_at"], name="review_menu_item_created_idx"),
        ]

    def __str__(self):
        return f"{self.subject_name} - {self.rating}⭐ by {self.user}"

    @property
    def subject(self):
        if self.canteen_id is not None:
            return CanteenSubject(self.canteen_id)
        return MenuItemSubject(self.menu_item_id)

    @property
    def subject_name(self):
        if self.canteen_id is not None:
            return self.canteen.name
        return self.menu_item.name

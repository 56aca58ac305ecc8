from uuid import uuid4

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Canteen(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255)
    image_url = models.URLField(blank=True)
    open_time = models.CharField(max_length=20)
    close_time = models.CharField(max_length=20)
    is_open = models.BooleanField(default=True)
    tags = models.JSONField(default=list, blank=True)
    # Derived from reviews; written only by reviews.services.recompute_aggregate
    rating = models.FloatField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(5)], db_index=True
    )
    review_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-rating", "name"]

    def __str__(self):
        return f"{self.name} ({self.location})"


class MenuItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    canteen = models.ForeignKey(Canteen, on_delete=models.CASCADE, related_name="menu_items")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    image_url = models.URLField(blank=True)
    category = models.CharField(max_length=100, blank=True)
    is_available = models.BooleanField(default=True)
    rating = models.FloatField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(5)], db_index=True
    )
    review_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-rating", "name"]

    def __str__(self):
        return f"{self.canteen.name} - {self.name}"

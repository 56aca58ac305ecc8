from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.db.models import Count

from . import models


@admin.register(models.User)
class UserProfileAdmin(UserAdmin):
    list_display = ["username", "full_name", "email", "review_count", "favorite_count", "is_staff", "is_active"]
    ordering = ["first_name", "last_name"]
    list_filter = ["is_staff", "is_active"]
    list_per_page = 10
    search_fields = ["username__istartswith", "first_name__istartswith", "last_name__istartswith", "email__istartswith"]
    fieldsets = UserAdmin.fieldsets + (
        ("Profile", {"fields": ("profile_image_url",)}),
    )

    def full_name(self, user):
        return f"{user.first_name} {user.last_name}"

    def review_count(self, user):
        return user.review_count
    review_count.admin_order_field = "review_count"

    def favorite_count(self, user):
        return user.favorite_count
    favorite_count.admin_order_field = "favorite_count"

    def get_queryset(self, request):
        return (
            super()
            .get_queryset(request)
            .annotate(
                review_count=Count("reviews", distinct=True),
                favorite_count=Count("favorites", distinct=True),
            )
        )

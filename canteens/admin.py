from django.contrib import admin, messages
from django.db import DatabaseError

from core.subjects import CanteenSubject, MenuItemSubject
from reviews.services import recompute_aggregate

from .models import Canteen, MenuItem


def _recompute(modeladmin, request, queryset, subject_type):
    refreshed = 0
    for obj in queryset:
        try:
            recompute_aggregate(subject_type(obj.id))
            refreshed += 1
        except DatabaseError as exc:
            modeladmin.message_user(request, f"Could not refresh {obj}: {exc}", level=messages.ERROR)
    modeladmin.message_user(request, f"Refreshed ratings for {refreshed} record(s).")


class MenuItemInline(admin.TabularInline):
    model = MenuItem
    extra = 0
    fields = ("name", "category", "price", "is_available", "rating", "review_count")
    readonly_fields = ("rating", "review_count")


@admin.register(Canteen)
class CanteenAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "open_time", "close_time", "is_open", "rating", "review_count"]
    list_editable = ["is_open"]
    list_per_page = 10
    list_filter = ["is_open", "updated_at"]
    search_fields = ["name", "location", "description"]
    readonly_fields = ["rating", "review_count", "created_at", "updated_at"]
    inlines = [MenuItemInline]
    actions = ["recompute_ratings"]

    @admin.action(description="Recompute ratings from reviews")
    def recompute_ratings(self, request, queryset):
        _recompute(self, request, queryset, CanteenSubject)


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    autocomplete_fields = ["canteen"]
    list_display = ["name", "canteen_name", "category", "price", "is_available", "rating", "review_count"]
    list_editable = ["is_available"]
    list_per_page = 10
    list_select_related = ["canteen"]
    list_filter = ["canteen", "category", "is_available"]
    search_fields = ["name", "category"]
    readonly_fields = ["rating", "review_count", "created_at", "updated_at"]
    actions = ["recompute_ratings"]

    def canteen_name(self, menu_item):
        return menu_item.canteen.name

    @admin.action(description="Recompute ratings from reviews")
    def recompute_ratings(self, request, queryset):
        _recompute(self, request, queryset, MenuItemSubject)

from django.contrib import admin

from .models import Favorite


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = (
        'get_subject_name',
        'get_subject_kind',
        'get_username',
        'created_at'
    )
    list_filter = ('created_at', 'canteen')
    search_fields = (
        'user__username',
        'user__email',
        'canteen__name',
        'menu_item__name',
        'menu_item__canteen__name'
    )
    readonly_fields = ('created_at',)
    autocomplete_fields = ['user', 'canteen', 'menu_item']
    date_hierarchy = 'created_at'

    def get_username(self, obj):
        return obj.user.username
    get_username.short_description = 'User'
    get_username.admin_order_field = 'user__username'

    def get_subject_name(self, obj):
        if obj.canteen_id:
            return obj.canteen.name
        return f"{obj.menu_item.name} ({obj.menu_item.canteen.name})"
    get_subject_name.short_description = 'Favorite'

    def get_subject_kind(self, obj):
        return 'Canteen' if obj.canteen_id else 'Menu item'
    get_subject_kind.short_description = 'Kind'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'canteen', 'menu_item__canteen')

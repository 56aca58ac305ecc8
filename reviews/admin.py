from django.contrib import admin
from django.utils.html import format_html
from django.utils.text import Truncator

from .models import Review
from .services import MAX_RATING


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = (
        'get_subject_name',
        'get_subject_kind',
        'get_author_name',
        'stars',
        'comment_excerpt',
        'created_at'
    )
    list_filter = (
        'rating',
        'created_at',
        'canteen'
    )
    search_fields = (
        'user__username',
        'user__email',
        'canteen__name',
        'menu_item__name',
        'comment'
    )
    # Reviews are append-only; edits would leave ratings out of step
    readonly_fields = ('user', 'canteen', 'menu_item', 'rating', 'stars', 'comment', 'created_at')
    date_hierarchy = 'created_at'

    fieldsets = (
        (None, {
            'fields': ('user', ('canteen', 'menu_item'), ('rating', 'stars'), 'comment')
        }),
        ('Metadata', {
            'fields': ('created_at',),
            'classes': ('collapse',)
        })
    )

    def has_add_permission(self, request):
        return False

    def get_subject_name(self, obj):
        return obj.subject_name
    get_subject_name.short_description = 'Reviewed'

    def get_subject_kind(self, obj):
        return 'Canteen' if obj.canteen_id else 'Menu item'
    get_subject_kind.short_description = 'Kind'

    def get_author_name(self, obj):
        return obj.user.get_full_name() or obj.user.username
    get_author_name.short_description = 'Author'
    get_author_name.admin_order_field = 'user__username'

    def stars(self, obj):
        return format_html(
            '<span title="{} of {}">{}</span>',
            obj.rating,
            MAX_RATING,
            '★' * obj.rating + '☆' * (MAX_RATING - obj.rating),
        )
    stars.short_description = 'Stars'
    stars.admin_order_field = 'rating'

    def comment_excerpt(self, obj):
        return Truncator(obj.comment).chars(60) or '-'
    comment_excerpt.short_description = 'Comment'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'canteen', 'menu_item')

"""
Admin configuration for todos app.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import Todo, Category
from .summary import is_overdue


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'user', 'color_display', 'icon', 'created_at')
    list_filter = ('icon',)
    search_fields = ('name', 'user__email')
    raw_id_fields = ('user',)

    def color_display(self, obj):
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            obj.color, obj.color
        )
    color_display.short_description = 'Color'


@admin.register(Todo)
class TodoAdmin(admin.ModelAdmin):
    list_display = (
        'title', 'user', 'priority', 'completed', 'category',
        'due_date', 'is_overdue_display', 'created_at'
    )
    list_filter = ('completed', 'priority', 'created_at', 'due_date')
    search_fields = ('title', 'description', 'user__email')
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'
    raw_id_fields = ('user', 'category')
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('user', 'title', 'description')
        }),
        ('Status & Priority', {
            'fields': ('completed', 'priority', 'category')
        }),
        ('Dates', {
            'fields': ('due_date', 'reminder_date', 'created_at', 'updated_at'),
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'category')

    def is_overdue_display(self, obj):
        if is_overdue(obj):
            return format_html('<span style="color: #e74c3c; font-weight: bold;">OVERDUE</span>')
        return '-'
    is_overdue_display.short_description = 'Overdue'

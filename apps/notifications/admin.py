"""
Admin configuration for notifications app.
"""

from django.contrib import admin, messages

from .models import Notification, EmailNotification
from .services import mark_email_sent


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'type', 'read', 'scheduled_for', 'created_at')
    list_filter = ('type', 'read', 'created_at')
    search_fields = ('title', 'message', 'user__email')
    ordering = ('-created_at',)
    raw_id_fields = ('user', 'todo')


@admin.register(EmailNotification)
class EmailNotificationAdmin(admin.ModelAdmin):
    list_display = ('subject', 'email', 'scheduled_for', 'sent', 'sent_at', 'created_at')
    list_filter = ('sent', 'scheduled_for')
    search_fields = ('subject', 'email', 'user__email')
    ordering = ('scheduled_for',)
    raw_id_fields = ('user', 'todo')
    readonly_fields = ('created_at', 'sent_at')
    actions = ['mark_as_sent']

    @admin.action(description='Mark selected emails as sent')
    def mark_as_sent(self, request, queryset):
        count = 0
        for email_notification in queryset.filter(sent=False):
            mark_email_sent(email_notification)
            count += 1
        self.message_user(request, f'{count} email(s) marked as sent.', messages.SUCCESS)

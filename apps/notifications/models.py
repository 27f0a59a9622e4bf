"""
Notification models.

Models:
- Notification: In-app notice shown in the notification center
- EmailNotification: Queued email row (recorded only, never delivered here)
"""

from django.conf import settings
from django.db import models


class Notification(models.Model):
    """
    In-app notification.

    Lifecycle: unread -> read; either state can be deleted outright.
    """

    class Type(models.TextChoices):
        REMINDER = 'reminder', 'Reminder'
        OVERDUE = 'overdue', 'Overdue'
        GENERIC = 'generic', 'Generic'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
    )
    todo = models.ForeignKey(
        'todos.Todo',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='notifications',
    )
    title = models.CharField(max_length=255)
    message = models.TextField(blank=True)
    type = models.CharField(
        max_length=10,
        choices=Type.choices,
        default=Type.GENERIC,
    )
    read = models.BooleanField(default=False, db_index=True)
    scheduled_for = models.DateTimeField(null=True, blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'notifications'
        verbose_name = 'notification'
        verbose_name_plural = 'notifications'
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class EmailNotification(models.Model):
    """
    A queued email.

    Rows describe intended delivery at `scheduled_for`; `sent`/`sent_at`
    are set when something marks them delivered.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='email_notifications',
    )
    todo = models.ForeignKey(
        'todos.Todo',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='email_notifications',
    )
    email = models.EmailField()
    subject = models.CharField(max_length=255)
    body = models.TextField()
    scheduled_for = models.DateTimeField()
    sent = models.BooleanField(default=False, db_index=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'email_notifications'
        verbose_name = 'email notification'
        verbose_name_plural = 'email notifications'
        ordering = ['scheduled_for']

    def __str__(self):
        return f"{self.subject} -> {self.email}"

"""
To-do models.

Models:
- Category: User-defined label (name, color, icon) for grouping todos
- Todo: A user-owned unit of work with optional due and reminder instants
"""

import re

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

HEX_COLOR_RE = re.compile(r'^#[0-9A-Fa-f]{6}$')


def validate_hex_color(value):
    if not HEX_COLOR_RE.match(value or ''):
        raise ValidationError(f'"{value}" is not a hex color like #3B82F6.')


class Category(models.Model):
    """
    A user's grouping for todos.

    Deleting a category never deletes its todos; their reference is cleared.
    """

    PRESET_COLORS = [
        '#3B82F6', '#8B5CF6', '#F59E0B', '#EF4444', '#EC4899', '#06B6D4',
        '#84CC16', '#F97316', '#6366F1', '#14B8A6', '#F43F5E',
    ]

    class Icon(models.TextChoices):
        FOLDER = 'folder', 'Folder'
        BRIEFCASE = 'briefcase', 'Briefcase'
        HOME = 'home', 'Home'
        SHOPPING = 'shopping', 'Shopping'
        HEART = 'heart', 'Heart'
        STAR = 'star', 'Star'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='categories',
    )
    name = models.CharField(max_length=100)
    color = models.CharField(
        max_length=7,
        default=PRESET_COLORS[0],
        validators=[validate_hex_color],
        help_text='Preset palette color or any #RRGGBB value',
    )
    icon = models.CharField(
        max_length=20,
        choices=Icon.choices,
        default=Icon.FOLDER,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'categories'
        verbose_name = 'category'
        verbose_name_plural = 'categories'
        ordering = ['name']

    def __str__(self):
        return self.name


class Todo(models.Model):
    """
    A single task.

    `completed` starts False. `due_date` and `reminder_date` are absolute
    instants; nothing recurs.
    """

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        MEDIUM = 'medium', 'Medium'
        HIGH = 'high', 'High'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='todos',
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    completed = models.BooleanField(default=False, db_index=True)
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='todos',
    )

    due_date = models.DateTimeField(null=True, blank=True, db_index=True)
    reminder_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'todos'
        verbose_name = 'todo'
        verbose_name_plural = 'todos'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'completed'], name='todos_user_id_6c9a1e_idx'),
            models.Index(fields=['user', 'due_date'], name='todos_user_id_2f7b3d_idx'),
        ]

    def __str__(self):
        return self.title

"""
Service layer for todos app.

All business logic for todo and category operations is centralized here.
Every function takes the acting user explicitly and only touches that
user's rows.

Services:
- create_todo: Create a todo; queues reminder side effects when a reminder is set
- update_todo: Update todo fields
- toggle_todo: Flip completion
- delete_todo: Delete a todo
- create_category / update_category / delete_category: Category CRUD
"""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Todo, Category, validate_hex_color

logger = logging.getLogger(__name__)

VALID_PRIORITIES = [choice for choice, _ in Todo.Priority.choices]
VALID_ICONS = [choice for choice, _ in Category.Icon.choices]


def _resolve_category(user, category):
    """Accept a Category, an id or None; foreign categories are rejected."""
    if category in (None, ''):
        return None
    category_id = category.pk if isinstance(category, Category) else category
    try:
        return Category.objects.get(pk=category_id, user=user)
    except (Category.DoesNotExist, ValueError, TypeError):
        raise ValidationError("Selected category does not exist.")


def create_todo(
    user,
    title: str,
    description: str = '',
    priority: str = 'medium',
    category=None,
    due_date=None,
    reminder_date=None,
):
    """
    Create a todo for `user`.

    When `reminder_date` is set, two independent side effects follow the
    write: an in-app reminder notification and a queued reminder email.
    Either may fail without affecting the other or the todo; failures are
    logged.

    Args:
        user: Owner (required)
        title: Todo title (required, non-blank)
        description: Optional details
        priority: low/medium/high (unknown values fall back to medium)
        category: Category instance or id owned by `user` (optional)
        due_date: Aware datetime (optional)
        reminder_date: Aware datetime (optional)

    Returns:
        Created Todo instance

    Raises:
        ValidationError: If the title is blank or the category is not the user's
    """
    if not title or not title.strip():
        raise ValidationError("Task title is required.")

    if priority not in VALID_PRIORITIES:
        priority = Todo.Priority.MEDIUM

    category = _resolve_category(user, category)

    with transaction.atomic():
        todo = Todo.objects.create(
            user=user,
            title=title.strip(),
            description=description.strip() if description else '',
            priority=priority,
            category=category,
            due_date=due_date,
            reminder_date=reminder_date,
        )

    if todo.reminder_date:
        _schedule_reminder_notification(todo)
        _queue_reminder_email(todo)

    return todo


def _schedule_reminder_notification(todo):
    from apps.notifications.services import create_reminder_notification

    try:
        with transaction.atomic():
            return create_reminder_notification(todo)
    except Exception as e:
        logger.error(f'Failed to create reminder notification for todo {todo.pk}: {e}')
        return None


def _queue_reminder_email(todo):
    from apps.notifications.services import queue_reminder_email

    user = todo.user
    try:
        with transaction.atomic():
            return queue_reminder_email(
                task_title=todo.title,
                due_date=todo.reminder_date,
                user_name=user.get_full_name(),
                user_email=user.email,
                user_id=user.pk,
                todo_id=todo.pk,
            )
    except Exception as e:
        # Don't fail the todo creation if the email can't be queued
        logger.error(f'Failed to schedule email notification for todo {todo.pk}: {e}')
        return None


def update_todo(todo, user, **kwargs):
    """
    Update todo fields. Reminders are not re-queued on edit.

    Args:
        todo: Todo instance to update
        user: User performing the update (must own the todo)
        **kwargs: title, description, priority, category, due_date, reminder_date

    Returns:
        Updated Todo instance

    Raises:
        ValidationError: If validation fails or the todo is not the user's
    """
    if todo.user_id != user.pk:
        raise ValidationError("Task not found.")

    editable_fields = ['title', 'description', 'priority', 'category', 'due_date', 'reminder_date']
    updated = []

    for field in editable_fields:
        if field not in kwargs:
            continue
        new_value = kwargs[field]

        if field == 'title':
            if not new_value or not new_value.strip():
                raise ValidationError("Task title cannot be empty.")
            new_value = new_value.strip()

        elif field == 'description':
            new_value = new_value.strip() if new_value else ''

        elif field == 'priority':
            if new_value not in VALID_PRIORITIES:
                raise ValidationError(f"Invalid priority: {new_value}")

        elif field == 'category':
            new_value = _resolve_category(user, new_value)

        # A bound ModelForm may already have copied the values onto `todo`
        setattr(todo, field, new_value)
        updated.append(field)

    if updated:
        todo.save(update_fields=updated + ['updated_at'])

    return todo


def toggle_todo(todo, user, completed=None):
    """Set completion explicitly, or flip it when `completed` is None."""
    if todo.user_id != user.pk:
        raise ValidationError("Task not found.")

    todo.completed = (not todo.completed) if completed is None else bool(completed)
    todo.save(update_fields=['completed', 'updated_at'])
    return todo


def delete_todo(todo, user):
    if todo.user_id != user.pk:
        raise ValidationError("Task not found.")
    Todo.objects.filter(pk=todo.pk, user=user).delete()
    return True


# =============================================================================
# Categories
# =============================================================================

def _validate_category_fields(name, color, icon):
    if not name or not name.strip():
        raise ValidationError("Category name is required.")
    validate_hex_color(color)
    if icon not in VALID_ICONS:
        raise ValidationError(f"Invalid icon: {icon}")


def create_category(user, name: str, color: str = Category.PRESET_COLORS[0], icon: str = 'folder'):
    _validate_category_fields(name, color, icon)
    return Category.objects.create(
        user=user,
        name=name.strip(),
        color=color.upper(),
        icon=icon,
    )


def update_category(category, user, name: str, color: str, icon: str):
    if category.user_id != user.pk:
        raise ValidationError("Category not found.")
    _validate_category_fields(name, color, icon)

    category.name = name.strip()
    category.color = color.upper()
    category.icon = icon
    category.save(update_fields=['name', 'color', 'icon'])
    return category


def delete_category(category, user):
    """Delete a category. Its todos stay, with no category."""
    if category.user_id != user.pk:
        raise ValidationError("Category not found.")
    Category.objects.filter(pk=category.pk, user=user).delete()
    return True


# =============================================================================
# Query Helpers
# =============================================================================

def get_user_todos(user):
    """All of a user's todos, newest first."""
    return Todo.objects.filter(user=user).select_related('category').order_by('-created_at')


def get_user_categories(user):
    return Category.objects.filter(user=user).order_by('name')

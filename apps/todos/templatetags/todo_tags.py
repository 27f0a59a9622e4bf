"""
Custom template tags and filters for todos app.

Usage in templates:
    {% load todo_tags %}

    {# Filters #}
    {{ todo.due_date|due_label }}
    {{ todo.priority|priority_class }}
    {{ todo|is_overdue }}

    {# Tags #}
    {% due_badge todo %}
    {% priority_badge todo %}
    {% category_badge todo.category %}
"""

from django import template
from django.utils.html import format_html

from apps.todos import summary

register = template.Library()


# =============================================================================
# FILTERS
# =============================================================================

@register.filter
def due_label(due_date):
    """
    Return the DueLabel for a due date, or None.

    Usage: {% with label=todo.due_date|due_label %}{{ label.text }}{% endwith %}
    """
    return summary.due_label(due_date)


@register.filter
def is_overdue(todo):
    if not todo:
        return False
    return summary.is_overdue(todo)


@register.filter
def priority_class(priority):
    """
    Return CSS class for todo priority.

    Usage: {{ todo.priority|priority_class }}
    """
    priority_classes = {
        'low': 'priority-low',
        'medium': 'priority-medium',
        'high': 'priority-high',
    }
    return priority_classes.get(priority, 'priority-medium')


@register.filter
def todo_row_class(todo):
    """Priority class plus `todo-completed` / `todo-overdue` state classes."""
    if not todo:
        return ''

    classes = [priority_class(todo.priority)]
    if todo.completed:
        classes.append('todo-completed')
    elif summary.is_overdue(todo):
        classes.append('todo-overdue')
    return ' '.join(classes)


# =============================================================================
# SIMPLE TAGS - Badge Generation
# =============================================================================

@register.simple_tag
def due_badge(todo):
    """
    Colored due-date badge: Today (blue), Tomorrow (green), Overdue (red)
    or a short date. Empty when the todo has no due date.

    Usage: {% due_badge todo %}
    """
    label = summary.due_label(todo.due_date) if todo else None
    if label is None:
        return ''
    return format_html(
        '<span class="inline-flex items-center px-2 py-0.5 rounded text-xs font-medium {}">{}</span>',
        label.css_class, label.text
    )


@register.simple_tag
def priority_badge(todo):
    """
    Usage: {% priority_badge todo %}
    """
    if not todo:
        return ''

    colors = {
        'high': 'bg-red-500/20 text-red-400',
        'medium': 'bg-yellow-500/20 text-yellow-400',
        'low': 'bg-green-500/20 text-green-400',
    }
    return format_html(
        '<span class="inline-flex items-center px-2 py-0.5 rounded text-xs font-medium {}">{}</span>',
        colors.get(todo.priority, colors['medium']),
        todo.get_priority_display() if hasattr(todo, 'get_priority_display') else todo.priority.title()
    )


@register.simple_tag
def category_badge(category):
    """
    Category pill tinted with the category color.

    Usage: {% category_badge todo.category %}
    """
    if not category:
        return ''
    return format_html(
        '<span class="inline-flex items-center px-2 py-0.5 rounded text-xs" '
        'style="border: 1px solid {}40; color: {};">{}</span>',
        category.color, category.color, category.name
    )

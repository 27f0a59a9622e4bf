"""
Context processors for todos app.

Provides open/overdue counts for navigation badges.
"""

from django.utils import timezone


def todo_counts(request):
    context = {
        'open_todo_count': 0,
        'overdue_todo_count': 0,
    }

    if not request.user.is_authenticated:
        return context

    from apps.todos.models import Todo

    open_todos = Todo.objects.filter(user=request.user, completed=False)
    context['open_todo_count'] = open_todos.count()
    context['overdue_todo_count'] = open_todos.filter(
        due_date__lt=timezone.now(),
    ).count()

    return context

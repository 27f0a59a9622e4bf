"""
Todo filters using django-filter.

Provides filtering for the dashboard list:
- Search (title, description)
- Priority (multi-select)
- Category (user's own categories)
- Status (open / completed)
- Due window (today, tomorrow, this week, overdue, no due date)
"""

from datetime import timedelta

import django_filters
from django import forms
from django.db.models import Q
from django.utils import timezone

from .models import Todo, Category

SELECT_CLASS = (
    'block w-full rounded-md border-slate-600 bg-slate-800 text-white '
    'shadow-sm focus:border-emerald-500 focus:ring-emerald-500 sm:text-sm'
)
HTMX_ATTRS = {
    'hx-get': '',
    'hx-trigger': 'change',
    'hx-target': '#todo-list-container',
    'hx-push-url': 'true',
    'hx-include': '[name]',
}


class TodoFilter(django_filters.FilterSet):
    """
    Usage in views:
        todo_filter = TodoFilter(request.GET, queryset=queryset, request=request)
        todos = todo_filter.qs
    """

    search = django_filters.CharFilter(
        method='filter_search',
        label='Search',
        widget=forms.TextInput(attrs={
            'placeholder': 'Search tasks...',
            'class': SELECT_CLASS,
            **HTMX_ATTRS,
            'hx-trigger': 'keyup changed delay:300ms',
        })
    )

    priority = django_filters.MultipleChoiceFilter(
        choices=Todo.Priority.choices,
        widget=forms.CheckboxSelectMultiple(),
        label='Priority'
    )

    category = django_filters.ModelChoiceFilter(
        queryset=Category.objects.none(),
        label='Category',
        empty_label='All Categories',
        widget=forms.Select(attrs={'class': SELECT_CLASS, **HTMX_ATTRS}),
    )

    status = django_filters.ChoiceFilter(
        method='filter_status',
        choices=[
            ('open', 'Open'),
            ('completed', 'Completed'),
        ],
        label='Status',
        empty_label='All Tasks',
        widget=forms.Select(attrs={'class': SELECT_CLASS, **HTMX_ATTRS}),
    )

    due = django_filters.ChoiceFilter(
        method='filter_due',
        choices=[
            ('today', 'Due Today'),
            ('tomorrow', 'Due Tomorrow'),
            ('this_week', 'Due This Week'),
            ('overdue', 'Overdue'),
            ('no_due_date', 'No Due Date'),
        ],
        label='Due',
        empty_label='Any Due Date',
        widget=forms.Select(attrs={'class': SELECT_CLASS, **HTMX_ATTRS}),
    )

    class Meta:
        model = Todo
        fields = ['priority', 'category']

    def __init__(self, data=None, queryset=None, *, request=None, **kwargs):
        super().__init__(data, queryset, request=request, **kwargs)

        # Only the user's own categories can be filtered on
        if request is not None and request.user.is_authenticated:
            self.filters['category'].queryset = Category.objects.filter(
                user=request.user
            ).order_by('name')

    def filter_search(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) |
            Q(description__icontains=value)
        )

    def filter_status(self, queryset, name, value):
        if value == 'open':
            return queryset.filter(completed=False)
        if value == 'completed':
            return queryset.filter(completed=True)
        return queryset

    def filter_due(self, queryset, name, value):
        """Day windows are computed in the active time zone."""
        if not value:
            return queryset

        now = timezone.now()
        today_start = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
        today_end = today_start + timedelta(days=1)

        if value == 'today':
            return queryset.filter(due_date__gte=today_start, due_date__lt=today_end)

        elif value == 'tomorrow':
            return queryset.filter(
                due_date__gte=today_end,
                due_date__lt=today_end + timedelta(days=1)
            )

        elif value == 'this_week':
            week_start = today_start - timedelta(days=today_start.weekday())
            return queryset.filter(
                due_date__gte=week_start,
                due_date__lt=week_start + timedelta(days=7)
            )

        elif value == 'overdue':
            return queryset.filter(due_date__lt=now, completed=False)

        elif value == 'no_due_date':
            return queryset.filter(due_date__isnull=True)

        return queryset

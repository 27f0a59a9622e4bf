"""
Views for todos app.

Includes:
- Dashboard (stats, category progress, sorted and filtered todo list)
- Todo CRUD and completion toggle (HTMX-aware)
- Calendar (month grid and agenda)
- Category management
"""

import calendar as pycalendar
from datetime import date

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import HttpResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_http_methods, require_POST

from .filters import TodoFilter
from .forms import TodoForm, CategoryForm
from .models import Todo, Category
from .services import (
    create_todo, update_todo, toggle_todo, delete_todo,
    create_category, update_category, delete_category,
    get_user_todos, get_user_categories,
)
from . import summary


def _dashboard_context(request):
    """Full re-fetch of the user's collection plus everything derived from it."""
    user = request.user
    now = timezone.now()

    all_todos = list(get_user_todos(user))
    categories = list(get_user_categories(user))

    todo_filter = TodoFilter(request.GET, queryset=get_user_todos(user), request=request)
    visible_todos = summary.sort_todos(todo_filter.qs)

    has_active_filters = any([
        request.GET.get('search'),
        request.GET.getlist('priority'),
        request.GET.get('category'),
        request.GET.get('status'),
        request.GET.get('due'),
    ])

    return {
        'todos': visible_todos,
        'stats': summary.summarize(all_todos, now=now),
        'category_progress': summary.category_rollup(categories, all_todos),
        'categories': categories,
        'filter': todo_filter,
        'has_active_filters': has_active_filters,
        'priority_choices': Todo.Priority.choices,
        'selected_priorities': request.GET.getlist('priority'),
    }


@login_required
def dashboard(request):
    context = _dashboard_context(request)

    if request.htmx:
        return render(request, 'todos/partials/todo_list.html', context)

    return render(request, 'todos/dashboard.html', context)


# =============================================================================
# Todo CRUD Views
# =============================================================================

@login_required
@require_http_methods(["GET", "POST"])
def todo_create(request):
    if request.method == 'POST':
        form = TodoForm(request.POST, user=request.user)
        if form.is_valid():
            try:
                todo = create_todo(
                    user=request.user,
                    title=form.cleaned_data['title'],
                    description=form.cleaned_data.get('description', ''),
                    priority=form.cleaned_data.get('priority') or 'medium',
                    category=form.cleaned_data.get('category'),
                    due_date=form.cleaned_data.get('due_date'),
                    reminder_date=form.cleaned_data.get('reminder_date'),
                )
                messages.success(request, f'Task "{todo.title}" created!')
                return redirect('todos:dashboard')
            except ValidationError as e:
                messages.error(request, ' '.join(e.messages))
    else:
        form = TodoForm(user=request.user)

    return render(request, 'todos/todo_form.html', {
        'form': form,
        'title': 'Create Task',
        'submit_text': 'Create Task',
    })


@login_required
@require_http_methods(["GET", "POST"])
def todo_edit(request, pk):
    todo = get_object_or_404(Todo, pk=pk, user=request.user)

    if request.method == 'POST':
        form = TodoForm(request.POST, instance=todo, user=request.user)
        if form.is_valid():
            try:
                update_todo(
                    todo,
                    request.user,
                    **{field: form.cleaned_data.get(field) for field in form.Meta.fields}
                )
                messages.success(request, 'Task updated!')
                return redirect('todos:dashboard')
            except ValidationError as e:
                messages.error(request, ' '.join(e.messages))
    else:
        form = TodoForm(instance=todo, user=request.user)

    return render(request, 'todos/todo_form.html', {
        'form': form,
        'todo': todo,
        'title': 'Edit Task',
        'submit_text': 'Save Changes',
    })


@login_required
@require_POST
def todo_toggle(request, pk):
    todo = get_object_or_404(Todo, pk=pk, user=request.user)
    toggle_todo(todo, request.user)

    if request.htmx:
        return render(request, 'todos/partials/todo_list.html', _dashboard_context(request))

    if todo.completed:
        messages.success(request, 'Task completed! 🎉')
    else:
        messages.info(request, 'Task reopened.')
    return redirect('todos:dashboard')


@login_required
@require_POST
def todo_delete(request, pk):
    todo = get_object_or_404(Todo, pk=pk, user=request.user)
    delete_todo(todo, request.user)

    if request.htmx:
        return render(request, 'todos/partials/todo_list.html', _dashboard_context(request))

    messages.success(request, 'Task deleted.')
    return redirect('todos:dashboard')


# =============================================================================
# Calendar
# =============================================================================

def _parse_selected_date(request, today):
    try:
        return date.fromisoformat(request.GET.get('date', ''))
    except ValueError:
        return today


@login_required
def calendar_view(request):
    """
    Month grid or agenda list of dated todos.

    Query params: `date` (YYYY-MM-DD, selected day; defaults to today) and
    `view` (month | agenda).
    """
    today = timezone.localdate()
    selected_date = _parse_selected_date(request, today)
    view_mode = request.GET.get('view', 'month')
    if view_mode not in ('month', 'agenda'):
        view_mode = 'month'

    todos = list(get_user_todos(request.user))

    year, month = selected_date.year, selected_date.month
    prev_month = date(year - 1, 12, 1) if month == 1 else date(year, month - 1, 1)
    next_month = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)

    context = {
        'view_mode': view_mode,
        'today': today,
        'selected_date': selected_date,
        'month_label': f'{pycalendar.month_name[month]} {year}',
        'weeks': summary.month_grid(year, month, todos),
        'weekday_names': ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat'],
        'selected_todos': summary.sort_todos(summary.todos_on_day(todos, selected_date)),
        'upcoming_todos': summary.upcoming(todos),
        'prev_month': prev_month,
        'next_month': next_month,
    }

    if request.htmx:
        return render(request, 'todos/partials/calendar_body.html', context)
    return render(request, 'todos/calendar.html', context)


# =============================================================================
# Categories
# =============================================================================

@login_required
@require_http_methods(["GET", "POST"])
def category_list(request):
    if request.method == 'POST':
        form = CategoryForm(request.POST)
        if form.is_valid():
            try:
                category = create_category(
                    user=request.user,
                    name=form.cleaned_data['name'],
                    color=form.cleaned_data['color'],
                    icon=form.cleaned_data['icon'],
                )
                messages.success(request, f'Category "{category.name}" created!')
                return redirect('todos:category_list')
            except ValidationError as e:
                messages.error(request, ' '.join(e.messages))
    else:
        form = CategoryForm()

    categories = list(get_user_categories(request.user))
    return render(request, 'todos/category_list.html', {
        'form': form,
        'category_progress': summary.category_rollup(categories, get_user_todos(request.user)),
        'preset_colors': Category.PRESET_COLORS,
    })


@login_required
@require_http_methods(["GET", "POST"])
def category_edit(request, pk):
    category = get_object_or_404(Category, pk=pk, user=request.user)

    if request.method == 'POST':
        form = CategoryForm(request.POST, instance=category)
        if form.is_valid():
            try:
                update_category(
                    category,
                    request.user,
                    name=form.cleaned_data['name'],
                    color=form.cleaned_data['color'],
                    icon=form.cleaned_data['icon'],
                )
                messages.success(request, 'Category updated!')
                return redirect('todos:category_list')
            except ValidationError as e:
                messages.error(request, ' '.join(e.messages))
    else:
        form = CategoryForm(instance=category)

    return render(request, 'todos/category_form.html', {
        'form': form,
        'category': category,
        'preset_colors': Category.PRESET_COLORS,
    })


@login_required
@require_POST
def category_delete(request, pk):
    category = get_object_or_404(Category, pk=pk, user=request.user)
    name = category.name
    delete_category(category, request.user)

    if request.htmx:
        return HttpResponse('')

    messages.success(request, f'Category "{name}" deleted.')
    return redirect('todos:category_list')

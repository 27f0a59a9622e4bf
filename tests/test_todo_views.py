# tests/test_todo_views.py

from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from apps.notifications.models import Notification
from apps.todos.models import Category, Todo

pytestmark = pytest.mark.django_db

HTMX_HEADERS = {'HTTP_HX_REQUEST': 'true'}


def template_names(response):
    return [t.name for t in response.templates]


# =============================================================================
# Dashboard
# =============================================================================

def test_dashboard_requires_login(client) -> None:
    response = client.get(reverse('todos:dashboard'))
    assert response.status_code == 302
    assert response.url.startswith(reverse('accounts:sign_in'))


def test_dashboard_stats_and_order(auth_client, make_todo, category) -> None:
    make_todo(title='A', priority='low')
    make_todo(title='B', priority='high', due_date=timezone.now() + timedelta(days=30))
    make_todo(title='C', priority='high', completed=True, category=category)

    response = auth_client.get(reverse('todos:dashboard'))

    assert response.status_code == 200
    assert [t.title for t in response.context['todos']] == ['B', 'A', 'C']
    stats = response.context['stats']
    assert (stats.total, stats.completed_count, stats.tasks_left) == (3, 1, 2)
    assert [row.label for row in response.context['category_progress']] == ['1/1']


def test_dashboard_only_shows_own_todos(auth_client, other_user, make_todo) -> None:
    make_todo(title='mine')
    make_todo(user=other_user, title='theirs')

    response = auth_client.get(reverse('todos:dashboard'))
    assert [t.title for t in response.context['todos']] == ['mine']


def test_dashboard_filters(auth_client, make_todo) -> None:
    make_todo(title='Email boss')
    make_todo(title='Gym', completed=True)

    response = auth_client.get(reverse('todos:dashboard'), {'search': 'boss'})
    assert [t.title for t in response.context['todos']] == ['Email boss']
    assert response.context['has_active_filters'] is True

    response = auth_client.get(reverse('todos:dashboard'), {'status': 'completed'})
    assert [t.title for t in response.context['todos']] == ['Gym']


def test_dashboard_htmx_renders_partial(auth_client, make_todo) -> None:
    make_todo()
    response = auth_client.get(reverse('todos:dashboard'), **HTMX_HEADERS)

    assert 'todos/partials/todo_list.html' in template_names(response)
    assert 'todos/dashboard.html' not in template_names(response)


# =============================================================================
# CRUD
# =============================================================================

def test_create_view(auth_client, user, category) -> None:
    response = auth_client.post(reverse('todos:todo_create'), {
        'title': 'Ship it',
        'description': '',
        'priority': 'high',
        'category': category.pk,
        'due_date': '2030-01-02T10:00',
        'reminder_date': '2030-01-02T09:00',
    })

    assert response.status_code == 302
    todo = Todo.objects.get(title='Ship it')
    assert todo.user == user
    assert todo.category == category
    assert Notification.objects.filter(todo=todo, type='reminder').exists()


def test_create_view_blank_title(auth_client) -> None:
    response = auth_client.post(reverse('todos:todo_create'), {'title': '  ', 'priority': 'medium'})

    assert response.status_code == 200
    assert Todo.objects.count() == 0


def test_edit_view(auth_client, make_todo) -> None:
    todo = make_todo()
    response = auth_client.post(reverse('todos:todo_edit', args=[todo.pk]), {
        'title': 'Renamed',
        'description': 'More detail',
        'priority': 'low',
    })

    assert response.status_code == 302
    todo.refresh_from_db()
    assert (todo.title, todo.description, todo.priority) == ('Renamed', 'More detail', 'low')


def test_cannot_touch_another_users_todo(auth_client, other_user, make_todo) -> None:
    todo = make_todo(user=other_user)

    assert auth_client.get(reverse('todos:todo_edit', args=[todo.pk])).status_code == 404
    assert auth_client.post(reverse('todos:todo_toggle', args=[todo.pk])).status_code == 404
    assert auth_client.post(reverse('todos:todo_delete', args=[todo.pk])).status_code == 404
    assert Todo.objects.filter(pk=todo.pk).exists()


def test_toggle_view(auth_client, make_todo) -> None:
    todo = make_todo()

    response = auth_client.post(reverse('todos:todo_toggle', args=[todo.pk]))
    assert response.status_code == 302
    todo.refresh_from_db()
    assert todo.completed is True

    response = auth_client.post(reverse('todos:todo_toggle', args=[todo.pk]), **HTMX_HEADERS)
    assert response.status_code == 200
    assert 'todos/partials/todo_list.html' in template_names(response)
    todo.refresh_from_db()
    assert todo.completed is False


def test_delete_view(auth_client, make_todo) -> None:
    todo = make_todo()
    response = auth_client.post(reverse('todos:todo_delete', args=[todo.pk]))

    assert response.status_code == 302
    assert not Todo.objects.filter(pk=todo.pk).exists()


# =============================================================================
# Calendar
# =============================================================================

def test_calendar_selected_day(auth_client, make_todo) -> None:
    due = timezone.now().replace(year=2031, month=3, day=14, hour=12)
    make_todo(title='Pi day', due_date=due)

    response = auth_client.get(reverse('todos:calendar'), {'date': '2031-03-14'})

    assert response.status_code == 200
    assert response.context['month_label'] == 'March 2031'
    assert [t.title for t in response.context['selected_todos']] == ['Pi day']
    assert response.context['prev_month'].month == 2
    assert response.context['next_month'].month == 4


def test_calendar_bad_date_falls_back_to_today(auth_client) -> None:
    response = auth_client.get(reverse('todos:calendar'), {'date': 'not-a-date', 'view': 'bogus'})

    assert response.status_code == 200
    assert response.context['selected_date'] == timezone.localdate()
    assert response.context['view_mode'] == 'month'


def test_calendar_agenda(auth_client, make_todo) -> None:
    make_todo(title='Soon', due_date=timezone.now() + timedelta(days=2))
    make_todo(title='Past', due_date=timezone.now() - timedelta(days=2))

    response = auth_client.get(reverse('todos:calendar'), {'view': 'agenda'})
    assert [t.title for t in response.context['upcoming_todos']] == ['Soon']


# =============================================================================
# Categories
# =============================================================================

def test_category_create_and_delete(auth_client, user) -> None:
    response = auth_client.post(reverse('todos:category_list'), {
        'name': 'Errands',
        'color': '#f59e0b',
        'icon': 'shopping',
    })
    assert response.status_code == 302

    category = Category.objects.get(user=user, name='Errands')
    assert category.color == '#F59E0B'

    response = auth_client.post(reverse('todos:category_delete', args=[category.pk]))
    assert response.status_code == 302
    assert not Category.objects.filter(pk=category.pk).exists()


def test_category_edit(auth_client, category) -> None:
    response = auth_client.post(reverse('todos:category_edit', args=[category.pk]), {
        'name': 'Office',
        'color': '#EF4444',
        'icon': 'star',
    })

    assert response.status_code == 302
    category.refresh_from_db()
    assert category.name == 'Office'


# =============================================================================
# Notification center
# =============================================================================

def test_notification_center_and_mark_all(auth_client, user) -> None:
    Notification.objects.create(user=user, title='one')
    Notification.objects.create(user=user, title='two', read=True)

    response = auth_client.get(reverse('notifications:notification_center'), {'filter': 'unread'})
    assert response.status_code == 200
    assert [n.title for n in response.context['notifications']] == ['one']
    assert response.context['unread_count'] == 1

    response = auth_client.post(reverse('notifications:mark_all_read'))
    assert response.status_code == 302
    assert not Notification.objects.filter(user=user, read=False).exists()


def test_notification_actions_scoped_to_owner(auth_client, other_user) -> None:
    theirs = Notification.objects.create(user=other_user, title='theirs')

    response = auth_client.post(reverse('notifications:delete_notification', args=[theirs.pk]), **HTMX_HEADERS)

    assert response.status_code == 404
    assert Notification.objects.filter(pk=theirs.pk).exists()

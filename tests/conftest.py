# tests/conftest.py

from datetime import datetime, timezone as dt_timezone
from types import SimpleNamespace

import pytest
from django.contrib.auth import get_user_model

from apps.todos.models import Category, Todo

PASSWORD = 'correct-horse-battery'


@pytest.fixture()
def user(db):
    return get_user_model().objects.create_user(
        email='alice@example.com',
        password=PASSWORD,
        full_name='Alice Doe',
    )


@pytest.fixture()
def other_user(db):
    return get_user_model().objects.create_user(
        email='bob@example.com',
        password=PASSWORD,
        full_name='Bob Roe',
    )


@pytest.fixture()
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture()
def category(user):
    return Category.objects.create(user=user, name='Work', color='#3B82F6', icon='briefcase')


@pytest.fixture()
def make_todo(user):
    def _make_todo(**kwargs):
        kwargs.setdefault('user', user)
        kwargs.setdefault('title', 'Write report')
        return Todo.objects.create(**kwargs)
    return _make_todo


@pytest.fixture()
def now():
    """Fixed reference instant: Saturday 15 June 2024, 18:00 UTC."""
    return datetime(2024, 6, 15, 18, 0, tzinfo=dt_timezone.utc)


def todo_stub(title='Task', completed=False, priority='medium', due_date=None, category_id=None):
    """Plain stand-in for a Todo row, for the pure summary functions."""
    return SimpleNamespace(
        title=title,
        completed=completed,
        priority=priority,
        due_date=due_date,
        category_id=category_id,
    )

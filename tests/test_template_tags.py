# tests/test_template_tags.py

from datetime import timedelta

from django.template import Context, Template
from django.utils import timezone

from apps.todos.templatetags import todo_tags

from .conftest import todo_stub


def test_priority_class() -> None:
    assert todo_tags.priority_class('high') == 'priority-high'
    assert todo_tags.priority_class('unknown') == 'priority-medium'


def test_todo_row_class_states() -> None:
    overdue = todo_stub(priority='low', due_date=timezone.now() - timedelta(days=1))
    done = todo_stub(priority='high', completed=True, due_date=timezone.now() - timedelta(days=1))

    assert todo_tags.todo_row_class(overdue) == 'priority-low todo-overdue'
    assert todo_tags.todo_row_class(done) == 'priority-high todo-completed'
    assert todo_tags.todo_row_class(None) == ''


def test_due_badge_empty_without_date() -> None:
    assert todo_tags.due_badge(todo_stub()) == ''


def test_due_badge_today() -> None:
    html = todo_tags.due_badge(todo_stub(due_date=timezone.now()))
    assert 'Today' in html
    assert 'text-blue-400' in html


def test_category_badge_escapes_name() -> None:
    category = type('Category', (), {'name': '<b>Work</b>', 'color': '#3B82F6'})()
    html = todo_tags.category_badge(category)
    assert '&lt;b&gt;Work&lt;/b&gt;' in html
    assert todo_tags.category_badge(None) == ''


def test_tags_render_in_templates() -> None:
    template = Template('{% load todo_tags %}{% priority_badge todo %}|{{ todo.priority|priority_class }}')
    rendered = template.render(Context({'todo': todo_stub(priority='high')}))

    assert 'High' in rendered
    assert rendered.endswith('|priority-high')

"""
Derived state for a user's todo collection.

Everything here is a pure function over already-fetched todos (model
instances or any object with the same attributes) and a reference
instant. Views re-fetch the whole collection after every mutation and
recompute from scratch.

"Today" and "Tomorrow" compare calendar days in the active time zone.
"Overdue" and the due-date sort compare full instants.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from django.utils import timezone

PRIORITY_RANK = {
    'high': 3,
    'medium': 2,
    'low': 1,
}
DEFAULT_PRIORITY_RANK = PRIORITY_RANK['medium']

# Sunday-first weeks for the month view
CALENDAR_FIRST_WEEKDAY = calendar.SUNDAY


@dataclass(frozen=True)
class DueLabel:
    text: str
    bucket: str
    css_class: str


DUE_BUCKET_CLASSES = {
    'today': 'text-blue-400 bg-blue-500/20',
    'tomorrow': 'text-green-400 bg-green-500/20',
    'overdue': 'text-red-400 bg-red-500/20',
    'future': 'text-slate-400 bg-slate-500/20',
}


@dataclass
class TodoSummary:
    total: int
    completed_count: int
    tasks_left: int
    progress_percentage: float
    due_today: list = field(default_factory=list)
    overdue: list = field(default_factory=list)
    high_priority_open: list = field(default_factory=list)


@dataclass
class CategoryProgress:
    category: object
    completed: int
    total: int

    @property
    def label(self):
        return f"{self.completed}/{self.total}"


@dataclass
class CalendarDay:
    date: date
    in_month: bool
    todos: list = field(default_factory=list)

    @property
    def has_todos(self):
        return bool(self.todos)


def local_date(value: datetime) -> date:
    """Calendar day of an instant in the active time zone."""
    if timezone.is_naive(value):
        return value.date()
    return timezone.localtime(value).date()


def priority_rank(priority) -> int:
    return PRIORITY_RANK.get(priority, DEFAULT_PRIORITY_RANK)


def is_due_today(todo, now: Optional[datetime] = None) -> bool:
    if not todo.due_date:
        return False
    now = now or timezone.now()
    return local_date(todo.due_date) == local_date(now)


def is_overdue(todo, now: Optional[datetime] = None) -> bool:
    """Past its due instant and not completed. Due exactly at `now` is not overdue."""
    if not todo.due_date or todo.completed:
        return False
    now = now or timezone.now()
    return todo.due_date < now


def summarize(todos: Iterable, now: Optional[datetime] = None) -> TodoSummary:
    """
    Dashboard counters for a todo collection.

    `tasks_left + completed_count == total` always holds, and the
    progress percentage is 0 for an empty collection.
    """
    now = now or timezone.now()
    todos = list(todos)

    total = len(todos)
    completed_count = sum(1 for todo in todos if todo.completed)
    progress = (completed_count / total) * 100 if total > 0 else 0

    return TodoSummary(
        total=total,
        completed_count=completed_count,
        tasks_left=total - completed_count,
        progress_percentage=progress,
        due_today=[todo for todo in todos if is_due_today(todo, now)],
        overdue=[todo for todo in todos if is_overdue(todo, now)],
        high_priority_open=[
            todo for todo in todos
            if todo.priority == 'high' and not todo.completed
        ],
    )


def due_label(due_date: Optional[datetime], now: Optional[datetime] = None) -> Optional[DueLabel]:
    """
    Bucket a due date for display.

    Precedence: no date, today, tomorrow, overdue, then a short date
    such as "Jan 5". A todo due earlier today is still "Today".
    """
    if not due_date:
        return None

    now = now or timezone.now()
    today = local_date(now)
    due_day = local_date(due_date)

    if due_day == today:
        bucket, text = 'today', 'Today'
    elif due_day == today + timedelta(days=1):
        bucket, text = 'tomorrow', 'Tomorrow'
    elif due_date < now:
        bucket, text = 'overdue', 'Overdue'
    else:
        bucket, text = 'future', f"{due_day:%b} {due_day.day}"

    return DueLabel(text=text, bucket=bucket, css_class=DUE_BUCKET_CLASSES[bucket])


def _sort_key(todo):
    due = (0, todo.due_date) if todo.due_date else (1,)
    return (bool(todo.completed), -priority_rank(todo.priority), due)


def sort_todos(todos: Iterable) -> List:
    """
    Display order: open before completed, then priority high to low, then
    dated before undated with earlier due dates first. Undated todos keep
    their incoming relative order.
    """
    return sorted(todos, key=_sort_key)


def category_rollup(categories: Iterable, todos: Iterable) -> List[CategoryProgress]:
    """Completed/total per category. Todos pointing at unknown categories are ignored."""
    todos = list(todos)
    rollup = []
    for category in categories:
        in_category = [todo for todo in todos if todo.category_id == category.id]
        rollup.append(CategoryProgress(
            category=category,
            completed=sum(1 for todo in in_category if todo.completed),
            total=len(in_category),
        ))
    return rollup


# =============================================================================
# Calendar projections
# =============================================================================

def todos_on_day(todos: Iterable, day: date) -> List:
    return [
        todo for todo in todos
        if todo.due_date and local_date(todo.due_date) == day
    ]


def dates_with_todos(todos: Iterable) -> set:
    return {local_date(todo.due_date) for todo in todos if todo.due_date}


def month_grid(year: int, month: int, todos: Iterable) -> List[List[CalendarDay]]:
    """Weeks of the month view, padded with neighbouring-month days."""
    by_day = {}
    for todo in todos:
        if todo.due_date:
            by_day.setdefault(local_date(todo.due_date), []).append(todo)

    weeks = calendar.Calendar(firstweekday=CALENDAR_FIRST_WEEKDAY).monthdatescalendar(year, month)
    return [
        [
            CalendarDay(date=day, in_month=day.month == month, todos=sort_todos(by_day.get(day, [])))
            for day in week
        ]
        for week in weeks
    ]


def upcoming(todos: Iterable, now: Optional[datetime] = None, limit: Optional[int] = None) -> List:
    """Agenda view: open todos due today or later, soonest first."""
    now = now or timezone.now()
    today = local_date(now)
    items = sorted(
        (
            todo for todo in todos
            if todo.due_date and not todo.completed and local_date(todo.due_date) >= today
        ),
        key=lambda todo: todo.due_date,
    )
    if limit is not None:
        return items[:limit]
    return items

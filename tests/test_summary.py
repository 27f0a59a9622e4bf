# tests/test_summary.py

from datetime import date, datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace

from apps.todos import summary

from .conftest import todo_stub


def at(year, month, day, hour=12, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=dt_timezone.utc)


# =============================================================================
# summarize
# =============================================================================

def test_summarize_empty_collection_has_zero_progress(now) -> None:
    stats = summary.summarize([], now=now)
    assert stats.total == 0
    assert stats.completed_count == 0
    assert stats.tasks_left == 0
    assert stats.progress_percentage == 0


def test_summarize_counts_always_add_up(now) -> None:
    collections = [
        [todo_stub(completed=True)],
        [todo_stub(), todo_stub(), todo_stub(completed=True)],
        [todo_stub(completed=True), todo_stub(completed=True)],
        [todo_stub() for _ in range(5)],
    ]
    for todos in collections:
        stats = summary.summarize(todos, now=now)
        assert stats.tasks_left + stats.completed_count == stats.total == len(todos)


def test_summarize_progress_and_buckets(now) -> None:
    todos = [
        todo_stub('done', completed=True),
        todo_stub('due today', due_date=at(2024, 6, 15, 9)),
        todo_stub('overdue', due_date=at(2024, 6, 10)),
        todo_stub('urgent', priority='high'),
        todo_stub('urgent but done', priority='high', completed=True),
    ]
    stats = summary.summarize(todos, now=now)

    assert stats.progress_percentage == 40
    assert [t.title for t in stats.due_today] == ['due today']
    # Due earlier today is past its instant, so it also counts as overdue
    assert [t.title for t in stats.overdue] == ['due today', 'overdue']
    assert [t.title for t in stats.high_priority_open] == ['urgent']


def test_completed_todos_are_never_overdue(now) -> None:
    todo = todo_stub(completed=True, due_date=at(2024, 1, 1))
    assert summary.is_overdue(todo, now) is False


def test_due_exactly_now_is_not_overdue(now) -> None:
    assert summary.is_overdue(todo_stub(due_date=now), now) is False
    assert summary.is_overdue(todo_stub(due_date=now - timedelta(seconds=1)), now) is True


# =============================================================================
# due_label
# =============================================================================

def test_due_label_none_without_date(now) -> None:
    assert summary.due_label(None, now) is None


def test_due_label_today_wins_over_overdue(now) -> None:
    label = summary.due_label(at(2024, 6, 15, 6), now)
    assert label.text == 'Today'
    assert label.bucket == 'today'


def test_due_label_buckets(now) -> None:
    assert summary.due_label(at(2024, 6, 16, 23, 59), now).text == 'Tomorrow'
    assert summary.due_label(at(2024, 6, 14, 23, 59), now).text == 'Overdue'
    assert summary.due_label(at(2024, 7, 4), now).text == 'Jul 4'
    assert summary.due_label(at(2025, 1, 5), now).text == 'Jan 5'


def test_due_label_carries_css_class(now) -> None:
    assert 'red' in summary.due_label(at(2024, 6, 1), now).css_class
    assert 'blue' in summary.due_label(now, now).css_class


# =============================================================================
# sort_todos
# =============================================================================

def test_sort_open_high_priority_first() -> None:
    a = todo_stub('A', priority='low')
    b = todo_stub('B', priority='high', due_date=at(2099, 1, 1))
    c = todo_stub('C', completed=True, priority='high')

    assert [t.title for t in summary.sort_todos([a, b, c])] == ['B', 'A', 'C']


def test_sort_dated_before_undated_at_equal_rank() -> None:
    undated = todo_stub('undated')
    later = todo_stub('later', due_date=at(2024, 9, 1))
    sooner = todo_stub('sooner', due_date=at(2024, 8, 1))

    result = summary.sort_todos([undated, later, sooner])
    assert [t.title for t in result] == ['sooner', 'later', 'undated']


def test_sort_is_stable_for_undated_ties() -> None:
    todos = [todo_stub(f'T{i}') for i in range(5)]
    assert [t.title for t in summary.sort_todos(todos)] == ['T0', 'T1', 'T2', 'T3', 'T4']


def test_sort_unknown_priority_ranks_as_medium() -> None:
    odd = todo_stub('odd', priority='urgent')
    low = todo_stub('low', priority='low')
    high = todo_stub('high', priority='high')
    assert [t.title for t in summary.sort_todos([low, odd, high])] == ['high', 'odd', 'low']


# =============================================================================
# category_rollup
# =============================================================================

def test_category_rollup_counts_per_category() -> None:
    work = SimpleNamespace(id=1, name='Work')
    home = SimpleNamespace(id=2, name='Home')
    todos = [
        todo_stub(category_id=1, completed=True),
        todo_stub(category_id=1),
        todo_stub(category_id=1, completed=True),
        todo_stub(category_id=None),
        todo_stub(category_id=99),
    ]

    rollup = summary.category_rollup([work, home], todos)

    assert [(row.category.name, row.label) for row in rollup] == [('Work', '2/3'), ('Home', '0/0')]


# =============================================================================
# Calendar projections
# =============================================================================

def test_todos_on_day_and_dates_with_todos() -> None:
    todos = [
        todo_stub('morning', due_date=at(2024, 6, 20, 8)),
        todo_stub('evening', due_date=at(2024, 6, 20, 21)),
        todo_stub('next', due_date=at(2024, 6, 21)),
        todo_stub('someday'),
    ]

    assert [t.title for t in summary.todos_on_day(todos, date(2024, 6, 20))] == ['morning', 'evening']
    assert summary.dates_with_todos(todos) == {date(2024, 6, 20), date(2024, 6, 21)}


def test_month_grid_weeks_start_on_sunday() -> None:
    todos = [todo_stub('party', due_date=at(2024, 6, 1, 20))]
    weeks = summary.month_grid(2024, 6, todos)

    first_week = weeks[0]
    assert first_week[0].date == date(2024, 5, 26)
    assert first_week[0].in_month is False
    assert first_week[6].date == date(2024, 6, 1)
    assert first_week[6].has_todos
    assert all(len(week) == 7 for week in weeks)


def test_upcoming_skips_past_days_and_completed(now) -> None:
    todos = [
        todo_stub('yesterday', due_date=at(2024, 6, 14)),
        todo_stub('earlier today', due_date=at(2024, 6, 15, 7)),
        todo_stub('next week', due_date=at(2024, 6, 22)),
        todo_stub('tomorrow', due_date=at(2024, 6, 16)),
        todo_stub('done', completed=True, due_date=at(2024, 6, 17)),
    ]

    result = summary.upcoming(todos, now=now)
    assert [t.title for t in result] == ['earlier today', 'tomorrow', 'next week']
    assert len(summary.upcoming(todos, now=now, limit=1)) == 1

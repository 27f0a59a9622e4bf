"""
Service layer for notifications app.

Services:
- NotificationInbox: read/unread/delete bookkeeping for a user's notifications
- create_notification / create_reminder_notification: In-app notices
- generate_reminder_email / generate_team_invite_email: Email templates
- schedule_email_notification / queue_reminder_email: Email queue rows
- mark_email_sent: Flag a queued email as delivered
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.template.loader import render_to_string
from django.utils import timezone

from .models import Notification, EmailNotification

logger = logging.getLogger(__name__)

FILTER_ALL = 'all'
FILTER_UNREAD = 'unread'
FILTER_READ = 'read'
FILTER_CHOICES = [FILTER_ALL, FILTER_UNREAD, FILTER_READ]


class BackendError(Exception):
    """A storage write failed. Carries the database error message."""


class NotificationInbox:
    """
    A user's notifications as a working set.

    Every transition is applied to the local set first, then written to
    the database with exactly one query. The local change is kept if the
    write succeeds and reverted if it raises, in which case BackendError
    is raised and nothing is retried.

    Counts are always derived from the set, never stored.
    """

    def __init__(self, user, notifications=None):
        self.user = user
        if notifications is None:
            notifications = Notification.objects.filter(user=user).order_by('-created_at')
        self._items = list(notifications)

    # -------------------------------------------------------------------------
    # Projections
    # -------------------------------------------------------------------------

    @property
    def items(self):
        return list(self._items)

    @property
    def total(self):
        return len(self._items)

    @property
    def unread_count(self):
        return sum(1 for notification in self._items if not notification.read)

    @property
    def read_count(self):
        return self.total - self.unread_count

    def filter(self, kind=FILTER_ALL):
        if kind == FILTER_UNREAD:
            return [n for n in self._items if not n.read]
        if kind == FILTER_READ:
            return [n for n in self._items if n.read]
        return self.items

    def get(self, notification_id):
        for notification in self._items:
            if notification.pk == notification_id:
                return notification
        raise Notification.DoesNotExist(f"Notification {notification_id} not found.")

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def mark_as_read(self, notification_id):
        """Mark one notification read. Already-read notifications are left alone."""
        notification = self.get(notification_id)
        if notification.read:
            return notification

        def apply():
            notification.read = True

        def revert():
            notification.read = False

        def write():
            Notification.objects.filter(pk=notification.pk, user=self.user).update(read=True)

        self._two_phase(apply, write, revert, action='mark as read')
        return notification

    def mark_all_as_read(self):
        """
        Mark every unread notification read with a single update.

        Returns the number of notifications that changed; a second call
        returns 0.
        """
        unread = [n for n in self._items if not n.read]
        if not unread:
            return 0

        def apply():
            for notification in unread:
                notification.read = True

        def revert():
            for notification in unread:
                notification.read = False

        def write():
            Notification.objects.filter(user=self.user, read=False).update(read=True)

        self._two_phase(apply, write, revert, action='mark all as read')
        return len(unread)

    def delete(self, notification_id):
        """Remove a notification whatever its state."""
        notification = self.get(notification_id)
        index = self._items.index(notification)

        def apply():
            self._items.pop(index)

        def revert():
            self._items.insert(index, notification)

        def write():
            Notification.objects.filter(pk=notification.pk, user=self.user).delete()

        self._two_phase(apply, write, revert, action='delete')
        return notification

    def _two_phase(self, apply, write, revert, action):
        apply()
        try:
            write()
        except DatabaseError as e:
            revert()
            logger.error(f'Notification {action} failed for {self.user}: {e}')
            raise BackendError(str(e)) from e


# =============================================================================
# In-app notifications
# =============================================================================

def create_notification(user, title, message='', type=Notification.Type.GENERIC,
                        todo=None, scheduled_for=None):
    return Notification.objects.create(
        user=user,
        todo=todo,
        title=title,
        message=message,
        type=type,
        scheduled_for=scheduled_for,
    )


def create_reminder_notification(todo):
    """Record a reminder notice for a todo, scheduled for its reminder instant."""
    return create_notification(
        user=todo.user,
        todo=todo,
        title=f'Reminder: {todo.title}',
        message=todo.description or 'You have a task due soon!',
        type=Notification.Type.REMINDER,
        scheduled_for=todo.reminder_date,
    )


def get_unread_count(user):
    return Notification.objects.filter(user=user, read=False).count()


# =============================================================================
# Email templates
# =============================================================================

def generate_reminder_email(task_title, due_date, user_name):
    """
    Build the reminder email.

    Returns:
        (subject, body) tuple; body is HTML
    """
    subject = f'🔔 Reminder: {task_title} is due soon'
    body = render_to_string('notifications/emails/reminder.html', {
        'task_title': task_title,
        'due_date': due_date,
        'user_name': user_name,
        'site_url': getattr(settings, 'SITE_URL', 'http://localhost:8000'),
    })
    return subject, body


def generate_team_invite_email(team_name, inviter_name, invite_code):
    """
    Build the team invitation email.

    Returns:
        (subject, body) tuple; body is HTML
    """
    subject = f"🎉 You've been invited to join {team_name} on Roki"
    body = render_to_string('notifications/emails/team_invite.html', {
        'team_name': team_name,
        'inviter_name': inviter_name,
        'invite_code': invite_code,
        'site_url': getattr(settings, 'SITE_URL', 'http://localhost:8000'),
    })
    return subject, body


# =============================================================================
# Email queue
# =============================================================================

def schedule_email_notification(user, to, subject, body, todo=None, scheduled_for=None):
    """
    Record an email for later delivery.

    Nothing is sent here; the row is the whole effect.
    """
    email_notification = EmailNotification.objects.create(
        user=user,
        todo=todo,
        email=to,
        subject=subject,
        body=body,
        scheduled_for=scheduled_for or timezone.now(),
    )
    logger.debug(f'Queued email "{subject}" to {to} for {email_notification.scheduled_for}')
    return email_notification


def queue_reminder_email(task_title, due_date, user_name, user_email, user_id, todo_id=None):
    """
    Queue a reminder email for a todo.

    `todo_id` is a weak reference: an id that does not belong to the user
    is stored as no todo.

    Raises:
        User.DoesNotExist: If `user_id` is unknown
    """
    User = get_user_model()
    user = User.objects.get(pk=user_id)

    todo = None
    if todo_id:
        from apps.todos.models import Todo
        try:
            todo = Todo.objects.filter(pk=todo_id, user=user).first()
        except (ValueError, TypeError, ValidationError):
            logger.warning(f'Ignoring unresolvable todo id {todo_id!r} for reminder email')
            todo = None

    subject, body = generate_reminder_email(task_title, due_date, user_name)
    return schedule_email_notification(
        user=user,
        to=user_email,
        subject=subject,
        body=body,
        todo=todo,
        scheduled_for=due_date,
    )


def mark_email_sent(email_notification):
    email_notification.sent = True
    email_notification.sent_at = timezone.now()
    email_notification.save(update_fields=['sent', 'sent_at'])
    return email_notification

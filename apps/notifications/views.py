"""
Views for notifications app.

Includes:
- Notification center with all/unread/read filter
- Mark one / mark all as read, delete (HTMX-aware)
- Mail-queue JSON endpoint (POST /api/send-email)
"""

import json
import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import render, redirect
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from django.views.decorators.http import require_POST

from .models import Notification
from .services import (
    NotificationInbox, BackendError, queue_reminder_email,
    FILTER_ALL, FILTER_CHOICES,
)

logger = logging.getLogger(__name__)


def _render_center(request, inbox, status=200):
    current_filter = request.GET.get('filter', FILTER_ALL)
    if current_filter not in FILTER_CHOICES:
        current_filter = FILTER_ALL

    context = {
        'notifications': inbox.filter(current_filter),
        'current_filter': current_filter,
        'filter_choices': FILTER_CHOICES,
        'total_count': inbox.total,
        'unread_count': inbox.unread_count,
        'read_count': inbox.read_count,
    }

    if request.htmx:
        return render(request, 'notifications/partials/notification_list.html', context, status=status)
    return render(request, 'notifications/notification_center.html', context, status=status)


@login_required
def notification_center(request):
    inbox = NotificationInbox(request.user)
    return _render_center(request, inbox)


def _apply(request, action, success_message=None):
    """Run an inbox transition and re-render (HTMX) or redirect back."""
    inbox = NotificationInbox(request.user)
    status = 200
    try:
        action(inbox)
        if success_message:
            messages.success(request, success_message)
    except Notification.DoesNotExist:
        messages.error(request, 'Notification not found.')
        status = 404
    except BackendError as e:
        messages.error(request, f'Error updating notifications: {e}')
        status = 400

    if request.htmx:
        return _render_center(request, inbox, status=status)
    return redirect('notifications:notification_center')


@login_required
@require_POST
def mark_read(request, pk):
    return _apply(request, lambda inbox: inbox.mark_as_read(pk))


@login_required
@require_POST
def mark_all_read(request):
    return _apply(
        request,
        lambda inbox: inbox.mark_all_as_read(),
        success_message='All notifications marked as read.',
    )


@login_required
@require_POST
def delete_notification(request, pk):
    return _apply(request, lambda inbox: inbox.delete(pk))


# =============================================================================
# Mail queue endpoint
# =============================================================================

@require_POST
def send_email_api(request):
    """
    Queue an email row.

    Body: {"type": "reminder", "data": {"taskTitle", "dueDate", "userName",
    "userEmail", "userId", "todoId"}}. Responds {"success": true}, 400 for
    an unknown type and 500 for anything that goes wrong internally.
    Nothing is delivered; only an EmailNotification row is written.

    Session-authenticated, so CSRF protection applies: callers send the
    `csrftoken` cookie value in an `X-CSRFToken` header. Requests without
    it are rejected with 403 before reaching this view.
    """
    if not request.user.is_authenticated:
        return JsonResponse({'success': False, 'error': 'Authentication required'}, status=401)

    try:
        payload = json.loads(request.body)
        email_type = payload.get('type')
        data = payload.get('data') or {}

        if email_type == 'reminder':
            user_id = data.get('userId') or request.user.pk
            if str(user_id) != str(request.user.pk):
                return JsonResponse({'success': False, 'error': 'Forbidden'}, status=403)

            due_date = parse_datetime(data['dueDate'])
            if due_date is None:
                raise ValueError(f"Invalid dueDate: {data['dueDate']!r}")
            if timezone.is_naive(due_date):
                due_date = timezone.make_aware(due_date)

            queue_reminder_email(
                task_title=data['taskTitle'],
                due_date=due_date,
                user_name=data.get('userName') or request.user.get_full_name(),
                user_email=data.get('userEmail') or request.user.email,
                user_id=request.user.pk,
                todo_id=data.get('todoId'),
            )
            return JsonResponse({'success': True})

        return JsonResponse({'success': False, 'error': 'Invalid email type'}, status=400)

    except Exception as e:
        logger.error(f'Email API error: {e}')
        return JsonResponse({'success': False, 'error': 'Internal server error'}, status=500)

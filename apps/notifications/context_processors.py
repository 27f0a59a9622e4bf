"""
Context processors for notifications app.

Provides the unread count for the navigation bell.
"""


def notification_counts(request):
    context = {
        'unread_notification_count': 0,
    }

    if not request.user.is_authenticated:
        return context

    from .services import get_unread_count

    context['unread_notification_count'] = get_unread_count(request.user)
    return context

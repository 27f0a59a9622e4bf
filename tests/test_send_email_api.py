# tests/test_send_email_api.py

import json
from unittest import mock

import pytest
from django.test import Client
from django.urls import reverse

from apps.notifications.models import EmailNotification

pytestmark = pytest.mark.django_db


def post_json(client, payload):
    return client.post(
        reverse('send_email'),
        data=json.dumps(payload) if not isinstance(payload, str) else payload,
        content_type='application/json',
    )


@pytest.fixture()
def reminder_payload(user, make_todo):
    todo = make_todo(title='Pay rent')
    return {
        'type': 'reminder',
        'data': {
            'taskTitle': 'Pay rent',
            'dueDate': '2024-06-20T09:30:00Z',
            'userName': 'Alice Doe',
            'userEmail': 'alice@example.com',
            'userId': user.pk,
            'todoId': todo.pk,
        },
    }


def test_reminder_is_queued(auth_client, user, reminder_payload) -> None:
    response = post_json(auth_client, reminder_payload)

    assert response.status_code == 200
    assert response.json() == {'success': True}

    email = EmailNotification.objects.get()
    assert email.user == user
    assert email.email == 'alice@example.com'
    assert email.subject == '🔔 Reminder: Pay rent is due soon'
    assert email.todo_id == reminder_payload['data']['todoId']
    assert email.scheduled_for.isoformat() == '2024-06-20T09:30:00+00:00'
    assert email.sent is False


def test_unknown_type_is_rejected(auth_client) -> None:
    response = post_json(auth_client, {'type': 'newsletter', 'data': {}})

    assert response.status_code == 400
    assert response.json() == {'success': False, 'error': 'Invalid email type'}
    assert EmailNotification.objects.count() == 0


def test_malformed_body_is_internal_error(auth_client) -> None:
    response = post_json(auth_client, '{not json')

    assert response.status_code == 500
    assert response.json()['error'] == 'Internal server error'


def test_missing_fields_are_internal_error(auth_client) -> None:
    response = post_json(auth_client, {'type': 'reminder', 'data': {'userName': 'Alice'}})

    assert response.status_code == 500
    assert EmailNotification.objects.count() == 0


def test_storage_failure_is_internal_error(auth_client, reminder_payload) -> None:
    with mock.patch('apps.notifications.views.queue_reminder_email', side_effect=RuntimeError('db down')):
        response = post_json(auth_client, reminder_payload)

    assert response.status_code == 500
    assert response.json() == {'success': False, 'error': 'Internal server error'}


def test_requires_authentication(client, reminder_payload) -> None:
    response = post_json(client, reminder_payload)

    assert response.status_code == 401
    assert EmailNotification.objects.count() == 0


def test_cannot_queue_for_another_user(auth_client, other_user, reminder_payload) -> None:
    reminder_payload['data']['userId'] = other_user.pk
    response = post_json(auth_client, reminder_payload)

    assert response.status_code == 403
    assert EmailNotification.objects.count() == 0


def test_get_not_allowed(auth_client) -> None:
    assert auth_client.get(reverse('send_email')).status_code == 405


def test_unresolvable_todo_id_is_stored_as_no_todo(auth_client, reminder_payload) -> None:
    reminder_payload['data']['todoId'] = 'abc'
    response = post_json(auth_client, reminder_payload)

    assert response.status_code == 200
    assert response.json() == {'success': True}
    email = EmailNotification.objects.get()
    assert email.todo is None


def test_uuid_todo_id_is_stored_as_no_todo(auth_client, reminder_payload) -> None:
    reminder_payload['data']['todoId'] = '3f2b8c1e-6a4d-4a8e-9a0b-2c7d5e1f9a10'
    response = post_json(auth_client, reminder_payload)

    assert response.status_code == 200
    assert EmailNotification.objects.get().todo is None


# =============================================================================
# CSRF
# =============================================================================

@pytest.fixture()
def csrf_client(user):
    client = Client(enforce_csrf_checks=True)
    client.force_login(user)
    return client


def test_csrf_token_required(csrf_client, reminder_payload) -> None:
    response = post_json(csrf_client, reminder_payload)

    assert response.status_code == 403
    assert EmailNotification.objects.count() == 0


def test_csrf_token_in_header_is_accepted(csrf_client, reminder_payload) -> None:
    # Any rendered page hands out the csrftoken cookie
    csrf_client.get(reverse('notifications:notification_center'))
    token = csrf_client.cookies['csrftoken'].value

    response = csrf_client.post(
        reverse('send_email'),
        data=json.dumps({'type': 'bogus', 'data': {}}),
        content_type='application/json',
        HTTP_X_CSRFTOKEN=token,
    )
    assert response.status_code == 400
    assert response.json() == {'success': False, 'error': 'Invalid email type'}

    response = csrf_client.post(
        reverse('send_email'),
        data=json.dumps(reminder_payload),
        content_type='application/json',
        HTTP_X_CSRFTOKEN=token,
    )
    assert response.status_code == 200
    assert EmailNotification.objects.count() == 1

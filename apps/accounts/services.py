"""
Service layer for accounts app.

Centralized business logic for:
- Sign up (user creation + verification email)
- Email verification tokens (the `token_hash` carried by the link)
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model, password_validation
from django.core import signing
from django.core.exceptions import ValidationError
from django.core.mail import EmailMultiAlternatives
from django.db import transaction
from django.template.loader import render_to_string
from django.urls import reverse
from django.utils.http import urlencode

logger = logging.getLogger(__name__)

User = get_user_model()

VERIFICATION_SALT = 'accounts.email-verification'
VERIFICATION_TYPES = ('signup', 'email')


class VerificationError(Exception):
    """Raised when a verification link is invalid, expired or of unknown type."""


def sign_up(email, password, full_name=''):
    """
    Create a new account and send the verification email.

    Args:
        email: Login email (case-insensitive, must be unique)
        password: Raw password, checked against AUTH_PASSWORD_VALIDATORS
        full_name: Display name used in greetings and reminders

    Returns:
        Created User instance

    Raises:
        ValidationError: If a field is missing, the email is taken or the
            password is rejected by the validators.
    """
    email = (email or '').strip().lower()
    if not email:
        raise ValidationError("Email is required.")
    if not password:
        raise ValidationError("Password is required.")
    if User.objects.filter(email__iexact=email).exists():
        raise ValidationError("A user with that email already exists.")

    candidate = User(email=email, full_name=(full_name or '').strip())
    password_validation.validate_password(password, user=candidate)

    with transaction.atomic():
        user = User.objects.create_user(
            email=email,
            password=password,
            full_name=(full_name or '').strip(),
        )

    send_verification_email(user)
    logger.info(f'New account created for {user.email}')
    return user


def make_verification_token(user, token_type='signup'):
    """Return a signed, timestamped token identifying the user and purpose."""
    return signing.dumps(
        {'uid': user.pk, 'email': user.email, 'type': token_type},
        salt=VERIFICATION_SALT,
    )


def build_verification_url(user, token_type='signup'):
    site_url = getattr(settings, 'SITE_URL', 'http://localhost:8000').rstrip('/')
    query = urlencode({
        'token_hash': make_verification_token(user, token_type),
        'type': token_type,
    })
    return f"{site_url}{reverse('accounts:verify')}?{query}"


def verify_email_token(token_hash, token_type):
    """
    Resolve a verification link back to its user and mark the address verified.

    Args:
        token_hash: Signed token from the link
        token_type: 'signup' or 'email'; must match the type the token was made for

    Returns:
        The verified User

    Raises:
        VerificationError: If the token is malformed, expired, of the wrong
            type, or the user no longer exists.
    """
    if token_type not in VERIFICATION_TYPES:
        raise VerificationError("Unknown verification type.")
    if not token_hash:
        raise VerificationError("Missing verification token.")

    max_age = getattr(settings, 'EMAIL_VERIFICATION_MAX_AGE', 24 * 3600)
    try:
        payload = signing.loads(token_hash, salt=VERIFICATION_SALT, max_age=max_age)
    except signing.SignatureExpired:
        raise VerificationError("This verification link has expired.")
    except signing.BadSignature:
        raise VerificationError("Invalid verification link.")

    if payload.get('type') != token_type:
        raise VerificationError("Invalid verification link.")

    try:
        user = User.objects.get(pk=payload.get('uid'), email__iexact=payload.get('email', ''))
    except User.DoesNotExist:
        raise VerificationError("This account no longer exists.")

    user.mark_email_verified()
    return user


def send_verification_email(user, token_type='signup'):
    """
    Send the email-confirmation link to a user.

    Returns:
        bool: True if email sent successfully
    """
    context = {
        'user': user,
        'verify_url': build_verification_url(user, token_type),
        'site_url': getattr(settings, 'SITE_URL', 'http://localhost:8000'),
    }

    subject = 'Confirm your Roki account'
    html_content = render_to_string('accounts/emails/verify.html', context)
    text_content = render_to_string('accounts/emails/verify.txt', context)

    try:
        email = EmailMultiAlternatives(
            subject=subject,
            body=text_content,
            from_email=getattr(settings, 'DEFAULT_FROM_EMAIL', 'noreply@roki.app'),
            to=[user.email],
        )
        email.attach_alternative(html_content, 'text/html')
        email.send()
        return True
    except Exception as e:
        # Log the error but don't raise - user is already created
        logger.error(f'Failed to send verification email to {user.email}: {e}')
        return False

"""
Views for accounts app.

- Sign in / sign up (single auth page with two forms)
- Sign out
- Email verification callback
"""

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login, logout, authenticate
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from .forms import SignInForm, SignUpForm
from .services import sign_up, verify_email_token, VerificationError


def home_view(request):
    """Landing page: authenticated users go straight to their dashboard."""
    if request.user.is_authenticated:
        return redirect('todos:dashboard')
    return redirect('accounts:sign_in')


def sign_in_view(request):
    if request.user.is_authenticated:
        return redirect('todos:dashboard')

    if request.method == 'POST':
        form = SignInForm(request.POST)
        if form.is_valid():
            user = authenticate(
                request,
                username=form.cleaned_data['email'],
                password=form.cleaned_data['password'],
            )
            if user is not None:
                login(request, user, backend='apps.accounts.backends.EmailAuthBackend')
                messages.success(request, f'Welcome back, {user.get_short_name()}!')

                next_url = request.GET.get('next', '')
                if next_url and url_has_allowed_host_and_scheme(
                    next_url, allowed_hosts={request.get_host()}
                ):
                    return redirect(next_url)
                return redirect('todos:dashboard')

            messages.error(request, 'Invalid email or password.')
    else:
        form = SignInForm()

    return render(request, 'accounts/auth.html', {
        'form': form,
        'signup_form': SignUpForm(),
        'mode': 'sign_in',
    })


def sign_up_view(request):
    if request.user.is_authenticated:
        return redirect('todos:dashboard')

    if request.method == 'POST':
        form = SignUpForm(request.POST)
        if form.is_valid():
            try:
                sign_up(
                    email=form.cleaned_data['email'],
                    password=form.cleaned_data['password'],
                    full_name=form.cleaned_data['full_name'],
                )
            except ValidationError as e:
                for error in e.messages:
                    form.add_error('password', error)
            else:
                messages.success(
                    request,
                    'Account created! Check your email to verify your address.'
                )
                return redirect('accounts:sign_in')
    else:
        form = SignUpForm()

    return render(request, 'accounts/auth.html', {
        'form': SignInForm(),
        'signup_form': form,
        'mode': 'sign_up',
    })


@login_required
@require_POST
def sign_out_view(request):
    logout(request)
    messages.success(request, 'You have been signed out.')
    return redirect('accounts:sign_in')


def verify_view(request):
    """
    Email-link verification callback.

    Expects `token_hash` and `type` query parameters. On success the user
    is signed in and the page redirects to the dashboard after a short delay.
    """
    token_hash = request.GET.get('token_hash', '')
    token_type = request.GET.get('type', '')

    try:
        user = verify_email_token(token_hash, token_type)
    except VerificationError as e:
        return render(request, 'accounts/verify.html', {
            'status': 'error',
            'message': str(e),
        }, status=400)

    if not request.user.is_authenticated:
        login(request, user, backend='apps.accounts.backends.EmailAuthBackend')

    return render(request, 'accounts/verify.html', {
        'status': 'success',
        'message': 'Your email has been successfully verified!',
        'redirect_seconds': getattr(settings, 'VERIFY_REDIRECT_SECONDS', 3),
    })

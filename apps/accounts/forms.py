"""
Forms for accounts app.

- SignInForm: email + password
- SignUpForm: full name, email, password
"""

from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import UserCreationForm
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

User = get_user_model()

INPUT_CLASS = (
    'block w-full rounded-md border-slate-600 bg-slate-800 text-white '
    'placeholder-slate-400 focus:border-emerald-500 focus:ring-emerald-500 sm:text-sm'
)


class SignInForm(forms.Form):
    email = forms.EmailField(
        label=_('Email'),
        max_length=254,
        widget=forms.EmailInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'you@example.com',
            'autofocus': True,
        })
    )
    password = forms.CharField(
        label=_('Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'Password',
        })
    )

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()


class SignUpForm(forms.Form):
    """
    Registration form.

    Password strength is checked by the service layer against
    AUTH_PASSWORD_VALIDATORS, so errors come back as ValidationError.
    """

    full_name = forms.CharField(
        label=_('Full name'),
        max_length=150,
        widget=forms.TextInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'Your name',
        })
    )
    email = forms.EmailField(
        label=_('Email'),
        max_length=254,
        widget=forms.EmailInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'you@example.com',
        })
    )
    password = forms.CharField(
        label=_('Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'Choose a password',
        })
    )

    def clean_full_name(self):
        full_name = self.cleaned_data.get('full_name', '').strip()
        if not full_name:
            raise ValidationError(_('Full name is required.'))
        return full_name

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()
        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError(_('A user with that email already exists.'))
        return email


class AdminUserCreationForm(UserCreationForm):
    """Admin "add user" form for the email-keyed user model."""

    class Meta:
        model = User
        fields = ('email', 'full_name')

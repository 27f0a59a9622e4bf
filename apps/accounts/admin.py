"""
Admin configuration for accounts app.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .forms import AdminUserCreationForm
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """User admin keyed on email instead of username."""

    list_display = ('email', 'full_name', 'email_verified', 'is_active', 'is_staff', 'created_at')
    list_filter = ('email_verified', 'is_active', 'is_staff')
    search_fields = ('email', 'full_name')
    ordering = ('email',)
    list_per_page = 25

    add_form = AdminUserCreationForm

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Personal Info'), {'fields': ('full_name',)}),
        (_('Verification'), {'fields': ('email_verified', 'email_verified_at')}),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Important dates'), {
            'fields': ('last_login', 'created_at', 'updated_at'),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('email_verified_at', 'last_login', 'created_at', 'updated_at')

"""
URL configuration for the roki project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings

from apps.notifications.views import send_email_api

urlpatterns = [
    path('admin/', admin.site.urls),

    # App URLs
    path('', include('apps.accounts.urls', namespace='accounts')),
    path('todos/', include('apps.todos.urls', namespace='todos')),
    path('notifications/', include('apps.notifications.urls', namespace='notifications')),
    path('teams/', include('apps.teams.urls', namespace='teams')),

    # Mail queue endpoint
    path('api/send-email', send_email_api, name='send_email'),
]

if settings.DEBUG and 'debug_toolbar' in settings.INSTALLED_APPS:
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns

# Admin site customization
admin.site.site_header = 'Roki Administration'
admin.site.site_title = 'Roki Admin'
admin.site.index_title = 'Welcome to Roki Admin'

"""
URL configuration for accounts app.
"""

from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('', views.home_view, name='home'),
    path('auth/', views.sign_in_view, name='sign_in'),
    path('auth/sign-up/', views.sign_up_view, name='sign_up'),
    path('auth/sign-out/', views.sign_out_view, name='sign_out'),
    path('auth/verify/', views.verify_view, name='verify'),
]

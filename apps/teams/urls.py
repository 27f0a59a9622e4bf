"""
URL configuration for teams app.
"""

from django.urls import path
from . import views

app_name = 'teams'

urlpatterns = [
    path('', views.team_list, name='team_list'),
    path('create/', views.team_create, name='team_create'),
    path('join/', views.team_join, name='team_join'),
    path('<int:pk>/', views.team_detail, name='team_detail'),
    path('<int:pk>/invite/', views.team_invite, name='team_invite'),
]

"""
URL configuration for todos app.
"""

from django.urls import path
from . import views

app_name = 'todos'

urlpatterns = [
    # Dashboard (main view)
    path('', views.dashboard, name='dashboard'),

    # Todo CRUD
    path('create/', views.todo_create, name='todo_create'),
    path('<int:pk>/edit/', views.todo_edit, name='todo_edit'),
    path('<int:pk>/toggle/', views.todo_toggle, name='todo_toggle'),
    path('<int:pk>/delete/', views.todo_delete, name='todo_delete'),

    # Calendar
    path('calendar/', views.calendar_view, name='calendar'),

    # Categories
    path('categories/', views.category_list, name='category_list'),
    path('categories/<int:pk>/edit/', views.category_edit, name='category_edit'),
    path('categories/<int:pk>/delete/', views.category_delete, name='category_delete'),
]

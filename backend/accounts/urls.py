from django.urls import path

from . import views

urlpatterns = [
    path('users', views.UserCreateView.as_view(), name='user-create'),
    path('users/me', views.CurrentUserView.as_view(), name='user-me'),
    path('users/roles', views.AssignableRolesView.as_view(), name='user-roles'),
]

from django.urls import path

from .views import (
    AvailableAgentsView,
    CustomLoginView,
    RegistrationView,
    UserDetailView,
    UserListView,
)

urlpatterns = [
    path('registration/', RegistrationView.as_view(), name='registration'),
    path('login/', CustomLoginView.as_view(), name='login'),
    path('users/', UserListView.as_view(), name='user-list'),
    path('users/<int:pk>/', UserDetailView.as_view(), name='user-detail'),
    path('agents/', AvailableAgentsView.as_view(), name='agent-list'),
]

from django.urls import path

from .views import AdminAnalyticsView, AgentHistoryView, AgentStatsView, UserStatsView

urlpatterns = [
    path('analytics/', AdminAnalyticsView.as_view(), name='admin-analytics'),
    path('agent/stats/', AgentStatsView.as_view(), name='agent-stats'),
    path('agent/history/', AgentHistoryView.as_view(), name='agent-history'),
    path('users/stats/', UserStatsView.as_view(), name='user-stats'),
]

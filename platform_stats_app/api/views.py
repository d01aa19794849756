from rest_framework import status
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders_app.api.serializers import OrderSerializer
from platform_stats_app import reports
from user_auth_app.api.permissions import HasCapability
from user_auth_app.roles import Capability
from .serializers import AdminAnalyticsSerializer, AgentStatsSerializer, UserCountsSerializer


class AdminAnalyticsView(APIView):
    """
    Platform-wide figures for the admin dashboard.

    Revenue, commission and earnings are summed over orders that are assigned, in progress,
    delivered or completed. Soft-deleted orders are never counted.

    Endpoint:
        GET /api/analytics/
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {'get': Capability.VIEW_ANALYTICS}

    def get(self, request, format=None):
        data = AdminAnalyticsSerializer(reports.admin_analytics()).data
        return Response(data, status=status.HTTP_200_OK)


class AgentStatsView(APIView):
    """
    Earnings and workload of the requesting agent.

    Endpoint:
        GET /api/agent/stats/
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {'get': Capability.VIEW_AGENT_DASHBOARD}

    def get(self, request, format=None):
        data = AgentStatsSerializer(reports.agent_stats(request.user)).data
        return Response(data, status=status.HTTP_200_OK)


class AgentHistoryView(APIView):
    """
    Every live order the requesting agent sells, newest first.

    Endpoint:
        GET /api/agent/history/
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {'get': Capability.VIEW_AGENT_DASHBOARD}

    def get(self, request, format=None):
        orders = reports.agent_order_history(request.user)
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)


class UserStatsView(APIView):
    """
    Account totals for the user management page.

    Endpoint:
        GET /api/users/stats/
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {'get': Capability.MANAGE_USERS}

    def get(self, request, format=None):
        data = UserCountsSerializer(reports.user_counts()).data
        return Response(data, status=status.HTTP_200_OK)

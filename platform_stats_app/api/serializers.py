from rest_framework import serializers

from orders_app.api.serializers import OrderSerializer


class MonthlyRevenueSerializer(serializers.Serializer):
    month = serializers.CharField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    count = serializers.IntegerField()


class AdminAnalyticsSerializer(serializers.Serializer):
    """Shapes the admin dashboard figures returned by `reports.admin_analytics`."""
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    platform_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    agent_earnings = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_orders = serializers.IntegerField()
    pending_orders = serializers.IntegerField()
    active_agents = serializers.IntegerField()
    recent_orders = OrderSerializer(many=True)
    revenue_by_month = MonthlyRevenueSerializer(many=True)


class AgentStatsSerializer(serializers.Serializer):
    total_earnings = serializers.DecimalField(max_digits=14, decimal_places=2)
    agent_share = serializers.DecimalField(max_digits=14, decimal_places=2)
    completed_orders = serializers.IntegerField()
    in_progress_orders = serializers.IntegerField()


class UserCountsSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    super_admins = serializers.IntegerField()
    agents = serializers.IntegerField()
    regular_users = serializers.IntegerField()

from django.contrib.auth.models import User
from rest_framework import serializers

from services_app.api.serializers import ServiceSummarySerializer
from ..models import Order, OrderStatusHistory


class OrderPartySerializer(serializers.ModelSerializer):
    """The buyer or seller of an order as shown in order listings."""

    class Meta:
        model = User
        fields = ['id', 'username', 'email']


class OrderSerializer(serializers.ModelSerializer):
    """
    Read representation of an Order.

    Orders are never created or edited through this serializer: checkout creates them and the
    lifecycle actions change them, so every field is read-only.
    """
    buyer = OrderPartySerializer(read_only=True)
    seller = OrderPartySerializer(read_only=True)
    service = ServiceSummarySerializer(read_only=True)
    created_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)
    updated_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)
    completed_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'buyer',
            'seller',
            'service',
            'amount',
            'platform_commission_rate',
            'platform_commission',
            'agent_earnings',
            'status',
            'requirements',
            'delivery_message',
            'created_at',
            'updated_at',
            'completed_at',
        ]
        read_only_fields = fields


class OrderStatusHistorySerializer(serializers.ModelSerializer):
    changed_by = serializers.CharField(source='changed_by.username', read_only=True)
    created_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)

    class Meta:
        model = OrderStatusHistory
        fields = ['id', 'status', 'changed_by', 'note', 'created_at']


class StrictInputSerializer(serializers.Serializer):
    """
    Rejects payload keys that the serializer does not declare.

    DRF silently drops unknown keys by default; for the order actions a misspelled field would
    otherwise be ignored without notice.
    """

    def validate(self, data):
        extra_fields = set(self.initial_data.keys()) - set(self.fields.keys())
        if extra_fields:
            raise serializers.ValidationError(
                f"Unrecognized fields provided: {', '.join(sorted(extra_fields))}"
            )
        return data


class AssignOrderSerializer(StrictInputSerializer):
    """
    Input of the assignment action.

    Input Fields:
        - agent_id (int): The user the order is assigned to.
        - commission_rate (decimal string, optional): Overrides the platform default rate. Parsed
          by the lifecycle so malformed or out-of-range values fail as `InvalidCommissionRate`.
    """
    agent_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.select_related('profile'),
        source='agent'
    )
    commission_rate = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class OrderStatusUpdateSerializer(StrictInputSerializer):
    """
    Input of the status action.

    The status is accepted as plain text; whether it is a known status and a legal move from
    the current one is decided by the lifecycle functions.
    """
    status = serializers.CharField(max_length=30)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    delivery_message = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RequirementsSerializer(StrictInputSerializer):
    requirements = serializers.CharField(allow_blank=False, max_length=5000)


class CommissionPreviewSerializer(serializers.Serializer):
    """
    Query parameters of the commission preview.

    Both values are kept as text so the commission module reports malformed numbers with the
    same errors it raises for out-of-range values.
    """
    amount = serializers.CharField()
    rate = serializers.CharField(required=False, allow_blank=True)


class CommissionSplitSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    rate = serializers.DecimalField(max_digits=5, decimal_places=2)
    platform_commission = serializers.DecimalField(max_digits=12, decimal_places=2)
    agent_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)


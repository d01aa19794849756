from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders_app import lifecycle
from orders_app.commission import compute_split, validate_amount, parse_commission_rate
from platform_stats_app.reports import pending_orders
from settings_app.provider import get_default_commission_rate
from user_auth_app.api.permissions import HasCapability
from user_auth_app.roles import Capability
from .filters import OrderFilter
from .serializers import (
    AssignOrderSerializer,
    CommissionPreviewSerializer,
    CommissionSplitSerializer,
    OrderSerializer,
    OrderStatusHistorySerializer,
    OrderStatusUpdateSerializer,
    RequirementsSerializer,
)


class OrderViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   mixins.DestroyModelMixin,
                   viewsets.GenericViewSet):
    """
    Read access to orders plus the lifecycle actions.

    - `GET /api/orders/`: Orders visible to the caller (admin: all, agent: own sales,
      user: own purchases). Filter with `status`, `seller_id`, `buyer_id`, `unassigned`.
    - `GET /api/orders/{id}/`: A single visible order.
    - `DELETE /api/orders/{id}/`: Soft delete (super admin).
    - `POST /api/orders/{id}/assign/`: Assign to an agent, optionally at a custom rate (super admin).
    - `POST /api/orders/{id}/accept/`: Claim a pending order (agent).
    - `POST /api/orders/{id}/status/`: Move the order along the lifecycle (agent or super admin).
    - `POST /api/orders/{id}/requirements/`: Submit the brief (buyer).
    - `GET /api/orders/{id}/history/`: Status history of a visible order.
    - `GET /api/orders/pending/`: Unassigned pending orders (agent).
    - `GET /api/orders/commission-preview/?amount=&rate=`: Split preview (super admin).

    Orders are created by checkout, not through this API. Workflow errors raised by the
    lifecycle functions are `APIException`s and become responses with their own status codes.
    """
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    filterset_class = OrderFilter
    # Listings are small and the dashboards expect plain lists.
    pagination_class = None

    required_capabilities = {
        'list': Capability.VIEW_ORDERS,
        'retrieve': Capability.VIEW_ORDERS,
        'history': Capability.VIEW_ORDERS,
        'destroy': Capability.DELETE_ORDER,
        'assign': Capability.ASSIGN_ORDER,
        'accept': Capability.ACCEPT_ORDER,
        'change_status': Capability.UPDATE_ORDER_STATUS,
        'requirements': Capability.SUBMIT_REQUIREMENTS,
        'pending': Capability.VIEW_PENDING_ORDERS,
        'commission_preview': Capability.PREVIEW_COMMISSION,
    }

    def get_queryset(self):
        return lifecycle.visible_orders(self.request.user)

    def _respond(self, order):
        order = lifecycle.get_order(order.pk, self.request.user)
        return Response(OrderSerializer(order).data)

    def destroy(self, request, *args, **kwargs):
        lifecycle.soft_delete(kwargs['pk'], request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def assign(self, request, pk=None):
        serializer = AssignOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        custom_rate = serializer.validated_data.get('commission_rate')
        order = lifecycle.assign(
            pk,
            serializer.validated_data['agent'],
            request.user,
            custom_rate=custom_rate if custom_rate not in (None, '') else None,
        )
        return self._respond(order)

    @action(detail=True, methods=['post'])
    def accept(self, request, pk=None):
        order = lifecycle.accept_pending(pk, request.user)
        return self._respond(order)

    @action(detail=True, methods=['post', 'patch'], url_path='status', url_name='status')
    def change_status(self, request, pk=None):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        order = lifecycle.update_status(
            pk,
            data['status'],
            request.user,
            note=data.get('note') or None,
            delivery_message=data.get('delivery_message'),
        )
        return self._respond(order)

    @action(detail=True, methods=['post'])
    def requirements(self, request, pk=None):
        serializer = RequirementsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = lifecycle.submit_requirements(pk, request.user, serializer.validated_data['requirements'])
        return self._respond(order)

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        order = lifecycle.get_order(pk, request.user)
        entries = order.status_history.select_related('changed_by')
        return Response(OrderStatusHistorySerializer(entries, many=True).data)

    @action(detail=False, methods=['get'])
    def pending(self, request):
        return Response(OrderSerializer(pending_orders(), many=True).data)

    @action(detail=False, methods=['get'], url_path='commission-preview', url_name='commission-preview')
    def commission_preview(self, request):
        """
        Shows how an amount would be split at a given rate without touching any order.
        The platform default rate is used when `rate` is omitted.
        """
        params = CommissionPreviewSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        amount = validate_amount(params.validated_data['amount'])
        rate = params.validated_data.get('rate')
        rate = parse_commission_rate(rate) if rate not in (None, '') else get_default_commission_rate()

        split = compute_split(amount, rate)
        return Response(CommissionSplitSerializer({
            'amount': amount,
            'rate': rate,
            'platform_commission': split.platform_commission,
            'agent_earnings': split.agent_earnings,
        }).data)

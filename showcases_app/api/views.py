import logging

from django.db import transaction
from django.utils import timezone
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from showcases_app.models import Showcase
from user_auth_app.api.permissions import HasCapability
from user_auth_app.roles import Capability, has_capability
from .filters import ShowcaseFilter
from .serializers import ShowcaseReorderSerializer, ShowcaseSerializer, ShowcaseStatusSerializer

logger = logging.getLogger(__name__)


class ShowcaseViewSet(viewsets.ModelViewSet):
    """
    Portfolio items for the landing page.

    - `GET /api/showcases/`: Active items by `order` (public); administrators also see inactive ones.
    - `GET /api/showcases/{id}/`: A single item.
    - `POST /api/showcases/`, `PATCH/PUT /api/showcases/{id}/`: Create or edit (super admin).
    - `DELETE /api/showcases/{id}/`: Soft delete (super admin).
    - `POST /api/showcases/{id}/status/`: Sets `is_active` (super admin).
    - `POST /api/showcases/reorder/`: `{"ids": [...]}`; each item's position becomes its `order`
      (super admin).
    """
    serializer_class = ShowcaseSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ShowcaseFilter
    ordering_fields = ['order', 'created_at']
    pagination_class = None

    required_capabilities = {
        'create': Capability.MANAGE_SHOWCASES,
        'update': Capability.MANAGE_SHOWCASES,
        'partial_update': Capability.MANAGE_SHOWCASES,
        'destroy': Capability.MANAGE_SHOWCASES,
        'set_status': Capability.MANAGE_SHOWCASES,
        'reorder': Capability.MANAGE_SHOWCASES,
    }

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            self.permission_classes = [AllowAny]
        else:
            self.permission_classes = [IsAuthenticated, HasCapability]
        return super().get_permissions()

    def get_queryset(self):
        queryset = Showcase.objects.all()
        if not has_capability(self.request.user, Capability.MANAGE_SHOWCASES):
            queryset = queryset.active()
        return queryset.order_by('order', 'created_at')

    def perform_destroy(self, instance):
        instance.soft_delete()
        logger.info("Showcase %s soft-deleted by %s", instance.pk, self.request.user.pk)

    @action(detail=True, methods=['post'], url_path='status', url_name='status')
    def set_status(self, request, pk=None):
        showcase = self.get_object()
        serializer = ShowcaseStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        showcase.is_active = serializer.validated_data['is_active']
        showcase.save(update_fields=['is_active', 'updated_at'])
        return Response(self.get_serializer(showcase).data)

    @action(detail=False, methods=['post'])
    def reorder(self, request):
        serializer = ShowcaseReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = serializer.validated_data['ids']

        now = timezone.now()
        with transaction.atomic():
            for position, showcase_id in enumerate(ids):
                Showcase.objects.filter(pk=showcase_id).update(order=position, updated_at=now)
        logger.info("Showcases reordered by %s", request.user.pk)

        return Response(self.get_serializer(self.get_queryset(), many=True).data)

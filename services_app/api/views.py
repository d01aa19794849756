import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from services_app.models import Service
from user_auth_app.api.permissions import HasCapability
from user_auth_app.roles import Capability, has_capability
from .filters import ServiceFilter
from .pagination import CataloguePagination
from .serializers import ServiceSerializer

logger = logging.getLogger(__name__)


class ServiceViewSet(viewsets.ModelViewSet):
    """
    Manages the service catalogue.

    - `GET /api/services/`: Public, paginated list of active services (filter, search, order).
    - `GET /api/services/{slug}/`: Public detail page of an active service.
    - `POST /api/services/`: Creates a service (super admin).
    - `PATCH/PUT /api/services/{slug}/`: Updates a service (super admin).
    - `DELETE /api/services/{slug}/`: Soft deletes a service (super admin).
    - `POST /api/services/{slug}/toggle-active/`: Shows or hides a service (super admin).

    Administrators see inactive services as well; nobody sees soft-deleted ones.
    """
    serializer_class = ServiceSerializer
    pagination_class = CataloguePagination
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = ServiceFilter
    search_fields = ['name', 'description']
    ordering_fields = ['created_at', 'price', 'delivery_time']
    lookup_field = 'slug'

    required_capabilities = {
        'create': Capability.MANAGE_SERVICES,
        'update': Capability.MANAGE_SERVICES,
        'partial_update': Capability.MANAGE_SERVICES,
        'destroy': Capability.MANAGE_SERVICES,
        'toggle_active': Capability.MANAGE_SERVICES,
    }

    def get_permissions(self):
        """
        Browsing the catalogue is public; every write action requires the
        `manage_services` capability.
        """
        if self.action in ['list', 'retrieve']:
            self.permission_classes = [AllowAny]
        else:
            self.permission_classes = [IsAuthenticated, HasCapability]
        return super().get_permissions()

    def get_queryset(self):
        queryset = Service.objects.all()
        if not has_capability(self.request.user, Capability.MANAGE_SERVICES):
            queryset = queryset.active()
        return queryset.order_by('-created_at')

    def perform_create(self, serializer):
        service = serializer.save()
        logger.info("Service %s (%s) created by %s", service.pk, service.slug, self.request.user.pk)

    def perform_destroy(self, instance):
        instance.soft_delete()
        logger.info("Service %s soft-deleted by %s", instance.pk, self.request.user.pk)

    @action(detail=True, methods=['post'], url_path='toggle-active')
    def toggle_active(self, request, slug=None):
        """Flips `is_active`, or sets it explicitly when the body contains `is_active`."""
        service = self.get_object()
        requested = request.data.get('is_active')
        if requested is None:
            service.is_active = not service.is_active
        else:
            service.is_active = str(requested).lower() in ('1', 'true', 'yes', 'on')
        service.save(update_fields=['is_active', 'updated_at'])
        return Response(self.get_serializer(service).data, status=status.HTTP_200_OK)

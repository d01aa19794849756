import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from invitations_app import workflow
from invitations_app.exceptions import InvalidInvitation
from invitations_app.models import Invitation
from user_auth_app.api.permissions import HasCapability
from user_auth_app.roles import Capability
from .filters import InvitationFilter
from .serializers import (
    AcceptInvitationSerializer,
    InvitationCreateSerializer,
    InvitationPublicSerializer,
    InvitationSerializer,
)

logger = logging.getLogger(__name__)


class InvitationViewSet(mixins.ListModelMixin,
                        mixins.RetrieveModelMixin,
                        mixins.CreateModelMixin,
                        mixins.DestroyModelMixin,
                        viewsets.GenericViewSet):
    """
    Invitations for new agents, administrators and users.

    - `GET /api/invitations/`: All invitations, newest first (super admin).
    - `GET /api/invitations/pending/`: Unaccepted, unexpired invitations (super admin).
    - `POST /api/invitations/`: Invites `email` with `role`; valid for seven days (super admin).
    - `DELETE /api/invitations/{id}/`: Withdraws an invitation (super admin).
    - `POST /api/invitations/{id}/resend/`: Restarts the validity period (super admin).
    - `GET /api/invitations/lookup/?token=`: Public details of a pending invitation.
    - `POST /api/invitations/accept/`: Redeems `token` for the account registered as `email`.
    """
    queryset = Invitation.objects.select_related('invited_by')
    serializer_class = InvitationSerializer
    filterset_class = InvitationFilter
    pagination_class = None

    required_capabilities = {
        'list': Capability.MANAGE_INVITATIONS,
        'retrieve': Capability.MANAGE_INVITATIONS,
        'create': Capability.MANAGE_INVITATIONS,
        'destroy': Capability.MANAGE_INVITATIONS,
        'pending': Capability.MANAGE_INVITATIONS,
        'resend': Capability.MANAGE_INVITATIONS,
    }

    def get_permissions(self):
        """Looking up and accepting an invitation only needs the token."""
        if self.action in ['lookup', 'accept']:
            self.permission_classes = [AllowAny]
        else:
            self.permission_classes = [IsAuthenticated, HasCapability]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = InvitationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        invitation = workflow.create_invitation(
            serializer.validated_data['email'],
            serializer.validated_data['role'],
            request.user,
        )
        return Response(InvitationSerializer(invitation).data, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance):
        logger.info("Invitation %s withdrawn by user %s", instance.pk, self.request.user.pk)
        instance.delete()

    @action(detail=False, methods=['get'])
    def pending(self, request):
        invitations = self.filter_queryset(self.get_queryset().pending())
        return Response(InvitationSerializer(invitations, many=True).data)

    @action(detail=True, methods=['post'])
    def resend(self, request, pk=None):
        invitation = workflow.resend_invitation(self.get_object())
        return Response(InvitationSerializer(invitation).data)

    @action(detail=False, methods=['get'])
    def lookup(self, request):
        invitation = workflow.get_pending_invitation(request.query_params.get('token', ''))
        if invitation is None:
            raise InvalidInvitation()
        return Response(InvitationPublicSerializer(invitation).data)

    @action(detail=False, methods=['post'])
    def accept(self, request):
        serializer = AcceptInvitationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        invitation = workflow.accept_invitation(
            serializer.validated_data['token'],
            serializer.validated_data['email'],
        )
        return Response({'success': True, 'role': invitation.role})

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from settings_app.provider import (
    get_default_commission_rate,
    list_platform_settings,
    update_default_commission_rate,
)
from user_auth_app.api.permissions import HasCapability
from user_auth_app.roles import Capability
from .serializers import CommissionRateSerializer, PlatformSettingSerializer


class CommissionRateView(APIView):
    """
    Reads or changes the platform default commission rate.

    Endpoint:
        GET /api/settings/commission-rate/
        PUT /api/settings/commission-rate/  {"rate": "15.00"}

    Responses:
        - 200 OK: `{"rate": "<percentage>"}`.
        - 400 Bad Request: The rate is not a number within [0, 100].
        - 403 Forbidden: The caller is not a super admin.
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {
        'get': Capability.MANAGE_SETTINGS,
        'put': Capability.MANAGE_SETTINGS,
        'patch': Capability.MANAGE_SETTINGS,
    }

    def get(self, request):
        return Response({'rate': str(get_default_commission_rate())})

    def put(self, request):
        serializer = CommissionRateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rate = update_default_commission_rate(serializer.validated_data['rate'], request.user)
        return Response({'rate': str(rate)})

    patch = put


class PlatformSettingListView(APIView):
    """
    Lists every stored platform setting for the admin settings page.

    Endpoint:
        GET /api/settings/
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {'get': Capability.MANAGE_SETTINGS}

    def get(self, request):
        # Makes sure the commission rate row exists before the first listing.
        get_default_commission_rate()
        serializer = PlatformSettingSerializer(list_platform_settings(), many=True)
        return Response(serializer.data)

import logging

from django.contrib.auth.models import User
from rest_framework import generics, status
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.authtoken.models import Token
from rest_framework.authtoken.views import ObtainAuthToken
from rest_framework.filters import SearchFilter
from django_filters.rest_framework import DjangoFilterBackend

from user_auth_app.models import UserProfile
from user_auth_app.roles import ASSIGNABLE_ROLES, Capability
from .filters import UserFilter
from .permissions import HasCapability
from .serializers import (
    AssigneeSerializer,
    CustomAuthTokenSerializer,
    RegistrationSerializer,
    UserAccountSerializer,
    UserRoleUpdateSerializer,
)

logger = logging.getLogger(__name__)


def _token_payload(user, token):
    return {
        'token': token.key,
        'username': user.username,
        'email': user.email,
        'user_id': user.id,
        'role': user.profile.role,
    }


class RegistrationView(APIView):
    """
    Handles new user registration.

    Endpoint:
        POST /api/registration/

    Responses:
        - 201 Created: Returns the auth token and basic user details.
        - 400 Bad Request: The provided data was invalid (e.g., passwords don't match, email
          already exists).
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)

        if serializer.is_valid():
            saved_account = serializer.save()
            token, created = Token.objects.get_or_create(user=saved_account)
            logger.info("Registered user %s", saved_account.pk)
            return Response(_token_payload(saved_account, token), status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class CustomLoginView(ObtainAuthToken):
    """
    Handles user authentication and token generation.

    Endpoint:
        POST /api/login/

    Responses:
        - 200 OK: Returns the auth token, the user details and the role of the account.
        - 400 Bad Request: Invalid credentials, missing fields or a banned account.
    """
    permission_classes = [AllowAny]
    serializer_class = CustomAuthTokenSerializer

    def post(self, request):
        serializer = self.serializer_class(
            data=request.data,
            context={'request': request}
        )

        if serializer.is_valid():
            user = serializer.validated_data['user']
            token, created = Token.objects.get_or_create(user=user)
            return Response(_token_payload(user, token), status=status.HTTP_200_OK)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class UserListView(generics.ListAPIView):
    """
    Lists every account for the user management page.

    Endpoint:
        GET /api/users/?role=agent&banned=false&search=name
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {'get': Capability.MANAGE_USERS}
    serializer_class = UserAccountSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_class = UserFilter
    search_fields = ['username', 'email', 'first_name', 'last_name']

    def get_queryset(self):
        return User.objects.select_related('profile').order_by('-date_joined')


class UserDetailView(generics.RetrieveUpdateAPIView):
    """
    Shows a single account and lets an administrator change its role or ban it.

    The profile is looked up through the associated User's primary key from the URL.

    Endpoint:
        GET/PATCH /api/users/{user_id}/
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {
        'get': Capability.MANAGE_USERS,
        'patch': Capability.MANAGE_USERS,
        'put': Capability.MANAGE_USERS,
    }
    queryset = UserProfile.objects.select_related('user')
    serializer_class = UserRoleUpdateSerializer
    lookup_field = 'user__pk'
    lookup_url_kwarg = 'pk'

    def retrieve(self, request, *args, **kwargs):
        profile = self.get_object()
        return Response(UserAccountSerializer(profile.user).data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        profile = self.get_object()
        serializer = self.get_serializer(profile, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        logger.info(
            "User %s updated by %s: role=%s banned=%s",
            profile.user_id, request.user.pk, profile.role, profile.banned,
        )
        return Response(UserAccountSerializer(profile.user).data)


class AvailableAgentsView(generics.ListAPIView):
    """
    Lists the accounts an order can be assigned to: agents and super admins who are not banned.
    Super admins come first, then everyone alphabetically.

    Endpoint:
        GET /api/agents/
    """
    permission_classes = [IsAuthenticated, HasCapability]
    required_capabilities = {'get': Capability.ASSIGN_ORDER}
    serializer_class = AssigneeSerializer
    pagination_class = None

    def get_queryset(self):
        return (
            User.objects.select_related('profile')
            .filter(profile__role__in=ASSIGNABLE_ROLES, profile__banned=False)
            .order_by('-profile__role', 'username')
        )

from rest_framework import serializers

from invitations_app.models import Invitation
from user_auth_app.models import UserProfile


class InvitationSerializer(serializers.ModelSerializer):
    """
    Administrator view of an invitation, including the token the invitee has to present.
    """
    invited_by = serializers.CharField(source='invited_by.username', read_only=True)
    is_pending = serializers.BooleanField(read_only=True)
    expires_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)
    created_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)
    accepted_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)

    class Meta:
        model = Invitation
        fields = [
            'id',
            'email',
            'role',
            'token',
            'invited_by',
            'accepted',
            'is_pending',
            'expires_at',
            'created_at',
            'accepted_at',
        ]
        read_only_fields = fields


class InvitationCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=UserProfile.Role.choices)


class InvitationPublicSerializer(serializers.ModelSerializer):
    """What an invitee sees when opening an invitation link: no token, no inviter details."""
    expires_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)

    class Meta:
        model = Invitation
        fields = ['email', 'role', 'expires_at']


class AcceptInvitationSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=64)
    email = serializers.EmailField()

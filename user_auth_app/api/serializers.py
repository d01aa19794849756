from rest_framework import serializers
from django.contrib.auth.models import User
from django.contrib.auth import authenticate
from django.db import transaction

from invitations_app.workflow import accept_invitation, get_pending_invitation
from user_auth_app.models import UserProfile


class UserAccountSerializer(serializers.ModelSerializer):
    """
    Serializes a User together with its profile role for the admin user management pages.
    """
    role = serializers.CharField(source='profile.role', read_only=True)
    banned = serializers.BooleanField(source='profile.banned', read_only=True)
    date_joined = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'role', 'banned', 'date_joined']


class UserRoleUpdateSerializer(serializers.ModelSerializer):
    """
    Updates the role and ban flag of an account.

    Administrators may not change their own role or ban themselves; otherwise a platform could
    end up without anybody able to manage it.
    """
    class Meta:
        model = UserProfile
        fields = ['role', 'banned']

    def validate(self, data):
        request = self.context.get('request')
        if request is not None and self.instance is not None and self.instance.user_id == request.user.id:
            if data.get('role', self.instance.role) != self.instance.role:
                raise serializers.ValidationError({'role': 'You cannot change your own role.'})
            if data.get('banned'):
                raise serializers.ValidationError({'banned': 'You cannot ban yourself.'})
        return data


class AssigneeSerializer(serializers.ModelSerializer):
    """A minimal representation of a user that orders can be assigned to."""
    role = serializers.CharField(source='profile.role', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'role']


class RegistrationSerializer(serializers.ModelSerializer):
    """
    Creates a buyer account from the public sign-up form.

    The password has to be typed twice (`repeated_password`) and the email address must not be
    used by another account, compared case-insensitively. Accounts start with the 'user' role
    unless a valid `invitation_token` for the same address is supplied, in which case the
    invitation is redeemed and its role applied.
    """
    email = serializers.EmailField()
    repeated_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    invitation_token = serializers.CharField(write_only=True, required=False, allow_blank=True)

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'repeated_password', 'invitation_token']
        extra_kwargs = {'password': {'write_only': True, 'style': {'input_type': 'password'}}}

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('This email address already exists.')
        return value

    def validate(self, data):
        if data['password'] != data.pop('repeated_password'):
            raise serializers.ValidationError({'password': 'Passwords must match.'})
        token = data.get('invitation_token')
        if token and get_pending_invitation(token, data['email']) is None:
            raise serializers.ValidationError({'invitation_token': 'Invalid or expired invitation.'})
        return data

    def create(self, validated_data):
        token = validated_data.pop('invitation_token', None)
        with transaction.atomic():
            # The post_save signal attaches a profile with the default role.
            user = User.objects.create_user(**validated_data)
            if token:
                accept_invitation(token, user.email)
                user.profile.refresh_from_db()
        return user


class CustomAuthTokenSerializer(serializers.Serializer):
    """
    Authenticates a user based on username and password.

    On success the authenticated user object is attached to the validated data, so the view
    can issue a token for it.
    """
    username = serializers.CharField()
    password = serializers.CharField(
        label="Password",
        style={'input_type': 'password'},
        trim_whitespace=False
    )

    def validate(self, attrs):
        username = attrs.get('username')
        password = attrs.get('password')

        if not (username and password):
            msg = 'Must include "username" and "password".'
            raise serializers.ValidationError(msg, code='authorization')

        user = authenticate(
            request=self.context.get('request'),
            username=username,
            password=password
        )

        if not user:
            msg = 'Unable to log in with provided credentials.'
            raise serializers.ValidationError(msg, code='authorization')

        profile = getattr(user, 'profile', None)
        if profile is not None and profile.banned:
            raise serializers.ValidationError('This account has been banned.', code='authorization')

        attrs['user'] = user
        return attrs

"""
Creating, renewing and redeeming invitations.

An invitation is pending while it is neither accepted nor expired. Only one pending invitation
may exist per email address, and addresses that already belong to an account cannot be invited.
"""
import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import User
from django.db import transaction
from django.utils import timezone

from user_auth_app.models import UserProfile
from .exceptions import EmailAlreadyRegistered, InvalidInvitation, InvitationAlreadyPending
from .models import Invitation

logger = logging.getLogger(__name__)


def expiry_from(now=None):
    now = now or timezone.now()
    return now + timedelta(days=settings.MARKETPLACE_INVITATION_VALID_DAYS)


def create_invitation(email, role, invited_by):
    """
    Invites `email` to join with `role`.

    Returns:
        Invitation: the new invitation with a fresh 64 character hex token.

    Raises:
        EmailAlreadyRegistered: an account already uses the address.
        InvitationAlreadyPending: the address has an unexpired, unaccepted invitation.
    """
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegistered()
    if Invitation.objects.for_email(email).pending().exists():
        raise InvitationAlreadyPending()

    invitation = Invitation.objects.create(
        email=email,
        role=role,
        token=secrets.token_hex(32),
        invited_by=invited_by,
        expires_at=expiry_from(),
    )
    logger.info("Invitation %s for role %s created by user %s", invitation.pk, role, invited_by.pk)
    return invitation


def resend_invitation(invitation):
    """
    Renews the validity period of an invitation that has not been used yet.

    Raises:
        InvalidInvitation: the invitation was already accepted.
    """
    if invitation.accepted:
        raise InvalidInvitation('This invitation has already been accepted.')
    invitation.expires_at = expiry_from()
    invitation.save(update_fields=['expires_at'])
    logger.info("Invitation %s renewed until %s", invitation.pk, invitation.expires_at)
    return invitation


def get_pending_invitation(token, email=None):
    """Returns the pending invitation for `token` (and `email`, if given) or None."""
    queryset = Invitation.objects.pending().filter(token=token)
    if email is not None:
        queryset = queryset.for_email(email)
    return queryset.first()


def accept_invitation(token, email):
    """
    Redeems an invitation and gives the account registered under `email` the invited role.

    Raises:
        InvalidInvitation: no pending invitation matches token and email, or no account uses
            the invited address yet.
    """
    with transaction.atomic():
        invitation = (
            Invitation.objects.pending()
            .for_email(email)
            .select_for_update()
            .filter(token=token)
            .first()
        )
        if invitation is None:
            raise InvalidInvitation()

        profiles = UserProfile.objects.filter(user__email__iexact=email)
        if not profiles.exists():
            raise InvalidInvitation('No account uses the invited email address.')
        profiles.update(role=invitation.role)

        invitation.accepted = True
        invitation.accepted_at = timezone.now()
        invitation.save(update_fields=['accepted', 'accepted_at'])

    logger.info("Invitation %s accepted; role %s granted", invitation.pk, invitation.role)
    return invitation

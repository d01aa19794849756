from rest_framework import status
from rest_framework.exceptions import APIException


class InvitationError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The invitation could not be processed.'
    default_code = 'invitation_error'


class EmailAlreadyRegistered(InvitationError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A user with this email already exists.'
    default_code = 'email_already_registered'


class InvitationAlreadyPending(InvitationError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'An invitation for this email is already pending.'
    default_code = 'invitation_already_pending'


class InvalidInvitation(InvitationError):
    """No pending invitation matches the token and email, or it has expired."""
    default_detail = 'Invalid or expired invitation.'
    default_code = 'invalid_invitation'

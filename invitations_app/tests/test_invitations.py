from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from invitations_app import workflow
from invitations_app.exceptions import EmailAlreadyRegistered, InvalidInvitation, InvitationAlreadyPending
from invitations_app.models import Invitation
from user_auth_app.models import UserProfile
from user_auth_app.tests.utils import create_user_with_role

Role = UserProfile.Role


class InvitationWorkflowTests(TestCase):

    def setUp(self):
        self.admin = create_user_with_role('admin', Role.SUPER_ADMIN)

    def test_create_sets_token_and_seven_day_expiry(self):
        before = timezone.now()
        invitation = workflow.create_invitation('new.agent@example.com', Role.AGENT, self.admin)

        self.assertEqual(len(invitation.token), 64)
        self.assertEqual(invitation.invited_by, self.admin)
        self.assertFalse(invitation.accepted)
        self.assertTrue(invitation.is_pending)
        self.assertGreaterEqual(invitation.expires_at, before + timedelta(days=7))
        self.assertLessEqual(invitation.expires_at, timezone.now() + timedelta(days=7))

    def test_existing_account_cannot_be_invited(self):
        create_user_with_role('taken', Role.USER, email='taken@example.com')
        with self.assertRaises(EmailAlreadyRegistered):
            workflow.create_invitation('Taken@Example.com', Role.AGENT, self.admin)

    def test_second_pending_invitation_is_rejected(self):
        workflow.create_invitation('twice@example.com', Role.AGENT, self.admin)
        with self.assertRaises(InvitationAlreadyPending):
            workflow.create_invitation('twice@example.com', Role.SUPER_ADMIN, self.admin)

    def test_expired_invitation_does_not_block_a_new_one(self):
        first = workflow.create_invitation('late@example.com', Role.AGENT, self.admin)
        Invitation.objects.filter(pk=first.pk).update(expires_at=timezone.now() - timedelta(minutes=1))

        second = workflow.create_invitation('late@example.com', Role.AGENT, self.admin)
        self.assertNotEqual(first.token, second.token)

    def test_resend_extends_expiry(self):
        invitation = workflow.create_invitation('resend@example.com', Role.AGENT, self.admin)
        Invitation.objects.filter(pk=invitation.pk).update(expires_at=timezone.now() - timedelta(days=1))
        invitation.refresh_from_db()
        self.assertFalse(invitation.is_pending)

        workflow.resend_invitation(invitation)

        invitation.refresh_from_db()
        self.assertTrue(invitation.is_pending)

    def test_accept_grants_role(self):
        invitation = workflow.create_invitation('joiner@example.com', Role.AGENT, self.admin)
        joiner = create_user_with_role('joiner', Role.USER, email='joiner@example.com')

        workflow.accept_invitation(invitation.token, 'joiner@example.com')

        invitation.refresh_from_db()
        joiner.profile.refresh_from_db()
        self.assertTrue(invitation.accepted)
        self.assertIsNotNone(invitation.accepted_at)
        self.assertEqual(joiner.profile.role, Role.AGENT)

    def test_accept_needs_matching_email(self):
        invitation = workflow.create_invitation('joiner@example.com', Role.AGENT, self.admin)
        create_user_with_role('someone', Role.USER, email='someone@example.com')

        with self.assertRaises(InvalidInvitation):
            workflow.accept_invitation(invitation.token, 'someone@example.com')

    def test_invitation_can_be_used_once(self):
        invitation = workflow.create_invitation('joiner@example.com', Role.AGENT, self.admin)
        create_user_with_role('joiner', Role.USER, email='joiner@example.com')
        workflow.accept_invitation(invitation.token, 'joiner@example.com')

        with self.assertRaises(InvalidInvitation):
            workflow.accept_invitation(invitation.token, 'joiner@example.com')
        with self.assertRaises(InvalidInvitation):
            workflow.resend_invitation(invitation)

    def test_expired_invitation_cannot_be_accepted(self):
        invitation = workflow.create_invitation('joiner@example.com', Role.AGENT, self.admin)
        create_user_with_role('joiner', Role.USER, email='joiner@example.com')
        Invitation.objects.filter(pk=invitation.pk).update(expires_at=timezone.now() - timedelta(seconds=1))

        with self.assertRaises(InvalidInvitation):
            workflow.accept_invitation(invitation.token, 'joiner@example.com')

    def test_accept_without_account_is_rejected(self):
        invitation = workflow.create_invitation('ghost@example.com', Role.AGENT, self.admin)
        with self.assertRaises(InvalidInvitation):
            workflow.accept_invitation(invitation.token, 'ghost@example.com')

        invitation.refresh_from_db()
        self.assertFalse(invitation.accepted)


class InvitationAPITests(APITestCase):

    def setUp(self):
        self.admin = create_user_with_role('admin', Role.SUPER_ADMIN)
        self.agent = create_user_with_role('agent', Role.AGENT)

    def test_admin_creates_invitation(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            reverse('invitation-list'), {'email': 'designer@example.com', 'role': 'agent'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['role'], 'agent')
        self.assertEqual(response.data['invited_by'], 'admin')
        self.assertTrue(response.data['is_pending'])
        self.assertEqual(len(response.data['token']), 64)

    def test_duplicate_pending_invitation_is_conflict(self):
        workflow.create_invitation('designer@example.com', Role.AGENT, self.admin)
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            reverse('invitation-list'), {'email': 'designer@example.com', 'role': 'agent'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['detail'].code, 'invitation_already_pending')

    def test_unknown_role_is_rejected(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            reverse('invitation-list'), {'email': 'designer@example.com', 'role': 'owner'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', response.data)

    def test_pending_list_leaves_out_accepted_and_expired(self):
        pending = workflow.create_invitation('pending@example.com', Role.AGENT, self.admin)
        expired = workflow.create_invitation('expired@example.com', Role.AGENT, self.admin)
        Invitation.objects.filter(pk=expired.pk).update(expires_at=timezone.now() - timedelta(days=1))
        self.client.force_authenticate(user=self.admin)

        everything = self.client.get(reverse('invitation-list'))
        only_pending = self.client.get(reverse('invitation-pending'))

        self.assertEqual(len(everything.data), 2)
        self.assertEqual([item['id'] for item in only_pending.data], [str(pending.pk)])

    def test_resend_and_delete(self):
        invitation = workflow.create_invitation('resend@example.com', Role.AGENT, self.admin)
        self.client.force_authenticate(user=self.admin)

        resent = self.client.post(reverse('invitation-resend', kwargs={'pk': invitation.pk}))
        deleted = self.client.delete(reverse('invitation-detail', kwargs={'pk': invitation.pk}))

        self.assertEqual(resent.status_code, status.HTTP_200_OK)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Invitation.objects.filter(pk=invitation.pk).exists())

    def test_agent_cannot_manage_invitations(self):
        self.client.force_authenticate(user=self.agent)
        response = self.client.post(
            reverse('invitation-list'), {'email': 'designer@example.com', 'role': 'agent'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.get(reverse('invitation-list')).status_code, status.HTTP_403_FORBIDDEN)

    def test_public_lookup_hides_token(self):
        invitation = workflow.create_invitation('designer@example.com', Role.AGENT, self.admin)
        response = self.client.get(reverse('invitation-lookup'), {'token': invitation.token})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'designer@example.com')
        self.assertNotIn('token', response.data)

    def test_lookup_with_unknown_token(self):
        response = self.client.get(reverse('invitation-lookup'), {'token': 'nope'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['detail'].code, 'invalid_invitation')

    def test_accept_endpoint_sets_role(self):
        invitation = workflow.create_invitation('designer@example.com', Role.AGENT, self.admin)
        designer = create_user_with_role('designer', Role.USER, email='designer@example.com')

        response = self.client.post(
            reverse('invitation-accept'),
            {'token': invitation.token, 'email': 'designer@example.com'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'success': True, 'role': 'agent'})
        designer.profile.refresh_from_db()
        self.assertEqual(designer.profile.role, Role.AGENT)

    def test_registration_with_invitation_token(self):
        invitation = workflow.create_invitation('designer@example.com', Role.AGENT, self.admin)
        response = self.client.post(reverse('registration'), {
            'username': 'designer',
            'email': 'designer@example.com',
            'password': 'pw-123456',
            'repeated_password': 'pw-123456',
            'invitation_token': invitation.token,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['role'], 'agent')
        invitation.refresh_from_db()
        self.assertTrue(invitation.accepted)

    def test_registration_with_foreign_token_is_rejected(self):
        invitation = workflow.create_invitation('designer@example.com', Role.AGENT, self.admin)
        response = self.client.post(reverse('registration'), {
            'username': 'intruder',
            'email': 'intruder@example.com',
            'password': 'pw-123456',
            'repeated_password': 'pw-123456',
            'invitation_token': invitation.token,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('invitation_token', response.data)

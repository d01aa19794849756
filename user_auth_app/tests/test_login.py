from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from user_auth_app.models import UserProfile
from .utils import create_user_with_role


class LoginTests(APITestCase):
    """
    Token login for every role, including the rejection of banned accounts.
    """

    def setUp(self):
        self.url = reverse('login')
        self.agent = create_user_with_role('fulfilment_agent', UserProfile.Role.AGENT, password='s3cret-pass')

    def login(self, username='fulfilment_agent', password='s3cret-pass'):
        return self.client.post(self.url, {'username': username, 'password': password}, format='json')

    def test_login_returns_token_and_role(self):
        response = self.login()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user_id'], self.agent.pk)
        self.assertEqual(response.data['email'], 'fulfilment_agent@example.com')
        self.assertEqual(response.data['role'], 'agent')
        self.assertTrue(response.data['token'])

    def test_token_is_stable_across_logins(self):
        first = self.login().data['token']
        second = self.login().data['token']
        self.assertEqual(first, second)

    def test_token_authenticates_role_gated_requests(self):
        token = self.login().data['token']
        self.client.credentials(HTTP_AUTHORIZATION=f'Token {token}')

        response = self.client.get(reverse('order-pending'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_wrong_password(self):
        response = self.login(password='not-the-password')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data['non_field_errors'][0],
            'Unable to log in with provided credentials.'
        )

    def test_blank_credentials(self):
        response = self.login(username='', password='')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('username', response.data)

    def test_banned_account_gets_no_token(self):
        self.agent.profile.banned = True
        self.agent.profile.save()

        response = self.login()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['non_field_errors'][0], 'This account has been banned.')
        self.assertNotIn('token', response.data)

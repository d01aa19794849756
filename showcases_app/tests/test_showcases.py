from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from showcases_app.models import Showcase
from user_auth_app.models import UserProfile
from user_auth_app.tests.utils import create_user_with_role


def make_showcase(title, **overrides):
    data = {
        'title': title,
        'description': 'Portfolio piece used in tests.',
        'category': 'Banners',
        'image_url': 'https://cdn.example.com/showcase.png',
    }
    data.update(overrides)
    return Showcase.objects.create(**data)


class PublicShowcaseTests(APITestCase):

    def setUp(self):
        self.second = make_showcase('Second', order=2)
        self.first = make_showcase('First', order=1, category='Motion Graphics')
        self.hidden = make_showcase('Hidden', order=0, is_active=False)
        self.deleted = make_showcase('Deleted', order=0)
        self.deleted.soft_delete()

    def test_lists_active_items_by_order(self):
        response = self.client.get(reverse('showcase-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['title'] for item in response.data], ['First', 'Second'])

    def test_filter_by_category(self):
        response = self.client.get(reverse('showcase-list'), {'category': 'motion graphics'})
        self.assertEqual([item['title'] for item in response.data], ['First'])

    def test_hidden_and_deleted_items_are_not_found(self):
        for showcase in (self.hidden, self.deleted):
            with self.subTest(title=showcase.title):
                response = self.client.get(reverse('showcase-detail', kwargs={'pk': showcase.pk}))
                self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_anonymous_user_cannot_create(self):
        response = self.client.post(reverse('showcase-list'), {'title': 'x'}, format='json')
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))


class ShowcaseAdministrationTests(APITestCase):

    def setUp(self):
        self.admin = create_user_with_role('admin', UserProfile.Role.SUPER_ADMIN)
        self.agent = create_user_with_role('agent', UserProfile.Role.AGENT)
        self.payload = {
            'title': 'Server Trailer',
            'description': 'Cinematic trailer for a roleplay server.',
            'category': 'Motion Graphics',
            'image_url': 'https://cdn.example.com/trailer.png',
        }

    def test_admin_creates_showcase(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse('showcase-list'), self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['order'], 0)
        self.assertTrue(response.data['is_active'])

    def test_invalid_payload(self):
        self.client.force_authenticate(user=self.admin)
        payload = dict(self.payload, image_url='not a url', description='x' * 501)
        response = self.client.post(reverse('showcase-list'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('image_url', response.data)
        self.assertIn('description', response.data)

    def test_agent_cannot_create(self):
        self.client.force_authenticate(user=self.agent)
        response = self.client.post(reverse('showcase-list'), self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_is_soft(self):
        showcase = make_showcase('Old')
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(reverse('showcase-detail', kwargs={'pk': showcase.pk}))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Showcase.objects.filter(pk=showcase.pk).exists())
        self.assertIsNotNone(Showcase.all_objects.get(pk=showcase.pk).deleted_at)

    def test_admin_sees_and_reactivates_hidden_item(self):
        hidden = make_showcase('Hidden', is_active=False)
        self.client.force_authenticate(user=self.admin)

        listed = self.client.get(reverse('showcase-list'))
        response = self.client.post(
            reverse('showcase-status', kwargs={'pk': hidden.pk}), {'is_active': True}, format='json'
        )

        self.assertIn('Hidden', [item['title'] for item in listed.data])
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        hidden.refresh_from_db()
        self.assertTrue(hidden.is_active)

    def test_reorder_sets_positions(self):
        a = make_showcase('A', order=0)
        b = make_showcase('B', order=1)
        c = make_showcase('C', order=2)
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            reverse('showcase-reorder'), {'ids': [str(c.pk), str(a.pk), str(b.pk)]}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['title'] for item in response.data], ['C', 'A', 'B'])
        self.assertEqual(Showcase.objects.get(pk=b.pk).order, 2)

    def test_reorder_rejects_unknown_and_repeated_ids(self):
        a = make_showcase('A')
        self.client.force_authenticate(user=self.admin)

        unknown = self.client.post(
            reverse('showcase-reorder'), {'ids': [str(a.pk), '00000000-0000-0000-0000-000000000000']},
            format='json'
        )
        repeated = self.client.post(reverse('showcase-reorder'), {'ids': [str(a.pk), str(a.pk)]}, format='json')

        self.assertEqual(unknown.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(repeated.status_code, status.HTTP_400_BAD_REQUEST)

"""
Test cases for the clients API.
"""
import json
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from apps.clients.models import BalanceEntry, Client
from apps.core.models import AuditLog


class ApiTestCase(TestCase):
    """Logged-in JSON client helpers."""

    staff = False

    def setUp(self):
        self.user = get_user_model().objects.create_user(
            username='clerk', password='testpass123', is_staff=self.staff,
        )
        self.client.login(username='clerk', password='testpass123')

    def post_json(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type='application/json')

    def put_json(self, url, payload):
        return self.client.put(url, data=json.dumps(payload), content_type='application/json')


class ClientApiTest(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.shop = Client.objects.create(shop_name='Lakshmi Jewellers', client_name='Ravi',
                                          phone_number='9876543210')
        Client.objects.create(shop_name='Kanchana Ornaments', client_name='Suresh',
                              phone_number='9790011223', is_active=False)

    def test_requires_login(self):
        self.client.logout()
        response = self.client.get(reverse('clients:list'))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], "Authentication required")

    def test_list_hides_inactive_by_default(self):
        response = self.client.get(reverse('clients:list'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([c['shopName'] for c in response.json()['clients']], ['Lakshmi Jewellers'])

        response = self.client.get(reverse('clients:list'), {'includeInactive': '1'})
        self.assertEqual(response.json()['count'], 2)

    def test_search_matches_name_shop_and_phone(self):
        for term in ('lakshmi', 'RAVI', '98765'):
            response = self.client.get(reverse('clients:search'), {'query': term})
            self.assertEqual(len(response.json()['clients']), 1, term)

    def test_create_with_opening_balance(self):
        response = self.post_json(reverse('clients:list'), {
            'shopName': 'Sri Balaji', 'clientName': 'Meena', 'phoneNumber': '+91 98450-12345',
            'balance': 2.5,
        })
        self.assertEqual(response.status_code, 201)
        data = response.json()['client']
        self.assertEqual(data['balance'], 2.5)
        self.assertEqual(data['balanceVersion'], 1)

        client = Client.objects.get(pk=data['id'])
        self.assertEqual(client.entries.get().entry_type, BalanceEntry.OPENING)
        self.assertTrue(AuditLog.objects.filter(action_type='create', target_type='client').exists())

    def test_create_validation_errors(self):
        response = self.post_json(reverse('clients:list'), {'shopName': '', 'phoneNumber': 'abc'})
        self.assertEqual(response.status_code, 400)
        errors = response.json()['errors']
        self.assertIn('shop_name', errors)
        self.assertIn('phone_number', errors)

    def test_invalid_json(self):
        response = self.client.post(reverse('clients:list'), data='{not json', content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], "Invalid JSON body")

    def test_update_contact_fields(self):
        response = self.put_json(reverse('clients:detail', args=[self.shop.pk]), {'address': 'Main Road'})
        self.assertEqual(response.status_code, 200)
        self.shop.refresh_from_db()
        self.assertEqual(self.shop.address, 'Main Road')
        self.assertEqual(self.shop.client_name, 'Ravi')

    def test_balance_is_read_only(self):
        response = self.put_json(reverse('clients:detail', args=[self.shop.pk]), {'balance': 99})
        self.assertEqual(response.status_code, 400)
        self.assertIn('balance', response.json()['errors'])

        response = self.put_json(reverse('clients:detail', args=[self.shop.pk]), {'balance': 0})
        self.assertEqual(response.status_code, 200)

    def test_missing_client_is_404(self):
        response = self.client.get(reverse('clients:detail', args=[9999]))
        self.assertEqual(response.status_code, 404)

    def test_delete_requires_staff(self):
        response = self.client.delete(reverse('clients:detail', args=[self.shop.pk]))
        self.assertEqual(response.status_code, 403)
        self.shop.refresh_from_db()
        self.assertTrue(self.shop.is_active)

    def test_deactivating_through_update_requires_staff(self):
        response = self.put_json(reverse('clients:detail', args=[self.shop.pk]), {'isActive': False})
        self.assertEqual(response.status_code, 403)
        self.shop.refresh_from_db()
        self.assertTrue(self.shop.is_active)

        response = self.put_json(reverse('clients:detail', args=[self.shop.pk]),
                                 {'isActive': True, 'address': 'Main Road'})
        self.assertEqual(response.status_code, 200)

    def test_adjustment_requires_staff(self):
        response = self.post_json(reverse('clients:adjust', args=[self.shop.pk]),
                                  {'delta': 1, 'description': 'Correction'})
        self.assertEqual(response.status_code, 403)


class StaffClientApiTest(ApiTestCase):
    staff = True

    def setUp(self):
        super().setUp()
        self.shop = Client.objects.create(shop_name='Lakshmi Jewellers', client_name='Ravi',
                                          phone_number='9876543210')

    def test_soft_delete(self):
        response = self.client.delete(reverse('clients:detail', args=[self.shop.pk]))
        self.assertEqual(response.status_code, 200)
        self.shop.refresh_from_db()
        self.assertFalse(self.shop.is_active)

    def test_active_flag_parses_strings(self):
        url = reverse('clients:detail', args=[self.shop.pk])
        response = self.put_json(url, {'isActive': 'false'})
        self.assertEqual(response.status_code, 200)
        self.shop.refresh_from_db()
        self.assertFalse(self.shop.is_active)

        response = self.put_json(url, {'isActive': 'true'})
        self.assertEqual(response.status_code, 200)
        self.shop.refresh_from_db()
        self.assertTrue(self.shop.is_active)

        response = self.put_json(url, {'isActive': 'sometimes'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('is_active', response.json()['errors'])

    def test_adjustment_and_ledger(self):
        response = self.post_json(reverse('clients:adjust', args=[self.shop.pk]), {
            'delta': '-1.250', 'description': 'Scale correction', 'expectedVersion': 0,
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['client']['balance'], -1.25)

        response = self.client.get(reverse('clients:ledger', args=[self.shop.pk]))
        data = response.json()
        self.assertEqual(len(data['entries']), 1)
        self.assertEqual(data['entries'][0]['entryType'], BalanceEntry.ADJUSTMENT)
        self.assertEqual(data['ledgerBalance'], -1.25)

    def test_stale_adjustment_conflicts(self):
        self.post_json(reverse('clients:adjust', args=[self.shop.pk]),
                       {'delta': 1, 'description': 'First', 'expectedVersion': 0})
        response = self.post_json(reverse('clients:adjust', args=[self.shop.pk]),
                                  {'delta': 1, 'description': 'Second', 'expectedVersion': 0})
        self.assertEqual(response.status_code, 409)
        self.shop.refresh_from_db()
        self.assertEqual(self.shop.balance, Decimal('1.000'))

    def test_zero_adjustment_is_invalid(self):
        response = self.post_json(reverse('clients:adjust', args=[self.shop.pk]),
                                  {'delta': 0, 'description': 'Nothing'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('delta', response.json()['errors'])

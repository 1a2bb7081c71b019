"""
Test cases for the receipts API.
"""
from decimal import Decimal

from django.test import override_settings
from django.urls import reverse

from apps.clients.models import BalanceEntry, Client
from apps.receipts.models import Receipt
from .test_clients_api import ApiTestCase

CHAIN = {'itemName': 'Chain', 'grossWt': 10, 'stoneWt': 1, 'meltingTouch': 91.6}


def receipt_payload(client, **extra):
    payload = {
        'clientId': client.pk,
        'metalType': 'Gold',
        'issueDate': '2024-05-10T00:00:00.000Z',
        'givenItems': [CHAIN],
        'receivedItems': [{'receivedGold': '', 'melting': ''}],
    }
    payload.update(extra)
    return payload


@override_settings(TIME_ZONE='Asia/Kolkata')
class ReceiptApiTest(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.shop = Client.objects.create(shop_name='Lakshmi Jewellers', client_name='Ravi',
                                          phone_number='9876543210')

    def create(self, **extra):
        return self.post_json(reverse('receipts:list'), receipt_payload(self.shop, **extra))

    def test_create_computes_everything_server_side(self):
        response = self.create(previousBalance=100, status='complete', totals={'finalWt': 999})
        self.assertEqual(response.status_code, 201)
        receipt = response.json()['receipt']

        self.assertEqual(receipt['voucherId'], 'SH-2405-0001')
        self.assertEqual(receipt['issueDate'], '2024-05-10')
        self.assertEqual(receipt['status'], 'incomplete')
        self.assertEqual(receipt['totals']['netWt'], 9.0)
        self.assertEqual(receipt['totals']['finalWt'], 8.244)
        self.assertEqual(receipt['openingBalance'], 0.0)
        self.assertEqual(receipt['closingBalance'], 8.244)
        self.assertEqual(receipt['receivedItems'], [])
        self.assertEqual(response.json()['client']['balance'], 8.244)

    def test_balance_carries_forward(self):
        self.create()
        response = self.create(givenItems=[], receivedItems=[{'receivedGold': 8, 'melting': 100}])
        receipt = response.json()['receipt']
        self.assertEqual(receipt['openingBalance'], 8.244)
        self.assertEqual(receipt['closingBalance'], 0.244)
        self.assertEqual(receipt['status'], 'complete')

        self.shop.refresh_from_db()
        self.assertEqual(self.shop.balance, Decimal('0.244'))

    def test_stale_balance_version_conflicts(self):
        response = self.create(expectedBalanceVersion=3)
        self.assertEqual(response.status_code, 409)
        self.assertFalse(Receipt.objects.exists())

    def test_item_validation_errors_are_keyed_by_index(self):
        response = self.create(givenItems=[
            CHAIN,
            {'itemName': 'Ring', 'grossWt': 2, 'stoneWt': 3, 'meltingTouch': 120},
        ])
        self.assertEqual(response.status_code, 400)
        errors = response.json()['errors']['givenItems']['1']
        self.assertIn('stone_wt', errors)
        self.assertIn('melting_touch', errors)
        self.assertNotIn('0', response.json()['errors']['givenItems'])

    def test_previous_balance_item_is_rejected(self):
        response = self.create(givenItems=[
            {'itemName': 'Previous Balance', 'tag': 'BALANCE', 'grossWt': 1, 'meltingTouch': 100},
        ])
        self.assertEqual(response.status_code, 400)

    def test_receipt_needs_items(self):
        response = self.create(givenItems=[], receivedItems=[])
        self.assertEqual(response.status_code, 400)
        self.assertIn('items', response.json()['errors'])

    def test_duplicate_voucher_conflicts(self):
        self.create(voucherId='SH-0001')
        response = self.create(voucherId='SH-0001')
        self.assertEqual(response.status_code, 409)

    def test_inactive_client_rejected(self):
        self.shop.is_active = False
        self.shop.save()
        response = self.create()
        self.assertEqual(response.status_code, 400)

    def test_list_filters(self):
        self.create()
        self.create(givenItems=[], receivedItems=[{'receivedGold': 1, 'melting': 100}])
        other = Client.objects.create(shop_name='Kanchana', client_name='Suresh', phone_number='9790011223')
        self.post_json(reverse('receipts:list'), receipt_payload(other))

        url = reverse('receipts:list')
        self.assertEqual(self.client.get(url).json()['count'], 3)
        self.assertEqual(self.client.get(url, {'status': 'complete'}).json()['count'], 1)
        self.assertEqual(self.client.get(url, {'clientId': self.shop.pk}).json()['count'], 2)
        self.assertEqual(self.client.get(url, {'q': 'kanchana'}).json()['count'], 1)
        self.assertEqual(self.client.get(url, {'status': 'paid'}).status_code, 400)

        response = self.client.get(reverse('receipts:by_client', args=[other.pk]))
        self.assertEqual(len(response.json()['receipts']), 1)
        response = self.client.get(reverse('receipts:search'), {'query': 'SH-2405-0002'})
        self.assertEqual(len(response.json()['receipts']), 1)

    def test_generate_voucher_id(self):
        response = self.client.get(reverse('receipts:generate_voucher_id'))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['voucherId'].startswith('SH-'))

    def test_update_posts_difference(self):
        receipt_id = self.create().json()['receipt']['id']
        response = self.put_json(reverse('receipts:detail', args=[receipt_id]), {
            'givenItems': [CHAIN],
            'receivedItems': [{'receivedGold': 4, 'melting': 100}],
            'paymentStatus': 'partial',
        })
        self.assertEqual(response.status_code, 200)
        receipt = response.json()['receipt']
        self.assertEqual(receipt['status'], 'complete')
        self.assertEqual(receipt['paymentStatus'], 'partial')
        self.assertEqual(receipt['closingBalance'], 4.244)

        self.shop.refresh_from_db()
        self.assertEqual(self.shop.balance, Decimal('4.244'))
        entry = self.shop.entries.get(entry_type=BalanceEntry.RECEIPT_UPDATE)
        self.assertEqual(entry.delta, Decimal('-4.000'))

    def test_header_only_update_keeps_items(self):
        receipt_id = self.create().json()['receipt']['id']
        response = self.put_json(reverse('receipts:detail', args=[receipt_id]), {'notes': 'Collected'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()['receipt']['givenItems']), 1)
        self.assertEqual(self.shop.entries.count(), 1)

    def test_header_only_update_after_sub_milligram_lines_posts_nothing(self):
        wire = {'itemName': 'Wire', 'grossWt': '1.001', 'meltingTouch': 50}
        response = self.create(givenItems=[wire, wire])
        self.assertEqual(response.json()['receipt']['totals']['finalWt'], 1.0)
        receipt_id = response.json()['receipt']['id']

        response = self.put_json(reverse('receipts:detail', args=[receipt_id]), {'notes': 'Checked'})
        self.assertEqual(response.status_code, 200)
        self.shop.refresh_from_db()
        self.assertEqual(self.shop.balance, Decimal('1.000'))
        self.assertEqual(self.shop.entries.count(), 1)
        self.assertFalse(self.shop.entries.filter(entry_type=BalanceEntry.RECEIPT_UPDATE).exists())

    def test_update_with_one_side_keeps_the_other(self):
        bar = {'itemName': 'Bar', 'grossWt': 10, 'meltingTouch': 100}
        receipt_id = self.create(
            givenItems=[bar], receivedItems=[{'receivedGold': 5, 'melting': 100}],
        ).json()['receipt']['id']

        response = self.put_json(reverse('receipts:detail', args=[receipt_id]), {'givenItems': [bar]})
        self.assertEqual(response.status_code, 200)
        receipt = response.json()['receipt']
        self.assertEqual(len(receipt['receivedItems']), 1)
        self.assertEqual(receipt['status'], 'complete')
        self.assertEqual(receipt['closingBalance'], 5.0)

        self.shop.refresh_from_db()
        self.assertEqual(self.shop.balance, Decimal('5.000'))
        self.assertEqual(self.shop.entries.count(), 1)

    def test_update_cannot_change_client(self):
        receipt_id = self.create().json()['receipt']['id']
        other = Client.objects.create(shop_name='Kanchana', client_name='Suresh', phone_number='9790011223')
        response = self.put_json(reverse('receipts:detail', args=[receipt_id]), {'clientId': other.pk})
        self.assertEqual(response.status_code, 400)

    def test_delete_requires_staff(self):
        receipt_id = self.create().json()['receipt']['id']
        response = self.client.delete(reverse('receipts:detail', args=[receipt_id]))
        self.assertEqual(response.status_code, 403)
        self.assertTrue(Receipt.objects.filter(pk=receipt_id).exists())

    def test_pdf_export(self):
        receipt_id = self.create(receivedItems=[{'receivedGold': 2, 'melting': 99.5}]).json()['receipt']['id']
        response = self.client.get(reverse('receipts:pdf', args=[receipt_id]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertTrue(b''.join(response).startswith(b'%PDF'))


class StaffReceiptApiTest(ApiTestCase):
    staff = True

    def test_delete_reverses_balance(self):
        shop = Client.objects.create(shop_name='Lakshmi Jewellers', client_name='Ravi', phone_number='9876543210')
        receipt_id = self.post_json(reverse('receipts:list'), receipt_payload(shop)).json()['receipt']['id']

        response = self.client.delete(reverse('receipts:detail', args=[receipt_id]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['client']['balance'], 0.0)
        self.assertFalse(Receipt.objects.exists())
        self.assertEqual(shop.entries.filter(entry_type=BalanceEntry.RECEIPT_REVERSAL).count(), 1)

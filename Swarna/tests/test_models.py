"""
Test cases for Swarna models and ledger services.
"""
from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from apps.admin_receipts.models import AdminGivenItem, AdminReceipt
from apps.admin_receipts.services import generate_voucher_id as generate_admin_voucher_id
from apps.admin_receipts.services import save_admin_receipt
from apps.clients.models import BalanceEntry, Client
from apps.clients.services import InactiveClientError, StaleBalanceError, adjust_balance
from apps.core.models import AuditLog
from apps.core.utils import next_voucher_id
from apps.receipts.calculator import COMPLETE, INCOMPLETE, GivenLine, ReceivedLine
from apps.receipts.models import GivenItem, Receipt
from apps.receipts.services import create_receipt, delete_receipt, generate_voucher_id, update_receipt


def make_client(**kwargs):
    values = {'shop_name': 'Lakshmi Jewellers', 'client_name': 'Ravi', 'phone_number': '9876543210'}
    values.update(kwargs)
    return Client.objects.create(**values)


def chain(gross='10', stone='1', touch='91.6'):
    return GivenLine(item_name="Chain", gross_wt=Decimal(gross), stone_wt=Decimal(stone),
                     melting_touch=Decimal(touch))


class ClientLedgerTest(TestCase):
    """Test cases for the balance ledger."""

    def setUp(self):
        self.client_record = make_client()

    def test_adjustment_updates_balance_and_version(self):
        client, entry = adjust_balance(self.client_record.pk, Decimal('2.5'), "Correction")
        self.assertEqual(client.balance, Decimal('2.500'))
        self.assertEqual(client.balance_version, 1)
        self.assertEqual(entry.balance_after, Decimal('2.500'))
        self.assertEqual(client.ledger_balance(), client.balance)

    def test_stale_version_is_rejected(self):
        adjust_balance(self.client_record.pk, Decimal('1'), "First")
        with self.assertRaises(StaleBalanceError):
            adjust_balance(self.client_record.pk, Decimal('1'), "Second", expected_version=0)
        self.client_record.refresh_from_db()
        self.assertEqual(self.client_record.balance, Decimal('1.000'))

    def test_inactive_client_is_rejected(self):
        self.client_record.is_active = False
        self.client_record.save()
        with self.assertRaises(InactiveClientError):
            adjust_balance(self.client_record.pk, Decimal('1'), "Nope")

    def test_entries_are_append_only(self):
        _, entry = adjust_balance(self.client_record.pk, Decimal('1'), "First")
        with self.assertRaises(ValueError):
            entry.save()
        with self.assertRaises(ValueError):
            entry.delete()

    def test_client_str(self):
        self.assertEqual(str(self.client_record), "Lakshmi Jewellers (Ravi)")


class ReceiptServiceTest(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username='clerk', password='testpass123')
        self.client_record = make_client()

    def new_receipt(self, **kwargs):
        return Receipt(client=self.client_record, issue_date=date(2024, 5, 10), **kwargs)

    def test_create_posts_delta_and_snapshots_client(self):
        receipt = create_receipt(self.new_receipt(), [chain()], [], user=self.user)

        self.client_record.refresh_from_db()
        self.assertEqual(receipt.voucher_id, "SH-2405-0001")
        self.assertEqual(receipt.opening_balance, Decimal('0'))
        self.assertEqual(receipt.balance_delta, Decimal('8.244'))
        self.assertEqual(receipt.closing_balance, Decimal('8.244'))
        self.assertEqual(receipt.status, INCOMPLETE)
        self.assertEqual(receipt.client_info['shopName'], 'Lakshmi Jewellers')
        self.assertEqual(self.client_record.balance, Decimal('8.244'))

        entry = self.client_record.entries.get()
        self.assertEqual(entry.entry_type, BalanceEntry.RECEIPT)
        self.assertEqual(entry.receipt, receipt)

    def test_second_receipt_carries_balance_forward(self):
        create_receipt(self.new_receipt(), [chain()], [])
        second = create_receipt(
            self.new_receipt(), [], [ReceivedLine(received_gold=Decimal('8'), melting=Decimal('100'))],
        )
        self.assertEqual(second.opening_balance, Decimal('8.244'))
        self.assertEqual(second.closing_balance, Decimal('0.244'))
        self.assertEqual(second.status, COMPLETE)
        self.assertEqual(second.voucher_id, "SH-2405-0002")

        self.client_record.refresh_from_db()
        self.assertEqual(self.client_record.balance, Decimal('0.244'))
        self.assertEqual(self.client_record.ledger_balance(), Decimal('0.244'))

    def test_stale_version_rolls_back_receipt(self):
        with self.assertRaises(StaleBalanceError):
            create_receipt(self.new_receipt(), [chain()], [], expected_version=5)
        self.assertFalse(Receipt.objects.exists())
        self.client_record.refresh_from_db()
        self.assertEqual(self.client_record.balance, Decimal('0'))

    def test_update_posts_difference(self):
        receipt = create_receipt(self.new_receipt(), [chain()], [])
        update_receipt(receipt, [chain(gross='20', stone='0', touch='100')], [])

        self.client_record.refresh_from_db()
        self.assertEqual(self.client_record.balance, Decimal('20.000'))
        self.assertEqual(receipt.given_items.count(), 1)
        update_entry = self.client_record.entries.get(entry_type=BalanceEntry.RECEIPT_UPDATE)
        self.assertEqual(update_entry.delta, Decimal('11.756'))

    def test_update_without_change_posts_nothing(self):
        receipt = create_receipt(self.new_receipt(), [chain()], [])
        update_receipt(receipt, [chain()], [])
        self.assertEqual(self.client_record.entries.count(), 1)

    def test_delete_reverses_balance(self):
        receipt = create_receipt(self.new_receipt(), [chain()], [])
        delete_receipt(receipt)

        self.client_record.refresh_from_db()
        self.assertEqual(self.client_record.balance, Decimal('0'))
        self.assertFalse(Receipt.objects.exists())
        reversal = self.client_record.entries.get(entry_type=BalanceEntry.RECEIPT_REVERSAL)
        self.assertEqual(reversal.delta, Decimal('-8.244'))
        self.assertIsNone(reversal.receipt)

    def test_stored_items_recompute_totals(self):
        receipt = create_receipt(self.new_receipt(), [chain(), chain(gross='5', stone='0', touch='100')], [])
        GivenItem.objects.filter(receipt=receipt, position=1).delete()
        receipt.calculate_totals()
        self.assertEqual(receipt.total_final_wt, Decimal('8.244'))
        self.assertEqual(receipt.total_gross_wt, Decimal('10.000'))


class VoucherIdTest(TestCase):
    def test_sequence_restarts_monthly(self):
        client = make_client()
        Receipt.objects.create(client=client, issue_date=date(2024, 4, 30), voucher_id="SH-2404-0007")
        self.assertEqual(generate_voucher_id(date(2024, 4, 30)), "SH-2404-0008")
        self.assertEqual(generate_voucher_id(date(2024, 5, 1)), "SH-2405-0001")

    def test_custom_prefix(self):
        self.assertEqual(
            next_voucher_id(Receipt.objects.all(), 'XX', today=date(2025, 1, 3)),
            "XX-2501-0001",
        )

    def test_admin_receipts_use_their_own_prefix(self):
        self.assertTrue(generate_admin_voucher_id(date(2024, 5, 1)).startswith("GA-2405-"))


class AdminReceiptModelTest(TestCase):
    def test_totals_and_status(self):
        receipt = save_admin_receipt(
            AdminReceipt(client_name="Walk-in"),
            given_items=[{'product_name': "Bar", 'pure_weight': Decimal('20'),
                          'pure_percent': Decimal('91.6'), 'melting': Decimal('91.6')}],
            received_items=[],
        )
        self.assertEqual(receipt.given_total, Decimal('20.000'))
        self.assertEqual(receipt.given_total_pure_weight, Decimal('18.320'))
        self.assertEqual(receipt.status, 'incomplete')
        self.assertTrue(receipt.voucher_id.startswith("GA-"))

    def test_given_item_total_is_derived_on_save(self):
        receipt = save_admin_receipt(AdminReceipt(client_name="Walk-in"))
        item = AdminGivenItem.objects.create(
            receipt=receipt, product_name="Bar", pure_weight=Decimal('10'),
            pure_percent=Decimal('50'), melting=Decimal('100'),
        )
        self.assertEqual(item.total, Decimal('5.000'))
        self.assertEqual(receipt.status, 'empty')


class AuditLogModelTest(TestCase):
    def test_str_without_user(self):
        log = AuditLog.objects.create(action_type='create', log_message="Created client")
        self.assertTrue(str(log).startswith("System - create"))

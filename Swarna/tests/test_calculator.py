"""
Test cases for receipt and admin receipt arithmetic.
"""
from decimal import Decimal

from django.test import SimpleTestCase

from apps.admin_receipts import calculator as admin_calc
from apps.receipts import calculator
from apps.receipts.calculator import GivenLine, ReceivedLine

D = Decimal


class DerivationTest(SimpleTestCase):
    """Per-item derived weights."""

    def test_given_item(self):
        net, final = calculator.derive_given(D('10'), D('1'), D('91.6'))
        self.assertEqual(net, D('9'))
        self.assertEqual(final, D('8.244'))

    def test_given_blank_values_count_as_zero(self):
        net, final = calculator.derive_given('5', '', None)
        self.assertEqual(net, D('5'))
        self.assertEqual(final, D('0'))

    def test_received_item(self):
        self.assertEqual(calculator.derive_received(D('8'), D('100')), D('8'))
        self.assertEqual(calculator.derive_received('2.5', '91.6'), D('2.29'))

    def test_to_decimal_rejects_garbage(self):
        for value in ('abc', True, 'NaN', 'Infinity'):
            with self.assertRaises(ValueError):
                calculator.to_decimal(value)


class TotalsTest(SimpleTestCase):
    def setUp(self):
        self.items = [
            GivenLine(item_name="Chain", gross_wt=D('10'), stone_wt=D('1'), melting_touch=D('91.6'),
                      stone_amt=D('100')),
            GivenLine(item_name="Ring", gross_wt=D('4.25'), stone_wt=D('0.25'), melting_touch=D('75')),
        ]

    def test_totals_are_field_sums(self):
        totals = calculator.given_totals(self.items)
        self.assertEqual(totals.gross_wt, D('14.25'))
        self.assertEqual(totals.stone_wt, D('1.25'))
        self.assertEqual(totals.net_wt, D('13'))
        self.assertEqual(totals.final_wt, D('11.244'))
        self.assertEqual(totals.stone_amt, D('100'))

    def test_totals_are_order_independent_and_idempotent(self):
        forward = calculator.given_totals(self.items)
        self.assertEqual(calculator.given_totals(list(reversed(self.items))), forward)
        self.assertEqual(calculator.given_totals(self.items), forward)

    def test_removing_an_item_excludes_it_once(self):
        totals = calculator.given_totals(self.items[1:])
        self.assertEqual(totals.final_wt, D('3'))
        self.assertEqual(totals.gross_wt, D('4.25'))

    def test_empty_lists_give_zeros(self):
        self.assertEqual(calculator.given_totals([]), calculator.GivenTotals())
        self.assertEqual(calculator.received_totals([]).final_wt, D('0'))

    def test_quantum_rounds_each_line_before_summing(self):
        items = [GivenLine(item_name="Wire", gross_wt=D('1.001'), melting_touch=D('50'))] * 2
        self.assertEqual(calculator.given_totals(items).final_wt, D('1.001'))
        self.assertEqual(calculator.given_totals(items, quantum=D('0.001')).final_wt, D('1.000'))

        received = [ReceivedLine(received_gold=D('1.001'), melting=D('50'))] * 2
        self.assertEqual(calculator.received_totals(received, quantum=D('0.001')).final_wt, D('1.000'))


class BalanceTest(SimpleTestCase):
    def test_given_only_from_zero(self):
        summary = calculator.summarize(
            D('0'),
            [GivenLine(item_name="Chain", gross_wt=D('10'), stone_wt=D('1'), melting_touch=D('91.6'))],
            [],
        )
        self.assertEqual(summary.given_final, D('8.244'))
        self.assertEqual(summary.closing, D('8.244'))

    def test_received_only_reduces_balance(self):
        summary = calculator.summarize(D('8.244'), [], [ReceivedLine(received_gold=D('8'), melting=D('100'))])
        self.assertEqual(summary.received_final, D('8'))
        self.assertEqual(summary.delta, D('-8'))
        self.assertEqual(summary.closing, D('0.244'))

    def test_empty_lists_leave_balance_unchanged(self):
        summary = calculator.summarize(D('3.5'), [], [])
        self.assertEqual(summary.delta, D('0'))
        self.assertEqual(summary.closing, D('3.5'))


class StatusTest(SimpleTestCase):
    def test_complete_needs_gold_and_melting(self):
        self.assertEqual(calculator.derive_status([]), calculator.INCOMPLETE)
        self.assertEqual(
            calculator.derive_status([ReceivedLine(received_gold=D('0'), melting=D('99'))]),
            calculator.INCOMPLETE,
        )
        self.assertEqual(
            calculator.derive_status([ReceivedLine(received_gold=D('1'), melting=D('99'))]),
            calculator.COMPLETE,
        )

    def test_blank_received_row(self):
        self.assertTrue(calculator.is_blank_received({'received_gold': '', 'melting': None}))
        self.assertTrue(calculator.is_blank_received({}))
        self.assertFalse(calculator.is_blank_received({'received_gold': '1'}))


class AdminReceiptArithmeticTest(SimpleTestCase):
    def test_given_item_total(self):
        self.assertEqual(admin_calc.given_item_total(D('20'), D('91.6'), D('91.6')), D('20'))

    def test_zero_melting_is_rejected(self):
        with self.assertRaises(ValueError):
            admin_calc.given_item_total(D('20'), D('91.6'), D('0'))

    def test_received_item_totals(self):
        sub_total, total = admin_calc.received_item_totals(D('12'), D('2'), D('10'))
        self.assertEqual(sub_total, D('10'))
        self.assertEqual(total, D('1'))

    def test_manual_operations(self):
        self.assertEqual(admin_calc.manual_result(D('10'), D('4'), admin_calc.SUBTRACT_GIVEN_RECEIVED), D('6'))
        self.assertEqual(admin_calc.manual_result(D('10'), D('4'), admin_calc.SUBTRACT_RECEIVED_GIVEN), D('-6'))
        self.assertEqual(admin_calc.manual_result(D('10'), D('4'), admin_calc.ADD), D('14'))
        with self.assertRaises(ValueError):
            admin_calc.manual_result(D('1'), D('1'), 'multiply')

    def test_status(self):
        self.assertEqual(admin_calc.derive_status(0, 0), admin_calc.EMPTY)
        self.assertEqual(admin_calc.derive_status(2, 0), admin_calc.INCOMPLETE)
        self.assertEqual(admin_calc.derive_status(0, 1), admin_calc.INCOMPLETE)
        self.assertEqual(admin_calc.derive_status(1, 1), admin_calc.COMPLETE)

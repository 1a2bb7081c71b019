"""
Arithmetic for admin (work) receipts.

    given total     = pure_weight * pure_percent / melting
    pure weight sum = sum(pure_weight * pure_percent / 100)
    sub total       = final_ornaments_wt - stone_weight
    received total  = sub_total * making_charge_percent / 100

Admin receipts are worksheets; nothing here affects client balances.
"""

from dataclasses import dataclass
from decimal import Decimal

from apps.receipts.calculator import HUNDRED, ZERO, to_decimal

COMPLETE = 'complete'
INCOMPLETE = 'incomplete'
EMPTY = 'empty'
STATUS_CHOICES = [
    (COMPLETE, 'Complete'),
    (INCOMPLETE, 'Incomplete'),
    (EMPTY, 'Empty'),
]

SUBTRACT_GIVEN_RECEIVED = 'subtract-given-received'
SUBTRACT_RECEIVED_GIVEN = 'subtract-received-given'
ADD = 'add'
OPERATION_CHOICES = [
    (SUBTRACT_GIVEN_RECEIVED, 'Given - Received'),
    (SUBTRACT_RECEIVED_GIVEN, 'Received - Given'),
    (ADD, 'Given + Received'),
]


def given_item_total(pure_weight, pure_percent, melting) -> Decimal:
    melting = to_decimal(melting)
    if melting <= 0:
        raise ValueError("Melting must be greater than 0")
    return to_decimal(pure_weight) * to_decimal(pure_percent) / melting


def received_item_totals(final_ornaments_wt, stone_weight, making_charge_percent) -> tuple[Decimal, Decimal]:
    """Return (sub_total, total) for a received ornament."""
    sub_total = to_decimal(final_ornaments_wt) - to_decimal(stone_weight)
    return sub_total, sub_total * to_decimal(making_charge_percent) / HUNDRED


@dataclass(frozen=True)
class GivenSideTotals:
    total_pure_weight: Decimal = ZERO
    total: Decimal = ZERO


@dataclass(frozen=True)
class ReceivedSideTotals:
    total_ornaments_wt: Decimal = ZERO
    total_stone_weight: Decimal = ZERO
    total_sub_total: Decimal = ZERO
    total: Decimal = ZERO


def given_side_totals(items) -> GivenSideTotals:
    pure = total = ZERO
    for item in items:
        pure += to_decimal(item.pure_weight) * to_decimal(item.pure_percent) / HUNDRED
        total += given_item_total(item.pure_weight, item.pure_percent, item.melting)
    return GivenSideTotals(total_pure_weight=pure, total=total)


def received_side_totals(items) -> ReceivedSideTotals:
    ornaments = stone = sub = total = ZERO
    for item in items:
        item_sub, item_total = received_item_totals(
            item.final_ornaments_wt, item.stone_weight, item.making_charge_percent,
        )
        ornaments += to_decimal(item.final_ornaments_wt)
        stone += to_decimal(item.stone_weight)
        sub += item_sub
        total += item_total
    return ReceivedSideTotals(
        total_ornaments_wt=ornaments,
        total_stone_weight=stone,
        total_sub_total=sub,
        total=total,
    )


def manual_result(given_total, received_total, operation) -> Decimal:
    given_total, received_total = to_decimal(given_total), to_decimal(received_total)
    if operation == SUBTRACT_GIVEN_RECEIVED:
        return given_total - received_total
    if operation == SUBTRACT_RECEIVED_GIVEN:
        return received_total - given_total
    if operation == ADD:
        return given_total + received_total
    raise ValueError(f"Unknown operation: {operation!r}")


def derive_status(given_count, received_count) -> str:
    """Empty with no items, complete once both sides have items."""
    if not given_count and not received_count:
        return EMPTY
    if given_count and received_count:
        return COMPLETE
    return INCOMPLETE

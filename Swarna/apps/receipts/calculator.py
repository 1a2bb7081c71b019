"""
Weight and balance arithmetic for goldsmith receipts.

Pure functions over ``Decimal`` values. Nothing here rounds unless a
``quantum`` is passed to the totals, which then round each line before
summing so totals match the stored per-item weights.

    net_wt   = gross_wt - stone_wt
    final_wt = net_wt * melting_touch / 100          (given items)
    final_wt = received_gold * melting / 100         (received items)
    delta    = sum(given.final_wt) - sum(received.final_wt)
    closing  = opening + delta
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

ZERO = Decimal('0')
HUNDRED = Decimal('100')

COMPLETE = 'complete'
INCOMPLETE = 'incomplete'
STATUS_CHOICES = [
    (COMPLETE, 'Complete'),
    (INCOMPLETE, 'Incomplete'),
]


def to_decimal(value) -> Decimal:
    """Coerce an entered value to Decimal. Blank values count as zero."""
    if value is None or value == '':
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def derive_given(gross_wt, stone_wt, melting_touch) -> tuple[Decimal, Decimal]:
    """Return (net_wt, final_wt) for a given item."""
    net_wt = to_decimal(gross_wt) - to_decimal(stone_wt)
    final_wt = net_wt * (to_decimal(melting_touch) / HUNDRED)
    return net_wt, final_wt


def derive_received(received_gold, melting) -> Decimal:
    """Return the fine weight of a received item."""
    return to_decimal(received_gold) * (to_decimal(melting) / HUNDRED)


@dataclass(frozen=True)
class GivenLine:
    """A validated given item; derived weights are computed, never supplied."""

    item_name: str
    gross_wt: Decimal
    stone_wt: Decimal = ZERO
    melting_touch: Decimal = ZERO
    stone_amt: Decimal = ZERO
    tag: str = ''
    item_date: Optional[date] = None

    @property
    def net_wt(self) -> Decimal:
        return derive_given(self.gross_wt, self.stone_wt, self.melting_touch)[0]

    @property
    def final_wt(self) -> Decimal:
        return derive_given(self.gross_wt, self.stone_wt, self.melting_touch)[1]


@dataclass(frozen=True)
class ReceivedLine:
    """A validated received item."""

    received_gold: Decimal
    melting: Decimal
    item_date: Optional[date] = None

    @property
    def final_wt(self) -> Decimal:
        return derive_received(self.received_gold, self.melting)


@dataclass(frozen=True)
class GivenTotals:
    gross_wt: Decimal = ZERO
    stone_wt: Decimal = ZERO
    net_wt: Decimal = ZERO
    final_wt: Decimal = ZERO
    stone_amt: Decimal = ZERO


@dataclass(frozen=True)
class ReceivedTotals:
    final_wt: Decimal = ZERO


@dataclass(frozen=True)
class BalanceSummary:
    opening: Decimal
    given_final: Decimal
    received_final: Decimal
    delta: Decimal = field(init=False)
    closing: Decimal = field(init=False)

    def __post_init__(self):
        delta = balance_delta(self.given_final, self.received_final)
        object.__setattr__(self, 'delta', delta)
        object.__setattr__(self, 'closing', new_balance(self.opening, delta))


def _line_value(value, quantum):
    value = to_decimal(value)
    return value.quantize(quantum) if quantum is not None else value


def given_totals(items: Iterable, quantum: Optional[Decimal] = None) -> GivenTotals:
    """
    Sum each numeric field across given items.

    Works on ``GivenLine`` values and on stored ``GivenItem`` rows alike;
    the result is always recomputed from the full list. With ``quantum``,
    derived line weights are rounded before they are added.
    """
    gross = stone = net = final = stone_amt = ZERO
    for item in items:
        gross += to_decimal(item.gross_wt)
        stone += to_decimal(item.stone_wt)
        net += _line_value(item.net_wt, quantum)
        final += _line_value(item.final_wt, quantum)
        stone_amt += to_decimal(item.stone_amt)
    return GivenTotals(gross_wt=gross, stone_wt=stone, net_wt=net, final_wt=final, stone_amt=stone_amt)


def received_totals(items: Iterable, quantum: Optional[Decimal] = None) -> ReceivedTotals:
    return ReceivedTotals(final_wt=sum((_line_value(item.final_wt, quantum) for item in items), ZERO))


def balance_delta(given_final, received_final) -> Decimal:
    return to_decimal(given_final) - to_decimal(received_final)


def new_balance(previous_balance, delta) -> Decimal:
    return to_decimal(previous_balance) + to_decimal(delta)


def summarize(previous_balance, given_items: Iterable, received_items: Iterable) -> BalanceSummary:
    """Opening, per-side fine weight, delta and closing balance for a receipt."""
    return BalanceSummary(
        opening=to_decimal(previous_balance),
        given_final=given_totals(given_items).final_wt,
        received_final=received_totals(received_items).final_wt,
    )


def derive_status(received_items: Iterable) -> str:
    """
    The one status rule for receipts: complete once any received item
    carries positive gold at a positive melting percentage.
    """
    for item in received_items:
        if to_decimal(item.received_gold) > 0 and to_decimal(item.melting) > 0:
            return COMPLETE
    return INCOMPLETE


def is_blank_received(raw: dict) -> bool:
    """A received row with nothing entered is treated as absent."""
    return all(raw.get(key) in (None, '') for key in ('received_gold', 'melting'))

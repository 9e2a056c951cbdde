"""
Split calculator for Splitshare
Pure functions turning line items and surcharges into per-person amounts
"""

import logging
import math
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

from config import SUM_TOLERANCE
from data_models import BillSummary, LineItem, SplitResult
from exceptions import InvalidInputError, InvalidLineItemError

logger = logging.getLogger(__name__)


def _as_amount(value) -> float:
    """Return value as a finite non-negative float, or raise ValueError"""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError(f"not a number: {value!r}")
    amount = float(value)
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"not a non-negative amount: {value!r}")
    return amount


def _surcharge_total(surcharges: Iterable) -> float:
    total = 0.0
    for surcharge in surcharges:
        try:
            total += _as_amount(surcharge)
        except ValueError as e:
            raise InvalidInputError(f"Invalid surcharge: {e}") from None
    return total


def _item_price(item: LineItem) -> float:
    item_id = getattr(item, 'id', None)
    price = getattr(item, 'price', None)
    if price is None:
        raise InvalidLineItemError(item_id, f"Line item {item_id!r} has no price")
    try:
        return _as_amount(price)
    except ValueError:
        raise InvalidLineItemError(
            item_id, f"Line item {item_id!r} has invalid price {price!r}"
        ) from None


def _item_assignees(item: LineItem) -> List[str]:
    assigned_to = getattr(item, 'assigned_to', ())
    if isinstance(assigned_to, str):
        raise InvalidLineItemError(
            item.id, f"Line item {item.id!r} must list its assignees, got the string {assigned_to!r}"
        )
    return list(dict.fromkeys(assigned_to))


def _item_shares(items: Sequence[LineItem]) -> Tuple[Dict[str, float], float]:
    """Running totals per assignee and the amount left unassigned"""
    prices = [_item_price(item) for item in items]
    assignee_lists = [_item_assignees(item) for item in items]

    running: Dict[str, float] = {}
    unassigned = 0.0
    for item, price, assignees in zip(items, prices, assignee_lists):
        if not assignees:
            if price > 0:
                logger.debug("Line item %s (%.2f) has no assignees, not distributed",
                             item.id, price)
                unassigned += price
            continue
        if price <= 0:
            continue

        price_per_assignee = price / len(assignees)
        for person in assignees:
            running[person] = running.get(person, 0.0) + price_per_assignee

    return running, unassigned


def _distribute(items: Sequence[LineItem], surcharges: Iterable) -> Tuple[SplitResult, float, float]:
    running, unassigned = _item_shares(items)
    surcharge_total = _surcharge_total(surcharges)

    involved = {person: amount for person, amount in running.items() if amount > 0}
    base_total = sum(involved.values())

    undistributed = 0.0
    shares = dict(involved)
    if surcharge_total > 0:
        if involved:
            for person, amount in involved.items():
                shares[person] = amount + surcharge_total * amount / base_total
        else:
            logger.warning("No participant has a positive share, surcharge of %.2f "
                           "is not distributed", surcharge_total)
            undistributed = surcharge_total

    result = {person: amount for person, amount in shares.items() if amount > 0}
    return result, unassigned, undistributed


def compute_even_split(total, participant_ids: Iterable[str]) -> SplitResult:
    """
    Split a total into one flat share per participant.
    Duplicate ids collapse to a single participant.
    """
    if isinstance(participant_ids, str):
        raise InvalidInputError("participant_ids must be a collection of ids, not a string")
    try:
        amount = _as_amount(total)
    except ValueError as e:
        raise InvalidInputError(f"Invalid total: {e}") from None

    participants = list(dict.fromkeys(participant_ids))
    if not participants:
        raise InvalidInputError("Cannot split evenly between zero participants")

    share = amount / len(participants)
    return {person: share for person in participants}


def compute_itemized_split(items: Sequence[LineItem], surcharges: Iterable = ()) -> SplitResult:
    """
    Split line items between their assignees and spread surcharges
    proportionally to each person's item total.

    Items without assignees are left out of the distribution. When nobody
    ends up with a positive item total the surcharges are dropped as well.
    Amounts are not rounded.
    """
    shares, _, _ = _distribute(items, surcharges)
    return shares


def compute_subtotal(items: Sequence[LineItem]) -> float:
    """Raw sum of all item prices, assigned or not"""
    return sum(_item_price(item) for item in items)


def summarize_bill(items: Sequence[LineItem], surcharges: Iterable = ()) -> BillSummary:
    """Itemized split plus the amounts the split left undistributed"""
    surcharges = list(surcharges)
    shares, unassigned, undistributed = _distribute(items, surcharges)
    return BillSummary(
        subtotal=compute_subtotal(items),
        surcharge_total=_surcharge_total(surcharges),
        shares=shares,
        unassigned_total=unassigned,
        undistributed_surcharge=undistributed,
    )


def split_totals_match(shares: SplitResult, expected: float, tolerance: float = SUM_TOLERANCE) -> bool:
    """Whether the shares add back up to the expected amount"""
    return math.isclose(sum(shares.values()), expected, rel_tol=0.0, abs_tol=tolerance)


def involved_participants(items: Sequence[LineItem]) -> List[str]:
    """Assignees of all items in first-appearance order"""
    seen = dict.fromkeys(person for item in items for person in _item_assignees(item))
    return list(seen)

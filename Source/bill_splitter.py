"""
Bill Splitter module for Splitshare
Handles per-category bill splitting and settlement optimization
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from config import SETTLEMENT_EPSILON
from constants import CATEGORIES, CATEGORY_ACCOMMODATION, DECIMAL_QUANTIZE, ITEMIZED_CATEGORIES
from data_models import Bill, BillSummary, Settlement, SplitResult
from exceptions import InvalidInputError
from split_calculator import compute_even_split, involved_participants, summarize_bill
from utils import days_between

logger = logging.getLogger(__name__)


class BillSplitter:
    """Handles bill splitting calculations and optimizations"""

    def __init__(self, bill: Bill):
        if bill.category not in CATEGORIES:
            raise InvalidInputError(f"Unknown bill category: {bill.category!r}")
        self.bill = bill
        self.balances: Dict[str, Decimal] = {}
        self.settlements: List[Settlement] = []

    @property
    def is_itemized(self) -> bool:
        return self.bill.category in ITEMIZED_CATEGORIES

    @property
    def people(self) -> List[str]:
        """Everyone taking part in the bill, in display order"""
        if self.is_itemized:
            people = list(self.bill.participants)
            for person in involved_participants(self.bill.items):
                if person not in people:
                    people.append(person)
            return people
        return list(dict.fromkeys(self.bill.participants))

    def summarize(self) -> BillSummary:
        """Split the bill the way its category is split"""
        if self.is_itemized:
            return summarize_bill(self.bill.items, self.bill.surcharges)

        shares = compute_even_split(self.bill.total, self.bill.participants)
        return BillSummary(
            subtotal=self.bill.subtotal,
            surcharge_total=sum(self.bill.surcharges),
            shares={person: amount for person, amount in shares.items() if amount > 0},
        )

    def calculate_shares(self) -> SplitResult:
        """Calculate how much each person owes"""
        return self.summarize().shares

    def nights(self) -> int:
        """Number of nights of an accommodation bill"""
        if self.bill.check_in is None or self.bill.check_out is None:
            return 0
        return days_between(self.bill.check_in, self.bill.check_out)

    def per_night_per_person(self) -> Optional[float]:
        """Accommodation price per night and person, if it can be computed"""
        if self.bill.category != CATEGORY_ACCOMMODATION:
            return None
        nights = self.nights()
        people = self.people
        if nights <= 0 or not people:
            return None
        return self.bill.total / nights / len(people)

    def calculate_balances(self, payments: Optional[Dict[str, float]] = None) -> Dict[str, Decimal]:
        """
        Net balance per person: what they paid minus what they owe.
        Positive balances are owed money. Without explicit payments the
        payer of the bill is assumed to have paid the whole total.
        """
        if payments is None:
            payments = {self.bill.payer: self.bill.total}

        shares = self.calculate_shares()
        people = self.people
        for person in payments:
            if person not in people:
                people.append(person)

        self.balances = {}
        for person in people:
            paid = Decimal(str(payments.get(person, 0.0)))
            owed = Decimal(str(shares.get(person, 0.0)))
            self.balances[person] = paid - owed

        return self.balances

    def optimize_settlements(self, payments: Optional[Dict[str, float]] = None) -> List[Settlement]:
        """Optimize settlements to minimize transactions"""
        balances = self.calculate_balances(payments)

        creditors = []
        debtors = []

        for person, difference in balances.items():
            if difference > SETTLEMENT_EPSILON:
                creditors.append({'name': person, 'amount': difference})
            elif difference < -SETTLEMENT_EPSILON:
                debtors.append({'name': person, 'amount': -difference})

        creditors.sort(key=lambda x: x['amount'], reverse=True)
        debtors.sort(key=lambda x: x['amount'], reverse=True)

        settlements = []
        i, j = 0, 0

        while i < len(creditors) and j < len(debtors):
            amount = min(creditors[i]['amount'], debtors[j]['amount'])

            if amount > SETTLEMENT_EPSILON:
                logger.debug("%s pays %s %s", debtors[j]['name'], creditors[i]['name'], amount)
                settlements.append(Settlement(
                    from_person=debtors[j]['name'],
                    to_person=creditors[i]['name'],
                    amount=float(amount.quantize(DECIMAL_QUANTIZE, rounding=ROUND_HALF_UP)),
                    currency=self.bill.currency
                ))

            creditors[i]['amount'] -= amount
            debtors[j]['amount'] -= amount

            if creditors[i]['amount'] < SETTLEMENT_EPSILON:
                i += 1
            if debtors[j]['amount'] < SETTLEMENT_EPSILON:
                j += 1

        self.settlements = settlements
        return settlements

    def person_breakdown(self) -> Dict[str, dict]:
        """Items, item subtotal and surcharge share of every person"""
        summary = self.summarize()
        breakdown = {}

        for person in self.people:
            person_items = []
            item_subtotal = 0.0

            if self.is_itemized:
                for item in self.bill.items:
                    assignees = list(dict.fromkeys(item.assigned_to))
                    if person in assignees and item.price > 0:
                        share = item.price / len(assignees)
                        person_items.append({
                            'item_id': item.id,
                            'item_name': item.name,
                            'item_total_price': item.price,
                            'shared_with': len(assignees),
                            'person_share': share,
                        })
                        item_subtotal += share
            else:
                item_subtotal = summary.shares.get(person, 0.0)

            total = summary.shares.get(person, 0.0)
            breakdown[person] = {
                'items': person_items,
                'subtotal_from_items': item_subtotal,
                'surcharge_share': total - item_subtotal,
                'total': total,
            }

        return breakdown

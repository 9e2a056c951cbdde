"""
Data models for Splitshare - Bills, line items and split results
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Dict, Optional, Tuple

from config import CURRENCY_DEFAULT
from constants import CATEGORY_FOOD, SELF_ID

# participant id -> owed amount, in first-appearance order
SplitResult = Dict[str, float]


@dataclass(frozen=True)
class Friend:
    """Entry of the participant directory"""
    id: str
    display_name: str


@dataclass(frozen=True)
class LineItem:
    """One priced entry on a bill"""
    id: str
    price: float
    assigned_to: Tuple[str, ...] = ()
    name: str = ""
    quantity: int = 1
    unit_price: Optional[float] = None

    def __post_init__(self):
        # lists from form state become immutable tuples; a bare string is
        # left as is so the calculator can reject it
        if not isinstance(self.assigned_to, str):
            object.__setattr__(self, 'assigned_to', tuple(self.assigned_to))

    @classmethod
    def from_ticket(cls, id: str, name: str, quantity: int, unit_price: float,
                    assigned_to=()) -> "LineItem":
        """Ticket-style item priced as quantity x unit price"""
        return cls(
            id=id,
            price=quantity * unit_price,
            assigned_to=tuple(assigned_to),
            name=name,
            quantity=quantity,
            unit_price=unit_price,
        )


@dataclass
class Bill:
    """A whole bill of one category"""
    title: str
    category: str = CATEGORY_FOOD
    items: List[LineItem] = field(default_factory=list)
    participants: List[str] = field(default_factory=list)
    tax: float = 0.0
    tip: float = 0.0
    additional: float = 0.0
    payer: str = SELF_ID
    currency: str = CURRENCY_DEFAULT
    created: date = field(default_factory=date.today)
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    id: str = ""

    @property
    def surcharges(self) -> List[float]:
        """Tax, tip and additional expenses in that order"""
        return [self.tax, self.tip, self.additional]

    @property
    def subtotal(self) -> float:
        return sum(item.price for item in self.items)

    @property
    def total(self) -> float:
        return self.subtotal + sum(self.surcharges)


@dataclass
class BillSummary:
    """Split of one bill together with the amounts nobody was charged for"""
    subtotal: float
    surcharge_total: float
    shares: SplitResult
    unassigned_total: float = 0.0
    undistributed_surcharge: float = 0.0

    @property
    def total(self) -> float:
        return self.subtotal + self.surcharge_total

    @property
    def distributed_total(self) -> float:
        return sum(self.shares.values())


@dataclass
class Settlement:
    """Represents a payment settlement between people"""
    from_person: str
    to_person: str
    amount: float
    currency: str = CURRENCY_DEFAULT

"""
Data models for DuoSplit
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class Payer(str, Enum):
    """One of the two fixed people sharing the ledger"""
    A = "user_a"
    B = "user_b"

    @property
    def other(self) -> "Payer":
        return Payer.B if self is Payer.A else Payer.A


class SplitType(str, Enum):
    EQUAL = "EQUAL"  # 50/50
    FULL_FOR_OTHER = "FULL_FOR_OTHER"  # paid entirely on behalf of the other


class PaymentMethod(str, Enum):
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


CATEGORIES = [
    "Groceries",
    "Dining Out",
    "Rent/Mortgage",
    "Utilities",
    "Transportation",
    "Fuel",
    "Parking",
    "Vehicles",
    "Entertainment",
    "Health",
    "Pets",
    "Shopping",
    "Travel",
    "Other",
]


@dataclass(frozen=True)
class User:
    payer: Payer
    name: str
    color: str = ""


@dataclass(frozen=True)
class Household:
    """The fixed pair of users; first is always Payer.A"""
    first: User
    second: User

    def __post_init__(self):
        if self.first.payer is not Payer.A or self.second.payer is not Payer.B:
            raise ValueError("household must be (Payer.A, Payer.B)")

    def user(self, payer: Payer) -> User:
        return self.first if payer == Payer.A else self.second

    def name_of(self, payer: Payer) -> str:
        return self.user(payer).name

    def categories(self) -> List[str]:
        """Advisory categories, with one personal category per user after Health"""
        idx = CATEGORIES.index("Health") + 1
        return CATEGORIES[:idx] + [self.first.name, self.second.name] + CATEGORIES[idx:]


@dataclass(frozen=True)
class Expense:
    """Single dated expense record (one installment of an intent)"""
    id: str
    amount: Decimal  # two decimal places
    description: str
    category: str
    date: str  # YYYY-MM-DD
    payer_id: Payer
    split_type: SplitType
    timestamp: int  # creation order tiebreak, milliseconds
    payment_method: PaymentMethod = PaymentMethod.CREDIT
    notes: Optional[str] = None
    is_settled: bool = False


@dataclass
class ExpenseIntent:
    """What the user entered, before installment expansion"""
    amount: object  # anything money.parse_amount accepts
    description: str
    category: str
    date: str
    payer_id: Payer
    split_type: SplitType = SplitType.EQUAL
    payment_method: PaymentMethod = PaymentMethod.CREDIT
    notes: Optional[str] = None


@dataclass(frozen=True)
class ExpenseSummary:
    """
    Derived totals for a record set.
    net_balance > 0: second user owes the first; < 0: first owes the second.
    """
    total_paid_a: Decimal
    total_paid_b: Decimal
    net_balance: Decimal

    @property
    def is_settled_up(self) -> bool:
        return abs(self.net_balance) < Decimal("0.01")


@dataclass(frozen=True)
class BalanceStatement:
    debtor: Payer
    creditor: Payer
    amount: Decimal

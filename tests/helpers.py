from decimal import Decimal

from models import Expense, Payer, PaymentMethod, SplitType


def make_expense(id, amount="100.00", date="2024-03-10", payer=Payer.A, split=SplitType.EQUAL,
                 category="Groceries", settled=False, timestamp=0, description=None):
    return Expense(
        id=id,
        amount=Decimal(amount),
        description=description or f"expense {id}",
        category=category,
        date=date,
        payer_id=payer,
        split_type=split,
        timestamp=timestamp,
        payment_method=PaymentMethod.CREDIT,
        is_settled=settled,
    )

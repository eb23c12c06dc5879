from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
import uuid

INCOME = "income"
EXPENSE = "expense"
KINDS = (INCOME, EXPENSE)


@dataclass
class Transaction:
    id: str
    type: str  # 'income' or 'expense'
    description: str
    amount: Decimal  # always positive, sign comes from type
    transaction_date: date
    category_id: Optional[str]
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def new(
        cls,
        type: str,
        description: str,
        amount: Decimal,
        transaction_date: date,
        category_id: Optional[str],
    ) -> "Transaction":
        """Create a Transaction with a fresh ID and insertion timestamp."""
        return cls(
            id=new_transaction_id(),
            type=type,
            description=description,
            amount=amount,
            transaction_date=transaction_date,
            category_id=category_id,
            created_at=datetime.now(),
        )

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by the transaction type."""
        return self.amount if self.type == INCOME else -self.amount

    def to_dict(self) -> dict:
        """Convert transaction to dictionary for database storage."""
        return {
            "id": self.id,
            "transaction_type": self.type,
            "description": self.description,
            "amount": str(self.amount),
            "transaction_date": self.transaction_date.isoformat(),
            "category_id": self.category_id,
            "created_at": self.created_at.isoformat(),
        }


def new_transaction_id() -> str:
    """Generate a random transaction ID (ordering ties use created_at)."""
    return uuid.uuid4().hex

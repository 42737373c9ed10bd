"""Transaction model for the finance tracker."""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class TransactionType(str, Enum):
    """Direction of a transaction; the sign of its amount derives from this."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionBase(SQLModel):
    """Fields supplied by the user when recording a transaction."""

    type: str
    amount: float
    category: str
    description: Optional[str] = Field(default=None)
    date: datetime


class Transaction(TransactionBase, table=True):
    """A single recorded income or expense event."""

    __tablename__ = "transactions"

    id: str = Field(primary_key=True)
    user_id: str = Field(index=True)

    # Economic event date, may differ from the record timestamps.
    # All timestamps are naive local time.
    date: datetime = Field(index=True, sa_type=DateTime(timezone=False))

    # Bookkeeping, set once at creation
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False)
    )

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME


class TransactionCreate(TransactionBase):
    """Validated input for the add-transaction flow."""

    type: TransactionType
    amount: float = Field(ge=0)
    category: str = Field(min_length=1)

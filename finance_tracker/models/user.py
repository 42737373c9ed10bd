"""Identity and planning models.

Only ``User`` takes part in the current flows; ``Budget``, ``Goal`` and
``Category`` describe records for the budgets and goals sections, which are
not implemented yet.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class User(SQLModel):
    """Authenticated identity handed out by the auth provider."""

    id: str
    email: str
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.email


class Budget(SQLModel):
    id: str
    user_id: str
    category: str
    amount: float
    period: str  # "monthly" or "yearly"
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class Goal(SQLModel):
    id: str
    user_id: str
    title: str
    target_amount: float
    current_amount: float = 0.0
    target_date: Optional[datetime] = None
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class Category(SQLModel):
    id: str
    user_id: str
    name: str
    type: str  # "income" or "expense"
    color: str
    created_at: datetime = Field(default_factory=datetime.now)

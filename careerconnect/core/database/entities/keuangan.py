"""
Bookkeeping (keuangan) entity models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from careerconnect.core.models.domain import TransactionType

from ..base import Base, utc_now


class TransactionCategory(Base, table=True):
    """Income or expense category; ``color`` is used by the overview charts.

    Table: transaction_categories
    """

    __tablename__ = "transaction_categories"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    type: TransactionType = Field(index=True)
    color: str = Field(default="#8884d8")

    created_at: datetime = Field(default_factory=utc_now)


class Transaction(Base, table=True):
    """Single bookkeeping entry.

    Table: transactions
    """

    __tablename__ = "transactions"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    amount: int
    description: str
    type: TransactionType = Field(index=True)
    category_id: int = Field(foreign_key="transaction_categories.id", index=True)
    date: datetime = Field(default_factory=utc_now, index=True)
    receipt_url: Optional[str] = Field(default=None)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(default_factory=utc_now)


class Budget(Base, table=True):
    """Spending limit for an expense category.

    Table: budgets
    """

    __tablename__ = "budgets"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    category_id: int = Field(foreign_key="transaction_categories.id", index=True)
    amount: int
    start_date: Optional[datetime] = Field(default=None)
    end_date: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

"""
Bookkeeping repositories.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from careerconnect.core.models.domain import TransactionType

from ..entities.keuangan import Budget, Transaction, TransactionCategory
from .base import QueryBuilder, SQLModelRepository


class TransactionCategoryRepository(SQLModelRepository[TransactionCategory]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TransactionCategory)

    async def list_all(self, type_: Optional[TransactionType] = None) -> List[TransactionCategory]:
        stmt = select(TransactionCategory).order_by(TransactionCategory.type, TransactionCategory.name)
        if type_ is not None:
            stmt = stmt.where(TransactionCategory.type == type_)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def is_in_use(self, category_id: int) -> bool:
        stmt = select(Transaction.id).where(Transaction.category_id == category_id).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None


class TransactionRepository(SQLModelRepository[Transaction]):
    """Bookkeeping entries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Transaction)

    async def search(
        self,
        type_: Optional[TransactionType] = None,
        category_id: Optional[int] = None,
        search_term: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Tuple[Transaction, TransactionCategory]]:
        stmt = select(Transaction, TransactionCategory).join(
            TransactionCategory, TransactionCategory.id == Transaction.category_id
        )
        stmt = QueryBuilder.apply_filters(stmt, Transaction, {"type": type_, "category_id": category_id})
        stmt = QueryBuilder.apply_search(stmt, [Transaction.description], search_term)
        if start_date is not None:
            stmt = stmt.where(Transaction.date >= start_date)
        if end_date is not None:
            stmt = stmt.where(Transaction.date <= end_date)
        stmt = stmt.order_by(Transaction.date.desc(), Transaction.id.desc())
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def totals_by_type(self) -> Dict[TransactionType, int]:
        stmt = select(Transaction.type, func.coalesce(func.sum(Transaction.amount), 0)).group_by(Transaction.type)
        result = await self.session.execute(stmt)
        totals = {type_: 0 for type_ in TransactionType}
        for type_, total in result.all():
            totals[TransactionType(type_)] = int(total)
        return totals

    async def totals_by_category(self) -> List[Tuple[TransactionCategory, int]]:
        stmt = (
            select(TransactionCategory, func.coalesce(func.sum(Transaction.amount), 0))
            .join(Transaction, Transaction.category_id == TransactionCategory.id)
            .group_by(TransactionCategory.id)
            .order_by(TransactionCategory.type, TransactionCategory.name)
        )
        result = await self.session.execute(stmt)
        return [(row[0], int(row[1])) for row in result.all()]

    async def spent_in_category(
        self, category_id: int, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> int:
        stmt = select(func.coalesce(func.sum(Transaction.amount), 0)).where(
            Transaction.category_id == category_id, Transaction.type == TransactionType.PENGELUARAN
        )
        if start is not None:
            stmt = stmt.where(Transaction.date >= start)
        if end is not None:
            stmt = stmt.where(Transaction.date <= end)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())


class BudgetRepository(SQLModelRepository[Budget]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Budget)

    async def list_with_categories(self) -> List[Tuple[Budget, TransactionCategory]]:
        stmt = (
            select(Budget, TransactionCategory)
            .join(TransactionCategory, TransactionCategory.id == Budget.category_id)
            .order_by(Budget.id)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

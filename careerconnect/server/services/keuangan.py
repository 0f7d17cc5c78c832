"""
Bookkeeping reports.

All amounts are whole rupiah. Weekly sales are counted in the 30 days before
Eid al-Adha (10 Dzulhijjah) of a Hijri year, bucketed by ISO week.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.entities import Budget, TransactionCategory
from careerconnect.core.database.repositories import (
    BudgetRepository,
    HewanRepository,
    TipeHewanRepository,
    TransactionRepository,
)
from careerconnect.core.hijri import current_hijri_year, weekly_sales_window
from careerconnect.core.models.domain import JenisHewan, TransactionType
from careerconnect.core.models.io.keuangan import (
    BudgetRead,
    CategoryRead,
    ChartSlice,
    FinanceOverview,
    FinanceStats,
    QurbanSalesEntry,
    QurbanSalesReport,
    WeeklySalesBucket,
    WeeklySalesReport,
)

_PREFIX = {TransactionType.PEMASUKAN: "Pemasukan", TransactionType.PENGELUARAN: "Pengeluaran"}


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


class FinanceService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.transactions = TransactionRepository(session)
        self.budgets = BudgetRepository(session)

    async def stats(self) -> FinanceStats:
        totals = await self.transactions.totals_by_type()
        pemasukan = totals[TransactionType.PEMASUKAN]
        pengeluaran = totals[TransactionType.PENGELUARAN]
        return FinanceStats(
            total_pemasukan=pemasukan,
            total_pengeluaran=pengeluaran,
            saldo=pemasukan - pengeluaran,
            transaction_count=await self.transactions.count(),
        )

    async def overview(self) -> FinanceOverview:
        pemasukan: List[ChartSlice] = []
        pengeluaran: List[ChartSlice] = []
        for category, total in await self.transactions.totals_by_category():
            type_ = TransactionType(category.type)
            entry = ChartSlice(name=f"{_PREFIX[type_]} - {category.name}", value=total, fill=category.color)
            (pemasukan if type_ == TransactionType.PEMASUKAN else pengeluaran).append(entry)
        total_in = sum(s.value for s in pemasukan)
        total_out = sum(s.value for s in pengeluaran)
        return FinanceOverview(
            pemasukan_data=pemasukan,
            pengeluaran_data=pengeluaran,
            total_pemasukan=total_in,
            total_pengeluaran=total_out,
            saldo=total_in - total_out,
        )

    async def budget_to_read(self, budget: Budget, category: TransactionCategory) -> BudgetRead:
        spent = await self.transactions.spent_in_category(budget.category_id, budget.start_date, budget.end_date)
        return BudgetRead(
            id=budget.id,
            category_id=budget.category_id,
            category=CategoryRead.model_validate(category),
            amount=budget.amount,
            spent=spent,
            remaining=budget.amount - spent,
            start_date=budget.start_date,
            end_date=budget.end_date,
        )

    async def list_budgets(self) -> List[BudgetRead]:
        return [await self.budget_to_read(b, c) for b, c in await self.budgets.list_with_categories()]

    async def qurban_sales(self) -> QurbanSalesReport:
        tipe_repo = TipeHewanRepository(self.session)
        types = await tipe_repo.list_all()
        counts = await tipe_repo.hewan_counts(t.id for t in types)
        entries = [
            QurbanSalesEntry(
                name=t.nama,
                count=counts[t.id][0],
                target=t.target,
                harga=t.harga,
                total=counts[t.id][0] * t.harga,
            )
            for t in types
        ]
        return QurbanSalesReport(
            per_type=entries,
            total_sales=sum(e.total for e in entries),
            total_animals=sum(e.count for e in entries),
        )

    async def weekly_sales(self, hijri_year: Optional[int] = None, today: Optional[date] = None) -> WeeklySalesReport:
        year = hijri_year if hijri_year is not None else current_hijri_year(today)
        start, end = weekly_sales_window(year)

        buckets: Dict[date, WeeklySalesBucket] = {}
        cursor = week_start(start)
        while cursor <= end:
            buckets[cursor] = WeeklySalesBucket(week_start=cursor.isoformat())
            cursor += timedelta(days=7)

        rows = await HewanRepository(self.session).created_between(
            datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)
        )
        for hewan, tipe in rows:
            bucket = buckets[week_start(hewan.created_at.date())]
            if JenisHewan(tipe.jenis) == JenisHewan.SAPI:
                bucket.sapi += 1
            else:
                bucket.domba += 1
            bucket.total += 1

        return WeeklySalesReport(
            hijri_year=year,
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            weeks=list(buckets.values()),
        )

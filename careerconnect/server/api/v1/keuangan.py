"""
Bookkeeping endpoints: categories, transactions, budgets and reports.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import Budget, Transaction, TransactionCategory, User
from careerconnect.core.database.repositories import (
    BudgetRepository,
    TransactionCategoryRepository,
    TransactionRepository,
)
from careerconnect.core.models.domain import TransactionType
from careerconnect.core.models.io.keuangan import (
    BudgetCreate,
    BudgetRead,
    BudgetUpdate,
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    FinanceOverview,
    FinanceStats,
    QurbanSalesReport,
    TransactionCreate,
    TransactionRead,
    WeeklySalesReport,
)
from careerconnect.server.auth import get_current_user
from careerconnect.server.services.keuangan import FinanceService

router = APIRouter(tags=["keuangan"], dependencies=[Depends(get_current_user)])


def _transaction_read(transaction: Transaction, category: Optional[TransactionCategory]) -> TransactionRead:
    return TransactionRead(
        id=transaction.id,
        amount=transaction.amount,
        description=transaction.description,
        type=transaction.type,
        category_id=transaction.category_id,
        category=CategoryRead.model_validate(category) if category is not None else None,
        date=transaction.date,
        receipt_url=transaction.receipt_url,
        created_by=transaction.created_by,
        created_at=transaction.created_at,
    )


async def _category_or_404(session: AsyncSession, category_id: int) -> TransactionCategory:
    category = await TransactionCategoryRepository(session).get_by_id(category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@router.get("/categories", response_model=List[CategoryRead], summary="List Categories")
async def list_categories(
    type: Optional[TransactionType] = None, session: AsyncSession = Depends(get_session)
) -> List[CategoryRead]:
    return [CategoryRead.model_validate(c) for c in await TransactionCategoryRepository(session).list_all(type)]


@router.post(
    "/categories", response_model=CategoryRead, status_code=status.HTTP_201_CREATED, summary="Create Category"
)
async def create_category(payload: CategoryCreate, session: AsyncSession = Depends(get_session)) -> CategoryRead:
    category = TransactionCategory(**payload.model_dump())
    return CategoryRead.model_validate(await TransactionCategoryRepository(session).create(category))


@router.put("/categories/{category_id}", response_model=CategoryRead, summary="Update Category")
async def update_category(
    category_id: int, payload: CategoryUpdate, session: AsyncSession = Depends(get_session)
) -> CategoryRead:
    category = await _category_or_404(session, category_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(category, key, value)
    return CategoryRead.model_validate(await TransactionCategoryRepository(session).update(category))


@router.delete(
    "/categories/{category_id}",
    summary="Delete Category",
    responses={404: {"description": "Category not found"}, 409: {"description": "Category has transactions"}},
)
async def delete_category(category_id: int, session: AsyncSession = Depends(get_session)):
    repo = TransactionCategoryRepository(session)
    await _category_or_404(session, category_id)
    if await repo.is_in_use(category_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category is used by transactions")
    await repo.delete(category_id)
    return {"success": True}


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


@router.get(
    "/transactions",
    response_model=List[TransactionRead],
    summary="List Transactions",
    description="Newest first, filtered by type, category, description text and date range.",
)
async def list_transactions(
    type: Optional[TransactionType] = None,
    category_id: Optional[int] = None,
    search_term: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    session: AsyncSession = Depends(get_session),
) -> List[TransactionRead]:
    rows = await TransactionRepository(session).search(type, category_id, search_term, start_date, end_date)
    return [_transaction_read(t, c) for t, c in rows]


@router.post(
    "/transactions",
    response_model=TransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Transaction",
    responses={400: {"description": "Category type does not match"}, 404: {"description": "Category not found"}},
)
async def create_transaction(
    payload: TransactionCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TransactionRead:
    category = await _category_or_404(session, payload.category_id)
    if category.type != payload.type:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category type does not match")
    data = payload.model_dump(exclude_none=True)
    transaction = Transaction(**data, created_by=user.id)
    transaction = await TransactionRepository(session).create(transaction)
    return _transaction_read(transaction, category)


@router.delete(
    "/transactions/{transaction_id}",
    summary="Delete Transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def delete_transaction(transaction_id: int, session: AsyncSession = Depends(get_session)):
    if not await TransactionRepository(session).delete(transaction_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return {"success": True}


# ---------------------------------------------------------------------------
# Budgets
# ---------------------------------------------------------------------------


@router.get("/budgets", response_model=List[BudgetRead], summary="List Budgets")
async def list_budgets(session: AsyncSession = Depends(get_session)) -> List[BudgetRead]:
    return await FinanceService(session).list_budgets()


@router.post("/budgets", response_model=BudgetRead, status_code=status.HTTP_201_CREATED, summary="Create Budget")
async def create_budget(payload: BudgetCreate, session: AsyncSession = Depends(get_session)) -> BudgetRead:
    category = await _category_or_404(session, payload.category_id)
    budget = await BudgetRepository(session).create(Budget(**payload.model_dump()))
    return await FinanceService(session).budget_to_read(budget, category)


@router.put("/budgets/{budget_id}", response_model=BudgetRead, summary="Update Budget")
async def update_budget(
    budget_id: int, payload: BudgetUpdate, session: AsyncSession = Depends(get_session)
) -> BudgetRead:
    repo = BudgetRepository(session)
    budget = await repo.get_by_id(budget_id)
    if budget is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget not found")
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("category_id") is not None:
        await _category_or_404(session, changes["category_id"])
    for key, value in changes.items():
        if value is not None or key in ("start_date", "end_date"):
            setattr(budget, key, value)
    budget = await repo.update(budget)
    category = await _category_or_404(session, budget.category_id)
    return await FinanceService(session).budget_to_read(budget, category)


@router.delete("/budgets/{budget_id}", summary="Delete Budget", responses={404: {"description": "Budget not found"}})
async def delete_budget(budget_id: int, session: AsyncSession = Depends(get_session)):
    if not await BudgetRepository(session).delete(budget_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget not found")
    return {"success": True}


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


@router.get("/stats", response_model=FinanceStats, summary="Finance Stats")
async def stats(session: AsyncSession = Depends(get_session)) -> FinanceStats:
    return await FinanceService(session).stats()


@router.get(
    "/qurban-sales",
    response_model=QurbanSalesReport,
    summary="Qurban Sales",
    description="Registered animals and their value per animal type.",
)
async def qurban_sales(session: AsyncSession = Depends(get_session)) -> QurbanSalesReport:
    return await FinanceService(session).qurban_sales()


@router.get(
    "/overview",
    response_model=FinanceOverview,
    summary="Finance Overview",
    description="Per-category totals split into income and expense chart data.",
)
async def overview(session: AsyncSession = Depends(get_session)) -> FinanceOverview:
    return await FinanceService(session).overview()


@router.get(
    "/weekly-sales",
    response_model=WeeklySalesReport,
    summary="Weekly Animal Sales",
    description="Animals registered per ISO week in the 30 days before Eid al-Adha of a Hijri year.",
    responses={400: {"description": "Hijri year outside 1343-1500"}},
)
async def weekly_sales(year: Optional[int] = None, session: AsyncSession = Depends(get_session)) -> WeeklySalesReport:
    """- **year**: Hijri year (defaults to the current one)."""
    return await FinanceService(session).weekly_sales(year)

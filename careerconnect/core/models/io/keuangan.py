"""
Bookkeeping I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from careerconnect.core.models.domain import TransactionType


class CategoryRead(BaseModel):
    id: int
    name: str
    type: TransactionType
    color: str

    class Config:
        from_attributes = True


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    type: TransactionType
    color: str = "#8884d8"


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[TransactionType] = None
    color: Optional[str] = None


class TransactionRead(BaseModel):
    id: int
    amount: int
    description: str
    type: TransactionType
    category_id: int
    category: Optional[CategoryRead] = None
    date: datetime
    receipt_url: Optional[str] = None
    created_by: Optional[int] = None
    created_at: datetime


class TransactionCreate(BaseModel):
    amount: int = Field(gt=0, description="Amount in rupiah")
    description: str = Field(min_length=3)
    type: TransactionType
    category_id: int
    date: Optional[datetime] = None
    receipt_url: Optional[str] = None


class BudgetRead(BaseModel):
    id: int
    category_id: int
    category: Optional[CategoryRead] = None
    amount: int
    spent: int = 0
    remaining: int = 0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class BudgetCreate(BaseModel):
    category_id: int
    amount: int = Field(gt=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class BudgetUpdate(BaseModel):
    category_id: Optional[int] = None
    amount: Optional[int] = Field(default=None, gt=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class FinanceStats(BaseModel):
    total_pemasukan: int
    total_pengeluaran: int
    saldo: int
    transaction_count: int


class QurbanSalesEntry(BaseModel):
    name: str
    count: int
    target: int
    harga: int
    total: int


class QurbanSalesReport(BaseModel):
    per_type: List[QurbanSalesEntry]
    total_sales: int
    total_animals: int


class ChartSlice(BaseModel):
    name: str
    value: int
    fill: str


class FinanceOverview(BaseModel):
    pemasukan_data: List[ChartSlice]
    pengeluaran_data: List[ChartSlice]
    total_pemasukan: int
    total_pengeluaran: int
    saldo: int


class WeeklySalesBucket(BaseModel):
    week_start: str
    sapi: int = 0
    domba: int = 0
    total: int = 0


class WeeklySalesReport(BaseModel):
    hijri_year: int
    start_date: str
    end_date: str
    weeks: List[WeeklySalesBucket]

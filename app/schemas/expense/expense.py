from pydantic import BaseModel, Field
from typing import Optional, Dict
from datetime import date as dt
from decimal import Decimal
from app.models.expense.expense_models import ExpenseCurrency


class ExpenseBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    date: dt
    payment_method: str = Field(..., min_length=1, max_length=50)
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    currency: ExpenseCurrency = ExpenseCurrency.KRW
    tax_refund: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    id: Optional[str] = None


class ExpenseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[dt] = None
    payment_method: Optional[str] = Field(None, min_length=1, max_length=50)
    amount: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    currency: Optional[ExpenseCurrency] = None
    tax_refund: Optional[str] = None


class ExpenseResponse(ExpenseBase):
    id: str

    class Config:
        from_attributes = True


class ExpenseSummary(BaseModel):
    # set when the summary covers a single day
    date: Optional[dt] = None
    count: int
    base_currency: str
    total_in_base: Decimal
    totals_by_currency: Dict[str, Decimal]

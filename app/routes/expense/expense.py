from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import date as dt

from app.core.database import get_db
from app.models.expense.expense_models import ExpenseCurrency
from app.schemas.expense.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse, ExpenseSummary
from app.services.expense.expense_service import (
    list_expenses, list_expense_dates, get_expense, create_expense, update_expense, delete_expense, get_expense_summary
)

router = APIRouter(prefix="/expenses", tags=["Expense Management"])


@router.get("/", response_model=List[ExpenseResponse])
async def get_expenses(
    currency: Optional[ExpenseCurrency] = Query(None),
    date: Optional[dt] = Query(None, description="Only expenses of this day"),
    session: AsyncSession = Depends(get_db)
):
    """Get all expenses, most recent first."""
    try:
        return await list_expenses(session, currency, date)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch expenses: {str(e)}")


@router.get("/dates", response_model=List[dt])
async def get_expense_dates(session: AsyncSession = Depends(get_db)):
    """Days that have at least one expense, for the day filter."""
    return await list_expense_dates(session)


@router.get("/summary", response_model=ExpenseSummary)
async def get_summary(
    date: Optional[dt] = Query(None, description="Only expenses of this day"),
    session: AsyncSession = Depends(get_db)
):
    """Totals per currency and overall in the base currency."""
    try:
        return await get_expense_summary(session, date)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to summarize expenses: {str(e)}")


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense_by_id(expense_id: str, session: AsyncSession = Depends(get_db)):
    expense = await get_expense(session, expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("/", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(expense_data: ExpenseCreate, session: AsyncSession = Depends(get_db)):
    """Create a new expense."""
    try:
        return await create_expense(session, expense_data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create expense: {str(e)}")


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def edit_expense(expense_id: str, update_data: ExpenseUpdate, session: AsyncSession = Depends(get_db)):
    """Update an expense."""
    try:
        expense = await update_expense(session, expense_id, update_data)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update expense: {str(e)}")
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_expense(expense_id: str, session: AsyncSession = Depends(get_db)):
    """Delete an expense. Deleting an unknown id is not an error."""
    try:
        await delete_expense(session, expense_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete expense: {str(e)}")

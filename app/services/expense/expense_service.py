# expense_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
import uuid

from app.core.config import settings
from app.core.logger import logger
from app.data.default_lists import INITIAL_EXPENSES
from app.models.expense.expense_models import Expense, ExpenseCurrency
from app.schemas.expense.expense import ExpenseCreate, ExpenseUpdate, ExpenseSummary


def to_base_currency(amount: Decimal, currency: ExpenseCurrency) -> Decimal:
    """Convert an amount to TWD, the currency the totals are shown in."""
    if currency == ExpenseCurrency.TWD:
        return Decimal(amount)
    rate = Decimal(str(settings.KRW_TO_TWD_RATE))
    return Decimal(amount) * rate


# ----------------------
# Seeding
# ----------------------
async def seed_expenses_if_empty(session: AsyncSession) -> int:
    count = (await session.execute(select(func.count(Expense.id)))).scalar()
    if count:
        return 0
    for row in INITIAL_EXPENSES:
        session.add(Expense(
            id=row["id"],
            title=row["title"],
            date=datetime.strptime(row["date"], "%Y-%m-%d").date(),
            payment_method=row["payment_method"],
            amount=Decimal(row["amount"]),
            currency=ExpenseCurrency(row["currency"]),
            tax_refund=row["tax_refund"],
        ))
    await session.commit()
    logger.info(f"Seeded {len(INITIAL_EXPENSES)} expenses")
    return len(INITIAL_EXPENSES)


# ----------------------
# CRUD Operations
# ----------------------
async def list_expenses(
    session: AsyncSession,
    currency: Optional[ExpenseCurrency] = None,
    on_date: Optional[date] = None
) -> List[Expense]:
    """All expenses, most recent first, optionally for one trip day."""
    query = select(Expense)
    if currency:
        query = query.where(Expense.currency == currency)
    if on_date:
        query = query.where(Expense.date == on_date)
    query = query.order_by(Expense.date.desc(), Expense.created_at.desc())
    result = await session.execute(query)
    return result.scalars().all()


async def list_expense_dates(session: AsyncSession) -> List[date]:
    """Distinct days that have expenses, earliest first."""
    result = await session.execute(select(Expense.date).distinct().order_by(Expense.date.asc()))
    return result.scalars().all()


async def get_expense(session: AsyncSession, expense_id: str) -> Optional[Expense]:
    return await session.get(Expense, expense_id)


async def create_expense(session: AsyncSession, expense_data: ExpenseCreate) -> Expense:
    data = expense_data.model_dump()
    data["id"] = data.get("id") or str(int(datetime.utcnow().timestamp() * 1000)) + uuid.uuid4().hex[:4]
    expense = Expense(**data)
    session.add(expense)
    await session.commit()
    await session.refresh(expense)
    return expense


async def update_expense(session: AsyncSession, expense_id: str, update_data: ExpenseUpdate) -> Optional[Expense]:
    expense = await get_expense(session, expense_id)
    if not expense:
        return None

    for field, value in update_data.model_dump(exclude_unset=True).items():
        setattr(expense, field, value)

    expense.updated_at = datetime.utcnow()
    await session.commit()
    await session.refresh(expense)
    return expense


async def delete_expense(session: AsyncSession, expense_id: str) -> bool:
    """Returns False when there was nothing to delete."""
    expense = await get_expense(session, expense_id)
    if not expense:
        return False
    await session.delete(expense)
    await session.commit()
    return True


# ----------------------
# Summary
# ----------------------
async def get_expense_summary(session: AsyncSession, on_date: Optional[date] = None) -> ExpenseSummary:
    expenses = await list_expenses(session, on_date=on_date)

    totals_by_currency = {}
    total = Decimal("0")
    for expense in expenses:
        key = expense.currency.value
        totals_by_currency[key] = totals_by_currency.get(key, Decimal("0")) + Decimal(expense.amount)
        total += to_base_currency(expense.amount, expense.currency)

    return ExpenseSummary(
        date=on_date,
        count=len(expenses),
        base_currency=settings.BASE_CURRENCY,
        total_in_base=total.quantize(Decimal("1"), rounding=ROUND_HALF_UP),
        totals_by_currency=totals_by_currency,
    )

from sqlalchemy import Column, String, Date, DateTime, Numeric, Enum, Index
from datetime import datetime
from app.core.database import Base
import enum


class ExpenseCurrency(str, enum.Enum):
    KRW = "KRW"
    TWD = "TWD"


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    payment_method = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(Enum(ExpenseCurrency), nullable=False, default=ExpenseCurrency.KRW)
    tax_refund = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_expenses_date", "date"),
        Index("ix_expenses_currency", "currency"),
    )

"""
Financial Entities

Expenses, funds (with their transactions) and payment reminders.
"""

from typing import ClassVar, Optional

from sqlmodel import Field

from .document import Document
from .enums import ExpenseStatus, ReminderStatus


class Expense(Document):
    collection_name: ClassVar[str] = "expenses"

    tenant_id: str
    description: str
    amount: float
    category: Optional[str] = None
    vendor_id: Optional[str] = None
    expense_date: Optional[str] = None
    status: ExpenseStatus = ExpenseStatus.pending
    submitted_by: Optional[str] = None
    approved_by: Optional[str] = None


class Fund(Document):
    collection_name: ClassVar[str] = "funds"

    tenant_id: str
    name: str = Field(max_length=255)
    type: str = "reserve"
    balance: float = 0.0
    target: Optional[float] = None
    interest_rate: Optional[float] = None
    notes: Optional[str] = None


class FundTransaction(Document):
    """Entry of a fund's transactions sub-set; carries both keys"""

    collection_name: ClassVar[str] = "fund_transactions"

    tenant_id: str
    fund_id: str
    type: str
    amount: float
    description: Optional[str] = None
    transaction_date: Optional[str] = None
    processed_by: Optional[str] = None


class PaymentReminder(Document):
    collection_name: ClassVar[str] = "payment_reminders"

    tenant_id: str
    unit_id: Optional[str] = None
    title: str = Field(max_length=255)
    description: Optional[str] = None
    reminder_type: str = "custom"
    amount: Optional[float] = None
    due_date: Optional[str] = None
    is_recurring: bool = False
    recurring_pattern: Optional[str] = None
    next_reminder_date: Optional[str] = None
    status: ReminderStatus = ReminderStatus.active
    created_by: Optional[str] = None

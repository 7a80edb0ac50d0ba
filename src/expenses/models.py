"""Expense data models."""

from typing import Optional, List, Dict, Any
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field


class Expense(BaseModel):
    """Expense model."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    amount: Decimal
    description: str
    category_id: int = Field(alias="categoryId")
    date: str
    owner_id: str = Field(alias="ownerId")
    created_at: str = Field(alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Expense":
        """Build an expense from a stored DynamoDB item."""
        return cls(
            id=item['expense_id'],
            amount=item['amount'],
            description=item['description'],
            category_id=item['category_id'],
            date=item['date'],
            owner_id=item['user_id'],
            created_at=item['created_at'],
            updated_at=item.get('updated_at')
        )


class ExpenseFilters(BaseModel):
    """Normalized ledger query filters."""

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    category_id: Optional[int] = None
    limit: int = 50
    offset: int = 0


class CategoryBreakdown(BaseModel):
    """Spending for one existing category."""

    model_config = ConfigDict(populate_by_name=True)

    category_id: int = Field(alias="categoryId")
    category_name: str = Field(alias="categoryName")
    total_amount: Decimal = Field(alias="totalAmount")
    count: int
    percentage: Decimal


class MonthBreakdown(BaseModel):
    """Spending for one ``YYYY-MM`` month key."""

    model_config = ConfigDict(populate_by_name=True)

    month: str
    total_amount: Decimal = Field(alias="totalAmount")
    count: int


class ExpenseStatistics(BaseModel):
    """Aggregate spending snapshot for one owner."""

    model_config = ConfigDict(populate_by_name=True)

    total: Decimal
    recent_30_days: Decimal = Field(alias="recent30Days")
    by_category: List[CategoryBreakdown] = Field(default_factory=list, alias="byCategory")
    by_month: List[MonthBreakdown] = Field(default_factory=list, alias="byMonth")

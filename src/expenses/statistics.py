"""Expense statistics engine."""

import os
from typing import Any, Dict, Iterable, List, Optional
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from collections import defaultdict
import logging
from boto3.dynamodb.conditions import Key

from shared.dynamodb import DynamoDBClient
from shared.dates import to_iso_timestamp, utc_now
from shared.validators import validate_owner_id
from expenses.models import CategoryBreakdown, ExpenseStatistics, MonthBreakdown

logger = logging.getLogger(__name__)

RECENT_WINDOW_DAYS = 30
ZERO = Decimal('0')
CENT = Decimal('0.01')


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def recent_window_start(now: datetime, days: int = RECENT_WINDOW_DAYS) -> str:
    """ISO timestamp of ``now`` minus ``days``; dates at or after it are recent."""
    return to_iso_timestamp(now - timedelta(days=days))


def percentage_of(part: Decimal, total: Decimal) -> Decimal:
    if total <= 0:
        return ZERO
    return (part / total * 100).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_statistics(
    expenses: Iterable[Dict[str, Any]],
    categories: Iterable[Dict[str, Any]],
    now: Optional[datetime] = None
) -> ExpenseStatistics:
    """
    Aggregate one owner's expenses.

    Args:
        expenses: Stored expense items of a single owner
        categories: Stored category items of the same owner
        now: Reference time for the trailing window (default: current UTC time)

    Returns:
        Totals plus by-category (ascending categoryId) and by-month
        (descending month) breakdowns
    """
    if now is None:
        now = utc_now()

    cutoff = recent_window_start(now)
    category_names = {category['category_id']: category['name'] for category in categories}

    total = ZERO
    recent = ZERO
    by_category = defaultdict(lambda: {'amount': ZERO, 'count': 0})
    by_month = defaultdict(lambda: {'amount': ZERO, 'count': 0})

    for expense in expenses:
        amount = _to_decimal(expense.get('amount', 0))
        date = expense.get('date') or ''

        total += amount

        if date >= cutoff:
            recent += amount

        # Expenses whose category is gone only count toward the totals
        category_id = expense.get('category_id')
        if category_id in category_names:
            by_category[category_id]['amount'] += amount
            by_category[category_id]['count'] += 1

        month = date[:7]
        by_month[month]['amount'] += amount
        by_month[month]['count'] += 1

    return ExpenseStatistics(
        total=total,
        recent_30_days=recent,
        by_category=[
            CategoryBreakdown(
                category_id=category_id,
                category_name=category_names[category_id],
                total_amount=data['amount'],
                count=data['count'],
                percentage=percentage_of(data['amount'], total)
            )
            for category_id, data in sorted(by_category.items())
        ],
        by_month=[
            MonthBreakdown(month=month, total_amount=data['amount'], count=data['count'])
            for month, data in sorted(by_month.items(), reverse=True)
        ]
    )


class ExpenseStatisticsService:
    """Service computing spending statistics from the ledger."""

    def __init__(self):
        """Initialize statistics service."""
        self.expenses_table = DynamoDBClient(os.environ.get('EXPENSES_TABLE', 'expense-tracker-expenses'))
        self.categories_table = DynamoDBClient(os.environ.get('CATEGORIES_TABLE', 'expense-tracker-categories'))

    def get_statistics(self, user_id: str, now: Optional[datetime] = None) -> ExpenseStatistics:
        """
        Get the aggregate statistics snapshot for a user.

        Every call reads the user's full expense and category partitions.
        A failed read fails the whole snapshot.

        Args:
            user_id: User ID
            now: Optional reference time for the trailing window

        Returns:
            Expense statistics

        Raises:
            AuthenticationError: If no user ID is given
            DatabaseError: If the ledger cannot be read
        """
        user_id = validate_owner_id(user_id)

        expenses = self._fetch_expenses(user_id)
        categories = self._fetch_categories(user_id)

        logger.debug(
            f"Computing statistics for {user_id} over {len(expenses)} expenses "
            f"and {len(categories)} categories"
        )

        return compute_statistics(expenses, categories, now=now)

    def _fetch_expenses(self, user_id: str) -> List[Dict[str, Any]]:
        return self.expenses_table.query_all(
            key_condition_expression=Key('user_id').eq(user_id)
        )

    def _fetch_categories(self, user_id: str) -> List[Dict[str, Any]]:
        return self.categories_table.query_all(
            key_condition_expression=Key('user_id').eq(user_id)
        )

"""Expense service for managing expenses."""

import os
from typing import Dict, Any, List, Optional
import logging
from boto3.dynamodb.conditions import Key, Attr

from shared.dynamodb import DynamoDBClient
from shared.dates import to_iso_timestamp
from shared.validators import (
    MAX_DESCRIPTION_LENGTH,
    reject_owner_fields,
    validate_amount,
    validate_category_id,
    validate_date,
    validate_owner_id,
    validate_required_fields,
    sanitize_string
)
from shared.exceptions import ValidationError, NotFoundError
from expenses.models import Expense, ExpenseFilters
from expenses.query import clamp_limit, clamp_offset

logger = logging.getLogger(__name__)

# Request field -> stored attribute
UPDATABLE_FIELDS = {
    'amount': 'amount',
    'description': 'description',
    'categoryId': 'category_id',
    'date': 'date'
}


def _validate_field(field: str, value: Any) -> Any:
    if field == 'amount':
        return validate_amount(value)
    if field == 'description':
        return sanitize_string(value, 'Description', max_length=MAX_DESCRIPTION_LENGTH)
    if field == 'categoryId':
        return validate_category_id(value)
    return validate_date(value)


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self):
        """Initialize expense service."""
        self.expenses_table = DynamoDBClient(os.environ.get('EXPENSES_TABLE', 'expense-tracker-expenses'))
        self.counters_table = DynamoDBClient(os.environ.get('COUNTERS_TABLE', 'expense-tracker-counters'))

    def create_expense(self, user_id: str, payload: Dict[str, Any]) -> Expense:
        """
        Create a new expense.

        Args:
            user_id: User ID of the authenticated caller
            payload: Request body with amount, description, categoryId and date

        Returns:
            Created expense

        Raises:
            OwnershipViolationError: If the payload carries an owner field
            ValidationError: If validation fails
        """
        user_id = validate_owner_id(user_id)
        reject_owner_fields(payload)
        validate_required_fields(payload, list(UPDATABLE_FIELDS))

        values = {
            UPDATABLE_FIELDS[field]: _validate_field(field, payload[field])
            for field in UPDATABLE_FIELDS
        }

        now = to_iso_timestamp()
        expense_id = self.counters_table.increment_counter('expenses')

        item = self.expenses_table.put_item({
            'user_id': user_id,
            'expense_id': expense_id,
            **values,
            'created_at': now,
            'updated_at': now
        })

        logger.info(f"Created expense {expense_id}")
        return Expense.from_item(item)

    def get_expense(self, user_id: str, expense_id: int) -> Expense:
        """
        Get expense by ID.

        Args:
            user_id: User ID
            expense_id: Expense ID

        Returns:
            Expense data

        Raises:
            NotFoundError: If expense not found
        """
        user_id = validate_owner_id(user_id)

        item = self.expenses_table.get_item({
            'user_id': user_id,
            'expense_id': expense_id
        })

        if not item:
            raise NotFoundError("Expense not found")

        return Expense.from_item(item)

    def list_expenses(
        self,
        user_id: str,
        filters: Optional[ExpenseFilters] = None
    ) -> List[Expense]:
        """
        List expenses for a user, newest date first.

        Args:
            user_id: User ID
            filters: Optional date range, category, limit and offset

        Returns:
            The requested page of expenses
        """
        user_id = validate_owner_id(user_id)
        filters = filters or ExpenseFilters()
        limit = clamp_limit(filters.limit)
        offset = clamp_offset(filters.offset)

        # DynamoDB rejects BETWEEN with a lower bound above the upper one
        if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            return []

        key_condition = Key('user_id').eq(user_id)
        if filters.start_date and filters.end_date:
            key_condition = key_condition & Key('date').between(filters.start_date, filters.end_date)
        elif filters.start_date:
            key_condition = key_condition & Key('date').gte(filters.start_date)
        elif filters.end_date:
            key_condition = key_condition & Key('date').lte(filters.end_date)

        filter_expr = None
        if filters.category_id is not None:
            filter_expr = Attr('category_id').eq(filters.category_id)

        items = self.expenses_table.query_all(
            key_condition_expression=key_condition,
            filter_expression=filter_expr,
            index_name='user-date-index',
            scan_forward=False,
            max_items=offset + limit
        )

        logger.debug(f"Ledger query for {user_id} matched {len(items)} expenses")
        return [Expense.from_item(item) for item in items[offset:offset + limit]]

    def update_expense(
        self,
        user_id: str,
        expense_id: int,
        payload: Dict[str, Any]
    ) -> Expense:
        """
        Update the provided fields of an expense.

        Args:
            user_id: User ID
            expense_id: Expense ID
            payload: Fields to update

        Returns:
            Updated expense

        Raises:
            OwnershipViolationError: If the payload carries an owner field
            NotFoundError: If expense not found
            ValidationError: If validation fails
        """
        user_id = validate_owner_id(user_id)
        reject_owner_fields(payload)

        updates = {
            UPDATABLE_FIELDS[field]: _validate_field(field, value)
            for field, value in payload.items()
            if field in UPDATABLE_FIELDS
        }

        if not updates:
            raise ValidationError("No updates provided")

        # Verify expense exists
        self.get_expense(user_id, expense_id)

        update_parts = []
        expr_values = {}
        expr_names = {}

        for key, value in updates.items():
            update_parts.append(f"#{key} = :{key}")
            expr_names[f'#{key}'] = key
            expr_values[f':{key}'] = value

        update_parts.append("#updated_at = :updated_at")
        expr_names['#updated_at'] = 'updated_at'
        expr_values[':updated_at'] = to_iso_timestamp()

        # Refuse to recreate an expense deleted since the check above
        try:
            item = self.expenses_table.update_item(
                key={'user_id': user_id, 'expense_id': expense_id},
                update_expression="SET " + ", ".join(update_parts),
                expression_values=expr_values,
                expression_names=expr_names,
                condition_expression="attribute_exists(expense_id)"
            )
        except NotFoundError:
            raise NotFoundError("Expense not found")

        logger.info(f"Updated expense {expense_id}")
        return Expense.from_item(item)

    def delete_expense(self, user_id: str, expense_id: int) -> Expense:
        """
        Delete expense.

        Args:
            user_id: User ID
            expense_id: Expense ID

        Returns:
            The deleted expense

        Raises:
            NotFoundError: If expense not found
        """
        expense = self.get_expense(user_id, expense_id)

        self.expenses_table.delete_item({
            'user_id': user_id,
            'expense_id': expense_id
        })

        logger.info(f"Deleted expense {expense_id}")
        return expense

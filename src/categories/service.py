"""Category service for managing spending categories."""

import os
from typing import Dict, Any, List
import logging
from boto3.dynamodb.conditions import Key

from shared.dynamodb import DynamoDBClient
from shared.dates import to_iso_timestamp
from shared.validators import (
    MAX_LABEL_LENGTH,
    reject_owner_fields,
    validate_owner_id,
    sanitize_string
)
from shared.exceptions import ValidationError, NotFoundError
from categories.models import Category

logger = logging.getLogger(__name__)

CATEGORY_FIELDS = ('name', 'color', 'icon')


class CategoryService:
    """Service for managing categories."""

    def __init__(self):
        """Initialize category service."""
        self.categories_table = DynamoDBClient(os.environ.get('CATEGORIES_TABLE', 'expense-tracker-categories'))
        self.counters_table = DynamoDBClient(os.environ.get('COUNTERS_TABLE', 'expense-tracker-counters'))

    def create_category(self, user_id: str, payload: Dict[str, Any]) -> Category:
        """
        Create a new category.

        Args:
            user_id: User ID of the authenticated caller
            payload: Request body with name, color and icon

        Returns:
            Created category

        Raises:
            OwnershipViolationError: If the payload carries an owner field
            ValidationError: If validation fails
        """
        user_id = validate_owner_id(user_id)
        reject_owner_fields(payload)

        values = {
            field: sanitize_string(payload.get(field), field.capitalize(), max_length=MAX_LABEL_LENGTH)
            for field in CATEGORY_FIELDS
        }

        now = to_iso_timestamp()
        category_id = self.counters_table.increment_counter('categories')

        item = self.categories_table.put_item({
            'user_id': user_id,
            'category_id': category_id,
            **values,
            'created_at': now,
            'updated_at': now
        })

        logger.info(f"Created category {category_id} ({values['name']})")
        return Category.from_item(item)

    def get_category(self, user_id: str, category_id: int) -> Category:
        """
        Get category by ID.

        Raises:
            NotFoundError: If category not found
        """
        user_id = validate_owner_id(user_id)

        item = self.categories_table.get_item({
            'user_id': user_id,
            'category_id': category_id
        })

        if not item:
            raise NotFoundError("Category not found")

        return Category.from_item(item)

    def list_categories(self, user_id: str) -> List[Category]:
        """List a user's categories, most recently created first."""
        user_id = validate_owner_id(user_id)

        items = self.categories_table.query_all(
            key_condition_expression=Key('user_id').eq(user_id)
        )
        items.sort(key=lambda item: item.get('created_at', ''), reverse=True)

        return [Category.from_item(item) for item in items]

    def update_category(self, user_id: str, category_id: int, payload: Dict[str, Any]) -> Category:
        """
        Update the provided fields of a category.

        Raises:
            OwnershipViolationError: If the payload carries an owner field
            NotFoundError: If category not found
            ValidationError: If validation fails
        """
        user_id = validate_owner_id(user_id)
        reject_owner_fields(payload)

        updates = {
            field: sanitize_string(payload[field], field.capitalize(), max_length=MAX_LABEL_LENGTH)
            for field in CATEGORY_FIELDS
            if field in payload
        }

        if not updates:
            raise ValidationError("No updates provided")

        self.get_category(user_id, category_id)

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

        try:
            item = self.categories_table.update_item(
                key={'user_id': user_id, 'category_id': category_id},
                update_expression="SET " + ", ".join(update_parts),
                expression_values=expr_values,
                expression_names=expr_names,
                condition_expression="attribute_exists(category_id)"
            )
        except NotFoundError:
            raise NotFoundError("Category not found")

        logger.info(f"Updated category {category_id}")
        return Category.from_item(item)

    def delete_category(self, user_id: str, category_id: int) -> Category:
        """
        Delete category. Expenses that reference it are left in place.

        Raises:
            NotFoundError: If category not found
        """
        category = self.get_category(user_id, category_id)

        self.categories_table.delete_item({
            'user_id': user_id,
            'category_id': category_id
        })

        logger.info(f"Deleted category {category_id}")
        return category

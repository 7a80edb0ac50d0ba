"""Lambda handler for category operations."""

import os
import logging
from typing import Dict, Any

from shared.auth import get_user_id
from shared.response import (
    success_response,
    error_response,
    exception_response,
    validation_error_response,
    not_found_response
)
from shared.validators import parse_json_body, validate_record_id
from shared.exceptions import (
    DatabaseError,
    ExpenseTrackerException,
    NotFoundError,
    OwnershipViolationError,
    ValidationError
)
from categories.service import CategoryService

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

# Initialize service
category_service = CategoryService()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for category operations.

    Handles:
    - GET /categories - List categories
    - POST /categories - Create category
    - GET /categories/{id} - Get category details
    - PUT /categories/{id} - Update category
    - DELETE /categories/{id} - Delete category (expenses are kept)

    Args:
        event: Lambda event
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        logger.info(f"Request: {event.get('httpMethod')} {event.get('path')}")

        user_id = get_user_id(event)

        http_method = event.get('httpMethod')
        path = (event.get('path') or '').rstrip('/')

        if path == '/categories' and http_method == 'GET':
            return success_response(data=category_service.list_categories(user_id))
        elif path == '/categories' and http_method == 'POST':
            return handle_create(event, user_id)
        elif path.startswith('/categories/') and http_method == 'GET':
            return handle_get(event, user_id)
        elif path.startswith('/categories/') and http_method == 'PUT':
            return handle_update(event, user_id)
        elif path.startswith('/categories/') and http_method == 'DELETE':
            return handle_delete(event, user_id)
        else:
            return error_response("Route not found", status_code=404)

    except DatabaseError as e:
        logger.error(f"Storage error: {e.message}")
        return error_response("Internal server error", status_code=500, error_code=e.error_code)
    except ExpenseTrackerException as e:
        logger.error(f"Application error: {e.message}")
        return exception_response(e)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return error_response("Internal server error", status_code=500)


def get_category_id(event: Dict[str, Any]) -> int:
    path_params = event.get('pathParameters') or {}
    return validate_record_id(path_params.get('id'))


def handle_create(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle create category."""
    try:
        body = parse_json_body(event.get('body'))
        category = category_service.create_category(user_id, body)

        return success_response(
            data=category,
            message="Category created successfully",
            status_code=201
        )

    except OwnershipViolationError as e:
        return exception_response(e)
    except ValidationError as e:
        return validation_error_response(e.message)


def handle_get(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle get category details."""
    try:
        category = category_service.get_category(user_id, get_category_id(event))
        return success_response(data=category)

    except ValidationError as e:
        return validation_error_response(e.message)
    except NotFoundError as e:
        return not_found_response(e.message)


def handle_update(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle update category."""
    try:
        category_id = get_category_id(event)
        body = parse_json_body(event.get('body'))

        category = category_service.update_category(user_id, category_id, body)

        return success_response(
            data=category,
            message="Category updated successfully"
        )

    except OwnershipViolationError as e:
        return exception_response(e)
    except ValidationError as e:
        return validation_error_response(e.message)
    except NotFoundError as e:
        return not_found_response(e.message)


def handle_delete(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle delete category."""
    try:
        deleted = category_service.delete_category(user_id, get_category_id(event))

        return success_response(
            data=deleted,
            message="Category deleted successfully"
        )

    except ValidationError as e:
        return validation_error_response(e.message)
    except NotFoundError as e:
        return not_found_response(e.message)

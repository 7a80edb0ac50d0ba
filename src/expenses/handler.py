"""Lambda handler for expense operations."""

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
from expenses.query import parse_expense_filters
from expenses.service import ExpenseService
from expenses.statistics import ExpenseStatisticsService

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

# Initialize services
expense_service = ExpenseService()
statistics_service = ExpenseStatisticsService()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for expense operations.

    Handles:
    - GET /expenses - List expenses (startDate, endDate, categoryId, limit, offset)
    - POST /expenses - Create expense
    - GET /expenses/stats - Get spending statistics
    - GET /expenses/{id} - Get expense details
    - PUT /expenses/{id} - Update expense
    - DELETE /expenses/{id} - Delete expense

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

        if path == '/expenses' and http_method == 'GET':
            return handle_list(event, user_id)
        elif path == '/expenses' and http_method == 'POST':
            return handle_create(event, user_id)
        elif path == '/expenses/stats' and http_method == 'GET':
            return handle_stats(event, user_id)
        elif path.startswith('/expenses/') and http_method == 'GET':
            return handle_get(event, user_id)
        elif path.startswith('/expenses/') and http_method == 'PUT':
            return handle_update(event, user_id)
        elif path.startswith('/expenses/') and http_method == 'DELETE':
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


def get_expense_id(event: Dict[str, Any]) -> int:
    """Extract the expense ID from the path parameters."""
    path_params = event.get('pathParameters') or {}
    return validate_record_id(path_params.get('id'))


def handle_list(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """
    Handle list expenses.

    Args:
        event: Lambda event
        user_id: User ID

    Returns:
        API Gateway response
    """
    query_params = event.get('queryStringParameters') or {}
    filters = parse_expense_filters(query_params)

    expenses = expense_service.list_expenses(user_id=user_id, filters=filters)

    return success_response(data={
        'expenses': expenses,
        'count': len(expenses)
    })


def handle_create(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle create expense."""
    try:
        body = parse_json_body(event.get('body'))
        expense = expense_service.create_expense(user_id, body)

        return success_response(
            data=expense,
            message="Expense created successfully",
            status_code=201
        )

    except OwnershipViolationError as e:
        return exception_response(e)
    except ValidationError as e:
        return validation_error_response(e.message)


def handle_get(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle get expense details."""
    try:
        expense_id = get_expense_id(event)
        expense = expense_service.get_expense(user_id, expense_id)

        return success_response(data=expense)

    except ValidationError as e:
        return validation_error_response(e.message)
    except NotFoundError as e:
        return not_found_response(e.message)


def handle_update(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """
    Handle update expense.

    Args:
        event: Lambda event
        user_id: User ID

    Returns:
        API Gateway response
    """
    try:
        expense_id = get_expense_id(event)
        body = parse_json_body(event.get('body'))

        updated_expense = expense_service.update_expense(user_id, expense_id, body)

        return success_response(
            data=updated_expense,
            message="Expense updated successfully"
        )

    except OwnershipViolationError as e:
        return exception_response(e)
    except ValidationError as e:
        return validation_error_response(e.message)
    except NotFoundError as e:
        return not_found_response(e.message)


def handle_delete(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle delete expense."""
    try:
        expense_id = get_expense_id(event)
        deleted = expense_service.delete_expense(user_id, expense_id)

        return success_response(
            data=deleted,
            message="Expense deleted successfully"
        )

    except ValidationError as e:
        return validation_error_response(e.message)
    except NotFoundError as e:
        return not_found_response(e.message)


def handle_stats(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """
    Handle get spending statistics.

    Returns total, recent30Days, byCategory and byMonth for the caller.
    Any storage failure fails the whole response.
    """
    statistics = statistics_service.get_statistics(user_id)
    return success_response(data=statistics)

"""Validation utilities for the expense tracker application."""

import json
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal, InvalidOperation

from .exceptions import AuthenticationError, OwnershipViolationError, ValidationError


# Normalized spellings of fields that would set the record owner
OWNER_FIELD_NAMES = {"userid", "ownerid"}

MAX_DESCRIPTION_LENGTH = 500
MAX_LABEL_LENGTH = 100


def _normalize_field_name(name: str) -> str:
    return name.lower().replace('_', '').replace('-', '')


def reject_owner_fields(payload: Dict[str, Any]) -> None:
    """
    Reject payloads that try to set the owner of a record.

    Args:
        payload: Request payload

    Raises:
        OwnershipViolationError: If any key names an owner identifier
    """
    for field in payload:
        if isinstance(field, str) and _normalize_field_name(field) in OWNER_FIELD_NAMES:
            raise OwnershipViolationError()


def validate_owner_id(user_id: Optional[str]) -> str:
    """
    Validate the resolved caller identity.

    Raises:
        AuthenticationError: If no identity was resolved
    """
    if not user_id or not isinstance(user_id, str):
        raise AuthenticationError("Unauthorized")
    return user_id


def validate_amount(amount: Any) -> Decimal:
    """
    Validate monetary amount.

    Args:
        amount: Amount to validate

    Returns:
        Validated amount as Decimal

    Raises:
        ValidationError: If amount is invalid
    """
    if amount is None:
        raise ValidationError("Amount is required")

    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise ValidationError("Amount must be a positive number")

    try:
        decimal_amount = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a positive number")

    if not decimal_amount.is_finite() or decimal_amount <= 0:
        raise ValidationError("Amount must be a positive number")

    return decimal_amount


def validate_date(date_str: Any) -> str:
    """
    Validate an ISO 8601 date or timestamp.

    Both ``2024-11-02`` and ``2024-11-02T00:00:00.000Z`` are accepted; the
    value is stored as given so month grouping keeps its ``YYYY-MM`` prefix.

    Args:
        date_str: Date string to validate

    Returns:
        Validated date string

    Raises:
        ValidationError: If date is invalid
    """
    if not date_str or not isinstance(date_str, str):
        raise ValidationError("Date must be a valid ISO date string")

    date_str = date_str.strip()
    candidate = date_str[:-1] + '+00:00' if date_str.endswith('Z') else date_str

    try:
        datetime.fromisoformat(candidate)
    except ValueError:
        raise ValidationError("Date must be a valid ISO date string")

    return date_str


def validate_category_id(category_id: Any) -> int:
    """
    Validate a category reference.

    Raises:
        ValidationError: If the value is not an integer
    """
    if isinstance(category_id, bool) or not isinstance(category_id, int):
        raise ValidationError("CategoryId must be a valid integer")
    return category_id


def validate_record_id(record_id: Any, label: str = "ID") -> int:
    """
    Validate a record identifier taken from a path or query string.

    Returns:
        The identifier as an int

    Raises:
        ValidationError: If the value is not a positive integer
    """
    if isinstance(record_id, bool):
        raise ValidationError(f"Valid {label} is required")

    try:
        value = int(str(record_id).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Valid {label} is required")

    if value <= 0:
        raise ValidationError(f"Valid {label} is required")

    return value


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> None:
    """
    Validate that required fields are present in data.

    Args:
        data: Data dictionary to validate
        required_fields: List of required field names

    Raises:
        ValidationError: If any required field is missing
    """
    missing_fields = [field for field in required_fields if field not in data or data[field] is None]

    if missing_fields:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing_fields)}"
        )


def sanitize_string(value: Any, field_name: str, max_length: Optional[int] = None) -> str:
    """
    Validate a required text field and strip surrounding whitespace.

    Args:
        value: String to sanitize
        field_name: Field name used in error messages
        max_length: Optional maximum length

    Returns:
        Sanitized string

    Raises:
        ValidationError: If string is empty, not a string or too long
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must be a non-empty string")

    value = value.strip()

    if max_length and len(value) > max_length:
        raise ValidationError(f"{field_name} exceeds maximum length of {max_length}")

    return value


def parse_json_body(raw_body: Optional[str]) -> Dict[str, Any]:
    """
    Parse a JSON object request body.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    try:
        body = json.loads(raw_body or '{}')
    except json.JSONDecodeError:
        raise ValidationError("Request body must be valid JSON")

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    return body

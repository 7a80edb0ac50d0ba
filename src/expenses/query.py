"""Parsing of ledger query parameters.

Query strings come straight from API Gateway, so every value is either a
string or missing. Filters degrade instead of failing: a bad ``categoryId``
drops the category filter, a blank or non-string date means no bound, a bad
``limit`` falls back to the default and out-of-range values are clamped.
"""

import math
from typing import Any, Dict, Optional

from expenses.models import ExpenseFilters

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


def _parse_int(value: Any) -> Optional[int]:
    """Return value as an int, or None when it is not an integer."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _parse_date_bound(value: Any) -> Optional[str]:
    """Return a usable date bound, or None for a missing, blank or non-string value."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(limit, MAX_LIMIT))


def clamp_offset(offset: Optional[int]) -> int:
    if offset is None or offset < 0:
        return 0
    return offset


def parse_expense_filters(params: Optional[Dict[str, Any]]) -> ExpenseFilters:
    """
    Build ledger filters from query string parameters.

    Args:
        params: ``startDate``, ``endDate``, ``categoryId``, ``limit``, ``offset``

    Returns:
        Normalized filters
    """
    params = params or {}

    return ExpenseFilters(
        start_date=_parse_date_bound(params.get('startDate')),
        end_date=_parse_date_bound(params.get('endDate')),
        category_id=_parse_int(params.get('categoryId')),
        limit=clamp_limit(_parse_int(params.get('limit'))),
        offset=clamp_offset(_parse_int(params.get('offset')))
    )

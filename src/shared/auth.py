"""Caller identity resolution for API Gateway events."""

from typing import Any, Dict

from .exceptions import AuthenticationError


def get_user_id(event: Dict[str, Any]) -> str:
    """
    Extract user ID from Cognito authorizer claims.

    Args:
        event: Lambda event

    Returns:
        User ID (sub claim)

    Raises:
        AuthenticationError: If the request carries no verified identity
    """
    request_context = event.get('requestContext') or {}
    authorizer = request_context.get('authorizer') or {}
    claims = authorizer.get('claims') or {}
    user_id = claims.get('sub')

    if not user_id:
        raise AuthenticationError("Unauthorized")

    return user_id

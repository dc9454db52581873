"""
Middleware functions for request processing.
"""
import json
from functools import wraps
from typing import Any, Callable, Dict, Optional

from aws_lambda_powertools import Logger

logger = Logger()

def json_response(status_code: int, body: Any) -> Dict[str, Any]:
    """
    Build an API Gateway proxy response.

    Args:
        status_code: HTTP status code
        body: JSON-serialisable body; dates are written as ISO strings

    Returns:
        API Gateway response dictionary
    """
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str)
    }

def get_query_params(event: Dict[str, Any]) -> Dict[str, str]:
    """Return query string parameters, empty when the request has none."""
    return event.get("queryStringParameters") or {}

def get_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse the request body as JSON.

    Raises:
        ValueError: If the body is not a JSON object
    """
    body = event.get("body") or {}
    if isinstance(body, str):
        body = json.loads(body)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body

def _extract_user_id(event: Dict[str, Any]) -> Optional[str]:
    # Only the identity resolved by the API Gateway authorizer is trusted
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    claims = authorizer.get("claims") or {}
    sub = claims.get("sub")
    return str(sub) if sub else None

def require_user_id(f: Callable) -> Callable:
    """
    Decorator that resolves the calling user's ID before the handler runs.

    The wrapped handler receives ``(event, context, user_id)``. Requests
    without a user ID get a 400 response.

    Args:
        f: Handler function to wrap

    Returns:
        Wrapped handler function
    """
    @wraps(f)
    def wrapped(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
        user_id = _extract_user_id(event or {})
        if not user_id:
            logger.error("Failed to extract user ID", extra={
                "event_keys": list(event.keys()) if isinstance(event, dict) else None
            })
            return json_response(400, {"error": "user_id is required"})
        return f(event, context, user_id)
    return wrapped

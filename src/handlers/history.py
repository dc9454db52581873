"""
Handler module for historical cycle data requests.

This module handles requests for the History view, coordinating between
the history service and the entry repository.
"""
from typing import Any, Dict, Iterable, Optional

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.entries import EntryRepository
from src.services.history import filter_entries_by_symptom, get_period_history
from src.services.utils import EntryLike, round_half_up
from src.utils.logging import logger
from src.utils.middleware import get_query_params, json_response, require_user_id

tracer = Tracer()

def calculate_period_history(
    entries: Iterable[EntryLike],
    months: Optional[int] = 6,
    periods: Optional[int] = None
) -> Dict[str, Any]:
    """
    Calculate period history statistics.

    Args:
        entries: List of user's entries
        months: Number of months to look back
        periods: Optional number of most recent periods

    Returns:
        Dictionary containing:
        - periods: List of period details, newest first
        - total_count: Total number of periods found
        - average_duration: Average duration of periods, None without periods

    Example:
        >>> history = calculate_period_history(entries)
        >>> print(f"Found {history['total_count']} periods")
    """
    try:
        periods_found = get_period_history(entries, months=months, periods=periods)

        if not periods_found:
            return {
                "periods": [],
                "total_count": 0,
                "average_duration": None
            }

        total_duration = sum(period.duration for period in periods_found)
        average_duration = round_half_up(total_duration / len(periods_found), 1)

        logger.info(
            "Period history calculated",
            extra={
                "months_analyzed": months,
                "periods_found": len(periods_found),
                "average_duration": average_duration
            }
        )

        return {
            "periods": [
                {
                    "start_date": period.start_date,
                    "end_date": period.end_date,
                    "duration": period.duration
                }
                for period in periods_found
            ],
            "total_count": len(periods_found),
            "average_duration": average_duration
        }

    except Exception as e:
        logger.exception(
            "Error calculating period history",
            extra={
                "error": str(e),
                "error_type": e.__class__.__name__,
                "months": months
            }
        )
        raise

def _optional_int(value: Optional[str]) -> Optional[int]:
    if value in (None, ""):
        return None
    number = int(value)
    if number < 0:
        raise ValueError(value)
    return number

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user_id
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle history request.

    Query parameters:
        months: Months to look back for periods (default 6)
        periods: Maximum number of periods
        symptom: Only list entries tagged with this symptom

    Returns:
        API Gateway response with period history and matching entries
    """
    params = get_query_params(event)
    try:
        months = _optional_int(params.get("months", "6"))
        periods = _optional_int(params.get("periods"))
    except ValueError:
        return json_response(400, {"error": "months and periods must be non-negative integers"})

    try:
        entries = EntryRepository().get_entries(user_id)

        try:
            matching = filter_entries_by_symptom(entries, params.get("symptom"))
        except ValueError:
            return json_response(400, {"error": f"Unknown symptom: {params.get('symptom')}"})

        history = calculate_period_history(entries, months=months, periods=periods)
        return json_response(200, {
            "user_id": user_id,
            **history,
            "entries": [entry.model_dump(mode="json") for entry in matching]
        })

    except Exception as e:
        logger.exception("Error generating history", extra={"user_id": user_id})
        return json_response(500, {"error": str(e)})

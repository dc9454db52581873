"""
Lambda handler for the calendar month view.

Returns one phase per day of the requested month so the client can colour
calendar tiles, together with the entry logged for each day.
"""
import calendar
from datetime import date, datetime
from typing import Dict, Tuple

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.cycle import build_cycle_summary, resolve_prediction_averages
from src.services.entries import EntryRepository
from src.services.phase import classify_range
from src.services.utils import coerce_entries, dedupe_by_date
from src.utils.logging import logger
from src.utils.middleware import get_query_params, json_response, require_user_id

tracer = Tracer()

def parse_month(value: str) -> Tuple[date, date]:
    """
    Parse a YYYY-MM month into its first and last day.

    Raises:
        ValueError: If the value is not a valid month
    """
    first_day = datetime.strptime(value, "%Y-%m").date()
    last_day = first_day.replace(day=calendar.monthrange(first_day.year, first_day.month)[1])
    return first_day, last_day

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user_id
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle calendar month request.

    Query parameters:
        month: Month to render as YYYY-MM, defaults to the current month

    Returns:
        API Gateway response with per-day phases and the averages used
    """
    month = get_query_params(event).get("month") or date.today().strftime("%Y-%m")
    try:
        first_day, last_day = parse_month(month)
    except ValueError:
        return json_response(400, {"error": "month must be in YYYY-MM format"})

    try:
        repository = EntryRepository()
        entries = coerce_entries(repository.get_entries(user_id))
        override = repository.get_manual_override(user_id)

        summary = build_cycle_summary(entries, override)
        cycle_length, period_duration, source = resolve_prediction_averages(
            summary.statistics, override
        )
        phases = classify_range(first_day, last_day, entries, cycle_length, period_duration)
        by_date = {e.date: e for e in dedupe_by_date(entries)}

        days = []
        for day, phase in phases.items():
            entry = by_date.get(day)
            days.append({
                "date": day.isoformat(),
                "phase": phase.value,
                "entry": entry.model_dump(mode="json") if entry else None
            })

        logger.info("Calendar month generated", extra={
            "user_id": user_id,
            "month": month,
            "averages_source": source
        })

        return json_response(200, {
            "user_id": user_id,
            "month": month,
            "avg_cycle_length": cycle_length,
            "avg_period_duration": period_duration,
            "averages_source": source,
            "days": days,
            "summary": summary.model_dump(mode="json")
        })

    except Exception as e:
        logger.exception("Error generating calendar month", extra={
            "user_id": user_id,
            "month": month
        })
        return json_response(500, {"error": str(e)})

"""
Lambda handler for manual cycle settings.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.entries import EntryRepository
from src.services.exceptions import InvalidManualOverrideError
from src.utils.logging import logger
from src.utils.middleware import get_json_body, json_response, require_user_id

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user_id
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle a request to save manual cycle averages.

    Body:
        avg_cycle_length: Average cycle length in days (21-35)
        avg_period_duration: Average period duration in days

    Returns:
        API Gateway response with the stored settings, 400 on invalid values
    """
    try:
        body = get_json_body(event)
    except ValueError:
        return json_response(400, {"error": "Invalid JSON body"})

    try:
        override = EntryRepository().save_manual_override(
            user_id,
            body.get("avg_cycle_length"),
            body.get("avg_period_duration")
        )
        return json_response(200, {
            "user_id": user_id,
            **override.model_dump()
        })

    except InvalidManualOverrideError as e:
        return json_response(400, {"error": str(e)})
    except Exception as e:
        logger.exception("Error saving cycle settings", extra={"user_id": user_id})
        return json_response(500, {"error": str(e)})

"""
Lambda handler for the cycle summary shown on the Home and Trends views.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.cycle import build_cycle_summary
from src.services.entries import EntryRepository
from src.utils.logging import logger
from src.utils.middleware import json_response, require_user_id

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user_id
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle cycle summary request.

    Args:
        event: API Gateway event
        context: Lambda context
        user_id: Resolved caller ID

    Returns:
        API Gateway response with statistics, prediction and prediction source
    """
    try:
        repository = EntryRepository()
        entries = repository.get_entries(user_id)
        override = repository.get_manual_override(user_id)

        summary = build_cycle_summary(entries, override)

        return json_response(200, {
            "user_id": user_id,
            **summary.model_dump(mode="json")
        })

    except Exception as e:
        logger.exception("Error generating cycle summary", extra={"user_id": user_id})
        return json_response(500, {"error": str(e)})

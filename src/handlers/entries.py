"""
Lambda handler for saving and deleting daily entries.
"""
from datetime import datetime
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from src.models.entry import Entry
from src.services.entries import EntryRepository
from src.utils.logging import logger
from src.utils.middleware import get_json_body, get_query_params, json_response, require_user_id

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user_id
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Handle entry upsert (PUT/POST) and delete (DELETE) requests.

    A save for a date that already has an entry replaces it.

    Returns:
        API Gateway response; 400 on invalid input, 405 on other methods
    """
    method = (event.get("httpMethod") or "PUT").upper()
    try:
        repository = EntryRepository()

        if method in ("PUT", "POST"):
            try:
                entry = Entry.model_validate(get_json_body(event))
            except (ValueError, ValidationError) as e:
                return json_response(400, {"error": f"Invalid entry: {e}"})
            repository.save_entry(user_id, entry)
            return json_response(200, {"user_id": user_id, "entry": entry.model_dump(mode="json")})

        if method == "DELETE":
            try:
                entry_date = datetime.strptime(get_query_params(event).get("date", ""), "%Y-%m-%d").date()
            except ValueError:
                return json_response(400, {"error": "date must be in YYYY-MM-DD format"})
            repository.delete_entry(user_id, entry_date)
            return json_response(200, {"user_id": user_id, "deleted": entry_date.isoformat()})

        return json_response(405, {"error": f"Method {method} not allowed"})

    except Exception as e:
        logger.exception("Error handling entry request", extra={
            "user_id": user_id,
            "method": method
        })
        return json_response(500, {"error": str(e)})

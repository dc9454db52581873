"""
Lambda handler for the partner sharing settings.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.entries import EntryRepository
from src.services.exceptions import InvalidPartnerEmailError
from src.utils.logging import logger
from src.utils.middleware import get_json_body, json_response, require_user_id

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
@require_user_id
def handler(event: Dict, context: LambdaContext, user_id: str) -> Dict:
    """
    Read (GET) or save (PUT/POST) the partner's email address.

    Body:
        email: Partner email address

    Returns:
        API Gateway response with the stored address; 400 on an invalid
        address, 405 on other methods
    """
    method = (event.get("httpMethod") or "GET").upper()
    try:
        repository = EntryRepository()

        if method == "GET":
            return json_response(200, {
                "user_id": user_id,
                "email": repository.get_partner_email(user_id)
            })

        if method in ("PUT", "POST"):
            try:
                body = get_json_body(event)
            except ValueError:
                return json_response(400, {"error": "Invalid JSON body"})
            try:
                email = repository.save_partner_email(user_id, body.get("email"))
            except InvalidPartnerEmailError as e:
                return json_response(400, {"error": str(e)})
            return json_response(200, {"user_id": user_id, "email": email})

        return json_response(405, {"error": f"Method {method} not allowed"})

    except Exception as e:
        logger.exception("Error handling partner settings", extra={
            "user_id": user_id,
            "method": method
        })
        return json_response(500, {"error": str(e)})

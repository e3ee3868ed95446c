import json
from pydantic import ValidationError

from ..errors import BadRequest
from ..schemas import GenerateIn
from ..settings import Settings

SUBMIT_METHOD = "POST"


def validate_request(method: str, content_type: str | None, body: bytes, settings: Settings) -> GenerateIn:
    """Reject anything that should never reach the completion endpoint.

    Preflight (OPTIONS) is answered by the router before this runs.
    """
    if method.upper() != SUBMIT_METHOD:
        raise BadRequest("Method Not Allowed", status_code=405)

    if settings.REQUIRE_JSON_CONTENT_TYPE and content_type and "json" not in content_type.lower():
        raise BadRequest("Content-Type must be application/json", status_code=415)

    try:
        data = json.loads(body or b"")
    except ValueError:
        raise BadRequest("Invalid JSON body")
    if not isinstance(data, dict):
        raise BadRequest("Invalid JSON body: expected an object")

    try:
        req = GenerateIn.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise BadRequest(f"Invalid field type: {fields or 'body'}")

    if not req.content or len(req.content.strip()) < settings.MIN_CONTENT_CHARS:
        raise BadRequest(f"Content too short (minimum {settings.MIN_CONTENT_CHARS} characters)")
    return req

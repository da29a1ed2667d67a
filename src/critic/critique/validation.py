import json
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from .dto import CritiqueRequest
from .exceptions import BadContentType, ValidationError

JSON_CONTENT_TYPE = "application/json"


def is_json_content_type(content_type: str) -> bool:
    return JSON_CONTENT_TYPE in (content_type or "").lower()


def ensure_json_content_type(content_type: str) -> None:
    """Reject bodies that are not declared as JSON before anything reads them."""
    if not is_json_content_type(content_type):
        raise BadContentType(content_type)


def parse_json_body(body: bytes) -> Any:
    """Decode a request body; any input json cannot decode is a ValidationError."""
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        raise ValidationError(
            [{"path": [], "message": f"Malformed JSON body: {e}", "code": "invalid_json"}]
        ) from e


def to_issues(error: PydanticValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into path/message/code issues."""
    return [
        {"path": list(err["loc"]), "message": err["msg"], "code": err["type"]}
        for err in error.errors(include_url=False)
    ]


def validate_request(payload: Any) -> CritiqueRequest:
    """
    Turn an arbitrary parsed JSON value into a CritiqueRequest.

    Raises:
        ValidationError: listing every violated field constraint
    """
    try:
        return CritiqueRequest.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(to_issues(e)) from e

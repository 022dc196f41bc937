"""
Request Validators - Transform Layer

Pure functions for validating inbound request bodies.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr
import logging

logger = logging.getLogger(__name__)


class UrlRequest(BaseModel):
    """Body of a load-group request"""

    model_config = ConfigDict(extra="ignore", frozen=True)

    url: Optional[StrictStr] = Field(None, description="Facebook group page URL")


def parse_url_request(payload: Any) -> UrlRequest:
    """
    Parse a raw request body into a UrlRequest

    Args:
        payload: JSON text/bytes, or an already decoded mapping

    Returns:
        UrlRequest: Parsed request (url may still be missing)

    Raises:
        pydantic.ValidationError: Malformed JSON, non-object body or wrong types
        TypeError: Payload of an unsupported type
    """
    if isinstance(payload, UrlRequest):
        return payload
    if isinstance(payload, dict):
        return UrlRequest.model_validate(payload)
    if isinstance(payload, (str, bytes, bytearray)):
        return UrlRequest.model_validate_json(payload)
    raise TypeError(f"Unsupported request payload type: {type(payload).__name__}")


def extract_url(request: UrlRequest) -> Optional[str]:
    """Return the stripped URL, or None when it is absent or blank"""
    if request.url is None:
        return None
    url = request.url.strip()
    return url or None

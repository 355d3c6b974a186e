"""Standardized response envelopes sent back over the channel."""

from typing import Any, Dict, List, Optional


def is_success(response: Dict[str, Any]) -> bool:
    """Check if a response envelope carries a successful result."""
    return "errorKind" not in response


def content_response(
    content: List[Dict[str, Any]],
    request_id: Optional[Any] = None
) -> Dict[str, Any]:
    """Create a successful call response envelope.

    Args:
        content: Serialized content blocks
        request_id: Optional request id to echo back

    Returns:
        ``{"content": [...]}``
    """
    response: Dict[str, Any] = {"content": content}

    if request_id is not None:
        response["id"] = request_id

    return response


def error_response(
    error_kind: str,
    message: str,
    request_id: Optional[Any] = None
) -> Dict[str, Any]:
    """Create an error response envelope.

    Args:
        error_kind: One of the ErrorKind values
        message: Human-readable error message
        request_id: Optional request id to echo back

    Returns:
        ``{"errorKind": ..., "message": ...}``
    """
    response: Dict[str, Any] = {
        "errorKind": error_kind,
        "message": message
    }

    if request_id is not None:
        response["id"] = request_id

    return response


def listing_response(
    tools: List[Dict[str, Any]],
    request_id: Optional[Any] = None
) -> Dict[str, Any]:
    """Create a listing response envelope."""
    response: Dict[str, Any] = {"tools": tools}

    if request_id is not None:
        response["id"] = request_id

    return response

"""Transport-agnostic serving loop.

This is an alternative transport adapter for hosts that frame messages
themselves (queues, sockets, test harnesses). ``main()`` serves over MCP
stdio through ``schema_transformer.server`` instead. Both adapters share the
same Dispatcher and the same ``{"errorKind", "message"}`` failure envelope
from ``utils.response``; the MCP server returns it as structured content.

A Channel delivers one decoded request dict at a time and accepts one
response dict per request. Framing and encoding belong to the channel
implementation. The loop handles requests strictly one after another and
keeps running across call failures; only ``ChannelClosed`` ends it.

Request forms::

    {"method": "tools/list"}
    {"method": "tools/call", "params": {"name": "...", "arguments": {...}}}

An optional ``"id"`` is echoed on the response.
"""

import logging
from typing import Any, Dict, Protocol

from ..models.messages import CallRequest, CallResult, ErrorKind
from ..utils.response import error_response, listing_response
from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)

LIST_METHOD = "tools/list"
CALL_METHOD = "tools/call"


class ChannelClosed(Exception):
    """The channel can deliver no further requests."""
    pass


class Channel(Protocol):
    """Receive/send pair provided by the transport layer."""

    async def receive(self) -> Any:
        """Next decoded request. Raises ChannelClosed on disconnect."""
        ...

    async def send(self, response: Dict[str, Any]) -> None:
        ...


async def handle_message(dispatcher: Dispatcher, message: Any) -> Dict[str, Any]:
    """
    Turn one decoded request into one response envelope.

    Never raises for malformed requests; they become InvalidParams or
    MethodNotFound envelopes.
    """
    if not isinstance(message, dict):
        return error_response(
            ErrorKind.INVALID_PARAMS.value,
            "Request must be an object"
        )

    request_id = message.get("id")
    method = message.get("method")

    if method == LIST_METHOD:
        return listing_response(dispatcher.handle_list(), request_id)

    if method != CALL_METHOD:
        return error_response(
            ErrorKind.METHOD_NOT_FOUND.value,
            f"Unsupported method: {method}",
            request_id
        )

    params = message.get("params")
    if not isinstance(params, dict) or not isinstance(params.get("name"), str):
        return error_response(
            ErrorKind.INVALID_PARAMS.value,
            "tools/call requires params.name",
            request_id
        )

    request = CallRequest(
        operation_name=params["name"],
        arguments=params.get("arguments"),
    )
    result: CallResult = await dispatcher.handle_call(request)
    return result.to_dict(request_id)


async def serve(dispatcher: Dispatcher, channel: Channel) -> int:
    """
    Serve requests from channel until it closes.

    Args:
        dispatcher: Dispatcher bound to a frozen registry
        channel: Transport delivering decoded requests

    Returns:
        Number of requests answered
    """
    handled = 0

    while True:
        try:
            message = await channel.receive()
        except ChannelClosed:
            logger.info(f"Channel closed after {handled} request(s)")
            return handled

        response = await handle_message(dispatcher, message)
        await channel.send(response)
        handled += 1

"""Call dispatcher: resolve, validate, invoke, wrap.

Every outcome of a call, including unknown operations, bad arguments and
handler crashes, comes back as a CallResult. Nothing raised by a handler
escapes ``handle_call``.
"""

import inspect
import logging
from typing import Any, Dict, List

from ..models.messages import CallRequest, CallResult, ErrorKind, TextContent
from ..registry.operation_registry import (
    HandlerOutput,
    InvalidArgumentsError,
    OperationNotFound,
    OperationRegistry,
)
from ..validators.shape_validator import ShapeValidationError, ensure_shape

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes call requests to registered operation handlers.

    Constructing a Dispatcher freezes its registry: from then on the set of
    operations it can list and execute is fixed.
    """

    def __init__(self, registry: OperationRegistry):
        self.registry = registry
        self.registry.freeze()

    def handle_list(self) -> List[Dict[str, Any]]:
        """Listing entries for every registered operation, in registration order."""
        return [operation.to_listing() for operation in self.registry.list()]

    async def handle_call(self, request: CallRequest) -> CallResult:
        """
        Execute one call request.

        Args:
            request: Decoded call request

        Returns:
            Success CallResult with the handler's content blocks, or a failure
            with MethodNotFound / InvalidParams / InternalError
        """
        name = request.operation_name

        try:
            operation = self.registry.resolve(name)
        except OperationNotFound:
            logger.debug(f"Call to unknown operation: {name}")
            return CallResult.failure(ErrorKind.METHOD_NOT_FOUND, f"Unknown tool: {name}")

        try:
            ensure_shape(request.arguments, operation.input_shape)
        except ShapeValidationError as e:
            logger.debug(f"Rejected arguments for {name} at '{e.violation.path}'")
            return CallResult.failure(
                ErrorKind.INVALID_PARAMS,
                f"Invalid arguments for '{name}': {e.violation.message}"
            )

        try:
            output = operation.handler(request.arguments)
            if inspect.isawaitable(output):
                output = await output
        except InvalidArgumentsError as e:
            logger.debug(f"Handler rejected arguments for {name}: {e}")
            return CallResult.failure(ErrorKind.INVALID_PARAMS, str(e))
        except Exception:
            logger.exception(f"Error executing tool {name}")
            return CallResult.failure(
                ErrorKind.INTERNAL_ERROR,
                f"Internal error while executing '{name}'"
            )

        try:
            content = self._to_content(output)
        except TypeError:
            logger.exception(f"Tool {name} returned unsupported output")
            return CallResult.failure(
                ErrorKind.INTERNAL_ERROR,
                f"Internal error while executing '{name}'"
            )

        logger.debug(f"Tool {name} returned {len(content)} content block(s)")
        return CallResult.success(content)

    @staticmethod
    def _to_content(output: HandlerOutput) -> List[TextContent]:
        """Normalize handler output into a list of content blocks."""
        if isinstance(output, str):
            return [TextContent(type="text", text=output)]
        if isinstance(output, TextContent):
            return [output]
        if isinstance(output, list) and all(isinstance(block, TextContent) for block in output):
            return list(output)
        raise TypeError(f"Unsupported handler output: {type(output).__name__}")

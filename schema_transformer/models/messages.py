"""Call request/result models exchanged between the channel and the dispatcher."""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from ..utils.response import content_response, error_response


class ErrorKind(str, Enum):
    """Structured failure categories returned to callers.

    Values follow the JSON-RPC error names used by MCP.
    """
    METHOD_NOT_FOUND = "MethodNotFound"
    INVALID_PARAMS = "InvalidParams"
    INTERNAL_ERROR = "InternalError"


class TextContent(BaseModel):
    """A single text content block."""

    type: Literal["text"] = "text"
    text: str


class CallRequest(BaseModel):
    """A decoded request to invoke one operation.

    ``arguments`` stays untyped until the dispatcher validates it against the
    operation's declared shape. A missing payload is treated as ``{}``.
    """

    operation_name: str = Field(..., description="Name of the operation to invoke")
    arguments: Any = Field(default_factory=dict, description="Raw argument payload")

    @model_validator(mode="after")
    def default_arguments(self) -> "CallRequest":
        if self.arguments is None:
            self.arguments = {}
        return self


class CallError(BaseModel):
    """Failure descriptor."""

    kind: ErrorKind
    message: str


class CallResult(BaseModel):
    """Outcome of one call: content blocks on success, an error otherwise."""

    content: List[TextContent] = Field(default_factory=list)
    error: Optional[CallError] = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "CallResult":
        if self.error is not None and self.content:
            raise ValueError("A failed CallResult cannot carry content")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, content: List[TextContent]) -> "CallResult":
        return cls(content=content)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "CallResult":
        return cls(error=CallError(kind=kind, message=message))

    def to_dict(self, request_id: Optional[Any] = None) -> Dict[str, Any]:
        """Wire form: ``{"content": [...]}`` or ``{"errorKind", "message"}``."""
        if self.error is not None:
            return error_response(self.error.kind.value, self.error.message, request_id)
        return content_response([block.model_dump() for block in self.content], request_id)

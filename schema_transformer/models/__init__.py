"""Data models for schema-transformer."""

from .messages import CallError, CallRequest, CallResult, ErrorKind, TextContent
from .shape import ShapeKind, ShapeSpec

__all__ = [
    'CallError',
    'CallRequest',
    'CallResult',
    'ErrorKind',
    'TextContent',
    'ShapeKind',
    'ShapeSpec',
]

"""Shallow argument validation against declared ShapeSpecs.

Checks presence and primitive kind only, walking objects field by field and
arrays item by item. Validation is fail-fast: the first violation found is
reported and the walk stops. Fields that the shape does not declare are
accepted untouched.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..models.shape import ShapeKind, ShapeSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShapeViolation:
    """First mismatch between a value and its declared shape."""
    path: str      # Dotted/indexed location, e.g. "schema.fields[0].name" ("" for the root)
    message: str

    def __str__(self) -> str:
        return self.message


class ShapeValidationError(ValueError):
    """Raised by ensure_shape when a value does not match its shape."""

    def __init__(self, violation: ShapeViolation):
        super().__init__(violation.message)
        self.violation = violation


def kind_of(value: Any) -> str:
    """Name the JSON kind of a decoded Python value."""
    if value is None:
        return ShapeKind.NULL.value
    if isinstance(value, bool):
        return ShapeKind.BOOLEAN.value
    if isinstance(value, int):
        return ShapeKind.INTEGER.value
    if isinstance(value, float):
        return ShapeKind.NUMBER.value
    if isinstance(value, str):
        return ShapeKind.STRING.value
    if isinstance(value, (list, tuple)):
        return ShapeKind.ARRAY.value
    if isinstance(value, dict):
        return ShapeKind.OBJECT.value
    return type(value).__name__


def _matches_kind(value: Any, kind: ShapeKind) -> bool:
    # bool is an int subclass but never a JSON number
    if kind == ShapeKind.OBJECT:
        return isinstance(value, dict)
    if kind == ShapeKind.ARRAY:
        return isinstance(value, (list, tuple))
    if kind == ShapeKind.STRING:
        return isinstance(value, str)
    if kind == ShapeKind.BOOLEAN:
        return isinstance(value, bool)
    if kind == ShapeKind.NULL:
        return value is None
    if isinstance(value, bool):
        return False
    if kind == ShapeKind.INTEGER:
        return isinstance(value, int) or (isinstance(value, float) and value.is_integer())
    if kind == ShapeKind.NUMBER:
        return isinstance(value, (int, float))
    return False


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def find_violation(value: Any, shape: ShapeSpec, path: str = "") -> Optional[ShapeViolation]:
    """
    Return the first shape violation in value, or None if it conforms.

    Args:
        value: Decoded argument payload (or a nested part of it)
        shape: Declared shape to check against
        path: Location of value within the root payload

    Returns:
        ShapeViolation describing the first problem, or None
    """
    if not _matches_kind(value, shape.type):
        where = f"Field '{path}'" if path else "Arguments"
        return ShapeViolation(
            path=path,
            message=f"{where} must be {shape.type.value}, got {kind_of(value)}"
        )

    if shape.type == ShapeKind.OBJECT:
        for name in shape.required:
            if name not in value:
                return ShapeViolation(
                    path=_join(path, name),
                    message=f"Missing required field '{_join(path, name)}'"
                )

        for name, field_shape in shape.properties.items():
            if name not in value:
                continue
            violation = find_violation(value[name], field_shape, _join(path, name))
            if violation is not None:
                return violation

    elif shape.type == ShapeKind.ARRAY and shape.items is not None:
        for index, item in enumerate(value):
            violation = find_violation(item, shape.items, f"{path}[{index}]")
            if violation is not None:
                return violation

    return None


def ensure_shape(value: Any, shape: ShapeSpec) -> None:
    """
    Validate value against shape, raising on the first violation.

    Raises:
        ShapeValidationError: If value does not conform
    """
    violation = find_violation(value, shape)
    if violation is not None:
        logger.debug(f"Shape violation at '{violation.path}': {violation.message}")
        raise ShapeValidationError(violation)

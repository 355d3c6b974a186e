"""Declared input shapes for registered operations.

A ShapeSpec is the recursive description of the value an operation accepts:
its primitive kind, and for objects the declared fields and which of them are
required, for arrays the shape every item must have. It is deliberately a
subset of JSON Schema. Only kinds, properties, required names and array
items are modelled, which is all the dispatcher checks.

ShapeSpecs serialize to plain JSON Schema dicts so they can be advertised
verbatim as an MCP tool's ``inputSchema``.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


class ShapeKind(str, Enum):
    """Primitive JSON kinds a shape can require."""
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


class ShapeSpec(BaseModel):
    """Recursive shape declaration.

    Attributes:
        type: Expected primitive kind of the value
        description: Human-readable description (advertised, never checked)
        properties: Object only. Field name to nested shape
        required: Object only. Names that must be present, subset of properties
        items: Array only. Shape every element must satisfy
    """

    model_config = ConfigDict(frozen=True)

    type: ShapeKind = Field(..., description="Expected primitive kind")
    description: Optional[str] = Field(None, description="Human-readable description")
    properties: Dict[str, "ShapeSpec"] = Field(
        default_factory=dict,
        description="Declared fields (object shapes only)"
    )
    required: List[str] = Field(
        default_factory=list,
        description="Required field names (object shapes only)"
    )
    items: Optional["ShapeSpec"] = Field(
        None,
        description="Item shape (array shapes only)"
    )

    @model_validator(mode="after")
    def check_structure(self) -> "ShapeSpec":
        """Reject shapes whose parts contradict their kind."""
        if self.type != ShapeKind.OBJECT and (self.properties or self.required):
            raise ValueError(
                f"properties/required are only allowed on object shapes, not '{self.type.value}'"
            )

        if self.type != ShapeKind.ARRAY and self.items is not None:
            raise ValueError(
                f"items is only allowed on array shapes, not '{self.type.value}'"
            )

        undeclared = [name for name in self.required if name not in self.properties]
        if undeclared:
            raise ValueError(
                f"Required fields {undeclared} are not declared in properties"
            )

        return self

    # ========================================================================
    # Constructors
    # ========================================================================

    @classmethod
    def object_of(
        cls,
        properties: Dict[str, "ShapeSpec"],
        required: Optional[List[str]] = None,
        description: Optional[str] = None
    ) -> "ShapeSpec":
        return cls(
            type=ShapeKind.OBJECT,
            properties=properties,
            required=required or [],
            description=description,
        )

    @classmethod
    def array_of(cls, items: "ShapeSpec", description: Optional[str] = None) -> "ShapeSpec":
        return cls(type=ShapeKind.ARRAY, items=items, description=description)

    @classmethod
    def string(cls, description: Optional[str] = None) -> "ShapeSpec":
        return cls(type=ShapeKind.STRING, description=description)

    @classmethod
    def from_json_schema(cls, schema: Dict[str, Any]) -> "ShapeSpec":
        """
        Build a ShapeSpec from a JSON Schema dict.

        Keywords outside the modelled subset (enum, default, ...) are ignored.

        Args:
            schema: JSON Schema fragment with at least a "type" key

        Returns:
            Equivalent ShapeSpec

        Raises:
            pydantic.ValidationError: If the schema violates shape invariants
        """
        items = schema.get("items")
        return cls(
            type=schema["type"],
            description=schema.get("description"),
            properties={
                name: cls.from_json_schema(sub)
                for name, sub in schema.get("properties", {}).items()
            },
            required=list(schema.get("required", [])),
            items=cls.from_json_schema(items) if items is not None else None,
        )

    # ========================================================================
    # Serialization
    # ========================================================================

    def to_json_schema(self) -> Dict[str, Any]:
        """Export as a JSON Schema dict with deterministic key ordering."""
        result: Dict[str, Any] = {"type": self.type.value}

        if self.description:
            result["description"] = self.description

        if self.type == ShapeKind.OBJECT:
            result["properties"] = {
                name: sub.to_json_schema() for name, sub in self.properties.items()
            }
            if self.required:
                result["required"] = list(self.required)

        if self.items is not None:
            result["items"] = self.items.to_json_schema()

        return result


ShapeSpec.model_rebuild()

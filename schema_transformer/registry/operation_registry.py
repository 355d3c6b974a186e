"""
Operation Registry - Catalog of remote-callable operations.

Provides:
- Operation definitions with declared input shapes
- Registration-ordered listing for tools/list
- Exact-name resolution for tools/call
- Two-phase lifecycle: register during startup, freeze before serving

Once frozen the registry is read-only, so the serving phase can share it
without synchronization.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..models.messages import TextContent
from ..models.shape import ShapeSpec

logger = logging.getLogger(__name__)

# Type aliases
HandlerOutput = Union[str, TextContent, List[TextContent]]
OperationHandler = Callable[[Dict[str, Any]], Union[HandlerOutput, Awaitable[HandlerOutput]]]


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class OperationDescriptor:
    """
    Describes a remote-callable operation.

    Immutable once created; the name identifies the operation.
    """
    name: str                          # Operation identifier (e.g., "generate_sql")
    description: str                   # Human-readable description
    input_shape: ShapeSpec             # Declared argument shape
    handler: OperationHandler          # Validated arguments -> content
    version: str = "1.0.0"             # Semantic version
    tags: List[str] = field(default_factory=list)

    def to_listing(self) -> Dict[str, Any]:
        """Listing entry as advertised to clients."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_shape.to_json_schema(),
        }


# ============================================================================
# Exceptions
# ============================================================================

class OperationRegistryError(Exception):
    """Base exception for registry errors."""
    pass


class OperationNotFound(OperationRegistryError):
    """Operation not found in registry."""
    pass


class OperationAlreadyRegistered(OperationRegistryError):
    """Operation already registered."""
    pass


class InvalidOperationDescriptor(OperationRegistryError):
    """Invalid operation descriptor."""
    pass


class RegistryFrozen(OperationRegistryError):
    """Registration attempted after the serving phase started."""
    pass


class InvalidArgumentsError(ValueError):
    """Raised by a handler whose shape-valid arguments cannot be processed."""
    pass


# ============================================================================
# Operation Registry
# ============================================================================

class OperationRegistry:
    """Central registry for remote-callable operations."""

    def __init__(self):
        """Initialize registry."""
        self._operations: Dict[str, OperationDescriptor] = {}
        self._frozen = False

        logger.debug("OperationRegistry initialized")

    # ========================================================================
    # Registration
    # ========================================================================

    def register(self, operation: OperationDescriptor) -> None:
        """
        Register a new operation.

        Args:
            operation: Operation descriptor to register

        Raises:
            RegistryFrozen: If the registry has been frozen
            OperationAlreadyRegistered: If operation name already exists
            InvalidOperationDescriptor: If descriptor validation fails
        """
        if self._frozen:
            raise RegistryFrozen(
                f"Cannot register '{operation.name}': registry is frozen"
            )

        self._validate_descriptor(operation)

        if operation.name in self._operations:
            raise OperationAlreadyRegistered(
                f"Operation '{operation.name}' already registered"
            )

        self._operations[operation.name] = operation

        logger.info(f"Registered operation: {operation.name} (version: {operation.version})")

    def register_all(self, operations: List[OperationDescriptor]) -> None:
        """Register multiple operations at once."""
        for operation in operations:
            self.register(operation)

    def freeze(self) -> None:
        """End the registration phase. Idempotent."""
        if not self._frozen:
            self._frozen = True
            logger.info(f"OperationRegistry frozen with {len(self._operations)} operations")

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # ========================================================================
    # Retrieval
    # ========================================================================

    def resolve(self, name: str) -> OperationDescriptor:
        """
        Retrieve an operation by exact, case-sensitive name.

        Raises:
            OperationNotFound: If operation doesn't exist
        """
        if name not in self._operations:
            raise OperationNotFound(f"Operation '{name}' not found")

        return self._operations[name]

    def list(self) -> List[OperationDescriptor]:
        """All registered operations in registration order."""
        return list(self._operations.values())

    def exists(self, name: str) -> bool:
        """Check if operation exists."""
        return name in self._operations

    def get_operation_docs(self, operation_name: str) -> Dict[str, Any]:
        """
        Get the listing entry for a single operation.

        Raises:
            OperationNotFound: If operation doesn't exist
        """
        return self.resolve(operation_name).to_listing()

    def __len__(self) -> int:
        return len(self._operations)

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    def _validate_descriptor(self, operation: OperationDescriptor) -> None:
        """
        Validate operation descriptor.

        Raises:
            InvalidOperationDescriptor: If validation fails
        """
        if not operation.name:
            raise InvalidOperationDescriptor("Operation name is required")

        if not operation.description:
            raise InvalidOperationDescriptor("Operation description is required")

        if not callable(operation.handler):
            raise InvalidOperationDescriptor("Operation handler is required")

        if not isinstance(operation.input_shape, ShapeSpec):
            raise InvalidOperationDescriptor(
                f"Operation '{operation.name}' input_shape must be a ShapeSpec"
            )

        # Simple semver check
        version_parts = operation.version.split('.')
        if len(version_parts) != 3 or not all(part.isdigit() for part in version_parts):
            raise InvalidOperationDescriptor(
                f"Invalid version format: {operation.version} (expected: X.Y.Z)"
            )


# ============================================================================
# Singleton
# ============================================================================

_registry_instance: Optional[OperationRegistry] = None


def get_operation_registry() -> OperationRegistry:
    """
    Get singleton instance of operation registry.

    Returns:
        OperationRegistry singleton
    """
    global _registry_instance

    if _registry_instance is None:
        _registry_instance = OperationRegistry()

    return _registry_instance


def reset_operation_registry() -> None:
    """Reset singleton (for testing)."""
    global _registry_instance
    _registry_instance = None

"""
Operation Registry for schema-transformer.

Provides the catalog of remote-callable operations.
"""

from .operation_registry import (
    OperationRegistry,
    OperationDescriptor,
    # Exceptions
    OperationRegistryError,
    OperationNotFound,
    OperationAlreadyRegistered,
    InvalidOperationDescriptor,
    RegistryFrozen,
    InvalidArgumentsError,
    # Singleton
    get_operation_registry,
    reset_operation_registry,
)

__all__ = [
    'OperationRegistry',
    'OperationDescriptor',
    # Exceptions
    'OperationRegistryError',
    'OperationNotFound',
    'OperationAlreadyRegistered',
    'InvalidOperationDescriptor',
    'RegistryFrozen',
    'InvalidArgumentsError',
    # Singleton
    'get_operation_registry',
    'reset_operation_registry',
]

"""
Operation registrations for schema-transformer.

Registers every served operation with the registry.
"""

from typing import Optional

from ..operation_registry import OperationRegistry
from .sql_operations import register_sql_operations


def register_all_operations(registry: Optional[OperationRegistry] = None) -> None:
    """Register all operations."""
    register_sql_operations(registry)


__all__ = [
    'register_all_operations',
    'register_sql_operations',
]

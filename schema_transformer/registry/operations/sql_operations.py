"""
SQL generation operation registrations.

Registers ``generate_sql``, which turns a transaction table into the
reshaped PSP output table via a fixed BigQuery script template.
"""

import logging
from typing import Any, Dict, List, Optional

from ...models.messages import TextContent
from ...models.shape import ShapeSpec
from ...templates.sql_template import render_transformation_sql, resolve_field_mappings
from ..operation_registry import OperationDescriptor, OperationRegistry, get_operation_registry

logger = logging.getLogger(__name__)


# ============================================================================
# Operation Handlers
# ============================================================================

def generate_sql_handler(params: Dict[str, Any]) -> List[TextContent]:
    """
    Handler for SQL script generation.

    ``schema`` is validated for shape by the dispatcher but only logged
    against the fixed mapping here; it never changes the script.
    """
    table_name = params["table_name"]
    output_table_name = params["output_table_name"]

    mappings = resolve_field_mappings(params["schema"])
    sql = render_transformation_sql(table_name, output_table_name, mappings)

    logger.debug(f"Generated transformation script {table_name} -> {output_table_name}")
    return [TextContent(type="text", text=sql)]


# ============================================================================
# Operation Descriptors
# ============================================================================

GENERATE_SQL_INPUT_SHAPE = ShapeSpec.object_of(
    properties={
        "schema": ShapeSpec.object_of(
            description="The table schema containing field definitions.",
            properties={
                "fields": ShapeSpec.array_of(
                    ShapeSpec.object_of(
                        properties={
                            "name": ShapeSpec.string(),
                            "type": ShapeSpec.string(),
                        },
                        required=["name", "type"],
                    )
                ),
            },
            required=["fields"],
        ),
        "table_name": ShapeSpec.string("The name of the input table to transform."),
        "output_table_name": ShapeSpec.string("The name of the final output table."),
    },
    required=["schema", "table_name", "output_table_name"],
)

GENERATE_SQL = OperationDescriptor(
    name="generate_sql",
    description="Generates a SQL transformation query based on the provided schema.",
    input_shape=GENERATE_SQL_INPUT_SHAPE,
    handler=generate_sql_handler,
    version="0.1.0",
    tags=["sql", "bigquery", "transform"],
)


def register_sql_operations(registry: Optional[OperationRegistry] = None) -> None:
    """Register SQL generation operations."""
    if registry is None:
        registry = get_operation_registry()
    registry.register(GENERATE_SQL)

"""
SQL template rendering for table transformations.
"""

from .sql_template import (
    FIELD_MAPPINGS,
    cleaned_table_name,
    transformed_table_name,
    resolve_field_mappings,
    render_transformation_sql,
)

__all__ = [
    'FIELD_MAPPINGS',
    'cleaned_table_name',
    'transformed_table_name',
    'resolve_field_mappings',
    'render_transformation_sql',
]

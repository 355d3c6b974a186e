"""
SQL script template for payment-provider transaction tables.

Renders a BigQuery script that:
1. Deduplicates the raw input table into a ``<table>_cleaned`` temp table
2. Reshapes it column by column into ``<table>_transformed`` using a fixed
   input-column to output-expression mapping
3. Adds the derived ``PSP_DrCr`` flag and ``PSP_Week`` bucket in ``Final_Table``
4. Writes ``Final_Table`` to the requested output table

The mapping is a constant. It is reached only through
``resolve_field_mappings`` so a schema-driven mapping can replace it later
without touching callers. The caller's schema is currently not consulted.
"""

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


CLEANED_SUFFIX = "_cleaned"
TRANSFORMED_SUFFIX = "_transformed"
FINAL_TABLE = "Final_Table"

# Input column -> output SELECT expression. Order is the column order of the
# transformed table.
FIELD_MAPPINGS: Dict[str, str] = {
    "Date": "PARSE_DATETIME('%d %b %Y, %H:%M', Date) AS PSP_Date",
    "UTC": "UTC AS PSP_TransactionID",
    "Transaction_Type": "Transaction_Type AS PSP_Currency",
    "Status": "Status AS PSP_Status",
    "Commission": "COMMISSION AS PSP_OriginalFee",
    "Fee_Currency": "Fee_Currency AS PSP_OriginalFeeCurrency",
    "Pays_Fee": "Pays_Fee",
    "Debit": "CASE WHEN Pays_Fee = 'Sender' THEN Credit * -1 ELSE Debit * 1 END AS PSP_Amount",
    "Credit": "CASE WHEN Pays_Fee = 'Receiver' THEN Debit * 1 ELSE Credit * -1 END AS PSP_Amount",
    "Direction": "CASE WHEN Pays_Fee = 'Sender' THEN 'Withdrawal' ELSE 'Deposit' END AS PSP_Type",
    "Note": (
        "REGEXP_EXTRACT(Note, r'([A-Z]+[0-9]+)') AS PSP_LoginID, "
        "REGEXP_EXTRACT(Note, r'-(\\d+)$') AS PSP_TraceID"
    ),
    "API_CSI": "API_CSI",
    "Sender": "Sender",
    "Currency_Deposit": "Currency_Deposit",
    "Receiver": "Receiver",
    "Currency_Withdrawal": "Currency_Withdrawal",
    "Transaction_information": "Transaction_information",
}

# (lower exclusive day-of-month bound, label), checked in order
WEEK_BUCKETS = [
    (21, "Week 4"),
    (14, "Week 3"),
    (7, "Week 2"),
]
DEFAULT_WEEK = "Week 1"


def cleaned_table_name(table_name: str) -> str:
    return f"{table_name}{CLEANED_SUFFIX}"


def transformed_table_name(table_name: str) -> str:
    return f"{table_name}{TRANSFORMED_SUFFIX}"


def unmapped_fields(schema: Dict[str, Any]) -> List[str]:
    """Schema field names with no entry in the mapping."""
    return [
        field.get("name") for field in schema.get("fields", [])
        if field.get("name") not in FIELD_MAPPINGS
    ]


def resolve_field_mappings(schema: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
    """
    Return the input-column to output-expression mapping for a schema.

    The mapping is fixed: schema fields are not consulted, unknown fields are
    ignored and mapping entries whose column the schema lacks are still
    emitted. Mismatches are only logged.

    Args:
        schema: Caller-supplied table schema ({"fields": [{"name", "type"}, ...]})

    Returns:
        Ordered mapping of input column to SELECT expression
    """
    if schema:
        ignored = unmapped_fields(schema)
        if ignored:
            logger.debug(f"Schema fields not covered by the fixed mapping: {ignored}")

        declared = {field.get("name") for field in schema.get("fields", [])}
        missing = [name for name in FIELD_MAPPINGS if name not in declared]
        if missing:
            logger.debug(f"Mapped columns absent from the schema: {missing}")

    return FIELD_MAPPINGS


def render_select_fields(mappings: Dict[str, str]) -> str:
    """One indented SELECT clause per mapping entry, comma-joined."""
    return ",\n".join(f"  {expression}" for expression in mappings.values())


def render_week_case(day_expression: str = "EXTRACT(DAY FROM PSP_Date)") -> str:
    lines = ["    CASE"]
    for bound, label in WEEK_BUCKETS:
        lines.append(f"      WHEN {day_expression} > {bound} THEN '{label}'")
    lines.append(f"      ELSE '{DEFAULT_WEEK}'")
    lines.append("    END AS PSP_Week")
    return "\n".join(lines)


def render_transformation_sql(
    table_name: str,
    output_table_name: str,
    mappings: Optional[Dict[str, str]] = None
) -> str:
    """
    Render the full transformation script.

    Args:
        table_name: Raw input table
        output_table_name: Table the final result is written to
        mappings: Column mapping (default: fixed FIELD_MAPPINGS)

    Returns:
        Multi-statement SQL script. Deterministic for identical inputs.
    """
    select_fields = render_select_fields(mappings if mappings is not None else FIELD_MAPPINGS)
    cleaned = cleaned_table_name(table_name)
    transformed = transformed_table_name(table_name)

    return f"""
  -- Start Transaction
  BEGIN TRANSACTION;

  -- Step 1: Deduplicate and prepare raw data
  CREATE OR REPLACE TEMP TABLE {cleaned} AS
  SELECT DISTINCT * FROM `{table_name}`;

  -- Step 2: Transform data according to new schema
  CREATE OR REPLACE TEMP TABLE {transformed} AS
  SELECT
{select_fields}
  FROM {cleaned};

  -- Step 3: Final Table with Additional Computed Columns
  CREATE OR REPLACE TEMP TABLE {FINAL_TABLE} AS
  SELECT *,
    CASE WHEN PSP_Amount > 0 THEN 'Debit' ELSE 'Credit' END AS PSP_DrCr,
{render_week_case()}
  FROM {transformed};

  -- Step 4: Write Final Data to Output Table
  CREATE OR REPLACE TABLE `{output_table_name}` AS
  SELECT * FROM {FINAL_TABLE};

  -- Commit transaction
  COMMIT TRANSACTION;
  """

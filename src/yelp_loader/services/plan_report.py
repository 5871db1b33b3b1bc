"""
Tabular summaries of a load plan.

Used by the ``plan`` CLI command to show how the key spaces were spread
across tables before anything is written.
"""

import pandas as pd

from yelp_loader.loader.plan import LoadPlan
from yelp_loader.schema.definitions import TableDefinition

SUMMARY_COLUMNS = ["kind", "partition", "table", "keys", "columns"]


def _rows(kind: str, tables: tuple[TableDefinition, ...], partitions) -> list[dict]:
    return [
        {
            "kind": kind,
            "partition": table.partition,
            "table": table.name,
            "keys": len(partitions[table.partition]),
            "columns": len(table.key_columns),
        }
        for table in tables
    ]


def partition_summary(plan: LoadPlan) -> pd.DataFrame:
    """
    One row per generated table of a plan.

    Args:
        plan: Load plan from build_load_plan

    Returns:
        DataFrame with columns kind ("category" or "attribute"), partition,
        table, keys (keys hashed into the partition) and columns (value
        columns actually generated), ordered by kind then partition
    """
    rows = _rows("category", plan.category_tables, plan.category_partitions)
    rows += _rows("attribute", plan.attribute_tables, plan.attribute_partitions)

    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    return df.astype({"partition": "int64", "keys": "int64", "columns": "int64"})

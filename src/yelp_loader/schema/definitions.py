"""Store-agnostic table definitions produced by the schema generator."""

from dataclasses import dataclass
from enum import Enum

ID_COLUMN = "business_id"


class ColumnType(str, Enum):
    """Logical column types; the DDL adapter maps them to store types."""

    IDENTIFIER = "identifier"
    FLAG = "flag"
    INTEGER = "integer"
    STRING = "string"


@dataclass(frozen=True)
class ColumnDefinition:
    name: str
    type: ColumnType
    nullable: bool = True
    default: int | str | None = None
    primary_key: bool = False
    # Raw key the column was generated from; None for the identifier column
    source_key: str | None = None


@dataclass(frozen=True)
class TableDefinition:
    """
    Realized schema of one partition.

    Attributes:
        name: Table name derived from the partition index
        partition: Partition index the table was generated from
        columns: Identifier column first, then one column per key
    """

    name: str
    partition: int
    columns: tuple[ColumnDefinition, ...]

    @property
    def key_columns(self) -> tuple[ColumnDefinition, ...]:
        return tuple(c for c in self.columns if c.source_key is not None)

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def has_column(self, name: str) -> bool:
        return name in self.column_names

"""
Configuration models for the business loader.

These models define the structure and validation of the loader's JSON
configuration file.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from yelp_loader.db.config import DatabaseConfig
from yelp_loader.partitioning.partitioner import DEFAULT_PARTITION_COUNT

logger = logging.getLogger(__name__)


class DatabaseSettings(BaseModel):
    """Target SQLite database settings."""

    path: str = Field(
        default=DatabaseConfig.DB_PATH, min_length=1, description="SQLite database file"
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")


class PartitionSettings(BaseModel):
    """Settings for hash-partitioning the category and attribute key spaces."""

    partition_count: int = Field(
        default=DEFAULT_PARTITION_COUNT,
        gt=0,
        description="Number of wide tables each key space is split across",
    )
    category_table_prefix: str = Field(
        default="business_category_", min_length=1, description="Category table prefix"
    )
    attribute_table_prefix: str = Field(
        default="business_attribute_", min_length=1, description="Attribute table prefix"
    )

    @field_validator("category_table_prefix", "attribute_table_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Prefixes become part of table identifiers."""
        if not v.replace("_", "").isalnum():
            raise ValueError("Table prefix must contain only letters, digits and '_'")
        return v.lower()


class PipelineSettings(BaseModel):
    """Failure policy and progress settings for a load run."""

    continue_on_schema_error: bool = Field(
        default=True,
        description="Keep going with the data phase after a failed schema phase",
    )
    load_attributes: bool = Field(
        default=True, description="Create and populate the attribute tables"
    )
    progress_interval: int = Field(
        default=1000, gt=0, description="Statements between progress callbacks"
    )


class LoaderConfig(BaseModel):
    """Main configuration model for the business loader."""

    input_path: str | None = Field(
        default=None, description="JSON-lines business dump to load"
    )
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    partitioning: PartitionSettings = Field(default_factory=PartitionSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)

    @classmethod
    def from_file(cls, file_path: str | Path) -> "LoaderConfig":
        """
        Load configuration from a JSON file.

        Args:
            file_path: Path to the configuration JSON file

        Returns:
            LoaderConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the JSON is invalid or doesn't match the schema
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with path.open("r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        logger.debug(f"Loaded configuration from {path}")
        return cls(**data)

    def to_file(self, file_path: str | Path) -> None:
        """
        Save configuration to a JSON file.

        Args:
            file_path: Path where to save the configuration file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w") as f:
            json.dump(self.model_dump(), f, indent=2)

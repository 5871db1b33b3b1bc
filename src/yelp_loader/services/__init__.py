"""Input and reporting services around the load pipeline."""

from .plan_report import partition_summary
from .reader import parse_business, read_businesses

__all__ = ["parse_business", "read_businesses", "partition_summary"]

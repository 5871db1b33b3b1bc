"""
SQLAlchemy ORM models for the business loader.

- base.py: Declarative base
- business.py: Core business and opening-hours tables
"""

from yelp_loader.db.models.base import Base
from yelp_loader.db.models.business import Business, BusinessHour

CORE_TABLES = (Business.__table__, BusinessHour.__table__)

__all__ = [
    "Base",
    "Business",
    "BusinessHour",
    "CORE_TABLES",
]

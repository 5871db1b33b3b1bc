"""
Yelp business loader

Loads semi-structured business records into a relational store:
- Discovers the open-ended category and attribute key sets
- Hash-partitions the keys into a fixed number of wide tables
- Creates the partition tables and loads presence flags transactionally
"""

__version__ = "1.0.0"
__author__ = "Yelp Loader"

"""
groupfeed - Facebook group ingestion pipeline

Loads a Facebook group page URL, resolves the group through the Graph API
and persists the group and its postings to DuckDB.
"""

__version__ = "0.1.0"

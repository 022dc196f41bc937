"""
Transformation Layer Schemas

Schema of posting rows as they are handed to the load layer.
"""

import polars as pl

POSTINGS_SCHEMA = pl.Schema(
    [
        ("group_id", pl.Int64()),
        ("fb_id", pl.String()),
        ("created_time", pl.Datetime("us")),
        ("updated_time", pl.Datetime("us")),
        ("message", pl.String()),
        ("name", pl.String()),
        ("attachment_title", pl.String()),
        ("attachment_description", pl.String()),
        ("attachment_url", pl.String()),
        ("attachment_media_url", pl.String()),
    ]
)

POSTING_COLUMNS = list(POSTINGS_SCHEMA.names())

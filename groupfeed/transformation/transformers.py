"""
Posting Transformers - Transform Layer

Pure functions turning remote feed postings into rows for the load layer.
"""

from typing import Any, Dict, Iterable

import polars as pl
import logging

from ..extract.schemas import RemotePosting
from .schemas import POSTING_COLUMNS, POSTINGS_SCHEMA

logger = logging.getLogger(__name__)


def posting_to_row(group_id: int, posting: RemotePosting) -> Dict[str, Any]:
    """Map one remote posting to a posting row; missing attachment fields are None"""
    attachment = posting.attachment
    return {
        "group_id": group_id,
        "fb_id": posting.id,
        "created_time": posting.created_time,
        "updated_time": posting.updated_time,
        "message": posting.message,
        "name": posting.name,
        "attachment_title": attachment.title if attachment else None,
        "attachment_description": attachment.description if attachment else None,
        "attachment_url": attachment.url if attachment else None,
        "attachment_media_url": attachment.media_url if attachment else None,
    }


def postings_to_frame(group_id: int, postings: Iterable[RemotePosting]) -> pl.DataFrame:
    """
    Build the posting rows owned by one group

    Args:
        group_id: Local id of the owning group
        postings: Remote feed postings

    Returns:
        pl.DataFrame: One row per posting with POSTINGS_SCHEMA
    """
    rows = [posting_to_row(group_id, posting) for posting in postings]
    columns = {column: [row[column] for row in rows] for column in POSTING_COLUMNS}
    df = pl.DataFrame(columns, schema=POSTINGS_SCHEMA)

    logger.info(f"Transformed {df.height} postings for group {group_id}")
    return df

"""
Persisted Records

Rows of the `groups` and `postings` tables as plain dataclasses.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

GROUP_COLUMNS = ("id", "fb_id", "name", "fb_url", "created_at")

POSTING_COLUMNS = (
    "id",
    "group_id",
    "fb_id",
    "created_time",
    "updated_time",
    "message",
    "name",
    "attachment_title",
    "attachment_description",
    "attachment_url",
    "attachment_media_url",
)


@dataclass(frozen=True)
class Group:
    """A stored Facebook group, unique by fb_id"""

    id: int
    fb_id: str
    name: Optional[str]
    fb_url: Optional[str]
    created_at: datetime

    @classmethod
    def from_row(cls, row: Sequence) -> "Group":
        return cls(*row)


@dataclass(frozen=True)
class Posting:
    """A stored feed posting, owned by exactly one group"""

    id: int
    group_id: int
    fb_id: str
    created_time: Optional[datetime]
    updated_time: Optional[datetime]
    message: Optional[str]
    name: Optional[str]
    attachment_title: Optional[str]
    attachment_description: Optional[str]
    attachment_url: Optional[str]
    attachment_media_url: Optional[str]

    @classmethod
    def from_row(cls, row: Sequence) -> "Posting":
        return cls(*row)

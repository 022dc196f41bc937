"""
Group Store - DuckDB Load Layer

Persists groups and their postings. The UNIQUE constraint on groups.fb_id
is the source of truth for group uniqueness; concurrent loaders that both
pass a lookup still cannot both insert the same group.
"""

import os
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional

import duckdb
import polars as pl
import logging

from ..coreutils.config import Settings
from ..transformation.schemas import POSTING_COLUMNS as POSTING_ROW_COLUMNS
from .exceptions import GroupAlreadyExistsError
from .models import GROUP_COLUMNS, POSTING_COLUMNS, Group, Posting

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = [
    "CREATE SEQUENCE IF NOT EXISTS groups_id_seq START 1",
    "CREATE SEQUENCE IF NOT EXISTS postings_id_seq START 1",
    """
    CREATE TABLE IF NOT EXISTS groups (
        id BIGINT PRIMARY KEY DEFAULT nextval('groups_id_seq'),
        fb_id VARCHAR NOT NULL UNIQUE,
        name VARCHAR,
        fb_url VARCHAR,
        created_at TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS postings (
        id BIGINT PRIMARY KEY DEFAULT nextval('postings_id_seq'),
        group_id BIGINT NOT NULL REFERENCES groups (id),
        fb_id VARCHAR NOT NULL,
        created_time TIMESTAMP,
        updated_time TIMESTAMP,
        message VARCHAR,
        name VARCHAR,
        attachment_title VARCHAR,
        attachment_description VARCHAR,
        attachment_url VARCHAR,
        attachment_media_url VARCHAR
    )
    """,
]

GROUP_SELECT = f"SELECT {', '.join(GROUP_COLUMNS)} FROM groups"
POSTING_SELECT = f"SELECT {', '.join(POSTING_COLUMNS)} FROM postings"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class GroupStore:
    """DuckDB-backed storage for groups and postings"""

    def __init__(
        self,
        db_path: str = ":memory:",
        conn: Optional[duckdb.DuckDBPyConnection] = None,
    ):
        """
        Open (and if needed create) the database

        Args:
            db_path: DuckDB file path, or ":memory:"
            conn: Existing connection to use instead of opening db_path
        """
        self.db_path = db_path
        if conn is None:
            if db_path != ":memory:":
                directory = os.path.dirname(db_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
            conn = duckdb.connect(db_path)
        self.conn = conn
        self.initialize_schema()

    @classmethod
    def from_settings(cls, settings: Settings) -> "GroupStore":
        return cls(db_path=settings.db_path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.conn.close()

    @contextmanager
    def _cursor(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """Per-operation cursor; cursors are not shared between threads"""
        cursor = self.conn.cursor()
        try:
            yield cursor
        finally:
            cursor.close()

    def initialize_schema(self):
        """Create sequences and tables if they do not exist"""
        with self._cursor() as cur:
            for statement in SCHEMA_STATEMENTS:
                cur.execute(statement)
        logger.debug(f"Schema ready in {self.db_path}")

    def find_group(self, fb_id: str) -> Optional[Group]:
        """Find a group by its Facebook id"""
        with self._cursor() as cur:
            row = cur.execute(f"{GROUP_SELECT} WHERE fb_id = ?", [fb_id]).fetchone()
        return Group.from_row(row) if row else None

    def create_group(self, fb_id: str, name: Optional[str], fb_url: Optional[str]) -> Group:
        """
        Insert a new group

        Args:
            fb_id: Facebook group id
            name: Group display name
            fb_url: Page URL the group was loaded from

        Returns:
            Group: The stored group

        Raises:
            GroupAlreadyExistsError: fb_id is already stored
        """
        with self._cursor() as cur:
            try:
                row = cur.execute(
                    f"""
                    INSERT INTO groups (fb_id, name, fb_url, created_at)
                    VALUES (?, ?, ?, ?)
                    RETURNING {', '.join(GROUP_COLUMNS)}
                    """,
                    [fb_id, name, fb_url, _utc_now()],
                ).fetchone()
            except duckdb.ConstraintException as e:
                raise GroupAlreadyExistsError(fb_id) from e
            except duckdb.TransactionException as e:
                # write-write conflict with a concurrent insert of the same key
                if self.find_group(fb_id) is not None:
                    raise GroupAlreadyExistsError(fb_id) from e
                raise

        group = Group.from_row(row)
        logger.info(f"Saved group {group.fb_id} ({group.name}) as id {group.id}")
        return group

    def add_postings(self, group: Group, postings_df: pl.DataFrame) -> int:
        """
        Insert a batch of postings owned by group, in one transaction

        Args:
            group: Owning group (must already be stored)
            postings_df: Rows with the transformation POSTINGS_SCHEMA

        Returns:
            int: Number of postings inserted
        """
        if postings_df.height == 0:
            logger.info(f"No postings to save for group {group.fb_id}")
            return 0

        rows = postings_df.with_columns(
            pl.lit(group.id, dtype=pl.Int64).alias("group_id")
        ).select(POSTING_ROW_COLUMNS)
        columns = ", ".join(POSTING_ROW_COLUMNS)

        with self._cursor() as cur:
            cur.begin()
            try:
                cur.register("new_postings", rows)
                cur.execute(
                    f"INSERT INTO postings ({columns}) SELECT {columns} FROM new_postings"
                )
                cur.unregister("new_postings")
                cur.commit()
            except duckdb.Error:
                cur.rollback()
                raise

        logger.info(f"Saved {rows.height} postings for group {group.fb_id}")
        return rows.height

    def list_groups(self) -> List[Group]:
        with self._cursor() as cur:
            rows = cur.execute(f"{GROUP_SELECT} ORDER BY id").fetchall()
        return [Group.from_row(row) for row in rows]

    def list_postings(self, group: Group) -> List[Posting]:
        with self._cursor() as cur:
            rows = cur.execute(
                f"{POSTING_SELECT} WHERE group_id = ? ORDER BY id", [group.id]
            ).fetchall()
        return [Posting.from_row(row) for row in rows]

    def postings_frame(self, group: Group) -> pl.DataFrame:
        """Postings of a group as a polars DataFrame"""
        with self._cursor() as cur:
            return cur.execute(
                f"{POSTING_SELECT} WHERE group_id = ? ORDER BY id", [group.id]
            ).pl()

    def count_groups(self) -> int:
        with self._cursor() as cur:
            return cur.execute("SELECT count(*) FROM groups").fetchone()[0]

    def count_postings(self, group: Optional[Group] = None) -> int:
        """Number of postings of a group, or of all groups when group is None"""
        with self._cursor() as cur:
            if group is None:
                return cur.execute("SELECT count(*) FROM postings").fetchone()[0]
            return cur.execute(
                "SELECT count(*) FROM postings WHERE group_id = ?", [group.id]
            ).fetchone()[0]

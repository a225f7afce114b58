"""SQLite access to the wiki category tables.

The store mirrors the two wiki tables the gallery needs:

- ``page``: one row per page, keyed by ``(page_namespace, page_title)``
- ``categorylinks``: one row per (member page, category) pair, with the
  sort key that controls display order inside the category

Request handling only ever reads, so by default connections are opened in
read-only mode (the replica connection).  A writable store is only used to
create the schema and seed data.
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import NamedTuple

from .titles import NS_CATEGORY, NS_FILE

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS page (
    page_id INTEGER PRIMARY KEY,
    page_namespace INTEGER NOT NULL,
    page_title TEXT NOT NULL,
    UNIQUE (page_namespace, page_title)
);

CREATE TABLE IF NOT EXISTS categorylinks (
    cl_from INTEGER NOT NULL,
    cl_to TEXT NOT NULL,
    cl_sortkey TEXT NOT NULL DEFAULT '',
    PRIMARY KEY (cl_from, cl_to)
);

CREATE INDEX IF NOT EXISTS cl_sortkey ON categorylinks (cl_to, cl_sortkey, cl_from);
"""

# Files in direct subcategories of the target category.  A file listed in
# several subcategories yields one row per subcategory; deduplication across
# subcategories is left to the caller.
SUBCATEGORY_IMAGES_QUERY = """
SELECT subcatpage.page_title AS filename, subcat.cl_to AS category
FROM categorylinks AS topcat
JOIN page AS topcatpage
    ON topcatpage.page_id = topcat.cl_from
    AND topcatpage.page_namespace = :category_ns
JOIN categorylinks AS subcat
    ON subcat.cl_to = topcatpage.page_title
JOIN page AS subcatpage
    ON subcatpage.page_id = subcat.cl_from
    AND subcatpage.page_namespace = :file_ns
WHERE topcat.cl_to = :category
GROUP BY filename, category
ORDER BY category, subcat.cl_sortkey, filename
"""


class ImageRow(NamedTuple):
    """One (filename, subcategory) pair returned by the gallery query."""

    filename: str
    category: str


def initialize_schema(conn: sqlite3.Connection) -> None:
    """Create the ``page`` and ``categorylinks`` tables if they don't exist."""
    conn.executescript(SCHEMA)
    conn.commit()


class CategoryStore:
    """Read access to the wiki ``page`` and ``categorylinks`` tables.

    The store is handed to the request handler at construction time, so tests
    can point it at a temporary database.
    """

    def __init__(self, db_path: Path, *, replica: bool = True):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file
            replica: Open connections read-only. The database must already exist.
        """
        self.db_path = Path(db_path)
        self.replica = replica
        logger.info(
            f"Using category store at {self.db_path} ({'replica' if replica else 'primary'})"
        )

    @contextmanager
    def get_connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, closing it when the block exits.

        Yields:
            sqlite3 connection with ``Row`` row factory
        """
        if self.replica:
            uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
            conn = sqlite3.connect(uri, uri=True)
        else:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def page_exists(self, namespace: int, dbkey: str) -> bool:
        """Check if a page exists.

        Args:
            namespace: Page namespace
            dbkey: Page name in db key form

        Returns:
            True if the page has a row in ``page``
        """
        with self.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT 1 FROM page WHERE page_namespace = ? AND page_title = ? LIMIT 1
                """,
                (namespace, dbkey),
            )
            return cursor.fetchone() is not None

    def fetch_subcategory_images(self, category: str) -> list[ImageRow]:
        """Find files that are direct members of direct subcategories of a category.

        Args:
            category: Db key of the parent category (without namespace prefix)

        Returns:
            (filename, category) rows ordered by subcategory name, then by the
            file's sort key within that subcategory, then by file name
        """
        with self.get_connection() as conn:
            cursor = conn.execute(
                SUBCATEGORY_IMAGES_QUERY,
                {"category": category, "category_ns": NS_CATEGORY, "file_ns": NS_FILE},
            )
            rows = [ImageRow(row["filename"], row["category"]) for row in cursor]

        logger.debug(f"Found {len(rows)} subcategory image rows for {category}")
        return rows

    def add_page(self, namespace: int, dbkey: str) -> int:
        """Insert a page, returning its id (existing id if already present).

        Args:
            namespace: Page namespace
            dbkey: Page name in db key form

        Returns:
            ``page_id`` of the page
        """
        with self.get_connection() as conn:
            conn.execute(
                """
                INSERT OR IGNORE INTO page (page_namespace, page_title) VALUES (?, ?)
                """,
                (namespace, dbkey),
            )
            conn.commit()
            cursor = conn.execute(
                "SELECT page_id FROM page WHERE page_namespace = ? AND page_title = ?",
                (namespace, dbkey),
            )
            return cursor.fetchone()["page_id"]

    def add_category_link(self, page_id: int, category: str, sortkey: str = "") -> None:
        """Put a page into a category.

        Args:
            page_id: Member page id
            category: Db key of the category (without namespace prefix)
            sortkey: Sort key of the member inside the category
        """
        with self.get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO categorylinks (cl_from, cl_to, cl_sortkey)
                VALUES (?, ?, ?)
                """,
                (page_id, category, sortkey),
            )
            conn.commit()

    def initialize(self) -> None:
        """Create the schema in the (writable) database."""
        with self.get_connection() as conn:
            initialize_schema(conn)
        logger.info(f"Initialized category schema at {self.db_path}")

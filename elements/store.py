"""
Element Store
=============

The element store is a single SQLite file holding one row per business
element of an ingested TARIC export:

.. code:: sql

    elements(hjid TEXT PRIMARY KEY, type TEXT NOT NULL, data TEXT NOT NULL)

``data`` is the JSON payload produced by :mod:`importer.parsers`, ``type`` is
the local name of the element and ``hjid`` its stable identifier.

Writes are batched: every insert joins the currently open transaction, and
after ``batch_size`` inserts the transaction is committed and the next insert
opens a new one. A reader only ever sees whole batches. Opening a store for
writing deletes all existing rows, so every ingest produces a complete
snapshot of one export rather than a merge of several.

The browser opens the same file with :meth:`ElementStore.open_read_only`,
which can never truncate or write to it.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Dict
from typing import List

import apsw

from common.util import default_cache_dir
from elements.exceptions import DuplicateIdentifierError
from elements.exceptions import ElementNotFoundError
from elements.exceptions import StoreCommitError
from elements.exceptions import StoreInitError
from elements.exceptions import StoreReadError
from elements.exceptions import StoreWriteError

logger = logging.getLogger(__name__)

BATCH_SIZE = 10000

SCHEMA = """
CREATE TABLE IF NOT EXISTS elements (
    hjid TEXT PRIMARY KEY,
    type TEXT NOT NULL,
    data TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_elements_type ON elements(type);
CREATE VIEW IF NOT EXISTS type_counts AS
    SELECT type, COUNT(*) AS count
    FROM elements
    GROUP BY type
    ORDER BY count DESC, type;
"""

INSERT_OR_REPLACE = (
    "INSERT OR REPLACE INTO elements (hjid, type, data) VALUES (?, ?, ?)"
)
INSERT = "INSERT INTO elements (hjid, type, data) VALUES (?, ?, ?)"


def default_path() -> str:
    """The store location used when none is configured."""
    return os.path.join(default_cache_dir(), "te", "tariff.db")


def check_batch_size(batch_size: int):
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")


@dataclass(frozen=True)
class TypeCount:
    type: str
    count: int


@dataclass(frozen=True)
class Element:
    hjid: str
    type: str
    data: str

    @property
    def payload(self) -> Dict[str, Any]:
        """The decoded JSON payload of the element."""
        return json.loads(self.data)


class ElementStore:
    """
    A handle on an element store file.

    Use :meth:`open` to ingest and :meth:`open_read_only` to browse. Handles
    are context managers; leaving the ``with`` block closes the handle and
    rolls back any batch that was not flushed.

    .. code:: python

        with ElementStore.open(path) as store:
            store.insert("1", "Measure", '{"hjid": "1"}')
            store.flush()
    """

    database: apsw.Connection

    def __init__(
        self,
        database: apsw.Connection,
        path: str,
        read_only: bool = False,
        batch_size: int = BATCH_SIZE,
        strict: bool = False,
    ) -> None:
        check_batch_size(batch_size)

        self.database = database
        self.path = path
        self.read_only = read_only
        self.batch_size = batch_size
        self.strict = strict
        self.insert_statement = INSERT if strict else INSERT_OR_REPLACE
        self.in_batch = False
        self.pending = 0

    @classmethod
    def open(
        cls,
        path: str,
        batch_size: int = BATCH_SIZE,
        strict: bool = False,
    ) -> ElementStore:
        """
        Open the store at ``path`` for writing, creating the file and its
        directory if needed.

        All existing elements are deleted. With ``strict`` set, inserting an
        hjid that has already been written raises
        :class:`~elements.exceptions.DuplicateIdentifierError` instead of
        replacing the earlier row.
        """
        check_batch_size(batch_size)

        directory = Path(path).parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreInitError(f"creating directory {directory}: {e}") from e

        try:
            database = apsw.Connection(str(path))
        except apsw.Error as e:
            raise StoreInitError(f"opening database {path}: {e}") from e

        try:
            cursor = database.cursor()
            cursor.execute("PRAGMA journal_mode=WAL").fetchall()
            cursor.execute(SCHEMA)
            cursor.execute("DELETE FROM elements")
        except apsw.Error as e:
            database.close()
            raise StoreInitError(f"preparing database {path}: {e}") from e

        logger.info("Opened element store %s, existing elements cleared", path)
        return cls(database, str(path), batch_size=batch_size, strict=strict)

    @classmethod
    def open_read_only(cls, path: str) -> ElementStore:
        """Open an existing store at ``path`` without write access."""
        try:
            database = apsw.Connection(str(path), flags=apsw.SQLITE_OPEN_READONLY)
        except apsw.Error as e:
            raise StoreInitError(f"opening database {path}: {e}") from e

        try:
            database.cursor().execute("SELECT 1 FROM elements LIMIT 1").fetchall()
        except apsw.Error as e:
            database.close()
            raise StoreInitError(f"reading database {path}: {e}") from e

        return cls(database, str(path), read_only=True)

    def __enter__(self) -> ElementStore:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def begin_batch(self):
        try:
            self.database.cursor().execute("BEGIN")
        except apsw.Error as e:
            raise StoreWriteError(f"beginning transaction: {e}") from e
        self.in_batch = True
        self.pending = 0

    def insert(self, hjid: str, element_type: str, data: str):
        """
        Add an element to the current batch.

        When the batch reaches ``batch_size`` elements it is committed, and
        the next insert begins a new one.
        """
        if self.read_only:
            raise StoreWriteError(f"cannot insert element {hjid}: store is read-only")

        if not self.in_batch:
            self.begin_batch()

        try:
            self.database.cursor().execute(
                self.insert_statement,
                (hjid, element_type, data),
            )
        except apsw.ConstraintError as e:
            if self.strict:
                raise DuplicateIdentifierError(
                    f"element {hjid} ({element_type}) has already been inserted",
                ) from e
            raise StoreWriteError(f"inserting element {hjid}: {e}") from e
        except apsw.Error as e:
            raise StoreWriteError(f"inserting element {hjid}: {e}") from e

        self.pending += 1
        if self.pending >= self.batch_size:
            self.flush()

    def flush(self):
        """Commit the current batch, if there is one."""
        if not self.in_batch:
            return

        try:
            self.database.cursor().execute("COMMIT")
        except apsw.Error as e:
            raise StoreCommitError(f"committing batch: {e}") from e

        logger.debug("Committed batch of %d elements", self.pending)
        self.in_batch = False
        self.pending = 0

    def query(self, operation: str, statement: str, bindings=()) -> List[tuple]:
        try:
            return self.database.cursor().execute(statement, bindings).fetchall()
        except apsw.Error as e:
            raise StoreReadError(f"{operation}: {e}") from e

    def type_counts(self) -> List[TypeCount]:
        """Element types with the number of elements of each, most common
        first."""
        rows = self.query(
            "querying type counts",
            "SELECT type, count FROM type_counts",
        )
        return [TypeCount(type, count) for type, count in rows]

    def elements(
        self,
        element_type: str,
        limit: int,
        offset: int = 0,
    ) -> List[Element]:
        """A page of elements of one type, in the order they were ingested."""
        if limit < 0 or offset < 0:
            raise ValueError("limit and offset must not be negative")

        rows = self.query(
            "querying elements",
            "SELECT hjid, type, data FROM elements WHERE type = ? "
            "ORDER BY rowid LIMIT ? OFFSET ?",
            (element_type, limit, offset),
        )
        return [Element(*row) for row in rows]

    def element_count(self, element_type: str) -> int:
        rows = self.query(
            "counting elements",
            "SELECT COUNT(*) FROM elements WHERE type = ?",
            (element_type,),
        )
        return rows[0][0]

    def element(self, hjid: str) -> Element:
        rows = self.query(
            "querying element",
            "SELECT hjid, type, data FROM elements WHERE hjid = ?",
            (hjid,),
        )
        if not rows:
            raise ElementNotFoundError(f"no element with hjid {hjid}")
        return Element(*rows[0])

    def close(self):
        """Roll back any batch that has not been flushed and close the
        database."""
        if self.in_batch:
            logger.warning(
                "Rolling back %d uncommitted elements in %s",
                self.pending,
                self.path,
            )
            try:
                self.database.cursor().execute("ROLLBACK")
            except apsw.Error as e:
                logger.error("Rollback failed for %s: %s", self.path, e)
            self.in_batch = False
            self.pending = 0

        self.database.close()

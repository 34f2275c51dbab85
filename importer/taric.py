"""Ingests a TARIC XML export file into an element store."""
import logging
import os
from typing import Callable
from typing import Optional

from elements.store import BATCH_SIZE
from elements.store import ElementStore
from importer.events import CHUNK_SIZE
from importer.parsers import TARGET_DEPTH
from importer.parsers import parse
from importer.progress import ProgressReader

logger = logging.getLogger(__name__)


def parse_taric_file(
    taric_file: str,
    db_path: str,
    target_depth: int = TARGET_DEPTH,
    batch_size: int = BATCH_SIZE,
    strict: bool = False,
    chunk_size: int = CHUNK_SIZE,
    on_progress: Optional[Callable[[float], None]] = None,
) -> int:
    """
    Replace the contents of the store at ``db_path`` with the elements of
    ``taric_file``.

    ``on_progress`` is called with the fraction of the file read so far each
    time more of it is read.

    :returns: The number of elements written.
    """
    with open(taric_file, "rb") as f:
        total = os.fstat(f.fileno()).st_size
        logger.info("Parsing %s (%d bytes) into %s", taric_file, total, db_path)

        with ElementStore.open(db_path, batch_size=batch_size, strict=strict) as store:
            reader = ProgressReader(f, total, on_progress)
            return parse(
                reader,
                store,
                target_depth=target_depth,
                chunk_size=chunk_size,
            )

from __future__ import annotations

import json
import logging
import re
import time
from typing import Any
from typing import BinaryIO
from typing import List
from typing import Union

from elements.exceptions import StoreError
from elements.store import ElementStore
from importer.events import CHUNK_SIZE
from importer.events import Event
from importer.events import EventType
from importer.events import iter_events
from importer.exceptions import MalformedDocumentError
from importer.exceptions import MissingIdentifierError
from importer.exceptions import SerialiseError
from importer.normaliser import Node
from importer.normaliser import normalise

logger = logging.getLogger(__name__)

TARGET_DEPTH = 4
"""Depth below the document root, which is depth 1, of the business elements
in a TARIC export."""

CONTENT = "__content__"

EXTRA_WS = re.compile(r"^\n\s+")
"""Matches the indentation between sibling tags."""

IDENTIFIER = "hjid"

PROGRESS_INTERVAL = 10000


def collapse(node: Node) -> Union[Node, str]:
    """A node holding nothing but text is replaced by that text."""
    if len(node) == 1 and node.get(CONTENT):
        return node[CONTENT]
    return node


def merge(parent: Node, key: str, child: Node):
    """
    Attach a finished child element to its parent under the child's tag name.

    The first child with a tag is stored as it is; a second turns the value
    into a list, and later ones are appended to that list.
    """
    value = collapse(child)
    existing = parent.get(key)
    if existing is None:
        parent[key] = value
    elif isinstance(existing, list):
        existing.append(value)
    else:
        parent[key] = [existing, value]


def serialise(element: Node) -> str:
    return json.dumps(
        element,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )


class ElementStreamParser:
    """
    Builds business elements from a stream of XML events and writes them to
    an :class:`~elements.store.ElementStore`.

    Elements above :attr:`target_depth` are only counted. When an element at
    the target depth starts, every element inside it is built up on a stack
    of dictionaries: text goes into the reserved ``__content__`` key, and a
    finished child is merged into its parent. When the target element itself
    ends it is normalised, serialised to JSON and inserted into the store
    under its ``hjid``, with its tag name as the element type.

    For example, at the target depth,

    .. code:: xml

        <Measure>
            <hjid>2</hjid>
            <wrap><inner>X</inner></wrap>
            <desc>A</desc>
            <desc>B</desc>
        </Measure>

    is stored as ``("2", "Measure", ...)`` with the payload

    .. code:: json

        {"desc": ["A", "B"], "hjid": "2", "wrap.inner": "X"}

    Whitespace-only text starting with a newline is ignored, as is any text
    outside a target element. Text that comes before the first child of an
    element is discarded when that child starts, and text after it is
    ignored.
    """

    def __init__(self, store: ElementStore, target_depth: int = TARGET_DEPTH):
        if target_depth < 1:
            raise ValueError(f"target_depth must be at least 1, got {target_depth}")

        self.store = store
        self.target_depth = target_depth
        self.depth = 0
        self.in_target = False
        self.stack: List[Node] = []
        self.count = 0
        self.started = time.time()

    def feed(self, event: Event):
        if event.type is EventType.START:
            self.start(event.value)
        elif event.type is EventType.DATA:
            self.data(event.value)
        elif event.type is EventType.END:
            self.end(event.value)
        elif event.type is EventType.EOF:
            self.close()

    def start(self, name: str):
        self.depth += 1
        if self.depth == self.target_depth:
            self.in_target = True

        if self.in_target:
            if self.stack:
                # The parent has a structural child, so its text is only
                # indentation.
                self.stack[-1].pop(CONTENT, None)
            self.stack.append({CONTENT: ""})

    def data(self, text: str):
        if not self.in_target or EXTRA_WS.match(text):
            return

        node = self.stack[-1]
        if CONTENT not in node:
            # Text between or after structural children.
            return
        node[CONTENT] += text

    def end(self, name: str):
        if self.depth == 0:
            raise MalformedDocumentError(f"end of {name} with no open element")

        if self.depth == self.target_depth:
            self.save(name, self.stack.pop())
            self.in_target = False

        self.depth -= 1

        if self.in_target:
            if len(self.stack) < 2:
                raise MalformedDocumentError(f"end of {name} with no open parent")
            child = self.stack.pop()
            merge(self.stack[-1], name, child)

    def close(self):
        """Handle the end of the input by committing the last batch."""
        if self.depth != 0 or self.stack:
            raise MalformedDocumentError(
                f"input ended inside an element at depth {self.depth}",
            )
        self.store.flush()

    def save(self, element_type: str, node: Node):
        element = normalise(node)

        hjid: Any = element.get(IDENTIFIER)
        if not isinstance(hjid, str):
            raise MissingIdentifierError(
                f"{element_type} element after {self.count} saved elements "
                f"has no {IDENTIFIER}",
            )

        try:
            payload = serialise(element)
        except (TypeError, ValueError) as e:
            raise SerialiseError(
                f"serialising {element_type} element {hjid}: {e}",
            ) from e

        try:
            self.store.insert(hjid, element_type, payload)
        except StoreError:
            logger.error("Failed to save %s element %s", element_type, hjid)
            raise

        self.count += 1
        if self.count % PROGRESS_INTERVAL == 0:
            logger.info(
                "%d elements done in %d seconds",
                self.count,
                int(time.time() - self.started),
            )


def parse(
    stream: BinaryIO,
    store: ElementStore,
    target_depth: int = TARGET_DEPTH,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """
    Parse a TARIC XML export from ``stream`` into ``store``.

    The final batch is flushed once the whole document has been read. Any
    error stops the parse and is raised; elements of the current batch are
    not committed.

    :returns: The number of elements written.
    """
    parser = ElementStreamParser(store, target_depth=target_depth)
    for event in iter_events(stream, chunk_size=chunk_size):
        parser.feed(event)

    logger.info(
        "Parsed %d elements in %d seconds",
        parser.count,
        int(time.time() - parser.started),
    )
    return parser.count

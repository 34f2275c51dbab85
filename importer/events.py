"""Turns a TARIC XML byte stream into a flat sequence of parse events."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO
from typing import Iterator
from typing import List

from lxml import etree

from importer.exceptions import ReadInputError

CHUNK_SIZE = 64 * 1024


class EventType(Enum):
    START = "start"
    END = "end"
    DATA = "data"
    EOF = "eof"


@dataclass(frozen=True)
class Event:
    """
    One step through an XML document.

    :py:attr:`value` is the local name of the element for ``START`` and
    ``END`` events, the character data for ``DATA`` events and empty for
    ``EOF``.
    """

    type: EventType
    value: str = ""


class EventCollector:
    """
    An lxml parser target which records the events it is sent.

    lxml may deliver a single run of text in several ``data`` calls (around
    entity references, or where a feed chunk ends). The collector joins them
    and emits one ``DATA`` event just before the next start or end tag, so
    consumers always see whole runs of text.
    """

    def __init__(self):
        self.events: List[Event] = []
        self.text: List[str] = []

    def flush_text(self):
        if self.text:
            self.events.append(Event(EventType.DATA, "".join(self.text)))
            self.text = []

    def start(self, tag, attrib):
        self.flush_text()
        self.events.append(Event(EventType.START, etree.QName(tag).localname))

    def end(self, tag):
        self.flush_text()
        self.events.append(Event(EventType.END, etree.QName(tag).localname))

    def data(self, data):
        self.text.append(data)

    def close(self):
        self.flush_text()

    def drain(self) -> List[Event]:
        events, self.events = self.events, []
        return events


def iter_events(stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> Iterator[Event]:
    """
    Read ``stream`` incrementally and yield its events, finishing with a
    single ``EOF`` event.

    Only ``chunk_size`` bytes of input are held at a time, so arbitrarily
    large exports can be read. Element attributes, comments and processing
    instructions are not reported.
    """
    collector = EventCollector()
    parser = etree.XMLParser(target=collector, huge_tree=True, resolve_entities=False)

    while True:
        try:
            chunk = stream.read(chunk_size)
        except OSError as e:
            raise ReadInputError(f"reading XML input: {e}") from e

        if not chunk:
            break

        try:
            parser.feed(chunk)
        except etree.XMLSyntaxError as e:
            raise ReadInputError(f"reading XML event: {e}") from e

        yield from collector.drain()

    try:
        parser.close()
    except etree.XMLSyntaxError as e:
        raise ReadInputError(f"reading XML event: {e}") from e

    yield from collector.drain()
    yield Event(EventType.EOF)

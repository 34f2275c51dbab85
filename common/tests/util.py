from __future__ import annotations

import contextlib
from io import BytesIO
from typing import List
from typing import Tuple

import pytest

ENVELOPE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<env:envelope xmlns="urn:publicid:-:DGTAXUD:TARIC:MESSAGE:1.0" '
    'xmlns:env="urn:publicid:-:DGTAXUD:GENERAL:ENVELOPE:1.0" id="1">\n'
    '  <env:transaction id="1">\n'
    '    <env:app.message id="1">\n'
    "{elements}\n"
    "    </env:app.message>\n"
    "  </env:transaction>\n"
    "</env:envelope>\n"
)


@contextlib.contextmanager
def raises_if(exception, expected, *args, **kwargs):
    if expected:
        with pytest.raises(exception, *args, **kwargs):
            yield
    else:
        yield


def taric_export(*elements: str) -> bytes:
    """Wrap business element snippets in the three container levels of a
    TARIC export, so that they sit at depth 4."""
    return ENVELOPE.format(elements="\n".join(elements)).encode("utf-8")


def taric_stream(*elements: str) -> BytesIO:
    return BytesIO(taric_export(*elements))


def write_taric_file(path, *elements: str) -> str:
    path.write_bytes(taric_export(*elements))
    return str(path)


class RecordingStore:
    """Stands in for an element store, keeping every call made to it."""

    def __init__(self):
        self.inserted: List[Tuple[str, str, str]] = []
        self.flushes = 0

    def insert(self, hjid: str, element_type: str, data: str):
        self.inserted.append((hjid, element_type, data))

    def flush(self):
        self.flushes += 1

"""
Progress reporting for ingests.

The parser knows nothing about progress. Instead, the input file is wrapped
in a :class:`ProgressReader`, which reports the fraction of the file read
so far every time the parser asks for more bytes. Those samples are either
printed straight away or, when the terminal is being updated from another
thread, published to a :class:`ProgressChannel` that never blocks the
parser.
"""
from __future__ import annotations

import queue
from typing import BinaryIO
from typing import Callable
from typing import Iterator
from typing import Optional


class ProgressReader:
    """Wraps a binary stream and reports the fraction of ``total`` bytes read
    after every read."""

    def __init__(
        self,
        stream: BinaryIO,
        total: int,
        on_progress: Optional[Callable[[float], None]] = None,
    ):
        self.stream = stream
        self.total = total
        self.bytes_read = 0
        self.on_progress = on_progress

    def read(self, size: int = -1) -> bytes:
        chunk = self.stream.read(size)
        self.bytes_read += len(chunk)
        if self.total > 0 and self.on_progress is not None:
            self.on_progress(self.bytes_read / self.total)
        return chunk


class ProgressChannel:
    """
    A bounded channel of progress samples with a single producer.

    :meth:`publish` never blocks: when ``maxsize`` samples are already
    waiting, the new sample is dropped and counted in :attr:`dropped`.
    Iterating the channel yields samples until :meth:`close` is called.
    """

    CLOSED = object()

    def __init__(self, maxsize: int = 1):
        self.maxsize = maxsize
        self.queue = queue.Queue()
        self.dropped = 0

    def publish(self, value: float):
        # Only the producer adds samples, so the queue cannot grow between
        # the size check and the put.
        if self.queue.qsize() >= self.maxsize:
            self.dropped += 1
            return
        self.queue.put_nowait(value)

    def close(self):
        self.queue.put_nowait(self.CLOSED)

    def __iter__(self) -> Iterator[float]:
        while True:
            value = self.queue.get()
            if value is self.CLOSED:
                return
            yield value


class ProgressPrinter:
    """
    Writes ``Parsing... N%`` each time the whole percentage increases.

    Samples may arrive late or not at all, so a sample lower than one already
    shown is ignored and the display never goes backwards.
    """

    def __init__(self, write: Callable[[str], None]):
        self.write = write
        self.percent = -1

    def update(self, fraction: float):
        percent = min(int(fraction * 100), 100)
        if percent > self.percent:
            self.percent = percent
            self.write(f"\rParsing... {percent}%")

    def consume(self, channel: ProgressChannel):
        for fraction in channel:
            self.update(fraction)

    def done(self):
        self.write("\rParsing... done.\n")

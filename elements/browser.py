"""
A line-oriented terminal browser over a read-only element store.

The browser has three views, each printed in full and followed by a prompt:

- the element types, with the number of elements of each;
- one page of the elements of a type, each with a short summary;
- the full JSON payload of one element.

``q`` quits from any view and ``b`` goes back a view.
"""
from __future__ import annotations

import json
import math
from typing import Any
from typing import List
from typing import TextIO

from common.util import truncate
from elements.exceptions import ElementNotFoundError
from elements.store import Element
from elements.store import ElementStore

PAGE_SIZE = 20

SUMMARY_KEYS = ("sid", "description", "code", "descriptionPeriod.sid")
SUMMARY_SKIPPED_KEYS = ("hjid", "__content__")
MAX_SUMMARY = 120
MAX_SUMMARY_VALUE = 40
MAX_SUMMARY_PAIRS = 3


class QuitBrowser(Exception):
    pass


def format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def summarise(data: str) -> str:
    """
    Describe an element payload in one short line.

    The first identifying key found is used on its own. Failing that, the
    first few members of the payload are listed.
    """
    try:
        payload = json.loads(data)
    except ValueError:
        return truncate(data, MAX_SUMMARY)

    if not isinstance(payload, dict):
        return truncate(data, MAX_SUMMARY)

    for key in SUMMARY_KEYS:
        if key in payload:
            return truncate(f"{key}={format_value(payload[key])}", MAX_SUMMARY)

    pairs = []
    for key in sorted(payload):
        if key in SUMMARY_SKIPPED_KEYS:
            continue
        value = truncate(format_value(payload[key]), MAX_SUMMARY_VALUE, "...")
        pairs.append(f"{key}={value}")
        if len(pairs) >= MAX_SUMMARY_PAIRS or len(", ".join(pairs)) > MAX_SUMMARY:
            break

    return truncate(", ".join(pairs), MAX_SUMMARY)


def pretty(data: str) -> str:
    try:
        return json.dumps(
            json.loads(data),
            indent=2,
            sort_keys=True,
            ensure_ascii=False,
        )
    except ValueError:
        return data


class Browser:
    """
    Browses ``store``, reading commands from ``stdin`` and writing to
    ``stdout``, a :class:`~django.core.management.base.OutputWrapper` or
    anything else whose ``write`` prints a line.
    """

    def __init__(
        self,
        store: ElementStore,
        stdin: TextIO,
        stdout,
        page_size: int = PAGE_SIZE,
    ):
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")

        self.store = store
        self.stdin = stdin
        self.stdout = stdout
        self.page_size = page_size

    def run(self):
        try:
            self.types_view()
        except QuitBrowser:
            pass

    def read(self, prompt: str) -> str:
        """Prompt for a command. End of input and ``q`` both quit."""
        self.stdout.write(prompt)
        line = self.stdin.readline()
        if not line:
            raise QuitBrowser()

        command = line.strip()
        if command == "q":
            raise QuitBrowser()
        return command

    def types_view(self):
        while True:
            counts = self.store.type_counts()

            self.stdout.write("")
            self.stdout.write("Element Types")
            if not counts:
                self.stdout.write(f"No elements found in {self.store.path}")
                return

            for number, type_count in enumerate(counts, 1):
                self.stdout.write(
                    f"{number:>4}  {type_count.type:<40} {type_count.count:>10}",
                )

            command = self.read("Enter a number to browse a type, q to quit")
            if command.isdigit() and 1 <= int(command) <= len(counts):
                type_count = counts[int(command) - 1]
                self.elements_view(type_count.type, type_count.count)
            else:
                self.stdout.write(f"Unknown selection: {command}")

    def elements_view(self, element_type: str, total: int):
        offset = 0
        hjid_filter = ""
        pages = max(1, math.ceil(total / self.page_size))

        while True:
            page = self.store.elements(element_type, self.page_size, offset)
            rows: List[Element] = [e for e in page if hjid_filter in e.hjid]

            self.stdout.write("")
            self.stdout.write(
                f"{element_type} ({total} total)  "
                f"Page {offset // self.page_size + 1}/{pages}",
            )
            if hjid_filter:
                self.stdout.write(f"Filter: {hjid_filter}")
            for number, element in enumerate(rows, 1):
                self.stdout.write(
                    f"{number:>4}  {element.hjid:<20} {summarise(element.data)}",
                )

            command = self.read(
                "Enter a number for detail, #hjid to look up an element, "
                "n/p next/prev page, /text to filter, b back, q quit",
            )

            if command == "b":
                return
            elif command == "n":
                if offset + self.page_size < total:
                    offset += self.page_size
                    hjid_filter = ""
            elif command == "p":
                if offset >= self.page_size:
                    offset -= self.page_size
                    hjid_filter = ""
            elif command.startswith("/"):
                hjid_filter = command[1:]
            elif command.startswith("#"):
                try:
                    self.detail_view(self.store.element(command[1:]))
                except ElementNotFoundError:
                    self.stdout.write(f"No element with hjid {command[1:]}")
            elif command.isdigit() and 1 <= int(command) <= len(rows):
                self.detail_view(rows[int(command) - 1])
            else:
                self.stdout.write(f"Unknown selection: {command}")

    def detail_view(self, element: Element):
        self.stdout.write("")
        self.stdout.write(f"Element {element.hjid} ({element.type})")
        self.stdout.write("")
        self.stdout.write(pretty(element.data))

        while True:
            command = self.read("b back, q quit")
            if command == "b":
                return
            self.stdout.write(f"Unknown selection: {command}")

"""
Collapses the container elements of a parsed business element into dotted
path attributes.

TARIC exports wrap many values in purely syntactic container elements. Left
as they are, each would become a JSON object with a single member. Elements
that are business entities in their own right carry a ``metainfo`` child
with their provenance and validity; that child is the only signal available
to tell the two apart, as nothing else in the XML distinguishes them.

So, for every member of a node:

- an object without ``metainfo`` is flattened into its parent, each of its
  leaves keyed by the dotted path to it, with ``[i]`` marking list positions;
- an object with ``metainfo`` is kept, and normalised in turn;
- a list is kept, and each object in it normalised in turn;
- a string is kept as it is, and a ``None`` is dropped.

.. code:: python

    >>> normalise({"hjid": "2", "wrap": {"inner": "X", "more": ["a", "b"]}})
    {'hjid': '2', 'wrap.inner': 'X', 'wrap.more[0]': 'a', 'wrap.more[1]': 'b'}
"""
from __future__ import annotations

from typing import Any
from typing import Dict

Node = Dict[str, Any]

METAINFO = "metainfo"


def is_entity(node: Node) -> bool:
    return node.get(METAINFO) is not None


def deep_flatten(node: Node, prefix: str) -> Dict[str, Any]:
    """Return every leaf under ``node`` keyed by its dotted path, starting
    with ``prefix``."""
    flattened = {}
    for key, value in node.items():
        path = f"{prefix}.{key}"
        if value is None:
            continue

        if isinstance(value, dict):
            flattened.update(deep_flatten(value, path))
        elif isinstance(value, list):
            for i, item in enumerate(value):
                item_path = f"{path}[{i}]"
                if isinstance(item, dict):
                    flattened.update(deep_flatten(item, item_path))
                elif item is not None:
                    flattened[item_path] = item
        else:
            flattened[path] = value

    return flattened


def normalise(node: Node) -> Node:
    """Return a normalised copy of ``node``; the input is left untouched."""
    normalised = {}
    for key, value in node.items():
        if value is None:
            continue

        if isinstance(value, dict):
            if is_entity(value):
                normalised[key] = normalise(value)
            else:
                normalised.update(deep_flatten(value, key))
        elif isinstance(value, list):
            normalised[key] = [
                normalise(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            normalised[key] = value

    return normalised

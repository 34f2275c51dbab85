import copy

import pytest

from importer.normaliser import deep_flatten
from importer.normaliser import is_entity
from importer.normaliser import normalise


@pytest.mark.parametrize(
    "node, expected",
    [
        ({"metainfo": {"origin": "T"}}, True),
        ({"metainfo": "x"}, True),
        ({"metainfo": None}, False),
        ({"hjid": "1"}, False),
        ({}, False),
    ],
)
def test_is_entity(node, expected):
    assert is_entity(node) is expected


def test_deep_flatten():
    node = {
        "inner": "X",
        "deeper": {"leaf": "Y"},
        "items": ["a", {"k": "v"}, None],
        "gone": None,
    }

    assert deep_flatten(node, "wrap") == {
        "wrap.inner": "X",
        "wrap.deeper.leaf": "Y",
        "wrap.items[0]": "a",
        "wrap.items[1].k": "v",
    }


def test_deep_flatten_flattens_entities_too():
    node = {"child": {"metainfo": {"origin": "T"}, "sid": "1"}}

    assert deep_flatten(node, "wrap") == {
        "wrap.child.metainfo.origin": "T",
        "wrap.child.sid": "1",
    }


def test_normalise_flattens_containers():
    assert normalise({"hjid": "2", "wrap": {"inner": "X"}}) == {
        "hjid": "2",
        "wrap.inner": "X",
    }


def test_normalise_keeps_entities():
    node = {
        "hjid": "1",
        "child": {
            "hjid": "2",
            "metainfo": {"origin": "T", "status": "PUBLISHED"},
            "wrap": {"inner": "X"},
        },
    }

    assert normalise(node) == {
        "hjid": "1",
        "child": {
            "hjid": "2",
            "metainfo.origin": "T",
            "metainfo.status": "PUBLISHED",
            "wrap.inner": "X",
        },
    }


def test_normalise_keeps_lists():
    node = {
        "desc": ["A", "B"],
        "periods": [{"sid": "1"}, {"sid": "2", "wrap": {"inner": "X"}}],
    }

    assert normalise(node) == {
        "desc": ["A", "B"],
        "periods": [{"sid": "1"}, {"sid": "2", "wrap.inner": "X"}],
    }


def test_normalise_drops_none():
    assert normalise({"hjid": "1", "gone": None}) == {"hjid": "1"}


def test_normalise_leaves_input_untouched():
    node = {"hjid": "1", "wrap": {"inner": "X"}, "list": [{"a": {"b": "c"}}]}
    original = copy.deepcopy(node)

    normalise(node)

    assert node == original


def test_normalise_of_flat_node_is_unchanged():
    node = {"hjid": "1", "wrap.inner": "X", "desc": ["A", "B"]}

    assert normalise(node) == node

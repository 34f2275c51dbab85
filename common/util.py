"""Miscellaneous utility functions."""
from __future__ import annotations

import os
from pathlib import Path


def is_truthy(value: str) -> bool:
    """
    Check whether a string represents a True boolean value.

    :param value str: The value to check
    :rtype: bool
    """
    return str(value).lower() not in ("", "n", "no", "off", "f", "false", "0")


def default_cache_dir() -> str:
    """
    Return the current user's cache directory.

    Honours ``XDG_CACHE_HOME`` and falls back to ``~/.cache``.
    """
    cache_home = os.environ.get("XDG_CACHE_HOME")
    if cache_home:
        return cache_home
    return str(Path.home() / ".cache")


def truncate(value: str, length: int, suffix: str = "") -> str:
    """Cut ``value`` down to at most ``length`` characters, appending
    ``suffix`` when anything was removed."""
    if len(value) <= length:
        return value
    return value[:length] + suffix

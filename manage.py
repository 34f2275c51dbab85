#!/usr/bin/env python
"""
Command-line entry point.

.. code:: sh

    ./manage.py parse_taric export.xml
    ./manage.py browse_taric

Settings are read from the environment, and from a ``.env`` file in the
working directory when there is one.
"""
import os
import sys

import dotenv


def settings_module(argv) -> str:
    """Pick test settings under pytest and dev settings when ``ENV=dev``."""
    if "pytest" in argv[1:]:
        return "settings.test"
    if str(os.environ.get("ENV")).upper() == "DEV":
        return "settings.dev"
    return "settings"


def main(argv=None):
    argv = sys.argv if argv is None else argv

    dotenv.load_dotenv()
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", settings_module(argv))

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Is it installed in the active "
            "environment?",
        ) from exc
    execute_from_command_line(argv)


if __name__ == "__main__":
    main()

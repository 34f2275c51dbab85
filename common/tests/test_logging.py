import logging

import pytest


@pytest.mark.parametrize("name", ["importer", "elements", "common"])
def test_app_loggers_write_through_root_only(name):
    logger = logging.getLogger(name)

    assert logger.handlers == []
    assert logger.propagate is True
    assert logging.getLogger().handlers

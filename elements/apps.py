import logging

import apsw
from django.apps import AppConfig

logger = logging.getLogger(__name__)

SQLITE_LOG_LEVELS = {
    apsw.SQLITE_OK: logging.INFO,
    apsw.SQLITE_NOTICE: logging.INFO,
    apsw.SQLITE_WARNING: logging.WARNING,
}


def handle_sqlite_log(errcode: int, message: str):
    """Pass a message from SQLite's error log on to the elements logger."""
    primary = errcode & 0xFF
    name = apsw.mapping_extended_result_codes.get(
        errcode,
        apsw.mapping_result_codes.get(primary, "SQLITE_UNKNOWN"),
    )
    logger.log(
        SQLITE_LOG_LEVELS.get(primary, logging.ERROR),
        "SQLite %s (%d): %s",
        name,
        errcode,
        message,
    )


class ElementsConfig(AppConfig):
    name = "elements"
    verbose_name = "TARIC elements"

    def ready(self):
        apsw.config(apsw.SQLITE_CONFIG_LOG, handle_sqlite_log)

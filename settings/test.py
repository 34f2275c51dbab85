from settings.common import *


ENV = "test"

# Tests pass --db explicitly; the default must never resolve to a real store.
TE_DATABASE_PATH = os.environ.get("TEST_TE_DATABASE_PATH", "/nonexistent/te/test.db")

BATCH_SIZE = 10000

STRICT_IDENTIFIERS = False

SENTRY_ENABLED = False

# App records go to the root console handler only, where caplog also sees them.
for _logger in ("importer", "elements", "common"):
    LOGGING["loggers"][_logger]["handlers"] = []
    LOGGING["loggers"][_logger]["propagate"] = True

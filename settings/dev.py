from settings.common import *

# Enable debugging
DEBUG = True

LOGGING["loggers"]["importer"]["level"] = os.environ.get("LOG_LEVEL", "DEBUG")
LOGGING["loggers"]["elements"]["level"] = os.environ.get("LOG_LEVEL", "DEBUG")

try:
    from settings.dev_override import *  # pylint: disable=unused-import
except ImportError:
    pass

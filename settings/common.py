"""Django settings for te project."""
import os
import sys
from os.path import abspath
from os.path import dirname

import dj_database_url
from django.core.exceptions import ImproperlyConfigured

from common.util import is_truthy
from elements.store import default_path

# Name of the deployment environment (dev/test)
ENV = os.environ.get("ENV", "dev")

# -- Paths

# Name of the project
PROJECT_NAME = "te"

# Absolute path of project Django directory
BASE_DIR = dirname(dirname(abspath(__file__)))

# -- Application

TE_APPS = [
    "common",
    "elements.apps.ElementsConfig",
    "importer.apps.ImporterConfig",
]

INSTALLED_APPS = [
    *TE_APPS,
]

# -- Security
SECRET_KEY = os.environ.get("SECRET_KEY", "@@i$w*ct^hfihgh21@^8n+&ba@_l3x")

# -- Debug

# Activates debugging
DEBUG = is_truthy(os.environ.get("DEBUG", False))

# -- Database

# Django itself keeps no state; the element store is opened directly by
# the elements app from TE_DATABASE_PATH.
DATABASES = {}

TE_DATABASE_URL = os.environ.get(
    "TE_DATABASE_URL",
    "sqlite:///" + default_path(),
)

if not TE_DATABASE_URL.startswith("sqlite"):
    raise ImproperlyConfigured(
        f"TE_DATABASE_URL must be an sqlite URL, got {TE_DATABASE_URL!r}",
    )

TE_DATABASE_PATH = dj_database_url.parse(TE_DATABASE_URL)["NAME"]

# -- Importer

# Depth from the document root at which a closing tag is a business element
TARGET_DEPTH = int(os.environ.get("TARGET_DEPTH", 4))

# Number of records committed per store transaction
BATCH_SIZE = int(os.environ.get("BATCH_SIZE", 10000))

# Fail on a repeated hjid instead of overwriting the earlier record
STRICT_IDENTIFIERS = is_truthy(os.environ.get("STRICT_IDENTIFIERS", False))

# Bytes read from the input file per parser feed
READ_CHUNK_SIZE = int(os.environ.get("READ_CHUNK_SIZE", 64 * 1024))

# -- Browser

BROWSER_PAGE_SIZE = int(os.environ.get("BROWSER_PAGE_SIZE", 20))

# -- Internationalization

LANGUAGE_CODE = "en-gb"

TIME_ZONE = "Europe/London"

USE_I18N = False

USE_TZ = True

# -- Logging

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(asctime)s %(name)s %(levelname)s %(message)s"},
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "loggers": {
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
        "importer": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "elements": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "common": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

# -- Sentry error tracking

SENTRY_ENABLED = is_truthy(os.environ.get("SENTRY_DSN", "False"))

if SENTRY_ENABLED:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_kwargs = {
        "dsn": os.environ["SENTRY_DSN"],
        "environment": ENV,
        "integrations": [DjangoIntegration()],
    }
    if "shell" in sys.argv:
        sentry_kwargs["before_send"] = lambda event, hint: None

    if os.getenv("GIT_COMMIT"):
        sentry_kwargs["release"] = os.getenv("GIT_COMMIT")

    sentry_sdk.init(**sentry_kwargs)

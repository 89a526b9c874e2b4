from .base import *  # noqa

DEBUG = True
DJANGO_DEBUG = True
ENVIRONMENT = "development"

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

INTERNAL_IPS = ["127.0.0.1", "0.0.0.0"]

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "edgecms-default",
    },
    "state": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "edgecms-state",
        "TIMEOUT": None,
    },
}

FASTLY["PURGE_METHOD"] = "soft"  # noqa: F405

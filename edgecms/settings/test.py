from .base import *  # noqa

DEBUG = False
ENVIRONMENT = "test"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "edgecms-test-default",
    },
    "state": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "edgecms-test-state",
        "TIMEOUT": None,
    },
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

FASTLY = {
    **FASTLY,  # noqa: F405
    "ENABLED": True,
    "API_KEY": "test-api-key",
    "SERVICE_ID": "test-service",
    "HOST": "https://api.fastly.test/",
    "PURGE_METHOD": "instant",
    "TIMEOUT": 5,
    "CACHE_TAG_HASH_LENGTH": 4,
    "SITE_ID": "",
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

LOGGING["handlers"]["file"] = {  # noqa: F405
    "level": "DEBUG",
    "class": "logging.NullHandler",
}

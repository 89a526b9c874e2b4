from pathlib import Path

import environ

ROOT_DIR = Path(__file__).resolve().parent.parent.parent
APPS_DIR = ROOT_DIR / "edgecms"
BASE_DIR = ROOT_DIR
LOG_DIR = ROOT_DIR / "logs"
LOG_DIR.mkdir(parents=True, exist_ok=True)

env = environ.Env(
    DJANGO_DEBUG=(bool, False),
    DJANGO_ENV=(str, "production"),
    DJANGO_ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1"]),
    DJANGO_TIME_ZONE=(str, "UTC"),
    DJANGO_LOG_LEVEL=(str, "INFO"),
    DJANGO_DB_CONN_MAX_AGE=(int, 60),
    DATABASE_URL=(str, f"sqlite:///{ROOT_DIR / 'db.sqlite3'}"),
    REDIS_URL=(str, "redis://redis:6379/1"),
    CELERY_BROKER_URL=(str, ""),
    CELERY_RESULT_BACKEND=(str, ""),
    FASTLY_ENABLED=(bool, True),
    FASTLY_API_KEY=(str, ""),
    FASTLY_SERVICE_ID=(str, ""),
    FASTLY_API_HOST=(str, "https://api.fastly.com/"),
    FASTLY_PURGE_METHOD=(str, "instant"),
    FASTLY_TIMEOUT=(int, 10),
    FASTLY_CACHE_TAG_HASH_LENGTH=(int, 4),
    FASTLY_SITE_ID=(str, ""),
    FASTLY_CREDENTIALS_CHECK_INTERVAL=(int, 60 * 60),
)

if env.bool("DJANGO_READ_DOT_ENV_FILE", default=True):
    env_file = env("DJANGO_ENV_FILE", default=str(ROOT_DIR / ".env"))
    env_path = Path(env_file)
    if env_path.exists():
        env.read_env(str(env_path))

ENVIRONMENT = env("DJANGO_ENV")
SECRET_KEY = env("DJANGO_SECRET_KEY", default="django-insecure-change-me")
DEBUG = env.bool("DJANGO_DEBUG")
ALLOWED_HOSTS = env.list("DJANGO_ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

DJANGO_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

THIRD_PARTY_APPS = [
    "rest_framework",
    "drf_spectacular",
]

# `core` owns the invalidator registry the Fastly apps register into.
LOCAL_APPS = [
    "core",
    "fastly_cdn",
    "fastly_purger",
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "fastly_cdn.middleware.SurrogateKeyMiddleware",
]

ROOT_URLCONF = "edgecms.urls"
WSGI_APPLICATION = "edgecms.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

DATABASES = {
    "default": env.db("DATABASE_URL"),
}
DATABASES["default"]["ATOMIC_REQUESTS"] = True
DATABASES["default"]["CONN_MAX_AGE"] = env.int("DJANGO_DB_CONN_MAX_AGE")

LANGUAGE_CODE = "en-us"
TIME_ZONE = env("DJANGO_TIME_ZONE")
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = ROOT_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": env("REDIS_URL"),
        "OPTIONS": {
            "CLIENT_CLASS": "django_redis.client.DefaultClient",
            "IGNORE_EXCEPTIONS": True,
        },
    },
    # Long-lived flags such as the Fastly credential state. Never expires.
    "state": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": env("REDIS_URL"),
        "TIMEOUT": None,
        "OPTIONS": {
            "CLIENT_CLASS": "django_redis.client.DefaultClient",
        },
    },
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework.authentication.BasicAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAdminUser",
    ),
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "EdgeCMS API",
    "DESCRIPTION": "Fastly cache invalidation and diagnostics endpoints.",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "SCHEMA_PATH_PREFIX": "/api",
}

FASTLY = {
    "ENABLED": env.bool("FASTLY_ENABLED"),
    "API_KEY": env("FASTLY_API_KEY"),
    "SERVICE_ID": env("FASTLY_SERVICE_ID"),
    "HOST": env("FASTLY_API_HOST"),
    "PURGE_METHOD": env("FASTLY_PURGE_METHOD"),
    "TIMEOUT": env.int("FASTLY_TIMEOUT"),
    "CACHE_TAG_HASH_LENGTH": env.int("FASTLY_CACHE_TAG_HASH_LENGTH"),
    "SITE_ID": env("FASTLY_SITE_ID"),
    "STATE_CACHE_ALIAS": "state",
    "CREDENTIALS_CHECK_INTERVAL": env.int("FASTLY_CREDENTIALS_CHECK_INTERVAL"),
}

CACHE_TAGS_IGNORED_APPS = ["admin", "contenttypes", "sessions", "django_celery_results"]

CELERY_BROKER_URL = env("CELERY_BROKER_URL", default=env("REDIS_URL", default="redis://redis:6379/0"))
CELERY_RESULT_BACKEND = env("CELERY_RESULT_BACKEND", default=env("REDIS_URL", default="redis://redis:6379/1"))
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TASK_TIME_LIMIT = 5 * 60
CELERY_TIMEZONE = TIME_ZONE
CELERY_BEAT_SCHEDULE = {
    "refresh-fastly-credentials": {
        "task": "fastly_cdn.refresh_credentials_state",
        "schedule": FASTLY["CREDENTIALS_CHECK_INTERVAL"],
    }
}

DJANGO_LOG_LEVEL = env("DJANGO_LOG_LEVEL")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d %(message)s",
        },
        "simple": {
            "format": "%(levelname)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG" if DEBUG else DJANGO_LOG_LEVEL,
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
        "file": {
            "level": DJANGO_LOG_LEVEL,
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(LOG_DIR / "edgecms.log"),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "verbose",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": "DEBUG" if DEBUG else DJANGO_LOG_LEVEL,
            "propagate": False,
        },
        "django.request": {
            "handlers": ["console", "file"],
            "level": "ERROR",
            "propagate": False,
        },
        "celery": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
        "core": {
            "handlers": ["console", "file"],
            "level": DJANGO_LOG_LEVEL,
        },
        "fastly_cdn": {
            "handlers": ["console", "file"],
            "level": DJANGO_LOG_LEVEL,
        },
        "fastly_purger": {
            "handlers": ["console", "file"],
            "level": DJANGO_LOG_LEVEL,
        },
    },
}

APPEND_SLASH = True

"""
Django settings for the MGNREGA dashboard.

Everything environment specific comes from the process environment or a
`.env` file next to manage.py. The `districts` table lives in an externally
populated Postgres (Supabase) database.
"""

import os
from pathlib import Path

import dj_database_url
from django.core.exceptions import ImproperlyConfigured
from dotenv import load_dotenv

# ────────────────────────────────────────────────────
# Paths & .env
# ────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")
ENV = os.getenv


def env_bool(key, default="false"):
    return ENV(key, default).lower() in {"1", "true", "yes", "on"}


# ────────────────────────────────────────────────────
# Core flags & secret
# ────────────────────────────────────────────────────
DEBUG = env_bool("DEBUG")

SECRET_KEY = ENV("SECRET_KEY")
if not SECRET_KEY:
    if not DEBUG:
        raise ImproperlyConfigured("SECRET_KEY environment variable is required")
    SECRET_KEY = "dev-only-insecure-key"

ALLOWED_HOSTS = [h.strip() for h in ENV("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "apps.districts",
    "apps.performance",
    "apps.dashboard",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "mgnrega_dashboard.urls"
WSGI_APPLICATION = "mgnrega_dashboard.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# ────────────────────────────────────────────────────
# Database (Supabase Postgres)
# ────────────────────────────────────────────────────
SUPA_URL = ENV("SUPABASE_DB_URL") or ENV("DATABASE_URL")

if SUPA_URL:
    DATABASES = {
        "default": dj_database_url.parse(
            SUPA_URL,
            conn_max_age=int(ENV("DB_CONN_MAX_AGE", "600")),
            ssl_require=not DEBUG,
        )
    }
elif DEBUG:
    DATABASES = {
        "default": {"ENGINE": "django.db.backends.sqlite3", "NAME": BASE_DIR / "db.sqlite3"}
    }
else:
    raise ImproperlyConfigured(
        "Missing database credentials: set DATABASE_URL or SUPABASE_DB_URL"
    )

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ────────────────────────────────────────────────────
# Cache
# ────────────────────────────────────────────────────
MGNREGA_CACHE_ALIAS = "performance"
MGNREGA_CACHE_TTL = int(ENV("MGNREGA_CACHE_TTL", "900"))  # 15 minutes

# With REDIS_URL the query cache is shared between workers and the
# clear_performance_cache command; otherwise it is per process.
if ENV("REDIS_URL"):
    QUERY_CACHE = {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": ENV("REDIS_URL"),
        "OPTIONS": {"CLIENT_CLASS": "django_redis.client.DefaultClient"},
        "KEY_PREFIX": "mgnrega",
        "TIMEOUT": MGNREGA_CACHE_TTL,
    }
else:
    QUERY_CACHE = {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "mgnrega-performance",
        "TIMEOUT": MGNREGA_CACHE_TTL,
    }

CACHES = {
    "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache", "LOCATION": "mgnrega-default"},
    MGNREGA_CACHE_ALIAS: QUERY_CACHE,
}

# Which query results are memoized. Latest-two and history lookups stay
# uncached unless switched on so they always reflect the freshest rows.
MGNREGA_CACHE_POLICY = {
    "states": True,
    "districts": True,
    "performance": env_bool("MGNREGA_CACHE_PERFORMANCE"),
    "history": env_bool("MGNREGA_CACHE_HISTORY"),
}

MGNREGA_HISTORY_MONTHS = int(ENV("MGNREGA_HISTORY_MONTHS", "6"))

# ────────────────────────────────────────────────────
# Presentation
# ────────────────────────────────────────────────────
MGNREGA_DEFAULT_LANGUAGE = ENV("MGNREGA_DEFAULT_LANGUAGE", "hi")
MGNREGA_API_URL = ENV("MGNREGA_API_URL", "http://localhost:8000/api")
MGNREGA_CLIENT_WORKERS = int(ENV("MGNREGA_CLIENT_WORKERS", "4"))

# ────────────────────────────────────────────────────
# I18N
# ────────────────────────────────────────────────────
LANGUAGE_CODE = "en-in"
TIME_ZONE = ENV("TIME_ZONE", "Asia/Kolkata")
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# ────────────────────────────────────────────────────
# Logging
# ────────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "apps": {
            "handlers": ["console"],
            "level": "DEBUG" if DEBUG else "INFO",
            "propagate": False,
        },
        "django.request": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}

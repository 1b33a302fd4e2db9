"""
Campus Foodshare - Django Settings
==================================
Values come from environment variables; defaults are for local
development only.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "foodshare-dev-key-replace-before-deployment")

DEBUG = os.environ.get("DJANGO_DEBUG", "true").lower() in {"1", "true", "yes"}

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "foodshare",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

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

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production points this at PostgreSQL, where
# the per-event SELECT ... FOR UPDATE takes effect.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("FOODSHARE_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

# ── Cache ─────────────────────────────────────────────────────
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "foodshare",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── REST framework ────────────────────────────────────────────
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "foodshare.handlers.authentication.GatewayHeaderAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "EXCEPTION_HANDLER": "foodshare.handlers.exceptions.foodshare_exception_handler",
    "UNAUTHENTICATED_USER": None,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

# ── Foodshare ─────────────────────────────────────────────────
# Event dates and times are entered in the campus's local time.
FOODSHARE_TIME_ZONE = os.environ.get("FOODSHARE_TIME_ZONE", "America/New_York")

# Header carrying the user ID verified by the upstream gateway.
FOODSHARE_IDENTITY_HEADER = os.environ.get("FOODSHARE_IDENTITY_HEADER", "X-User-Id")

FOODSHARE_CATALOG_CACHE_TTL = int(os.environ.get("FOODSHARE_CATALOG_CACHE_TTL", "30"))

# ── Logging ───────────────────────────────────────────────────
ADMINS = [
    tuple(entry.split(":", 1))
    for entry in os.environ.get("FOODSHARE_ADMINS", "").split(",")
    if ":" in entry
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
        "mail_admins": {
            "class": "django.utils.log.AdminEmailHandler",
            "level": "CRITICAL",
        },
    },
    "loggers": {
        "foodshare": {
            "handlers": ["console"],
            "level": os.environ.get("FOODSHARE_LOG_LEVEL", "INFO"),
        },
        "foodshare.alerts": {
            "handlers": ["mail_admins"],
            "level": "CRITICAL",
        },
    },
}

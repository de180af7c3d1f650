"""
Django settings for the financing request service.

Values that differ between environments are read from environment
variables; everything else is fixed here.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-financing-dev-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes")

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "drf_spectacular",
    "apps.financing",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "core.urls"

WSGI_APPLICATION = "core.wsgi.application"

# No persistence: the service only validates and forwards requests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Financing Request API",
    "DESCRIPTION": "Validate and submit financing requests",
    "VERSION": "1.0.0",
}

# External collaborators
FINANCING_COUNTRIES_URL = os.environ.get(
    "FINANCING_COUNTRIES_URL",
    "https://restcountries.com/v3.1/all?fields=name,cca2",
)
FINANCING_CURRENCIES_URL = os.environ.get(
    "FINANCING_CURRENCIES_URL",
    "https://openexchangerates.org/api/currencies.json",
)
FINANCING_SUBMISSION_URL = os.environ.get(
    "FINANCING_SUBMISSION_URL",
    "http://test-noema-api.azurewebsites.net/api/requests",
)
FINANCING_REFERENCE_TIMEOUT = float(os.environ.get("FINANCING_REFERENCE_TIMEOUT", "10"))
FINANCING_SUBMISSION_TIMEOUT = float(os.environ.get("FINANCING_SUBMISSION_TIMEOUT", "30"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "apps": {
            "handlers": ["console"],
            "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

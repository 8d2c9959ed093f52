"""Base Django settings for the weather dashboard."""
from __future__ import annotations

from pathlib import Path
import os

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "rest_framework",
    "backend.api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "backend.urls"

WSGI_APPLICATION = "backend.wsgi.application"

# The dashboard keeps no relational data.
DATABASES: dict = {}

FAVORITES_CACHE_DIR = os.environ.get("FAVORITES_CACHE_DIR")
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "weather-local",
    },
    "favorites": (
        {
            "BACKEND": "django.core.cache.backends.filebased.FileBasedCache",
            "LOCATION": FAVORITES_CACHE_DIR,
            "TIMEOUT": None,
        }
        if FAVORITES_CACHE_DIR
        else {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "weather-favorites",
            "TIMEOUT": None,
        }
    ),
}

FAVORITES_CACHE_ALIAS = os.environ.get("FAVORITES_CACHE_ALIAS", "favorites")

# An empty key is allowed here and reported by the client on first use.
OPENWEATHER_API_KEY = os.environ.get("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = os.environ.get("OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5")
OPENWEATHER_TIMEOUT = float(os.environ.get("OPENWEATHER_TIMEOUT", "10"))

GEOLOCATION_MODE = os.environ.get("GEOLOCATION_MODE", "ip")
GEOLOCATION_URL = os.environ.get("GEOLOCATION_URL", "https://ipapi.co/json/")
GEOLOCATION_LAT = os.environ.get("GEOLOCATION_LAT")
GEOLOCATION_LON = os.environ.get("GEOLOCATION_LON")
GEOLOCATION_TIMEOUT = float(os.environ.get("GEOLOCATION_TIMEOUT", "10"))

if GEOLOCATION_MODE not in {"ip", "static", "none"}:
    raise ImproperlyConfigured(f"Unsupported GEOLOCATION_MODE {GEOLOCATION_MODE!r}")
if GEOLOCATION_MODE == "static" and (GEOLOCATION_LAT is None or GEOLOCATION_LON is None):
    raise ImproperlyConfigured("GEOLOCATION_LAT and GEOLOCATION_LON are required in static mode")

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

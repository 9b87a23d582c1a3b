from .base import *

DEBUG = False

ALLOWED_HOSTS = ["testserver", "127.0.0.1", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Pas de manifest whitenoise pendant les tests
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

QUERY_LIMITS_SOURCE = "database"
QUERY_LIMITS_DEFAULTS = {
    "query_timeout": "1m",
    "max_query_lookback": "0s",
    "max_query_length": "721h",
    "max_entries_limit_per_query": 5000,
}
QUERY_LIMITS_TENANT_OVERRIDES = {}

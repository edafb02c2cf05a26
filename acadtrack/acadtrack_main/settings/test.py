# acadtrack_main/settings/test.py

from .base import *

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

ROUTE_GUARD_DEFAULT_POLICY = "allow"

LOGGING["loggers"]["acadtrack"]["level"] = "WARNING"

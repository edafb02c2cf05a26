# acadtrack_main/settings/production.py

from .base import *
from decouple import config, Csv

DEBUG = False

ALLOWED_HOSTS = config("DJANGO_ALLOWED_HOSTS", cast=Csv())

SECRET_KEY = config("SECRET_KEY")
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Security settings for production
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

CSRF_TRUSTED_ORIGINS = config("CSRF_TRUSTED_ORIGINS", cast=Csv(), default="")

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = config("CORS_ALLOWED_ORIGINS", cast=Csv(), default="")

LOGGING["root"] = {"handlers": ["console"], "level": "INFO"}

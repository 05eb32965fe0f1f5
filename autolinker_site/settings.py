"""
Django settings for autolinker_site.

The project hosts the autolinker app, which stores page SEO metadata and the
internal links generated for each page. It has no HTTP surface of its own;
the settings cover the database, logging and the linking engine.

Please consult the Django documentation for additional configuration
options: https://docs.djangoproject.com/en/4.2/ref/settings/
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from urllib.parse import parse_qs, unquote, urlparse

from django.core.exceptions import ImproperlyConfigured

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-change-me')

DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() == 'true'

RUNNING_TESTS = os.getenv('PYTEST_CURRENT_TEST') is not None or 'pytest' in sys.modules
if RUNNING_TESTS:
    DEBUG = True

if not DEBUG and SECRET_KEY == 'django-insecure-change-me' and not RUNNING_TESTS:
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set when DEBUG is False.')

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'autolinker',
]

# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases

_DATABASE_ENGINES = {
    'postgres': 'django.db.backends.postgresql',
    'postgresql': 'django.db.backends.postgresql',
    'mysql': 'django.db.backends.mysql',
    'mariadb': 'django.db.backends.mysql',
    'sqlite': 'django.db.backends.sqlite3',
}


def _database_config_from_url(url: str, *, conn_max_age: int, sqlite_default: Path) -> dict[str, object]:
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    engine = _DATABASE_ENGINES.get(scheme)
    if engine is None:
        raise ImproperlyConfigured(f'Unsupported DATABASE_URL scheme: {scheme}')

    name = unquote(parsed.path.lstrip('/'))
    if scheme == 'sqlite':
        candidate = Path(name) if name else sqlite_default
        if not candidate.is_absolute():
            candidate = (sqlite_default.parent / candidate).resolve()
        name = str(candidate)

    config: dict[str, object] = {
        'ENGINE': engine,
        'NAME': name,
        'CONN_MAX_AGE': conn_max_age,
    }
    if parsed.username:
        config['USER'] = unquote(parsed.username)
    if parsed.password:
        config['PASSWORD'] = unquote(parsed.password)
    if parsed.hostname:
        config['HOST'] = parsed.hostname
    if parsed.port:
        config['PORT'] = str(parsed.port)

    options = {key: values[-1] for key, values in parse_qs(parsed.query).items() if values}
    if options:
        config['OPTIONS'] = options
    return config


default_sqlite_path = BASE_DIR / 'db.sqlite3'
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': default_sqlite_path,
    }
}

database_url = os.getenv('DATABASE_URL')
if database_url:
    DATABASES['default'] = _database_config_from_url(
        database_url,
        conn_max_age=int(os.getenv('DATABASE_CONN_MAX_AGE', '600')),
        sqlite_default=default_sqlite_path,
    )

# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Internal linking engine
AUTOLINKER_CONFIG_PATH = os.getenv('AUTOLINKER_CONFIG_PATH') or None
AUTOLINKER_BASE_URL = os.getenv('AUTOLINKER_BASE_URL', 'https://example.com')


log_level = os.getenv('DJANGO_LOG_LEVEL', 'INFO').upper()
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': log_level,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
        'autolinker': {
            'level': os.getenv('AUTOLINKER_LOG_LEVEL', log_level).upper(),
        },
    },
}

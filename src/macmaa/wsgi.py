"""WSGI config for the MACMAA backend."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "macmaa.settings")

application = get_wsgi_application()

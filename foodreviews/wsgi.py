"""WSGI config for the foodreviews project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "foodreviews.settings")

application = get_wsgi_application()

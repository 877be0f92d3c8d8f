"""
WSGI config for the VibeRyt license service.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "viberyt.settings.dev")

application = get_wsgi_application()

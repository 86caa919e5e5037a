# prime_motors/wsgi.py
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "prime_motors.settings")

application = get_wsgi_application()

"""
runserver that listens on settings.PORT unless an address is given.

    python manage.py runserver            → 0.0.0.0:$PORT (default 3000)
    python manage.py runserver 8080       → 0.0.0.0:8080
"""

import logging

from django.conf import settings
from django.core.management.commands.runserver import Command as BaseRunserverCommand

logger = logging.getLogger(__name__)


class Command(BaseRunserverCommand):
    default_addr = '0.0.0.0'
    default_port = str(settings.PORT)

    def inner_run(self, *args, **options):
        logger.info("EMI Calculator backend running on port %s", self.port)
        logger.info("API base URL: http://localhost:%s", self.port)
        super().inner_run(*args, **options)

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class CalculationsConfig(AppConfig):
    """
    Owns the process-wide calculation history.

    The store is built once when Django finishes loading and is handed
    to the views; nothing needs tearing down since it lives in memory.
    """

    name = 'apps.calculations'
    label = 'calculations'

    store = None

    def ready(self):
        from apps.calculations.history import HistoryStore

        self.store = HistoryStore()
        if settings.HISTORY_SEED_SAMPLE:
            self.store.seed_sample()

        logger.info(
            "Calculation history ready (capacity=%d, records=%d)",
            self.store.capacity,
            len(self.store),
        )

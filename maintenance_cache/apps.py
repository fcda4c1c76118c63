from django.apps.config import AppConfig


class MaintenanceCacheConfig(AppConfig):
    name = "maintenance_cache"
    verbose_name = "Maintenance cache backend"

    def ready(self):
        from . import signals  # NOQA

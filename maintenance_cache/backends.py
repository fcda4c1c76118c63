from maintenance_mode.backends import AbstractStateBackend

from maintenance_cache.maintenance import get_maintenance_mode


class CacheFallbackStateBackend(AbstractStateBackend):
    """
    django-maintenance-mode state backend that stores the flag in the
    maintenance cache and falls back to the local state file.

    Enable with::

        MAINTENANCE_MODE_STATE_BACKEND = (
            "maintenance_cache.backends.CacheFallbackStateBackend"
        )
    """

    def get_value(self):
        return get_maintenance_mode().is_enabled()

    def set_value(self, value):
        get_maintenance_mode().set(bool(value))

from django.core.signals import setting_changed
from django.dispatch import receiver

from maintenance_cache.maintenance import get_maintenance_mode

RESET_SETTINGS = {
    "CACHES",
    "MAINTENANCE_CACHE_ALIAS",
    "MAINTENANCE_MODE_STATE_FILE_PATH",
    "MAINTENANCE_CACHE_ADDRESSES_FILE_PATH",
}


@receiver(setting_changed)
def reset_maintenance_mode(sender, setting, **kwargs):
    # The cache handle is only read once, so rebuild it when tests override
    # the settings it came from
    if setting in RESET_SETTINGS:
        get_maintenance_mode.cache_clear()

from collections.abc import Mapping
from typing import Any, Optional

from django.conf import settings
from django.core.cache.backends.base import BaseCache
from django.utils.module_loading import import_string

from maintenance_cache.logging import MaintenanceLogger

structured_logger = MaintenanceLogger.get_logger(__name__)

DEFAULT_CACHE_ALIAS = "maintenance"
KEY_FUNCTION = "maintenance_cache.cache.make_key"


def make_key(key: str, key_prefix: str, version: Any) -> str:
    """
    Cache key function that stores maintenance keys verbatim.

    Django normally namespaces keys as ``prefix:version:key``. The maintenance
    keys are a stable contract inspected directly on the backend, so the
    prefix and version are ignored.
    """
    return key


class MaintenanceCache:
    """
    Thin handle around a Django cache backend.

    Exposes the three primitives the maintenance state store needs: ``load``,
    ``save`` (which reports success) and ``remove``.
    """

    def __init__(self, backend: BaseCache):
        self.backend = backend

    def load(self, key: str) -> Optional[Any]:
        return self.backend.get(key)

    def save(self, payload: Any, key: str) -> bool:
        # set_many reports the keys it failed to insert, which set() does not
        failed_keys = self.backend.set_many({key: payload}, timeout=None)
        return not failed_keys

    def remove(self, key: str) -> None:
        self.backend.delete(key)


def get_cache_config() -> Optional[Mapping[str, Any]]:
    """
    Return the configuration block for the maintenance cache, if any.

    The block is the ``CACHES`` entry named by ``MAINTENANCE_CACHE_ALIAS``
    (``"maintenance"`` by default).
    """
    alias = getattr(settings, "MAINTENANCE_CACHE_ALIAS", DEFAULT_CACHE_ALIAS)
    return getattr(settings, "CACHES", {}).get(alias)


def initialize_cache(config: Optional[Mapping[str, Any]]) -> Optional[MaintenanceCache]:
    """
    Build the maintenance cache handle from a configuration block.

    Initialization is best-effort: a missing block or a block without a
    ``BACKEND`` yields ``None`` silently, and any error raised while building
    the backend is logged as a warning and also yields ``None``. Callers then
    fail with ``CacheUnavailableError`` on first use.

    Args:
        config (Optional[Mapping[str, Any]]): A Django ``CACHES``-style entry.
            ``BACKEND`` selects the backend class, everything else is passed
            to it as options.

    Returns:
        Optional[MaintenanceCache]: The handle, or ``None`` if unavailable.
    """
    if not isinstance(config, Mapping) or not config.get("BACKEND"):
        return None

    try:
        params = dict(config)
        backend_path = params.pop("BACKEND")
        location = params.pop("LOCATION", "")
        params.setdefault("KEY_FUNCTION", KEY_FUNCTION)
        backend_cls = import_string(backend_path)
        return MaintenanceCache(backend_cls(location, params))
    except Exception as exc:
        structured_logger.warning(
            "Failed to initialize maintenance cache, falling back to filesystem.",
            event_code="maintenance_cache_init_failed",
            reason=str(exc) or exc.__class__.__name__,
            reason_code="cache_init_failed",
            backend=config.get("BACKEND"),
        )
        return None

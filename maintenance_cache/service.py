from typing import Any, Optional, Sequence

from maintenance_cache.cache import MaintenanceCache, get_cache_config, initialize_cache
from maintenance_cache.exceptions import (
    CacheUnavailableError,
    DeserializationError,
    StorageError,
)
from maintenance_cache.serializers import JsonSerializer

CACHE_KEY_PREFIX = "MAINTENANCE_MODE_"
CACHE_KEY_STATUS = "STATUS"
CACHE_KEY_ADDRESSES = "ADDRESSES"


def get_cache_key(suffix: str) -> str:
    return CACHE_KEY_PREFIX + suffix


class CacheMaintenanceService:
    """
    Stores the maintenance flag and the address allow-list in a cache backend.

    The cache handle is computed once, before construction, and never rebuilt.
    When it is ``None`` every operation raises ``CacheUnavailableError``.
    Errors are always raised to the caller; deciding what to do about them is
    left to ``maintenance_cache.maintenance.CacheMaintenanceMode``.
    """

    def __init__(
        self,
        cache: Optional[MaintenanceCache],
        serializer: Optional[JsonSerializer] = None,
    ):
        self.cache = cache
        self.serializer = serializer or JsonSerializer()

    @classmethod
    def from_settings(cls) -> "CacheMaintenanceService":
        """
        Build a service from the ``CACHES`` entry for the maintenance alias.
        """
        return cls(initialize_cache(get_cache_config()))

    def is_maintenance_enabled(self) -> bool:
        """
        Return the stored maintenance flag.

        Raises:
            CacheUnavailableError: If no cache handle is configured.
            DeserializationError: If the flag is absent or not a boolean.
        """
        key = get_cache_key(CACHE_KEY_STATUS)
        status = self._get_cache_data(key)
        if not isinstance(status, bool):
            raise DeserializationError(
                f"Unexpected maintenance status for key: {key}", key=key
            )
        return status

    def set_maintenance_mode(self, is_on: bool) -> None:
        """
        Store the maintenance flag.

        Raises:
            CacheUnavailableError: If no cache handle is configured.
            StorageError: If the backend did not store the value.
        """
        self._set_cache_data(get_cache_key(CACHE_KEY_STATUS), bool(is_on))

    def get_maintenance_addresses(self) -> list[str]:
        """
        Return the stored address allow-list, in the order it was stored.

        Raises:
            CacheUnavailableError: If no cache handle is configured.
            DeserializationError: If the list is absent or malformed.
        """
        key = get_cache_key(CACHE_KEY_ADDRESSES)
        addresses = self._get_cache_data(key)
        if not isinstance(addresses, list) or not all(
            isinstance(address, str) for address in addresses
        ):
            raise DeserializationError(
                f"Unexpected maintenance addresses for key: {key}", key=key
            )
        return addresses

    def set_maintenance_addresses(self, addresses: Sequence[str]) -> None:
        """
        Replace the address allow-list.

        An empty sequence removes the key instead of storing an empty list.

        Raises:
            CacheUnavailableError: If no cache handle is configured.
            StorageError: If the backend did not store the value.
        """
        key = get_cache_key(CACHE_KEY_ADDRESSES)
        if addresses:
            self._set_cache_data(key, list(addresses))
        else:
            self._remove_cache_data(key)

    def _get_handle(self, key: str) -> MaintenanceCache:
        if self.cache is None:
            raise CacheUnavailableError(f"Cache not available for key: {key}", key=key)
        return self.cache

    def _set_cache_data(self, key: str, data: Any) -> None:
        cache = self._get_handle(key)
        payload = self.serializer.serialize(data)
        if not cache.save(payload, key):
            raise StorageError(f"Failed to save data to cache for key: {key}", key=key)

    def _get_cache_data(self, key: str) -> Any:
        cache = self._get_handle(key)
        payload = cache.load(key)
        try:
            return self.serializer.unserialize(payload)
        except DeserializationError as exc:
            exc.key = key
            raise

    def _remove_cache_data(self, key: str) -> None:
        self._get_handle(key).remove(key)

import functools

from maintenance_cache.fallback import FilesystemMaintenanceMode
from maintenance_cache.logging import MaintenanceLogger
from maintenance_cache.service import CacheMaintenanceService

structured_logger = MaintenanceLogger.get_logger(__name__)


def parse_addresses(addresses: str) -> list[str]:
    """
    Split a comma-separated address string into trimmed entries.

    An empty string yields an empty list rather than ``[""]``.
    """
    if not addresses:
        return []
    return [address.strip() for address in addresses.split(",")]


def _reason_code(exc: Exception) -> str:
    return getattr(exc, "reason_code", "unexpected_error")


def _reason(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


class CacheMaintenanceMode:
    """
    Maintenance mode backed by the cache, falling back to the filesystem.

    Each operation tries ``CacheMaintenanceService`` once. If it raises
    anything, one warning is logged and the same operation is delegated to
    the fallback with the original arguments. Errors raised by the fallback
    are not caught.
    """

    def __init__(self, service, fallback, logger=None):
        self.service = service
        self.fallback = fallback
        self.logger = logger or structured_logger

    def is_enabled(self) -> bool:
        """
        Return the maintenance flag alone, without consulting the allow-list.
        """
        try:
            return self.service.is_maintenance_enabled()
        except Exception as exc:
            self.logger.warning(
                "Cache maintenance status check failed, falling back to filesystem.",
                event_code="maintenance_cache_status_failed",
                reason=_reason(exc),
                reason_code=_reason_code(exc),
            )

        return self.fallback.is_enabled()

    def is_on(self, remote_addr: str = "") -> bool:
        """
        Return True if maintenance applies to ``remote_addr``.

        Maintenance applies when the flag is enabled and the address is not
        in the allow-list. The allow-list is only read when the flag is on.
        """
        try:
            if not self.service.is_maintenance_enabled():
                return False
            return remote_addr not in self.service.get_maintenance_addresses()
        except Exception as exc:
            self.logger.warning(
                "Cache maintenance check failed, falling back to filesystem.",
                event_code="maintenance_cache_check_failed",
                reason=_reason(exc),
                reason_code=_reason_code(exc),
                remote_addr=remote_addr,
            )

        return self.fallback.is_on(remote_addr)

    def set(self, is_on: bool) -> None:
        try:
            self.service.set_maintenance_mode(is_on)
            return
        except Exception as exc:
            self.logger.warning(
                "Cache maintenance set failed, falling back to filesystem.",
                event_code="maintenance_cache_set_failed",
                reason=_reason(exc),
                reason_code=_reason_code(exc),
                maintenance_mode=is_on,
            )

        self.fallback.set(is_on)

    def get_address_info(self) -> list[str]:
        try:
            return self.service.get_maintenance_addresses()
        except Exception as exc:
            self.logger.warning(
                "Cache address info retrieval failed, falling back to filesystem.",
                event_code="maintenance_cache_addresses_failed",
                reason=_reason(exc),
                reason_code=_reason_code(exc),
            )

        return self.fallback.get_address_info()

    def set_addresses(self, addresses: str) -> None:
        try:
            self.service.set_maintenance_addresses(parse_addresses(addresses))
            return
        except Exception as exc:
            self.logger.warning(
                "Cache address setting failed, falling back to filesystem.",
                event_code="maintenance_cache_set_addresses_failed",
                reason=_reason(exc),
                reason_code=_reason_code(exc),
                addresses=addresses,
            )

        self.fallback.set_addresses(addresses)


@functools.lru_cache(maxsize=None)
def get_maintenance_mode() -> CacheMaintenanceMode:
    """
    Return the process-wide maintenance mode, built once from settings.
    """
    return CacheMaintenanceMode(
        CacheMaintenanceService.from_settings(), FilesystemMaintenanceMode()
    )

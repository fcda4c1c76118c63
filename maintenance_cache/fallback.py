import os

from django.conf import settings
from django.core.validators import validate_ipv46_address
from maintenance_mode.backends import LocalFileBackend

ADDRESSES_FILE_NAME = "maintenance_mode_addresses.txt"


def get_addresses_file_path() -> str:
    path = getattr(settings, "MAINTENANCE_CACHE_ADDRESSES_FILE_PATH", None)
    if path:
        return path
    state_dir = os.path.dirname(settings.MAINTENANCE_MODE_STATE_FILE_PATH)
    return os.path.join(state_dir, ADDRESSES_FILE_NAME)


class FilesystemMaintenanceMode:
    """
    File-based maintenance state used when the cache is unavailable.

    The flag goes through django-maintenance-mode's ``LocalFileBackend``;
    the allow-list is kept as comma-separated text in a sibling file.
    Errors are not caught here.
    """

    def __init__(self, state_backend=None):
        self.state_backend = state_backend or LocalFileBackend()

    def is_enabled(self) -> bool:
        return bool(self.state_backend.get_value())

    def is_on(self, remote_addr: str = "") -> bool:
        if not self.is_enabled():
            return False
        return remote_addr not in self.get_address_info()

    def set(self, is_on: bool) -> None:
        self.state_backend.set_value(bool(is_on))

    def get_address_info(self) -> list[str]:
        path = get_addresses_file_path()
        if not os.path.exists(path):
            return []
        with open(path, "r", encoding="utf-8") as f:
            content = f.read().strip()
        if not content:
            return []
        return content.split(",")

    def set_addresses(self, addresses: str) -> None:
        """
        Replace the allow-list from a comma-separated string.

        An empty string removes the file.

        Raises:
            django.core.exceptions.ValidationError: If any entry is not a
                valid IPv4 or IPv6 address.
        """
        path = get_addresses_file_path()
        if not addresses:
            if os.path.exists(path):
                os.remove(path)
            return

        address_list = [address.strip() for address in addresses.split(",")]
        for address in address_list:
            validate_ipv46_address(address)

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(",".join(address_list))

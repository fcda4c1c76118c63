from django.http import HttpRequest
from maintenance_mode.http import (
    need_maintenance_response as base_need_maintenance_response,
)

from maintenance_cache.maintenance import get_maintenance_mode
from maintenance_cache.utils import get_client_ip_address


def need_maintenance_response(request: HttpRequest) -> bool:
    """
    Decide whether ``request`` should get the maintenance response.

    django-maintenance-mode reads the flag through the state backend and
    applies its ignore rules (URLs, admin, staff, and so on). When it asks
    for a maintenance response, the client address is checked against the
    stored allow-list; allow-listed addresses are let through.

    The flag is already known to be on at that point, so only the allow-list
    is read here. Going through ``is_on`` would re-read the flag and, with no
    allow-list key in the cache, take it from the filesystem instead.
    """
    if not base_need_maintenance_response(request):
        return False

    address_list = get_maintenance_mode().get_address_info()
    return get_client_ip_address(request) not in address_list

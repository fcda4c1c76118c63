from typing import Any, Optional

from django.conf import settings
from django.http import HttpRequest
from django.utils.module_loading import import_string


def get_logging_user_id(user: Any) -> str:
    """
    Return a consistent identifier for logging purposes.

    Args:
        user (Any): A Django user object (possibly anonymous).

    Returns:
        user_id (str): User's ID or "anonymous" if unauthenticated or the user
                         has no ID.
    """
    if not getattr(user, "is_authenticated", False):
        return "anonymous"

    user_id = getattr(user, "id", None)
    if user_id is None:
        return "anonymous"

    return str(user_id)


def get_client_ip_address(request: HttpRequest) -> str:
    """
    Return the address used for allow-list checks.

    If ``MAINTENANCE_MODE_GET_CLIENT_IP_ADDRESS`` names a callable (either as
    a dotted path or directly), it is used to extract the address. Otherwise
    the address is read from ``REMOTE_ADDR``.

    Args:
        request (HttpRequest): The current request.

    Returns:
        str: The client address, or an empty string if none is known.
    """
    getter = getattr(settings, "MAINTENANCE_MODE_GET_CLIENT_IP_ADDRESS", None)
    if getter:
        if isinstance(getter, str):
            getter = import_string(getter)
        address: Optional[str] = getter(request)
    else:
        address = request.META.get("REMOTE_ADDR")

    return address or ""

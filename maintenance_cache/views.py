from time import time

from django.http import HttpRequest, HttpResponseRedirect

from maintenance_cache.logging import MaintenanceLogger
from maintenance_cache.maintenance import get_maintenance_mode

structured_logger = MaintenanceLogger.get_logger(__name__)


def _redirect_to_root() -> HttpResponseRedirect:
    # Cache busting so the maintenance banner is always displayed/removed
    return HttpResponseRedirect("/?t={}".format(int(time())))


def maintenance_mode_off(request: HttpRequest) -> HttpResponseRedirect:
    """
    Deactivates maintenance mode and redirects to the site root.

    Only superusers are allowed to use this view. If the requesting user is not a
    superuser, no change is made to the system state.

    Returns:
        HttpResponseRedirect: Redirect to the root path with a timestamp parameter
        used for cache busting.
    """
    if request.user.is_superuser:
        get_maintenance_mode().set(False)
        structured_logger.info(
            "Maintenance mode deactivated.",
            event_code="maintenance_mode_off",
            request=request,
        )

    return _redirect_to_root()


def maintenance_mode_on(request: HttpRequest) -> HttpResponseRedirect:
    """
    Activates maintenance mode and redirects to the site root.

    Only superusers are allowed to use this view. If the requesting user is not a
    superuser, no change is made to the system state.
    """
    if request.user.is_superuser:
        get_maintenance_mode().set(True)
        structured_logger.info(
            "Maintenance mode activated.",
            event_code="maintenance_mode_on",
            request=request,
        )

    return _redirect_to_root()

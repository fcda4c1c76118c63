from django.urls import path

from . import views

urlpatterns = [
    path(
        "maintenance-mode/off/",
        views.maintenance_mode_off,
        name="maintenance_mode_off",
    ),
    path(
        "maintenance-mode/on/",
        views.maintenance_mode_on,
        name="maintenance_mode_on",
    ),
]

from types import MappingProxyType
from typing import Any, Callable, Optional

import structlog

from maintenance_cache.utils import get_logging_user_id

# Global registry for semantic context extractors
_EXTRACTORS: dict[str, Callable[[Any], dict[str, Any]]] = {}


def _register_extractor(
    context_key: str, extractor_function: Callable[[Any], dict[str, Any]]
):
    _EXTRACTORS[context_key] = extractor_function


# The request extractor chains to the user extractor, so user comes first
_register_extractor("user", lambda user: {"user_id": get_logging_user_id(user)})

_register_extractor(
    "request",
    lambda request: {
        **_EXTRACTORS["user"](getattr(request, "user", None)),
        "remote_addr": getattr(request, "META", {}).get("REMOTE_ADDR"),
        "path": getattr(request, "path", None),
    },
)

# Freeze extractors to prevent mutation
_EXTRACTORS = MappingProxyType(_EXTRACTORS)


class MaintenanceLogger:
    """
    A structured logging wrapper around structlog that enforces consistent logging
    conventions across the maintenance cache application.

    Features:
        - Requires 'message' and 'event_code' for all logs, and 'reason'/'reason_code'
          for warnings.
        - Automatically extracts common context from request and user objects.

    Usage:
    -----

    Create a logger:
        ```python
        structured_logger = MaintenanceLogger.get_logger(__name__)
        ```

    Log a warning with reason:
        ```python
        structured_logger.warning(
            "Cache maintenance set failed, falling back to filesystem.",
            event_code="maintenance_cache_set_failed",
            reason=str(exc),
            reason_code="storage_failure",
            maintenance_mode=True,
        )
        ```

    Special Context Expansion:
    --------------------------

    - `user` -> `user_id`
    - `request` -> `user_id`, `remote_addr`, `path`

    Explicit values passed (e.g., `remote_addr=...`) override extracted ones. Fields
    with `None` values are omitted from the final log output.
    """

    def __init__(self, logger):
        self._logger = logger

    @classmethod
    def get_logger(cls, name: str) -> "MaintenanceLogger":
        """
        Factory method to create a MaintenanceLogger from a given module name.

        Args:
            name (str): The module name; the structlog logger is named
                f"structlog.{name}".

        Returns:
            MaintenanceLogger: A logger instance with enriched behavior.
        """
        return cls(structlog.get_logger(f"structlog.{name}"))

    def log(
        self,
        level: str,
        message: str,
        *,
        event_code: str,
        reason: Optional[str] = None,
        reason_code: Optional[str] = None,
        **context: Any,
    ) -> None:
        """
        Emit structured logs with standardized context. Use ``info`` or
        ``warning`` rather than calling this directly.

        Raises:
            ValueError: If required fields are missing for the given log level.
        """
        if not message:
            raise ValueError("Log message is required.")
        if not event_code:
            raise ValueError("Structured logs must include an 'event_code' field.")
        if level == "warning" and (not reason or not reason_code):
            raise ValueError("Warnings must include both 'reason' and 'reason_code'.")

        context_data = {"event_code": event_code}
        if reason:
            context_data["reason"] = reason
        if reason_code:
            context_data["reason_code"] = reason_code

        for context_key, extractor_function in _EXTRACTORS.items():
            context_object = context.pop(context_key, None)
            if context_object:
                for key, value in extractor_function(context_object).items():
                    if value is not None:
                        context_data.setdefault(key, value)

        # Explicit values win over extracted ones
        for key, value in context.items():
            if value is not None:
                context_data[key] = value

        getattr(self._logger, level)(message, **context_data)

    def info(self, message: str, *, event_code: str, **kwargs):
        """Emit an info-level structured log."""
        self.log("info", message, event_code=event_code, **kwargs)

    def warning(
        self, message: str, *, event_code: str, reason: str, reason_code: str, **kwargs
    ):
        """Emit a warning-level structured log. Requires reason and reason_code."""
        self.log(
            "warning",
            message,
            event_code=event_code,
            reason=reason,
            reason_code=reason_code,
            **kwargs,
        )

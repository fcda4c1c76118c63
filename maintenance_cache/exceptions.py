# Each error carries a reason_code so structured logs and tests can tell
# the root cause apart even though callers handle them all the same way
class MaintenanceStateError(Exception):
    reason_code = "maintenance_state_error"

    def __init__(self, message, key=None):
        super().__init__(message)
        self.key = key


class CacheUnavailableError(MaintenanceStateError):
    reason_code = "cache_unavailable"


class StorageError(MaintenanceStateError):
    reason_code = "storage_failure"


class DeserializationError(MaintenanceStateError):
    reason_code = "deserialization_failure"

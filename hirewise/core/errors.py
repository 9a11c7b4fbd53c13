"""
Domain errors.

Every failure the core can signal to its callers. The outer layer
(API, CLI, workers) maps `status_code` to a user-visible response;
only `ConcurrencyConflictError` is marked retryable.
"""


class HirewiseError(Exception):
    """Base class for all core errors."""

    status_code = 400
    retryable = False

    def __init__(self, message: str, rule: str | None = None):
        super().__init__(message)
        self.message = message
        self.rule = rule

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "rule": self.rule,
            "message": self.message,
            "retryable": self.retryable,
        }


class ValidationError(HirewiseError):
    """Malformed or incomplete payload (e.g. missing offer fields)."""

    def __init__(self, message: str, rule: str | None = "missing-payload", errors: list | None = None):
        super().__init__(message, rule)
        self.errors = errors or []


class InvalidTransitionError(HirewiseError):
    """Requested status is not adjacent to the current one."""

    def __init__(self, message: str, rule: str | None = "invalid-transition"):
        super().__init__(message, rule)


class PermissionDeniedError(HirewiseError):
    """Actor role may not request this status."""

    status_code = 403

    def __init__(self, message: str, rule: str | None = "insufficient-role"):
        super().__init__(message, rule)


class NotFoundError(HirewiseError):
    """Entity, job or profile missing from the store."""

    status_code = 404

    def __init__(self, entity_kind: str, entity_id: str):
        super().__init__(f"{entity_kind} not found with id of {entity_id}", "not-found")
        self.entity_kind = entity_kind
        self.entity_id = entity_id


class ConcurrencyConflictError(HirewiseError):
    """Stored version no longer matches the version that was read."""

    status_code = 409
    retryable = True

    def __init__(self, entity_kind: str, entity_id: str, expected_version: int):
        super().__init__(
            f"{entity_kind} {entity_id} was modified concurrently "
            f"(expected version {expected_version})",
            "version-conflict",
        )
        self.entity_kind = entity_kind
        self.entity_id = entity_id
        self.expected_version = expected_version


class ConfigurationError(HirewiseError):
    """Thresholds or weight tables are inconsistent."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, "invalid-configuration")

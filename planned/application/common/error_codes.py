"""Stable error codes returned by use cases and the HTTP layer."""


class ErrorCodes:
    # Generic
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    DATABASE_ERROR = "DATABASE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    # Asana
    ASANA_NOT_CONNECTED = "ASANA_NOT_CONNECTED"
    ASANA_TOKEN_EXPIRED = "ASANA_TOKEN_EXPIRED"
    ASANA_API_ERROR = "ASANA_API_ERROR"
    ASANA_NO_WORKSPACE = "ASANA_NO_WORKSPACE"

    # TimeTac
    TIMETAC_NOT_CONNECTED = "TIMETAC_NOT_CONNECTED"
    TIMETAC_INVALID_API_KEY = "TIMETAC_INVALID_API_KEY"
    TIMETAC_API_ERROR = "TIMETAC_API_ERROR"

    # Sync
    SYNC_ERROR = "SYNC_ERROR"
    SYNC_IN_PROGRESS = "SYNC_IN_PROGRESS"

    # Projects and phases
    NOT_LINKED = "NOT_LINKED"
    UNLINK_PROJECT_FAILED = "UNLINK_PROJECT_FAILED"
    PHASE_NOT_FOUND = "PHASE_NOT_FOUND"

    # Absence conflicts
    CONFLICT_NOT_FOUND = "CONFLICT_NOT_FOUND"
    CONFLICT_ALREADY_RESOLVED = "CONFLICT_ALREADY_RESOLVED"
    NEW_DATE_REQUIRED = "NEW_DATE_REQUIRED"
    INVALID_RESOLUTION = "INVALID_RESOLUTION"
    RESOLVE_CONFLICT_FAILED = "RESOLVE_CONFLICT_FAILED"

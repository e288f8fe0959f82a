"""
Domain Exceptions

Typed errors for the planning and integration domain. Every error carries an
``ErrorType`` discriminator plus a stable string ``code`` so that API layers
and sync logs can report failures without inspecting message text.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    NOT_FOUND = "not_found"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    REPOSITORY = "repository"
    EXTERNAL_SERVICE = "external_service"
    ENCRYPTION = "encryption"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        self.code = code or error_type.value.upper()

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when user input or domain validation rules are violated."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        details = details or {}
        details.update(
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
                "error_code": self.error_code,
            }
        )

        super().__init__(message, ErrorType.VALIDATION, details, self.error_code)


class BusinessRuleError(DomainError):
    """Raised when business rules are violated."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.BUSINESS_RULE, details)


class EntityNotFoundError(DomainError):
    """Raised when an entity cannot be found."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        details = {"entity_type": entity_type, "entity_id": str(entity_id)}
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            ErrorType.NOT_FOUND,
            details,
            "NOT_FOUND",
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class AuthorizationError(DomainError):
    """Raised when a tenant tries to act on data it does not own."""

    def __init__(self, message: str = "Keine Berechtigung") -> None:
        super().__init__(message, ErrorType.AUTHORIZATION, code="UNAUTHORIZED")


class ConflictError(DomainError):
    """Raised when an operation collides with existing state."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.CONFLICT, details, "CONFLICT")


class RepositoryError(DomainError):
    """Raised when repository operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        repo_details = details or {}
        if operation:
            repo_details["operation"] = operation
        super().__init__(message, ErrorType.REPOSITORY, repo_details, "DATABASE_ERROR")
        self.operation = operation


class EncryptionError(DomainError):
    """Raised when a stored secret cannot be encrypted or decrypted."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.ENCRYPTION, code="ENCRYPTION_ERROR")


# External service exceptions
class ExternalServiceError(DomainError):
    """Raised when a remote service call fails."""

    def __init__(
        self,
        message: str,
        service_name: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        service_details = details or {}
        service_details["service"] = service_name
        if status_code is not None:
            service_details["status_code"] = status_code
        super().__init__(
            message,
            ErrorType.EXTERNAL_SERVICE,
            service_details,
            code or "EXTERNAL_SERVICE_ERROR",
        )
        self.service_name = service_name
        self.status_code = status_code


class AsanaApiError(ExternalServiceError):
    """Non-success response from the Asana API."""

    def __init__(
        self, message: str, status_code: int | None = None, code: str = "ASANA_API_ERROR"
    ) -> None:
        super().__init__(message, "asana", status_code, code)


class TimeTacApiError(ExternalServiceError):
    """Non-success response from the TimeTac API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str = "TIMETAC_API_ERROR",
    ) -> None:
        super().__init__(message, "timetac", status_code, code)


class TokenExpiredError(AsanaApiError):
    """Asana rejected the access token (HTTP 401)."""

    def __init__(self, message: str = "Asana Access Token ist abgelaufen") -> None:
        super().__init__(message, 401, "ASANA_TOKEN_EXPIRED")


class InvalidApiKeyError(TimeTacApiError):
    """TimeTac rejected the API key (HTTP 401)."""

    def __init__(self, message: str = "Ungültiger TimeTac API-Key") -> None:
        super().__init__(message, 401, "TIMETAC_INVALID_API_KEY")


class RetryableHttpError(ExternalServiceError):
    """Transient HTTP failure (rate limit or server error) that may be retried."""

    def __init__(
        self,
        message: str,
        service_name: str,
        status_code: int | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, service_name, status_code, "EXTERNAL_SERVICE_RETRYABLE")
        self.retry_after = retry_after

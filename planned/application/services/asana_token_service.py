"""
Asana access token lifecycle.

Decrypts the stored access token and, when it has expired, exchanges the
refresh token for a new one and persists the result. The returned plaintext
token is what the caller uses for the rest of its run; credentials are not
re-read from storage afterwards.
"""

from datetime import timedelta

from ...core.observability import get_logger
from ...domain.planning.entities.integration_credentials import IntegrationCredentials
from ...domain.planning.repositories.credentials_repository import (
    IntegrationCredentialsRepository,
)
from ...domain.shared.base import utcnow
from ...domain.shared.exceptions import ExternalServiceError
from ..common.error_codes import ErrorCodes
from ..ports.asana_service import IAsanaService
from ..ports.encryption_service import IEncryptionService

logger = get_logger(__name__)

MSG_NOT_CONNECTED = "Asana ist nicht verbunden"
MSG_EXPIRED_NO_REFRESH = "Token abgelaufen und kein Refresh Token vorhanden"
MSG_REFRESH_FAILED = "Token-Erneuerung fehlgeschlagen. Bitte erneut verbinden."


class AsanaTokenUnavailableError(ExternalServiceError):
    """No usable Asana access token could be obtained."""

    def __init__(self, message: str, code: str = ErrorCodes.ASANA_TOKEN_EXPIRED) -> None:
        super().__init__(message, "asana", code=code)


class AsanaTokenService:
    """Provides a valid Asana access token for a tenant's credentials."""

    def __init__(
        self,
        asana_service: IAsanaService,
        credentials_repository: IntegrationCredentialsRepository,
        encryption_service: IEncryptionService,
    ) -> None:
        self._asana = asana_service
        self._credentials = credentials_repository
        self._encryption = encryption_service

    async def get_access_token(self, credentials: IntegrationCredentials) -> str:
        """
        Return a plaintext access token that is valid right now.

        Args:
            credentials: Stored (encrypted) credentials of the tenant

        Returns:
            Decrypted access token, refreshed and persisted if it had expired

        Raises:
            AsanaTokenUnavailableError: If Asana is not connected, the token
                expired without a refresh token, or the refresh failed
            EncryptionError: If a stored token cannot be decrypted
        """
        if not credentials.asana_access_token:
            raise AsanaTokenUnavailableError(MSG_NOT_CONNECTED, ErrorCodes.ASANA_NOT_CONNECTED)

        access_token = self._encryption.decrypt(credentials.asana_access_token)
        if not credentials.is_asana_token_expired():
            return access_token

        if not credentials.asana_refresh_token:
            raise AsanaTokenUnavailableError(MSG_EXPIRED_NO_REFRESH)

        refresh_token = self._encryption.decrypt(credentials.asana_refresh_token)
        try:
            tokens = await self._asana.refresh_access_token(refresh_token)
            fields = {
                "asana_access_token": self._encryption.encrypt(tokens.access_token),
                "asana_token_expires_at": (
                    utcnow() + timedelta(seconds=tokens.expires_in)
                    if tokens.expires_in
                    else None
                ),
            }
            if tokens.refresh_token:
                fields["asana_refresh_token"] = self._encryption.encrypt(tokens.refresh_token)

            await self._credentials.update(credentials.tenant_id, **fields)
        except Exception as e:
            logger.warning(
                "Asana token refresh failed",
                tenant_id=str(credentials.tenant_id),
                error=str(e),
            )
            raise AsanaTokenUnavailableError(MSG_REFRESH_FAILED) from e

        logger.info("Asana token refreshed and stored", tenant_id=str(credentials.tenant_id))
        return tokens.access_token

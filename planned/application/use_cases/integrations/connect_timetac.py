"""Connect a tenant to TimeTac with a static API key."""

from uuid import UUID

from ....core.observability import get_logger
from ....domain.planning.repositories.credentials_repository import (
    IntegrationCredentialsRepository,
)
from ....domain.shared.exceptions import ValidationError
from ...common.error_codes import ErrorCodes
from ...dtos.sync_dtos import ConnectTimeTacResult
from ...ports.encryption_service import IEncryptionService
from ...ports.timetac_service import ITimeTacService

logger = get_logger(__name__)


class ConnectTimeTacUseCase:
    """
    Validates an API key and stores it encrypted for the tenant.

    First-time setup action: an invalid key raises instead of returning a
    result, and no SyncLog is written.
    """

    def __init__(
        self,
        timetac_service: ITimeTacService,
        credentials_repository: IntegrationCredentialsRepository,
        encryption_service: IEncryptionService,
    ) -> None:
        self._timetac = timetac_service
        self._credentials = credentials_repository
        self._encryption = encryption_service

    async def execute(self, tenant_id: UUID, api_key: str) -> ConnectTimeTacResult:
        """
        Connect TimeTac for a tenant.

        Args:
            tenant_id: Tenant to connect
            api_key: Plaintext TimeTac API key

        Returns:
            Account id and name of the connected TimeTac account

        Raises:
            ValidationError: If TimeTac rejects the key
        """
        if not await self._timetac.validate_api_key(api_key):
            logger.info("TimeTac API key rejected", tenant_id=str(tenant_id))
            raise ValidationError(
                "api_key", None, "Ungültiger API-Key", ErrorCodes.TIMETAC_INVALID_API_KEY
            )

        account = await self._timetac.get_account(api_key)

        await self._credentials.upsert(
            tenant_id,
            timetac_api_token=self._encryption.encrypt(api_key),
            timetac_account_id=str(account.id),
        )
        logger.info("TimeTac connected", tenant_id=str(tenant_id), account_id=str(account.id))

        return ConnectTimeTacResult(account_id=str(account.id), account_name=account.name)

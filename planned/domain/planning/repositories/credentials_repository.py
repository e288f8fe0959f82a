"""
Integration credentials repository interface.

Defines the contract for persisting per-tenant integration credentials.
Token values passed through this interface are always ciphertext.
"""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from ..entities.integration_credentials import IntegrationCredentials


class IntegrationCredentialsRepository(ABC):
    """Abstract repository interface for IntegrationCredentials."""

    @abstractmethod
    async def find_by_tenant_id(self, tenant_id: UUID) -> IntegrationCredentials | None:
        """
        Get the credentials row of a tenant.

        Args:
            tenant_id: Tenant whose credentials are loaded

        Returns:
            Credentials if the tenant has connected any integration, None otherwise

        Raises:
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def upsert(self, tenant_id: UUID, **fields: Any) -> IntegrationCredentials:
        """
        Create the credentials row if missing, otherwise update the given fields.

        Args:
            tenant_id: Owning tenant
            **fields: Credential attributes to set

        Returns:
            The stored credentials

        Raises:
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def update(self, tenant_id: UUID, **fields: Any) -> IntegrationCredentials:
        """
        Update fields of existing credentials.

        Raises:
            EntityNotFoundError: If the tenant has no credentials
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def clear_asana(self, tenant_id: UUID) -> None:
        """Remove every Asana token and field id of a tenant."""
        pass

    @abstractmethod
    async def clear_timetac(self, tenant_id: UUID) -> None:
        """Remove the TimeTac key and account id of a tenant."""
        pass

    @abstractmethod
    async def find_tenant_ids_with_asana(self) -> list[UUID]:
        """Tenants that have an Asana access token stored."""
        pass

    @abstractmethod
    async def find_tenant_ids_with_timetac(self) -> list[UUID]:
        """Tenants that have a TimeTac API key stored."""
        pass

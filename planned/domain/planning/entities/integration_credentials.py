"""Per-tenant integration credentials (stored encrypted)."""

from datetime import datetime
from uuid import UUID

from ...shared.base import Entity, utcnow
from ..value_objects.integration import AsanaFieldConfig


class IntegrationCredentials(Entity):
    """
    Encrypted tokens and configuration for the Asana and TimeTac integrations.

    Token fields hold ciphertext produced by the encryption service; they are
    never decrypted on the entity itself.
    """

    tenant_id: UUID

    # Asana
    asana_access_token: str | None = None
    asana_refresh_token: str | None = None
    asana_token_expires_at: datetime | None = None
    asana_workspace_id: str | None = None
    asana_webhook_secret: str | None = None
    asana_project_number_field_id: str | None = None
    asana_soll_produktion_field_id: str | None = None
    asana_soll_montage_field_id: str | None = None
    asana_phase_bereich_field_id: str | None = None
    asana_phase_budget_hours_field_id: str | None = None

    # TimeTac
    timetac_account_id: str | None = None
    timetac_api_token: str | None = None

    @property
    def has_asana_connection(self) -> bool:
        return bool(self.asana_access_token)

    @property
    def has_timetac_connection(self) -> bool:
        return bool(self.timetac_api_token)

    def is_asana_token_expired(self, now: datetime | None = None) -> bool:
        if self.asana_token_expires_at is None:
            return False
        return self.asana_token_expires_at < (now or utcnow())

    def asana_field_config(self) -> AsanaFieldConfig:
        return AsanaFieldConfig(
            project_number_field_id=self.asana_project_number_field_id,
            soll_produktion_field_id=self.asana_soll_produktion_field_id,
            soll_montage_field_id=self.asana_soll_montage_field_id,
            phase_bereich_field_id=self.asana_phase_bereich_field_id,
            phase_budget_hours_field_id=self.asana_phase_budget_hours_field_id,
        )

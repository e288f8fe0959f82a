"""
Asana Data Transfer Objects.

Typed views of the Asana REST payloads and of the local shapes they are
mapped to. Unknown payload keys are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field

from ...domain.planning.value_objects.enums import PhaseBereich


class AsanaModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class AsanaEnumValue(AsanaModel):
    gid: str
    name: str | None = None


class AsanaCustomField(AsanaModel):
    gid: str
    name: str | None = None
    type: str | None = None
    number_value: float | None = None
    text_value: str | None = None
    display_value: str | None = None
    enum_value: AsanaEnumValue | None = None


class AsanaProject(AsanaModel):
    gid: str
    name: str
    archived: bool = False
    notes: str | None = None
    custom_fields: list[AsanaCustomField] = Field(default_factory=list)


class AsanaSection(AsanaModel):
    gid: str
    name: str


class AsanaWorkspace(AsanaModel):
    gid: str
    name: str


class AsanaTokenResponse(AsanaModel):
    """Response of the OAuth refresh grant."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None


class MappedProject(BaseModel):
    """Local project fields extracted from an Asana project."""

    asana_gid: str
    name: str
    project_number: str | None = None
    soll_produktion_hours: float | None = None
    soll_montage_hours: float | None = None
    archived: bool = False


class MappedPhase(BaseModel):
    """Local phase fields extracted from an Asana section."""

    asana_gid: str
    name: str
    bereich: PhaseBereich = PhaseBereich.PRODUKTION
    budget_hours: float | None = None

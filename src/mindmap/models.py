"""
Wire models for the mind map payload.

The upstream payload mixes camelCase keys with snake_case keys for nested
court and tax facts, so fields accept both spellings. Unknown keys are kept.
"""

from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _aliases(*names):
    return Field(default=None, alias=names[0], validation_alias=AliasChoices(*names))


class WireModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


class AtoData(WireModel):
    amount: Optional[float] = None
    status: Optional[str] = None
    date: Optional[str] = None
    updated_at: Optional[str] = _aliases("updatedAt", "ato_updated_at", "updated_at")

    @property
    def has_debt(self) -> bool:
        return self.amount is not None and self.amount > 0

    @property
    def is_zero(self) -> bool:
        return self.amount == 0


class CourtCase(WireModel):
    uuid: Optional[str] = None
    case_number: Optional[str] = _aliases("caseNumber", "case_number")
    case_name: Optional[str] = _aliases("caseName", "case_name")
    case_type: Optional[str] = _aliases("caseType", "case_type")
    type: Optional[str] = None
    court_name: Optional[str] = _aliases("courtName", "court_name")
    state: Optional[str] = None
    party_role: Optional[str] = _aliases("partyRole", "party_role")
    notification_time: Optional[str] = _aliases("notificationTime", "notification_time")
    url: Optional[str] = None


class Entity(WireModel):
    id: str
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value


class Company(Entity):
    acn: Optional[str] = None
    abn: Optional[str] = None
    status: Optional[str] = None
    ato_data: Optional[AtoData] = _aliases("atoData", "ato_data")
    court_cases: list[CourtCase] = Field(
        default_factory=list,
        alias="courtCases",
        validation_alias=AliasChoices("courtCases", "court_cases"),
    )

    @field_validator("court_cases", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class PersonRole(WireModel):
    type: str = ""
    original_type: Optional[str] = _aliases("originalType", "original_type")
    role: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value

    @property
    def is_ceased(self) -> bool:
        return "ceased" in (self.original_type or "") or "ceased" in self.type


class Person(Entity):
    roles: list[PersonRole] = Field(default_factory=list)
    dob: Optional[str] = None

    @field_validator("roles", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class Shareholder(Entity):
    shares: Optional[Union[int, float, str]] = None


class Address(WireModel):
    id: str
    address: str = ""
    type: Optional[str] = None
    suburb: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[str] = _aliases("startDate", "start_date")
    end_date: Optional[str] = _aliases("endDate", "end_date")
    entity_name: Optional[str] = _aliases("entityName", "entity_name")
    linked_entity_id: Optional[str] = _aliases("linkedEntityId", "linked_entity_id")
    linked_entity_ids: Optional[list[str]] = _aliases("linkedEntityIds", "linked_entity_ids")
    case_uuid: Optional[str] = _aliases("caseUuid", "case_uuid")
    case_uuids: Optional[list[str]] = _aliases("caseUuids", "case_uuids")

    @field_validator("address", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value

    @property
    def linked_ids(self) -> list[str]:
        """Linked entity ids, current format first, legacy single id second."""
        if self.linked_entity_ids is not None:
            return list(self.linked_entity_ids)
        if self.linked_entity_id:
            return [self.linked_entity_id]
        return []

    @property
    def is_ceased(self) -> bool:
        return (self.status or "").lower() == "ceased" or bool(self.end_date)


class Bankruptcy(Entity):
    has_bankruptcy: Optional[bool] = Field(
        default=True,
        alias="hasBankruptcy",
        validation_alias=AliasChoices("hasBankruptcy", "has_bankruptcy"),
    )
    from_date: Optional[str] = Field(
        default=None,
        alias="from",
        validation_alias=AliasChoices("from", "from_date"),
    )
    extract_id: Optional[str] = _aliases("extractId", "extract_id")
    uuid: Optional[str] = None

    @property
    def is_bankrupt(self) -> bool:
        # Only an explicit false clears the flag
        return self.has_bankruptcy is not False


class Relationship(WireModel):
    source: str = Field(alias="from", validation_alias=AliasChoices("from", "source"))
    target: str = Field(alias="to", validation_alias=AliasChoices("to", "target"))
    type: str = ""
    label: str = ""
    uncertain: Optional[bool] = False
    similarity_percentage: Optional[float] = _aliases(
        "similarityPercentage", "similarity_percentage"
    )
    extract_id: Optional[str] = _aliases("extractId", "extract_id")

    @field_validator("type", "label", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value


class Entities(WireModel):
    companies: list[Company] = Field(default_factory=list)
    persons: Optional[list[Person]] = None
    shareholders: list[Shareholder] = Field(default_factory=list)
    addresses: list[Address] = Field(default_factory=list)
    bankruptcies: list[Bankruptcy] = Field(default_factory=list)
    # Older payloads list person roles separately
    directors: list[dict[str, Any]] = Field(default_factory=list)
    secretaries: list[dict[str, Any]] = Field(default_factory=list)
    office_holders: list[dict[str, Any]] = Field(
        default_factory=list,
        alias="officeHolders",
        validation_alias=AliasChoices("officeHolders", "office_holders"),
    )

    @field_validator(
        "companies", "shareholders", "addresses", "bankruptcies",
        "directors", "secretaries", "office_holders",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class Stats(WireModel):
    total_companies: int = Field(default=0, alias="totalCompanies")
    total_persons: int = Field(default=0, alias="totalPersons")
    total_directors: int = Field(default=0, alias="totalDirectors")
    total_shareholders: int = Field(default=0, alias="totalShareholders")
    total_secretaries: int = Field(default=0, alias="totalSecretaries")
    total_office_holders: int = Field(default=0, alias="totalOfficeHolders")
    total_addresses: Optional[int] = Field(default=None, alias="totalAddresses")
    total_relationships: int = Field(default=0, alias="totalRelationships")


class MindMapData(WireModel):
    entities: Entities = Field(default_factory=Entities)
    relationships: list[Relationship] = Field(default_factory=list)
    stats: Stats = Field(default_factory=Stats)

    @field_validator("relationships", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class MindMapResponse(WireModel):
    success: bool
    message: Optional[str] = None
    data: Optional[MindMapData] = None
    matter_name: Optional[str] = Field(default=None, alias="matterName")
    matter_id: Optional[int] = Field(default=None, alias="matterId")

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from venue_backend.domain.venues import IdentifierScheme, Venue, VenueDraft


class VenuePayloadDTO(BaseModel):
    name: StrictStr = Field(max_length=255)
    url: StrictStr = Field(max_length=1024)
    district: StrictStr = Field(max_length=255)

    model_config = ConfigDict(extra="ignore")

    def to_draft(self) -> VenueDraft:
        return VenueDraft(name=self.name, url=self.url, district=self.district)


class VenueDTO(BaseModel):
    id: str
    name: str
    url: str
    district: str

    @classmethod
    def from_entity(cls, venue: Venue, identifiers: IdentifierScheme) -> VenueDTO:
        return cls(
            id=identifiers.format(venue.id),
            name=venue.name,
            url=venue.url,
            district=venue.district,
        )


class MessageDTO(BaseModel):
    message: str

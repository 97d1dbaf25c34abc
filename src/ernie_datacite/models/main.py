from typing import List
from urllib.parse import urlparse

from pydantic import Field, field_validator

from .. import vocabularies as vocab
from .commons import Affiliation, Agent, DataCiteModel, Publisher


def _require(value: str | None, resolved: str | None, label: str) -> str:
    if resolved is None:
        raise ValueError(f"Unknown {label}: {value!r}")
    return resolved


class Title(DataCiteModel):
    value: str
    title_type: str | None = None
    language: str | None = None
    position: int = 0

    @field_validator("title_type")
    @classmethod
    def _title_type(cls, v):
        if v is None or not v.strip():
            return None
        return _require(v, vocab.title_type(v), "title type")

    @property
    def is_main(self) -> bool:
        return self.title_type in (None, vocab.MAIN_TITLE)


class Creator(DataCiteModel):
    agent: Agent
    affiliations: List[Affiliation] = []
    position: int = 0


class Contributor(DataCiteModel):
    agent: Agent
    contributor_type: str = "Other"
    affiliations: List[Affiliation] = []
    position: int = 0

    @field_validator("contributor_type")
    @classmethod
    def _contributor_type(cls, v):
        return _require(v, vocab.contributor_type(v), "contributor type")


class Description(DataCiteModel):
    value: str
    description_type: str = "Abstract"
    language: str | None = None
    position: int = 0

    @field_validator("description_type")
    @classmethod
    def _description_type(cls, v):
        return _require(v, vocab.description_type(v), "description type")


class ResourceDate(DataCiteModel):
    date_type: str
    date_value: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    date_information: str | None = None
    position: int = 0

    @field_validator("date_type")
    @classmethod
    def _date_type(cls, v):
        return _require(v, vocab.date_type(v), "date type")

    @property
    def is_range(self) -> bool:
        return bool(self.start_date and self.end_date)


class Right(DataCiteModel):
    name: str
    identifier: str | None = None
    uri: str | None = None
    scheme_uri: str | None = None
    language: str | None = None
    position: int = 0


class Subject(DataCiteModel):
    value: str
    subject_scheme: str | None = None
    scheme_uri: str | None = None
    value_uri: str | None = None
    classification_code: str | None = None
    language: str | None = None
    position: int = 0


class GeoPoint(DataCiteModel):
    longitude: float = Field(ge=-180, le=180)
    latitude: float = Field(ge=-90, le=90)


class GeoBox(DataCiteModel):
    west_bound_longitude: float = Field(ge=-180, le=180)
    east_bound_longitude: float = Field(ge=-180, le=180)
    south_bound_latitude: float = Field(ge=-90, le=90)
    north_bound_latitude: float = Field(ge=-90, le=90)


class GeoLocation(DataCiteModel):
    place: str | None = None
    point: GeoPoint | None = None
    box: GeoBox | None = None
    polygon: List[GeoPoint] = []
    in_polygon_point: GeoPoint | None = None
    position: int = 0


class FundingReference(DataCiteModel):
    funder_name: str
    funder_identifier: str | None = None
    funder_identifier_type: str | None = None
    scheme_uri: str | None = None
    award_number: str | None = None
    award_uri: str | None = None
    award_title: str | None = None
    position: int = 0

    @field_validator("funder_identifier_type")
    @classmethod
    def _funder_identifier_type(cls, v):
        if v is None or not v.strip():
            return None
        resolved = vocab.funder_identifier_type(v)
        if resolved is None:
            allowed = ", ".join(vocab.FUNDER_IDENTIFIER_TYPES)
            raise ValueError(f"Unknown funder identifier type {v!r} (allowed: {allowed})")
        return resolved

    @field_validator("award_uri")
    @classmethod
    def _award_uri(cls, v):
        if v is None or not v.strip():
            return None
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Award URI must be a valid http(s) URL: {v!r}")
        return v.strip()


class RelatedIdentifier(DataCiteModel):
    identifier: str
    identifier_type: str = "DOI"
    relation_type: str = "References"
    resource_type_general: str | None = None
    position: int = 0

    @field_validator("identifier_type")
    @classmethod
    def _identifier_type(cls, v):
        return _require(v, vocab.related_identifier_type(v), "related identifier type")

    @field_validator("relation_type")
    @classmethod
    def _relation_type(cls, v):
        return _require(v, vocab.relation_type(v), "relation type")

    @property
    def inverse_relation_type(self) -> str | None:
        return vocab.opposite_relation(self.relation_type)


class AlternateIdentifier(DataCiteModel):
    value: str
    type: str
    position: int = 0


class Resource(DataCiteModel):
    """Read-only snapshot of a curated resource and its related collections"""

    id: int | None = None
    doi: str | None = None
    publication_year: int | None = Field(default=None, ge=1000, le=9999)
    version: str | None = None
    resource_type: str | None = None
    language: str | None = None
    publisher: Publisher | None = None
    curation: bool = False

    titles: List[Title] = []
    creators: List[Creator] = []
    contributors: List[Contributor] = []
    descriptions: List[Description] = []
    dates: List[ResourceDate] = []
    subjects: List[Subject] = []
    rights: List[Right] = []
    geo_locations: List[GeoLocation] = []
    funding_references: List[FundingReference] = []
    related_identifiers: List[RelatedIdentifier] = []
    sizes: List[str] = []
    formats: List[str] = []
    alternate_identifiers: List[AlternateIdentifier] = []

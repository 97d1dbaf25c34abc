from typing import List, Literal

from pydantic import BaseModel

from .commons import DataCiteModel


class ImportedAffiliation(DataCiteModel):
    value: str
    ror_id: str | None = None
    identifier: str | None = None
    identifier_scheme: str | None = None


class ImportedTitle(DataCiteModel):
    title: str
    title_type: str | None = None
    language: str | None = None


class ImportedAgent(DataCiteModel):
    type: Literal["person", "institution"]
    given_name: str | None = None
    family_name: str | None = None
    orcid: str | None = None
    institution_name: str | None = None
    name_identifier: str | None = None
    name_identifier_scheme: str | None = None
    affiliations: List[ImportedAffiliation] = []


class ImportedContributor(ImportedAgent):
    roles: List[str] = []


class ImportedDescription(DataCiteModel):
    type: str
    description: str
    language: str | None = None


class ImportedDate(DataCiteModel):
    date_type: str | None = None
    start_date: str = ""
    end_date: str = ""
    date_information: str | None = None


class ImportedRights(DataCiteModel):
    rights: str | None = None
    rights_uri: str | None = None
    rights_identifier: str | None = None


class ImportedSubject(DataCiteModel):
    subject: str
    subject_scheme: str | None = None
    scheme_uri: str | None = None
    value_uri: str | None = None
    classification_code: str | None = None


class ImportedPoint(DataCiteModel):
    longitude: str
    latitude: str


class ImportedGeoLocation(DataCiteModel):
    place: str | None = None
    point: ImportedPoint | None = None
    west_bound_longitude: str | None = None
    east_bound_longitude: str | None = None
    south_bound_latitude: str | None = None
    north_bound_latitude: str | None = None
    polygon: List[ImportedPoint] = []
    in_polygon_point: ImportedPoint | None = None


class ImportedGcmdKeyword(DataCiteModel):
    uuid: str
    id: str
    path: List[str] = []
    type: Literal["science", "platforms", "instruments"]


class ImportedCoverage(DataCiteModel):
    id: str
    lat_min: str = ""
    lat_max: str = ""
    lon_min: str = ""
    lon_max: str = ""
    start_date: str = ""
    end_date: str = ""
    start_time: str = ""
    end_time: str = ""
    timezone: str = "UTC"
    description: str = ""


class ImportedRelatedIdentifier(DataCiteModel):
    identifier: str
    identifier_type: str | None = None
    relation_type: str | None = None
    resource_type_general: str | None = None


class ImportedFundingReference(DataCiteModel):
    funder_name: str | None = None
    funder_identifier: str | None = None
    funder_identifier_type: str | None = None
    award_number: str | None = None
    award_uri: str | None = None
    award_title: str | None = None


class MslLaboratory(BaseModel):
    identifier: str
    name: str = ""
    affiliation_name: str = ""
    affiliation_ror: str = ""


class ImportedResource(DataCiteModel):
    doi: str | None = None
    year: str | None = None
    version: str | None = None
    language: str | None = None
    resource_type: str | None = None
    publisher: str | None = None
    titles: List[ImportedTitle] = []
    licenses: List[str] = []
    rights: List[ImportedRights] = []
    creators: List[ImportedAgent] = []
    contributors: List[ImportedContributor] = []
    descriptions: List[ImportedDescription] = []
    dates: List[ImportedDate] = []
    subjects: List[ImportedSubject] = []
    gcmd_keywords: List[ImportedGcmdKeyword] = []
    geo_locations: List[ImportedGeoLocation] = []
    coverages: List[ImportedCoverage] = []
    related_identifiers: List[ImportedRelatedIdentifier] = []
    funding_references: List[ImportedFundingReference] = []
    msl_laboratories: List[MslLaboratory] = []

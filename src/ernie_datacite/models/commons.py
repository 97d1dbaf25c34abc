from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..vocabularies import LABID_SCHEME


class DataCiteModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Affiliation(DataCiteModel):
    name: str | None = None
    identifier: str | None = None
    identifier_scheme: str | None = None
    scheme_uri: str | None = None


class Person(DataCiteModel):
    kind: Literal["person"] = "person"
    given_name: str | None = None
    family_name: str | None = None
    name_identifier: str | None = None
    name_identifier_scheme: str | None = None
    scheme_uri: str | None = None


class Institution(DataCiteModel):
    kind: Literal["institution"] = "institution"
    name: str | None = None
    name_identifier: str | None = None
    name_identifier_scheme: str | None = None
    scheme_uri: str | None = None

    @property
    def is_laboratory(self) -> bool:
        """MSL laboratories are institutions identified by a labid"""
        return (self.name_identifier_scheme or "").lower() == LABID_SCHEME


Agent = Annotated[Person | Institution, Field(discriminator="kind")]


class Publisher(DataCiteModel):
    name: str
    identifier: str | None = None
    identifier_scheme: str | None = None
    scheme_uri: str | None = None
    language: str | None = None

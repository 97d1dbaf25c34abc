"""
Controlled DataCite 4.6 vocabularies.

All tables are built once at import time and exposed read-only. Lookups are
forgiving about case, whitespace, hyphens and underscores, so editor slugs such
as ``alternative-title`` or labels such as ``Data Collector`` resolve to the
canonical DataCite values.
"""

import re
from types import MappingProxyType
from typing import Iterable, Mapping

from . import ORCID_URI, ROR_URI

RESOURCE_TYPE_GENERAL: Mapping[str, str] = MappingProxyType(
    {
        "Audiovisual": "Audiovisual",
        "Award": "Award",
        "Book": "Book",
        "Book Chapter": "BookChapter",
        "Collection": "Collection",
        "Computational Notebook": "ComputationalNotebook",
        "Conference Paper": "ConferencePaper",
        "Conference Proceeding": "ConferenceProceeding",
        "Data Paper": "DataPaper",
        "Dataset": "Dataset",
        "Dissertation": "Dissertation",
        "Event": "Event",
        "Image": "Image",
        "Interactive Resource": "InteractiveResource",
        "Instrument": "Instrument",
        "Journal": "Journal",
        "Journal Article": "JournalArticle",
        "Model": "Model",
        "Output Management Plan": "OutputManagementPlan",
        "Peer Review": "PeerReview",
        "Physical Object": "PhysicalObject",
        "Preprint": "Preprint",
        "Project": "Project",
        "Report": "Report",
        "Service": "Service",
        "Software": "Software",
        "Sound": "Sound",
        "Standard": "Standard",
        "Study Registration": "StudyRegistration",
        "Text": "Text",
        "Workflow": "Workflow",
        "Other": "Other",
    }
)

MAIN_TITLE = "MainTitle"
TITLE_TYPES = frozenset({"AlternativeTitle", "Subtitle", "TranslatedTitle", "Other"})

DESCRIPTION_TYPES = frozenset(
    {
        "Abstract",
        "Methods",
        "SeriesInformation",
        "TableOfContents",
        "TechnicalInfo",
        "Other",
    }
)

DATE_TYPES = frozenset(
    {
        "Accepted",
        "Available",
        "Copyrighted",
        "Collected",
        "Coverage",
        "Created",
        "Issued",
        "Submitted",
        "Updated",
        "Valid",
        "Withdrawn",
        "Other",
    }
)

CONTRIBUTOR_TYPES = frozenset(
    {
        "ContactPerson",
        "DataCollector",
        "DataCurator",
        "DataManager",
        "Distributor",
        "Editor",
        "HostingInstitution",
        "Producer",
        "ProjectLeader",
        "ProjectManager",
        "ProjectMember",
        "RegistrationAgency",
        "RegistrationAuthority",
        "RelatedPerson",
        "Researcher",
        "ResearchGroup",
        "RightsHolder",
        "Sponsor",
        "Supervisor",
        "Translator",
        "WorkPackageLeader",
        "Other",
    }
)

# Roles only an organisation can hold
INSTITUTION_ONLY_CONTRIBUTOR_TYPES = frozenset(
    {
        "Distributor",
        "HostingInstitution",
        "RegistrationAgency",
        "RegistrationAuthority",
        "ResearchGroup",
        "Sponsor",
    }
)

RELATED_IDENTIFIER_TYPES = frozenset(
    {
        "ARK",
        "arXiv",
        "bibcode",
        "CSTR",
        "DOI",
        "EAN13",
        "EISSN",
        "Handle",
        "IGSN",
        "ISBN",
        "ISSN",
        "ISTC",
        "LISSN",
        "LSID",
        "PMID",
        "PURL",
        "RRID",
        "UPC",
        "URL",
        "URN",
        "w3id",
    }
)

_RELATION_PAIRS = (
    ("IsCitedBy", "Cites"),
    ("IsSupplementTo", "IsSupplementedBy"),
    ("IsContinuedBy", "Continues"),
    ("IsDescribedBy", "Describes"),
    ("HasMetadata", "IsMetadataFor"),
    ("HasVersion", "IsVersionOf"),
    ("IsNewVersionOf", "IsPreviousVersionOf"),
    ("IsPartOf", "HasPart"),
    ("IsReferencedBy", "References"),
    ("IsDocumentedBy", "Documents"),
    ("IsCompiledBy", "Compiles"),
    ("IsVariantFormOf", "IsOriginalFormOf"),
    ("IsIdenticalTo", "IsIdenticalTo"),
    ("IsReviewedBy", "Reviews"),
    ("IsDerivedFrom", "IsSourceOf"),
    ("IsRequiredBy", "Requires"),
    ("IsObsoletedBy", "Obsoletes"),
    ("IsCollectedBy", "Collects"),
    ("IsTranslationOf", "HasTranslation"),
)

RELATION_TYPE_OPPOSITES: Mapping[str, str] = MappingProxyType(
    {a: b for a, b in _RELATION_PAIRS} | {b: a for a, b in _RELATION_PAIRS}
)

# IsPublishedIn has no inverse in the schema
RELATION_TYPES = frozenset(RELATION_TYPE_OPPOSITES) | {"IsPublishedIn"}

FUNDER_IDENTIFIER_TYPES = ("ROR", "Crossref Funder ID", "ISNI", "GRID", "Other")

SCHEME_URIS: Mapping[str, str] = MappingProxyType(
    {
        "ORCID": ORCID_URI,
        "ROR": ROR_URI,
        "ISNI": "https://isni.org",
        "GRID": "https://www.grid.ac",
    }
)

LABID_SCHEME = "labid"
SPDX_SCHEME = "SPDX"


def _key(value: str) -> str:
    return re.sub(r"[\s_\-]", "", value).lower()


def _index(values: Iterable[str]) -> Mapping[str, str]:
    return MappingProxyType({_key(v): v for v in values})


_TITLE_INDEX = _index(TITLE_TYPES | {MAIN_TITLE})
_DESCRIPTION_INDEX = _index(DESCRIPTION_TYPES)
_DATE_INDEX = _index(DATE_TYPES)
_CONTRIBUTOR_INDEX = _index(CONTRIBUTOR_TYPES)
_RELATION_INDEX = _index(RELATION_TYPES)
_RELATED_IDENTIFIER_INDEX = _index(RELATED_IDENTIFIER_TYPES)
_FUNDER_INDEX = _index(FUNDER_IDENTIFIER_TYPES)
_RESOURCE_TYPE_INDEX = MappingProxyType(
    {_key(k): v for k, v in RESOURCE_TYPE_GENERAL.items()}
)


def _lookup(index: Mapping[str, str], value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return index.get(_key(value))


def title_type(value: str | None) -> str | None:
    return _lookup(_TITLE_INDEX, value)


def description_type(value: str | None) -> str | None:
    return _lookup(_DESCRIPTION_INDEX, value)


def date_type(value: str | None) -> str | None:
    return _lookup(_DATE_INDEX, value)


def contributor_type(value: str | None) -> str | None:
    return _lookup(_CONTRIBUTOR_INDEX, value)


def relation_type(value: str | None) -> str | None:
    return _lookup(_RELATION_INDEX, value)


def related_identifier_type(value: str | None) -> str | None:
    return _lookup(_RELATED_IDENTIFIER_INDEX, value)


def funder_identifier_type(value: str | None) -> str | None:
    return _lookup(_FUNDER_INDEX, value)


def resource_type_general(value: str | None) -> str:
    """Map a resource type display name to resourceTypeGeneral (default Other)"""
    if value is None or not value.strip():
        return "Other"
    return _RESOURCE_TYPE_INDEX.get(_key(value), "Other")


def opposite_relation(value: str) -> str | None:
    """Inverse relation type, e.g. Cites -> IsCitedBy"""
    canonical = relation_type(value)
    if canonical is None:
        return None
    return RELATION_TYPE_OPPOSITES.get(canonical)


def is_institution_only(role: str) -> bool:
    return contributor_type(role) in INSTITUTION_ONLY_CONTRIBUTOR_TYPES

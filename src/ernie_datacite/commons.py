import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, Sequence

from . import ORCID_URI, ROR_URI
from . import vocabularies as vocab
from .config import settings
from .models.commons import Affiliation, Agent, Institution, Person, Publisher
from .models.main import (
    AlternateIdentifier,
    Contributor,
    Creator,
    Description,
    FundingReference,
    GeoLocation,
    GeoPoint,
    RelatedIdentifier,
    ResourceDate,
    Right,
    Subject,
    Title,
)

UNKNOWN_PERSON = "Unknown"
UNKNOWN_INSTITUTION = "Unknown Institution"
UNKNOWN_LABORATORY = "Unknown Laboratory"
UNTITLED = "Untitled"

SPDX_SCHEME_URI = "https://spdx.org/licenses/"
CROSSREF_FUNDER_PREFIX = "https://doi.org/10.13039/"

_ILLEGAL_XML_CHARS = re.compile(
    "[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)
_ISNI = re.compile(r"\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{3}[\dX]")
_BARE_ROR = re.compile(r"0[a-z0-9]{6}\d{2}")


def _compact(d: dict) -> dict:
    """Drop keys whose value is None, empty string or empty list"""
    return {k: v for k, v in d.items() if v not in (None, "", [])}


def by_position(items: Iterable) -> list:
    return sorted(items, key=lambda x: x.position)


def xml_safe(text: str | None) -> str | None:
    """Strip characters that are not allowed in XML 1.0"""
    if text is None:
        return None
    return _ILLEGAL_XML_CHARS.sub("", text)


def normalize_name(name: str | None) -> str:
    """Matching key used when merging duplicate agents"""
    return " ".join((name or "").split()).casefold()


def format_person_name(person: Person) -> str:
    family = (person.family_name or "").strip()
    given = (person.given_name or "").strip()
    if family and given:
        return f"{family}, {given}"
    return family or given or UNKNOWN_PERSON


def format_institution_name(institution: Institution) -> str:
    if name := (institution.name or "").strip():
        return name
    return UNKNOWN_LABORATORY if institution.is_laboratory else UNKNOWN_INSTITUTION


def name_type(agent: Agent) -> str:
    match agent:
        case Person():
            return "Personal"
        case Institution():
            return "Organizational"


def _last_segment(value: str, marker: str) -> str:
    value = value.strip()
    if marker in value.lower():
        value = value[value.lower().index(marker) + len(marker) :]
    return value.strip("/")


def normalize_ror(value: str | None) -> str | None:
    """``04z8jg394`` or any ror.org URL -> ``https://ror.org/04z8jg394``"""
    if value is None or not value.strip():
        return None
    return f"{ROR_URI}/{_last_segment(value, 'ror.org/').lower()}"


def bare_orcid(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return _last_segment(value, "orcid.org/").upper()


def normalize_orcid(value: str | None) -> str | None:
    if (orcid := bare_orcid(value)) is None:
        return None
    return f"{ORCID_URI}/{orcid}"


def is_ror(value: str | None, scheme: str | None = None) -> bool:
    if (scheme or "").upper() == "ROR":
        return True
    return "ror.org/" in (value or "").lower()


def scheme_uri_for(scheme: str | None) -> str | None:
    if scheme is None:
        return None
    for key, uri in vocab.SCHEME_URIS.items():
        if key.lower() == scheme.strip().lower():
            return uri
    return None


def build_name_identifier(agent: Agent) -> dict | None:
    """nameIdentifier entry for a person or institution, None without an id"""
    if agent.name_identifier is None or not agent.name_identifier.strip():
        return None
    identifier = agent.name_identifier.strip()

    match agent:
        case Institution() if agent.is_laboratory:
            return {
                "nameIdentifier": identifier,
                "nameIdentifierScheme": vocab.LABID_SCHEME,
            }
        case Person():
            scheme = agent.name_identifier_scheme or "ORCID"
            if scheme.upper() == "ORCID":
                identifier = normalize_orcid(identifier)
        case Institution():
            scheme = agent.name_identifier_scheme or "ROR"
            if scheme.upper() == "ROR":
                identifier = normalize_ror(identifier)

    return _compact(
        {
            "nameIdentifier": identifier,
            "nameIdentifierScheme": scheme,
            "schemeUri": agent.scheme_uri or scheme_uri_for(scheme),
        }
    )


def map_affiliation(affiliation: Affiliation) -> dict | None:
    name = (affiliation.name or "").strip()
    identifier = (affiliation.identifier or "").strip()
    if not name and not identifier:
        return None

    scheme = affiliation.identifier_scheme
    if identifier and scheme is None:
        scheme = "ROR"
    if identifier and is_ror(identifier, scheme):
        identifier = normalize_ror(identifier)
        scheme = "ROR"

    return _compact(
        {
            "name": name or identifier,
            "affiliationIdentifier": identifier,
            "affiliationIdentifierScheme": scheme if identifier else None,
            "schemeUri": (affiliation.scheme_uri or scheme_uri_for(scheme))
            if identifier
            else None,
        }
    )


def _map_agent(agent: Agent, affiliations: Sequence[Affiliation]) -> dict:
    match agent:
        case Person():
            d = {
                "name": format_person_name(agent),
                "nameType": "Personal",
                "givenName": agent.given_name,
                "familyName": agent.family_name,
            }
        case Institution():
            d = {
                "name": format_institution_name(agent),
                "nameType": "Organizational",
            }

    if (name_identifier := build_name_identifier(agent)) is not None:
        d["nameIdentifiers"] = [name_identifier]

    affils = [a for a in map(map_affiliation, affiliations) if a]
    d["affiliation"] = affils
    return _compact(d)


def map_creator(creator: Creator) -> dict:
    return _map_agent(creator.agent, creator.affiliations)


def map_contributor(contributor: Contributor) -> dict:
    d = _map_agent(contributor.agent, contributor.affiliations)
    agent = contributor.agent
    if isinstance(agent, Institution) and agent.is_laboratory:
        d["contributorType"] = "HostingInstitution"
    else:
        d["contributorType"] = contributor.contributor_type
    return d


def map_title(title: Title, default_lang: str | None = None) -> dict:
    title_type = None if title.is_main else title.title_type
    return _compact(
        {
            "title": title.value,
            "titleType": title_type,
            "lang": title.language or default_lang,
        }
    )


def map_titles(titles: Sequence[Title], default_lang: str | None = None) -> list[dict]:
    """
    The first untyped (or MainTitle) title by position is the main title and
    is emitted first. Further untyped titles become AlternativeTitle.
    """
    ordered = by_position(t for t in titles if t.value and t.value.strip())
    main = next((t for t in ordered if t.is_main), None)
    if main is None:
        return [map_title(t, default_lang) for t in ordered]

    mapped = [map_title(main, default_lang)]
    for t in ordered:
        if t is main:
            continue
        d = map_title(t, default_lang)
        if t.is_main:
            d["titleType"] = "AlternativeTitle"
        mapped.append(d)
    return mapped


def map_description(
    description: Description, default_lang: str | None = None
) -> dict | None:
    if not description.value or not description.value.strip():
        return None
    return _compact(
        {
            "description": description.value,
            "descriptionType": description.description_type,
            "lang": description.language or default_lang,
        }
    )


def format_date_value(date: ResourceDate) -> str | None:
    start = (date.start_date or "").strip()
    end = (date.end_date or "").strip()
    if start and end:
        return f"{start}/{end}"
    if start:
        return start
    if value := (date.date_value or "").strip():
        return value
    return end or None


def merge_date_ranges(dates: Sequence[ResourceDate]) -> list[ResourceDate]:
    """Collapse a start-only and an end-only record of the same dateType"""
    merged: list[ResourceDate] = []
    open_starts: dict[str, int] = {}
    for date in by_position(dates):
        start_only = date.start_date and not date.end_date and not date.date_value
        end_only = date.end_date and not date.start_date and not date.date_value
        if start_only:
            open_starts[date.date_type] = len(merged)
            merged.append(date)
        elif end_only and date.date_type in open_starts:
            idx = open_starts.pop(date.date_type)
            merged[idx] = merged[idx].model_copy(update={"end_date": date.end_date})
        else:
            merged.append(date)
    return merged


def map_date(date: ResourceDate) -> dict | None:
    if (value := format_date_value(date)) is None:
        return None
    return _compact(
        {
            "date": value,
            "dateType": date.date_type,
            "dateInformation": date.date_information,
        }
    )


def map_dates(dates: Sequence[ResourceDate]) -> list[dict]:
    return [d for d in map(map_date, merge_date_ranges(dates)) if d]


def map_subject(subject: Subject, default_lang: str | None = None) -> dict | None:
    if not subject.value or not subject.value.strip():
        return None
    return _compact(
        {
            "subject": subject.value,
            "subjectScheme": subject.subject_scheme,
            "schemeUri": subject.scheme_uri,
            "valueUri": subject.value_uri,
            "classificationCode": subject.classification_code,
            "lang": subject.language or default_lang,
        }
    )


def map_right(right: Right, default_lang: str | None = None) -> dict:
    identifier = (right.identifier or "").strip() or None
    return _compact(
        {
            "rights": right.name,
            "rightsUri": right.uri,
            "rightsIdentifier": identifier,
            "rightsIdentifierScheme": vocab.SPDX_SCHEME if identifier else None,
            "schemeUri": right.scheme_uri or (SPDX_SCHEME_URI if identifier else None),
            "lang": right.language or default_lang,
        }
    )


def format_decimal(value: float | Decimal | str) -> str:
    """``12.500000`` -> ``12.5``, ``10.0`` -> ``10``"""
    try:
        d = Decimal(str(value)).normalize()
    except InvalidOperation:
        return str(value)
    text = format(d, "f")
    return "0" if text == "-0" else text


def close_polygon(points: Sequence[GeoPoint]) -> list[GeoPoint]:
    """Closed ring, or an empty list when there are fewer than three points"""
    distinct = {(p.longitude, p.latitude) for p in points}
    if len(distinct) < 3:
        return []
    ring = list(points)
    first, last = ring[0], ring[-1]
    if (first.longitude, first.latitude) != (last.longitude, last.latitude):
        ring.append(first)
    return ring


def _point(point: GeoPoint) -> dict:
    return {"pointLongitude": point.longitude, "pointLatitude": point.latitude}


def map_geo_location(geo: GeoLocation) -> dict | None:
    d = {}
    if geo.place and geo.place.strip():
        d["geoLocationPlace"] = geo.place
    if geo.point is not None:
        d["geoLocationPoint"] = _point(geo.point)
    if geo.box is not None:
        d["geoLocationBox"] = {
            "westBoundLongitude": geo.box.west_bound_longitude,
            "eastBoundLongitude": geo.box.east_bound_longitude,
            "southBoundLatitude": geo.box.south_bound_latitude,
            "northBoundLatitude": geo.box.north_bound_latitude,
        }
    if ring := close_polygon(geo.polygon):
        polygon = [{"polygonPoint": _point(p)} for p in ring]
        if geo.in_polygon_point is not None:
            polygon.append({"inPolygonPoint": _point(geo.in_polygon_point)})
        d["geoLocationPolygon"] = polygon
    return d or None


def detect_funder_identifier_type(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    v = value.strip()
    lower = v.lower()
    if "ror.org/" in lower or _BARE_ROR.fullmatch(lower):
        return "ROR"
    if "10.13039/" in lower:
        return "Crossref Funder ID"
    if _ISNI.fullmatch(_last_segment(v, "isni.org/isni/").upper()):
        return "ISNI"
    if "grid." in lower:
        return "GRID"
    return "Other"


def _funder_scheme_uri(identifier_type: str | None) -> str | None:
    match identifier_type:
        case "ROR":
            return ROR_URI
        case "Crossref Funder ID":
            return CROSSREF_FUNDER_PREFIX
        case "ISNI" | "GRID":
            return scheme_uri_for(identifier_type)
    return None


def map_funding_reference(funding: FundingReference) -> dict:
    identifier = (funding.funder_identifier or "").strip() or None
    identifier_type = None
    if identifier:
        identifier_type = funding.funder_identifier_type or (
            detect_funder_identifier_type(identifier)
        )
        if identifier_type == "ROR":
            identifier = normalize_ror(identifier)
    return _compact(
        {
            "funderName": funding.funder_name,
            "funderIdentifier": identifier,
            "funderIdentifierType": identifier_type,
            "schemeUri": funding.scheme_uri or _funder_scheme_uri(identifier_type),
            "awardNumber": funding.award_number,
            "awardUri": funding.award_uri,
            "awardTitle": funding.award_title,
        }
    )


def map_related_identifier(related: RelatedIdentifier) -> dict:
    return _compact(
        {
            "relatedIdentifier": related.identifier,
            "relatedIdentifierType": related.identifier_type,
            "relationType": related.relation_type,
            "resourceTypeGeneral": related.resource_type_general,
        }
    )


def map_alternate_identifier(alternate: AlternateIdentifier) -> dict:
    return {
        "alternateIdentifier": alternate.value,
        "alternateIdentifierType": alternate.type,
    }


def default_publisher() -> Publisher:
    return Publisher(
        name=settings.DEFAULT_PUBLISHER_NAME,
        identifier=settings.DEFAULT_PUBLISHER_IDENTIFIER,
        identifier_scheme=settings.DEFAULT_PUBLISHER_IDENTIFIER_SCHEME,
        scheme_uri=settings.DEFAULT_PUBLISHER_SCHEME_URI,
    )


def map_publisher(
    publisher: Publisher | None, default_lang: str | None = None
) -> dict:
    if publisher is None or not publisher.name.strip():
        publisher = default_publisher()
    return _compact(
        {
            "name": publisher.name,
            "publisherIdentifier": publisher.identifier,
            "publisherIdentifierScheme": publisher.identifier_scheme,
            "schemeUri": publisher.scheme_uri,
            "lang": publisher.language or default_lang,
        }
    )


def placeholder_creator() -> dict:
    return {"name": UNKNOWN_PERSON, "nameType": "Personal"}

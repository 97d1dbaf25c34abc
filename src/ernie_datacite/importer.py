"""
Import third-party DataCite XML into an editor-friendly record.

Import is permissive: values are passed through as found so the curator can
review them, and every scalar is nullable. The strict checks run later, when
the record is saved through ``imported_to_resource``.
"""

import re
from decimal import Decimal, InvalidOperation
from logging import Logger
from pathlib import PurePath

from lxml import etree

from . import GCMD_CONCEPT_URI, XML_NAMESPACE
from . import vocabularies as vocab
from .commons import (
    bare_orcid,
    detect_funder_identifier_type,
    is_ror,
    normalize_name,
    normalize_ror,
)
from .config import settings
from .errors import XmlImportError
from .logger import datacite_log
from .models.imported import (
    ImportedAffiliation,
    ImportedAgent,
    ImportedContributor,
    ImportedCoverage,
    ImportedDate,
    ImportedDescription,
    ImportedFundingReference,
    ImportedGcmdKeyword,
    ImportedGeoLocation,
    ImportedPoint,
    ImportedRelatedIdentifier,
    ImportedResource,
    ImportedRights,
    ImportedSubject,
    ImportedTitle,
    MslLaboratory,
)
from .models.main import Resource
from .msl import MslLaboratoryService
from .validation import validate_resource_payload

XML_LANG = f"{{{XML_NAMESPACE}}}lang"

_UUID = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.I)

# subjectScheme fragment -> keyword type
GCMD_SCHEMES = (
    ("science keywords", "science"),
    ("platforms", "platforms"),
    ("instruments", "instruments"),
)
GCMD_ROOTS = frozenset(label for label, _ in GCMD_SCHEMES)


def _path(*names: str) -> str:
    return "/".join(f"*[local-name()='{n}']" for n in names)


def _find_all(node, *names: str) -> list:
    return node.xpath(_path(*names))


def _find(node, *names: str):
    found = _find_all(node, *names)
    return found[0] if found else None


def _text(node) -> str | None:
    if node is None:
        return None
    text = "".join(node.itertext()).strip()
    return text or None


def _child_text(node, *names: str) -> str | None:
    return _text(_find(node, *names))


def _attr(node, name: str) -> str | None:
    if node is None:
        return None
    value = (node.get(name) or "").strip()
    return value or None


def split_roles(value: str | None) -> list[str]:
    """``"DataCollector; ContactPerson"`` -> DataCite contributor types"""
    roles = []
    for raw in re.split(r"[,;]", value or ""):
        if raw := raw.strip():
            role = vocab.contributor_type(raw) or raw
            if role not in roles:
                roles.append(role)
    return roles


def split_name(name: str | None) -> tuple[str | None, str | None]:
    """``"Family, Given"`` -> (given, family); no comma means family only"""
    if not name:
        return None, None
    family, sep, given = name.partition(",")
    return (given.strip() or None) if sep else None, family.strip() or None


def gcmd_path(value: str) -> list[str]:
    """``"Science Keywords > EARTH SCIENCE > ATMOSPHERE"`` -> ``["EARTH SCIENCE", "ATMOSPHERE"]``"""
    path = [part.strip() for part in value.split(">") if part.strip()]
    if path and path[0].casefold() in GCMD_ROOTS:
        path = path[1:]
    return path


def format_coordinate(value: str | None) -> str:
    """Six fixed decimals, ``""`` for a missing or unreadable value"""
    if value is None or not value.strip():
        return ""
    try:
        return f"{Decimal(value.strip()):.6f}"
    except InvalidOperation:
        return ""


def validate_upload(filename: str, content: bytes) -> None:
    """Reject anything that is not a reasonably sized ``.xml`` upload"""
    if PurePath(filename or "").suffix.lower() != ".xml":
        raise XmlImportError("The uploaded file must be an XML file (.xml).")
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise XmlImportError(
            f"The uploaded file exceeds the maximum size of "
            f"{settings.MAX_UPLOAD_SIZE} bytes."
        )


class XmlImporter:
    """Parse a DataCite XML document into an ``ImportedResource``"""

    def __init__(
        self,
        msl_service: MslLaboratoryService | None = None,
        log: Logger = datacite_log,
    ) -> None:
        self.msl_service = msl_service
        self.log = log

    def parse(self, data: bytes | str):
        if isinstance(data, str):
            data = data.encode("utf-8")
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            root = etree.fromstring(data, parser)
        except etree.XMLSyntaxError as exc:
            self.log.warning(f"[bold red]Malformed XML upload: {exc}")
            raise XmlImportError(
                f"The uploaded file is not well-formed XML: {exc}"
            ) from exc

        if etree.QName(root).localname != "resource":
            raise XmlImportError(
                "The uploaded file is not a DataCite document "
                "(root element must be <resource>)."
            )
        return root

    def import_xml(self, data: bytes | str) -> ImportedResource:
        root = self.parse(data)
        self.log.info("[bold yellow]Importing DataCite XML")

        contributors, laboratories = self._contributors(root)
        dates = self._dates(root)
        geo_locations = self._geo_locations(root)
        imported = ImportedResource(
            doi=self._doi(root),
            year=_child_text(root, "publicationYear"),
            version=_child_text(root, "version"),
            language=_child_text(root, "language"),
            resource_type=_attr(_find(root, "resourceType"), "resourceTypeGeneral"),
            publisher=_child_text(root, "publisher"),
            titles=self._titles(root),
            licenses=self._licenses(root),
            rights=self._rights(root),
            creators=[
                self._agent(c, "creatorName")
                for c in _find_all(root, "creators", "creator")
            ],
            contributors=contributors,
            descriptions=self._descriptions(root),
            dates=dates,
            subjects=self._subjects(root),
            gcmd_keywords=self._gcmd_keywords(root),
            geo_locations=geo_locations,
            coverages=self._coverages(geo_locations, dates),
            related_identifiers=self._related_identifiers(root),
            funding_references=self._funding_references(root),
            msl_laboratories=laboratories,
        )
        self.log.info(
            f"[bold green]✔ Imported {len(imported.creators)} creators, "
            f"{len(imported.contributors)} contributors, "
            f"{len(imported.msl_laboratories)} MSL laboratories"
        )
        return imported

    @staticmethod
    def _doi(root) -> str | None:
        identifiers = _find_all(root, "identifier")
        for el in identifiers:
            if (_attr(el, "identifierType") or "").upper() == "DOI":
                return _text(el)
        return _text(identifiers[0]) if identifiers else None

    @staticmethod
    def _titles(root) -> list[ImportedTitle]:
        titles = []
        for el in _find_all(root, "titles", "title"):
            if (text := _text(el)) is None:
                continue
            title_type = _attr(el, "titleType")
            titles.append(
                ImportedTitle(
                    title=text,
                    title_type=vocab.title_type(title_type) or title_type,
                    language=_attr(el, XML_LANG),
                )
            )
        main = next(
            (t for t in titles if t.title_type in (None, vocab.MAIN_TITLE)), None
        )
        if main is not None:
            titles.remove(main)
            titles.insert(0, main)
        return titles

    @staticmethod
    def _licenses(root) -> list[str]:
        return [
            value
            for el in _find_all(root, "rightsList", "rights")
            if (value := _attr(el, "rightsIdentifier"))
        ]

    @staticmethod
    def _rights(root) -> list[ImportedRights]:
        rights = []
        for el in _find_all(root, "rightsList", "rights"):
            entry = ImportedRights(
                rights=_text(el),
                rights_uri=_attr(el, "rightsURI"),
                rights_identifier=_attr(el, "rightsIdentifier"),
            )
            if entry.rights or entry.rights_uri or entry.rights_identifier:
                rights.append(entry)
        return rights

    @staticmethod
    def _affiliations(node) -> list[ImportedAffiliation]:
        affiliations = []
        for el in _find_all(node, "affiliation"):
            identifier = _attr(el, "affiliationIdentifier")
            scheme = _attr(el, "affiliationIdentifierScheme")
            value = _text(el) or identifier
            if not value:
                continue
            if identifier and is_ror(identifier, scheme):
                affiliation = ImportedAffiliation(value=value, ror_id=normalize_ror(identifier))
            else:
                affiliation = ImportedAffiliation(
                    value=value, identifier=identifier, identifier_scheme=scheme
                )
            affiliations.append(affiliation)
        return affiliations

    @staticmethod
    def _name_identifier(node) -> tuple[str | None, str | None]:
        el = _find(node, "nameIdentifier")
        return _text(el), _attr(el, "nameIdentifierScheme")

    def _agent(self, node, name_tag: str, roles: list[str] | None = None) -> ImportedAgent:
        name_el = _find(node, name_tag)
        name = _text(name_el)
        kind = (_attr(name_el, "nameType") or "").lower()
        identifier, scheme = self._name_identifier(node)
        affiliations = self._affiliations(node)

        if kind == "organizational":
            is_institution = True
        elif kind == "personal":
            is_institution = False
        else:
            is_institution = bool(roles) and all(map(vocab.is_institution_only, roles))

        extra = {"roles": roles} if roles is not None else {}
        model = ImportedAgent if roles is None else ImportedContributor

        if is_institution:
            if identifier and is_ror(identifier, scheme):
                identifier, scheme = normalize_ror(identifier), "ROR"
            return model(
                type="institution",
                institution_name=name,
                name_identifier=identifier,
                name_identifier_scheme=scheme,
                affiliations=affiliations,
                **extra,
            )

        given = _child_text(node, "givenName")
        family = _child_text(node, "familyName")
        if given is None and family is None:
            given, family = split_name(name)

        orcid = None
        if identifier and (
            (scheme or "").upper() == "ORCID" or "orcid.org/" in identifier.lower()
        ):
            orcid = bare_orcid(identifier)
            identifier = scheme = None

        return model(
            type="person",
            given_name=given,
            family_name=family,
            orcid=orcid,
            name_identifier=identifier,
            name_identifier_scheme=scheme,
            affiliations=affiliations,
            **extra,
        )

    def _laboratory(self, node) -> MslLaboratory:
        identifier, _ = self._name_identifier(node)
        name = _child_text(node, "contributorName") or ""
        affiliation = _find(node, "affiliation")
        affiliation_name = _text(affiliation) or ""
        affiliation_id = _attr(affiliation, "affiliationIdentifier")
        affiliation_ror = ""
        if affiliation_id and is_ror(
            affiliation_id, _attr(affiliation, "affiliationIdentifierScheme")
        ):
            affiliation_ror = normalize_ror(affiliation_id)

        if self.msl_service is not None:
            data = self.msl_service.enrich_laboratory_data(
                identifier, name, affiliation_name, affiliation_ror
            )
            return MslLaboratory(**data)
        return MslLaboratory(
            identifier=identifier,
            name=name,
            affiliation_name=affiliation_name,
            affiliation_ror=affiliation_ror,
        )

    @staticmethod
    def _merge_keys(agent: ImportedContributor) -> list[str]:
        """Every alias a contributor can be recognised by, strongest first"""
        keys = []
        if agent.type == "person":
            if agent.orcid:
                keys.append(f"person:orcid:{agent.orcid}")
            if agent.family_name or agent.given_name:
                keys.append(
                    "person:name:"
                    f"{normalize_name(agent.family_name)}:{normalize_name(agent.given_name)}"
                )
            return keys

        if agent.name_identifier and is_ror(
            agent.name_identifier, agent.name_identifier_scheme
        ):
            keys.append(f"institution:ror:{agent.name_identifier}")
        keys.extend(f"institution:ror:{a.ror_id}" for a in agent.affiliations if a.ror_id)
        if agent.institution_name:
            keys.append(f"institution:name:{normalize_name(agent.institution_name)}")
        return keys

    def _contributors(self, root) -> tuple[list[ImportedContributor], list[MslLaboratory]]:
        contributors: list[ImportedContributor] = []
        index_by_key: dict[str, int] = {}
        laboratories: dict[str, MslLaboratory] = {}

        for node in _find_all(root, "contributors", "contributor"):
            roles = split_roles(_attr(node, "contributorType"))
            identifier, scheme = self._name_identifier(node)
            if (
                "HostingInstitution" in roles
                and identifier
                and (scheme or "").lower() == vocab.LABID_SCHEME
            ):
                if identifier not in laboratories:
                    laboratories[identifier] = self._laboratory(node)
                continue

            contributor = self._agent(node, "contributorName", roles)
            keys = self._merge_keys(contributor)
            index = next(
                (
                    index_by_key[key]
                    for key in keys
                    if key in index_by_key
                    and contributors[index_by_key[key]].type == contributor.type
                ),
                None,
            )
            if index is None:
                index = len(contributors)
                contributors.append(contributor)
            else:
                self.log.debug(f"Merging duplicate contributor {keys[0]}")
                self._merge(contributors[index], contributor)
            # anonymous contributors stay unindexed and are never merged into
            for key in keys:
                index_by_key.setdefault(key, index)

        return contributors, list(laboratories.values())

    @staticmethod
    def _merge(existing: ImportedContributor, contributor: ImportedContributor) -> None:
        for role in contributor.roles:
            if role not in existing.roles:
                existing.roles.append(role)
        for affil in contributor.affiliations:
            if affil not in existing.affiliations:
                existing.affiliations.append(affil)
        for field in ("orcid", "given_name", "family_name", "name_identifier",
                      "name_identifier_scheme"):
            if getattr(existing, field) is None:
                setattr(existing, field, getattr(contributor, field))

    @staticmethod
    def _descriptions(root) -> list[ImportedDescription]:
        descriptions = []
        for el in _find_all(root, "descriptions", "description"):
            if (text := _text(el)) is None:
                continue
            raw_type = _attr(el, "descriptionType") or "Abstract"
            descriptions.append(
                ImportedDescription(
                    type=vocab.description_type(raw_type) or raw_type,
                    description=text,
                    language=_attr(el, XML_LANG),
                )
            )
        return descriptions

    @staticmethod
    def _dates(root) -> list[ImportedDate]:
        dates = []
        for el in _find_all(root, "dates", "date"):
            if (text := _text(el)) is None:
                continue
            start, _, end = text.partition("/")
            raw_type = _attr(el, "dateType")
            dates.append(
                ImportedDate(
                    date_type=vocab.date_type(raw_type) or raw_type,
                    start_date=start.strip(),
                    end_date=end.strip(),
                    date_information=_attr(el, "dateInformation"),
                )
            )
        return dates

    @staticmethod
    def _subjects(root) -> list[ImportedSubject]:
        return [
            ImportedSubject(
                subject=text,
                subject_scheme=_attr(el, "subjectScheme"),
                scheme_uri=_attr(el, "schemeURI"),
                value_uri=_attr(el, "valueURI"),
                classification_code=_attr(el, "classificationCode"),
            )
            for el in _find_all(root, "subjects", "subject")
            if (text := _text(el))
        ]

    @staticmethod
    def _point(node) -> ImportedPoint | None:
        if node is None:
            return None
        longitude = _child_text(node, "pointLongitude")
        latitude = _child_text(node, "pointLatitude")
        if longitude is None or latitude is None:
            return None
        return ImportedPoint(longitude=longitude, latitude=latitude)

    def _geo_locations(self, root) -> list[ImportedGeoLocation]:
        geos = []
        for el in _find_all(root, "geoLocations", "geoLocation"):
            geo = ImportedGeoLocation(
                place=_child_text(el, "geoLocationPlace"),
                point=self._point(_find(el, "geoLocationPoint")),
            )
            if (box := _find(el, "geoLocationBox")) is not None:
                geo.west_bound_longitude = _child_text(box, "westBoundLongitude")
                geo.east_bound_longitude = _child_text(box, "eastBoundLongitude")
                geo.south_bound_latitude = _child_text(box, "southBoundLatitude")
                geo.north_bound_latitude = _child_text(box, "northBoundLatitude")
            if (polygon := _find(el, "geoLocationPolygon")) is not None:
                points = map(self._point, _find_all(polygon, "polygonPoint"))
                geo.polygon = [p for p in points if p]
                geo.in_polygon_point = self._point(_find(polygon, "inPolygonPoint"))
            if geo.model_dump(exclude_defaults=True):
                geos.append(geo)
        return geos

    @staticmethod
    def _gcmd_keywords(root) -> list[ImportedGcmdKeyword]:
        keywords = []
        for el in _find_all(root, "subjects", "subject"):
            scheme = (_attr(el, "subjectScheme") or "").casefold()
            kind = next((k for label, k in GCMD_SCHEMES if label in scheme), None)
            match = _UUID.search(_attr(el, "valueURI") or "")
            if kind is None or match is None or (text := _text(el)) is None:
                continue
            uuid = match.group(0).lower()
            keywords.append(
                ImportedGcmdKeyword(
                    uuid=uuid,
                    id=f"{GCMD_CONCEPT_URI}/{uuid}",
                    path=gcmd_path(text),
                    type=kind,
                )
            )
        return keywords

    @staticmethod
    def _coverages(
        geo_locations: list[ImportedGeoLocation], dates: list[ImportedDate]
    ) -> list[ImportedCoverage]:
        temporal = next((d for d in dates if d.date_type == "Coverage"), None)
        start = temporal.start_date if temporal else ""
        end = temporal.end_date if temporal else ""

        if not geo_locations:
            if temporal is None:
                return []
            return [ImportedCoverage(id="coverage-1", start_date=start, end_date=end)]

        coverages = []
        for geo in geo_locations:
            coverage = ImportedCoverage(
                id=f"coverage-{len(coverages) + 1}",
                start_date=start,
                end_date=end,
                description=geo.place or "",
            )
            if geo.point is not None:
                coverage.lat_min = format_coordinate(geo.point.latitude)
                coverage.lon_min = format_coordinate(geo.point.longitude)
            if geo.west_bound_longitude is not None:
                coverage.lon_min = format_coordinate(geo.west_bound_longitude)
                coverage.lon_max = format_coordinate(geo.east_bound_longitude)
                coverage.lat_min = format_coordinate(geo.south_bound_latitude)
                coverage.lat_max = format_coordinate(geo.north_bound_latitude)
            if coverage.lat_min or coverage.lon_min or coverage.description or start:
                coverages.append(coverage)
        return coverages

    @staticmethod
    def _related_identifiers(root) -> list[ImportedRelatedIdentifier]:
        related = []
        for el in _find_all(root, "relatedIdentifiers", "relatedIdentifier"):
            if (text := _text(el)) is None:
                continue
            id_type = _attr(el, "relatedIdentifierType")
            relation = _attr(el, "relationType")
            related.append(
                ImportedRelatedIdentifier(
                    identifier=text,
                    identifier_type=vocab.related_identifier_type(id_type) or id_type,
                    relation_type=vocab.relation_type(relation) or relation,
                    resource_type_general=_attr(el, "resourceTypeGeneral"),
                )
            )
        return related

    @staticmethod
    def _funding_references(root) -> list[ImportedFundingReference]:
        funding = []
        for el in _find_all(root, "fundingReferences", "fundingReference"):
            identifier_el = _find(el, "funderIdentifier")
            identifier = _text(identifier_el)
            identifier_type = _attr(identifier_el, "funderIdentifierType")
            if identifier and identifier_type is None:
                identifier_type = detect_funder_identifier_type(identifier)
            award_el = _find(el, "awardNumber")
            ref = ImportedFundingReference(
                funder_name=_child_text(el, "funderName"),
                funder_identifier=identifier,
                funder_identifier_type=identifier_type,
                award_number=_text(award_el),
                award_uri=_attr(award_el, "awardURI"),
                award_title=_child_text(el, "awardTitle"),
            )
            if ref.model_dump(exclude_none=True):
                funding.append(ref)
        return funding


def _agent_payload(agent: ImportedAgent) -> dict:
    if agent.type == "person":
        identifier, scheme = agent.name_identifier, agent.name_identifier_scheme
        if agent.orcid:
            identifier, scheme = agent.orcid, "ORCID"
        return {
            "kind": "person",
            "givenName": agent.given_name,
            "familyName": agent.family_name,
            "nameIdentifier": identifier,
            "nameIdentifierScheme": scheme,
        }
    return {
        "kind": "institution",
        "name": agent.institution_name,
        "nameIdentifier": agent.name_identifier,
        "nameIdentifierScheme": agent.name_identifier_scheme,
    }


def _affiliations_payload(affiliations: list[ImportedAffiliation]) -> list[dict]:
    return [
        {
            "name": a.value,
            "identifier": a.ror_id or a.identifier,
            "identifierScheme": "ROR" if a.ror_id else a.identifier_scheme,
        }
        for a in affiliations
    ]


def _date_payload(date: ImportedDate, position: int) -> dict:
    d = {
        "dateType": date.date_type,
        "dateInformation": date.date_information,
        "position": position,
    }
    if date.start_date and date.end_date:
        d.update(startDate=date.start_date, endDate=date.end_date)
    else:
        d["dateValue"] = date.start_date or date.end_date or None
    return d


def _geo_payload(geo: ImportedGeoLocation, position: int) -> dict:
    def _point(p: ImportedPoint | None) -> dict | None:
        return None if p is None else {"longitude": p.longitude, "latitude": p.latitude}

    bounds = (
        geo.west_bound_longitude,
        geo.east_bound_longitude,
        geo.south_bound_latitude,
        geo.north_bound_latitude,
    )
    box = None
    if all(b is not None for b in bounds):
        box = dict(
            zip(
                (
                    "westBoundLongitude",
                    "eastBoundLongitude",
                    "southBoundLatitude",
                    "northBoundLatitude",
                ),
                bounds,
            )
        )
    return {
        "place": geo.place,
        "point": _point(geo.point),
        "box": box,
        "polygon": [_point(p) for p in geo.polygon],
        "inPolygonPoint": _point(geo.in_polygon_point),
        "position": position,
    }


def imported_to_resource(imported: ImportedResource, resource_id: int | None = None) -> Resource:
    """Save an import result through strict validation"""
    year = imported.year if imported.year and imported.year.isdigit() else None

    contributors = []
    for c in imported.contributors:
        for role in c.roles or ["Other"]:
            contributors.append(
                {
                    "agent": _agent_payload(c),
                    "contributorType": role,
                    "affiliations": _affiliations_payload(c.affiliations),
                }
            )
    for lab in imported.msl_laboratories:
        contributors.append(
            {
                "agent": {
                    "kind": "institution",
                    "name": lab.name or None,
                    "nameIdentifier": lab.identifier,
                    "nameIdentifierScheme": vocab.LABID_SCHEME,
                },
                "contributorType": "HostingInstitution",
                "affiliations": [
                    {
                        "name": lab.affiliation_name or None,
                        "identifier": lab.affiliation_ror or None,
                        "identifierScheme": "ROR" if lab.affiliation_ror else None,
                    }
                ],
            }
        )

    payload = {
        "id": resource_id,
        "doi": imported.doi,
        "publicationYear": year,
        "version": imported.version,
        "resourceType": imported.resource_type,
        "language": imported.language,
        "publisher": {"name": imported.publisher} if imported.publisher else None,
        "titles": [
            {"value": t.title, "titleType": t.title_type, "language": t.language, "position": i}
            for i, t in enumerate(imported.titles)
        ],
        "creators": [
            {
                "agent": _agent_payload(c),
                "affiliations": _affiliations_payload(c.affiliations),
                "position": i,
            }
            for i, c in enumerate(imported.creators)
        ],
        "contributors": [dict(c, position=i) for i, c in enumerate(contributors)],
        "descriptions": [
            {"value": d.description, "descriptionType": d.type, "language": d.language, "position": i}
            for i, d in enumerate(imported.descriptions)
        ],
        "dates": [
            _date_payload(d, i) for i, d in enumerate(imported.dates) if d.date_type
        ],
        "subjects": [
            {
                "value": s.subject,
                "subjectScheme": s.subject_scheme,
                "schemeUri": s.scheme_uri,
                "valueUri": s.value_uri,
                "classificationCode": s.classification_code,
                "position": i,
            }
            for i, s in enumerate(imported.subjects)
        ],
        "rights": [
            {
                "name": r.rights or r.rights_identifier,
                "identifier": r.rights_identifier,
                "uri": r.rights_uri,
                "position": i,
            }
            for i, r in enumerate(imported.rights)
            if r.rights or r.rights_identifier
        ],
        "geoLocations": [_geo_payload(g, i) for i, g in enumerate(imported.geo_locations)],
        "fundingReferences": [
            {
                "funderName": f.funder_name,
                "funderIdentifier": f.funder_identifier,
                "funderIdentifierType": f.funder_identifier_type,
                "awardNumber": f.award_number,
                "awardUri": f.award_uri,
                "awardTitle": f.award_title,
                "position": i,
            }
            for i, f in enumerate(imported.funding_references)
            if f.funder_name
        ],
        "relatedIdentifiers": [
            {
                "identifier": r.identifier,
                "identifierType": r.identifier_type or "DOI",
                "relationType": r.relation_type or "References",
                "resourceTypeGeneral": r.resource_type_general,
                "position": i,
            }
            for i, r in enumerate(imported.related_identifiers)
        ],
    }
    return validate_resource_payload(payload)

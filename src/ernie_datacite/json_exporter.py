from logging import Logger

from . import DATACITE_NAMESPACE
from . import vocabularies as vocab
from .commons import (
    UNTITLED,
    by_position,
    map_alternate_identifier,
    map_contributor,
    map_creator,
    map_dates,
    map_description,
    map_funding_reference,
    map_geo_location,
    map_publisher,
    map_related_identifier,
    map_right,
    map_subject,
    map_titles,
    placeholder_creator,
)
from .logger import datacite_log
from .models.main import Resource


class JsonExporter:
    """Build a DataCite REST (JSON:API ``dois``) document from a Resource"""

    def __init__(self, log: Logger = datacite_log) -> None:
        self.log = log

    def export(self, resource: Resource) -> dict:
        self.log.debug(f"Exporting resource {resource.id} to DataCite JSON")
        return {"data": {"type": "dois", "attributes": self.attributes(resource)}}

    def attributes(self, resource: Resource) -> dict:
        lang = resource.language
        attrs = {"doi": resource.doi or None}
        if resource.doi:
            attrs["identifiers"] = [{"identifier": resource.doi, "identifierType": "DOI"}]

        creators = [map_creator(c) for c in by_position(resource.creators)]
        attrs["creators"] = creators or [placeholder_creator()]
        attrs["titles"] = map_titles(resource.titles, lang) or [{"title": UNTITLED}]
        attrs["publisher"] = map_publisher(resource.publisher, lang)
        year = resource.publication_year
        attrs["publicationYear"] = None if year is None else str(year)

        types = {"resourceTypeGeneral": vocab.resource_type_general(resource.resource_type)}
        if resource.resource_type:
            types["resourceType"] = resource.resource_type
        attrs["types"] = types

        optional = {
            "subjects": [
                s for s in (map_subject(x, lang) for x in by_position(resource.subjects)) if s
            ],
            "contributors": [map_contributor(c) for c in by_position(resource.contributors)],
            "dates": map_dates(resource.dates),
            "language": resource.language,
            "alternateIdentifiers": [
                map_alternate_identifier(a)
                for a in by_position(resource.alternate_identifiers)
            ],
            "relatedIdentifiers": [
                map_related_identifier(r) for r in by_position(resource.related_identifiers)
            ],
            "sizes": [s for s in resource.sizes if s and s.strip()],
            "formats": [f for f in resource.formats if f and f.strip()],
            "version": resource.version,
            "rightsList": [map_right(r, lang) for r in by_position(resource.rights)],
            "descriptions": [
                d
                for d in (map_description(x, lang) for x in by_position(resource.descriptions))
                if d
            ],
            "geoLocations": [
                g for g in map(map_geo_location, by_position(resource.geo_locations)) if g
            ],
            "fundingReferences": [
                map_funding_reference(f) for f in by_position(resource.funding_references)
            ],
        }
        attrs.update({k: v for k, v in optional.items() if v})
        attrs["schemaVersion"] = DATACITE_NAMESPACE
        return attrs

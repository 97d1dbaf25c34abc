"""
Serialise a Resource to a DataCite 4.6 XML document.

The field mappers in ``commons`` produce DataCite JSON-shaped dicts; this
module lays them out as kernel-4 elements. JSON keys that differ from the XML
attribute names are translated through ``XML_ATTRIBUTES``.
"""

from logging import Logger

from lxml import etree

from . import DATACITE_NAMESPACE, SCHEMA_LOCATION, XML_NAMESPACE, XSI_NAMESPACE
from . import vocabularies as vocab
from .commons import (
    UNTITLED,
    by_position,
    format_decimal,
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
    xml_safe,
)
from .logger import datacite_log
from .models.main import Resource

NSMAP = {None: DATACITE_NAMESPACE, "xsi": XSI_NAMESPACE}

XML_ATTRIBUTES = {
    "schemeUri": "schemeURI",
    "valueUri": "valueURI",
    "rightsUri": "rightsURI",
    "awardUri": "awardURI",
    "lang": f"{{{XML_NAMESPACE}}}lang",
}


def _tag(name: str) -> str:
    return f"{{{DATACITE_NAMESPACE}}}{name}"


def _sub(parent, name: str, text=None, attrs: dict | None = None, keys=()):
    el = etree.SubElement(parent, _tag(name))
    if text is not None:
        el.text = xml_safe(str(text))
    attrs = attrs or {}
    for key in keys:
        if (value := attrs.get(key)) not in (None, ""):
            el.set(XML_ATTRIBUTES.get(key, key), xml_safe(str(value)))
    return el


class XmlExporter:
    """Build a DataCite kernel-4 ``<resource>`` document from a Resource"""

    def __init__(self, log: Logger = datacite_log) -> None:
        self.log = log

    def export(self, resource: Resource) -> str:
        root = self.build(resource)
        return etree.tostring(
            root, xml_declaration=True, encoding="UTF-8", pretty_print=True
        ).decode()

    def build(self, resource: Resource) -> etree._Element:
        self.log.debug(f"Exporting resource {resource.id} to DataCite XML")
        lang = resource.language

        root = etree.Element(_tag("resource"), nsmap=NSMAP)
        root.set(f"{{{XSI_NAMESPACE}}}schemaLocation", SCHEMA_LOCATION)

        _sub(root, "identifier", resource.doi or "", {"identifierType": "DOI"},
             ["identifierType"])
        self._creators(root, resource)
        self._titles(root, resource)

        publisher = map_publisher(resource.publisher, lang)
        _sub(
            root,
            "publisher",
            publisher["name"],
            publisher,
            ["publisherIdentifier", "publisherIdentifierScheme", "schemeUri", "lang"],
        )
        year = resource.publication_year
        _sub(root, "publicationYear", "" if year is None else year)
        _sub(
            root,
            "resourceType",
            resource.resource_type or "",
            {"resourceTypeGeneral": vocab.resource_type_general(resource.resource_type)},
            ["resourceTypeGeneral"],
        )

        self._subjects(root, resource)
        self._contributors(root, resource)
        self._dates(root, resource)
        if resource.language:
            _sub(root, "language", resource.language)
        self._alternate_identifiers(root, resource)
        self._related_identifiers(root, resource)
        self._simple_list(root, "sizes", "size", resource.sizes)
        self._simple_list(root, "formats", "format", resource.formats)
        if resource.version:
            _sub(root, "version", resource.version)
        self._rights(root, resource)
        self._descriptions(root, resource)
        self._geo_locations(root, resource)
        self._funding_references(root, resource)
        return root

    @staticmethod
    def _agent(parent, tag: str, d: dict) -> None:
        _sub(parent, f"{tag}Name", d["name"], d, ["nameType"])
        if given := d.get("givenName"):
            _sub(parent, "givenName", given)
        if family := d.get("familyName"):
            _sub(parent, "familyName", family)
        for ni in d.get("nameIdentifiers", []):
            _sub(parent, "nameIdentifier", ni["nameIdentifier"], ni,
                 ["nameIdentifierScheme", "schemeUri"])
        for affil in d.get("affiliation", []):
            _sub(
                parent,
                "affiliation",
                affil["name"],
                affil,
                ["affiliationIdentifier", "affiliationIdentifierScheme", "schemeUri"],
            )

    def _creators(self, root, resource: Resource) -> None:
        creators = [map_creator(c) for c in by_position(resource.creators)]
        if not creators:
            self.log.debug("No creators, writing placeholder")
            creators = [placeholder_creator()]
        el = _sub(root, "creators")
        for d in creators:
            self._agent(_sub(el, "creator"), "creator", d)

    def _titles(self, root, resource: Resource) -> None:
        titles = map_titles(resource.titles, resource.language) or [{"title": UNTITLED}]
        el = _sub(root, "titles")
        for d in titles:
            _sub(el, "title", d["title"], d, ["titleType", "lang"])

    def _subjects(self, root, resource: Resource) -> None:
        subjects = [
            s
            for s in (map_subject(x, resource.language) for x in by_position(resource.subjects))
            if s
        ]
        if not subjects:
            return
        el = _sub(root, "subjects")
        for d in subjects:
            _sub(
                el,
                "subject",
                d["subject"],
                d,
                ["subjectScheme", "schemeUri", "valueUri", "classificationCode", "lang"],
            )

    def _contributors(self, root, resource: Resource) -> None:
        if not resource.contributors:
            return
        el = _sub(root, "contributors")
        for c in by_position(resource.contributors):
            d = map_contributor(c)
            self._agent(_sub(el, "contributor", attrs=d, keys=["contributorType"]),
                        "contributor", d)

    def _dates(self, root, resource: Resource) -> None:
        if not (dates := map_dates(resource.dates)):
            return
        el = _sub(root, "dates")
        for d in dates:
            _sub(el, "date", d["date"], d, ["dateType", "dateInformation"])

    def _alternate_identifiers(self, root, resource: Resource) -> None:
        if not resource.alternate_identifiers:
            return
        el = _sub(root, "alternateIdentifiers")
        for a in by_position(resource.alternate_identifiers):
            d = map_alternate_identifier(a)
            _sub(el, "alternateIdentifier", d["alternateIdentifier"], d,
                 ["alternateIdentifierType"])

    def _related_identifiers(self, root, resource: Resource) -> None:
        if not resource.related_identifiers:
            return
        el = _sub(root, "relatedIdentifiers")
        for r in by_position(resource.related_identifiers):
            d = map_related_identifier(r)
            _sub(
                el,
                "relatedIdentifier",
                d["relatedIdentifier"],
                d,
                ["relatedIdentifierType", "relationType", "resourceTypeGeneral"],
            )

    @staticmethod
    def _simple_list(root, wrapper: str, tag: str, values: list[str]) -> None:
        values = [v for v in values if v and v.strip()]
        if not values:
            return
        el = _sub(root, wrapper)
        for v in values:
            _sub(el, tag, v)

    def _rights(self, root, resource: Resource) -> None:
        if not resource.rights:
            return
        el = _sub(root, "rightsList")
        for r in by_position(resource.rights):
            d = map_right(r, resource.language)
            _sub(
                el,
                "rights",
                d.get("rights", ""),
                d,
                ["lang", "rightsUri", "rightsIdentifier", "rightsIdentifierScheme",
                 "schemeUri"],
            )

    def _descriptions(self, root, resource: Resource) -> None:
        descriptions = [
            d
            for d in (
                map_description(x, resource.language)
                for x in by_position(resource.descriptions)
            )
            if d
        ]
        if not descriptions:
            return
        el = _sub(root, "descriptions")
        for d in descriptions:
            _sub(el, "description", d["description"], d, ["descriptionType", "lang"])

    @staticmethod
    def _point(parent, tag: str, point: dict) -> None:
        el = _sub(parent, tag)
        _sub(el, "pointLongitude", format_decimal(point["pointLongitude"]))
        _sub(el, "pointLatitude", format_decimal(point["pointLatitude"]))

    def _geo_locations(self, root, resource: Resource) -> None:
        geos = [g for g in map(map_geo_location, by_position(resource.geo_locations)) if g]
        if not geos:
            return
        el = _sub(root, "geoLocations")
        for g in geos:
            geo_el = _sub(el, "geoLocation")
            if place := g.get("geoLocationPlace"):
                _sub(geo_el, "geoLocationPlace", place)
            if point := g.get("geoLocationPoint"):
                self._point(geo_el, "geoLocationPoint", point)
            if box := g.get("geoLocationBox"):
                box_el = _sub(geo_el, "geoLocationBox")
                for key in (
                    "westBoundLongitude",
                    "eastBoundLongitude",
                    "southBoundLatitude",
                    "northBoundLatitude",
                ):
                    _sub(box_el, key, format_decimal(box[key]))
            if polygon := g.get("geoLocationPolygon"):
                polygon_el = _sub(geo_el, "geoLocationPolygon")
                for entry in polygon:
                    for tag, point in entry.items():
                        self._point(polygon_el, tag, point)

    def _funding_references(self, root, resource: Resource) -> None:
        if not resource.funding_references:
            return
        el = _sub(root, "fundingReferences")
        for f in by_position(resource.funding_references):
            d = map_funding_reference(f)
            ref = _sub(el, "fundingReference")
            _sub(ref, "funderName", d["funderName"])
            if identifier := d.get("funderIdentifier"):
                _sub(ref, "funderIdentifier", identifier, d,
                     ["funderIdentifierType", "schemeUri"])
            if award := d.get("awardNumber"):
                _sub(ref, "awardNumber", award, d, ["awardUri"])
            if title := d.get("awardTitle"):
                _sub(ref, "awardTitle", title)

from lxml import etree

from ernie_datacite.commons import map_creator, map_dates, map_titles
from ernie_datacite.importer import XmlImporter, imported_to_resource
from ernie_datacite.xml_exporter import XmlExporter


def test_export_import_export(resource) -> None:
    xml = XmlExporter().export(resource)
    imported = XmlImporter().import_xml(xml)
    again = imported_to_resource(imported, resource_id=resource.id)

    assert [map_creator(c) for c in again.creators] == [
        map_creator(c) for c in resource.creators
    ]
    assert map_titles(again.titles, again.language) == map_titles(
        resource.titles, resource.language
    )
    assert map_dates(again.dates) == map_dates(resource.dates)

    # the MSL laboratory survives as a HostingInstitution with its labid
    labs = [c for c in again.contributors if getattr(c.agent, "is_laboratory", False)]
    assert [lab.agent.name_identifier for lab in labs] == [
        resource.contributors[1].agent.name_identifier
    ]

    second = etree.fromstring(XmlExporter().export(again).encode("utf-8"))
    first = etree.fromstring(xml.encode("utf-8"))
    ns = {"dc": "http://datacite.org/schema/kernel-4"}
    for path in ("dc:creators", "dc:titles", "dc:dates", "dc:geoLocations"):
        assert etree.tostring(second.find(path, ns)) == etree.tostring(first.find(path, ns))

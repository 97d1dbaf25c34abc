import copy
from unittest import mock

import pytest

from ernie_datacite.models.main import Resource
from ernie_datacite.msl import MslLaboratoryService
from ernie_datacite.validation import validate_resource_payload

LAB_ID = "9cbd1ff1b1e8a4f6c1a6d3e5c8b7a2f1"

RESOURCE_PAYLOAD = {
    "id": 42,
    "doi": "10.5880/GFZ.1.2.2024.001",
    "publicationYear": 2024,
    "version": "1.0",
    "resourceType": "Dataset",
    "language": "en",
    "titles": [
        {"value": 'Rock & Roll <Deformation> "Lab"', "position": 0},
        {"value": "Triaxial experiments", "titleType": "subtitle", "position": 1},
    ],
    "creators": [
        {
            "agent": {
                "kind": "person",
                "givenName": "Holger",
                "familyName": "Ehrmann",
                "nameIdentifier": "0000-0001-5727-2427",
            },
            "affiliations": [
                {"name": "GFZ Helmholtz Centre for Geosciences", "identifier": "04z8jg394"}
            ],
            "position": 0,
        },
        {"agent": {"kind": "institution", "name": "Example Institute"}, "position": 1},
    ],
    "contributors": [
        {
            "agent": {"kind": "person", "givenName": "Anna", "familyName": "Schmidt"},
            "contributorType": "ContactPerson",
            "position": 0,
        },
        {
            "agent": {
                "kind": "institution",
                "name": "Rock Physics Lab",
                "nameIdentifier": LAB_ID,
                "nameIdentifierScheme": "labid",
            },
            "contributorType": "HostingInstitution",
            "affiliations": [
                {"name": "Utrecht University", "identifier": "https://ror.org/04pp8hn57"}
            ],
            "position": 1,
        },
    ],
    "descriptions": [{"value": "An abstract.", "descriptionType": "Abstract"}],
    "dates": [
        {"dateType": "Collected", "startDate": "2024-01-01", "endDate": "2024-12-31"},
        {"dateType": "Created", "dateValue": "2024-03-01", "position": 1},
    ],
    "subjects": [{"value": "geophysics", "subjectScheme": "GCMD"}],
    "rights": [
        {
            "name": "Creative Commons Attribution 4.0 International",
            "identifier": "CC-BY-4.0",
            "uri": "https://creativecommons.org/licenses/by/4.0/",
        }
    ],
    "geoLocations": [
        {
            "place": "Potsdam",
            "point": {"longitude": 13.066, "latitude": 52.38},
            "box": {
                "westBoundLongitude": 12.5,
                "eastBoundLongitude": 13.5,
                "southBoundLatitude": 52.0,
                "northBoundLatitude": 52.5,
            },
            "polygon": [
                {"longitude": 12.5, "latitude": 52.0},
                {"longitude": 13.5, "latitude": 52.0},
                {"longitude": 13.0, "latitude": 52.5},
            ],
        }
    ],
    "fundingReferences": [
        {
            "funderName": "Deutsche Forschungsgemeinschaft",
            "funderIdentifier": "https://doi.org/10.13039/501100001659",
            "awardNumber": "DFG-123",
            "awardUri": "https://gepris.dfg.de/gepris/projekt/123",
            "awardTitle": "Rock deformation",
        }
    ],
    "relatedIdentifiers": [
        {"identifier": "10.1234/abc", "identifierType": "DOI", "relationType": "IsCitedBy"}
    ],
    "sizes": ["1 GB"],
    "formats": ["application/zip"],
}

LABORATORIES = [
    {
        "identifier": LAB_ID,
        "name": "HPT Laboratory (Utrecht University, The Netherlands)",
        "affiliation_name": "Utrecht University",
        "affiliation_ror": "https://ror.org/04pp8hn57",
    },
    {"name": "Lab without an identifier"},
]

DATACITE_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<resource xmlns="http://datacite.org/schema/kernel-4"
          xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
          xsi:schemaLocation="http://datacite.org/schema/kernel-4 https://schema.datacite.org/meta/kernel-4.6/metadata.xsd">
  <identifier identifierType="DOI">10.5880/GFZ.4.8.2023.004</identifier>
  <creators>
    <creator>
      <creatorName nameType="Personal">Ehrmann, Holger</creatorName>
      <givenName>Holger</givenName>
      <familyName>Ehrmann</familyName>
      <nameIdentifier nameIdentifierScheme="ORCID" schemeURI="https://orcid.org">https://orcid.org/0000-0001-5727-2427</nameIdentifier>
      <affiliation affiliationIdentifier="https://ror.org/04z8jg394">GFZ Helmholtz Centre for Geosciences</affiliation>
    </creator>
    <creator>
      <creatorName>Doe, Jane</creatorName>
    </creator>
  </creators>
  <titles>
    <title titleType="Subtitle" xml:lang="en">A subtitle</title>
    <title xml:lang="en">The main title</title>
  </titles>
  <publisher>GFZ Data Services</publisher>
  <publicationYear>2023</publicationYear>
  <resourceType resourceTypeGeneral="Dataset">Dataset</resourceType>
  <subjects>
    <subject subjectScheme="GCMD" schemeURI="https://gcmd.earthdata.nasa.gov/kms" valueURI="https://gcmd.earthdata.nasa.gov/kms/concept/1">EARTH SCIENCE</subject>
  </subjects>
  <contributors>
    <contributor contributorType="DataCollector">
      <contributorName nameType="Personal">Schmidt, Anna</contributorName>
      <nameIdentifier nameIdentifierScheme="ORCID">0000-0002-1825-0097</nameIdentifier>
      <affiliation affiliationIdentifier="https://ror.org/04z8jg394" affiliationIdentifierScheme="ROR">GFZ</affiliation>
    </contributor>
    <contributor contributorType="ContactPerson; DataCurator">
      <contributorName nameType="Personal">Schmidt, Anna</contributorName>
      <nameIdentifier nameIdentifierScheme="ORCID">https://orcid.org/0000-0002-1825-0097</nameIdentifier>
      <affiliation>Universität Potsdam</affiliation>
    </contributor>
    <contributor contributorType="HostingInstitution">
      <contributorName nameType="Organizational">Rock lab from XML</contributorName>
      <nameIdentifier nameIdentifierScheme="labid">{LAB_ID}</nameIdentifier>
      <affiliation affiliationIdentifier="https://ror.org/04pp8hn57" affiliationIdentifierScheme="ROR">Utrecht University</affiliation>
    </contributor>
    <contributor contributorType="HostingInstitution">
      <contributorName nameType="Organizational">GFZ Data Services</contributorName>
    </contributor>
    <contributor contributorType="Sponsor">
      <contributorName>Helmholtz Association</contributorName>
      <nameIdentifier nameIdentifierScheme="ROR">https://ror.org/0281DP749</nameIdentifier>
    </contributor>
  </contributors>
  <dates>
    <date dateType="Collected">2022-01-01/2022-06-30</date>
    <date dateType="Available">2023-05-01</date>
  </dates>
  <language>en</language>
  <relatedIdentifiers>
    <relatedIdentifier relatedIdentifierType="DOI" relationType="IsSupplementTo">10.1016/j.tecto.2023.229999</relatedIdentifier>
  </relatedIdentifiers>
  <version>2.1</version>
  <rightsList>
    <rights rightsURI="https://creativecommons.org/licenses/by/4.0/" rightsIdentifier="CC-BY-4.0" rightsIdentifierScheme="SPDX">Creative Commons Attribution 4.0 International</rights>
  </rightsList>
  <descriptions>
    <description descriptionType="Abstract" xml:lang="en">Rock &amp; fluid experiments.</description>
    <description descriptionType="Methods">   </description>
  </descriptions>
  <geoLocations>
    <geoLocation>
      <geoLocationPlace>Potsdam</geoLocationPlace>
      <geoLocationPoint>
        <pointLongitude>13.066</pointLongitude>
        <pointLatitude>52.38</pointLatitude>
      </geoLocationPoint>
    </geoLocation>
  </geoLocations>
  <fundingReferences>
    <fundingReference>
      <funderName>Deutsche Forschungsgemeinschaft</funderName>
      <funderIdentifier>https://doi.org/10.13039/501100001659</funderIdentifier>
      <awardNumber awardURI="https://gepris.dfg.de/gepris/projekt/123">DFG-123</awardNumber>
      <awardTitle>Rock deformation</awardTitle>
    </fundingReference>
    <fundingReference>
      <funderName>Some Agency</funderName>
      <funderIdentifier funderIdentifierType="Made Up">XYZ</funderIdentifier>
    </fundingReference>
  </fundingReferences>
</resource>
"""


@pytest.fixture
def resource_payload() -> dict:
    return copy.deepcopy(RESOURCE_PAYLOAD)


@pytest.fixture
def resource(resource_payload) -> Resource:
    return validate_resource_payload(resource_payload)


@pytest.fixture
def empty_resource() -> Resource:
    return Resource()


@pytest.fixture
def datacite_xml() -> str:
    return DATACITE_XML


def fake_response(json_data=None) -> mock.Mock:
    response = mock.Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = json_data
    return response


@pytest.fixture
def mock_requests_get():
    with mock.patch("ernie_datacite.msl.requests.get") as mock_get:
        mock_get.return_value = fake_response(copy.deepcopy(LABORATORIES))
        yield mock_get


@pytest.fixture
def msl_service(mock_requests_get) -> MslLaboratoryService:
    return MslLaboratoryService(url="https://example.org/labs.json", ttl=3600)

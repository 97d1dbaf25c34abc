import pytest

from ernie_datacite.commons import (
    build_name_identifier,
    close_polygon,
    detect_funder_identifier_type,
    format_date_value,
    format_decimal,
    format_institution_name,
    format_person_name,
    map_affiliation,
    map_funding_reference,
    map_publisher,
    map_titles,
    merge_date_ranges,
    name_type,
    normalize_name,
    normalize_orcid,
    normalize_ror,
    xml_safe,
)
from ernie_datacite.models.commons import Affiliation, Institution, Person, Publisher
from ernie_datacite.models.main import FundingReference, GeoPoint, ResourceDate, Title


def test_format_person_name() -> None:
    assert format_person_name(Person(given_name="Holger", family_name="Ehrmann")) == (
        "Ehrmann, Holger"
    )
    assert format_person_name(Person(family_name="Ehrmann")) == "Ehrmann"
    assert format_person_name(Person(given_name="Holger")) == "Holger"
    assert format_person_name(Person()) == "Unknown"


def test_format_institution_name() -> None:
    assert format_institution_name(Institution(name="GFZ")) == "GFZ"
    assert format_institution_name(Institution()) == "Unknown Institution"
    lab = Institution(name_identifier="abc", name_identifier_scheme="labid")
    assert format_institution_name(lab) == "Unknown Laboratory"


def test_name_type() -> None:
    assert name_type(Person()) == "Personal"
    assert name_type(Institution()) == "Organizational"


def test_identifier_normalisation() -> None:
    assert normalize_ror("04Z8JG394") == "https://ror.org/04z8jg394"
    assert normalize_ror("http://ror.org/04z8jg394/") == "https://ror.org/04z8jg394"
    assert normalize_ror("") is None
    assert normalize_orcid("0000-0001-5727-2427") == "https://orcid.org/0000-0001-5727-2427"
    assert normalize_orcid("https://orcid.org/0000-0002-1694-233x") == (
        "https://orcid.org/0000-0002-1694-233X"
    )


def test_build_name_identifier() -> None:
    person = Person(family_name="Ehrmann", name_identifier="0000-0001-5727-2427")
    assert build_name_identifier(person) == {
        "nameIdentifier": "https://orcid.org/0000-0001-5727-2427",
        "nameIdentifierScheme": "ORCID",
        "schemeUri": "https://orcid.org",
    }

    institution = Institution(name="GFZ", name_identifier="04z8jg394")
    assert build_name_identifier(institution)["nameIdentifier"] == (
        "https://ror.org/04z8jg394"
    )

    lab = Institution(name="Lab", name_identifier="abc123", name_identifier_scheme="labid")
    assert build_name_identifier(lab) == {
        "nameIdentifier": "abc123",
        "nameIdentifierScheme": "labid",
    }

    assert build_name_identifier(Institution(name="No id")) is None


def test_map_affiliation() -> None:
    assert map_affiliation(Affiliation(name="GFZ", identifier="04z8jg394")) == {
        "name": "GFZ",
        "affiliationIdentifier": "https://ror.org/04z8jg394",
        "affiliationIdentifierScheme": "ROR",
        "schemeUri": "https://ror.org",
    }
    assert map_affiliation(Affiliation(name="Plain")) == {"name": "Plain"}
    assert map_affiliation(Affiliation()) is None


def test_map_titles_main_title_first() -> None:
    titles = [
        Title(value="Alt", title_type="alternative-title", position=0),
        Title(value="Main", position=1),
        Title(value="Second untyped", position=2),
    ]
    assert map_titles(titles, "en") == [
        {"title": "Main", "lang": "en"},
        {"title": "Alt", "titleType": "AlternativeTitle", "lang": "en"},
        {"title": "Second untyped", "titleType": "AlternativeTitle", "lang": "en"},
    ]


def test_map_titles_without_main_title() -> None:
    titles = [Title(value="Sub", title_type="Subtitle", language="de")]
    assert map_titles(titles) == [{"title": "Sub", "titleType": "Subtitle", "lang": "de"}]


def test_format_date_value() -> None:
    closed = ResourceDate(date_type="Collected", start_date="2024-01-01", end_date="2024-12-31")
    assert format_date_value(closed) == "2024-01-01/2024-12-31"
    assert format_date_value(ResourceDate(date_type="Created", start_date="2024-01-01")) == (
        "2024-01-01"
    )
    assert format_date_value(ResourceDate(date_type="Created", date_value="2024")) == "2024"
    assert format_date_value(ResourceDate(date_type="Created")) is None


def test_merge_date_ranges() -> None:
    dates = [
        ResourceDate(date_type="Collected", start_date="2024-01-01", position=0),
        ResourceDate(date_type="Created", date_value="2024-02-01", position=1),
        ResourceDate(date_type="Collected", end_date="2024-12-31", position=2),
    ]
    merged = merge_date_ranges(dates)
    assert len(merged) == 2
    assert format_date_value(merged[0]) == "2024-01-01/2024-12-31"
    # input is left untouched
    assert dates[0].end_date is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12.500000", "12.5"),
        (10.0, "10"),
        (-0.0, "0"),
        (13.066, "13.066"),
        ("-45.10", "-45.1"),
    ],
)
def test_format_decimal(value, expected) -> None:
    assert format_decimal(value) == expected


def test_close_polygon() -> None:
    points = [
        GeoPoint(longitude=0, latitude=0),
        GeoPoint(longitude=1, latitude=0),
        GeoPoint(longitude=1, latitude=1),
    ]
    ring = close_polygon(points)
    assert len(ring) == 4
    assert ring[-1] == ring[0]
    assert close_polygon(ring) == ring
    assert close_polygon(points[:2] + [points[0]]) == []


@pytest.mark.parametrize(
    "value, expected",
    [
        ("https://ror.org/018mejw64", "ROR"),
        ("018mejw64", "ROR"),
        ("https://doi.org/10.13039/501100001659", "Crossref Funder ID"),
        ("0000 0001 2151 123X", "ISNI"),
        ("0000-0001-2151-1234", "ISNI"),
        ("grid.5801.c", "GRID"),
        ("something else", "Other"),
        ("", None),
        (None, None),
    ],
)
def test_detect_funder_identifier_type(value, expected) -> None:
    assert detect_funder_identifier_type(value) == expected


def test_map_funding_reference_detects_type() -> None:
    funding = FundingReference(
        funder_name="DFG", funder_identifier="https://doi.org/10.13039/501100001659"
    )
    d = map_funding_reference(funding)
    assert d["funderIdentifierType"] == "Crossref Funder ID"
    assert d["schemeUri"] == "https://doi.org/10.13039/"
    assert "awardNumber" not in d


def test_map_publisher_default() -> None:
    d = map_publisher(None, "en")
    assert d["name"] == "GFZ Helmholtz Centre for Geosciences"
    assert d["publisherIdentifier"] == "https://ror.org/04z8jg394"
    assert d["publisherIdentifierScheme"] == "ROR"
    assert d["lang"] == "en"

    custom = map_publisher(Publisher(name="Elsewhere", language="de"), "en")
    assert custom == {"name": "Elsewhere", "lang": "de"}


def test_xml_safe() -> None:
    assert xml_safe("a\x00b\x1fc\td") == "abc\td"
    assert xml_safe("Grüße & <tags>") == "Grüße & <tags>"
    assert xml_safe(None) is None


def test_normalize_name() -> None:
    assert normalize_name("  Schmidt,   ANNA ") == "schmidt, anna"

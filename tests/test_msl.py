from unittest import mock

import requests

from conftest import LAB_ID, fake_response
from ernie_datacite.msl import MslLaboratoryService


def test_find_by_lab_id(msl_service, mock_requests_get) -> None:
    lab = msl_service.find_by_lab_id(LAB_ID)
    assert lab["name"] == "HPT Laboratory (Utrecht University, The Netherlands)"
    assert msl_service.is_valid_lab_id(f"  {LAB_ID} ")
    assert not msl_service.is_valid_lab_id("unknown")
    assert not msl_service.is_valid_lab_id("")
    mock_requests_get.assert_called_once_with(
        "https://example.org/labs.json", timeout=msl_service.timeout
    )


def test_entries_without_identifier_are_ignored(msl_service) -> None:
    assert list(msl_service.laboratories()) == [LAB_ID]


def test_cache_and_clear(msl_service, mock_requests_get) -> None:
    msl_service.find_by_lab_id(LAB_ID)
    msl_service.find_by_lab_id(LAB_ID)
    assert mock_requests_get.call_count == 1

    msl_service.clear_cache()
    msl_service.find_by_lab_id(LAB_ID)
    assert mock_requests_get.call_count == 2


def test_cache_expires(mock_requests_get) -> None:
    service = MslLaboratoryService(url="https://example.org/labs.json", ttl=0)
    service.find_by_lab_id(LAB_ID)
    service.find_by_lab_id(LAB_ID)
    assert mock_requests_get.call_count == 2


def test_enrich_prefers_vocabulary(msl_service) -> None:
    data = msl_service.enrich_laboratory_data(LAB_ID, "XML name", "XML affiliation", "")
    assert data == {
        "identifier": LAB_ID,
        "name": "HPT Laboratory (Utrecht University, The Netherlands)",
        "affiliation_name": "Utrecht University",
        "affiliation_ror": "https://ror.org/04pp8hn57",
    }


def test_enrich_falls_back_to_xml(msl_service) -> None:
    data = msl_service.enrich_laboratory_data("missing", "XML name", "XML affiliation")
    assert data == {
        "identifier": "missing",
        "name": "XML name",
        "affiliation_name": "XML affiliation",
        "affiliation_ror": "",
    }


def test_http_error_is_empty_and_not_cached(mock_requests_get) -> None:
    mock_requests_get.side_effect = requests.ConnectionError("unreachable")
    service = MslLaboratoryService(url="https://example.org/labs.json")
    assert service.find_by_lab_id(LAB_ID) is None
    assert service.laboratories() == {}
    assert mock_requests_get.call_count == 2


def test_http_status_error(mock_requests_get) -> None:
    response = fake_response()
    response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    mock_requests_get.return_value = response
    service = MslLaboratoryService(url="https://example.org/labs.json")
    assert not service.is_valid_lab_id(LAB_ID)


def test_invalid_json(mock_requests_get) -> None:
    response = fake_response()
    response.json.side_effect = ValueError("Expecting value")
    mock_requests_get.return_value = response
    service = MslLaboratoryService(url="https://example.org/labs.json")
    assert service.laboratories() == {}

    mock_requests_get.return_value = fake_response({"not": "a list"})
    assert service.laboratories() == {}


def test_uses_configured_url() -> None:
    with mock.patch("ernie_datacite.msl.requests.get") as mock_get:
        mock_get.return_value = fake_response([])
        service = MslLaboratoryService()
        service.laboratories()
    assert "laboratories.json" in mock_get.call_args.args[0]

import json
import pytest
import requests
from unittest.mock import MagicMock, patch
from habitatmap.exceptions import LoadError
from habitatmap.io.loaders import (
    fetch_json,
    load_counties,
    load_county,
    load_index,
    title_case_county,
    with_base_url,
)
from habitatmap.types import HabitatIndex

BASE = "https://maps.example.org/app/"

INDEX = {
    "counties": ["Cork", "Dublin"],
    "availableSpecies": ["Betula", "Quercus"],
    "files": {"Cork": "/data/habitats/Cork.json", "Dublin": "/data/habitats/Dublin.json"},
}

SHARD = {
    "type": "FeatureCollection",
    "features": [{
        "type": "Feature",
        "properties": {"COUNTY": "Dublin", "NS_SPECIES": "Q. robur"},
        "geometry": {"type": "Polygon", "coordinates": [[
            [315000.0, 234000.0], [316000.0, 234000.0], [316000.0, 235000.0], [315000.0, 234000.0],
        ]]},
    }],
}


def mock_response(payload=None, status=200):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    return response


@pytest.fixture
def index():
    return HabitatIndex.from_dict(INDEX)

# Test 1: helpers

def test_with_base_url():
    assert with_base_url("/data/index.json", BASE) == "https://maps.example.org/app/data/index.json"
    assert with_base_url("/data/index.json", "public") == "public/data/index.json"
    assert with_base_url("/data/index.json", "") == "data/index.json"


def test_title_case_county():
    assert title_case_county("DUBLIN") == "Dublin"
    assert title_case_county("dun laoghaire-rathdown ") == "Dun Laoghaire-Rathdown"
    assert title_case_county(["cork", "kerry"]) == "Cork"
    assert title_case_county([]) == ""
    assert title_case_county(None) == ""


def test_index_round_trip():
    assert HabitatIndex.from_dict(INDEX).to_dict() == INDEX

# Test 2: index loading

@patch('habitatmap.io.loaders.requests.get')
def test_load_index(mock_get):
    mock_get.return_value = mock_response(INDEX)

    index = load_index(BASE)

    mock_get.assert_called_once_with("https://maps.example.org/app/data/index.json", timeout=30)
    assert index.counties == ["Cork", "Dublin"]
    assert index.genera == ["Betula", "Quercus"]
    assert index.files["Cork"] == "/data/habitats/Cork.json"


@patch('habitatmap.io.loaders.requests.get')
def test_load_index_http_error(mock_get):
    mock_get.return_value = mock_response(status=404)
    with pytest.raises(LoadError, match="404"):
        load_index(BASE)


@patch('habitatmap.io.loaders.requests.get')
def test_load_index_bad_json(mock_get):
    response = mock_response()
    response.json.side_effect = ValueError("Expecting value")
    mock_get.return_value = response
    with pytest.raises(LoadError):
        load_index(BASE)


@patch('habitatmap.io.loaders.requests.get')
def test_load_index_connection_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("offline")
    with pytest.raises(LoadError):
        load_index(BASE)


def test_load_index_from_directory(tmp_path):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "index.json").write_text(json.dumps(INDEX), encoding="utf-8")
    assert load_index(str(tmp_path)).counties == ["Cork", "Dublin"]


def test_fetch_json_missing_file(tmp_path):
    with pytest.raises(LoadError):
        fetch_json(str(tmp_path / "nope.json"))

# Test 3: county loading

@patch('habitatmap.io.loaders.requests.get')
def test_load_county_enriches_shard(mock_get, index):
    mock_get.return_value = mock_response(json.loads(json.dumps(SHARD)))

    habitats = load_county("DUBLIN", index, base_url=BASE)

    mock_get.assert_called_once_with("https://maps.example.org/app/data/habitats/Dublin.json", timeout=30)
    props = habitats["features"][0]["properties"]
    assert props["cleanedSpecies"] == "Quercus robur"
    assert props["_genus"] == "Quercus"
    lon, lat = props["_centroid"]
    assert -6.4 < lon < -6.1 and 53.2 < lat < 53.5


def test_load_county_case_insensitive_fallback(tmp_path):
    shard_dir = tmp_path / "data" / "habitats"
    shard_dir.mkdir(parents=True)
    (shard_dir / "DUBLIN.json").write_text(json.dumps(SHARD), encoding="utf-8")
    index = HabitatIndex(counties=["DUBLIN"], files={"DUBLIN": "/data/habitats/DUBLIN.json"})

    habitats = load_county("dublin", index, base_url=str(tmp_path))
    assert len(habitats["features"]) == 1


def test_load_county_without_shard(index):
    with pytest.raises(LoadError, match="No habitat file for county: Kerry"):
        load_county("kerry", index, base_url=BASE)


@patch('habitatmap.io.loaders.requests.get')
def test_load_county_invalid_payload(mock_get, index):
    mock_get.return_value = mock_response({"type": "FeatureCollection"})
    with pytest.raises(LoadError, match="Invalid habitat data"):
        load_county("Cork", index, base_url=BASE)

# Test 4: county boundaries

@patch('habitatmap.io.loaders.requests.get')
def test_load_counties_reprojects_itm(mock_get):
    mock_get.return_value = mock_response({
        "type": "FeatureCollection",
        "features": [{"type": "Feature", "properties": {"COUNTY": "DUBLIN"},
                      "geometry": {"type": "Point", "coordinates": [715830.0, 734697.0]}}],
    })

    counties = load_counties(BASE)

    lon, lat = counties["features"][0]["geometry"]["coordinates"]
    assert -6.4 < lon < -6.1 and 53.2 < lat < 53.5


@patch('habitatmap.io.loaders.requests.get')
def test_load_counties_failure_returns_empty(mock_get):
    mock_get.return_value = mock_response(status=500)
    assert load_counties(BASE) == {"type": "FeatureCollection", "features": []}


def test_fetch_json_non_utf8_file(tmp_path):
    """Undecodable bytes surface as LoadError, not UnicodeDecodeError."""
    path = tmp_path / "index.json"
    path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(LoadError, match="Invalid JSON"):
        fetch_json(str(path))


@pytest.mark.parametrize("payload", [
    {"counties": [], "availableSpecies": [], "files": ["Cork.json"]},
    {"counties": [], "availableSpecies": [], "files": "Cork.json"},
    {"counties": "Cork", "availableSpecies": [], "files": {}},
    {"counties": [], "availableSpecies": [1, 2], "files": {}},
    {"counties": [], "availableSpecies": [], "files": {"Cork": 3}},
])
@patch('habitatmap.io.loaders.requests.get')
def test_load_index_wrong_field_types(mock_get, payload):
    mock_get.return_value = mock_response(payload)
    with pytest.raises(LoadError, match="Habitat index"):
        load_index(BASE)

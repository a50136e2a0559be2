import json
import os
import pytest
from habitatmap.exceptions import DataSchemaError
from habitatmap.io.partition import (
    build_index,
    collect_genera,
    county_keys,
    normalize_county_name,
    partition_by_county,
    split_habitats_by_county,
)


def feature(county, species="Q. robur"):
    return {
        "type": "Feature",
        "properties": {"COUNTY": county, "NS_SPECIES": species},
        "geometry": {"type": "Point", "coordinates": [315904.0, 234671.0]},
    }


@pytest.fixture
def raw_collection():
    return {
        "type": "FeatureCollection",
        "features": [
            feature("Dublin", "Q. robur"),
            feature("Dublin", "Not Determined"),
            feature("Cork", "Betula pubescens - Molinia"),
        ],
    }


@pytest.fixture
def raw_path(tmp_path, raw_collection):
    path = tmp_path / "raw.json"
    path.write_text(json.dumps(raw_collection), encoding="utf-8")
    return path

# Test 1: keys and names

def test_normalize_county_name():
    assert normalize_county_name("  Dublin ") == "Dublin"
    assert normalize_county_name("Dun Laoghaire  Rathdown") == "Dun_Laoghaire_Rathdown"
    assert normalize_county_name("Tipperary (North)") == "Tipperary_North"
    assert normalize_county_name("Kerry-West") == "Kerry-West"


def test_county_keys():
    assert county_keys({"COUNTY": " Cork "}) == ["Cork"]
    assert county_keys({"COUNTY": ["Dublin", "Wicklow", "Dublin"]}) == ["Dublin", "Wicklow"]
    assert county_keys({"COUNTY": ""}) == ["Unknown"]
    assert county_keys({"COUNTY": []}) == ["Unknown"]
    assert county_keys({}) == ["Unknown"]
    assert county_keys(None) == ["Unknown"]

# Test 2: partitioning

def test_partition_two_counties(raw_collection):
    """Dublin, Dublin, Cork -> two shards with 2 and 1 features."""
    index, shards = build_index(raw_collection)

    assert index.counties == ["Cork", "Dublin"]
    assert set(index.files) == {"Cork", "Dublin"}
    assert index.files["Dublin"] == "/data/habitats/Dublin.json"
    assert len(shards["Dublin.json"]["features"]) == 2
    assert len(shards["Cork.json"]["features"]) == 1


def test_multi_county_feature_goes_to_each_shard():
    collection = {"type": "FeatureCollection", "features": [feature(["Dublin", "Wicklow"])]}
    by_county = partition_by_county(collection)
    assert set(by_county) == {"Dublin", "Wicklow"}


def test_unknown_bucket_is_sharded_but_not_listed():
    collection = {"type": "FeatureCollection", "features": [feature(None), feature("Cork")]}
    index, shards = build_index(collection)

    assert index.counties == ["Cork"]
    assert "Unknown" in index.files
    assert "Unknown.json" in shards


def test_collect_genera_does_not_mutate(raw_collection):
    before = json.dumps(raw_collection, sort_keys=True)
    assert collect_genera(raw_collection) == ["Betula", "Quercus"]
    assert json.dumps(raw_collection, sort_keys=True) == before

# Test 3: files on disk

def test_split_writes_shards_and_index(tmp_path, raw_path):
    out_dir = tmp_path / "habitats"
    index_path = tmp_path / "index.json"

    split_habitats_by_county(str(raw_path), str(out_dir), str(index_path))

    assert sorted(os.listdir(out_dir)) == ["Cork.json", "Dublin.json"]
    index = json.loads(index_path.read_text(encoding="utf-8"))
    assert index == {
        "counties": ["Cork", "Dublin"],
        "availableSpecies": ["Betula", "Quercus"],
        "files": {
            "Cork": "/data/habitats/Cork.json",
            "Dublin": "/data/habitats/Dublin.json",
        },
    }

    dublin = json.loads((out_dir / "Dublin.json").read_text(encoding="utf-8"))
    assert dublin["type"] == "FeatureCollection"
    # Shards keep the raw (unprojected) geometry
    assert dublin["features"][0]["geometry"]["coordinates"] == [315904.0, 234671.0]


def test_split_is_idempotent(tmp_path, raw_path):
    """Two runs on the same input write byte-identical files."""
    out_dir = tmp_path / "habitats"
    index_path = tmp_path / "index.json"

    split_habitats_by_county(str(raw_path), str(out_dir), str(index_path))
    first = {name: (out_dir / name).read_bytes() for name in os.listdir(out_dir)}
    first_index = index_path.read_bytes()

    split_habitats_by_county(str(raw_path), str(out_dir), str(index_path))
    second = {name: (out_dir / name).read_bytes() for name in os.listdir(out_dir)}

    assert first == second
    assert index_path.read_bytes() == first_index


@pytest.mark.parametrize("payload", [
    {"features": []},
    {"type": "FeatureCollection"},
    {"type": "FeatureCollection", "features": {}},
    [1, 2, 3],
])
def test_split_rejects_malformed_input(tmp_path, payload):
    """Malformed input raises before any output is written."""
    raw = tmp_path / "raw.json"
    raw.write_text(json.dumps(payload), encoding="utf-8")
    out_dir = tmp_path / "habitats"

    with pytest.raises(DataSchemaError):
        split_habitats_by_county(str(raw), str(out_dir), str(tmp_path / "index.json"))

    assert not out_dir.exists()
    assert not (tmp_path / "index.json").exists()


def test_split_rejects_invalid_json(tmp_path):
    raw = tmp_path / "raw.json"
    raw.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataSchemaError):
        split_habitats_by_county(str(raw), str(tmp_path / "out"), str(tmp_path / "index.json"))


def test_split_rejects_non_utf8(tmp_path):
    raw = tmp_path / "raw.json"
    raw.write_bytes(b"\xff\xfe")
    with pytest.raises(DataSchemaError):
        split_habitats_by_county(str(raw), str(tmp_path / "out"), str(tmp_path / "index.json"))


def test_colliding_shard_names_write_each_feature_once():
    """'Cork' and 'Cork.' share Cork.json; a feature listing both appears once."""
    both = feature(["Cork", "Cork."])
    only_dotted = feature("Cork.")
    collection = {"type": "FeatureCollection", "features": [both, only_dotted]}

    index, shards = build_index(collection)

    assert list(shards) == ["Cork.json"]
    assert shards["Cork.json"]["features"] == [both, only_dotted]
    assert index.files["Cork"] == index.files["Cork."] == "/data/habitats/Cork.json"

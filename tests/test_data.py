# -*- coding: utf-8 -*-

import json

import pytest

from unconfusables import DatasetError, confusables, get_metadata, load_bundled, load_confusables, load_file


def test_bundled_snapshot_loads_once():
    assert confusables.version == "15.1.0"
    assert confusables.date == "2023-08-07, 16:59:22 GMT"
    assert len(confusables) == 6311
    assert "0" in confusables
    assert "O" not in confusables


def test_bundled_reload_is_equal():
    again = load_bundled()
    assert dict(again.confusables) == dict(confusables.confusables)
    assert dict(again.reverse_lookup) == dict(confusables.reverse_lookup)


def test_dataset_is_read_only(sample):
    with pytest.raises(TypeError):
        sample.confusables["z"] = sample.confusables["a"]
    with pytest.raises(TypeError):
        sample.reverse_lookup["z"] = ("a",)


def test_records_are_frozen(sample):
    record = sample.confusables["0"]
    assert record.target == ("O", "О")
    assert record.primary == "O"
    assert record.description == "zero"
    with pytest.raises(AttributeError):
        record.classification = "MI"


def test_histogram_precomputed(sample):
    assert dict(sample.type_distribution) == {"MA": 3, "MI": 1, "X": 1}


def test_reverse_lookup_is_optional(sample_document):
    del sample_document["reverseLookup"]
    ds = load_confusables(sample_document)
    assert ds.reverse_lookup["O"] == ("0",)


def test_legacy_type_field(sample_document):
    record = sample_document["confusables"]["a"]
    record["type"] = record.pop("classification")
    ds = load_confusables(sample_document)
    assert ds.confusables["a"].classification == "MA"


def test_repeated_sources_in_stored_reverse_lookup():
    # shape written by the original update script: "type" key, one entry per target
    document = {
        "version": "15.1.0",
        "date": "2023-08-07",
        "confusables": {
            "ﬀ": {"source": "ﬀ", "target": ["f", "f"], "type": "MA"},
            "ﬁ": {"source": "ﬁ", "target": ["f", "i"], "type": "MA"},
        },
        "reverseLookup": {"f": ["ﬀ", "ﬀ", "ﬁ"], "i": ["ﬁ"]},
    }
    ds = load_confusables(document)
    assert ds.reverse_lookup["f"] == ("ﬀ", "ﬁ")
    assert ds.confusables["ﬀ"].classification == "MA"


def test_shared_target_lists_each_source_once(sample_document):
    sample_document["confusables"]["o"] = {"source": "o", "target": ["O", "O"], "classification": "MA"}
    del sample_document["reverseLookup"]
    ds = load_confusables(sample_document)
    assert ds.reverse_lookup["O"] == ("0", "o")


@pytest.mark.parametrize("field", ["version", "date", "confusables"])
def test_missing_top_level_field(sample_document, field):
    del sample_document[field]
    with pytest.raises(DatasetError, match=field):
        load_confusables(sample_document)


@pytest.mark.parametrize(
    "record, message",
    [
        ({"target": ["b"], "classification": "MA"}, "source"),
        ({"source": "a", "classification": "MA"}, "target"),
        ({"source": "a", "target": [], "classification": "MA"}, "non-empty"),
        ({"source": "a", "target": ["a"], "classification": "MA"}, "itself"),
        ({"source": "a", "target": ["bc"], "classification": "MA"}, "single characters"),
        ({"source": "a", "target": ["b"], "classification": "ZZ"}, "classification"),
        ({"source": "a", "target": ["b"]}, "classification"),
        ({"source": "b", "target": ["c"], "classification": "MA"}, "key does not match"),
        ({"source": "ab", "target": ["c"], "classification": "MA"}, "exactly one character"),
        ({"source": "a", "target": ["b"], "classification": "MA", "description": 3}, "description"),
    ],
)
def test_malformed_record_fails_fast(sample_document, record, message):
    sample_document["confusables"]["a"] = record
    del sample_document["reverseLookup"]
    with pytest.raises(DatasetError, match=message):
        load_confusables(sample_document)


def test_reverse_lookup_mismatch(sample_document):
    sample_document["reverseLookup"]["O"] = ["5"]
    with pytest.raises(DatasetError, match="reverseLookup"):
        load_confusables(sample_document)


def test_not_a_document():
    with pytest.raises(DatasetError):
        load_confusables(["not", "a", "mapping"])


def test_dataset_error_is_value_error(sample_document):
    sample_document["confusables"] = []
    with pytest.raises(ValueError):
        load_confusables(sample_document)


def test_load_file(tmp_path, sample_document):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(sample_document, ensure_ascii=False), encoding="utf-8")
    ds = load_file(str(path))
    assert ds.version == "test-1"
    assert len(ds) == 5


def test_load_file_bad_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DatasetError, match="not valid JSON"):
        load_file(str(path))


def test_metadata_matches_dataset(sample):
    meta = get_metadata()
    assert meta.total_mappings == len(confusables.confusables)
    assert meta.reverse_lookup_entries == len(confusables.reverse_lookup)
    assert meta.type_distribution == {"MA": 6311, "MI": 0, "X": 0}

    meta = get_metadata(dataset=sample)
    assert (meta.version, meta.date) == ("test-1", "2024-01-01")
    assert meta.total_mappings == 5
    assert meta.reverse_lookup_entries == 7
    assert meta.type_distribution == {"MA": 3, "MI": 1, "X": 1}

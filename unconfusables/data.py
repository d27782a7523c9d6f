# -*- coding: utf-8 -*-

"""
Loading and validation of confusables dataset documents.

A document is the JSON produced by ``unconfusables.update``:

    {
      "version": "15.1.0",
      "date": "...",
      "confusables": {"0": {"source": "0", "target": ["O"], "classification": "MA",
                            "description": "..."}, ...},
      "reverseLookup": {"O": ["0", ...], ...}
    }

Every document is checked before use; a corrupt table would silently produce
wrong security decisions, so any inconsistency raises ``DatasetError``.
"""

import json
import logging
from importlib import resources
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .types import CONFUSABLE_TYPES, ConfusableMap, ConfusableRecord, DatasetError

log = logging.getLogger(__name__)

BUNDLED_DATA = "confusables.json"


def _require(doc: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in doc:
        raise DatasetError(f"{where}: missing required field {key!r}")
    return doc[key]


def _load_record(key: str, raw: Any) -> ConfusableRecord:
    where = f"record {key!r}"
    if not isinstance(raw, Mapping):
        raise DatasetError(f"{where}: expected an object, got {type(raw).__name__}")

    source = _require(raw, "source", where)
    if not isinstance(source, str) or len(source) != 1:
        raise DatasetError(f"{where}: source must be exactly one character, got {source!r}")
    if source != key:
        raise DatasetError(f"{where}: key does not match source {source!r}")

    target = _require(raw, "target", where)
    if not isinstance(target, list) or not target:
        raise DatasetError(f"{where}: target must be a non-empty list")
    for t in target:
        if not isinstance(t, str) or len(t) != 1:
            raise DatasetError(f"{where}: target entries must be single characters, got {t!r}")
        if t == source:
            raise DatasetError(f"{where}: character is listed as confusable with itself")

    # documents written by older tooling call the field "type"
    classification = raw.get("classification", raw.get("type"))
    if classification not in CONFUSABLE_TYPES:
        raise DatasetError(
            f"{where}: classification must be one of {', '.join(CONFUSABLE_TYPES)}, "
            f"got {classification!r}"
        )

    description = raw.get("description")
    if description is not None and not isinstance(description, str):
        raise DatasetError(f"{where}: description must be a string")

    return ConfusableRecord(
        source=source,
        target=tuple(target),
        classification=classification,
        description=description,
    )


def build_reverse_lookup(records: Mapping[str, ConfusableRecord]) -> Dict[str, List[str]]:
    """Index target characters back to their sources, in record order."""
    reverse: Dict[str, List[str]] = {}
    for record in records.values():
        for t in record.target:
            sources = reverse.setdefault(t, [])
            if record.source not in sources:
                sources.append(record.source)
    return reverse


def load_confusables(document: Mapping[str, Any]) -> ConfusableMap:
    """
    Validate a parsed dataset document and freeze it into a ``ConfusableMap``.

    The reverse index is always rebuilt from the records. When the document
    carries its own ``reverseLookup`` it must agree with the rebuilt one,
    ignoring repeated sources within a list.
    """
    if not isinstance(document, Mapping):
        raise DatasetError(f"dataset: expected an object, got {type(document).__name__}")

    version = _require(document, "version", "dataset")
    date = _require(document, "date", "dataset")
    raw_records = _require(document, "confusables", "dataset")
    if not isinstance(raw_records, Mapping):
        raise DatasetError("dataset: 'confusables' must be an object")

    records = {key: _load_record(key, raw) for key, raw in raw_records.items()}
    reverse = build_reverse_lookup(records)

    stored = document.get("reverseLookup")
    if stored is not None:
        if not isinstance(stored, Mapping):
            raise DatasetError("dataset: 'reverseLookup' must be an object")
        # older tooling lists a source once per target entry ("ﬀ" -> f, f)
        normalized = {k: list(dict.fromkeys(v)) for k, v in stored.items()}
        if normalized != reverse:
            unmatched = sorted(set(reverse) ^ set(normalized))
            differing = sorted(k for k in reverse if k in normalized and normalized[k] != reverse[k])
            raise DatasetError(
                "dataset: reverseLookup disagrees with records "
                f"(unmatched keys: {unmatched[:10]!r}, differing: {differing[:10]!r})"
            )

    histogram = {t: 0 for t in CONFUSABLE_TYPES}
    for record in records.values():
        histogram[record.classification] += 1

    dataset = ConfusableMap(
        version=str(version),
        date=str(date),
        confusables=MappingProxyType(records),
        reverse_lookup=MappingProxyType({k: tuple(v) for k, v in reverse.items()}),
        type_distribution=MappingProxyType(histogram),
    )
    log.debug(
        "loaded confusables %s (%s): %d mappings, %d reverse entries",
        dataset.version, dataset.date, len(records), len(reverse),
    )
    return dataset


def load_file(path: str) -> ConfusableMap:
    """Load a dataset document from a JSON file on disk."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetError(f"{path}: not valid JSON ({e})") from e
    return load_confusables(document)


def load_bundled() -> ConfusableMap:
    """Load the snapshot shipped inside the package."""
    text = resources.files(__package__).joinpath("data").joinpath(BUNDLED_DATA).read_text(encoding="utf-8")
    return load_confusables(json.loads(text))


# Process-wide default; every operation also accepts an explicit dataset.
confusables: ConfusableMap = load_bundled()


def resolve(dataset: Optional[ConfusableMap]) -> ConfusableMap:
    return confusables if dataset is None else dataset

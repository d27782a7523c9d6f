# -*- coding: utf-8 -*-

"""
Offline ingestion of the upstream Unicode ``confusables.txt`` table.

Lines look like

    0030 ;	004F ;	MA	# ( 0 → O ) DIGIT ZERO → LATIN CAPITAL LETTER O	#

with ``# Version:`` and ``# Date:`` header comments carrying provenance.
The output is the dataset document consumed by ``unconfusables.data``.
The table is read from a local file or downloaded with ``requests``.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

import requests

from .data import build_reverse_lookup, load_confusables
from .types import ConfusableMap, ConfusableRecord, UpdateError

log = logging.getLogger(__name__)

CONFUSABLES_URL = (
    "https://cdn.jsdelivr.net/gh/unicode-org/icu/icu4c/source/data/unidata/confusables.txt"
)

FETCH_TIMEOUT = 30  # seconds

LINE_RE = re.compile(r"^([0-9A-Fa-f]+)\s*;\s*([0-9A-Fa-f\s]+?)\s*;\s*(MA|MI|X)\b")


def _header_value(line: str) -> str:
    return line.partition(":")[2].strip()


def _description(line: str) -> str:
    _, _, rest = line.partition("#")
    return rest.strip().rstrip("#").strip()


def parse_records(content: str) -> Dict[str, Any]:
    """Parse table text into a dataset document (plain dicts and lists)."""
    version = "unknown"
    date = "unknown"
    records: Dict[str, ConfusableRecord] = {}
    skipped = 0

    for line in content.splitlines():
        if line.startswith("# Version:"):
            version = _header_value(line)
        elif line.startswith("# Date:"):
            date = _header_value(line)
        if line.startswith("#") or not line.strip():
            continue

        m = LINE_RE.match(line)
        if not m:
            skipped += 1
            log.debug("skipping unparseable line: %r", line)
            continue
        source_hex, target_hex, classification = m.groups()
        source = chr(int(source_hex, 16))
        target = tuple(chr(int(h, 16)) for h in target_hex.split())
        records[source] = ConfusableRecord(
            source=source,
            target=target,
            classification=classification,
            description=_description(line) or None,
        )

    log.info("parsed confusables %s: %d mappings, %d lines skipped", version, len(records), skipped)

    confusables: Dict[str, Dict[str, Any]] = {}
    for source, record in records.items():
        entry: Dict[str, Any] = {
            "source": source,
            "target": list(record.target),
            "classification": record.classification,
        }
        if record.description:
            entry["description"] = record.description
        confusables[source] = entry

    reverse: Dict[str, List[str]] = build_reverse_lookup(records)
    return {
        "version": version,
        "date": date,
        "confusables": confusables,
        "reverseLookup": reverse,
    }


def parse_confusables(content: str) -> ConfusableMap:
    """Parse and validate table text into a ready-to-use dataset."""
    return load_confusables(parse_records(content))


def write_document(document: Dict[str, Any], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
        f.write("\n")


def fetch_confusables(url: str = CONFUSABLES_URL, timeout: float = FETCH_TIMEOUT) -> str:
    """Download the table text. Network and HTTP failures raise UpdateError."""
    log.info("fetching %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise UpdateError(f"could not fetch {url}: {e}") from e
    # served as text/plain without a charset; requests would guess latin-1
    response.encoding = "utf-8"
    content = response.text
    log.debug("fetched %d characters from %s", len(content), url)
    return content


def _write_snapshot(content: str, output_path: str) -> ConfusableMap:
    document = parse_records(content)
    dataset = load_confusables(document)
    write_document(document, output_path)
    return dataset


def update_from_url(output_path: str, url: Optional[str] = None) -> ConfusableMap:
    """Download the upstream table and write a validated snapshot."""
    return _write_snapshot(fetch_confusables(url or CONFUSABLES_URL), output_path)


def update_from_file(source_path: str, output_path: str) -> ConfusableMap:
    """
    Rebuild a snapshot from a local copy of ``confusables.txt``. The document
    is validated before anything is written.
    """
    with open(source_path, "r", encoding="utf-8") as f:
        return _write_snapshot(f.read(), output_path)

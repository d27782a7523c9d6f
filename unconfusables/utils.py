# -*- coding: utf-8 -*-

"""
Lookup, normalization, comparison, variation and randomization helpers.

Every function reads an immutable ``ConfusableMap``. Pass ``dataset=`` to work
against a specific snapshot; otherwise the bundled one is used. Strings are
walked per code point, so characters outside the BMP are never split.
"""

import itertools
import math
import random
from typing import AbstractSet, Iterator, List, Optional, Set, Tuple

from .data import resolve
from .types import (
    CONFUSABLE_TYPES,
    ConfusableMap,
    ConfusableMetadata,
    ConfusableRecord,
    VariationLimitError,
)

DEFAULT_TYPE = "MA"
DEFAULT_PROBABILITY = 0.5


def _check_type(classification: str) -> None:
    if classification not in CONFUSABLE_TYPES:
        raise ValueError(
            f"unknown classification {classification!r}; expected one of {', '.join(CONFUSABLE_TYPES)}"
        )


# ------------------ Lookup ------------------

def get_confusables(char: str, *, dataset: Optional[ConfusableMap] = None) -> Optional[ConfusableRecord]:
    """Forward lookup of the first character of ``char``; ``None`` when unmapped."""
    if not char:
        return None
    return resolve(dataset).confusables.get(char[0])


def get_confusable_sources(char: str, *, dataset: Optional[ConfusableMap] = None) -> List[str]:
    """Reverse lookup: every source character that maps to the first character of ``char``."""
    if not char:
        return []
    return list(resolve(dataset).reverse_lookup.get(char[0], ()))


# ------------------ Normalization & comparison ------------------

def normalize_string(
    text: str,
    classification: str = DEFAULT_TYPE,
    *,
    dataset: Optional[ConfusableMap] = None,
) -> str:
    """
    Replace each character that has a mapping of ``classification`` with its
    primary target. The result has exactly as many code points as ``text``.
    """
    _check_type(classification)
    table = resolve(dataset).confusables
    out: List[str] = []
    for ch in text:
        record = table.get(ch)
        if record is not None and record.classification == classification:
            out.append(record.target[0])
        else:
            out.append(ch)
    return "".join(out)


def normalize_string_all(text: str, *, dataset: Optional[ConfusableMap] = None) -> str:
    """Like ``normalize_string`` but folds mappings of every classification."""
    table = resolve(dataset).confusables
    return "".join(table[ch].target[0] if ch in table else ch for ch in text)


def are_confusable(
    a: str,
    b: str,
    classification: str = DEFAULT_TYPE,
    *,
    dataset: Optional[ConfusableMap] = None,
) -> bool:
    """True when ``a`` and ``b`` share the same normal form under ``classification``."""
    _check_type(classification)
    # normalization is 1:1 per code point
    if len(a) != len(b):
        return False
    return normalize_string(a, classification, dataset=dataset) == normalize_string(
        b, classification, dataset=dataset
    )


# ------------------ Variations ------------------

def _alternatives(text: str, classification: str, dataset: ConfusableMap) -> List[Tuple[str, ...]]:
    table = dataset.confusables
    positions: List[Tuple[str, ...]] = []
    for ch in text:
        record = table.get(ch)
        if record is not None and record.classification == classification:
            # original first; repeated targets (e.g. "ff") collapse
            positions.append(tuple(dict.fromkeys((ch,) + record.target)))
        else:
            positions.append((ch,))
    return positions


def count_confusable_variations(
    text: str,
    classification: str = DEFAULT_TYPE,
    *,
    dataset: Optional[ConfusableMap] = None,
) -> int:
    """
    Upper bound on ``len(get_confusable_variations(text, classification))``:
    the product over positions of ``1 + len(record.target)`` for eligible
    characters. Cheap to compute, so callers can check it before enumerating.
    """
    _check_type(classification)
    table = resolve(dataset).confusables
    sizes = []
    for ch in text:
        record = table.get(ch)
        if record is not None and record.classification == classification:
            sizes.append(1 + len(record.target))
    return math.prod(sizes)


def iter_confusable_variations(
    text: str,
    classification: str = DEFAULT_TYPE,
    *,
    dataset: Optional[ConfusableMap] = None,
) -> Iterator[str]:
    """
    Lazily yield every distinct string reachable by substituting, at each
    eligible position independently, the original character or any of its
    targets. The first item is always ``text`` itself.

    Alternatives at a position are distinct single code points, so the
    Cartesian product never yields the same string twice.
    """
    _check_type(classification)
    positions = _alternatives(text, classification, resolve(dataset))
    for combo in itertools.product(*positions):
        yield "".join(combo)


def get_confusable_variations(
    text: str,
    classification: str = DEFAULT_TYPE,
    *,
    dataset: Optional[ConfusableMap] = None,
    limit: Optional[int] = None,
) -> Set[str]:
    """
    Materialize the full set of confusable variations of ``text``.

    The result grows multiplicatively with the number of eligible positions.
    Nothing is truncated: pass ``limit`` to get a ``VariationLimitError`` up
    front instead of an oversized set when the bound exceeds it.
    """
    if limit is not None:
        bound = count_confusable_variations(text, classification, dataset=dataset)
        if bound > limit:
            raise VariationLimitError(text, bound, limit)
    return set(iter_confusable_variations(text, classification, dataset=dataset))


# ------------------ Randomization ------------------

def get_random_confusable(
    char: str,
    *,
    classification: Optional[str] = None,
    exclude: Optional[AbstractSet[str]] = None,
    dataset: Optional[ConfusableMap] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Pick a random confusable target for ``char``, uniformly among the targets
    not in ``exclude``. Returns ``char`` unchanged when it has no record, when
    the record is not of ``classification``, or when every target is excluded.
    """
    if not char:
        return char
    if classification is not None:
        _check_type(classification)

    record = resolve(dataset).confusables.get(char)
    if record is None:
        return char
    if classification is not None and record.classification != classification:
        return char

    targets = list(record.target)
    if exclude:
        targets = [t for t in targets if t not in exclude]
        if not targets:
            return char

    return (rng if rng is not None else random).choice(targets)


def randomize_confusables(
    text: str,
    *,
    probability: float = DEFAULT_PROBABILITY,
    classification: Optional[str] = None,
    exclude: Optional[AbstractSet[str]] = None,
    dataset: Optional[ConfusableMap] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Attempt a substitution at each position independently with chance
    ``probability``. Output length always equals input length.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be within [0, 1], got {probability!r}")
    if classification is not None:
        _check_type(classification)
    rng = rng if rng is not None else random
    dataset = resolve(dataset)

    out: List[str] = []
    for ch in text:
        if rng.random() < probability:
            ch = get_random_confusable(
                ch, classification=classification, exclude=exclude, dataset=dataset, rng=rng
            )
        out.append(ch)
    return "".join(out)


# ------------------ Metadata ------------------

def get_metadata(*, dataset: Optional[ConfusableMap] = None) -> ConfusableMetadata:
    ds = resolve(dataset)
    return ConfusableMetadata(
        version=ds.version,
        date=ds.date,
        total_mappings=len(ds.confusables),
        reverse_lookup_entries=len(ds.reverse_lookup),
        type_distribution=dict(ds.type_distribution),
    )

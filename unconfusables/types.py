# -*- coding: utf-8 -*-

"""Data structures for the confusables dataset."""

from dataclasses import dataclass
from typing import Literal, Mapping, Optional, Tuple

# 'MA' major, 'MI' minor, 'X' cross-script/other (UTS #39 classifications)
ConfusableType = Literal["MA", "MI", "X"]

CONFUSABLE_TYPES: Tuple[str, ...] = ("MA", "MI", "X")


class ConfusablesError(Exception):
    """Base class for errors raised by unconfusables."""


class DatasetError(ConfusablesError, ValueError):
    """A dataset document is malformed or internally inconsistent."""


class UpdateError(ConfusablesError):
    """The upstream table could not be downloaded."""


class VariationLimitError(ConfusablesError):
    """Enumerating variations would exceed the caller's limit."""

    def __init__(self, text: str, bound: int, limit: int):
        self.text = text
        self.bound = bound
        self.limit = limit
        super().__init__(
            f"{text!r} has up to {bound} variations, over the limit of {limit}; "
            "shorten the input or raise the limit"
        )


@dataclass(frozen=True)
class ConfusableRecord:
    source: str                 # exactly one code point
    target: Tuple[str, ...]     # first element is the primary substitution
    classification: ConfusableType
    description: Optional[str] = None

    @property
    def primary(self) -> str:
        return self.target[0]


@dataclass(frozen=True)
class ConfusableMetadata:
    version: str
    date: str
    total_mappings: int
    reverse_lookup_entries: int
    type_distribution: Mapping[str, int]


@dataclass(frozen=True)
class ConfusableMap:
    """
    An immutable confusables dataset.

    ``confusables`` maps each source character to its record; ``reverse_lookup``
    maps a target character to the source characters whose target list
    contains it, in record order. Build instances with
    ``unconfusables.data.load_confusables`` so the reverse index and the
    classification histogram are derived and validated.
    """

    version: str
    date: str
    confusables: Mapping[str, ConfusableRecord]
    reverse_lookup: Mapping[str, Tuple[str, ...]]
    type_distribution: Mapping[str, int]

    def __len__(self) -> int:
        return len(self.confusables)

    def __contains__(self, char: object) -> bool:
        return char in self.confusables

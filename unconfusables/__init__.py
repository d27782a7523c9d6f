# -*- coding: utf-8 -*-

"""
unconfusables — Unicode confusable lookup, normalization and look-alike generation (UTS #39).

Quick use:

    >>> from unconfusables import normalize_string, are_confusable
    >>> normalize_string("paypa1")
    'paypal'
    >>> are_confusable("0l", "Ol")
    True
"""

from .data import confusables, load_bundled, load_confusables, load_file
from .types import (
    CONFUSABLE_TYPES,
    ConfusableMap,
    ConfusableMetadata,
    ConfusableRecord,
    ConfusablesError,
    ConfusableType,
    DatasetError,
    UpdateError,
    VariationLimitError,
)
from .utils import (
    DEFAULT_PROBABILITY,
    DEFAULT_TYPE,
    are_confusable,
    count_confusable_variations,
    get_confusable_sources,
    get_confusable_variations,
    get_confusables,
    get_metadata,
    get_random_confusable,
    iter_confusable_variations,
    normalize_string,
    normalize_string_all,
    randomize_confusables,
)

__version__ = "0.1.0"

__all__ = [
    "CONFUSABLE_TYPES",
    "DEFAULT_PROBABILITY",
    "DEFAULT_TYPE",
    "ConfusableMap",
    "ConfusableMetadata",
    "ConfusableRecord",
    "ConfusableType",
    "ConfusablesError",
    "DatasetError",
    "UpdateError",
    "VariationLimitError",
    "are_confusable",
    "confusables",
    "count_confusable_variations",
    "get_confusable_sources",
    "get_confusable_variations",
    "get_confusables",
    "get_metadata",
    "get_random_confusable",
    "iter_confusable_variations",
    "load_bundled",
    "load_confusables",
    "load_file",
    "normalize_string",
    "normalize_string_all",
    "randomize_confusables",
]

# -*- coding: utf-8 -*-

import copy

import pytest

from unconfusables import load_confusables

# Small hand-made table covering every classification, a multi-target record
# and a character outside the BMP.
SAMPLE = {
    "version": "test-1",
    "date": "2024-01-01",
    "confusables": {
        "a": {"source": "a", "target": ["а"], "classification": "MA"},
        "0": {"source": "0", "target": ["O", "О"], "classification": "MA",
              "description": "zero"},
        "1": {"source": "1", "target": ["l", "I"], "classification": "MI"},
        "5": {"source": "5", "target": ["S"], "classification": "X"},
        "\U0001d41b": {"source": "\U0001d41b", "target": ["b"], "classification": "MA"},
    },
    "reverseLookup": {
        "а": ["a"],
        "O": ["0"],
        "О": ["0"],
        "l": ["1"],
        "I": ["1"],
        "S": ["5"],
        "b": ["\U0001d41b"],
    },
}


@pytest.fixture
def sample_document():
    return copy.deepcopy(SAMPLE)


@pytest.fixture
def sample(sample_document):
    return load_confusables(sample_document)

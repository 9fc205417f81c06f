import os, sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from pinpoint.scoring.splits import (
    DEFAULT_ADVICE,
    PIN_ADJACENCY,
    SPLIT_CATALOG,
    analyze_split_from_pins,
    catalog_entries,
    identify_split,
    is_split,
    split_advice,
    split_difficulty_score,
)

ALL = set(range(1, 11))


def _knock_all_but(*standing):
    return ALL - set(standing)


def test_seven_ten_split():
    split = analyze_split_from_pins(_knock_all_but(7, 10))
    assert split is not None
    assert split.name == "7-10 Split"
    assert split.pins == (7, 10)
    assert split.difficulty == "very_hard"
    assert split.advice.startswith("Aim for the 7 pin")


@pytest.mark.parametrize(
    "standing, name",
    [
        ((4, 6, 7, 10), "Big Four"),
        ((7, 8, 9, 10), "Greek Church"),
        ((2, 7), "2-7 Split"),
        ((3, 6, 10), "3-6-10 Split"),
    ],
)
def test_named_splits(standing, name):
    split = analyze_split_from_pins(_knock_all_but(*standing))
    assert split is not None
    assert split.name == name


@pytest.mark.parametrize(
    "knocked",
    [
        ALL,  # strike
        set(),  # gutter ball, head pin standing
        _knock_all_but(1, 7),  # head pin standing
        _knock_all_but(10),  # single pin
        _knock_all_but(9, 10),  # adjacent pair
        _knock_all_but(2, 4, 5),  # cluster, all touching
    ],
    ids=["strike", "gutter", "head-pin", "single-pin", "adjacent", "cluster"],
)
def test_no_split(knocked):
    assert analyze_split_from_pins(knocked) is None


def test_uncatalogued_split_is_not_named_by_default():
    standing = (2, 10)
    assert is_split(standing) is True
    assert analyze_split_from_pins(_knock_all_but(*standing)) is None


def test_uncatalogued_split_with_any_policy():
    split = analyze_split_from_pins(_knock_all_but(2, 10), policy="any")
    assert split is not None
    assert split.name == "2-10 Split"
    assert split.difficulty == "unknown"
    assert split.conversion_rate == 0.0
    assert split.advice == DEFAULT_ADVICE


def test_identify_split_sorts_pins():
    assert identify_split([10, 7]) is SPLIT_CATALOG["7-10"]


def test_every_catalog_entry_is_a_split():
    for key, split in SPLIT_CATALOG.items():
        assert key == split.key
        assert is_split(split.pins), key


def test_adjacency_is_symmetric():
    for pin, neighbours in PIN_ADJACENCY.items():
        for other in neighbours:
            assert pin in PIN_ADJACENCY[other]


def test_difficulty_score():
    assert split_difficulty_score(None) == 0
    assert split_difficulty_score(SPLIT_CATALOG["2-7"]) == 2
    assert split_difficulty_score(SPLIT_CATALOG["7-10"]) == 5
    unknown = identify_split([2, 10], policy="any")
    assert split_difficulty_score(unknown) == 3


def test_split_advice_fallback():
    assert split_advice(None) is None
    assert split_advice(SPLIT_CATALOG["4-6-7-10"]) == DEFAULT_ADVICE


def test_to_dict_shape():
    data = SPLIT_CATALOG["4-6"].to_dict()
    assert data == {
        "name": "4-6 Split",
        "pins": [4, 6],
        "difficulty": "medium",
        "conversionRate": 15.2,
        "description": "Common middle split",
        "advice": "Hit either pin at an angle to slide it into the other. Medium speed works best.",
    }


def test_catalog_entries_ordered_by_size():
    entries = catalog_entries()
    assert len(entries) == len(SPLIT_CATALOG)
    sizes = [len(s.pins) for s in entries]
    assert sizes == sorted(sizes)

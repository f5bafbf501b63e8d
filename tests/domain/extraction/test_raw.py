from __future__ import annotations

from decimal import Decimal

import pytest

from travelsync.domain.extraction import (
    as_list,
    attribute,
    lookup,
    lookup_nodes,
    lookup_path,
    text_of,
    to_bool,
    to_decimal,
    to_int,
)

FIELDS = {"Segment": ("stl19:Segment", "Segment"), "Segments": ("stl19:Segments", "Segments")}


def test_as_list_wraps_singletons_and_drops_nones() -> None:
    assert as_list(None) == []
    assert as_list({"a": 1}) == [{"a": 1}]
    assert as_list([1, None, 2]) == [1, 2]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  ABC ", "ABC"),
        ({"_": "wrapped"}, "wrapped"),
        ([{"_": ""}, "second"], "second"),
        (42, "42"),
        ("   ", None),
        (True, None),
    ],
)
def test_text_of_reads_bare_and_wrapped_text(raw: object, expected: str | None) -> None:
    assert text_of(raw) == expected


def test_attribute_prefers_attribute_block_then_node() -> None:
    node = {"$": {"nameId": "01.01"}, "id": "7", "nested": {"_": "x"}}

    assert attribute(node, "nameId") == "01.01"
    assert attribute(node, "missing", "id") == "7"
    assert attribute(node, "nested") is None
    assert attribute(None, "id") is None


def test_lookup_skips_empty_variants() -> None:
    node = {"stl19:Segment": [], "Segment": {"id": "1"}}

    assert lookup(node, "Segment", FIELDS) == {"id": "1"}


def test_lookup_nodes_fans_out_single_and_list_forms() -> None:
    single = {"stl19:Segments": {"Segment": {"id": "1"}}}
    repeated = {"Segments": [{"Segment": [{"id": "1"}, {"id": "2"}]}, {"Segment": {"id": "3"}}]}

    assert [node["id"] for node in lookup_nodes(single, ("Segments", "Segment"), FIELDS)] == ["1"]
    assert [node["id"] for node in lookup_nodes(repeated, ("Segments", "Segment"), FIELDS)] == [
        "1",
        "2",
        "3",
    ]


def test_lookup_path_takes_first_element_at_each_step() -> None:
    tree = {"Segments": [{"Segment": {"id": "1"}}, {"Segment": {"id": "2"}}]}

    assert lookup_path(tree, ("Segments", "Segment"), FIELDS) == {"id": "1"}
    assert lookup_path(tree, ("Missing", "Segment"), FIELDS) is None


def test_scalar_conversions() -> None:
    assert to_decimal("1,250.50") == Decimal("1250.50")
    assert to_decimal("n/a") is None
    assert to_int({"_": "3"}) == 3
    assert to_int("three") is None
    assert to_bool("true") is True
    assert to_bool("Y") is True
    assert to_bool("false") is False
    assert to_bool(None) is False

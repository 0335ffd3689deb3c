from __future__ import annotations

import json

import pytest

from marketcard.narrative.extract import SHAPE_MATCHERS, extract_analysis_text, match_shape


def test_top_level_fields_in_priority_order() -> None:
    assert extract_analysis_text({"analysis": "A", "summary": "B"}) == "A"
    assert extract_analysis_text({"summary": "B", "text": "T"}) == "B"
    assert extract_analysis_text({"text": "T"}) == "T"


def test_empty_string_falls_through_to_next_shape() -> None:
    assert extract_analysis_text({"analysis": "  ", "summary": "B"}) == "B"


def test_result_as_encoded_json() -> None:
    assert extract_analysis_text({"result": '{"analysis":"C"}'}) == "C"
    assert extract_analysis_text({"result": json.dumps([{"summary": "S"}])}) == "S"


def test_result_plain_string_is_not_a_match() -> None:
    assert extract_analysis_text({"result": "not json at all"}) is None


@pytest.mark.parametrize(
    ("result", "expected"),
    [
        ([{"analysis": "first"}, {"analysis": "second"}], "first"),
        ([{"summary": "sum"}], "sum"),
        (["just a string"], "just a string"),
        ([{"other": 1}], None),
        ([], None),
    ],
)
def test_result_list(result: list, expected: str | None) -> None:
    assert extract_analysis_text({"result": result}) == expected


def test_result_object() -> None:
    assert extract_analysis_text({"result": {"summary": "obj"}}) == "obj"
    assert extract_analysis_text({"result": {"analysis": "a", "summary": "s"}}) == "a"


def test_messages_first_string_content() -> None:
    payload = {"messages": [{"role": "system"}, {"content": None}, {"content": "D"}, {"content": "E"}]}
    assert extract_analysis_text(payload) == "D"


def test_top_level_beats_result_and_messages() -> None:
    payload = {"messages": [{"content": "D"}], "result": {"analysis": "R"}, "text": "T"}
    assert extract_analysis_text(payload) == "T"


@pytest.mark.parametrize("payload", [None, "text", 42, ["analysis"], {}, {"foo": "bar"}])
def test_unknown_shapes_do_not_match(payload: object) -> None:
    assert extract_analysis_text(payload) is None


def test_match_shape_reports_variant() -> None:
    m = match_shape({"result": '{"result": ["nested"]}'})
    assert m is not None
    assert m.shape == "result_encoded"
    assert m.text == "nested"

    m = match_shape({"messages": [{"content": "hi"}]})
    assert m is not None and m.shape == "messages"


def test_matcher_order_is_fixed() -> None:
    assert [name for name, _ in SHAPE_MATCHERS] == [
        "analysis",
        "summary",
        "text",
        "result_encoded",
        "result_list",
        "result_object",
        "messages",
    ]

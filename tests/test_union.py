"""Unit tests for inference.union."""

from __future__ import annotations

import itertools

from api_type_detector.inference.tokens import (
    BOOLEAN,
    DATE_STRING,
    NULL,
    NUMBER,
    STRING,
    UNDEFINED,
    ArrayToken,
    RecordToken,
)
from api_type_detector.inference.union import normalize_union, render_union


def test_null_and_undefined_sort_last() -> None:
    assert normalize_union([UNDEFINED, NULL, STRING]) == (STRING, NULL, UNDEFINED)
    assert render_union([NULL, UNDEFINED, STRING]) == "string | null | undefined"


def test_order_is_independent_of_input_order() -> None:
    tokens = [UNDEFINED, NUMBER, NULL, STRING, BOOLEAN]
    rendered = {render_union(p) for p in itertools.permutations(tokens)}
    assert rendered == {"boolean | number | string | null | undefined"}


def test_duplicates_removed() -> None:
    assert normalize_union([NUMBER, NUMBER, STRING, NUMBER]) == (NUMBER, STRING)


def test_structural_duplicates_removed() -> None:
    a = RecordToken((("id", (NUMBER,)),))
    b = RecordToken((("id", (NUMBER,)),))
    c = ArrayToken((STRING,))
    d = ArrayToken((STRING,))
    assert normalize_union([a, c, b, d]) == (c, a)


def test_array_element_unions_distinguish_arrays() -> None:
    union = normalize_union([ArrayToken((STRING,)), ArrayToken((NUMBER, STRING))])
    assert len(union) == 2
    assert render_union(union) == "(number | string)[] | string[]"


def test_date_string_sorts_after_string() -> None:
    assert render_union([DATE_STRING, STRING]) == "string | string /* ISO Date */"


def test_empty_union_renders_fallback() -> None:
    assert normalize_union([]) == ()
    assert render_union([]) == "unknown"


def test_single_token_renders_bare() -> None:
    assert render_union([NULL]) == "null"

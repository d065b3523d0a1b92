"""Unit tests for inference.classifier."""

from __future__ import annotations

import pytest

from api_type_detector.config import InferenceOptions
from api_type_detector.exceptions import MalformedSampleError, ResourceExceededError
from api_type_detector.inference.classifier import classify, is_date_string
from api_type_detector.inference.tokens import (
    BOOLEAN,
    CIRCULAR,
    DATE_STRING,
    MISSING,
    NULL,
    NUMBER,
    STRING,
    UNDEFINED,
    ArrayToken,
    RecordToken,
)


class TestPrimitives:
    def test_scalars(self) -> None:
        assert classify(None) == NULL
        assert classify(MISSING) == UNDEFINED
        assert classify(True) == BOOLEAN
        assert classify(0) == NUMBER
        assert classify(1.5) == NUMBER
        assert classify("hello") == STRING

    def test_bool_is_not_number(self) -> None:
        assert classify(False) == BOOLEAN


class TestDateDetection:
    @pytest.mark.parametrize(
        "value",
        ["2024-01-15", "2024-01-15T10:30:00", "2024-01-15T10:30:00Z", "2024-01-15T10:30:00.123Z"],
    )
    def test_iso_dates_detected(self, value: str) -> None:
        assert is_date_string(value)
        assert classify(value) == DATE_STRING
        assert classify(value).render() == "string /* ISO Date */"

    @pytest.mark.parametrize(
        "value",
        ["2024-02-30", "2024-13-01", "2024-01-15T25:00:00", "2024-01-15T10:30", "15/01/2024", "2024-01-15 10:30:00"],
    )
    def test_invalid_or_non_iso_dates_are_strings(self, value: str) -> None:
        assert not is_date_string(value)
        assert classify(value) == STRING

    def test_detection_can_be_disabled(self) -> None:
        assert classify("2024-01-15", InferenceOptions(detect_dates=False)) == STRING


class TestArrays:
    def test_empty_array(self) -> None:
        token = classify([])
        assert token == ArrayToken(())
        assert token.render() == "unknown[]"

    def test_homogeneous_array(self) -> None:
        assert classify([1, 2, 3]).render() == "number[]"

    def test_tuple_is_an_array(self) -> None:
        assert classify((1, "a")) == classify([1, "a"])
        assert classify({"t": (1,)}).render() == "{ t: number[] }"

    def test_heterogeneous_array_is_normalized(self) -> None:
        assert classify(["a", None, 1]).render() == "(number | string | null)[]"
        assert classify([1, "a"]) == classify(["a", 1])

    def test_prefix_sampling(self) -> None:
        options = InferenceOptions(analyze_all_array_elements=False, max_array_samples=2)
        assert classify([1, 2, "late"], options).render() == "number[]"

    def test_analyze_all_elements(self) -> None:
        options = InferenceOptions(analyze_all_array_elements=True, max_array_samples=2)
        assert classify([1, 2, "late"], options).render() == "(number | string)[]"

    def test_array_of_records(self) -> None:
        assert classify([{"id": 1}, {"id": 2}]).render() == "{ id: number }[]"


class TestRecords:
    def test_fields_sorted_by_name(self) -> None:
        token = classify({"b": 1, "a": "x"})
        assert isinstance(token, RecordToken)
        assert [name for name, _ in token.fields] == ["a", "b"]
        assert token.render() == "{ a: string; b: number }"

    def test_empty_object(self) -> None:
        assert classify({}).render() == "Record<string, never>"

    def test_non_identifier_keys_are_quoted(self) -> None:
        assert classify({"content-type": "x", "$ok": 1}).render() == '{ $ok: number; "content-type": string }'

    def test_structural_equality(self) -> None:
        assert classify({"a": 1, "b": [True]}) == classify({"b": [False], "a": 2})
        assert classify({"a": 1}) != classify({"a": "1"})

    def test_non_string_key_is_malformed(self) -> None:
        with pytest.raises(MalformedSampleError):
            classify({1: "x"})

    def test_unsupported_value_is_malformed(self) -> None:
        with pytest.raises(MalformedSampleError):
            classify({"a": object()})


class TestCycles:
    def test_self_referential_record(self) -> None:
        node: dict = {"name": "root"}
        node["self"] = node

        token = classify(node)

        assert token.render() == "{ name: string; self: unknown /* circular reference */ }"

    def test_self_referential_array(self) -> None:
        items: list = [1]
        items.append(items)

        assert classify(items) == ArrayToken((NUMBER, CIRCULAR))

    def test_shared_sibling_values_are_fully_analyzed(self) -> None:
        shared = {"x": 1}
        value = {"a": shared, "b": shared, "c": [shared, shared]}

        assert classify(value).render() == "{ a: { x: number }; b: { x: number }; c: { x: number }[] }"

    def test_guard_does_not_leak_between_calls(self) -> None:
        node: dict = {"id": 1}
        node["parent"] = node
        first = classify(node)
        second = classify(node)
        assert first == second
        assert classify(node["parent"]["id"]) == NUMBER


class TestDepthGuard:
    def test_nesting_within_limit(self) -> None:
        assert classify({"a": {"b": 1}}, InferenceOptions(max_depth=2)).render() == "{ a: { b: number } }"

    def test_nesting_beyond_limit_raises(self) -> None:
        with pytest.raises(ResourceExceededError):
            classify({"a": {"b": {}}}, InferenceOptions(max_depth=2))

    def test_deep_arrays_raise(self) -> None:
        value: list = []
        for _ in range(10):
            value = [value]
        with pytest.raises(ResourceExceededError):
            classify(value, InferenceOptions(max_depth=5))

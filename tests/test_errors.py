"""Tests for the error model."""

import logging

import pytest

from easify import (
    ArityMismatch,
    EasifyError,
    InsufficientElements,
    MalformedPattern,
    UnpackError,
    compile_pattern,
    unpack,
)
from easify.errors import ErrorLocation


class TestErrorHierarchy:
    def test_unpack_errors_share_a_base(self):
        assert issubclass(ArityMismatch, UnpackError)
        assert issubclass(InsufficientElements, UnpackError)
        assert issubclass(UnpackError, EasifyError)
        assert not issubclass(MalformedPattern, UnpackError)

    def test_codes_are_class_level(self):
        assert ArityMismatch(1, 2).code == "E_ARITY_MISMATCH"
        assert InsufficientElements(1, 0).code == "E_INSUFFICIENT_ELEMENTS"


class TestFormatting:
    def test_format_with_code_and_hint(self):
        error = EasifyError("Boom", code="E_X", hint="Try again")

        assert error.format() == "Boom (E_X) Hint: Try again"

    def test_format_with_location(self):
        error = EasifyError("Bad token", source="a b", column=2, code="E_Y")

        assert error.format() == "Bad token (a b:2; E_Y)"

    def test_location_descriptions(self):
        assert ErrorLocation().describe() == "unknown location"
        assert ErrorLocation(column=4).describe() == "column 4"
        assert ErrorLocation(source="x").describe() == "x"

    def test_messages_report_lengths(self):
        assert str(ArityMismatch(expected=2, actual=3)) == "Expected exactly 2 element(s) to unpack, got 3"
        assert str(InsufficientElements(minimum=2, actual=1)) == "Expected at least 2 element(s) to unpack, got 1"


class TestFailureLogging:
    def test_rejected_unpack_is_logged_at_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger="easify.executor")

        with pytest.raises(ArityMismatch):
            unpack(compile_pattern("a, b"), [1])

        records = [record for record in caplog.records if record.name == "easify.executor"]
        assert records
        assert records[-1].easify_event == "unpack_failed"
        assert records[-1].easify_data == {"pattern": "a, b", "length": 1, "reason": "ArityMismatch"}

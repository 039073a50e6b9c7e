"""Tests for phone number normalization and display formatting."""

import pytest

from gateway.shared.phone import format_phone, normalize_phone


class TestNormalizePhone:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("7045551234", "+17045551234"),
            ("(704) 555-1234", "+17045551234"),
            ("704.555.1234", "+17045551234"),
            ("17045551234", "+17045551234"),
            ("+1 704 555 1234", "+17045551234"),
            ("+447911123456", "+447911123456"),
            ("+447045551234", "+447045551234"),
            ("12345", "+12345"),
        ],
    )
    def test_normalizes_to_e164(self, raw: str, expected: str) -> None:
        assert normalize_phone(raw) == expected

    def test_is_idempotent(self) -> None:
        once = normalize_phone("(980) 555-1111")
        assert normalize_phone(once) == once

    def test_never_raises_on_garbage(self) -> None:
        assert normalize_phone("call me") == "+"
        assert normalize_phone("") == "+"


class TestFormatPhone:
    def test_formats_ten_digit_number(self) -> None:
        assert format_phone("7045551234") == "(704) 555-1234"

    def test_formats_e164_nanp_number(self) -> None:
        assert format_phone("+17045551234") == "(704) 555-1234"

    def test_empty_is_dash(self) -> None:
        assert format_phone(None) == "-"
        assert format_phone("") == "-"

    def test_other_numbers_unchanged(self) -> None:
        assert format_phone("+447911123456") == "+447911123456"

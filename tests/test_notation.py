"""Unit tests for the dice notation parser."""

import pytest

from ddroller.notation import (
    NotationError,
    NotationParser,
    RequestTooLargeError,
    RollSpec,
    UnsupportedDiceError,
    UnsupportedFormatError,
    parse,
)


class TestParse:
    def test_simple_notation(self) -> None:
        assert parse("2d20") == RollSpec(count=2, sides=20, modifier=0, success=0, text="2d20")

    def test_positive_modifier(self) -> None:
        spec = parse("2d6+3")
        assert (spec.count, spec.sides, spec.modifier) == (2, 6, 3)

    def test_negative_modifier(self) -> None:
        assert parse("3d10-2").modifier == -2

    def test_threshold(self) -> None:
        assert parse("3d6+2|10") == RollSpec(
            count=3, sides=6, modifier=2, success=10, text="3d6+2|10"
        )

    def test_threshold_explicit_plus(self) -> None:
        assert parse("1d20|15+").success == 15

    def test_threshold_at_or_below(self) -> None:
        assert parse("1d20|15-").success == -15

    def test_threshold_with_negative_modifier(self) -> None:
        spec = parse("2d8-1|4-")
        assert (spec.modifier, spec.success) == (-1, -4)

    def test_zero_threshold_means_none(self) -> None:
        assert parse("1d20|0-").success == 0

    def test_case_insensitive(self) -> None:
        assert parse("2D6").sides == 6

    def test_keeps_original_text(self) -> None:
        assert parse(" 2d20+3|15 ").text == " 2d20+3|15 "

    def test_count_at_limit(self) -> None:
        assert parse("1000d6").count == 1000

    def test_every_supported_die(self) -> None:
        for sides in (2, 4, 6, 8, 10, 12, 20):
            assert parse(f"1d{sides}").sides == sides

    def test_zero_padded_count(self) -> None:
        spec = parse("0" * 70 + "2d20")
        assert (spec.count, spec.sides) == (2, 20)

    def test_zero_padded_groups(self) -> None:
        spec = parse("01d0020+" + "0" * 80 + "3|" + "0" * 40 + "15-")
        assert (spec.count, spec.sides, spec.modifier, spec.success) == (1, 20, 3, -15)

    def test_largest_stored_modifier(self) -> None:
        assert parse(f"1d6-{2**63 - 1}").modifier == -(2**63 - 1)


class TestUnsupportedFormat:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "roll some dice",
            "d20",
            "2d",
            "2d20+",
            "2d20|",
            "2d20|-15",
            "2d20+3+4",
            "2d20|15--",
            "2d20 extra",
            "x2d20",
            "2d20*3",
            "(2d20)",
            "2d6+1d4",
            "٢d6",
        ],
    )
    def test_rejected(self, text: str) -> None:
        with pytest.raises(UnsupportedFormatError):
            parse(text)

    def test_zero_dice(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            parse("0d6")

    def test_modifier_wider_than_64_bits(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            parse("1d6+99999999999999999999")

    def test_threshold_wider_than_64_bits(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            parse(f"1d6|{2**63}-")

    def test_message(self) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            parse("garbage")
        assert "valid DnD roll syntax" in exc_info.value.message
        assert exc_info.value.text == "garbage"

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse("garbage")


class TestRequestTooLarge:
    def test_too_many_dice(self) -> None:
        with pytest.raises(RequestTooLargeError) as exc_info:
            parse("2000d6")
        assert exc_info.value.count == 2000
        assert exc_info.value.message == "Cannot roll more than 1000 dice."

    def test_just_over_limit(self) -> None:
        with pytest.raises(RequestTooLargeError):
            parse("1001d20")

    def test_very_wide_count(self) -> None:
        with pytest.raises(RequestTooLargeError) as exc_info:
            parse("1" + "0" * 70 + "d6")
        assert exc_info.value.count is None
        assert exc_info.value.message == "Cannot roll more than 1000 dice."

    def test_count_wider_than_int_conversion_limit(self) -> None:
        with pytest.raises(RequestTooLargeError):
            parse("9" * 5000 + "d6")


class TestUnsupportedDice:
    def test_odd_die(self) -> None:
        with pytest.raises(UnsupportedDiceError) as exc_info:
            parse("5d7")
        assert exc_info.value.sides == 7
        assert exc_info.value.message == "Cannot roll dice with 7 sides."

    def test_zero_sides(self) -> None:
        with pytest.raises(UnsupportedDiceError):
            parse("2d0")

    def test_d100_not_supported_by_default(self) -> None:
        with pytest.raises(UnsupportedDiceError):
            parse("1d100")

    def test_very_wide_sides(self) -> None:
        with pytest.raises(UnsupportedDiceError) as exc_info:
            parse("1d" + "7" * 30)
        assert exc_info.value.sides is None
        assert exc_info.value.message == f"Cannot roll dice with {'7' * 30} sides."

    def test_padded_sides_reported_without_padding(self) -> None:
        with pytest.raises(UnsupportedDiceError) as exc_info:
            parse("1d007")
        assert exc_info.value.sides == 7


class TestPrecedence:
    def test_too_large_wins_over_unsupported_dice(self) -> None:
        with pytest.raises(RequestTooLargeError):
            parse("2000d7")

    def test_format_wins_over_everything(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            parse("2000d7 please")

    def test_all_errors_share_base(self) -> None:
        for text in ("nope", "2000d6", "1d7"):
            with pytest.raises(NotationError):
                parse(text)


class TestNotationParser:
    def test_restricted_sides(self) -> None:
        parser = NotationParser(count_limit=10, supported_sides={6})
        assert parser.parse("2d6").sides == 6
        with pytest.raises(UnsupportedDiceError):
            parser.parse("2d20")

    def test_custom_limit(self) -> None:
        parser = NotationParser(count_limit=10, supported_sides={6})
        with pytest.raises(RequestTooLargeError) as exc_info:
            parser.parse("11d6")
        assert exc_info.value.limit == 10

    def test_extra_sides(self) -> None:
        parser = NotationParser(count_limit=10, supported_sides=[6, 100])
        assert parser.parse("1d100").sides == 100


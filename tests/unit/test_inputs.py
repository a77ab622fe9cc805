"""Unit tests for inputs.py — parsing, defaults and advisory ranges."""
from decimal import Decimal

import pytest

from debt_calculator.calculator import DebtInput
from debt_calculator.inputs import (
    InputError,
    UserInputs,
    check_ranges,
    parse_amount,
    parse_rate,
    parse_term,
    update_field,
)

ZERO = Decimal("0")


class TestParseAmount:
    @pytest.mark.parametrize("raw,expected", [
        ("45000", Decimal("45000")),
        ("$45,000", Decimal("45000")),
        ("  45_000.50 ", Decimal("45000.50")),
        ("0", ZERO),
    ])
    def test_valid(self, raw, expected):
        assert parse_amount(raw) == expected

    def test_blank_is_zero(self):
        assert parse_amount("   ") == ZERO

    @pytest.mark.parametrize("raw", ["abc", "12abc", "NaN", "Infinity", "-inf"])
    def test_rejects_non_numeric_and_non_finite(self, raw):
        with pytest.raises(InputError):
            parse_amount(raw, "total_debt")

    def test_rejects_negative(self):
        with pytest.raises(InputError, match=">= 0") as excinfo:
            parse_amount("-100", "annual_salary")
        assert excinfo.value.field == "annual_salary"

    def test_input_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_amount("oops")


class TestParseRate:
    def test_plain(self):
        assert parse_rate("6.5") == Decimal("6.5")

    def test_percent_sign(self):
        assert parse_rate("6.5%") == Decimal("6.5")

    def test_negative(self):
        with pytest.raises(InputError) as excinfo:
            parse_rate("-1")
        assert excinfo.value.field == "interest_rate"


class TestParseTerm:
    @pytest.mark.parametrize("raw,expected", [("10", 10), ("10y", 10), (" 30Y ", 30), ("", 0)])
    def test_valid(self, raw, expected):
        assert parse_term(raw) == expected

    @pytest.mark.parametrize("raw", ["10.5", "ten", "-3"])
    def test_invalid(self, raw):
        with pytest.raises(InputError):
            parse_term(raw)


class TestUserInputs:
    def test_defaults(self):
        inputs = UserInputs()
        assert inputs.total_debt == Decimal("45000")
        assert inputs.annual_salary == Decimal("55000")
        assert inputs.interest_rate == Decimal("6.5")
        assert inputs.repayment_term == 10

    def test_snapshot_is_independent(self):
        inputs = UserInputs()
        snapshot = inputs.to_debt_input()
        update_field(inputs, "total_debt", "90000")
        assert isinstance(snapshot, DebtInput)
        assert snapshot.total_debt == Decimal("45000")
        assert inputs.to_debt_input().total_debt == Decimal("90000")

    def test_reset(self):
        inputs = UserInputs()
        update_field(inputs, "repayment_term", "25")
        inputs.reset()
        assert inputs.repayment_term == 10


class TestUpdateField:
    def test_each_field(self):
        inputs = UserInputs()
        update_field(inputs, "total_debt", "$30,000")
        update_field(inputs, "annual_salary", "70000")
        update_field(inputs, "interest_rate", "4.5%")
        update_field(inputs, "repayment_term", "20y")
        assert inputs.to_debt_input() == DebtInput(
            total_debt=Decimal("30000"),
            annual_salary=Decimal("70000"),
            interest_rate=Decimal("4.5"),
            repayment_term=20,
        )

    def test_unknown_field(self):
        with pytest.raises(InputError, match="Unknown field"):
            update_field(UserInputs(), "nickname", "x")

    def test_invalid_value_leaves_field_unchanged(self):
        inputs = UserInputs()
        with pytest.raises(InputError):
            update_field(inputs, "annual_salary", "lots")
        assert inputs.annual_salary == Decimal("55000")


class TestCheckRanges:
    def test_defaults_within_range(self):
        assert check_ranges(UserInputs()) == []

    def test_out_of_range_values_are_warned_not_clamped(self):
        inputs = UserInputs()
        update_field(inputs, "interest_rate", "18")
        update_field(inputs, "repayment_term", "0")
        warnings = check_ranges(inputs)
        assert len(warnings) == 2
        assert any("Interest rate" in w for w in warnings)
        assert any("Repayment term" in w for w in warnings)
        assert inputs.interest_rate == Decimal("18")
        assert inputs.repayment_term == 0

    def test_zero_salary_warned(self):
        inputs = UserInputs(annual_salary=ZERO)
        assert any("Annual salary" in w for w in check_ranges(inputs))

"""Input boundary — parsing, defaults and advisory range checks.

Raw text from the CLI is turned into typed values here; nothing that
fails to parse ever reaches the engine.

Policy:
1. Blank input means 0 (an empty field counts as zero).
2. Non-numeric, NaN, infinite or negative input raises InputError.
3. Values outside the advisory ranges are accepted and reported as warnings.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .calculator import DebtInput
from .config import (
    ADVISORY_RANGES,
    DEFAULT_ANNUAL_SALARY,
    DEFAULT_INTEREST_RATE,
    DEFAULT_REPAYMENT_TERM,
    DEFAULT_TOTAL_DEBT,
    ZERO,
)

logger = logging.getLogger(__name__)

FIELD_LABELS: dict[str, str] = {
    "total_debt": "Total student loan debt",
    "annual_salary": "Annual salary",
    "interest_rate": "Interest rate",
    "repayment_term": "Repayment term",
}


class InputError(ValueError):
    """Raised when a raw value cannot be accepted for a field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass
class UserInputs:
    """Current calculator entries.  Mutable; the engine only ever sees a snapshot."""
    total_debt: Decimal = DEFAULT_TOTAL_DEBT
    annual_salary: Decimal = DEFAULT_ANNUAL_SALARY
    interest_rate: Decimal = DEFAULT_INTEREST_RATE
    repayment_term: int = DEFAULT_REPAYMENT_TERM

    def to_debt_input(self) -> DebtInput:
        return DebtInput(
            total_debt=self.total_debt,
            annual_salary=self.annual_salary,
            interest_rate=self.interest_rate,
            repayment_term=self.repayment_term,
        )

    def reset(self) -> None:
        self.total_debt = DEFAULT_TOTAL_DEBT
        self.annual_salary = DEFAULT_ANNUAL_SALARY
        self.interest_rate = DEFAULT_INTEREST_RATE
        self.repayment_term = DEFAULT_REPAYMENT_TERM


def _clean(raw: str) -> str:
    return raw.strip().replace(",", "").replace("_", "").replace(" ", "")


def parse_amount(raw: str, field: str = "amount") -> Decimal:
    """Parse a dollar amount such as '45000', '$45,000' or '45_000.50'."""
    text = _clean(raw).lstrip("$")
    if not text:
        return ZERO
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InputError(field, f"Invalid number for {field}: '{raw.strip()}'") from None
    if not value.is_finite():
        raise InputError(field, f"{field} must be a finite number.")
    if value < ZERO:
        raise InputError(field, f"{field} must be >= 0.")
    return value


def parse_rate(raw: str) -> Decimal:
    """Parse an annual percentage such as '6.5' or '6.5%'."""
    return parse_amount(_clean(raw).rstrip("%"), "interest_rate")


def parse_term(raw: str) -> int:
    """Parse a repayment term in whole years, e.g. '10' or '10y'."""
    text = _clean(raw).lower().rstrip("y")
    if not text:
        return 0
    try:
        value = int(text)
    except ValueError:
        raise InputError(
            "repayment_term", f"Invalid term '{raw.strip()}'. Use whole years (e.g. 10 or 10y)."
        ) from None
    if value < 0:
        raise InputError("repayment_term", "repayment_term must be >= 0.")
    return value


_PARSERS = {
    "total_debt": lambda raw: parse_amount(raw, "total_debt"),
    "annual_salary": lambda raw: parse_amount(raw, "annual_salary"),
    "interest_rate": parse_rate,
    "repayment_term": parse_term,
}


def update_field(inputs: UserInputs, field: str, raw: str) -> None:
    """Parse *raw* for *field* and store it on *inputs*."""
    parser = _PARSERS.get(field)
    if parser is None:
        raise InputError(field, f"Unknown field '{field}'.")
    setattr(inputs, field, parser(raw))
    logger.debug("Updated %s to %s", field, getattr(inputs, field))


def check_ranges(inputs: UserInputs) -> list[str]:
    """Return a warning for each value outside its advisory range."""
    warnings: list[str] = []
    for field, (low, high) in ADVISORY_RANGES.items():
        value = getattr(inputs, field)
        if low <= value <= high:
            continue
        message = f"{FIELD_LABELS[field]} {value} is outside the suggested range {low}–{high}."
        logger.info("%s is outside the suggested range %s–%s: %s", field, low, high, value)
        warnings.append(message)
    return warnings

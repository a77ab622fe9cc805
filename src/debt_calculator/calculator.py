"""Core affordability calculation functions.

All monetary values use decimal.Decimal — float is forbidden.
The engine (compute) keeps full precision and never rounds; display
rounding belongs to the CLI. The repayment schedule rounds each row
ROUND_HALF_UP to 2 decimal places.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from .config import CENT, HUNDRED, MODERATE_THRESHOLD, MONTHS_PER_YEAR, STRETCHED_THRESHOLD, ZERO

logger = logging.getLogger(__name__)

AffordabilityStatus = Literal["Comfortable", "Moderate", "Stretched"]


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class DebtInput:
    total_debt: Decimal
    annual_salary: Decimal
    interest_rate: Decimal  # annual nominal percent, e.g. 6.5
    repayment_term: int     # years


@dataclass(frozen=True)
class AffordabilityResult:
    # Inputs echoed back for the breakdown display
    total_debt: Decimal
    annual_salary: Decimal
    # Outputs
    debt_to_income_ratio: Decimal
    monthly_payment: Decimal
    payment_to_income_ratio: Decimal  # percent
    affordability_status: AffordabilityStatus


@dataclass(frozen=True)
class ScheduleRow:
    period: int
    opening_balance: Decimal
    payment: Decimal
    principal_component: Decimal
    interest_component: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class YearSummary:
    year: int
    total_paid: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class RepaymentTotals:
    monthly_payment: Decimal
    number_of_payments: int
    total_repaid: Decimal
    total_interest: Decimal


def compute_debt_to_income(total_debt: Decimal, annual_salary: Decimal) -> Decimal:
    """Total debt over annual salary; 0 when there is no salary."""
    if annual_salary > ZERO:
        return total_debt / annual_salary
    return ZERO


def compute_monthly_payment(
    total_debt: Decimal,
    interest_rate: Decimal,
    repayment_term: int,
) -> Decimal:
    """Return the amortized monthly payment at full precision.

    Uses the standard reducing-balance formula:
        M = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Special cases, checked after the interest-bearing one:
      - zero interest: M = P / n (straight-line)
      - (1 + r)^n indistinguishable from 1: same straight-line limit
      - zero payments: M = 0
    """
    monthly_rate = interest_rate / HUNDRED / MONTHS_PER_YEAR
    total_payments = repayment_term * MONTHS_PER_YEAR

    if monthly_rate > ZERO and total_payments > 0:
        factor = (1 + monthly_rate) ** total_payments
        if factor == 1:
            # Rate too small to register at Decimal precision.
            return total_debt / Decimal(total_payments)
        return total_debt * monthly_rate * factor / (factor - 1)
    if total_payments > 0:
        return total_debt / Decimal(total_payments)
    return ZERO


def compute_payment_to_income(monthly_payment: Decimal, annual_salary: Decimal) -> Decimal:
    """Monthly payment as a percentage of gross monthly income."""
    monthly_gross_income = annual_salary / MONTHS_PER_YEAR
    if monthly_gross_income > ZERO:
        return monthly_payment / monthly_gross_income * HUNDRED
    return ZERO


def classify_affordability(payment_to_income_ratio: Decimal) -> AffordabilityStatus:
    # Strict comparisons: exactly 10 is Comfortable, exactly 20 is Moderate.
    if payment_to_income_ratio > STRETCHED_THRESHOLD:
        return "Stretched"
    if payment_to_income_ratio > MODERATE_THRESHOLD:
        return "Moderate"
    return "Comfortable"


def compute(debt_input: DebtInput) -> AffordabilityResult:
    """Compute the full affordability assessment for one input snapshot."""
    dti = compute_debt_to_income(debt_input.total_debt, debt_input.annual_salary)
    payment = compute_monthly_payment(
        debt_input.total_debt, debt_input.interest_rate, debt_input.repayment_term
    )
    pti = compute_payment_to_income(payment, debt_input.annual_salary)
    status = classify_affordability(pti)

    logger.debug(
        "Computed assessment: dti=%s payment=%s pti=%s status=%s",
        dti, payment, pti, status,
    )

    return AffordabilityResult(
        total_debt=debt_input.total_debt,
        annual_salary=debt_input.annual_salary,
        debt_to_income_ratio=dti,
        monthly_payment=payment,
        payment_to_income_ratio=pti,
        affordability_status=status,
    )


def build_repayment_schedule(debt_input: DebtInput) -> list[ScheduleRow]:
    """Build the month-by-month repayment schedule."""
    payment = _round(compute_monthly_payment(
        debt_input.total_debt, debt_input.interest_rate, debt_input.repayment_term
    ))
    r = debt_input.interest_rate / HUNDRED / MONTHS_PER_YEAR
    total_payments = debt_input.repayment_term * MONTHS_PER_YEAR

    rows: list[ScheduleRow] = []
    balance = debt_input.total_debt

    for period in range(1, total_payments + 1):
        opening = balance
        interest = _round(opening * r)
        # On the last period, pay off the exact remaining balance to avoid
        # sub-cent rounding residue.
        if period == total_payments:
            principal_component = opening
        else:
            principal_component = _round(payment - interest)
            if principal_component > opening:
                principal_component = opening
        closing = _round(opening - principal_component)

        rows.append(
            ScheduleRow(
                period=period,
                opening_balance=opening,
                payment=_round(principal_component + interest),
                principal_component=principal_component,
                interest_component=interest,
                closing_balance=closing,
            )
        )
        balance = closing

    return rows


def summarize_by_year(schedule: list[ScheduleRow]) -> list[YearSummary]:
    """Collapse a monthly schedule into per-year totals."""
    summaries: list[YearSummary] = []
    for start in range(0, len(schedule), MONTHS_PER_YEAR):
        chunk = schedule[start:start + MONTHS_PER_YEAR]
        summaries.append(
            YearSummary(
                year=start // MONTHS_PER_YEAR + 1,
                total_paid=sum((row.payment for row in chunk), ZERO),
                principal_paid=sum((row.principal_component for row in chunk), ZERO),
                interest_paid=sum((row.interest_component for row in chunk), ZERO),
                closing_balance=chunk[-1].closing_balance,
            )
        )
    return summaries


def compute_repayment_totals(debt_input: DebtInput) -> RepaymentTotals:
    """Total repaid and total interest over the life of the loan."""
    schedule = build_repayment_schedule(debt_input)
    total_repaid = sum((row.payment for row in schedule), ZERO)
    total_interest = sum((row.interest_component for row in schedule), ZERO)
    return RepaymentTotals(
        monthly_payment=_round(compute_monthly_payment(
            debt_input.total_debt, debt_input.interest_rate, debt_input.repayment_term
        )),
        number_of_payments=len(schedule),
        total_repaid=total_repaid,
        total_interest=total_interest,
    )

"""Application-wide constants and configuration defaults.

All tuneable defaults live here so there is a single place to adjust them.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Literal

# ── Type aliases ──────────────────────────────────────────────────────────────

LoanType = Literal["undergraduate", "graduate", "plus"]

# ── Numeric convenience ───────────────────────────────────────────────────────

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR: int = 12

# ── Initial calculator state ──────────────────────────────────────────────────

DEFAULT_TOTAL_DEBT = Decimal("45000")
DEFAULT_ANNUAL_SALARY = Decimal("55000")
DEFAULT_INTEREST_RATE = Decimal("6.5")     # percent, not a fraction
DEFAULT_REPAYMENT_TERM: int = 10           # years

# ── Advisory input ranges (warned about, never enforced) ─────────────────────

ADVISORY_RANGES: dict[str, tuple[Decimal, Decimal]] = {
    "total_debt": (Decimal("1000"), Decimal("500000")),
    "annual_salary": (Decimal("10000"), Decimal("500000")),
    "interest_rate": (Decimal("0"), Decimal("15")),
    "repayment_term": (Decimal("1"), Decimal("30")),
}

# ── Affordability thresholds (payment % of gross monthly income) ─────────────

MODERATE_THRESHOLD = Decimal("10")    # above this → Moderate
STRETCHED_THRESHOLD = Decimal("20")   # above this → Stretched

STATUS_COLORS: dict[str, str] = {
    "Comfortable": "#16A34A",
    "Moderate": "#D97706",
    "Stretched": "#DC2626",
}

# ── Static advisory content ───────────────────────────────────────────────────

DEBT_TIPS: tuple[str, ...] = (
    "A debt-to-income ratio under 1.0 is generally considered manageable",
    "Monthly payments below 10% of gross income are typically affordable",
    "Consider income-driven repayment plans if payments are high",
    "Employer student loan benefits may help reduce your burden",
)

DISCLAIMER = (
    "This calculator provides estimates of student loan burden relative to income "
    "using simplified assumptions. Affordability indicators are general guidelines "
    "and individual circumstances vary. The figures shown are estimates only and do "
    "not constitute financial advice. Actual loan terms, rates, and repayment options "
    "depend on your lender and loan type. Consult a financial advisor for "
    "personalized guidance."
)

# ── Reference rate lookup ─────────────────────────────────────────────────────

HTTP_TIMEOUT: int = 10  # seconds

# Federal Direct Loan rates: 10-year Treasury yield + add-on, capped (percentage points)
REFERENCE_RATE_ADD_ON: dict[str, Decimal] = {
    "undergraduate": Decimal("2.05"),
    "graduate": Decimal("3.60"),
    "plus": Decimal("4.60"),
}
REFERENCE_RATE_CAP: dict[str, Decimal] = {
    "undergraduate": Decimal("8.25"),
    "graduate": Decimal("9.50"),
    "plus": Decimal("10.50"),
}

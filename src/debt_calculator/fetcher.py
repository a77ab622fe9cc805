"""Online reference rate lookup — FRED 10-year Treasury yield.

Federal Direct Loan rates are set from the 10-year Treasury note yield
plus a fixed add-on per loan type, subject to a cap. The lookup uses the
latest daily constant-maturity yield (DGS10) as an indicative proxy for
the May auction high yield.

All fetches are user-triggered (no background polling).
"""
from __future__ import annotations

import logging
import os
from decimal import Decimal, InvalidOperation

import requests

from .config import HTTP_TIMEOUT, REFERENCE_RATE_ADD_ON, REFERENCE_RATE_CAP, LoanType

logger = logging.getLogger(__name__)

_FRED_SERIES = "DGS10"
_FRED_URL = "https://api.stlouisfed.org/fred/series/observations"


class FetchError(Exception):
    """Raised when an online rate fetch fails for any reason."""


def fetch_treasury_yield() -> Decimal:
    """Fetch the latest 10-year Treasury yield from FRED, in percent."""
    api_key = os.environ.get("FRED_API_KEY")
    if not api_key:
        raise FetchError(
            "FRED_API_KEY environment variable is not set. "
            "Get a free key at https://fred.stlouisfed.org/docs/api/api_key.html"
        )
    params = {
        "series_id": _FRED_SERIES,
        "api_key": api_key,
        "file_type": "json",
        "sort_order": "desc",
        "limit": 10,  # recent days may be '.' (market holidays)
    }
    try:
        resp = requests.get(_FRED_URL, params=params, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"FRED API request failed: {exc}") from exc

    try:
        observations = resp.json()["observations"]
        for obs in observations:
            if obs["value"] != ".":
                logger.info("FRED %s on %s: %s", _FRED_SERIES, obs.get("date"), obs["value"])
                return Decimal(obs["value"])
    except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
        raise FetchError(f"Failed to parse FRED response: {exc}") from exc
    raise FetchError("FRED returned no usable observations.")


def reference_rate_from_yield(treasury_yield: Decimal, loan_type: LoanType = "undergraduate") -> Decimal:
    """Apply the Direct Loan add-on and cap to a Treasury yield (all in percent)."""
    if loan_type not in REFERENCE_RATE_ADD_ON:
        raise ValueError(f"Unknown loan type '{loan_type}'.")
    rate = treasury_yield + REFERENCE_RATE_ADD_ON[loan_type]
    return min(rate, REFERENCE_RATE_CAP[loan_type])


def fetch_reference_rate(loan_type: LoanType = "undergraduate") -> Decimal:
    """Fetch an indicative federal student-loan rate for *loan_type*.

    Returns the rate as a percentage (e.g. Decimal('6.39')).
    Raises FetchError on any error (configuration, network, parsing).
    """
    return reference_rate_from_yield(fetch_treasury_yield(), loan_type)

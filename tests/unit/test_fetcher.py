"""Unit tests for fetcher.py — reference rate lookup (no network)."""
from decimal import Decimal

import pytest
import requests

from debt_calculator import fetcher
from debt_calculator.fetcher import FetchError, fetch_reference_rate, reference_rate_from_yield


class _FakeResponse:
    def __init__(self, payload, status_ok=True):
        self._payload = payload
        self._status_ok = status_ok

    def raise_for_status(self):
        if not self._status_ok:
            raise requests.HTTPError("500 Server Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("FRED_API_KEY", "test-key")


def _patch_get(monkeypatch, response=None, exc=None):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params, timeout))
        if exc is not None:
            raise exc
        return response

    monkeypatch.setattr(fetcher.requests, "get", fake_get)
    return calls


class TestReferenceRateFromYield:
    @pytest.mark.parametrize("loan_type,expected", [
        ("undergraduate", Decimal("6.39")),
        ("graduate", Decimal("7.94")),
        ("plus", Decimal("8.94")),
    ])
    def test_add_on(self, loan_type, expected):
        assert reference_rate_from_yield(Decimal("4.34"), loan_type) == expected

    def test_cap(self):
        assert reference_rate_from_yield(Decimal("9.00"), "undergraduate") == Decimal("8.25")

    def test_unknown_loan_type(self):
        with pytest.raises(ValueError, match="Unknown loan type"):
            reference_rate_from_yield(Decimal("4"), "private")  # type: ignore[arg-type]


class TestFetchReferenceRate:
    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("FRED_API_KEY", raising=False)
        with pytest.raises(FetchError, match="FRED_API_KEY"):
            fetch_reference_rate()

    def test_success_skips_missing_values(self, monkeypatch, api_key):
        payload = {"observations": [
            {"date": "2026-10-16", "value": "."},
            {"date": "2026-10-15", "value": "4.10"},
        ]}
        calls = _patch_get(monkeypatch, _FakeResponse(payload))
        assert fetch_reference_rate() == Decimal("6.15")
        url, params, timeout = calls[0]
        assert params["series_id"] == "DGS10"
        assert params["api_key"] == "test-key"
        assert timeout > 0

    def test_network_error(self, monkeypatch, api_key):
        _patch_get(monkeypatch, exc=requests.ConnectionError("offline"))
        with pytest.raises(FetchError, match="request failed"):
            fetch_reference_rate()

    def test_http_error(self, monkeypatch, api_key):
        _patch_get(monkeypatch, _FakeResponse({}, status_ok=False))
        with pytest.raises(FetchError, match="request failed"):
            fetch_reference_rate()

    def test_malformed_payload(self, monkeypatch, api_key):
        _patch_get(monkeypatch, _FakeResponse({"unexpected": []}))
        with pytest.raises(FetchError, match="parse"):
            fetch_reference_rate()

    def test_invalid_json(self, monkeypatch, api_key):
        _patch_get(monkeypatch, _FakeResponse(ValueError("not json")))
        with pytest.raises(FetchError, match="parse"):
            fetch_reference_rate()

    def test_no_usable_observations(self, monkeypatch, api_key):
        _patch_get(monkeypatch, _FakeResponse({"observations": [{"value": "."}]}))
        with pytest.raises(FetchError, match="no usable"):
            fetch_reference_rate()

import asyncio
import threading

import pytest
from unittest.mock import MagicMock

from apps.financing.application.reference_data import (
    ReferenceDataLoader,
    display_name_key,
    sort_countries,
)
from apps.financing.domain.interfaces import BaseCountryProvider, BaseCurrencyProvider
from apps.financing.domain.models import Country


@pytest.fixture
def country_provider():
    provider = MagicMock(spec=BaseCountryProvider)
    provider.get_countries.return_value = [
        Country("US", "United States"),
        Country("AX", "Åland Islands"),
        Country("DE", "Germany"),
        Country("AF", "Afghanistan"),
    ]
    return provider


@pytest.fixture
def currency_provider():
    provider = MagicMock(spec=BaseCurrencyProvider)
    provider.get_currencies.return_value = {"EUR": "Euro", "USD": "United States Dollar"}
    return provider


class TestReferenceDataLoader:
    """Tests for the concurrent catalog loader."""

    def test_load_success(self, country_provider, currency_provider):
        loader = ReferenceDataLoader(country_provider, currency_provider)

        reference_data = loader.load()

        assert [c.code for c in reference_data.countries] == ["AF", "AX", "DE", "US"]
        assert reference_data.currencies == {"EUR": "Euro", "USD": "United States Dollar"}
        assert reference_data.warnings == ()
        country_provider.get_countries.assert_called_once()
        currency_provider.get_currencies.assert_called_once()

    def test_country_failure_uses_fallback_only_for_countries(self, country_provider, currency_provider):
        country_provider.get_countries.return_value = None

        reference_data = ReferenceDataLoader(country_provider, currency_provider).load()

        assert {c.code for c in reference_data.countries} == {"US", "GB", "DE", "FR", "CA"}
        assert reference_data.currencies == {"EUR": "Euro", "USD": "United States Dollar"}
        assert [w.catalog for w in reference_data.warnings] == ["countries"]

    def test_fallback_countries_are_sorted(self, country_provider, currency_provider):
        country_provider.get_countries.return_value = None

        reference_data = ReferenceDataLoader(country_provider, currency_provider).load()

        names = [c.name for c in reference_data.countries]
        assert names == ["Canada", "France", "Germany", "United Kingdom", "United States"]

    def test_currency_exception_uses_fallback_only_for_currencies(self, country_provider, currency_provider):
        currency_provider.get_currencies.side_effect = RuntimeError("boom")

        reference_data = ReferenceDataLoader(country_provider, currency_provider).load()

        assert len(reference_data.countries) == 4
        assert set(reference_data.currencies) == {"USD", "EUR", "GBP", "JPY", "CAD"}
        assert [w.catalog for w in reference_data.warnings] == ["currencies"]

    def test_both_fail(self, country_provider, currency_provider):
        country_provider.get_countries.side_effect = RuntimeError("down")
        currency_provider.get_currencies.return_value = {}

        reference_data = ReferenceDataLoader(country_provider, currency_provider).load()

        assert reference_data.countries
        assert reference_data.currencies
        assert {w.catalog for w in reference_data.warnings} == {"countries", "currencies"}

    def test_requests_run_concurrently(self, country_provider, currency_provider):
        """
        Test that both catalogs are in flight at the same time: each provider
        waits for the other at a barrier, which would time out if they ran
        one after the other.
        """
        barrier = threading.Barrier(2, timeout=5)
        countries = country_provider.get_countries.return_value
        currencies = currency_provider.get_currencies.return_value

        def fetch_countries():
            barrier.wait()
            return countries

        def fetch_currencies():
            barrier.wait()
            return currencies

        country_provider.get_countries.side_effect = fetch_countries
        currency_provider.get_currencies.side_effect = fetch_currencies

        reference_data = ReferenceDataLoader(country_provider, currency_provider).load()

        assert reference_data.warnings == ()

    def test_loading_flag(self, country_provider, currency_provider):
        loader = ReferenceDataLoader(country_provider, currency_provider)
        observed = []
        countries = country_provider.get_countries.return_value

        def fetch_countries():
            observed.append(loader.loading)
            return countries

        country_provider.get_countries.side_effect = fetch_countries

        assert loader.loading is False
        loader.load()

        assert observed == [True]
        assert loader.loading is False

    def test_load_async(self, country_provider, currency_provider):
        loader = ReferenceDataLoader(country_provider, currency_provider)

        reference_data = asyncio.run(loader.load_async())

        assert len(reference_data.countries) == 4

    def test_default_providers(self, mocker):
        mock_get = mocker.patch("requests.get", side_effect=Exception("offline"))

        loader = ReferenceDataLoader()

        # Unexpected exceptions escape the HTTP providers and are absorbed by the join
        reference_data = loader.load()

        assert mock_get.call_count == 2
        assert {w.catalog for w in reference_data.warnings} == {"countries", "currencies"}


def test_sort_countries_ignores_case_and_accents():
    countries = [Country("ZA", "south Africa"), Country("AX", "Åland Islands"), Country("BE", "Belgium")]

    assert [c.code for c in sort_countries(countries)] == ["AX", "BE", "ZA"]


def test_display_name_key():
    assert display_name_key("Åland Islands")[0] == "aland islands"

"""
Reference data loading.

Fetches the country and currency catalogs concurrently and substitutes a
static fallback, per catalog, for whichever request fails.
"""

import asyncio
import logging
import unicodedata
from typing import Dict, List, Optional

from apps.financing.domain.interfaces import BaseCountryProvider, BaseCurrencyProvider
from apps.financing.domain.models import Country, ReferenceData, ReferenceDataWarning
from apps.financing.infrastructure.providers.fallback import (
    FallbackCountryProvider,
    FallbackCurrencyProvider,
)
from apps.financing.infrastructure.providers.open_exchange_rates import OpenExchangeRatesCurrencyProvider
from apps.financing.infrastructure.providers.rest_countries import RestCountriesProvider

logger = logging.getLogger(__name__)


def display_name_key(name: str) -> tuple:
    """Sort key comparing names without accents or case (Åland sorts with A)."""
    stripped = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return (stripped.casefold(), name)


def sort_countries(countries: List[Country]) -> List[Country]:
    return sorted(countries, key=lambda country: display_name_key(country.name))


class ReferenceDataLoader:
    """
    Loads reference data once per session.

    Both catalogs are requested at the same time; a failure on one side
    (None, an exception, or an empty catalog) only replaces that side with
    its fallback and records a ReferenceDataWarning.

    Example:
        >>> loader = ReferenceDataLoader()
        >>> reference_data = loader.load()
        >>> [w.message for w in reference_data.warnings]
        []
    """

    def __init__(
        self,
        country_provider: Optional[BaseCountryProvider] = None,
        currency_provider: Optional[BaseCurrencyProvider] = None,
        fallback_country_provider: Optional[BaseCountryProvider] = None,
        fallback_currency_provider: Optional[BaseCurrencyProvider] = None,
    ):
        self.country_provider = country_provider or RestCountriesProvider()
        self.currency_provider = currency_provider or OpenExchangeRatesCurrencyProvider()
        self.fallback_country_provider = fallback_country_provider or FallbackCountryProvider()
        self.fallback_currency_provider = fallback_currency_provider or FallbackCurrencyProvider()
        self.loading = False

    async def load_async(self) -> ReferenceData:
        self.loading = True
        try:
            # Synchronous providers run in worker threads; return_exceptions
            # keeps one failure from cancelling the other request.
            countries_result, currencies_result = await asyncio.gather(
                asyncio.to_thread(self.country_provider.get_countries),
                asyncio.to_thread(self.currency_provider.get_currencies),
                return_exceptions=True,
            )

            warnings: List[ReferenceDataWarning] = []
            countries = self._resolve_countries(countries_result, warnings)
            currencies = self._resolve_currencies(currencies_result, warnings)
        finally:
            self.loading = False

        return ReferenceData(
            countries=tuple(sort_countries(countries)),
            currencies=currencies,
            warnings=tuple(warnings),
        )

    def load(self) -> ReferenceData:
        return asyncio.run(self.load_async())

    def _resolve_countries(self, result, warnings: List[ReferenceDataWarning]) -> List[Country]:
        if isinstance(result, BaseException) or not result:
            reason = result if isinstance(result, BaseException) else "no countries returned"
            logger.warning("Failed to fetch countries (%s), using fallback list", reason)
            warnings.append(ReferenceDataWarning(
                catalog="countries",
                message="Could not load the country list; showing a reduced list.",
            ))
            return self.fallback_country_provider.get_countries()
        return list(result)

    def _resolve_currencies(self, result, warnings: List[ReferenceDataWarning]) -> Dict[str, str]:
        if isinstance(result, BaseException) or not result:
            reason = result if isinstance(result, BaseException) else "no currencies returned"
            logger.warning("Failed to fetch currencies (%s), using fallback list", reason)
            warnings.append(ReferenceDataWarning(
                catalog="currencies",
                message="Could not load the currency list; showing a reduced list.",
            ))
            return self.fallback_currency_provider.get_currencies()
        return dict(result)

"""
Static catalogs used when the remote reference data cannot be fetched.
"""

from typing import Dict, List

from apps.financing.domain.interfaces import BaseCountryProvider, BaseCurrencyProvider
from apps.financing.domain.models import Country


class FallbackCountryProvider(BaseCountryProvider):

    COUNTRIES = (
        ("US", "United States"),
        ("GB", "United Kingdom"),
        ("DE", "Germany"),
        ("FR", "France"),
        ("CA", "Canada"),
    )

    def get_countries(self) -> List[Country]:
        return [Country(code=code, name=name) for code, name in self.COUNTRIES]


class FallbackCurrencyProvider(BaseCurrencyProvider):

    CURRENCIES = {
        "USD": "US Dollar",
        "EUR": "Euro",
        "GBP": "British Pound",
        "JPY": "Japanese Yen",
        "CAD": "Canadian Dollar",
    }

    def get_currencies(self) -> Dict[str, str]:
        return dict(self.CURRENCIES)

import logging
from typing import Dict

import requests
from django.conf import settings

from apps.financing.domain.interfaces import BaseCurrencyProvider

logger = logging.getLogger(__name__)


class OpenExchangeRatesCurrencyProvider(BaseCurrencyProvider):
    """
    Open Exchange Rates provider.
    Uses the public /currencies.json endpoint (no API key required).
    """

    def __init__(self, url: str | None = None, timeout: float | None = None):
        self.url = url or settings.FINANCING_CURRENCIES_URL
        self.timeout = timeout if timeout is not None else settings.FINANCING_REFERENCE_TIMEOUT

    def get_currencies(self) -> Dict[str, str] | None:
        """
        Fetch the currency catalog.

        Returns:
            Mapping of currency code to display name, or None if error occurs
        """
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            # Response format: {"USD": "United States Dollar", "EUR": "Euro", ...}
            return {str(code): str(name) for code, name in data.items()}

        except requests.exceptions.Timeout:
            logger.error("Timeout calling Open Exchange Rates API at %s", self.url)
            return None
        except requests.exceptions.HTTPError as e:
            logger.error("HTTP error from Open Exchange Rates: %s", e)
            return None
        except (AttributeError, TypeError, ValueError) as e:
            logger.error("Invalid response from Open Exchange Rates: %s", e)
            return None
        except requests.exceptions.RequestException as e:
            logger.error("Unexpected error calling Open Exchange Rates: %s", e)
            return None

import logging
from typing import List

import requests
from django.conf import settings

from apps.financing.domain.interfaces import BaseCountryProvider
from apps.financing.domain.models import Country

logger = logging.getLogger(__name__)


class RestCountriesProvider(BaseCountryProvider):
    """
    REST Countries API provider.
    Uses /all?fields=name,cca2 to fetch the country catalog.
    """

    def __init__(self, url: str | None = None, timeout: float | None = None):
        self.url = url or settings.FINANCING_COUNTRIES_URL
        self.timeout = timeout if timeout is not None else settings.FINANCING_REFERENCE_TIMEOUT

    def get_countries(self) -> List[Country] | None:
        """
        Fetch the country catalog.

        Returns:
            Countries in the order the API returned them, or None if error occurs
        """
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            # Response format: [{"name": {"common": "Germany"}, "cca2": "DE"}, ...]
            countries = []
            for entry in data:
                code = entry.get("cca2") or entry["code"]
                countries.append(Country(code=code, name=entry["name"]["common"]))
            return countries

        except requests.exceptions.Timeout:
            logger.error("Timeout calling REST Countries API at %s", self.url)
            return None
        except requests.exceptions.HTTPError as e:
            logger.error("HTTP error from REST Countries: %s", e)
            return None
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error("Invalid response from REST Countries: %s", e)
            return None
        except requests.exceptions.RequestException as e:
            logger.error("Unexpected error calling REST Countries: %s", e)
            return None

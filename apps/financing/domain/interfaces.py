from abc import ABC, abstractmethod
from typing import Dict, List

from apps.financing.domain.models import Country, FinancingRequest, SubmissionOutcome


class BaseCountryProvider(ABC):
    @abstractmethod
    def get_countries(self) -> List[Country] | None:
        pass


class BaseCurrencyProvider(ABC):
    @abstractmethod
    def get_currencies(self) -> Dict[str, str] | None:
        pass


class BaseSubmissionGateway(ABC):
    @abstractmethod
    def submit(self, request: FinancingRequest) -> SubmissionOutcome:
        pass

"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from external API contracts.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Union

from apps.financing.domain.models import FinancingRequest, ReferenceData
from apps.financing.domain.validation import validity_period_years


@dataclass
class CountryDTO:
    """Country option for select widgets."""
    code: str
    name: str


@dataclass
class CurrencyDTO:
    """Currency option for select widgets."""
    code: str
    name: str


@dataclass
class ReferenceDataDTO:
    """Reference data as exposed to clients."""
    countries: List[CountryDTO]
    currencies: List[CurrencyDTO]
    warnings: List[str]

    @classmethod
    def from_domain(cls, reference_data: ReferenceData) -> "ReferenceDataDTO":
        return cls(
            countries=[CountryDTO(code=c.code, name=c.name) for c in reference_data.countries],
            currencies=[
                CurrencyDTO(code=code, name=name)
                for code, name in reference_data.currencies.items()
            ],
            warnings=[warning.message for warning in reference_data.warnings],
        )


@dataclass
class FinancingRequestPayloadDTO:
    """Wire payload posted to the submission endpoint."""
    full_name: str
    country_code: str
    project_code: str
    description: str
    amount: Decimal
    currency: str
    date: str
    validity_period: int

    @classmethod
    def from_request(cls, request: FinancingRequest) -> "FinancingRequestPayloadDTO":
        return cls(
            full_name=request.name,
            country_code=request.origin_country,
            project_code=request.project_code,
            description=request.description,
            amount=request.amount,
            currency=request.currency,
            date=request.start_date.isoformat(),
            validity_period=validity_period_years(request.start_date, request.end_date),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "fullName": self.full_name,
            "countryCode": self.country_code,
            "projectCode": self.project_code,
            "description": self.description,
            "amount": _json_number(self.amount),
            "currency": self.currency,
            "date": self.date,
            "validityPeriod": self.validity_period,
        }


def _json_number(value: Decimal) -> Union[int, float]:
    # JSON has no decimal type; integral amounts stay integers
    if value == value.to_integral_value():
        return int(value)
    return float(value)

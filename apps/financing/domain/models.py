"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Tuple, Union


OPEC_COUNTRIES = frozenset({
    "DZ",  # Algeria
    "AO",  # Angola
    "CG",  # Congo
    "GQ",  # Equatorial Guinea
    "GA",  # Gabon
    "IR",  # Iran
    "IQ",  # Iraq
    "KW",  # Kuwait
    "LY",  # Libya
    "NG",  # Nigeria
    "SA",  # Saudi Arabia
    "AE",  # United Arab Emirates
    "VE",  # Venezuela
})

OPEC_CURRENCY = "USD"

DESCRIPTION_MAX_LENGTH = 150


class ValidationErrorKind(str, Enum):
    REQUIRED = "required"
    FORMAT_INVALID = "format_invalid"
    TOO_LONG = "too_long"
    TOO_SHORT = "too_short"
    MUST_BE_POSITIVE = "must_be_positive"
    TOO_SOON = "too_soon"
    END_BEFORE_OR_EQUAL_START = "end_before_or_equal_start"
    UNKNOWN_OPTION = "unknown_option"


class SubmissionErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    SERVER_ERROR = "server_error"
    UNKNOWN_STATUS = "unknown_status"
    NETWORK_UNREACHABLE = "network_unreachable"
    CLIENT_FAULT = "client_fault"


class FormState(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUBMITTED_OK = "submitted_ok"
    SUBMITTED_ERROR = "submitted_error"


@dataclass(frozen=True)
class Country:

    code: str
    name: str

    def __post_init__(self):
        if len(self.code) != 2:
            raise ValueError(f"Country code must be exactly 2 characters, got '{self.code}'")


@dataclass(frozen=True)
class ReferenceDataWarning:
    """Non-blocking notice raised when a catalog had to fall back."""

    catalog: str
    message: str


@dataclass(frozen=True)
class ReferenceData:

    countries: Tuple[Country, ...] = ()
    currencies: Dict[str, str] = field(default_factory=dict)
    warnings: Tuple[ReferenceDataWarning, ...] = ()

    @property
    def country_codes(self) -> frozenset:
        return frozenset(country.code for country in self.countries)

    def has_country(self, code: str) -> bool:
        return code in self.country_codes

    def has_currency(self, code: str) -> bool:
        return code in self.currencies


@dataclass
class FinancingFormValues:
    """
    Raw values as typed by the user.
    Amounts and dates may still be unparsed strings.
    """

    name: str = ""
    origin_country: str = ""
    project_code: str = ""
    description: str = ""
    amount: Optional[Union[Decimal, int, float, str]] = None
    currency: str = ""
    start_date: Optional[Union[date, str]] = None
    end_date: Optional[Union[date, str]] = None


@dataclass(frozen=True)
class FinancingRequest:

    name: str
    origin_country: str
    project_code: str
    description: str
    amount: Decimal
    currency: str
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.amount <= 0:
            raise ValueError(f"amount must be positive, got {self.amount}")
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        if self.origin_country in OPEC_COUNTRIES and self.currency != OPEC_CURRENCY:
            raise ValueError(
                f"currency must be {OPEC_CURRENCY} for OPEC country '{self.origin_country}', got '{self.currency}'"
            )

    @property
    def is_opec(self) -> bool:
        return self.origin_country in OPEC_COUNTRIES


@dataclass(frozen=True)
class FieldError:

    field: str
    kind: ValidationErrorKind
    message: str


@dataclass(frozen=True)
class ValidationResult:

    errors: Dict[str, FieldError] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_for(self, field_name: str) -> Optional[FieldError]:
        return self.errors.get(field_name)


@dataclass(frozen=True)
class SubmissionOutcome:

    success: bool
    error: Optional[SubmissionErrorKind] = None
    message: str = ""
    status_code: Optional[int] = None

    @classmethod
    def ok(cls, message: str, status_code: Optional[int] = None) -> "SubmissionOutcome":
        return cls(success=True, message=message, status_code=status_code)

    @classmethod
    def failure(
        cls,
        error: SubmissionErrorKind,
        message: str,
        status_code: Optional[int] = None,
    ) -> "SubmissionOutcome":
        return cls(success=False, error=error, message=message, status_code=status_code)


def is_opec(country_code: Optional[str]) -> bool:
    return bool(country_code) and country_code in OPEC_COUNTRIES

"""
Validation rules for financing requests.

Pure functions only - no I/O, no Django. Each field rule returns a
FieldError or None; validate_form() runs every rule and collects the
failures into a ValidationResult.

Date arithmetic:
- The start date must be at least MIN_START_LEAD_DAYS after "today",
  where today is evaluated when the rule runs.
- The validity period is measured in fractional calendar years (see
  years_between) and must lie within [MIN_VALIDITY_YEARS, MAX_VALIDITY_YEARS].
"""

import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta

from apps.financing.domain.models import (
    DESCRIPTION_MAX_LENGTH,
    OPEC_CURRENCY,
    FieldError,
    FinancingFormValues,
    FinancingRequest,
    ReferenceData,
    ValidationErrorKind,
    ValidationResult,
    is_opec,
)


PROJECT_CODE_PATTERN = re.compile(r"[A-Z]{4}-[1-9]{4}")

MIN_START_LEAD_DAYS = 15

MIN_VALIDITY_YEARS = 1
MAX_VALIDITY_YEARS = 3

FIELD_NAMES = (
    "name",
    "origin_country",
    "project_code",
    "description",
    "amount",
    "currency",
    "start_date",
    "end_date",
)


def parse_amount(value) -> Optional[Decimal]:
    """Return the amount as a finite Decimal, or None when absent/unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        if not value.strip():
            return None
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not amount.is_finite():
        return None
    return amount


def parse_date(value) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def minimum_start_date(today: date) -> date:
    return today + timedelta(days=MIN_START_LEAD_DAYS)


def years_between(start: date, end: date) -> float:
    """
    Elapsed time between two dates in fractional years.

    Whole calendar anniversaries are counted first; the remainder is the
    share of the following anniversary year that has elapsed, measured
    against that year's real length (365 or 366 days). So
    start + relativedelta(years=n) is exactly n.

    Example:
        >>> years_between(date(2027, 1, 10), date(2029, 1, 10))
        2.0
    """
    if end < start:
        return -years_between(end, start)

    whole = end.year - start.year
    anniversary = start + relativedelta(years=whole)
    if anniversary > end:
        whole -= 1
        anniversary = start + relativedelta(years=whole)

    next_anniversary = start + relativedelta(years=whole + 1)
    fraction = (end - anniversary).days / (next_anniversary - anniversary).days
    return whole + fraction


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (1.5 -> 2, 2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def validity_period_years(start: date, end: date) -> int:
    return round_half_up(years_between(start, end))


def validate_name(value: Optional[str]) -> Optional[FieldError]:
    if not value or not value.strip():
        return FieldError("name", ValidationErrorKind.REQUIRED, "Name is required")
    return None


def validate_origin_country(
    value: Optional[str],
    reference_data: Optional[ReferenceData] = None,
) -> Optional[FieldError]:
    if not value:
        return FieldError("origin_country", ValidationErrorKind.REQUIRED, "Country is required")

    if reference_data is not None and reference_data.countries and not reference_data.has_country(value):
        return FieldError(
            "origin_country",
            ValidationErrorKind.UNKNOWN_OPTION,
            f"Unknown country '{value}'",
        )
    return None


def validate_project_code(value: Optional[str]) -> Optional[FieldError]:
    if not value:
        return FieldError("project_code", ValidationErrorKind.REQUIRED, "Project code is required")

    if PROJECT_CODE_PATTERN.fullmatch(value) is None:
        return FieldError(
            "project_code",
            ValidationErrorKind.FORMAT_INVALID,
            "Invalid project code format (e.g., ABCD-1234)",
        )
    return None


def validate_description(value: Optional[str]) -> Optional[FieldError]:
    if not value:
        return FieldError("description", ValidationErrorKind.REQUIRED, "Description is required")

    if len(value) > DESCRIPTION_MAX_LENGTH:
        return FieldError(
            "description",
            ValidationErrorKind.TOO_LONG,
            f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less",
        )
    return None


def validate_amount(value) -> Optional[FieldError]:
    amount = parse_amount(value)
    if amount is None:
        return FieldError("amount", ValidationErrorKind.REQUIRED, "Amount is required")

    if amount <= 0:
        return FieldError("amount", ValidationErrorKind.MUST_BE_POSITIVE, "Amount must be positive")
    return None


def validate_currency(
    value: Optional[str],
    origin_country: Optional[str] = None,
    reference_data: Optional[ReferenceData] = None,
) -> Optional[FieldError]:
    if not value:
        return FieldError("currency", ValidationErrorKind.REQUIRED, "Currency is required")

    # The forced OPEC currency is accepted even if the catalog lacks it
    if is_opec(origin_country) and value == OPEC_CURRENCY:
        return None

    if reference_data is not None and reference_data.currencies and not reference_data.has_currency(value):
        return FieldError(
            "currency",
            ValidationErrorKind.UNKNOWN_OPTION,
            f"Unknown currency '{value}'",
        )
    return None


def validate_start_date(value, today: date) -> Optional[FieldError]:
    start = parse_date(value)
    if start is None:
        return FieldError("start_date", ValidationErrorKind.REQUIRED, "Start date is required")

    if start < minimum_start_date(today):
        return FieldError(
            "start_date",
            ValidationErrorKind.TOO_SOON,
            f"Start date must be at least {MIN_START_LEAD_DAYS} days from today",
        )
    return None


def validate_end_date(value, start_value) -> Optional[FieldError]:
    end = parse_date(value)
    if end is None:
        return FieldError("end_date", ValidationErrorKind.REQUIRED, "End date is required")

    start = parse_date(start_value)
    if start is None:
        return None

    if end <= start:
        return FieldError(
            "end_date",
            ValidationErrorKind.END_BEFORE_OR_EQUAL_START,
            "End date must be after start date",
        )

    years = years_between(start, end)
    if years < MIN_VALIDITY_YEARS:
        return FieldError(
            "end_date",
            ValidationErrorKind.TOO_SHORT,
            f"Validity period must be at least {MIN_VALIDITY_YEARS} year",
        )
    if years > MAX_VALIDITY_YEARS:
        return FieldError(
            "end_date",
            ValidationErrorKind.TOO_LONG,
            f"Validity period cannot exceed {MAX_VALIDITY_YEARS} years",
        )
    return None


def validate_form(
    values: FinancingFormValues,
    reference_data: Optional[ReferenceData] = None,
    today: Optional[date] = None,
) -> ValidationResult:
    """
    Run every field rule against the current values.

    Args:
        values: Raw form values
        reference_data: Loaded catalogs; membership is only checked when present
        today: Anchor for the start-date lead time (defaults to date.today())

    Returns:
        ValidationResult keyed by field name; empty when the form is valid
    """
    if today is None:
        today = date.today()

    checks: dict[str, Callable[[], Optional[FieldError]]] = {
        "name": lambda: validate_name(values.name),
        "origin_country": lambda: validate_origin_country(values.origin_country, reference_data),
        "project_code": lambda: validate_project_code(values.project_code),
        "description": lambda: validate_description(values.description),
        "amount": lambda: validate_amount(values.amount),
        "currency": lambda: validate_currency(values.currency, values.origin_country, reference_data),
        "start_date": lambda: validate_start_date(values.start_date, today),
        "end_date": lambda: validate_end_date(values.end_date, values.start_date),
    }

    errors = {}
    for field_name, check in checks.items():
        error = check()
        if error is not None:
            errors[field_name] = error

    return ValidationResult(errors=errors)


def to_financing_request(values: FinancingFormValues) -> FinancingRequest:
    """
    Build the validated value object.

    Callers must have run validate_form() first; unparseable values raise
    ValueError here.
    """
    amount = parse_amount(values.amount)
    start = parse_date(values.start_date)
    end = parse_date(values.end_date)
    if amount is None or start is None or end is None:
        raise ValueError("amount, start_date and end_date must be parseable")

    return FinancingRequest(
        name=values.name,
        origin_country=values.origin_country,
        project_code=values.project_code,
        description=values.description,
        amount=amount,
        currency=values.currency,
        start_date=start,
        end_date=end,
    )

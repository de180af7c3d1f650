"""
Form controller for a single financing request session.

Holds the editable values, keeps the OPEC currency lock in sync with the
selected country, re-validates after every change and drives the
submission state machine:

    EDITING -> SUBMITTING -> SUBMITTED_OK | SUBMITTED_ERROR -> EDITING
"""

import logging
from dataclasses import asdict, replace
from datetime import date
from typing import Callable, Optional

from apps.financing.domain.interfaces import BaseSubmissionGateway
from apps.financing.domain.models import (
    DESCRIPTION_MAX_LENGTH,
    OPEC_CURRENCY,
    FinancingFormValues,
    FormState,
    ReferenceData,
    SubmissionOutcome,
    ValidationResult,
    is_opec,
)
from apps.financing.domain.validation import (
    FIELD_NAMES,
    minimum_start_date,
    to_financing_request,
    validate_form,
)

logger = logging.getLogger(__name__)


class FinancingFormError(Exception):
    """Base exception for misuse of the form controller."""


class UnknownFieldError(FinancingFormError):

    def __init__(self, field_name: str):
        super().__init__(f"Unknown form field '{field_name}'")
        self.field_name = field_name


class FieldNotEditableError(FinancingFormError):

    def __init__(self, field_name: str, reason: str):
        super().__init__(f"Field '{field_name}' is not editable: {reason}")
        self.field_name = field_name


class FormNotSubmittableError(FinancingFormError):
    pass


class FinancingFormController:

    def __init__(
        self,
        reference_data: ReferenceData,
        submission_gateway: BaseSubmissionGateway,
        today: Callable[[], date] = date.today,
    ):
        self.reference_data = reference_data
        self.submission_gateway = submission_gateway
        self.today = today
        self.values = FinancingFormValues()
        self.is_opec = False
        self.state = FormState.EDITING
        self.last_outcome: Optional[SubmissionOutcome] = None
        self.validation = self._validate()

    # -- derived state -----------------------------------------------------

    @property
    def currency_is_user_editable(self) -> bool:
        return not self.is_opec

    @property
    def errors(self):
        return self.validation.errors

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid

    @property
    def can_submit(self) -> bool:
        return self.is_valid and self.state != FormState.SUBMITTING

    @property
    def min_start_date(self) -> date:
        return minimum_start_date(self.today())

    @property
    def description_length(self) -> int:
        return len(self.values.description or "")

    @property
    def description_remaining(self) -> int:
        return DESCRIPTION_MAX_LENGTH - self.description_length

    @property
    def status_message(self) -> str:
        if self.state == FormState.SUBMITTING:
            return "Form is being submitted"
        count = len(self.errors)
        if count:
            return f"Form has {count} validation error{'s' if count > 1 else ''}"
        return "Form is valid and ready to submit"

    # -- editing -----------------------------------------------------------

    def set_field(self, field_name: str, value) -> ValidationResult:
        """
        Update one field and re-validate the whole form.

        Raises:
            UnknownFieldError: field_name is not a form field
            FieldNotEditableError: the currency is locked for an OPEC country
        """
        if field_name not in FIELD_NAMES:
            raise UnknownFieldError(field_name)

        if field_name == "currency" and not self.currency_is_user_editable:
            if value == OPEC_CURRENCY:
                return self.validation
            raise FieldNotEditableError(
                field_name,
                f"{OPEC_CURRENCY} is mandatory for OPEC member countries",
            )

        self.acknowledge()
        self.values = replace(self.values, **{field_name: value})

        if field_name == "origin_country":
            self._apply_country_rules()

        self.validation = self._validate()
        return self.validation

    def update(self, **fields) -> ValidationResult:
        """Set several fields at once; the country is applied before the currency."""
        ordered = sorted(fields.items(), key=lambda item: FIELD_NAMES.index(item[0]) if item[0] in FIELD_NAMES else -1)
        for field_name, value in ordered:
            self.set_field(field_name, value)
        return self.validation

    def acknowledge(self):
        """Return from a terminal submission state to editing."""
        if self.state in (FormState.SUBMITTED_OK, FormState.SUBMITTED_ERROR):
            self.state = FormState.EDITING

    def reset(self):
        self.values = FinancingFormValues()
        self.is_opec = False
        self.state = FormState.EDITING
        self.validation = self._validate()

    def snapshot(self) -> dict:
        return asdict(self.values)

    # -- submission ----------------------------------------------------------

    def submit(self) -> SubmissionOutcome:
        """
        Submit the current values through the submission gateway.

        On success every field is cleared; on failure the values are kept
        so the user can correct them and resubmit.

        Raises:
            FormNotSubmittableError: the form is invalid or already submitting
        """
        # Re-validate so the 15 day lead time is checked against today
        self.validation = self._validate()
        if not self.can_submit:
            raise FormNotSubmittableError(
                "Form is being submitted" if self.state == FormState.SUBMITTING
                else f"Form has {len(self.errors)} validation error(s)"
            )

        request = to_financing_request(self.values)
        self.state = FormState.SUBMITTING
        try:
            outcome = self.submission_gateway.submit(request)
        except Exception:
            self.state = FormState.SUBMITTED_ERROR
            raise
        self.last_outcome = outcome

        if outcome.success:
            logger.info("Financing request %s accepted", request.project_code)
            self.reset()
            self.state = FormState.SUBMITTED_OK
        else:
            logger.warning(
                "Financing request %s failed: %s",
                request.project_code,
                outcome.error.value if outcome.error else "unknown",
            )
            self.state = FormState.SUBMITTED_ERROR

        return outcome

    # -- internals -----------------------------------------------------------

    def _apply_country_rules(self):
        self.is_opec = is_opec(self.values.origin_country)
        if self.is_opec:
            self.values = replace(self.values, currency=OPEC_CURRENCY)

    def _validate(self) -> ValidationResult:
        return validate_form(self.values, self.reference_data, today=self.today())

import pytest
from decimal import Decimal
from datetime import date

from apps.financing.domain.models import (
    OPEC_COUNTRIES,
    Country,
    FinancingRequest,
    ReferenceData,
    SubmissionErrorKind,
    SubmissionOutcome,
    is_opec,
)


def make_request(**overrides):
    fields = dict(
        name="Jane Doe",
        origin_country="US",
        project_code="ABCD-1234",
        description="test",
        amount=Decimal("1000"),
        currency="EUR",
        start_date=date(2026, 4, 1),
        end_date=date(2028, 4, 1),
    )
    fields.update(overrides)
    return FinancingRequest(**fields)


class TestOpecMembership:

    @pytest.mark.parametrize("code", ["DZ", "AO", "CG", "GQ", "GA", "IR", "IQ", "KW", "LY", "NG", "SA", "AE", "VE"])
    def test_members(self, code):
        assert is_opec(code)

    @pytest.mark.parametrize("code", ["US", "GB", "DE", "RU", "NO", "sa", "", None])
    def test_non_members(self, code):
        assert not is_opec(code)

    def test_set_has_thirteen_members(self):
        assert len(OPEC_COUNTRIES) == 13


class TestFinancingRequest:

    def test_valid_request(self):
        request = make_request()

        assert request.amount == Decimal("1000")
        assert not request.is_opec

    def test_rejects_non_positive_amount(self):
        with pytest.raises(ValueError):
            make_request(amount=Decimal("0"))

    def test_rejects_end_before_start(self):
        with pytest.raises(ValueError):
            make_request(end_date=date(2026, 3, 1))

    def test_rejects_non_usd_for_opec_country(self):
        with pytest.raises(ValueError):
            make_request(origin_country="SA", currency="EUR")

    def test_opec_with_usd(self):
        assert make_request(origin_country="SA", currency="USD").is_opec


class TestReferenceData:

    def test_membership(self):
        reference_data = ReferenceData(
            countries=(Country("US", "United States"),),
            currencies={"USD": "US Dollar"},
        )

        assert reference_data.has_country("US")
        assert not reference_data.has_country("FR")
        assert reference_data.has_currency("USD")
        assert not reference_data.has_currency("EUR")

    def test_country_code_length(self):
        with pytest.raises(ValueError):
            Country("USA", "United States")


class TestSubmissionOutcome:

    def test_ok(self):
        outcome = SubmissionOutcome.ok("done", status_code=201)

        assert outcome.success
        assert outcome.error is None

    def test_failure(self):
        outcome = SubmissionOutcome.failure(SubmissionErrorKind.CONFLICT, "duplicate", status_code=409)

        assert not outcome.success
        assert outcome.error == SubmissionErrorKind.CONFLICT
        assert outcome.status_code == 409

import pytest
from decimal import Decimal
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from apps.financing.application.dto import (
    FinancingRequestPayloadDTO,
    ReferenceDataDTO,
)
from apps.financing.domain.models import (
    Country,
    FinancingRequest,
    ReferenceData,
    ReferenceDataWarning,
)


@pytest.fixture
def financing_request():
    start = date.today() + timedelta(days=20)
    return FinancingRequest(
        name="Jane Doe",
        origin_country="US",
        project_code="ABCD-1234",
        description="test",
        amount=Decimal("1000"),
        currency="EUR",
        start_date=start,
        end_date=start + relativedelta(years=2),
    )


class TestFinancingRequestPayloadDTO:
    """Tests for the submission wire payload."""

    def test_field_mapping(self, financing_request):
        payload = FinancingRequestPayloadDTO.from_request(financing_request).to_json()

        assert payload == {
            "fullName": "Jane Doe",
            "countryCode": "US",
            "projectCode": "ABCD-1234",
            "description": "test",
            "amount": 1000,
            "currency": "EUR",
            "date": financing_request.start_date.isoformat(),
            "validityPeriod": 2,
        }

    def test_integral_amount_is_int(self, financing_request):
        payload = FinancingRequestPayloadDTO.from_request(financing_request).to_json()

        assert isinstance(payload["amount"], int)

    def test_fractional_amount_is_float(self):
        request = FinancingRequest(
            name="Jane Doe",
            origin_country="SA",
            project_code="WXYZ-5678",
            description="solar farm",
            amount=Decimal("2500.75"),
            currency="USD",
            start_date=date(2026, 4, 1),
            end_date=date(2027, 4, 1),
        )

        payload = FinancingRequestPayloadDTO.from_request(request).to_json()

        assert payload["amount"] == 2500.75
        assert payload["validityPeriod"] == 1
        assert payload["date"] == "2026-04-01"

    def test_validity_period_rounds_half_up(self):
        # 2 years and 183 of 365 days is just past the half
        request = FinancingRequest(
            name="Jane Doe",
            origin_country="US",
            project_code="ABCD-1234",
            description="test",
            amount=Decimal("1"),
            currency="EUR",
            start_date=date(2026, 5, 1),
            end_date=date(2028, 10, 31),
        )

        dto = FinancingRequestPayloadDTO.from_request(request)

        assert dto.validity_period == 3


class TestReferenceDataDTO:

    def test_from_domain(self):
        reference_data = ReferenceData(
            countries=(Country("DE", "Germany"), Country("US", "United States")),
            currencies={"EUR": "Euro"},
            warnings=(ReferenceDataWarning("currencies", "fallback used"),),
        )

        dto = ReferenceDataDTO.from_domain(reference_data)

        assert [c.code for c in dto.countries] == ["DE", "US"]
        assert dto.currencies[0].code == "EUR"
        assert dto.currencies[0].name == "Euro"
        assert dto.warnings == ["fallback used"]

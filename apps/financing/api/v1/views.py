"""
ViewSets for the financing API v1.

Every request builds its own FinancingFormController from freshly loaded
reference data, so no session state is shared between requests.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.financing.api.v1.serializers import (
    FinancingRequestInputSerializer,
    FormStatusSerializer,
    ReferenceDataSerializer,
    SubmissionFailureSerializer,
    SubmissionSuccessSerializer,
)
from apps.financing.application.controller import FinancingFormController
from apps.financing.application.dto import ReferenceDataDTO
from apps.financing.application.reference_data import ReferenceDataLoader
from apps.financing.domain.interfaces import BaseSubmissionGateway
from apps.financing.domain.models import ReferenceData, SubmissionErrorKind
from apps.financing.domain.validation import FIELD_NAMES
from apps.financing.infrastructure.submission import FinancingSubmissionClient


def get_reference_data() -> ReferenceData:
    return ReferenceDataLoader().load()


def get_submission_client() -> BaseSubmissionGateway:
    return FinancingSubmissionClient()


def build_controller(data: dict) -> FinancingFormController:
    """
    Replay the posted values into a fresh controller.

    The country is applied before the currency, so a currency posted for an
    OPEC country is replaced by the forced one instead of being rejected.
    """
    controller = FinancingFormController(get_reference_data(), get_submission_client())
    for field_name in FIELD_NAMES:
        if field_name == "currency" and not controller.currency_is_user_editable:
            continue
        controller.set_field(field_name, data[field_name])
    return controller


def form_status(controller: FinancingFormController) -> dict:
    return {
        "is_valid": controller.is_valid,
        "errors": {
            field_name: {"code": error.kind.value, "message": error.message}
            for field_name, error in controller.errors.items()
        },
        "is_opec": controller.is_opec,
        "currency_is_user_editable": controller.currency_is_user_editable,
        "min_start_date": controller.min_start_date.isoformat(),
        "description_remaining": controller.description_remaining,
        "status_message": controller.status_message,
        "values": controller.snapshot(),
    }


@extend_schema(tags=['Reference data'])
class ReferenceDataViewSet(viewsets.ViewSet):

    @extend_schema(
        responses=ReferenceDataSerializer,
        description="Countries (sorted by name) and currencies available in the form. "
                    "Warnings are present when a static fallback list had to be used."
    )
    def list(self, request):
        dto = ReferenceDataDTO.from_domain(get_reference_data())
        serializer = ReferenceDataSerializer({
            "countries": [{"code": c.code, "name": c.name} for c in dto.countries],
            "currencies": [{"code": c.code, "name": c.name} for c in dto.currencies],
            "warnings": dto.warnings,
        })
        return Response(serializer.data)


@extend_schema(tags=['Financing requests'])
class FinancingRequestViewSet(viewsets.ViewSet):

    @extend_schema(
        request=FinancingRequestInputSerializer,
        responses={200: FormStatusSerializer},
        description="Validate financing request values without submitting them"
    )
    @action(detail=False, methods=['post'], url_path='validate')
    def validate(self, request):
        serializer = FinancingRequestInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        controller = build_controller(serializer.validated_data)
        return Response(form_status(controller))

    @extend_schema(
        request=FinancingRequestInputSerializer,
        responses={
            201: SubmissionSuccessSerializer,
            400: FormStatusSerializer,
            409: SubmissionFailureSerializer,
            502: SubmissionFailureSerializer,
        },
        description="Validate and forward a financing request to the submission endpoint"
    )
    def create(self, request):
        serializer = FinancingRequestInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        controller = build_controller(serializer.validated_data)
        if not controller.can_submit:
            return Response(form_status(controller), status=status.HTTP_400_BAD_REQUEST)

        submitted_values = controller.snapshot()
        outcome = controller.submit()

        if outcome.success:
            return Response({"message": outcome.message}, status=status.HTTP_201_CREATED)

        http_status = (
            status.HTTP_409_CONFLICT if outcome.error == SubmissionErrorKind.CONFLICT
            else status.HTTP_502_BAD_GATEWAY
        )
        return Response(
            {
                "error": outcome.error.value,
                "message": outcome.message,
                "values": submitted_values,
            },
            status=http_status
        )

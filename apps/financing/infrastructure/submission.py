"""
HTTP client for the remote financing request endpoint.

One POST per call, never retried. Every outcome - accepted, rejected by
status code, or lost in transport - is translated into a SubmissionOutcome
so callers never see a requests exception.
"""

import logging

import requests
from django.conf import settings

from apps.financing.application.dto import FinancingRequestPayloadDTO
from apps.financing.domain.interfaces import BaseSubmissionGateway
from apps.financing.domain.models import (
    FinancingRequest,
    SubmissionErrorKind,
    SubmissionOutcome,
)

logger = logging.getLogger(__name__)


SUCCESS_MESSAGE = "Financing request submitted successfully!"

ERROR_MESSAGES = {
    SubmissionErrorKind.BAD_REQUEST: "The request was rejected as malformed. Please review the form and try again.",
    SubmissionErrorKind.UNAUTHORIZED: "You are not authenticated. Please sign in and try again.",
    SubmissionErrorKind.FORBIDDEN: "You are not allowed to submit financing requests.",
    SubmissionErrorKind.CONFLICT: "A financing request with this project code already exists (duplicate project code).",
    SubmissionErrorKind.UNPROCESSABLE_ENTITY: "The request data could not be processed. Please check the values and try again.",
    SubmissionErrorKind.SERVER_ERROR: "The server encountered an error. Please try again later.",
    SubmissionErrorKind.UNKNOWN_STATUS: "Unexpected response from the server. Please try again.",
    SubmissionErrorKind.NETWORK_UNREACHABLE: "No response from the server. Please check your connection and try again.",
    SubmissionErrorKind.CLIENT_FAULT: "The request could not be sent. Please try again.",
}

STATUS_ERRORS = {
    400: SubmissionErrorKind.BAD_REQUEST,
    401: SubmissionErrorKind.UNAUTHORIZED,
    403: SubmissionErrorKind.FORBIDDEN,
    409: SubmissionErrorKind.CONFLICT,
    422: SubmissionErrorKind.UNPROCESSABLE_ENTITY,
    500: SubmissionErrorKind.SERVER_ERROR,
}


def classify_status(status_code: int) -> SubmissionErrorKind | None:
    """Return the error kind for an HTTP status, or None for 2xx."""
    if 200 <= status_code < 300:
        return None
    return STATUS_ERRORS.get(status_code, SubmissionErrorKind.UNKNOWN_STATUS)


def failure(kind: SubmissionErrorKind, status_code: int | None = None) -> SubmissionOutcome:
    return SubmissionOutcome.failure(kind, ERROR_MESSAGES[kind], status_code=status_code)


class FinancingSubmissionClient(BaseSubmissionGateway):

    def __init__(self, url: str | None = None, timeout: float | None = None):
        self.url = url or settings.FINANCING_SUBMISSION_URL
        self.timeout = timeout if timeout is not None else settings.FINANCING_SUBMISSION_TIMEOUT

    def submit(self, request: FinancingRequest) -> SubmissionOutcome:
        """
        Post a validated financing request.

        Args:
            request: A FinancingRequest that passed every validation rule

        Returns:
            SubmissionOutcome describing success or the classified failure
        """
        try:
            payload = FinancingRequestPayloadDTO.from_request(request).to_json()
        except (TypeError, ValueError, ArithmeticError) as e:
            logger.error("Could not build submission payload for %s: %s", request.project_code, e)
            return failure(SubmissionErrorKind.CLIENT_FAULT)

        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error("No response from submission endpoint %s: %s", self.url, e)
            return failure(SubmissionErrorKind.NETWORK_UNREACHABLE)
        except requests.exceptions.RequestException as e:
            logger.error("Submission request to %s could not be sent: %s", self.url, e)
            return failure(SubmissionErrorKind.CLIENT_FAULT)

        kind = classify_status(response.status_code)
        if kind is not None:
            logger.warning(
                "Submission of %s rejected with HTTP %s (%s)",
                request.project_code,
                response.status_code,
                kind.value,
            )
            return failure(kind, status_code=response.status_code)

        logger.info("Submitted financing request %s", request.project_code)
        return SubmissionOutcome.ok(SUCCESS_MESSAGE, status_code=response.status_code)

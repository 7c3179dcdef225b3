"""API error types shared across apps.

Services raise these directly; DRF's exception handler renders them.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class Unauthorized(APIException):
    """Caller is authenticated but lacks the role or ownership required."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You are not allowed to perform this action."
    default_code = "unauthorized"


class AlreadyExists(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Already exists."
    default_code = "already_exists"


class UpstreamFailure(APIException):
    """A third-party service failed on a user-initiated request."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream service failed."
    default_code = "upstream_failure"


class IntegrationNotConfigured(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Integration is not configured."
    default_code = "integration_not_configured"

"""
License API views.

These endpoints are used by the website and the desktop application to:
- Claim a trial license
- Show the signed-in user's license
- Validate a license key offline
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.infrastructure.providers import get_identity_provider
from accounts.infrastructure.repositories.django_user_profile_repository import (
    DjangoUserProfileRepository,
)
from api.v1.license.serializers import (
    ClaimTrialResponseSerializer,
    LicenseOverviewSerializer,
    ValidateLicenseRequestSerializer,
    ValidateLicenseResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.claim_trial import ClaimTrialCommand
from licenses.application.handlers.claim_trial_handler import ClaimTrialHandler
from licenses.application.handlers.get_license_overview_handler import GetLicenseOverviewHandler
from licenses.application.handlers.validate_license_key_handler import ValidateLicenseKeyHandler
from licenses.application.queries.get_license_overview import GetLicenseOverviewQuery
from licenses.application.queries.validate_license_key import ValidateLicenseKeyQuery
from licenses.application.services.license_codec import get_license_codec
from licenses.infrastructure.repositories.django_license_record_repository import (
    DjangoLicenseRecordRepository,
)

# Initialize repositories (in production, use DI container)
_user_profile_repo = DjangoUserProfileRepository()
_license_record_repo = DjangoLicenseRecordRepository()

tracer = get_tracer(__name__)


class ClaimTrialView(APIView):
    """View for claiming a trial license."""

    @extend_schema(
        operation_id="claim_trial",
        summary="Claim Trial License",
        description=(
            "Issue a seven day trial license to the signed-in user. "
            "Requires a bearer token from the identity provider. "
            "Users with an active trial or a lifetime license receive 409 "
            "with the existing license."
        ),
        tags=["License API"],
        request=None,
        responses={
            201: ClaimTrialResponseSerializer,
            401: {"description": "Unauthorized - Missing or invalid bearer token"},
            404: {"description": "User not found"},
            409: {"description": "Conflict - License already exists"},
        },
    )
    def post(self, request: Request) -> Response:
        """Claim a trial license."""
        return async_to_sync(self._handle_claim_trial)(request)

    async def _handle_claim_trial(self, request: Request) -> Response:
        """Async handler for claim trial."""
        with tracer.start_as_current_span("claim_trial") as span:
            account = request.account
            span.set_attribute("user.id", str(account.user_id))

            handler = ClaimTrialHandler(
                identity_provider=get_identity_provider(),
                user_profile_repository=_user_profile_repo,
                license_record_repository=_license_record_repo,
                codec=get_license_codec(),
            )
            result = await handler.handle(ClaimTrialCommand(user_id=account.user_id))

            body = {"success": result.success, "message": result.message}
            # Keys are delivered by email; only expose them for local testing
            if settings.EXPOSE_LICENSE_KEY_IN_RESPONSE:
                body["license_key"] = result.license_key

            span.set_status(Status(StatusCode.OK))
            return Response(
                ClaimTrialResponseSerializer(body).data, status=status.HTTP_201_CREATED
            )


class LicenseOverviewView(APIView):
    """View for the signed-in user's license overview."""

    @extend_schema(
        operation_id="license_overview",
        summary="Get My License",
        description=(
            "Return the user's subscription type and most recent license "
            "with its expiry state. days_remaining is null for lifetime licenses."
        ),
        tags=["License API"],
        responses={
            200: LicenseOverviewSerializer,
            401: {"description": "Unauthorized - Missing or invalid bearer token"},
        },
    )
    def get(self, request: Request) -> Response:
        """Get license overview."""
        return async_to_sync(self._handle_overview)(request)

    async def _handle_overview(self, request: Request) -> Response:
        """Async handler for license overview."""
        with tracer.start_as_current_span("license_overview") as span:
            account = request.account
            span.set_attribute("user.id", str(account.user_id))

            handler = GetLicenseOverviewHandler(
                user_profile_repository=_user_profile_repo,
                license_record_repository=_license_record_repo,
            )
            result = await handler.handle(GetLicenseOverviewQuery(user_id=account.user_id))

            span.set_attribute("license.present", result.license is not None)
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseOverviewSerializer(result).data, status=status.HTTP_200_OK)


class ValidateLicenseView(APIView):
    """View for offline license key validation."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License Key",
        description=(
            "Check a license key's format and checksum against the server secret. "
            "No database lookup is performed."
        ),
        tags=["License API"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ValidateLicenseResponseSerializer,
            400: {"description": "Bad Request - Missing license key"},
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license key."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        """Async handler for validate license."""
        with tracer.start_as_current_span("validate_license") as span:
            serializer = ValidateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            handler = ValidateLicenseKeyHandler(codec=get_license_codec())
            result = await handler.handle(
                ValidateLicenseKeyQuery(license_key=serializer.validated_data["license_key"])
            )

            span.set_attribute("license.valid", result.is_valid)
            if result.is_valid:
                body = {"is_valid": True, "license": result.license}
            else:
                span.set_attribute("license.reason", result.reason)
                body = {"is_valid": False, "reason": result.reason}
            return Response(
                ValidateLicenseResponseSerializer(body).data, status=status.HTTP_200_OK
            )

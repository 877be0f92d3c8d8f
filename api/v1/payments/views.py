"""
Payments API views.

Checkout creation for signed-in users and the payment provider webhook
that turns completed checkouts into licenses.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.infrastructure.providers import get_identity_provider
from accounts.infrastructure.repositories.django_user_profile_repository import (
    DjangoUserProfileRepository,
)
from api.v1.payments.serializers import (
    CheckoutResponseSerializer,
    CreateCheckoutRequestSerializer,
    WebhookAcknowledgementSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.handlers.claim_trial_handler import ClaimTrialHandler
from licenses.application.handlers.issue_paid_license_handler import IssuePaidLicenseHandler
from licenses.application.services.license_codec import get_license_codec
from licenses.infrastructure.repositories.django_license_record_repository import (
    DjangoLicenseRecordRepository,
)
from payments.application.commands.create_checkout import CreateCheckoutCommand
from payments.application.commands.process_payment_webhook import ProcessPaymentWebhookCommand
from payments.application.handlers.create_checkout_handler import CreateCheckoutHandler
from payments.application.handlers.process_payment_webhook_handler import (
    ProcessPaymentWebhookHandler,
)
from payments.infrastructure.providers import get_payment_gateway

# Initialize repositories (in production, use DI container)
_user_profile_repo = DjangoUserProfileRepository()
_license_record_repo = DjangoLicenseRecordRepository()

tracer = get_tracer(__name__)


def _claim_trial_handler() -> ClaimTrialHandler:
    return ClaimTrialHandler(
        identity_provider=get_identity_provider(),
        user_profile_repository=_user_profile_repo,
        license_record_repository=_license_record_repo,
        codec=get_license_codec(),
    )


def _issue_paid_license_handler() -> IssuePaidLicenseHandler:
    return IssuePaidLicenseHandler(
        identity_provider=get_identity_provider(),
        user_profile_repository=_user_profile_repo,
        license_record_repository=_license_record_repo,
        codec=get_license_codec(),
    )


class CreateCheckoutView(APIView):
    """View for creating a hosted checkout."""

    @extend_schema(
        operation_id="create_checkout",
        summary="Create Checkout",
        description=(
            "Create a payment provider checkout for a trial or lifetime license. "
            "Requires a bearer token; the user id travels in the checkout metadata "
            "and comes back through the webhook."
        ),
        tags=["Payments API"],
        request=CreateCheckoutRequestSerializer,
        responses={
            200: CheckoutResponseSerializer,
            400: {"description": "Bad Request - Invalid license type"},
            401: {"description": "Unauthorized - Missing or invalid bearer token"},
            500: {"description": "Payment service not configured or unavailable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create a checkout."""
        return async_to_sync(self._handle_create_checkout)(request)

    async def _handle_create_checkout(self, request: Request) -> Response:
        """Async handler for create checkout."""
        with tracer.start_as_current_span("create_checkout") as span:
            serializer = CreateCheckoutRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            account = request.account
            license_type = serializer.validated_data["license_type"]
            span.set_attribute("user.id", str(account.user_id))
            span.set_attribute("license_type", license_type)

            handler = CreateCheckoutHandler(
                payment_gateway=get_payment_gateway(),
                trial_product_id=settings.POLAR_TRIAL_PRODUCT_ID,
                lifetime_product_id=settings.POLAR_LIFETIME_PRODUCT_ID,
                app_url=settings.APP_URL,
            )
            result = await handler.handle(
                CreateCheckoutCommand(user_id=account.user_id, license_type=license_type)
            )

            span.set_attribute("checkout.id", result.checkout_id)
            span.set_status(Status(StatusCode.OK))
            return Response(CheckoutResponseSerializer(result).data, status=status.HTTP_200_OK)


class PaymentWebhookView(APIView):
    """View for payment provider webhooks."""

    @extend_schema(
        operation_id="payment_webhook",
        summary="Payment Webhook",
        description=(
            "Receive signed payment events. The X-Polar-Signature header must hold "
            "the hex HMAC-SHA256 of the raw body. Verified deliveries are always "
            "acknowledged; completed checkouts issue the purchased license."
        ),
        tags=["Payments API"],
        parameters=[
            OpenApiParameter(
                name="X-Polar-Signature",
                location=OpenApiParameter.HEADER,
                required=True,
                description="Hex HMAC-SHA256 of the request body",
            )
        ],
        request={"application/json": {"type": "object"}},
        responses={
            200: WebhookAcknowledgementSerializer,
            202: WebhookAcknowledgementSerializer,
            400: WebhookAcknowledgementSerializer,
            401: {"description": "Unauthorized - Missing or invalid signature"},
        },
    )
    def post(self, request: Request) -> Response:
        """Process a payment webhook."""
        # The signature covers the exact bytes, so read the body before any parsing
        payload = request.body
        signature = request.headers.get("X-Polar-Signature")
        return async_to_sync(self._handle_webhook)(payload, signature)

    async def _handle_webhook(self, payload: bytes, signature) -> Response:
        """Async handler for payment webhook."""
        with tracer.start_as_current_span("payment_webhook") as span:
            handler = ProcessPaymentWebhookHandler(
                webhook_secret=settings.POLAR_WEBHOOK_SECRET,
                claim_trial_handler_factory=_claim_trial_handler,
                issue_paid_license_handler_factory=_issue_paid_license_handler,
            )
            outcome = await handler.handle(
                ProcessPaymentWebhookCommand(payload=payload, signature=signature)
            )

            span.set_attribute("webhook.status_code", outcome.status_code)
            return Response(outcome.body, status=outcome.status_code)

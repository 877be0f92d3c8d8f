"""
Account API views.

Sign-up goes through the identity provider; a local profile row is
created alongside so licenses can be attached to it.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.register_account import RegisterAccountCommand
from accounts.application.handlers.register_account_handler import RegisterAccountHandler
from accounts.infrastructure.providers import get_identity_provider
from accounts.infrastructure.repositories.django_user_profile_repository import (
    DjangoUserProfileRepository,
)
from api.v1.account.serializers import SignupRequestSerializer, SignupResponseSerializer
from core.instrumentation import Status, StatusCode, get_tracer

_user_profile_repo = DjangoUserProfileRepository()

tracer = get_tracer(__name__)


class SignupView(APIView):
    """View for account sign-up."""

    @extend_schema(
        operation_id="account_signup",
        summary="Sign Up",
        description=(
            "Create an account with the identity provider and a local user profile. "
            "The account must confirm its email address before signing in."
        ),
        tags=["Account API"],
        request=SignupRequestSerializer,
        responses={
            201: SignupResponseSerializer,
            400: {"description": "Bad Request - Invalid input or rejected sign-up"},
            500: {"description": "Identity provider unavailable or not configured"},
        },
    )
    def post(self, request: Request) -> Response:
        """Register an account."""
        return async_to_sync(self._handle_signup)(request)

    async def _handle_signup(self, request: Request) -> Response:
        """Async handler for sign-up."""
        with tracer.start_as_current_span("account_signup") as span:
            serializer = SignupRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            handler = RegisterAccountHandler(
                identity_provider=get_identity_provider(),
                user_profile_repository=_user_profile_repo,
            )
            result = await handler.handle(
                RegisterAccountCommand(
                    email=serializer.validated_data["email"],
                    password=serializer.validated_data["password"],
                )
            )

            span.set_attribute("user.id", str(result.user_id))
            span.set_status(Status(StatusCode.OK))
            return Response(SignupResponseSerializer(result).data, status=status.HTTP_201_CREATED)

"""
Unit tests for CreateCheckoutHandler.
"""

import uuid
from urllib.parse import parse_qs, urlparse

import pytest

from core.domain.exceptions import (
    DomainException,
    ServiceConfigurationError,
    UpstreamServiceError,
)
from payments.application.commands.create_checkout import CreateCheckoutCommand
from payments.application.handlers.create_checkout_handler import CreateCheckoutHandler


@pytest.fixture
def handler(payment_gateway):
    """Fixture for CreateCheckoutHandler with both products configured."""
    return CreateCheckoutHandler(
        payment_gateway,
        trial_product_id="prod_trial",
        lifetime_product_id="prod_lifetime",
        app_url="https://viberyt.test/",
    )


@pytest.mark.asyncio
class TestCreateCheckoutHandler:
    """Tests for CreateCheckoutHandler."""

    async def test_lifetime_checkout(self, handler, payment_gateway):
        """Test a lifetime checkout request."""
        user_id = uuid.uuid4()

        result = await handler.handle(CreateCheckoutCommand(user_id=user_id))

        assert result.success is True
        assert result.checkout_id == "chk_1"
        assert result.checkout_url == "https://polar.test/checkout/chk_1"

        request = payment_gateway.requests[0]
        assert request.product_id == "prod_lifetime"
        assert request.cancel_url == "https://viberyt.test/dashboard?payment=cancelled"
        assert request.metadata["userId"] == str(user_id)
        assert request.metadata["licenseType"] == "lifetime"
        assert request.metadata["timestamp"].endswith("Z")

        success = urlparse(request.success_url)
        assert f"{success.scheme}://{success.netloc}{success.path}" == (
            "https://viberyt.test/dashboard"
        )
        assert parse_qs(success.query) == {
            "payment": ["success"],
            "userId": [str(user_id)],
            "licenseType": ["lifetime"],
        }

    async def test_trial_checkout_uses_trial_product(self, handler, payment_gateway):
        """Test trial checkouts sell the trial product."""
        await handler.handle(CreateCheckoutCommand(user_id=uuid.uuid4(), license_type="trial"))

        assert payment_gateway.requests[0].product_id == "prod_trial"
        assert payment_gateway.requests[0].metadata["licenseType"] == "trial"

    @pytest.mark.parametrize("license_type", ["demo", "monthly", ""])
    async def test_unsupported_license_type(self, handler, payment_gateway, license_type):
        """Test only trial and lifetime can be bought."""
        with pytest.raises(DomainException) as exc_info:
            await handler.handle(
                CreateCheckoutCommand(user_id=uuid.uuid4(), license_type=license_type)
            )

        assert exc_info.value.code == "INVALID_LICENSE_TYPE"
        assert payment_gateway.requests == []

    async def test_missing_configuration(self, payment_gateway):
        """Test a missing product id is a configuration error."""
        handler = CreateCheckoutHandler(
            payment_gateway,
            trial_product_id=None,
            lifetime_product_id="prod_lifetime",
            app_url="https://viberyt.test",
        )

        with pytest.raises(ServiceConfigurationError):
            await handler.handle(CreateCheckoutCommand(user_id=uuid.uuid4()))

    async def test_gateway_failure(self, handler, payment_gateway):
        """Test gateway failures propagate."""
        payment_gateway.fail = True

        with pytest.raises(UpstreamServiceError):
            await handler.handle(CreateCheckoutCommand(user_id=uuid.uuid4()))

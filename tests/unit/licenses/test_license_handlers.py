"""
Unit tests for license command and query handlers.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import LicenseAlreadyExistsError, UserNotFoundError
from core.domain.value_objects import KeyType, SubscriptionType
from core.infrastructure.events import event_bus
from licenses.application.commands.claim_trial import ClaimTrialCommand
from licenses.application.commands.issue_paid_license import IssuePaidLicenseCommand
from licenses.application.handlers.claim_trial_handler import ClaimTrialHandler
from licenses.application.handlers.get_license_overview_handler import GetLicenseOverviewHandler
from licenses.application.handlers.issue_paid_license_handler import IssuePaidLicenseHandler
from licenses.application.handlers.validate_license_key_handler import ValidateLicenseKeyHandler
from licenses.application.queries.get_license_overview import GetLicenseOverviewQuery
from licenses.application.queries.validate_license_key import ValidateLicenseKeyQuery
from licenses.domain.events import LicenseKeyIssued
from licenses.domain.license_record import LicenseRecord


@pytest.fixture
def published_events(monkeypatch):
    """Capture events published on the global event bus."""
    events = []

    async def _publish(event):
        events.append(event)

    monkeypatch.setattr(event_bus, "publish", _publish)
    return events


@pytest.fixture
def claim_trial_handler(identity_provider, in_memory_profiles, in_memory_licenses, codec):
    """Fixture for ClaimTrialHandler wired to in-memory collaborators."""
    return ClaimTrialHandler(identity_provider, in_memory_profiles, in_memory_licenses, codec)


@pytest.fixture
def issue_paid_handler(identity_provider, in_memory_profiles, in_memory_licenses, codec):
    """Fixture for IssuePaidLicenseHandler wired to in-memory collaborators."""
    return IssuePaidLicenseHandler(
        identity_provider, in_memory_profiles, in_memory_licenses, codec
    )


@pytest.mark.asyncio
class TestClaimTrialHandler:
    """Tests for ClaimTrialHandler."""

    async def test_claim_trial_issues_seven_day_key(
        self, claim_trial_handler, account, in_memory_licenses, in_memory_profiles, codec,
        published_events,
    ):
        """Test a first claim issues a valid trial key and records it."""
        result = await claim_trial_handler.handle(ClaimTrialCommand(user_id=account.user_id))

        assert result.success is True
        assert result.message == (
            "Success! Check your email (jane@example.com) for your trial license key."
        )
        assert result.key_type == "trial"
        assert result.license_key.startswith("VIBE-T0007-")

        validation = codec.validate(result.license_key)
        assert validation.is_valid is True
        assert validation.info.days == 7

        records = await in_memory_licenses.find_for_user(account.user_id)
        assert len(records) == 1
        assert records[0].expires_at - records[0].created_at == timedelta(days=7)
        assert result.expires_at == records[0].expires_at

        profile = in_memory_profiles.profiles[account.user_id]
        assert profile.subscription_type == SubscriptionType.TRIAL
        assert profile.trial_ends_at == records[0].expires_at

        assert len(published_events) == 1
        assert isinstance(published_events[0], LicenseKeyIssued)
        assert published_events[0].customer_email == "jane@example.com"

    async def test_claim_trial_unknown_user(self, claim_trial_handler, published_events):
        """Test claiming for an unknown user fails."""
        with pytest.raises(UserNotFoundError):
            await claim_trial_handler.handle(ClaimTrialCommand(user_id=uuid.uuid4()))

        assert published_events == []

    async def test_second_claim_is_rejected(
        self, claim_trial_handler, account, in_memory_licenses, published_events
    ):
        """Test an active trial blocks a second claim."""
        first = await claim_trial_handler.handle(ClaimTrialCommand(user_id=account.user_id))

        with pytest.raises(LicenseAlreadyExistsError) as exc_info:
            await claim_trial_handler.handle(ClaimTrialCommand(user_id=account.user_id))

        assert exc_info.value.existing["license_key"] == first.license_key
        assert len(await in_memory_licenses.find_for_user(account.user_id)) == 1

    async def test_claim_after_expired_trial(
        self, claim_trial_handler, account, in_memory_licenses, published_events
    ):
        """Test an expired trial no longer blocks a claim."""
        await in_memory_licenses.save(
            LicenseRecord.create(
                user_id=account.user_id,
                license_key="VIBE-T0007-AAAA-BBBB-CCCC-DDDD",
                key_type=KeyType.TRIAL,
                days_valid=7,
                now=datetime.now(timezone.utc) - timedelta(days=10),
            )
        )

        result = await claim_trial_handler.handle(ClaimTrialCommand(user_id=account.user_id))

        assert result.success is True
        assert len(await in_memory_licenses.find_for_user(account.user_id)) == 2

    async def test_lifetime_holder_cannot_claim(
        self, claim_trial_handler, account, in_memory_licenses, published_events
    ):
        """Test a lifetime license blocks a trial claim."""
        await in_memory_licenses.save(
            LicenseRecord.create(
                user_id=account.user_id,
                license_key="VIBE-LLIFE-AAAA-BBBB-CCCC-DDDD",
                key_type=KeyType.LIFETIME,
            )
        )

        with pytest.raises(LicenseAlreadyExistsError) as exc_info:
            await claim_trial_handler.handle(ClaimTrialCommand(user_id=account.user_id))

        assert exc_info.value.message == "You already have a lifetime license."

    async def test_profile_failure_does_not_fail_claim(
        self, claim_trial_handler, account, in_memory_profiles, in_memory_licenses,
        published_events,
    ):
        """Test the key is still returned when the profile cannot be updated."""
        in_memory_profiles.fail_on_save = True

        result = await claim_trial_handler.handle(ClaimTrialCommand(user_id=account.user_id))

        assert result.success is True
        assert len(await in_memory_licenses.find_for_user(account.user_id)) == 1
        assert in_memory_profiles.profiles[account.user_id].subscription_type == (
            SubscriptionType.NONE
        )


@pytest.mark.asyncio
class TestIssuePaidLicenseHandler:
    """Tests for IssuePaidLicenseHandler."""

    async def test_issue_lifetime_key(
        self, issue_paid_handler, account, in_memory_profiles, codec, published_events
    ):
        """Test a paid checkout issues a lifetime key."""
        result = await issue_paid_handler.handle(
            IssuePaidLicenseCommand(user_id=account.user_id, checkout_id="chk_1")
        )

        assert result.key_type == "lifetime"
        assert result.expires_at is None
        assert result.license_key.startswith("VIBE-LLIFE-")
        assert result.message == (
            "Payment received. Your lifetime license was sent to jane@example.com."
        )
        assert codec.validate(result.license_key).info.is_lifetime is True
        assert in_memory_profiles.profiles[account.user_id].subscription_type == (
            SubscriptionType.LIFETIME
        )
        assert published_events[0].key_type == "lifetime"

    async def test_trial_user_can_upgrade(
        self, claim_trial_handler, issue_paid_handler, account, published_events
    ):
        """Test an active trial does not block a lifetime purchase."""
        await claim_trial_handler.handle(ClaimTrialCommand(user_id=account.user_id))

        result = await issue_paid_handler.handle(IssuePaidLicenseCommand(user_id=account.user_id))

        assert result.key_type == "lifetime"

    async def test_second_lifetime_rejected(self, issue_paid_handler, account, published_events):
        """Test a duplicate lifetime delivery is refused."""
        await issue_paid_handler.handle(IssuePaidLicenseCommand(user_id=account.user_id))

        with pytest.raises(LicenseAlreadyExistsError):
            await issue_paid_handler.handle(IssuePaidLicenseCommand(user_id=account.user_id))

    async def test_unknown_user(self, issue_paid_handler, published_events):
        """Test paying for an unknown user fails."""
        with pytest.raises(UserNotFoundError):
            await issue_paid_handler.handle(IssuePaidLicenseCommand(user_id=uuid.uuid4()))


@pytest.mark.asyncio
class TestGetLicenseOverviewHandler:
    """Tests for GetLicenseOverviewHandler."""

    async def test_overview_without_profile(self, in_memory_profiles, in_memory_licenses):
        """Test a user with no profile and no keys."""
        handler = GetLicenseOverviewHandler(in_memory_profiles, in_memory_licenses)
        user_id = uuid.uuid4()

        result = await handler.handle(GetLicenseOverviewQuery(user_id=user_id))

        assert result.user_id == user_id
        assert result.subscription_type == "none"
        assert result.license is None

    async def test_overview_reports_latest_key(
        self, claim_trial_handler, account, in_memory_profiles, in_memory_licenses,
        published_events,
    ):
        """Test the newest key and subscription are reported."""
        issued = await claim_trial_handler.handle(ClaimTrialCommand(user_id=account.user_id))
        handler = GetLicenseOverviewHandler(in_memory_profiles, in_memory_licenses)

        result = await handler.handle(GetLicenseOverviewQuery(user_id=account.user_id))

        assert result.subscription_type == "trial"
        assert result.license.license_key == issued.license_key
        assert result.license.key_type == "trial"
        assert result.license.is_expired is False
        assert result.license.days_remaining == 7

    async def test_overview_reports_expired_key(
        self, account, in_memory_profiles, in_memory_licenses, expired
    ):
        """Test an expired key is flagged."""
        record = LicenseRecord.create(
            user_id=account.user_id,
            license_key="VIBE-T0007-AAAA-BBBB-CCCC-DDDD",
            key_type=KeyType.TRIAL,
            days_valid=7,
        )
        await in_memory_licenses.save(expired(record))
        handler = GetLicenseOverviewHandler(in_memory_profiles, in_memory_licenses)

        result = await handler.handle(GetLicenseOverviewQuery(user_id=account.user_id))

        assert result.license.is_expired is True
        assert result.license.days_remaining == 0


@pytest.mark.asyncio
class TestValidateLicenseKeyHandler:
    """Tests for ValidateLicenseKeyHandler."""

    async def test_valid_key(self, codec):
        """Test a generated key validates with its info."""
        key = codec.generate_demo_key(recordings=5).license_key
        handler = ValidateLicenseKeyHandler(codec)

        result = await handler.handle(ValidateLicenseKeyQuery(license_key=key))

        assert result.is_valid is True
        assert result.reason is None
        assert result.license["type_name"] == "DEMO"
        assert result.license["recordings"] == 5
        assert result.license["key"] == key

    async def test_invalid_key(self, codec):
        """Test a malformed key reports its reason."""
        handler = ValidateLicenseKeyHandler(codec)

        result = await handler.handle(ValidateLicenseKeyQuery(license_key="ABCD-T0007"))

        assert result.is_valid is False
        assert result.license is None
        assert result.reason == "invalid prefix"

"""
Pytest configuration and shared fixtures.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from accounts.domain.account import AuthenticatedAccount
from accounts.domain.user_profile import UserProfile
from accounts.infrastructure.providers import set_identity_provider
from accounts.infrastructure.repositories.django_user_profile_repository import (
    DjangoUserProfileRepository,
)
from accounts.ports.identity_provider import IdentityProvider
from accounts.ports.user_profile_repository import UserProfileRepository
from core.domain.exceptions import AccountRegistrationError, UpstreamServiceError
from core.domain.value_objects import KeyType
from licenses.domain.license_codec import LicenseKeyCodec
from licenses.domain.license_record import LicenseRecord
from licenses.infrastructure.repositories.django_license_record_repository import (
    DjangoLicenseRecordRepository,
)
from licenses.ports.license_record_repository import LicenseRecordRepository
from payments.domain.checkout import CheckoutRequest, CheckoutSession
from payments.infrastructure.providers import set_payment_gateway
from payments.ports.payment_gateway import PaymentGateway

TEST_SECRET = "test-secret-salt"


class InMemoryIdentityProvider(IdentityProvider):
    """Identity provider keeping accounts and tokens in memory."""

    def __init__(self):
        self.accounts: Dict[uuid.UUID, AuthenticatedAccount] = {}
        self.tokens: Dict[str, uuid.UUID] = {}
        self.unavailable = False

    def add_account(
        self, email: str, full_name: Optional[str] = None, token: Optional[str] = None
    ) -> AuthenticatedAccount:
        account = AuthenticatedAccount(user_id=uuid.uuid4(), email=email, full_name=full_name)
        self.accounts[account.user_id] = account
        if token:
            self.tokens[token] = account.user_id
        return account

    def _check_available(self):
        if self.unavailable:
            raise UpstreamServiceError("Identity provider unavailable")

    async def create_account(self, email: str, password: str) -> uuid.UUID:
        self._check_available()
        if any(account.email == email for account in self.accounts.values()):
            raise AccountRegistrationError("User already registered")
        return self.add_account(email).user_id

    async def verify_token(self, token: str) -> Optional[AuthenticatedAccount]:
        self._check_available()
        user_id = self.tokens.get(token)
        return self.accounts.get(user_id) if user_id else None

    async def get_user(self, user_id: uuid.UUID) -> Optional[AuthenticatedAccount]:
        self._check_available()
        return self.accounts.get(user_id)


class InMemoryUserProfileRepository(UserProfileRepository):
    """User profile repository backed by a dict."""

    def __init__(self):
        self.profiles: Dict[uuid.UUID, UserProfile] = {}
        self.fail_on_save = False

    async def save(self, profile: UserProfile) -> UserProfile:
        if self.fail_on_save:
            raise RuntimeError("profile store unavailable")
        self.profiles[profile.id] = profile
        return profile

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[UserProfile]:
        return self.profiles.get(user_id)

    async def ensure_exists(self, user_id: uuid.UUID) -> UserProfile:
        if user_id not in self.profiles:
            self.profiles[user_id] = UserProfile.create(user_id)
        return self.profiles[user_id]


class InMemoryLicenseRecordRepository(LicenseRecordRepository):
    """License record repository backed by a dict."""

    def __init__(self):
        self.records: Dict[uuid.UUID, LicenseRecord] = {}

    async def save(self, record: LicenseRecord) -> LicenseRecord:
        self.records[record.id] = record
        return record

    async def find_by_key(self, license_key: str) -> Optional[LicenseRecord]:
        return next(
            (record for record in self.records.values() if record.license_key == license_key),
            None,
        )

    async def find_for_user(
        self, user_id: uuid.UUID, key_type: Optional[KeyType] = None
    ) -> List[LicenseRecord]:
        records = [
            record
            for record in self.records.values()
            if record.user_id == user_id and (key_type is None or record.key_type == key_type)
        ]
        return sorted(records, key=lambda record: record.created_at, reverse=True)

    async def find_latest_for_user(
        self, user_id: uuid.UUID, key_type: Optional[KeyType] = None
    ) -> Optional[LicenseRecord]:
        records = await self.find_for_user(user_id, key_type)
        return records[0] if records else None


class FakePaymentGateway(PaymentGateway):
    """Payment gateway recording checkout requests."""

    def __init__(self):
        self.requests: List[CheckoutRequest] = []
        self.fail = False

    async def create_checkout(self, request: CheckoutRequest) -> CheckoutSession:
        if self.fail:
            raise UpstreamServiceError("Failed to create checkout with payment provider")
        self.requests.append(request)
        checkout_id = f"chk_{len(self.requests)}"
        return CheckoutSession(
            checkout_url=f"https://polar.test/checkout/{checkout_id}", checkout_id=checkout_id
        )


@pytest.fixture
def codec():
    """Fixture for a LicenseKeyCodec using the test secret."""
    return LicenseKeyCodec(TEST_SECRET)


@pytest.fixture
def fixed_time():
    """Fixture for a fixed UTC instant."""
    return datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def identity_provider():
    """Fixture for an in-memory IdentityProvider."""
    return InMemoryIdentityProvider()


@pytest.fixture
def in_memory_profiles():
    """Fixture for an in-memory UserProfileRepository."""
    return InMemoryUserProfileRepository()


@pytest.fixture
def in_memory_licenses():
    """Fixture for an in-memory LicenseRecordRepository."""
    return InMemoryLicenseRecordRepository()


@pytest.fixture
def payment_gateway():
    """Fixture for a FakePaymentGateway."""
    return FakePaymentGateway()


@pytest.fixture
def account(identity_provider):
    """Fixture for a signed-in account with bearer token 'valid-token'."""
    return identity_provider.add_account(
        "jane@example.com", full_name="Jane Doe", token="valid-token"
    )


@pytest.fixture
def installed_identity_provider(identity_provider):
    """Install the in-memory identity provider for views and middleware."""
    set_identity_provider(identity_provider)
    yield identity_provider
    set_identity_provider(None)


@pytest.fixture
def installed_payment_gateway(payment_gateway):
    """Install the fake payment gateway for views."""
    set_payment_gateway(payment_gateway)
    yield payment_gateway
    set_payment_gateway(None)


@pytest.fixture
def user_profile_repository():
    """Fixture for UserProfileRepository."""
    return DjangoUserProfileRepository()


@pytest.fixture
def license_record_repository():
    """Fixture for LicenseRecordRepository."""
    return DjangoLicenseRecordRepository()


@pytest.fixture
def expired(fixed_time):
    """Return a copy of a record whose expiry lies in the past."""

    def _expire(record: LicenseRecord) -> LicenseRecord:
        return replace(record, created_at=fixed_time, expires_at=fixed_time)

    return _expire


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()

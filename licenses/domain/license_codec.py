"""
License key codec.

Generates and verifies VibeRyt license keys of the form::

    VIBE-<TYPE><DURATION>-<H1>-<H2>-<H3>-<CHK>

The type and duration are readable from the key itself. H1..H3 are slices of
a salted SHA-256 digest over the full generation metadata, which makes every
key unique per customer and instant. CHK is a salted SHA-256 checksum over the
first five fields, so edits to the key are detected without any lookup.

The codec holds no state other than the secret salt and performs no I/O.
"""

import hashlib
import json
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Union

from core.domain.exceptions import InvalidLicenseDurationError, InvalidLicenseTypeError

KEY_PREFIX = "VIBE"
LIFETIME_DURATION = "LIFE"
NEVER_EXPIRES = -1
TRIAL_DAYS = 7
DEFAULT_DEMO_RECORDINGS = 5
MAX_ENCODED_DURATION = 9999
KEY_FIELD_COUNT = 6


class LicenseType(Enum):
    """License variant, identified by its single-character code."""

    TRIAL = "T"
    LIFETIME = "L"
    DEMO = "D"

    @property
    def type_name(self) -> str:
        """Human-readable name (TRIAL, LIFETIME, DEMO)."""
        return self.name

    def __str__(self) -> str:
        """Return the type code."""
        return self.value


@dataclass(frozen=True)
class LicenseMetadata:
    """
    Metadata folded into the key hash.

    Only ``type`` and ``days`` survive in the key; everything else is
    recoverable from the server-side copy returned at generation time.
    """

    type: LicenseType
    days: int
    customer_name: str
    customer_email: str
    generated_date: str
    unique_id: str

    def to_canonical_json(self) -> str:
        """
        Serialize to the canonical JSON used as hash input.

        Key order and compact separators are part of the key format.
        """
        return json.dumps(
            {
                "type": self.type.value,
                "days": self.days,
                "customerName": self.customer_name,
                "customerEmail": self.customer_email,
                "generatedDate": self.generated_date,
                "uniqueId": self.unique_id,
            },
            separators=(",", ":"),
            ensure_ascii=False,
        )


@dataclass(frozen=True)
class LicenseInfo:
    """Information recovered from a valid license key."""

    type: LicenseType
    type_name: str
    days: int
    is_lifetime: bool
    key: str

    @property
    def recordings(self) -> Optional[int]:
        """Demo keys reuse the duration field as a recording budget."""
        if self.type is LicenseType.DEMO:
            return self.days
        return None

    def to_dict(self) -> dict:
        """Serialize for API responses."""
        return {
            "type": self.type.value,
            "type_name": self.type_name,
            "days": self.days,
            "is_lifetime": self.is_lifetime,
            "recordings": self.recordings,
            "key": self.key,
        }


@dataclass(frozen=True)
class LicenseValidationResult:
    """Outcome of validating a key: either ``info`` or a ``reason``."""

    is_valid: bool
    info: Optional[LicenseInfo] = None
    reason: Optional[str] = None

    @classmethod
    def valid(cls, info: LicenseInfo) -> "LicenseValidationResult":
        """Build a successful result carrying the decoded info."""
        return cls(is_valid=True, info=info)

    @classmethod
    def invalid(cls, reason: str) -> "LicenseValidationResult":
        """Build a failed result carrying the rejection reason."""
        return cls(is_valid=False, reason=reason)


@dataclass(frozen=True)
class GeneratedLicense:
    """A freshly generated key and the metadata it was derived from."""

    license_key: str
    metadata: LicenseMetadata


@dataclass(frozen=True)
class BatchLicense:
    """One entry of a batch generation run."""

    customer_id: str
    license_key: str
    metadata: LicenseMetadata


def _format_timestamp(moment: datetime) -> str:
    """Render an aware or naive UTC datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def _coerce_license_type(license_type: Union[LicenseType, str]) -> LicenseType:
    if isinstance(license_type, LicenseType):
        return license_type
    try:
        return LicenseType(license_type)
    except ValueError:
        raise InvalidLicenseTypeError() from None


class LicenseKeyCodec:
    """
    Encoder and verifier for license keys.

    Both directions must use the same secret salt. Rotating the secret
    invalidates every previously issued key.
    """

    def __init__(self, secret_salt: str):
        """
        Initialize codec.

        Args:
            secret_salt: Server-only string mixed into every hash
        """
        if not secret_salt:
            raise ValueError("License key secret cannot be empty")
        self._secret_salt = secret_salt

    def generate(
        self,
        license_type: Union[LicenseType, str] = LicenseType.TRIAL,
        days: int = TRIAL_DAYS,
        customer_name: str = "",
        customer_email: str = "",
        unique_id: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> GeneratedLicense:
        """
        Generate a license key with embedded type and duration.

        Args:
            license_type: LicenseType or its code (T, L, D)
            days: Validity in days (recording count for demo keys);
                ignored for lifetime keys
            customer_name: Free text mixed into the hash
            customer_email: Free text mixed into the hash
            unique_id: Unique identifier (random UUID4 if not provided)
            generated_at: Generation time (now if not provided)

        Returns:
            GeneratedLicense with the key and its full metadata

        Raises:
            InvalidLicenseTypeError: If the type code is unknown
            InvalidLicenseDurationError: If days cannot be encoded
        """
        license_type = _coerce_license_type(license_type)
        is_lifetime = license_type is LicenseType.LIFETIME
        if not is_lifetime and not 0 <= days <= MAX_ENCODED_DURATION:
            raise InvalidLicenseDurationError()

        metadata = LicenseMetadata(
            type=license_type,
            days=NEVER_EXPIRES if is_lifetime else days,
            customer_name=customer_name,
            customer_email=customer_email,
            generated_date=_format_timestamp(generated_at or datetime.now(timezone.utc)),
            unique_id=unique_id or str(uuid.uuid4()),
        )

        digest = _sha256_hex(f"{metadata.to_canonical_json()}_{self._secret_salt}").upper()
        duration = LIFETIME_DURATION if is_lifetime else f"{days:04d}"
        body = "-".join(
            [
                KEY_PREFIX,
                f"{license_type.value}{duration}",
                digest[0:4],
                digest[4:8],
                digest[8:12],
            ]
        )

        return GeneratedLicense(
            license_key=f"{body}-{self._checksum(body)}",
            metadata=metadata,
        )

    def validate(self, license_key: str) -> LicenseValidationResult:
        """
        Validate license key format and checksum.

        Args:
            license_key: Candidate key string

        Returns:
            LicenseValidationResult carrying LicenseInfo or a failure reason
        """
        if not isinstance(license_key, str) or not license_key.startswith(f"{KEY_PREFIX}-"):
            return LicenseValidationResult.invalid("invalid prefix")

        parts = license_key.split("-")
        if len(parts) != KEY_FIELD_COUNT:
            return LicenseValidationResult.invalid("invalid format")

        type_duration = parts[1]
        try:
            license_type = LicenseType(type_duration[:1])
        except ValueError:
            return LicenseValidationResult.invalid("unknown license type")

        expected = self._checksum("-".join(parts[:-1]))
        # Bytes, since compare_digest rejects non-ASCII str
        if not secrets.compare_digest(parts[-1].encode("utf-8"), expected.encode("ascii")):
            return LicenseValidationResult.invalid("invalid checksum")

        duration = type_duration[1:]
        if duration == LIFETIME_DURATION:
            days = NEVER_EXPIRES
        elif duration.isascii() and duration.isdigit():
            days = int(duration)
        else:
            return LicenseValidationResult.invalid("invalid duration format")

        return LicenseValidationResult.valid(
            LicenseInfo(
                type=license_type,
                type_name=license_type.type_name,
                days=days,
                is_lifetime=license_type is LicenseType.LIFETIME,
                key=license_key,
            )
        )

    def generate_trial_key(
        self, customer_name: str = "", customer_email: str = ""
    ) -> GeneratedLicense:
        """Generate a 7-day trial key."""
        return self.generate(LicenseType.TRIAL, TRIAL_DAYS, customer_name, customer_email)

    def generate_lifetime_key(
        self, customer_name: str = "", customer_email: str = ""
    ) -> GeneratedLicense:
        """Generate a key that never expires."""
        return self.generate(LicenseType.LIFETIME, NEVER_EXPIRES, customer_name, customer_email)

    def generate_demo_key(
        self,
        recordings: int = DEFAULT_DEMO_RECORDINGS,
        customer_name: str = "",
        customer_email: str = "",
    ) -> GeneratedLicense:
        """Generate a demo key whose duration field is a recording budget."""
        return self.generate(LicenseType.DEMO, recordings, customer_name, customer_email)

    def generate_batch_keys(
        self,
        license_type: Union[LicenseType, str] = LicenseType.TRIAL,
        days: int = TRIAL_DAYS,
        count: int = 10,
    ) -> List[BatchLicense]:
        """
        Generate several keys for synthetic customers.

        Args:
            license_type: LicenseType or its code
            days: Validity in days (or recordings for demo keys)
            count: Number of keys to generate

        Returns:
            List of BatchLicense entries, customers CUSTOMER_0001 onwards
        """
        license_type = _coerce_license_type(license_type)
        batch = []
        for index in range(count):
            customer_id = f"CUSTOMER_{index + 1:04d}"
            generated = self.generate(license_type, days, customer_id)
            batch.append(
                BatchLicense(
                    customer_id=customer_id,
                    license_key=generated.license_key,
                    metadata=generated.metadata,
                )
            )
        return batch

    def _checksum(self, key_body: str) -> str:
        return _sha256_hex(f"{key_body}_{self._secret_salt}")[0:4].upper()

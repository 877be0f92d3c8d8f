"""
Checkout value objects.
"""

from dataclasses import dataclass
from typing import Any, Dict

from core.domain.exceptions import DomainException
from core.domain.value_objects import KeyType

# Key types that can be bought through checkout
PURCHASABLE_LICENSE_TYPES = (KeyType.TRIAL, KeyType.LIFETIME)


def parse_purchasable_license_type(value: str) -> KeyType:
    """
    Parse a license type that may be sold through checkout.

    Raises:
        DomainException: If the value is not trial or lifetime
    """
    try:
        key_type = KeyType(value)
    except ValueError:
        key_type = None
    if key_type not in PURCHASABLE_LICENSE_TYPES:
        raise DomainException(
            'Invalid licenseType. Must be "trial" or "lifetime"', code="INVALID_LICENSE_TYPE"
        )
    return key_type


@dataclass(frozen=True)
class CheckoutRequest:
    """Everything the payment gateway needs to open a checkout."""

    product_id: str
    success_url: str
    cancel_url: str
    metadata: Dict[str, Any]


@dataclass(frozen=True)
class CheckoutSession:
    """A hosted checkout created by the payment gateway."""

    checkout_url: str
    checkout_id: str

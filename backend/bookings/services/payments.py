from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import lru_cache
from typing import Any, Dict, Optional
from uuid import uuid4

import stripe
from django.conf import settings

from core.exceptions import GatewayError, ValidationError

logger = logging.getLogger(__name__)

SUCCEEDED = "succeeded"

# Stripe charges these currencies in whole units rather than hundredths.
ZERO_DECIMAL_CURRENCIES = frozenset(
    {
        "bif", "clp", "djf", "gnf", "jpy", "kmf", "krw", "mga",
        "pyg", "rwf", "ugx", "vnd", "vuv", "xaf", "xof", "xpf",
    }
)


def _minor_unit_factor(currency: str) -> Decimal:
    return Decimal(1) if (currency or "").lower() in ZERO_DECIMAL_CURRENCIES else Decimal(100)


def to_minor_units(amount, currency: str) -> int:
    """Convert a major-unit amount to the processor's integer minor units, rounding half up."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid amount: {amount!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid amount: {amount!r}")
    return int((value * _minor_unit_factor(currency)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int, currency: str) -> Decimal:
    return (Decimal(int(amount)) / _minor_unit_factor(currency)).quantize(Decimal("0.01"))


@dataclass
class PaymentIntent:
    """Processor-neutral view of a payment intent; ``amount`` is in minor units."""

    id: str
    status: str
    amount: int
    currency: str
    client_secret: Optional[str] = None
    charge_id: Optional[str] = None
    payment_method_details: Optional[Dict[str, Any]] = None
    payment_method_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED


def _as_dict(value) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return dict(value)
    return dict(vars(value))


def _first_charge(intent):
    charge = getattr(intent, "latest_charge", None)
    if charge is not None and not isinstance(charge, str):
        return charge
    # Older API versions embed the charge list on the intent.
    charges = getattr(intent, "charges", None)
    data = getattr(charges, "data", None) or []
    if data:
        return data[0]
    return charge


def _intent_from_stripe(intent) -> PaymentIntent:
    charge = _first_charge(intent)
    charge_id = None
    details = None
    if isinstance(charge, str):
        charge_id = charge
    elif charge is not None:
        charge_id = getattr(charge, "id", None)
        details = _as_dict(getattr(charge, "payment_method_details", None))

    payment_method = getattr(intent, "payment_method", None)
    if payment_method is not None and not isinstance(payment_method, str):
        payment_method = getattr(payment_method, "id", None)

    return PaymentIntent(
        id=intent.id,
        status=intent.status,
        amount=getattr(intent, "amount", 0) or 0,
        currency=getattr(intent, "currency", "") or "",
        client_secret=getattr(intent, "client_secret", None),
        charge_id=charge_id,
        payment_method_details=details,
        payment_method_id=payment_method,
    )


def _validated_minor_units(amount, currency: str) -> int:
    if not currency:
        raise ValidationError("Currency is required.")
    amount_minor = to_minor_units(amount, currency)
    if amount_minor <= 0:
        raise ValidationError("Amount must be greater than zero.")
    return amount_minor


class StripePaymentGateway:
    """
    Thin adapter over the Stripe PaymentIntent API.

    The secret key is passed with every call instead of being assigned to the
    module-level ``stripe.api_key``. Failures surface as ``GatewayError``; the
    adapter never retries.
    """

    def __init__(self, api_key: str):
        if not api_key:
            raise RuntimeError("Stripe secret key is not configured.")
        self.api_key = api_key

    def create_intent(self, amount, currency: str, metadata: Dict[str, str]) -> PaymentIntent:
        amount_minor = _validated_minor_units(amount, currency)
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.api_key,
                amount=amount_minor,
                currency=currency,
                metadata=metadata,
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as exc:
            logger.exception("Failed to create payment intent: %s", exc)
            raise GatewayError(str(exc)) from exc
        logger.info("Created payment intent %s for %s %s", intent.id, amount_minor, currency)
        return _intent_from_stripe(intent)

    def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.retrieve(
                intent_id,
                api_key=self.api_key,
                expand=["latest_charge"],
            )
        except stripe.StripeError as exc:
            logger.exception("Failed to retrieve payment intent %s: %s", intent_id, exc)
            raise GatewayError(str(exc)) from exc
        return _intent_from_stripe(intent)

    def retrieve_payment_method(self, method_id: str) -> Dict[str, Any]:
        try:
            method = stripe.PaymentMethod.retrieve(method_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            raise GatewayError(str(exc)) from exc
        return {
            "type": getattr(method, "type", None),
            "card": _as_dict(getattr(method, "card", None)),
        }


class StubPaymentGateway:
    """
    In-process stand-in for Stripe when running in stub mode.

    Local development and tests do not hit Stripe; intents created here report
    ``succeeded`` when retrieved, as if the tourist completed checkout.
    """

    STUB_CARD = {"type": "card", "card": {"brand": "visa", "last4": "4242"}}

    def __init__(self):
        self._intents: dict[str, PaymentIntent] = {}

    def create_intent(self, amount, currency: str, metadata: Dict[str, str]) -> PaymentIntent:
        amount_minor = _validated_minor_units(amount, currency)
        intent_id = f"pi_test_{uuid4().hex}"
        intent = PaymentIntent(
            id=intent_id,
            status="requires_payment_method",
            amount=amount_minor,
            currency=currency,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:12]}",
        )
        self._intents[intent_id] = intent
        return intent

    def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        intent = self._intents.get(intent_id)
        if intent is None:
            raise GatewayError(f"No such payment_intent: '{intent_id}'")
        return replace(
            intent,
            status=SUCCEEDED,
            charge_id=f"ch_test_{intent_id[-8:]}",
            payment_method_details=dict(self.STUB_CARD),
        )

    def retrieve_payment_method(self, method_id: str) -> Dict[str, Any]:
        return dict(self.STUB_CARD)


def _get_stripe_api_key() -> Optional[str]:
    key = getattr(settings, "STRIPE_SECRET_KEY", "")
    return key or None


def _should_use_stub() -> bool:
    if getattr(settings, "STRIPE_USE_STUB", False):
        return True
    return _get_stripe_api_key() is None


@lru_cache(maxsize=1)
def _stub_gateway() -> StubPaymentGateway:
    return StubPaymentGateway()


def get_payment_gateway():
    """Return the configured payment gateway adapter."""
    if _should_use_stub():
        return _stub_gateway()
    return StripePaymentGateway(api_key=_get_stripe_api_key())

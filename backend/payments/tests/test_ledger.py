from decimal import Decimal

import pytest

from payments.models import PaymentTransaction
from payments.services.ledger import PaymentLedger


def _row(ledger, **overrides):
    fields = {
        "booking_id": "BK1",
        "booking_object_id": 7,
        "payment_intent_id": "pi_1",
        "amount": Decimal("99.99"),
        "currency": "usd",
    }
    fields.update(overrides)
    return ledger.insert(**fields)


@pytest.mark.django_db
def test_rows_are_append_only():
    row = _row(PaymentLedger())
    row.amount = Decimal("1.00")

    with pytest.raises(ValueError):
        row.save()

    row.refresh_from_db()
    assert row.amount == Decimal("99.99")


@pytest.mark.django_db
def test_history_matches_either_booking_key():
    ledger = PaymentLedger()
    first = _row(ledger)
    second = _row(ledger, booking_id="BK-renamed", payment_intent_id="pi_2")
    _row(ledger, booking_id="BK2", booking_object_id=8, payment_intent_id="pi_3")

    assert {row.pk for row in ledger.history("BK1")} == {first.pk}
    assert {row.pk for row in ledger.history("7")} == {first.pk, second.pk}
    assert ledger.history("BK-none") == []


@pytest.mark.django_db
def test_transaction_ids_are_unique():
    ledger = PaymentLedger()
    ids = {_row(ledger, payment_intent_id=f"pi_{n}").transaction_id for n in range(5)}

    assert len(ids) == 5
    assert PaymentTransaction.objects.count() == 5

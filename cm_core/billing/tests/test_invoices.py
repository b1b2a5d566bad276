from decimal import Decimal

import pytest
from rest_framework.exceptions import NotFound, ValidationError

from cm_core.billing.models import Invoice, PaymentStatus
from cm_core.billing.services import InvoiceService, PaymentService, compute_totals
from cm_core.common.api.exceptions import ConflictError
from cm_core.common.models import SequenceCounter

pytestmark = pytest.mark.django_db

ITEMS = [
    {"item_type": "service", "item_id": 1, "description": "Consultation", "quantity": Decimal("1"), "unit_price": Decimal("100.00")},
    {"item_type": "medication", "item_id": 7, "description": "Syrup", "quantity": Decimal("2"), "unit_price": Decimal("15.50")},
]


def _invoice(patient, **extra):
    return InvoiceService.create_invoice(
        patient_id=patient.id,
        items=ITEMS,
        discount_amount=Decimal("10.00"),
        tax_amount=Decimal("13.10"),
        **extra,
    )


def test_invoice_amounts(patient):
    inv = _invoice(patient)

    assert inv.total_amount == Decimal("131.00")
    assert inv.final_amount == Decimal("134.10")
    assert inv.payment_status == PaymentStatus.PENDING
    assert [i.total_price for i in inv.items.order_by("id")] == [Decimal("100.00"), Decimal("31.00")]


def test_line_rounding_happens_before_summing():
    items = [
        {"quantity": Decimal("1"), "unit_price": Decimal("0.333")},
        {"quantity": Decimal("1"), "unit_price": Decimal("0.333")},
    ]
    lines, total, final = compute_totals(items)
    assert lines == [Decimal("0.33"), Decimal("0.33")]
    assert total == Decimal("0.66")
    assert final == Decimal("0.66")


def test_invoice_numbers_are_sequential(patient, other_patient):
    a = _invoice(patient)
    b = _invoice(other_patient)
    assert (a.invoice_number, b.invoice_number) == ("INV000001", "INV000002")


def test_invoice_sequence_seeds_from_existing_rows(patient):
    Invoice.objects.create(invoice_number="INV000120", patient=patient)
    SequenceCounter.objects.filter(key="billing.invoice_number").delete()

    assert _invoice(patient).invoice_number == "INV000121"


def test_negative_final_amount_is_accepted(patient):
    inv = InvoiceService.create_invoice(
        patient_id=patient.id,
        items=ITEMS[:1],
        discount_amount=Decimal("150.00"),
    )
    assert inv.final_amount == Decimal("-50.00")


def test_unknown_patient(db):
    with pytest.raises(NotFound):
        InvoiceService.create_invoice(patient_id=5150, items=ITEMS)
    assert Invoice.objects.count() == 0


def test_zero_quantity_rejected(patient):
    bad = [{**ITEMS[0], "quantity": Decimal("0")}]
    with pytest.raises(ValidationError):
        InvoiceService.create_invoice(patient_id=patient.id, items=bad)


def test_pay_once(patient, cashier):
    inv = _invoice(patient)

    paid = PaymentService.process_payment(invoice_id=inv.id, payment_method="cash", cashier_id=cashier.user_id)
    assert paid.payment_status == PaymentStatus.PAID
    assert paid.payment_method == "cash"
    assert paid.payment_date is not None
    assert paid.cashier_id == cashier.user_id

    with pytest.raises(ConflictError) as exc:
        PaymentService.process_payment(invoice_id=inv.id, payment_method="cash", cashier_id=cashier.user_id)
    assert str(exc.value.detail) == f"Invoice {inv.id} is already paid"


def test_partial_invoice_is_not_payable(patient, cashier):
    inv = _invoice(patient)
    Invoice.objects.filter(pk=inv.pk).update(payment_status=PaymentStatus.PARTIAL)

    with pytest.raises(ConflictError) as exc:
        PaymentService.process_payment(invoice_id=inv.id, payment_method="insurance", cashier_id=cashier.user_id)
    assert exc.value.status_code == 409
    assert str(exc.value.detail) == f"Invoice {inv.id} is already partial"

    inv.refresh_from_db()
    assert inv.payment_status == PaymentStatus.PARTIAL
    assert inv.payment_date is None
    assert inv.cashier_id is None


def test_cancelled_invoice_is_not_payable(patient, cashier):
    inv = _invoice(patient)
    Invoice.objects.filter(pk=inv.pk).update(payment_status=PaymentStatus.CANCELLED)

    with pytest.raises(ConflictError):
        PaymentService.process_payment(invoice_id=inv.id, payment_method="cash", cashier_id=cashier.user_id)


def test_invalid_method_and_unknown_cashier(patient):
    inv = _invoice(patient)
    with pytest.raises(ValidationError):
        PaymentService.process_payment(invoice_id=inv.id, payment_method="bitcoin", cashier_id=1)
    with pytest.raises(NotFound) as exc:
        PaymentService.process_payment(invoice_id=inv.id, payment_method="cash", cashier_id=6060)
    assert "Cashier with id 6060 not found" in str(exc.value.detail)


def test_api_invoice_and_payment(client_for, cashier, patient):
    c = client_for(cashier)
    r = c.post(
        "/api/v1/billing/invoices/",
        {
            "patient_id": patient.id,
            "items": [
                {"item_type": "service", "item_id": 1, "description": "Consultation", "quantity": 1, "unit_price": "100.00"},
                {"item_type": "medication", "item_id": 7, "description": "Syrup", "quantity": 2, "unit_price": "15.50"},
            ],
            "discount_amount": "10.00",
            "tax_amount": "13.10",
        },
        format="json",
    )
    assert r.status_code == 201, r.data
    assert r.data["total_amount"] == "131.00"
    assert r.data["final_amount"] == "134.10"
    assert len(r.data["items"]) == 2

    pay = c.post(f"/api/v1/billing/invoices/{r.data['id']}/pay/", {"payment_method": "credit_card"}, format="json")
    assert pay.status_code == 200, pay.data
    assert pay.data["payment_status"] == "paid"
    assert pay.data["cashier_name"] == cashier.full_name

    again = c.post(f"/api/v1/billing/invoices/{r.data['id']}/pay/", {"payment_method": "cash"}, format="json")
    assert again.status_code == 409
    assert again.data["error"]["message"] == f"Invoice {r.data['id']} is already paid"

    listed = c.get("/api/v1/billing/invoices/", {"patient": patient.id, "status": "paid"})
    assert [x["invoice_number"] for x in listed.data] == [r.data["invoice_number"]]


def test_api_bad_item_type(client_for, cashier, patient):
    r = client_for(cashier).post(
        "/api/v1/billing/invoices/",
        {
            "patient_id": patient.id,
            "items": [{"item_type": "parking", "item_id": 1, "description": "x", "quantity": 1, "unit_price": "1.00"}],
        },
        format="json",
    )
    assert r.status_code == 400


def test_api_nurse_cannot_take_payment(client_for, nurse, patient):
    inv = _invoice(patient)
    r = client_for(nurse).post(f"/api/v1/billing/invoices/{inv.id}/pay/", {"payment_method": "cash"}, format="json")
    assert r.status_code == 403

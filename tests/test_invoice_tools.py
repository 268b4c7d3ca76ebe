import json
from datetime import timedelta

import pytest

from models.invoices import DiscountType

SARAH_PROMPT = (
    "Invoice for Sarah Johnson (sarah@company.com) - 5 hours of consulting at $150/hour, "
    "10% tax, due next week"
)
MIKE_PROMPT = "Logo design project: $800, client: Mike Wilson (mike@startup.com), 15% discount, due in 14 days"
TECH_PROMPT = "Bill to: Tech Solutions Inc, 3 days development work @ $500/day, plus 20% VAT, PO# TS-2024-001"


def assert_totals_consistent(invoice):
    for item in invoice.lineItems:
        assert item.amount == pytest.approx(item.quantity * item.rate)
    assert invoice.tax == pytest.approx(invoice.subtotal * invoice.taxRate, abs=1e-6)
    assert invoice.total == pytest.approx(invoice.subtotal + invoice.tax, abs=1e-6)


def test_hourly_consulting_invoice(tools, now, today):
    invoice = tools.build_invoice(SARAH_PROMPT, now=now)

    assert invoice.clientName == "Sarah Johnson"
    assert invoice.clientEmail == "sarah@company.com"
    assert invoice.businessName == "Your Business"
    assert invoice.businessEmail == "business@example.com"
    assert [(i.description, i.quantity, i.rate, i.amount) for i in invoice.lineItems] == [
        ("consulting", 5.0, 150.0, 750.0)
    ]
    assert invoice.taxRate == pytest.approx(0.10)
    assert invoice.subtotal == pytest.approx(750.0)
    assert invoice.tax == pytest.approx(75.0)
    assert invoice.total == pytest.approx(825.0)
    assert invoice.issueDate == today
    assert invoice.dueDate == today + timedelta(days=7)
    assert invoice.discount is None
    assert invoice.notes == "Thank you for your business!"
    assert_totals_consistent(invoice)


def test_percent_discount_invoice(tools, now, today):
    invoice = tools.build_invoice(MIKE_PROMPT, now=now)

    assert invoice.clientName == "Mike Wilson"
    assert invoice.clientEmail == "mike@startup.com"
    assert len(invoice.lineItems) == 1
    assert invoice.lineItems[0].amount == pytest.approx(800.0)
    assert invoice.discount.type is DiscountType.PERCENT
    assert invoice.subtotal == pytest.approx(680.0)
    assert invoice.tax == 0.0
    assert invoice.total == pytest.approx(680.0)
    assert invoice.dueDate == today + timedelta(days=14)
    assert_totals_consistent(invoice)


def test_empty_prompt_yields_defaults(tools, now, today):
    invoice = tools.build_invoice("", now=now)

    assert invoice.clientName == "Client Name"
    assert invoice.businessName == "Your Business"
    assert invoice.clientEmail == "client@example.com"
    assert invoice.clientAddress == "123 Client Street\nCity, State 12345"
    assert invoice.businessAddress == "456 Business Avenue\nCity, State 67890"
    assert [(i.description, i.rate) for i in invoice.lineItems] == [("Professional Services", 1000.0)]
    assert invoice.subtotal == 1000.0
    assert invoice.tax == 0.0
    assert invoice.total == 1000.0
    assert invoice.dueDate == today + timedelta(days=30)


def test_po_number_is_prepended_to_notes(tools, now):
    invoice = tools.build_invoice(TECH_PROMPT, now=now)

    assert invoice.clientName == "Tech Solutions Inc"
    assert invoice.notes == "PO#: TS-2024-001\nThank you for your business!"
    assert invoice.subtotal == pytest.approx(1500.0)
    assert invoice.tax == pytest.approx(300.0)
    assert invoice.total == pytest.approx(1800.0)


def test_payment_terms_are_appended_to_notes(tools, now):
    invoice = tools.build_invoice("Logo design: $800. Note: files by Friday. Pay via PayPal", now=now)
    assert invoice.notes == "files by Friday\nPayment: PayPal"


def test_flat_discount_is_floored_at_zero(tools, now):
    invoice = tools.build_invoice("Logo design: $100, $250 discount", now=now)
    assert invoice.discount.type is DiscountType.FLAT
    assert invoice.subtotal == 0.0
    assert invoice.total == 0.0


def test_percent_discount_over_hundred_is_not_clamped(tools, now):
    invoice = tools.build_invoice("Logo design: $100, 150% off", now=now)
    assert invoice.subtotal == pytest.approx(-50.0)
    assert_totals_consistent(invoice)


def test_same_input_and_clock_give_identical_records(tools, now):
    assert tools.build_invoice(SARAH_PROMPT, now=now) == tools.build_invoice(SARAH_PROMPT, now=now)


def test_invoice_number_from_timestamp(tools, now):
    invoice = tools.build_invoice(SARAH_PROMPT, now=now)
    expected = str(int(now.timestamp() * 1000))[-6:]
    assert invoice.invoiceNumber == f"INV-{expected}"


def test_recalculate_after_edit(tools, now):
    invoice = tools.build_invoice(SARAH_PROMPT, now=now)
    edited_item = invoice.lineItems[0].model_copy(update={"quantity": 10.0})
    edited = invoice.model_copy(update={"lineItems": [edited_item]})

    recalculated = tools.recalculate_invoice(edited)

    assert recalculated.lineItems[0].amount == pytest.approx(1500.0)
    assert recalculated.subtotal == pytest.approx(1500.0)
    assert recalculated.tax == pytest.approx(150.0)
    assert recalculated.total == pytest.approx(1650.0)
    assert recalculated.invoiceNumber == invoice.invoiceNumber


def test_recalculate_reapplies_discount(tools, now):
    invoice = tools.build_invoice(MIKE_PROMPT, now=now)
    assert tools.recalculate_invoice(invoice).subtotal == pytest.approx(680.0)


def test_generate_invoice_kernel_function_returns_json(tools):
    data = json.loads(tools.generate_invoice(SARAH_PROMPT))
    assert data["clientName"] == "Sarah Johnson"
    assert data["total"] == pytest.approx(825.0)


def test_recalculate_kernel_function_round_trip(tools, now):
    invoice = tools.build_invoice(MIKE_PROMPT, now=now)
    data = json.loads(tools.recalculate_invoice_totals(invoice.model_dump_json()))
    assert data["subtotal"] == pytest.approx(680.0)


def test_recalculate_kernel_function_reports_errors(tools):
    data = json.loads(tools.recalculate_invoice_totals("not json"))
    assert data["error"].startswith("Failed to recalculate invoice")


def test_generate_invoice_number_prefix(tools):
    assert tools.generate_invoice_number().startswith("INV-")
    number = tools.generate_invoice_number("QT")
    assert number.startswith("QT-")
    assert len(number) == len("QT-") + 6


def test_out_of_range_due_date_falls_back_to_default(tools, now, today):
    invoice = tools.build_invoice("Logo design: $800, due in 99999 months", now=now)
    assert invoice.dueDate == today + timedelta(days=30)
    assert invoice.total == pytest.approx(800.0)

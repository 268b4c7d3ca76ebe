"""
Invoice generation tools for Semantic Kernel
These tools turn a natural language description of billable work into a complete invoice record:
- Client and business names, emails and addresses
- Line items with quantity, rate and amount
- Due date from relative or explicit expressions
- Tax rate and percentage or flat discounts
- PO number, payment terms and notes
"""

from semantic_kernel.functions import kernel_function
from typing import Optional
import json
import logging
from datetime import datetime

from config.settings import Settings
from extractors import (
    InvoiceText,
    extract_additional_info,
    extract_addresses,
    extract_discount,
    extract_due_date,
    extract_emails,
    extract_line_items,
    extract_names,
    extract_tax_rate,
)
from models.invoices import AdditionalInfo, Discount, DiscountType, InvoiceRecord

logger = logging.getLogger(__name__)


class InvoiceTools:
    """
    Semantic Kernel tools for rule-based invoice generation

    Every field is extracted with ordered pattern cascades and falls back to a
    configured default, so generation never fails on unmatched input.
    """

    def __init__(self, settings: Settings):
        """Initialize invoice tools with application settings"""
        self.settings = settings

    def build_invoice(self, description: str, now: Optional[datetime] = None) -> InvoiceRecord:
        """
        Build an invoice record from a natural language description

        Args:
            description: Free-form text describing the billable work
            now: Current time; defaults to datetime.now()

        Returns:
            A complete InvoiceRecord
        """
        now = now or datetime.now()
        today = now.date()
        text = InvoiceText(description or "")

        emails = extract_emails(text, self.settings)
        names = extract_names(text, self.settings)
        addresses = extract_addresses(text, self.settings)
        due_date = extract_due_date(text, today, self.settings)
        items = extract_line_items(text, self.settings)
        tax_rate = extract_tax_rate(text, self.settings)
        discount = extract_discount(text)
        additional_info = extract_additional_info(text)

        subtotal = self._apply_discount(sum(item.amount for item in items), discount)
        tax = subtotal * tax_rate
        total = subtotal + tax

        invoice = InvoiceRecord(
            invoiceNumber=self._generate_invoice_number(now),
            issueDate=today,
            dueDate=due_date,
            clientName=names.client,
            clientEmail=emails.client,
            clientAddress=addresses.client,
            businessName=names.business,
            businessEmail=emails.business,
            businessAddress=addresses.business,
            lineItems=items,
            subtotal=subtotal,
            taxRate=tax_rate,
            tax=tax,
            total=total,
            discount=discount,
            notes=self._build_notes(additional_info),
        )

        logger.info(
            f"[INVOICE] Generated {invoice.invoiceNumber} for '{invoice.clientName}' "
            f"with {len(items)} item(s), total {total:.2f}"
        )
        return invoice

    def recalculate_invoice(self, invoice: InvoiceRecord) -> InvoiceRecord:
        """
        Recompute amounts and totals of an edited invoice

        Item amounts are re-derived from quantity and rate, then the record's own
        discount and tax rate are applied again.
        """
        items = [item.model_copy() for item in invoice.lineItems]
        for item in items:
            item.amount = item.quantity * item.rate

        subtotal = self._apply_discount(sum(item.amount for item in items), invoice.discount)
        tax = subtotal * invoice.taxRate

        return invoice.model_copy(update={
            "lineItems": items,
            "subtotal": subtotal,
            "tax": tax,
            "total": subtotal + tax,
        })

    @kernel_function(
        description="Create an invoice from a natural language description of billable work",
        name="generate_invoice"
    )
    def generate_invoice(self, description: str) -> str:
        """
        Create an invoice from text description

        Args:
            description: Natural language description of the invoice

        Returns:
            JSON string of the invoice record
        """
        try:
            invoice = self.build_invoice(description)
            return json.dumps(invoice.model_dump(mode="json"), indent=2)

        except Exception as e:
            logger.error(f"[INVOICE] Generation failed: {e}")
            return json.dumps({"error": f"Failed to generate invoice: {str(e)}"})

    @kernel_function(
        description="Recalculate line item amounts, tax and totals of an edited invoice",
        name="recalculate_invoice_totals"
    )
    def recalculate_invoice_totals(self, invoice_json: str) -> str:
        """
        Recalculate totals for an invoice edited by the user

        Args:
            invoice_json: JSON string of an invoice record

        Returns:
            JSON string of the recalculated invoice record
        """
        try:
            invoice = InvoiceRecord.model_validate_json(invoice_json)
            recalculated = self.recalculate_invoice(invoice)
            return json.dumps(recalculated.model_dump(mode="json"), indent=2)

        except Exception as e:
            logger.error(f"[INVOICE] Recalculation failed: {e}")
            return json.dumps({"error": f"Failed to recalculate invoice: {str(e)}"})

    @kernel_function(
        description="Generate a unique invoice number",
        name="generate_invoice_number"
    )
    def generate_invoice_number(self, prefix: str = "") -> str:
        """
        Generate a unique invoice number

        Args:
            prefix: Prefix for the invoice number (default from settings)

        Returns:
            Invoice number such as INV-123456
        """
        return self._generate_invoice_number(datetime.now(), prefix or self.settings.invoice_number_prefix)

    def _apply_discount(self, subtotal: float, discount: Optional[Discount]) -> float:
        """
        Percentage discounts scale the subtotal, flat discounts are floored at zero
        """
        if discount is None:
            return subtotal
        if discount.type == DiscountType.PERCENT:
            return subtotal * (1 - discount.value)
        return max(0.0, subtotal - discount.value)

    def _build_notes(self, info: AdditionalInfo) -> str:
        notes = info.notes or self.settings.default_notes
        if info.poNumber:
            notes = f"PO#: {info.poNumber}\n{notes}"
        if info.paymentTerms:
            notes = f"{notes}\nPayment: {info.paymentTerms}"
        return notes

    def _generate_invoice_number(self, now: datetime, prefix: Optional[str] = None) -> str:
        """
        Invoice number from the last six digits of the millisecond timestamp
        """
        timestamp_ms = int(now.timestamp() * 1000)
        return f"{prefix or self.settings.invoice_number_prefix}-{str(timestamp_ms)[-6:]}"

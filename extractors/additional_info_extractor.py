"""
Purchase order, payment terms and notes extraction
"""

import re

from models.invoices import AdditionalInfo
from .invoice_text import InvoiceText

PO_NUMBER_PATTERN = re.compile(r"(?:\bPO\b|\bP\.O\.|\bpurchase order\b)[\s#:]+([A-Z0-9-]+)", re.IGNORECASE)

PAYMENT_PHRASE_PATTERN = re.compile(
    r"\b(?:payment|pay)[\s:]+(?:via|by|through)\s+([A-Za-z\s]+?)(?=[.,]|$)",
    re.IGNORECASE | re.MULTILINE,
)
PAYMENT_METHOD_PATTERN = re.compile(
    r"\b(?:bank transfer|wire transfer|credit card|paypal|check|cheque|cash)\b",
    re.IGNORECASE,
)

NOTE_PATTERNS = [
    re.compile(r"\b(?:include note|add note|notes?)[\s:]+(.+?)(?:\.|$)", re.IGNORECASE | re.MULTILINE),
    re.compile(
        r"\b(?:additional info(?:rmation)?|comments?)[\s:]+(.+?)(?:\.|$)",
        re.IGNORECASE | re.MULTILINE,
    ),
]


def extract_po_number(text: InvoiceText):
    match = PO_NUMBER_PATTERN.search(text.raw)
    return match.group(1) if match else None


def extract_payment_terms(text: InvoiceText):
    match = PAYMENT_PHRASE_PATTERN.search(text.raw)
    if match and match.group(1).strip():
        return match.group(1).strip()
    match = PAYMENT_METHOD_PATTERN.search(text.raw)
    return match.group(0) if match else None


def extract_notes(text: InvoiceText):
    for pattern in NOTE_PATTERNS:
        match = pattern.search(text.raw)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_additional_info(text: InvoiceText) -> AdditionalInfo:
    """
    PO number, payment terms and notes; each is None when absent
    """
    return AdditionalInfo(
        poNumber=extract_po_number(text),
        paymentTerms=extract_payment_terms(text),
        notes=extract_notes(text),
    )

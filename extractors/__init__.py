"""
Rule-based extractors that turn an invoice prompt into structured fields
Each extractor reads the same InvoiceText and is independent of the others
"""

from .invoice_text import InvoiceText
from .email_extractor import classify_email_role, extract_emails
from .name_extractor import extract_names
from .address_extractor import extract_addresses
from .due_date_extractor import extract_due_date
from .line_item_extractor import extract_line_items
from .tax_extractor import extract_discount, extract_tax_rate
from .additional_info_extractor import extract_additional_info

__all__ = [
    "InvoiceText",
    "classify_email_role",
    "extract_emails",
    "extract_names",
    "extract_addresses",
    "extract_due_date",
    "extract_line_items",
    "extract_discount",
    "extract_tax_rate",
    "extract_additional_info",
]

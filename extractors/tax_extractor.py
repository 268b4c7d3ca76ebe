"""
Tax rate and discount extraction
"""

import logging
import re
from typing import Optional

from config.settings import Settings
from models.invoices import Discount, DiscountType
from .invoice_text import AMOUNT_PATTERN, InvoiceText, parse_amount

logger = logging.getLogger(__name__)

PERCENT = r"(\d+(?:\.\d+)?)%"

TAX_PATTERNS = [
    re.compile(r"\b(?:sales tax|tax|vat|gst)[\s:]+" + PERCENT, re.IGNORECASE),
    re.compile(PERCENT + r"\s+(?:sales tax|tax|vat|gst)\b", re.IGNORECASE),
    re.compile(r"\b(?:plus|add|with)\s+" + PERCENT + r"\s+(?:tax|vat|gst)\b", re.IGNORECASE),
]

PERCENT_DISCOUNT_PATTERN = re.compile(PERCENT + r"\s+(?:discount|off)\b", re.IGNORECASE)
FLAT_DISCOUNT_PATTERN = re.compile(r"\$?" + AMOUNT_PATTERN + r"\s+(?:discount|off)\b", re.IGNORECASE)


def extract_tax_rate(text: InvoiceText, settings: Settings) -> float:
    """
    Tax rate as a fraction, e.g. '10% tax' -> 0.10
    """
    for pattern in TAX_PATTERNS:
        match = pattern.search(text.raw)
        if match:
            rate = float(match.group(1)) / 100
            logger.debug(f"[TAX] Found tax rate {rate} in '{match.group(0)}'")
            return rate
    return settings.default_tax_rate


def extract_discount(text: InvoiceText) -> Optional[Discount]:
    """
    Percentage discounts take precedence over flat ones
    """
    percent_match = PERCENT_DISCOUNT_PATTERN.search(text.raw)
    if percent_match:
        return Discount(type=DiscountType.PERCENT, value=float(percent_match.group(1)) / 100)

    flat_match = FLAT_DISCOUNT_PATTERN.search(text.raw)
    if flat_match:
        return Discount(type=DiscountType.FLAT, value=parse_amount(flat_match.group(1)))

    return None

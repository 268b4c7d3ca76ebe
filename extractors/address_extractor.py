"""
Postal address extraction
"""

import logging
import re
from typing import List, Tuple

from config.settings import Settings
from models.invoices import PartyFields
from .invoice_text import InvoiceText

logger = logging.getLogger(__name__)

STREET_SUFFIX = (
    r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr|Court|Ct|Place|Pl|Way|Circle|Cir)\b\.?"
)
# Optional ", City" / ", State 12345" tail after a street
LOCALITY_TAIL = r"(?:,[ \t]*[A-Z][A-Za-z]*(?:[ \t]+[A-Z][A-Za-z]*)*(?:[ \t]+\d{5})?)*(?:,?[ \t]*\d{5})?"

ADDRESS_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("explicit_label", re.compile(
        r"(?<!email )(?<!e-mail )\b(?:address|located at|office at)\b[ \t]*:?[ \t]*"
        r"([^\n,.]+(?:,[ \t]*[^\n,.]+)?(?:,[ \t]*\d{5})?)",
        re.IGNORECASE,
    )),
    ("numbered_street", re.compile(
        r"\b\d+[ \t]+(?:[A-Z][a-z]+[ \t]+)+" + STREET_SUFFIX + LOCALITY_TAIL
    )),
    ("named_street", re.compile(
        r"\b(?:[A-Z][a-z]+[ \t]+)+" + STREET_SUFFIX + LOCALITY_TAIL
    )),
]


def collect_addresses(text: InvoiceText) -> List[str]:
    """
    All distinct address candidates in first-seen order
    Beyond exact repeats, a candidate contained in a collected address is
    skipped, so "Main Street" never shadows "123 Main Street"
    """
    addresses: List[str] = []
    for label, pattern in ADDRESS_PATTERNS:
        for match in pattern.finditer(text.raw):
            candidate = (match.group(1) if match.groups() else match.group(0)).strip()
            if not candidate:
                continue
            if any(candidate in existing for existing in addresses):
                continue
            logger.debug(f"[ADDRESSES] '{candidate}' matched by '{label}'")
            addresses.append(candidate)
    return addresses


def extract_addresses(text: InvoiceText, settings: Settings) -> PartyFields:
    """
    First address is the client's, second the business's
    A single address is used for both sides
    """
    addresses = collect_addresses(text)

    client_address = addresses[0] if addresses else settings.default_client_address
    if len(addresses) > 1:
        business_address = addresses[1]
    elif addresses:
        business_address = addresses[0]
    else:
        business_address = settings.default_business_address

    return PartyFields(client=client_address, business=business_address)

"""
Email extraction with client/business role classification
"""

import logging
import re
from typing import List, Optional

from config.settings import Settings
from models.invoices import PartyFields, PartyRole
from .invoice_text import InvoiceText

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

CLIENT_CONTEXT_PATTERN = re.compile(r"\b(?:client|customer|bill to|invoice to|recipient)\b")
BUSINESS_CONTEXT_PATTERN = re.compile(r"\b(?:bill from|from|business|company|sender|my|our)\b")


def classify_email_role(text: str, start: int, length: int, window: int = 50) -> PartyRole:
    """
    Classify an email address by the words around it

    Args:
        text: Full prompt text
        start: Index where the address starts
        length: Length of the address
        window: Number of characters inspected on each side

    Returns:
        PartyRole.CLIENT, PartyRole.BUSINESS or PartyRole.UNCLASSIFIED
    """
    before = text[max(0, start - window):start]
    after = text[start + length:start + length + window]
    # The address itself is left out so its domain cannot vote (e.g. @company.com)
    context = f"{before} {after}".lower()

    if CLIENT_CONTEXT_PATTERN.search(context):
        return PartyRole.CLIENT
    if BUSINESS_CONTEXT_PATTERN.search(context):
        return PartyRole.BUSINESS
    return PartyRole.UNCLASSIFIED


def extract_emails(text: InvoiceText, settings: Settings) -> PartyFields:
    """
    Find client and business email addresses in the prompt
    """
    client_email: Optional[str] = None
    business_email: Optional[str] = None
    unclassified: List[str] = []

    for match in EMAIL_PATTERN.finditer(text.raw):
        email = match.group(0)
        role = classify_email_role(text.raw, match.start(), len(email), settings.email_context_window)
        logger.debug(f"[EMAILS] {email} classified as {role.value}")

        if role is PartyRole.CLIENT:
            if client_email is None:
                client_email = email
        elif role is PartyRole.BUSINESS:
            if business_email is None:
                business_email = email
        else:
            unclassified.append(email)

    for email in unclassified:
        if client_email is None:
            client_email = email
        elif business_email is None:
            business_email = email

    return PartyFields(
        client=client_email or settings.default_client_email,
        business=business_email or settings.default_business_email,
    )

"""
Client and business name extraction
Role phrases are matched case-insensitively, the names themselves must be capitalized
"""

import logging
import re
from typing import List, Optional, Tuple

from config.settings import Settings
from models.invoices import PartyFields
from .invoice_text import InvoiceText

logger = logging.getLogger(__name__)

NAME = r"[A-Z][a-z]+\b(?:[ \t]+[A-Z][a-z]+\b)*"
CORPORATE_SUFFIX = (
    r"(?:[ \t]+(?:Inc|LLC|Ltd|Corp|Company|Co|Limited|Corporation|Group|Services|Solutions"
    r"|Technologies|Consulting|Agency|Studio|Partners)\b\.?)?"
)
COMPANY_NAME = NAME + CORPORATE_SUFFIX

CLIENT_NAME_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("role_phrase", re.compile(
        r"\b(?i:client name|bill to|invoice to|to|for|client|customer|recipient)[\s:]+(" + COMPANY_NAME + ")"
    )),
    ("invoice_for", re.compile(r"\b(?i:invoice for)\s+(" + NAME + ")")),
    ("services_for", re.compile(r"\b(?i:services?\s+(?:for|to))\s+(" + NAME + ")")),
    ("work_for", re.compile(r"\b(?i:work\s+(?:for|with))\s+(" + NAME + ")")),
    ("project_for", re.compile(r"\b(?i:project\s+(?:for|with))\s+(" + NAME + ")")),
    ("request_verb", re.compile(r"(" + NAME + r")\s+(?i:wants?|needs?|requested|requests|asked|asks)\b")),
]

BUSINESS_NAME_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("role_phrase", re.compile(
        r"\b(?i:bill from|business name|our company|my company|from|by|business|company|sender)[\s:]+("
        + COMPANY_NAME + ")"
    )),
    ("issued_by", re.compile(r"\b(?i:issued by)\s+(" + NAME + ")")),
    ("invoice_heading", re.compile(r"^(" + NAME + r")\s+(?i:invoice)\b", re.MULTILINE)),
]

PROPER_NOUN_PATTERN = re.compile(r"\b" + NAME)

# Capitalized words that describe the work rather than a party
PROPER_NOUN_STOPLIST = {
    "invoice", "services", "project", "work", "hours", "days", "weeks", "months",
    "design", "development", "consulting", "management",
    "create", "generate", "bill", "please", "send",
}


def _run_cascade(text: str, patterns: List[Tuple[str, re.Pattern]], role: str) -> Optional[str]:
    for label, pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1) and match.group(1).strip():
            name = match.group(1).strip()
            logger.debug(f"[NAMES] {role} name '{name}' matched by '{label}'")
            return name
    return None


def extract_proper_nouns(text: InvoiceText) -> List[str]:
    """Distinct capitalized word sequences, in order, excluding domain terms"""
    nouns = []
    for match in PROPER_NOUN_PATTERN.finditer(text.raw):
        noun = match.group(0)
        if noun.lower() in PROPER_NOUN_STOPLIST or noun in nouns:
            continue
        nouns.append(noun)
    return nouns


def extract_names(text: InvoiceText, settings: Settings) -> PartyFields:
    """
    Find client and business display names in the prompt
    """
    client_name = _run_cascade(text.raw, CLIENT_NAME_PATTERNS, "client")
    business_name = _run_cascade(text.raw, BUSINESS_NAME_PATTERNS, "business")

    if not client_name:
        proper_nouns = extract_proper_nouns(text)
        client_name = proper_nouns[0] if proper_nouns else settings.default_client_name

    return PartyFields(
        client=client_name,
        business=business_name or settings.default_business_name,
    )

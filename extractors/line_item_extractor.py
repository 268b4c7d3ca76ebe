"""
Line item extraction

Five pattern families are tried strictly in order. The first family that
yields at least one accepted item wins; families are never merged. When
nothing matches, a single fallback item is built from the first amount
(dollar sign optional) and an inferred service description.
"""

import logging
import re
from typing import Callable, List, Tuple

from config.settings import Settings
from models.invoices import LineItem
from .invoice_text import AMOUNT_PATTERN, InvoiceText, collapse_whitespace, parse_amount

logger = logging.getLogger(__name__)

QUANTITY = r"\b(\d+(?:\.\d+)?)"
UNIT = r"(?:hours?|hrs?|days?|weeks?|months?|items?|units?|pieces?)\b"
DESCRIPTION = r"([A-Za-z][A-Za-z\s]*?)"
DASH = r"[-–—]"

# A bare unit ("10 hours at $80") is not a description
QUANTITY_AT_RATE = re.compile(
    QUANTITY + r"\s*(?:" + UNIT + r")?\s*(?:of\s+)?(?!" + UNIT + r")" + DESCRIPTION
    + r"\s*(?:\b(?:at|for)\b|@)\s*\$?" + AMOUNT_PATTERN
    + r"(?:\s*(?:each|per\b|/\s*[A-Za-z]+))?",
    re.IGNORECASE,
)
DESCRIPTION_DASH_QUANTITY = re.compile(
    DESCRIPTION + r"\s*" + DASH + r"\s*" + QUANTITY + r"\s*(?:" + UNIT + r")"
    + r"?\s*(?:\bat\b|@)\s*\$?" + AMOUNT_PATTERN,
    re.IGNORECASE,
)
AMOUNT_FOR_DESCRIPTION = re.compile(
    r"\$?" + AMOUNT_PATTERN + r"\s+(?:for|worth\s+of)\s+" + DESCRIPTION + r"(?=[.,]|$)",
    re.IGNORECASE | re.MULTILINE,
)
DESCRIPTION_COLON_AMOUNT = re.compile(
    DESCRIPTION + r":\s*\$?" + AMOUNT_PATTERN,
    re.IGNORECASE,
)
BULLET_LINE = re.compile(
    r"^[ \t]*[-•*][ \t]*([A-Za-z][A-Za-z \t]*?)[ \t]*" + DASH + r"[ \t]*\$?" + AMOUNT_PATTERN,
    re.IGNORECASE | re.MULTILINE,
)

FILLER_WORDS = r"(?:and|or|with|for|to|at|the)"
LEADING_FILLER = re.compile(r"^" + FILLER_WORDS + r"\s+", re.IGNORECASE)
TRAILING_FILLER = re.compile(r"\s+" + FILLER_WORDS + r"$", re.IGNORECASE)

# Descriptions containing these belong to another part of the invoice
BLOCKED_DESCRIPTION_WORDS = ["email", "mail", "address", "phone", "due", "client", "customer", "invoice", "bill"]

FALLBACK_AMOUNT = re.compile(r"\$?\s?" + AMOUNT_PATTERN)

SERVICE_DESCRIPTION_PATTERNS = [
    re.compile(
        r"\b(?:invoice for|bill for|for)\s+([A-Za-z][A-Za-z\s]*?)(?:\s+(?:services?|work|project))?"
        r"(?:[.,]|$|\s+(?:to|for|at)\b)",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(
        r"([A-Za-z][A-Za-z\s]*?)\s+(?:services?|work|project|consultation|consulting|development|design|management)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:services?|work|project|consultation|consulting|development|design|management)\s+(?:for|in|on)\s+"
        r"([A-Za-z][A-Za-z\s]*)",
        re.IGNORECASE,
    ),
]

COMMON_SERVICES = [
    "web design", "graphic design", "logo design", "development", "consulting",
    "marketing", "social media", "content creation", "photography", "videography",
    "copywriting", "SEO", "maintenance", "support", "training", "analysis",
]


def clean_description(description: str) -> str:
    """Collapse whitespace and strip one filler word from each end"""
    cleaned = collapse_whitespace(description)
    cleaned = LEADING_FILLER.sub("", cleaned)
    cleaned = TRAILING_FILLER.sub("", cleaned)
    return cleaned.strip()


def is_invalid_description(description: str) -> bool:
    lowered = description.lower()
    return any(word in lowered for word in BLOCKED_DESCRIPTION_WORDS)


def _quantity_at_rate(match: re.Match) -> Tuple[str, float, float]:
    return match.group(2), float(match.group(1)), parse_amount(match.group(3))


def _description_dash_quantity(match: re.Match) -> Tuple[str, float, float]:
    return match.group(1), float(match.group(2)), parse_amount(match.group(3))


def _amount_for_description(match: re.Match) -> Tuple[str, float, float]:
    return match.group(2), 1.0, parse_amount(match.group(1))


def _single_amount(match: re.Match) -> Tuple[str, float, float]:
    return match.group(1), 1.0, parse_amount(match.group(2))


PATTERN_FAMILIES: List[Tuple[str, re.Pattern, Callable[[re.Match], Tuple[str, float, float]]]] = [
    ("quantity_at_rate", QUANTITY_AT_RATE, _quantity_at_rate),
    ("description_dash_quantity", DESCRIPTION_DASH_QUANTITY, _description_dash_quantity),
    ("amount_for_description", AMOUNT_FOR_DESCRIPTION, _amount_for_description),
    ("description_colon_amount", DESCRIPTION_COLON_AMOUNT, _single_amount),
    ("bullet_line", BULLET_LINE, _single_amount),
]


def _items_from_family(text: str, pattern: re.Pattern, handler) -> List[LineItem]:
    items = []
    for match in pattern.finditer(text):
        raw_description, quantity, rate = handler(match)
        description = clean_description(raw_description)
        if not description or is_invalid_description(description):
            logger.debug(f"[ITEMS] Discarding candidate description '{raw_description.strip()}'")
            continue
        items.append(LineItem(description=description, quantity=quantity, rate=rate))
    return items


def extract_service_description(text: InvoiceText, settings: Settings) -> str:
    """
    Best guess at what the work was when no line item pattern matched
    """
    for pattern in SERVICE_DESCRIPTION_PATTERNS:
        match = pattern.search(text.raw)
        if match and match.group(1):
            service = clean_description(match.group(1))
            if service and not is_invalid_description(service):
                return service

    for service in COMMON_SERVICES:
        if service.lower() in text.normalized:
            return service[0].upper() + service[1:]

    return settings.default_service_description


def extract_fallback_item(text: InvoiceText, settings: Settings) -> LineItem:
    amount_match = FALLBACK_AMOUNT.search(text.raw)
    rate = parse_amount(amount_match.group(1)) if amount_match else settings.fallback_rate
    description = extract_service_description(text, settings)
    return LineItem(description=description, quantity=1.0, rate=rate)


def extract_line_items(text: InvoiceText, settings: Settings) -> List[LineItem]:
    """
    Extract billable line items from the prompt

    Returns:
        A non-empty list of line items
    """
    for label, pattern, handler in PATTERN_FAMILIES:
        items = _items_from_family(text.raw, pattern, handler)
        if items:
            logger.debug(f"[ITEMS] Family '{label}' produced {len(items)} item(s)")
            return items

    fallback = extract_fallback_item(text, settings)
    logger.debug(f"[ITEMS] No pattern family matched, using fallback item '{fallback.description}'")
    return [fallback]

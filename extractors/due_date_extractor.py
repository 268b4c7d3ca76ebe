"""
Due date extraction from relative and explicit date expressions
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil.parser import parse as parse_date
from dateutil.relativedelta import relativedelta

from config.settings import Settings
from .invoice_text import InvoiceText

logger = logging.getLogger(__name__)

RELATIVE_PATTERN = re.compile(r"\bdue\s+(?:in|within)\s+(\d+)\s+(days?|weeks?|months?)\b")
EXPLICIT_PATTERN = re.compile(
    r"\bdue\s+(?:on|by|date)[\s:]+"
    r"([A-Za-z]+\s+\d{1,2}(?:,?\s*\d{4})?|\d{1,2}/\d{1,2}/\d{2,4}|\d{4}-\d{2}-\d{2})",
    re.IGNORECASE,
)
NET_TERMS_PATTERN = re.compile(r"\bnet\s*(\d+)\b")

NAMED_RELATIVES = [
    (re.compile(r"\bdue\s+next\s+week\b"), relativedelta(days=7)),
    (re.compile(r"\bdue\s+next\s+month\b"), relativedelta(months=1)),
    (re.compile(r"\bdue\s+today\b"), relativedelta()),
    (re.compile(r"\bdue\s+tomorrow\b"), relativedelta(days=1)),
]


def _shift(today: date, offset: relativedelta) -> Optional[date]:
    """today + offset, or None when the result is outside the supported date range"""
    try:
        return today + offset
    except (OverflowError, ValueError) as e:
        logger.debug(f"[DATES] Ignoring out of range offset {offset}: {e}")
        return None


def _relative_offset(amount: int, unit: str) -> relativedelta:
    if unit.startswith("week"):
        return relativedelta(weeks=amount)
    if unit.startswith("month"):
        return relativedelta(months=amount)
    return relativedelta(days=amount)


def parse_explicit_date(date_text: str, today: date) -> Optional[date]:
    """
    Parse a literal date such as 'March 15, 2025', '3/15/2025' or '2025-03-15'
    Missing parts (e.g. the year) are taken from today. Returns None if unparseable.
    """
    try:
        default = datetime(today.year, today.month, today.day)
        return parse_date(date_text, default=default).date()
    except (ValueError, OverflowError) as e:
        logger.debug(f"[DATES] Ignoring unparseable due date '{date_text}': {e}")
        return None


def extract_due_date(text: InvoiceText, today: date, settings: Settings) -> date:
    """
    Compute the due date; later rules override earlier ones
    1. due in/within N days|weeks|months
    2. due on/by/date <date>
    3. net N
    4. due next week / next month / today / tomorrow
    """
    due_date = today + timedelta(days=settings.default_due_days)

    relative_match = RELATIVE_PATTERN.search(text.normalized)
    if relative_match:
        amount = int(relative_match.group(1))
        shifted = _shift(today, _relative_offset(amount, relative_match.group(2)))
        if shifted is not None:
            due_date = shifted
            logger.debug(f"[DATES] Relative due date: {relative_match.group(0)}")

    explicit_match = EXPLICIT_PATTERN.search(text.raw)
    if explicit_match:
        parsed = parse_explicit_date(explicit_match.group(1), today)
        if parsed is not None:
            due_date = parsed
            logger.debug(f"[DATES] Explicit due date: {explicit_match.group(1)}")

    net_match = NET_TERMS_PATTERN.search(text.normalized)
    if net_match:
        shifted = _shift(today, relativedelta(days=int(net_match.group(1))))
        if shifted is not None:
            due_date = shifted
            logger.debug(f"[DATES] Net terms: {net_match.group(0)}")

    for pattern, offset in NAMED_RELATIVES:
        if pattern.search(text.normalized):
            due_date = today + offset
            logger.debug(f"[DATES] Named relative: {pattern.pattern}")
            break

    return due_date
